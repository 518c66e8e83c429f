"""Instrumented HTTP server."""

from .app import create_app, serve
from .middleware import AccessLogHandler, RequestLoggingMiddleware
from .store import InMemoryLogStore, LogStore, StoreError, StoreUnavailableError

__all__ = [
    "create_app",
    "serve",
    "AccessLogHandler",
    "RequestLoggingMiddleware",
    "InMemoryLogStore",
    "LogStore",
    "StoreError",
    "StoreUnavailableError",
]
