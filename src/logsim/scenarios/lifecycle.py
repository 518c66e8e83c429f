"""
Server lifecycle and log-store events.

Emitted by the HTTP app around startup, shutdown and /api/logs; none of them
are part of the random catalog.
"""

import os
import platform
import socket

from .. import __version__
from ..events import Level, LogEvent
from .base import ScenarioContext

STARTUP = "startup"
DATABASE = "database"
DATABASE_QUERY = "database-query"
LOG_COLLECTION = "logentries"


def server_started(ctx: ScenarioContext, port: int, service_name: str) -> LogEvent:
    m = ctx.metrics()
    return ctx.event(
        Level.INFO,
        "=== SERVER STARTED ===",
        STARTUP,
        port=port,
        service=service_name,
        version=__version__,
        pythonVersion=platform.python_version(),
        platform=m.platform,
        arch=m.arch,
        hostname=m.hostname or socket.gethostname(),
        pid=m.pid,
        env=os.environ.get("LOGSIM_ENV", "development"),
        totalMemoryMB=m.total_memory_mb,
        cpus=m.cpu_count,
    )


def generator_init(ctx: ScenarioContext) -> LogEvent:
    return ctx.event(
        Level.INFO, "Starting continuous log generator", STARTUP, event="log_generator_init"
    )


def generator_running(ctx: ScenarioContext, tick_interval_ms: float) -> LogEvent:
    return ctx.event(
        Level.INFO,
        f"Log generator active - producing diverse logs every {round(tick_interval_ms)}ms",
        STARTUP,
        event="log_generator_running",
        tickIntervalMs=round(tick_interval_ms),
    )


def server_start_failed(ctx: ScenarioContext, host: str, port: int, error: str) -> LogEvent:
    """The listening socket could not be bound; nothing else was started."""
    return ctx.event(
        Level.ERROR,
        "Server failed to start",
        STARTUP,
        event="startup_failed",
        host=host,
        port=port,
        error=error,
    )


def server_stopping(ctx: ScenarioContext) -> LogEvent:
    return ctx.event(Level.INFO, "=== SERVER STOPPING ===", STARTUP, event="shutdown")


def store_connecting(ctx: ScenarioContext, store_name: str) -> LogEvent:
    return ctx.event(
        Level.INFO, "Attempting log store connection", DATABASE, event="connecting", store=store_name
    )


def store_connected(ctx: ScenarioContext, store_name: str) -> LogEvent:
    return ctx.event(
        Level.INFO, "Log store connected successfully", DATABASE, event="connected", store=store_name
    )


def store_connect_failed(ctx: ScenarioContext, store_name: str, error: str) -> LogEvent:
    return ctx.event(
        Level.ERROR,
        "Log store initial connection failed",
        DATABASE,
        event="error",
        store=store_name,
        error=error,
    )


def logs_fetched(ctx: ScenarioContext, count: int, duration_ms: float) -> LogEvent:
    return ctx.event(
        Level.INFO,
        "Log entries fetched",
        DATABASE_QUERY,
        collection=LOG_COLLECTION,
        operation="find",
        count=count,
        queryDuration=round(duration_ms),
    )


def log_created(ctx: ScenarioContext, level: str | None, duration_ms: float) -> LogEvent:
    return ctx.event(
        Level.INFO,
        "Log entry created",
        DATABASE_QUERY,
        collection=LOG_COLLECTION,
        operation="insert",
        entryLevel=level,
        queryDuration=round(duration_ms),
    )


def store_query_failed(
    ctx: ScenarioContext, operation: str, error: str, duration_ms: float
) -> LogEvent:
    message = "Failed to fetch logs" if operation == "find" else "Failed to create log entry"
    return ctx.event(
        Level.ERROR,
        message,
        DATABASE_QUERY,
        collection=LOG_COLLECTION,
        operation=operation,
        error=error,
        queryDuration=round(duration_ms),
    )


def route_not_found(
    ctx: ScenarioContext, method: str, path: str, ip: str | None, user_agent: str | None
) -> LogEvent:
    return ctx.event(
        Level.WARN,
        "Route not found",
        "http-error",
        statusCode=404,
        method=method,
        path=path,
        ip=ip,
        userAgent=user_agent,
    )
