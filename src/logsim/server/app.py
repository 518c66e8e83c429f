"""
Starlette application factory.

The app emits its own lifecycle events, connects the log store (falling back
to degraded mode when it cannot), forwards uvicorn's access log and owns the
continuous scheduler for the lifetime of the server.
"""

import logging
import socket
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware

from ..config import Settings
from ..scenarios import ScenarioContext, lifecycle
from ..scheduler import ContinuousScheduler
from ..sinks.base import SafeSink, Sink
from .middleware import AccessLogHandler, RequestLoggingMiddleware
from .routes import create_routes, not_found, sleep_pause
from .store import InMemoryLogStore, LogStore

logger = logging.getLogger(__name__)

ACCESS_LOGGER_NAME = "uvicorn.access"

Pause = Callable[[float], Awaitable[float]]


@asynccontextmanager
async def lifespan(app: Starlette) -> AsyncIterator[None]:
    state = app.state
    sink, ctx, settings = state.sink, state.ctx, state.settings
    sink.emit(lifecycle.server_started(ctx, settings.port, settings.service_name))

    store_name = type(state.store).__name__
    sink.emit(lifecycle.store_connecting(ctx, store_name))
    try:
        await state.store.connect()
    except Exception as e:
        logger.warning("Log store unavailable, serving without it: %s", e)
        state.store_ready = False
        sink.emit(lifecycle.store_connect_failed(ctx, store_name, str(e)))
    else:
        state.store_ready = True
        sink.emit(lifecycle.store_connected(ctx, store_name))

    # uvicorn configures its loggers before the lifespan starts, so attach here.
    access_logger = logging.getLogger(ACCESS_LOGGER_NAME)
    access_handler = AccessLogHandler(sink)
    access_logger.addHandler(access_handler)

    scheduler: ContinuousScheduler | None = state.scheduler
    if scheduler is not None:
        sink.emit(lifecycle.generator_init(ctx))
        scheduler.start()
        sink.emit(lifecycle.generator_running(ctx, scheduler.settings.tick_interval_ms))

    try:
        yield
    finally:
        if scheduler is not None:
            await scheduler.stop()
        access_logger.removeHandler(access_handler)
        sink.emit(lifecycle.server_stopping(ctx))
        state.store_ready = False
        try:
            await state.store.close()
        except Exception:
            logger.exception("Log store close failed")


def create_app(
    sink: Sink,
    settings: Settings | None = None,
    store: LogStore | None = None,
    http_ctx: ScenarioContext | None = None,
    scheduler: ContinuousScheduler | None = None,
    pause: Pause | None = None,
    clock: Callable[[], float] = time.perf_counter,
) -> Starlette:
    """
    Build the instrumented HTTP app.

    Args:
        sink: Destination for every event the app emits
        settings: Resolved settings (defaults when omitted)
        store: Log-entry store behind /api/logs
        http_ctx: Scenario context for request-driven events; keep it separate
            from the scheduler's so the two paths share no random state
        scheduler: Continuous scheduler started and stopped with the app
        pause: Async suspension used by /api/simulate/slow
        clock: Monotonic clock (seconds) used to time requests

    Returns:
        Starlette application
    """
    settings = settings or Settings()
    safe_sink = sink if isinstance(sink, SafeSink) else SafeSink(sink)
    ctx = http_ctx or ScenarioContext.create(id_formats=settings.id_formats)

    app = Starlette(
        routes=create_routes(),
        middleware=[
            Middleware(
                RequestLoggingMiddleware,
                sink=safe_sink,
                clock=clock,
                slow_threshold_ms=settings.slow_request_ms,
                ids=ctx.ids,
            )
        ],
        exception_handlers={404: not_found},
        lifespan=lifespan,
    )
    app.state.sink = safe_sink
    app.state.ctx = ctx
    app.state.settings = settings
    app.state.store = store if store is not None else InMemoryLogStore()
    app.state.store_ready = False
    app.state.scheduler = scheduler
    app.state.pause = pause or sleep_pause
    return app


def bind_socket(host: str, port: int) -> socket.socket:
    """Bind the listening socket; raises OSError when the address is taken."""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    return sock


def serve(app: Starlette, host: str, port: int, log_level: str = "info") -> None:
    """
    Serve the app with uvicorn until shutdown.

    The socket is bound before uvicorn starts the lifespan, so a taken port
    produces a startup error event instead of a startup banner.

    Raises:
        OSError: If the listening socket cannot be bound
    """
    state = app.state
    try:
        sock = bind_socket(host, port)
    except OSError as e:
        logger.error("Cannot bind %s:%s: %s", host, port, e)
        state.sink.emit(lifecycle.server_start_failed(state.ctx, host, port, str(e)))
        raise

    config = uvicorn.Config(app, host=host, port=port, log_level=log_level)
    with sock:
        uvicorn.Server(config).run(sockets=[sock])
