"""
HTTP endpoints: health, the log-entry store and the on-demand simulations.

Every handler reaches its collaborators through ``request.app.state``:
sink, ctx (the HTTP path's ScenarioContext), store, store_ready and pause.
"""

import asyncio
import json
import time

from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from ..scenarios import lifecycle, simulate
from ..scenarios.health import health_check, health_payload
from .store import StoreError

LOG_QUERY_LIMIT = 100


async def sleep_pause(delay_ms: float) -> float:
    """Suspend for delay_ms and return the realized delay in ms."""
    start = time.perf_counter()
    await asyncio.sleep(delay_ms / 1000.0)
    return (time.perf_counter() - start) * 1000.0


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


async def health(request: Request) -> JSONResponse:
    state = request.app.state
    m = state.ctx.metrics()
    state.sink.emit(health_check(state.ctx, m, request.url.path))
    return JSONResponse(health_payload(state.ctx, m))


async def list_logs(request: Request) -> JSONResponse:
    state = request.app.state
    if not state.store_ready:
        return JSONResponse({"error": "Log store unavailable"}, status_code=503)
    start = time.perf_counter()
    try:
        entries = await state.store.query(LOG_QUERY_LIMIT)
    except StoreError as e:
        state.sink.emit(lifecycle.store_query_failed(state.ctx, "find", str(e), _elapsed_ms(start)))
        return JSONResponse({"error": "Internal server error"}, status_code=500)
    state.sink.emit(lifecycle.logs_fetched(state.ctx, len(entries), _elapsed_ms(start)))
    return JSONResponse(entries)


async def create_log(request: Request) -> JSONResponse:
    state = request.app.state
    if not state.store_ready:
        return JSONResponse({"error": "Log store unavailable"}, status_code=503)
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JSONResponse({"error": "Invalid JSON body"}, status_code=400)
    if not isinstance(body, dict):
        return JSONResponse({"error": "Invalid JSON body"}, status_code=400)

    start = time.perf_counter()
    try:
        entry = await state.store.create(body)
    except StoreError as e:
        state.sink.emit(
            lifecycle.store_query_failed(state.ctx, "insert", str(e), _elapsed_ms(start))
        )
        return JSONResponse({"error": "Internal server error"}, status_code=500)
    level = body.get("level")
    state.sink.emit(
        lifecycle.log_created(
            state.ctx, str(level) if level is not None else None, _elapsed_ms(start)
        )
    )
    return JSONResponse(entry, status_code=201)


async def simulate_error(request: Request) -> JSONResponse:
    state = request.app.state
    state.sink.emit(simulate.simulated_error(state.ctx))
    return JSONResponse({"error": "Simulated error"}, status_code=500)


async def simulate_warning(request: Request) -> JSONResponse:
    state = request.app.state
    state.sink.emit(simulate.memory_warning(state.ctx))
    return JSONResponse({"warning": "simulated warning logged"})


async def simulate_auth_fail(request: Request) -> JSONResponse:
    state = request.app.state
    event = simulate.auth_failure(
        state.ctx, _client_ip(request), request.headers.get("user-agent")
    )
    state.sink.emit(event)
    return JSONResponse({"error": "Unauthorized"}, status_code=401)


async def simulate_slow(request: Request) -> JSONResponse:
    state = request.app.state
    delay_ms = simulate.slow_delay_ms(state.ctx)
    state.sink.emit(simulate.slow_started(state.ctx, delay_ms))
    realized_ms = await state.pause(delay_ms)
    state.sink.emit(simulate.slow_completed(state.ctx, realized_ms, request.url.path))
    return JSONResponse({"message": "slow response", "duration": round(realized_ms)})


async def not_found(request: Request, exc: HTTPException) -> JSONResponse:
    state = request.app.state
    state.sink.emit(
        lifecycle.route_not_found(
            state.ctx,
            request.method,
            request.url.path,
            _client_ip(request),
            request.headers.get("user-agent"),
        )
    )
    return JSONResponse({"error": "Not found"}, status_code=404)


def create_routes() -> list[Route]:
    return [
        Route("/api/health", health, methods=["GET"]),
        Route("/api/logs", list_logs, methods=["GET"]),
        Route("/api/logs", create_log, methods=["POST"]),
        Route("/api/simulate/error", simulate_error, methods=["GET"]),
        Route("/api/simulate/warning", simulate_warning, methods=["GET"]),
        Route("/api/simulate/auth-fail", simulate_auth_fail, methods=["GET"]),
        Route("/api/simulate/slow", simulate_slow, methods=["GET"]),
    ]
