"""
Request logging for the HTTP server.

RequestLoggingMiddleware wraps every request with an "Incoming request" /
"Request completed" pair (plus a slow-request warning), classified by status
code. AccessLogHandler turns uvicorn's access log lines into events.
"""

import logging
import random
import time
from collections.abc import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from ..classifier import GENERAL_WARN_MS, classify_duration, classify_status
from ..events import Level, LogEvent
from ..scenarios.id_generator import IdGenerator
from ..sinks.base import SafeSink, Sink

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _content_length(raw: str | None) -> int:
    try:
        return max(0, int(raw)) if raw else 0
    except ValueError:
        return 0


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Emit start, completion and slow-request events for every request."""

    def __init__(
        self,
        app: ASGIApp,
        sink: Sink,
        clock: Callable[[], float] = time.perf_counter,
        slow_threshold_ms: float = GENERAL_WARN_MS,
        ids: IdGenerator | None = None,
    ):
        super().__init__(app)
        self.sink = sink if isinstance(sink, SafeSink) else SafeSink(sink)
        self.clock = clock
        self.slow_threshold_ms = slow_threshold_ms
        self.ids = ids or IdGenerator(random.Random())

    async def dispatch(self, request: Request, call_next) -> Response:
        req_id = self.ids.request_id()
        start = self.clock()
        method = request.method
        path = request.url.path
        headers = request.headers

        self.sink.emit(
            LogEvent(
                Level.INFO,
                "Incoming request",
                "http-request",
                {
                    "reqId": req_id,
                    "method": method,
                    "path": path,
                    "query": dict(request.query_params),
                    "ip": request.client.host if request.client else None,
                    "userAgent": headers.get("user-agent"),
                    "contentLength": _content_length(headers.get("content-length")),
                    "referer": headers.get("referer") or "direct",
                },
            )
        )

        error: str | None = None
        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception("Unhandled error while serving %s %s", method, path)
            error = str(e) or type(e).__name__
            response = JSONResponse({"error": "Internal server error"}, status_code=500)

        duration = max(0, round((self.clock() - start) * 1000))
        status = response.status_code
        attrs = {
            "reqId": req_id,
            "method": method,
            "path": path,
            "statusCode": status,
            "duration": duration,
            "contentLength": _content_length(response.headers.get("content-length")),
        }
        if error is not None:
            attrs["error"] = error
        self.sink.emit(LogEvent(classify_status(status), "Request completed", "http-response", attrs))

        if classify_duration(duration, self.slow_threshold_ms) is Level.WARN:
            self.sink.emit(
                LogEvent(
                    Level.WARN,
                    "Slow request detected",
                    "performance",
                    {
                        "reqId": req_id,
                        "method": method,
                        "path": path,
                        "duration": duration,
                        "threshold": round(self.slow_threshold_ms),
                    },
                )
            )

        response.headers[REQUEST_ID_HEADER] = req_id
        return response


class AccessLogHandler(logging.Handler):
    """Forward access log lines (uvicorn.access) to the sink as info events."""

    def __init__(self, sink: Sink, level: int = logging.INFO):
        super().__init__(level)
        self.sink = sink if isinstance(sink, SafeSink) else SafeSink(sink)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record).strip()
        except Exception:
            self.handleError(record)
            return
        self.sink.emit(LogEvent(Level.INFO, message, "http-access-log"))
