"""
Single-shot scenarios behind the /api/simulate endpoints.

They share the event shapes and classifier of the continuous catalog but are
triggered on demand, one event per call.
"""

import os

from .. import domains
from ..classifier import SLOW_OPERATION_FLAG_MS, classify_duration
from ..events import Level, LogEvent
from .base import ScenarioContext
from .errors import CATEGORY as APPLICATION_ERROR
from .errors import fake_traceback

SIMULATED_ERROR_CODE = "ERR_SIM_500"
SLOW_MIN_MS = 1000
SLOW_MAX_MS = 5000
MEMORY_THRESHOLD = "80%"


def simulated_error(ctx: ScenarioContext) -> LogEvent:
    message = "Simulated critical application error"
    m = ctx.metrics()
    return ctx.event(
        Level.ERROR,
        "CRITICAL: Application error occurred",
        APPLICATION_ERROR,
        severity="critical",
        errorCode=SIMULATED_ERROR_CODE,
        errorMessage=message,
        stack=fake_traceback(ctx, message),
        pid=os.getpid(),
        memory={"heapUsed": m.heap_bytes, "rss": m.rss_bytes, "vms": m.vms_bytes},
    )


def memory_warning(ctx: ScenarioContext) -> LogEvent:
    m = ctx.metrics()
    return ctx.event(
        Level.WARN,
        "High memory usage detected",
        "performance",
        resource="memory",
        heapUsedMB=m.heap_mb,
        vmsMB=m.vms_mb,
        rssMB=m.rss_mb,
        totalMemoryMB=m.total_memory_mb,
        threshold=MEMORY_THRESHOLD,
    )


def auth_failure(ctx: ScenarioContext, ip: str | None, user_agent: str | None) -> LogEvent:
    return ctx.event(
        Level.WARN,
        "Authentication failure",
        "security",
        event="authentication_failed",
        severity="high",
        ip=ip,
        userAgent=user_agent,
        attemptedUser=f"user_{ctx.below(100)}",
        reason=ctx.choice(domains.AUTH_FAILURE_REASONS, "invalid_password"),
        geoip={"country": "US", "city": ctx.choice(domains.GEO_CITIES, "New York")},
    )


def slow_delay_ms(ctx: ScenarioContext) -> float:
    """Delay for the slow operation, uniform in [1000, 5000] ms."""
    return ctx.rng.uniform(SLOW_MIN_MS, SLOW_MAX_MS)


def slow_started(ctx: ScenarioContext, expected_delay_ms: float) -> LogEvent:
    return ctx.event(
        Level.INFO,
        "Starting slow operation",
        "performance",
        resource="latency",
        expectedDelay=round(expected_delay_ms),
    )


def slow_completed(ctx: ScenarioContext, duration_ms: float, endpoint: str) -> LogEvent:
    duration = round(duration_ms)
    # Always a warning; the classifier only decides the exceededThreshold flag.
    exceeded = classify_duration(duration, SLOW_OPERATION_FLAG_MS) is Level.WARN
    return ctx.event(
        Level.WARN,
        "Slow operation completed",
        "performance",
        resource="latency",
        duration=duration,
        endpoint=endpoint,
        exceededThreshold=exceeded,
    )
