"""
Application error events.

``unhandled_exception`` is part of the continuous catalog. The burst builders
are driven by the scheduler's burst loop only: one ``burst_detected`` warning
followed by ``burst_size`` cascading failures sharing one correlation id.
"""

import os

from .. import domains
from ..events import Level, LogEvent
from .base import ScenarioContext, scenario

CATEGORY = "application-error"
BURST_CATEGORY = "infrastructure"


def fake_traceback(ctx: ScenarioContext, error: str) -> str:
    """Plausible Python traceback text for an error string."""
    return (
        "Traceback (most recent call last):\n"
        f'  File "/app/service/handlers.py", line {ctx.below(200)}, in process_request\n'
        "    result = await handler(request)\n"
        f'  File "/app/service/clients.py", line {ctx.below(120)}, in call\n'
        "    raise UpstreamError(message)\n"
        f"UpstreamError: {error}"
    )


@scenario("unhandled_exception", category=CATEGORY, description="Critical unhandled exception")
def unhandled_exception(ctx: ScenarioContext) -> LogEvent:
    return ctx.event(
        Level.ERROR,
        "Unhandled exception caught",
        CATEGORY,
        severity="critical",
        error=ctx.choice(domains.ERROR_MESSAGES, "Connection refused"),
        service=ctx.choice(domains.SERVICES, "user-service"),
        stack=fake_traceback(ctx, ctx.choice(domains.ERROR_MESSAGES, "Connection refused")),
        pid=os.getpid(),
    )


def burst_detected(ctx: ScenarioContext, burst_size: int, correlation_id: str) -> LogEvent:
    return ctx.event(
        Level.WARN,
        "Error burst detected",
        BURST_CATEGORY,
        event="error_burst",
        burstSize=burst_size,
        correlationId=correlation_id,
    )


def cascading_failure(ctx: ScenarioContext, correlation_id: str, index: int) -> LogEvent:
    return ctx.event(
        Level.ERROR,
        "Cascading failure",
        CATEGORY,
        severity=ctx.choice(domains.BURST_SEVERITIES, "high"),
        error=ctx.choice(domains.ERROR_MESSAGES, "Connection refused"),
        service=ctx.choice(domains.SERVICES, "user-service"),
        correlationId=correlation_id,
        burstIndex=index,
    )
