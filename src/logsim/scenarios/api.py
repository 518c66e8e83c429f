"""API request events with status-derived levels."""

from .. import domains
from ..classifier import classify_status
from ..events import LogEvent
from .base import ScenarioContext, scenario

CATEGORY = "api-request"


@scenario("api_request", category=CATEGORY, description="Service API call; 4xx warn, 5xx error")
def api_request(ctx: ScenarioContext) -> LogEvent:
    status = ctx.choice(domains.STATUS_CODES, 200)
    return ctx.event(
        classify_status(status),
        "API request",
        CATEGORY,
        method=ctx.choice(domains.HTTP_METHODS, "GET"),
        endpoint=f"/api/{ctx.choice(domains.API_RESOURCES, 'users')}",
        statusCode=status,
        responseTime=ctx.below(800),
        requestSize=ctx.below(5000),
        responseSize=ctx.below(50000),
        service=ctx.choice(domains.SERVICES, "user-service"),
    )
