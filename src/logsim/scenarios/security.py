"""Security events: rate limiting, suspicious activity, token issuance."""

from .. import domains
from ..events import Level, LogEvent
from .base import ScenarioContext, scenario

CATEGORY = "security"

RATE_LIMIT = 100
RATE_WINDOW_S = 60


@scenario("rate_limit", category=CATEGORY, description="Client close to or over the rate limit")
def rate_limit(ctx: ScenarioContext) -> LogEvent:
    return ctx.event(
        Level.WARN,
        "Rate limit triggered",
        CATEGORY,
        event="rate_limit",
        ip=ctx.ip("192.168"),
        endpoint=f"/api/{ctx.choice(domains.RATE_LIMITED_ENDPOINTS, 'login')}",
        requestCount=80 + ctx.below(50),
        limit=RATE_LIMIT,
        windowSeconds=RATE_WINDOW_S,
    )


@scenario("suspicious_activity", category=CATEGORY, description="Attack pattern, usually blocked")
def suspicious_activity(ctx: ScenarioContext) -> LogEvent:
    return ctx.event(
        Level.WARN,
        "Suspicious activity detected",
        CATEGORY,
        event="suspicious_activity",
        severity=ctx.choice(domains.THREAT_SEVERITIES, "low"),
        ip=ctx.ip("10"),
        pattern=ctx.choice(domains.THREAT_PATTERNS, "port_scan"),
        blocked=ctx.chance(0.7),
    )


@scenario("token_issued", category=CATEGORY, description="JWT issued to a user")
def token_issued(ctx: ScenarioContext) -> LogEvent:
    return ctx.event(
        Level.INFO,
        "JWT token issued",
        CATEGORY,
        event="token_issued",
        userId=ctx.choice(domains.USERS, "user_1"),
        tokenType=ctx.choice(domains.TOKEN_TYPES, "access"),
        expiresIn=ctx.choice(domains.TOKEN_LIFETIMES_S, 900),
    )
