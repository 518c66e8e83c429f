"""Notification dispatch events."""

from .. import domains
from ..classifier import classify_outcome
from ..events import LogEvent
from .base import ScenarioContext, scenario

CATEGORY = "notification"

DELIVERY_RATE = 0.9


@scenario("notification_dispatch", category=CATEGORY, description="Undelivered is an error")
def notification_dispatch(ctx: ScenarioContext) -> LogEvent:
    delivered = ctx.chance(DELIVERY_RATE)
    return ctx.event(
        classify_outcome("delivered" if delivered else "failed"),
        "Notification dispatched",
        CATEGORY,
        event="dispatch",
        channel=ctx.choice(domains.CHANNELS, "email"),
        recipient=ctx.choice(domains.USERS, "user_1"),
        template=ctx.choice(domains.TEMPLATES, "alert"),
        delivered=delivered,
        latency=ctx.below(2000),
        error=None if delivered else "delivery_failed",
    )
