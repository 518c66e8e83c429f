"""Audit trail and configuration reload events."""

from .. import domains
from ..events import Level, LogEvent
from .base import ScenarioContext, scenario

AUDIT = "audit"
CONFIG = "config"


@scenario("config_reload", category=CONFIG, description="Configuration loaded from a source")
def config_reload(ctx: ScenarioContext) -> LogEvent:
    return ctx.event(
        Level.INFO,
        "Configuration loaded",
        CONFIG,
        event="config_reload",
        source=ctx.choice(domains.CONFIG_SOURCES, "env"),
        keys=ctx.between(5, 34),
        region=ctx.choice(domains.REGIONS, "us-east-1"),
        environment="production",
    )


@scenario("audit_event", category=AUDIT, description="Administrative change to a user")
def audit_event(ctx: ScenarioContext) -> LogEvent:
    return ctx.event(
        Level.INFO,
        "Audit event",
        AUDIT,
        event=ctx.choice(domains.AUDIT_EVENTS, "settings_updated"),
        performedBy=ctx.choice(domains.USERS, "user_1"),
        targetUser=ctx.choice(domains.USERS, "user_1"),
        ip=ctx.ip("10.0"),
        changes={
            "field": ctx.choice(domains.AUDIT_FIELDS, "status"),
            "from": "old_value",
            "to": "new_value",
        },
    )
