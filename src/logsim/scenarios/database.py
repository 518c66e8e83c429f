"""Database operation and connection pool events."""

from .. import domains
from ..classifier import DATABASE_WARN_MS, classify_duration
from ..events import Level, LogEvent
from .base import ScenarioContext, scenario

CATEGORY = "database"

POOL_MAX_SIZE = 20


@scenario("database_operation", category=CATEGORY, description="Query; warn above 300 ms")
def database_operation(ctx: ScenarioContext) -> LogEvent:
    duration = ctx.below(500)
    return ctx.event(
        classify_duration(duration, DATABASE_WARN_MS),
        "Database operation",
        CATEGORY,
        operation=ctx.choice(domains.DB_OPERATIONS, "find"),
        collection=ctx.choice(domains.COLLECTIONS, "users"),
        duration=duration,
        documentsAffected=ctx.below(100),
        slow=duration > DATABASE_WARN_MS,
        index="used" if duration < 50 else "scan",
    )


@scenario("connection_pool_status", category=CATEGORY, description="Pool utilisation snapshot")
def connection_pool_status(ctx: ScenarioContext) -> LogEvent:
    return ctx.event(
        Level.INFO,
        "Database connection pool status",
        CATEGORY,
        event="pool_status",
        activeConnections=ctx.below(POOL_MAX_SIZE),
        idleConnections=ctx.below(10),
        waitingRequests=ctx.below(5),
        maxPoolSize=POOL_MAX_SIZE,
    )
