"""Performance and infrastructure events: host metrics, cache, external calls, breakers."""

from .. import domains
from ..classifier import EXTERNAL_CALL_WARN_MS, classify_duration
from ..events import Level, LogEvent
from .base import ScenarioContext, scenario

INFRASTRUCTURE = "infrastructure"
PERFORMANCE = "performance"

BREAKER_COOLDOWN_S = 30


@scenario("metrics_snapshot", category=INFRASTRUCTURE, description="Host and process metrics")
def metrics_snapshot(ctx: ScenarioContext) -> LogEvent:
    m = ctx.metrics()
    return ctx.event(
        Level.INFO,
        "System metrics snapshot",
        INFRASTRUCTURE,
        event="metrics_snapshot",
        hostname=m.hostname,
        platform=m.platform,
        cpuLoad=list(m.cpu_load),
        totalMemoryMB=m.total_memory_mb,
        freeMemoryMB=m.free_memory_mb,
        processHeapMB=m.heap_mb,
        processRssMB=m.rss_mb,
        uptimeSeconds=round(m.uptime_s),
    )


@scenario("cache_operation", category=PERFORMANCE, description="Cache hit/miss/set/evict")
def cache_operation(ctx: ScenarioContext) -> LogEvent:
    return ctx.event(
        Level.INFO,
        "Cache operation",
        PERFORMANCE,
        event=ctx.choice(domains.CACHE_EVENTS, "cache_hit"),
        key=f"{ctx.choice(domains.CACHE_KEY_PREFIXES, 'config')}:{ctx.below(500)}",
        ttl=ctx.choice(domains.CACHE_TTLS_S, 60),
        size=ctx.below(10000),
    )


@scenario("external_call", category=PERFORMANCE, description="Third-party call; warn above 200 ms")
def external_call(ctx: ScenarioContext) -> LogEvent:
    latency = ctx.below(500)
    return ctx.event(
        classify_duration(latency, EXTERNAL_CALL_WARN_MS),
        "External service call",
        PERFORMANCE,
        event="external_call",
        service=ctx.choice(domains.EXTERNAL_SERVICES, "redis"),
        method=ctx.choice(domains.HTTP_METHODS, "GET"),
        latency=latency,
        success=ctx.chance(0.9),
        region=ctx.choice(domains.REGIONS, "us-east-1"),
        retryCount=ctx.between(1, 3) if ctx.chance(0.2) else 0,
    )


@scenario("circuit_breaker", category=INFRASTRUCTURE, description="Breaker opened for a service")
def circuit_breaker(ctx: ScenarioContext) -> LogEvent:
    # A tripped breaker is an error even while half-open.
    return ctx.event(
        Level.ERROR,
        "Circuit breaker tripped",
        INFRASTRUCTURE,
        event="circuit_breaker",
        service=ctx.choice(domains.SERVICES, "user-service"),
        state=ctx.choice(domains.BREAKER_STATES, "open"),
        failureCount=ctx.between(5, 24),
        lastError=ctx.choice(domains.ERROR_MESSAGES, "Timeout exceeded"),
        cooldownSeconds=BREAKER_COOLDOWN_S,
    )
