"""
Health events.

The periodic health report is emitted by the scheduler's health loop and is
never part of the random catalog; it is always info.
"""

import platform
from typing import Any

from ..events import Level, LogEvent, format_timestamp
from .base import ScenarioContext
from .process_metrics import ProcessMetrics

CATEGORY = "health"


def health_report(ctx: ScenarioContext) -> LogEvent:
    m = ctx.metrics()
    return ctx.event(
        Level.INFO,
        "Periodic health report",
        CATEGORY,
        event="periodic_check",
        uptime=round(m.uptime_s),
        heapUsedMB=m.heap_mb,
        rssMB=m.rss_mb,
        cpuLoad=list(m.cpu_load),
        freeMemoryMB=m.free_memory_mb,
        activeHandles=m.open_handles,
        activeRequests=m.active_tasks,
    )


def health_payload(ctx: ScenarioContext, m: ProcessMetrics) -> dict[str, Any]:
    """Response body for GET /api/health."""
    return {
        "status": "ok",
        "uptime": m.uptime_s,
        "timestamp": format_timestamp(ctx.clock()),
        "memory": {"heapUsed": m.heap_bytes, "rss": m.rss_bytes, "vms": m.vms_bytes},
        "pid": m.pid,
        "pythonVersion": platform.python_version(),
    }


def health_check(ctx: ScenarioContext, m: ProcessMetrics, endpoint: str = "/api/health") -> LogEvent:
    return ctx.event(
        Level.INFO,
        "Health check performed",
        CATEGORY,
        endpoint=endpoint,
        uptime=m.uptime_s,
        heapUsedMB=m.heap_mb,
        rssMB=m.rss_mb,
    )
