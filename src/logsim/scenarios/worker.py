"""Background worker events: job completions and queue metrics."""

from .. import domains
from ..classifier import classify_outcome
from ..events import Level, LogEvent
from .base import ScenarioContext, scenario

CATEGORY = "worker"

JOB_SUCCESS_RATE = 0.85


@scenario("background_job", category=CATEGORY, description="Job finished; failures are errors")
def background_job(ctx: ScenarioContext) -> LogEvent:
    success = ctx.chance(JOB_SUCCESS_RATE)
    return ctx.event(
        classify_outcome("completed" if success else "failed"),
        "Background job completed",
        CATEGORY,
        event="job_completed",
        jobId=ctx.ids.job_id(),
        jobType=ctx.choice(domains.JOB_TYPES, "data_cleanup"),
        duration=ctx.below(10000),
        success=success,
        retries=ctx.below(3),
        queue=ctx.choice(domains.QUEUES, "default"),
        error=None if success else ctx.choice(domains.ERROR_MESSAGES, "Timeout exceeded"),
    )


@scenario("queue_metrics", category=CATEGORY, description="Queue depth and throughput")
def queue_metrics(ctx: ScenarioContext) -> LogEvent:
    return ctx.event(
        Level.INFO,
        "Queue metrics",
        CATEGORY,
        event="queue_metrics",
        queue=ctx.choice(domains.QUEUES, "default"),
        pending=ctx.below(50),
        processing=ctx.below(10),
        completed=ctx.below(1000),
        failed=ctx.below(20),
        avgProcessingTime=ctx.below(5000),
    )
