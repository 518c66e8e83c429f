"""
Continuous scheduler driving the scenario library.

Three independent asyncio loops run for the lifetime of the scheduler:
- fast loop: every tick_interval_ms, emit 1-4 uniformly picked scenarios
- health loop: every health_interval_s, emit the periodic health report
- burst loop: wait a fresh uniform delay in [burst_min_s, burst_max_s], then
  start a burst (one warning, then burst_size staggered cascading failures)

Each burst runs in its own tracked task so its staggered sub-events never
delay the burst loop. stop() cancels the loops and all in-flight bursts.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from .config import SchedulerSettings
from .events import LogEvent
from .scenarios import Scenario, ScenarioContext, pick_scenarios, registry, run_scenario
from .scenarios.errors import burst_detected, cascading_failure
from .scenarios.health import health_report
from .sinks.base import SafeSink, Sink
from .statistics import IntegerDistribution, UniformDistribution

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class ContinuousScheduler:
    """Owns the fast, health and burst loops and every burst they start."""

    def __init__(
        self,
        sink: Sink,
        ctx: ScenarioContext,
        settings: SchedulerSettings | None = None,
        catalog: Sequence[Scenario] | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.settings = (settings or SchedulerSettings()).validate()
        self.sink = sink if isinstance(sink, SafeSink) else SafeSink(sink)
        self.ctx = ctx
        self.catalog = tuple(catalog) if catalog is not None else registry()
        self._sleep = sleep
        self._tick_size = IntegerDistribution(
            self.settings.min_scenarios_per_tick, self.settings.max_scenarios_per_tick
        )
        self._burst_size = IntegerDistribution(
            self.settings.burst_min_size, self.settings.burst_max_size
        )
        self._burst_delay = UniformDistribution(self.settings.burst_min_s, self.settings.burst_max_s)
        self._loops: list[asyncio.Task] = []
        self._bursts: set[asyncio.Task] = set()
        self._started = False

    @property
    def running(self) -> bool:
        return any(not t.done() for t in self._loops)

    @property
    def pending_bursts(self) -> int:
        return sum(1 for t in self._bursts if not t.done())

    def start(self) -> None:
        """Create the three loop tasks on the running event loop."""
        if self._started:
            raise RuntimeError("Scheduler already started")
        self._started = True
        self._loops = [
            asyncio.create_task(self._fast_loop(), name="logsim-fast-loop"),
            asyncio.create_task(self._health_loop(), name="logsim-health-loop"),
            asyncio.create_task(self._burst_loop(), name="logsim-burst-loop"),
        ]
        logger.info(
            "Scheduler started: tick=%sms health=%ss burst=%s-%ss",
            self.settings.tick_interval_ms,
            self.settings.health_interval_s,
            self.settings.burst_min_s,
            self.settings.burst_max_s,
        )

    async def stop(self) -> None:
        """Cancel every loop and pending burst and wait for them to finish."""
        tasks = [*self._loops, *self._bursts]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._loops = []
        self._bursts.clear()

    async def __aenter__(self) -> "ContinuousScheduler":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    # -- single iterations -------------------------------------------------

    def tick(self) -> list[LogEvent]:
        """One fast-loop iteration."""
        count = self._tick_size.sample(self.ctx.rng)
        events = [run_scenario(s, self.ctx) for s in pick_scenarios(self.ctx.rng, self.catalog, count)]
        for event in events:
            self.sink.emit(event)
        return events

    def emit_health(self) -> LogEvent:
        """One health-loop iteration."""
        event = health_report(self.ctx)
        self.sink.emit(event)
        return event

    def next_burst_delay(self) -> float:
        """Seconds until the next burst, redrawn every cycle."""
        return self._burst_delay.sample(self.ctx.rng)

    async def run_burst(self) -> str:
        """Emit one burst warning then its cascading failures, staggered in index order."""
        size = self._burst_size.sample(self.ctx.rng)
        correlation_id = self.ctx.ids.correlation_id()
        self.sink.emit(burst_detected(self.ctx, size, correlation_id))
        stagger_s = self.settings.burst_stagger_ms / 1000.0
        for index in range(size):
            if index:
                await self._sleep(stagger_s)
            self.sink.emit(cascading_failure(self.ctx, correlation_id, index))
        return correlation_id

    def start_burst(self) -> asyncio.Task:
        """Run a burst in its own task, tracked for cancellation."""
        task = asyncio.create_task(self.run_burst(), name="logsim-burst")
        self._bursts.add(task)
        task.add_done_callback(self._burst_done)
        return task

    def _burst_done(self, task: asyncio.Task) -> None:
        self._bursts.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Burst emission failed: %s", task.exception())

    # -- loops ---------------------------------------------------------------

    async def _fast_loop(self) -> None:
        interval = self.settings.tick_interval_ms / 1000.0
        while True:
            await self._sleep(interval)
            try:
                self.tick()
            except Exception:
                logger.exception("Fast loop tick failed")

    async def _health_loop(self) -> None:
        while True:
            await self._sleep(self.settings.health_interval_s)
            try:
                self.emit_health()
            except Exception:
                logger.exception("Health report failed")

    async def _burst_loop(self) -> None:
        while True:
            await self._sleep(self.next_burst_delay())
            try:
                self.start_burst()
            except Exception:
                logger.exception("Burst start failed")
