"""
Scenario registry and the context scenarios draw from.

A scenario is a stateless function ``generate(ctx) -> LogEvent``. Scenarios
register themselves with the ``@scenario`` decorator; the continuous
scheduler picks uniformly from the registry on every tick.
"""

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, TypeVar

from ..events import Level, LogEvent, utc_now
from ..statistics import (
    BernoulliDistribution,
    CategoricalDistribution,
    IntegerDistribution,
    UniformDistribution,
)
from .id_generator import IdGenerator
from .process_metrics import ProcessMetrics, collect_process_metrics

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ScenarioContext:
    """Random source, id generator and clocks handed to every scenario."""

    rng: random.Random
    ids: IdGenerator
    clock: Callable[[], datetime] = utc_now
    metrics: Callable[[], ProcessMetrics] = collect_process_metrics

    @classmethod
    def create(
        cls,
        seed: int | None = None,
        id_formats: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> "ScenarioContext":
        """Build a context around a fresh (optionally seeded) random source."""
        rng = random.Random(seed)
        return cls(rng=rng, ids=IdGenerator(rng, id_formats), **kwargs)

    def choice(self, values: Sequence[T], default: T | None = None) -> T | None:
        """Uniform pick; the default stands in for an empty domain."""
        if not values:
            return default
        return values[self.rng.randrange(len(values))]

    def below(self, n: int) -> int:
        """Integer in [0, n); 0 when n is not positive."""
        if n <= 0:
            return 0
        return self.rng.randrange(n)

    def between(self, low: int, high: int) -> int:
        """Integer in [low, high]; bounds are swapped when reversed."""
        if high < low:
            low, high = high, low
        return IntegerDistribution(low, high).sample(self.rng)

    def chance(self, p: float) -> bool:
        return BernoulliDistribution(p).sample(self.rng)

    def amount(self, low: float, high: float) -> float:
        """Currency amount rounded to cents."""
        return round(UniformDistribution(low, high).sample(self.rng), 2)

    def ip(self, prefix: str) -> str:
        """Complete a dotted IPv4 prefix ("10.0") with random octets."""
        parts = [p for p in prefix.split(".") if p]
        while len(parts) < 4:
            parts.append(str(self.below(255)))
        return ".".join(parts[:4])

    def event(self, level: Level, message: str, category: str, **attributes: Any) -> LogEvent:
        return LogEvent(
            level=level,
            message=message,
            category=category,
            attributes=attributes,
            timestamp=self.clock(),
        )


@dataclass(frozen=True)
class Scenario:
    """Named, stateless event generator."""

    name: str
    category: str
    generate: Callable[[ScenarioContext], LogEvent] = field(compare=False)
    description: str = ""


_REGISTRY: dict[str, Scenario] = {}


def scenario(
    name: str, *, category: str, description: str = ""
) -> Callable[[Callable[[ScenarioContext], LogEvent]], Callable[[ScenarioContext], LogEvent]]:
    """Register the decorated function in the continuous catalog."""

    def decorator(fn: Callable[[ScenarioContext], LogEvent]):
        register(Scenario(name=name, category=category, generate=fn, description=description))
        return fn

    return decorator


def register(entry: Scenario) -> Scenario:
    if entry.name in _REGISTRY:
        raise ValueError(f"Scenario already registered: {entry.name}")
    if not entry.category:
        raise ValueError(f"Scenario {entry.name} has no category")
    _REGISTRY[entry.name] = entry
    return entry


def registry() -> tuple[Scenario, ...]:
    """All registered scenarios in registration order."""
    return tuple(_REGISTRY.values())


def get_scenario(name: str) -> Scenario:
    try:
        return _REGISTRY[name]
    except KeyError:
        raise KeyError(f"Unknown scenario: {name}") from None


def run_scenario(entry: Scenario, ctx: ScenarioContext) -> LogEvent:
    """Invoke a scenario; never raises. A failing draw yields a fallback info event."""
    try:
        event = entry.generate(ctx)
        if not isinstance(event, LogEvent):
            raise TypeError(f"expected LogEvent, got {type(event).__name__}")
        return event
    except Exception as e:
        logger.warning("Scenario %s failed, emitting fallback event: %s", entry.name, e)
        return LogEvent(
            level=Level.INFO,
            message=f"Scenario {entry.name} produced no event",
            category=entry.category,
            attributes={"scenario": entry.name, "fallback": True, "error": str(e)},
            timestamp=utc_now(),
        )


def pick_scenarios(
    rng: random.Random, catalog: Sequence[Scenario], count: int
) -> list[Scenario]:
    """Draw count scenarios independently and uniformly (with replacement)."""
    if not catalog or count <= 0:
        return []
    return CategoricalDistribution(categories=list(catalog)).sample_many(rng, count)
