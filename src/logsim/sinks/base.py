"""
Sink contract: accept one structured event, never block, never fail the caller.
"""

import logging
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from ..events import Level, LogEvent

logger = logging.getLogger(__name__)


@runtime_checkable
class Sink(Protocol):
    """Anything that can take a LogEvent."""

    def emit(self, event: LogEvent) -> None: ...

    def close(self) -> None: ...


class SafeSink:
    """
    Wrap a sink so write failures are reported on the fallback logger and swallowed.

    The scheduler and HTTP layer only ever talk to a SafeSink.
    """

    def __init__(self, inner: Sink):
        self.inner = inner
        self.failures = 0

    def emit(self, event: LogEvent) -> None:
        try:
            self.inner.emit(event)
        except Exception:
            self.failures += 1
            logger.exception("Sink write failed for %s event: %s", event.category, event.message)

    def close(self) -> None:
        try:
            self.inner.close()
        except Exception:
            logger.exception("Sink close failed")


class MemorySink:
    """Keep events in a list. Used by tests and the validate command."""

    def __init__(self):
        self.events: list[LogEvent] = []

    def emit(self, event: LogEvent) -> None:
        self.events.append(event)

    def close(self) -> None:
        pass

    def clear(self) -> None:
        self.events.clear()

    def where(
        self,
        category: str | None = None,
        level: Level | None = None,
        predicate: Callable[[LogEvent], bool] | None = None,
    ) -> list[LogEvent]:
        """Filter captured events."""
        out = self.events
        if category is not None:
            out = [e for e in out if e.category == category]
        if level is not None:
            out = [e for e in out if e.level == level]
        if predicate is not None:
            out = [e for e in out if predicate(e)]
        return list(out)
