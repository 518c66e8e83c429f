"""
Severity classification for outcome signals.

Maps a status code, a business outcome and/or a duration onto a Level:
- status >= 500 or outcome "failed" -> error
- status >= 400, a degraded-but-handled outcome, or duration over threshold -> warn
- anything else -> info

Classification is deterministic; malformed fields are ignored and an empty or
unreadable signal classifies as info.
"""

import math
from dataclasses import dataclass
from typing import Any

from .events import Level

GENERAL_WARN_MS = 1000
DATABASE_WARN_MS = 300
EXTERNAL_CALL_WARN_MS = 200
SLOW_OPERATION_FLAG_MS = 3000

FAILED_OUTCOMES = frozenset({"failed"})
DEGRADED_OUTCOMES = frozenset({"refunded", "half-open", "degraded", "retrying", "throttled"})


@dataclass(frozen=True)
class Signal:
    """Outcome signal fed to the classifier. Every field is optional."""

    status_code: Any = None
    outcome: Any = None
    duration_ms: Any = None
    warn_threshold_ms: float = GENERAL_WARN_MS


def _as_status(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _as_duration(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return float(value)


def _as_outcome(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip().lower() or None


def classify(signal: Signal | None) -> Level:
    """Derive the level for a signal, highest-priority rule first."""
    if signal is None:
        return Level.INFO

    status = _as_status(signal.status_code)
    outcome = _as_outcome(signal.outcome)
    duration = _as_duration(signal.duration_ms)
    threshold = _as_duration(signal.warn_threshold_ms)
    if threshold is None:
        threshold = GENERAL_WARN_MS

    if (status is not None and status >= 500) or outcome in FAILED_OUTCOMES:
        return Level.ERROR
    if status is not None and status >= 400:
        return Level.WARN
    if outcome in DEGRADED_OUTCOMES:
        return Level.WARN
    if duration is not None and duration > threshold:
        return Level.WARN
    return Level.INFO


def classify_status(status_code: Any) -> Level:
    return classify(Signal(status_code=status_code))


def classify_outcome(outcome: Any) -> Level:
    return classify(Signal(outcome=outcome))


def classify_duration(duration_ms: Any, threshold_ms: float = GENERAL_WARN_MS) -> Level:
    return classify(Signal(duration_ms=duration_ms, warn_threshold_ms=threshold_ms))
