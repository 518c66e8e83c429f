"""
Structured log events and their JSON wire shape.

Every emitted event serializes to ``{level, timestamp, message, type, ...attributes}``.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

# Envelope keys that attributes may never overwrite.
ENVELOPE_KEYS = frozenset({"level", "timestamp", "message", "type"})


class Level(str, Enum):
    """Log level of an emitted event."""

    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def logging_level(self) -> int:
        """Matching stdlib logging level."""
        return _LOGGING_LEVELS[self]


_LOGGING_LEVELS = {
    Level.INFO: logging.INFO,
    Level.WARN: logging.WARNING,
    Level.ERROR: logging.ERROR,
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    """ISO-8601 with millisecond precision and a Z suffix (e.g. 2024-01-01T12:00:00.123Z)."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    ts = ts.astimezone(timezone.utc)
    return ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"


@dataclass
class LogEvent:
    """One structured log event."""

    level: Level
    message: str
    category: str
    attributes: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        self.level = Level(self.level)
        if not self.category:
            raise ValueError("LogEvent category must be non-empty")

    def get(self, key: str, default: Any = None) -> Any:
        """Shortcut for attribute lookup."""
        return self.attributes.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        """Wire shape. None-valued attributes are dropped, envelope keys win."""
        out: dict[str, Any] = {
            "level": self.level.value,
            "timestamp": format_timestamp(self.timestamp),
            "message": self.message,
            "type": self.category,
        }
        for key, value in self.attributes.items():
            if value is None or key in ENVELOPE_KEYS:
                continue
            out[key] = value
        return out


def flatten_attributes(attrs: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested mappings into dotted keys (``geoip.city``).

    Lists of primitives are kept; lists holding anything else are stringified.
    None values are dropped.
    """
    flat: dict[str, Any] = {}
    for key, value in attrs.items():
        name = f"{prefix}{key}"
        if value is None:
            continue
        if isinstance(value, dict):
            flat.update(flatten_attributes(value, prefix=f"{name}."))
        elif isinstance(value, (list, tuple)):
            if all(isinstance(v, (str, bool, int, float)) for v in value):
                flat[name] = list(value)
            else:
                flat[name] = json.dumps(value, default=str)
        elif isinstance(value, (str, bool, int, float)):
            flat[name] = value
        else:
            flat[name] = str(value)
    return flat
