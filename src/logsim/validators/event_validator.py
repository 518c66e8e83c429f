"""
Validate emitted log events against the wire contract.

Validates:
- Envelope keys (level, timestamp, message, type) are present and well formed
- Levels agree with the classifier for status- and outcome-carrying events
- Durations are non-negative numbers
- Attributes serialize to JSON
- Bursts: one warning per correlation id, failures in index order
"""

import json
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..classifier import classify_outcome, classify_status
from ..events import Level, LogEvent

TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")

_LEVELS = frozenset(level.value for level in Level)
_DURATION_KEYS = ("duration", "responseTime", "queryDuration", "processingTime", "latency")
_STATUS_CATEGORIES = frozenset({"api-request", "http-response"})
_OUTCOME_EVENTS = frozenset({"payment_processed"})


class ValidationSeverity(Enum):
    """Severity level for validation issues."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationError:
    """A single validation error or warning."""

    severity: ValidationSeverity
    attribute: str
    message: str
    event_type: str | None = None
    expected: Any = None
    actual: Any = None

    def __str__(self) -> str:
        prefix = f"[{self.severity.value.upper()}]"
        type_info = f" ({self.event_type})" if self.event_type else ""
        return f"{prefix}{type_info} {self.attribute}: {self.message}"


@dataclass
class ValidationResult:
    """Result of validating one or more events."""

    valid: bool = True
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationError] = field(default_factory=list)

    def add_error(self, error: ValidationError):
        if error.severity == ValidationSeverity.ERROR:
            self.errors.append(error)
            self.valid = False
        else:
            self.warnings.append(error)

    def merge(self, other: "ValidationResult"):
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        if not other.valid:
            self.valid = False

    def __str__(self) -> str:
        lines = ["Validation passed" if self.valid else "Validation failed"]
        if self.errors:
            lines.append(f"\nErrors ({len(self.errors)}):")
            lines.extend(f"  - {err}" for err in self.errors)
        if self.warnings:
            lines.append(f"\nWarnings ({len(self.warnings)}):")
            lines.extend(f"  - {warn}" for warn in self.warnings)
        return "\n".join(lines)


def _as_wire(event: LogEvent | dict[str, Any]) -> dict[str, Any]:
    return event.to_dict() if isinstance(event, LogEvent) else dict(event)


class EventValidator:
    """Check events (LogEvent or wire dicts) for contract violations."""

    def validate_event(self, event: LogEvent | dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        wire = _as_wire(event)
        event_type = wire.get("type") if isinstance(wire.get("type"), str) else None

        self._validate_envelope(wire, event_type, result)
        self._validate_level_consistency(wire, event_type, result)
        self._validate_durations(wire, event_type, result)
        self._validate_serializable(wire, event_type, result)
        return result

    def _validate_envelope(self, wire: dict[str, Any], event_type: str | None, result: ValidationResult):
        level = wire.get("level")
        if level not in _LEVELS:
            result.add_error(
                ValidationError(
                    severity=ValidationSeverity.ERROR,
                    attribute="level",
                    message="Level must be info, warn or error",
                    event_type=event_type,
                    expected=sorted(_LEVELS),
                    actual=level,
                )
            )
        for key in ("message", "type"):
            value = wire.get(key)
            if not isinstance(value, str) or not value:
                result.add_error(
                    ValidationError(
                        severity=ValidationSeverity.ERROR,
                        attribute=key,
                        message="Required envelope field missing or empty",
                        event_type=event_type,
                        actual=value,
                    )
                )
        timestamp = wire.get("timestamp")
        if not isinstance(timestamp, str) or not TIMESTAMP_PATTERN.match(timestamp):
            result.add_error(
                ValidationError(
                    severity=ValidationSeverity.ERROR,
                    attribute="timestamp",
                    message="Timestamp must be ISO-8601 UTC with milliseconds",
                    event_type=event_type,
                    actual=timestamp,
                )
            )

    def _validate_level_consistency(
        self, wire: dict[str, Any], event_type: str | None, result: ValidationResult
    ):
        level = wire.get("level")
        expected: Level | None = None
        if event_type in _STATUS_CATEGORIES and "statusCode" in wire:
            expected = classify_status(wire["statusCode"])
            if event_type == "http-response" and wire.get("error"):
                expected = Level.ERROR
        elif wire.get("event") in _OUTCOME_EVENTS and "status" in wire:
            expected = classify_outcome(wire["status"])

        if expected is not None and level != expected.value:
            result.add_error(
                ValidationError(
                    severity=ValidationSeverity.ERROR,
                    attribute="level",
                    message="Level disagrees with the classified outcome",
                    event_type=event_type,
                    expected=expected.value,
                    actual=level,
                )
            )

    def _validate_durations(self, wire: dict[str, Any], event_type: str | None, result: ValidationResult):
        for key in _DURATION_KEYS:
            if key not in wire:
                continue
            value = wire[key]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
                result.add_error(
                    ValidationError(
                        severity=ValidationSeverity.WARNING,
                        attribute=key,
                        message="Duration should be a non-negative number",
                        event_type=event_type,
                        actual=value,
                    )
                )

    def _validate_serializable(
        self, wire: dict[str, Any], event_type: str | None, result: ValidationResult
    ):
        try:
            json.dumps(wire)
        except (TypeError, ValueError) as e:
            result.add_error(
                ValidationError(
                    severity=ValidationSeverity.ERROR,
                    attribute="attributes",
                    message=f"Event is not JSON-serializable: {e}",
                    event_type=event_type,
                )
            )

    def validate_events(
        self, events: Iterable[LogEvent | dict[str, Any]], complete: bool = False
    ) -> ValidationResult:
        """Validate each event, then the bursts they contain."""
        result = ValidationResult()
        wires = [_as_wire(e) for e in events]
        for wire in wires:
            result.merge(self.validate_event(wire))
        result.merge(self.validate_bursts(wires, complete=complete))
        return result

    def validate_bursts(
        self, events: Iterable[LogEvent | dict[str, Any]], complete: bool = False
    ) -> ValidationResult:
        """
        Check burst structure in emission order.

        Each correlation id needs exactly one "error_burst" warning, emitted
        before its failures, and failures numbered 0..burstSize-1 in order.

        Args:
            events: Events in emission order
            complete: Also require every announced burst to carry all of its
                failures. Leave off for streams where a burst may have been
                cancelled mid-way.
        """
        result = ValidationResult()
        announced: dict[str, int] = {}
        seen: dict[str, list[int]] = {}

        for wire in (_as_wire(e) for e in events):
            correlation_id = wire.get("correlationId")
            if not correlation_id:
                continue
            if wire.get("event") == "error_burst":
                if correlation_id in announced:
                    result.add_error(
                        ValidationError(
                            severity=ValidationSeverity.ERROR,
                            attribute="correlationId",
                            message="Correlation id announced by more than one burst",
                            event_type=wire.get("type"),
                            actual=correlation_id,
                        )
                    )
                announced[correlation_id] = wire.get("burstSize", 0)
                continue
            if correlation_id not in announced:
                result.add_error(
                    ValidationError(
                        severity=ValidationSeverity.ERROR,
                        attribute="correlationId",
                        message="Cascading failure emitted before its burst warning",
                        event_type=wire.get("type"),
                        actual=correlation_id,
                    )
                )
            seen.setdefault(correlation_id, []).append(wire.get("burstIndex", -1))

        for correlation_id, indexes in seen.items():
            if indexes != list(range(len(indexes))):
                result.add_error(
                    ValidationError(
                        severity=ValidationSeverity.ERROR,
                        attribute="burstIndex",
                        message="Burst failures out of index order",
                        expected=list(range(len(indexes))),
                        actual=indexes,
                    )
                )
            size = announced.get(correlation_id)
            if size is not None and len(indexes) > size:
                result.add_error(
                    ValidationError(
                        severity=ValidationSeverity.ERROR,
                        attribute="burstSize",
                        message="More failures than the announced burst size",
                        expected=size,
                        actual=len(indexes),
                    )
                )

        if complete:
            for correlation_id, size in announced.items():
                count = len(seen.get(correlation_id, []))
                if count < size:
                    result.add_error(
                        ValidationError(
                            severity=ValidationSeverity.ERROR,
                            attribute="burstSize",
                            message=f"Burst {correlation_id} is missing failures",
                            expected=size,
                            actual=count,
                        )
                    )
        return result
