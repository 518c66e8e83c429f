"""Tests for event and burst validation."""

from logsim.events import Level, LogEvent
from logsim.validators import EventValidator, ValidationSeverity


def wire(**fields) -> dict:
    base = {
        "level": "info",
        "timestamp": "2024-01-01T00:00:00.000Z",
        "message": "API request",
        "type": "api-request",
    }
    base.update(fields)
    return base


def burst(correlation_id: str, size: int) -> list[dict]:
    events = [wire(level="warn", type="infrastructure", event="error_burst", burstSize=size, correlationId=correlation_id)]
    events += [
        wire(level="error", type="application-error", correlationId=correlation_id, burstIndex=i)
        for i in range(size)
    ]
    return events


def test_valid_event_passes() -> None:
    result = EventValidator().validate_event(wire(statusCode=200, responseTime=120))
    assert result.valid
    assert result.errors == [] and result.warnings == []


def test_log_event_instances_are_accepted() -> None:
    event = LogEvent(Level.WARN, "Rate limit triggered", "security", {"ip": "10.0.0.1"})
    assert EventValidator().validate_event(event).valid


def test_envelope_violations() -> None:
    result = EventValidator().validate_event(
        {"level": "debug", "timestamp": "yesterday", "message": "", "type": None}
    )
    assert not result.valid
    assert {e.attribute for e in result.errors} == {"level", "timestamp", "message", "type"}


def test_status_level_mismatch_is_error() -> None:
    result = EventValidator().validate_event(wire(statusCode=503))
    assert not result.valid
    (error,) = result.errors
    assert error.expected == "error" and error.actual == "info"


def test_http_response_with_error_must_be_error() -> None:
    validator = EventValidator()
    ok = wire(level="error", type="http-response", statusCode=500, error="boom")
    assert validator.validate_event(ok).valid


def test_payment_outcome_mismatch() -> None:
    event = wire(type="business", event="payment_processed", status="failed")
    assert not EventValidator().validate_event(event).valid


def test_negative_duration_is_warning_only() -> None:
    result = EventValidator().validate_event(wire(type="database", duration=-5))
    assert result.valid
    (warning,) = result.warnings
    assert warning.severity is ValidationSeverity.WARNING
    assert warning.attribute == "duration"


def test_unserializable_attribute_is_error() -> None:
    event = LogEvent(Level.INFO, "m", "c", {"handle": object()})
    result = EventValidator().validate_event(event)
    assert not result.valid
    assert "Validation failed" in str(result)


def test_well_formed_bursts_pass() -> None:
    events = burst("burst_1_1_aaaaaa", 3) + burst("burst_1_2_bbbbbb", 2)
    assert EventValidator().validate_events(events).valid


def test_interleaved_bursts_pass() -> None:
    a, b = burst("burst_1_1_aaaaaa", 2), burst("burst_1_2_bbbbbb", 2)
    events = [a[0], b[0], a[1], b[1], a[2], b[2]]
    assert EventValidator().validate_bursts(events).valid


def test_failure_before_warning_fails() -> None:
    events = burst("burst_1_1_aaaaaa", 2)
    events = [events[1], events[0], events[2]]
    assert not EventValidator().validate_bursts(events).valid


def test_out_of_order_failures_fail() -> None:
    events = burst("burst_1_1_aaaaaa", 3)
    events = [events[0], events[2], events[1], events[3]]
    result = EventValidator().validate_bursts(events)
    assert [e.attribute for e in result.errors] == ["burstIndex"]


def test_duplicate_correlation_id_fails() -> None:
    events = burst("burst_1_1_aaaaaa", 2) + burst("burst_1_1_aaaaaa", 2)
    assert not EventValidator().validate_bursts(events).valid


def test_more_failures_than_announced_fails() -> None:
    events = burst("burst_1_1_aaaaaa", 3)
    events[0]["burstSize"] = 2
    result = EventValidator().validate_bursts(events)
    assert [e.attribute for e in result.errors] == ["burstSize"]


def test_short_burst_passes_unless_complete_required() -> None:
    """A cancelled burst may stop early; sampled bursts must carry every failure."""
    events = burst("burst_1_1_aaaaaa", 3)[:-1]
    validator = EventValidator()
    assert validator.validate_bursts(events).valid

    result = validator.validate_bursts(events, complete=True)
    (error,) = result.errors
    assert error.attribute == "burstSize"
    assert error.expected == 3 and error.actual == 2


def test_complete_burst_passes_completeness_check() -> None:
    events = burst("burst_1_1_aaaaaa", 2) + burst("burst_1_2_bbbbbb", 1)
    assert EventValidator().validate_events(events, complete=True).valid
