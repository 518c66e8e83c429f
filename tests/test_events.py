"""Tests for log events and their wire shape."""

from datetime import datetime, timezone

import pytest

from logsim.events import Level, LogEvent, flatten_attributes, format_timestamp


def test_format_timestamp_milliseconds_and_z() -> None:
    ts = datetime(2024, 1, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)
    assert format_timestamp(ts) == "2024-01-01T12:00:00.123Z"


def test_format_timestamp_naive_is_utc() -> None:
    assert format_timestamp(datetime(2024, 5, 6, 7, 8, 9)) == "2024-05-06T07:08:09.000Z"


def test_level_coerced_from_string() -> None:
    event = LogEvent("warn", "msg", "security")
    assert event.level is Level.WARN


def test_empty_category_rejected() -> None:
    with pytest.raises(ValueError):
        LogEvent(Level.INFO, "msg", "")


def test_unknown_level_rejected() -> None:
    with pytest.raises(ValueError):
        LogEvent("debug", "msg", "security")


def test_to_dict_envelope_wins_and_none_dropped() -> None:
    """Attributes cannot overwrite envelope keys; None-valued attributes are omitted."""
    ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
    event = LogEvent(
        Level.INFO,
        "Order created",
        "business",
        {"type": "spoofed", "level": "error", "orderId": "ORD-1", "failureReason": None},
        timestamp=ts,
    )
    wire = event.to_dict()
    assert wire == {
        "level": "info",
        "timestamp": "2024-01-01T00:00:00.000Z",
        "message": "Order created",
        "type": "business",
        "orderId": "ORD-1",
    }


def test_get_reads_attributes() -> None:
    event = LogEvent(Level.INFO, "m", "c", {"a": 1})
    assert event.get("a") == 1
    assert event.get("missing", "x") == "x"


def test_flatten_attributes() -> None:
    """Nested mappings become dotted keys; mixed lists are stringified."""
    flat = flatten_attributes(
        {
            "geoip": {"country": "US", "city": {"name": "Chicago"}},
            "cpuLoad": [0.1, 0.2],
            "changes": [{"field": "role"}],
            "missing": None,
            "ok": True,
        }
    )
    assert flat == {
        "geoip.country": "US",
        "geoip.city.name": "Chicago",
        "cpuLoad": [0.1, 0.2],
        "changes": '[{"field": "role"}]',
        "ok": True,
    }
