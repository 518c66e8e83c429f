"""Tests for the scenario registry and catalog."""

import random
from collections import Counter

import pytest
from conftest import make_context

from logsim.classifier import classify_outcome, classify_status
from logsim.events import Level, LogEvent
from logsim.scenarios import (
    Scenario,
    get_scenario,
    pick_scenarios,
    register,
    registry,
    run_scenario,
)
from logsim.scenarios import errors, health, simulate
from logsim.validators import EventValidator

EXPECTED_SCENARIOS = {
    "user_login",
    "user_logout",
    "page_view",
    "user_click",
    "api_request",
    "database_operation",
    "connection_pool_status",
    "rate_limit",
    "suspicious_activity",
    "token_issued",
    "metrics_snapshot",
    "cache_operation",
    "external_call",
    "circuit_breaker",
    "order_created",
    "payment_processed",
    "inventory_change",
    "background_job",
    "queue_metrics",
    "notification_dispatch",
    "unhandled_exception",
    "config_reload",
    "audit_event",
}


def samples(name: str, count: int = 200) -> list[LogEvent]:
    entry = get_scenario(name)
    ctx = make_context(seed=99)
    return [entry.generate(ctx) for _ in range(count)]


def test_registry_names_unique_and_complete() -> None:
    names = [s.name for s in registry()]
    assert len(names) == len(set(names))
    assert EXPECTED_SCENARIOS <= set(names)


def test_duplicate_registration_rejected() -> None:
    with pytest.raises(ValueError):
        register(Scenario(name="api_request", category="api-request", generate=lambda ctx: None))


def test_empty_category_rejected() -> None:
    with pytest.raises(ValueError):
        register(Scenario(name="nameless_category", category="", generate=lambda ctx: None))


def test_unknown_scenario_lookup() -> None:
    with pytest.raises(KeyError):
        get_scenario("does_not_exist")


@pytest.mark.parametrize("seed", range(25))
def test_every_scenario_yields_valid_event(seed: int) -> None:
    """Each registered scenario produces a well-formed event in its own category."""
    ctx = make_context(seed)
    validator = EventValidator()
    for entry in registry():
        event = entry.generate(ctx)
        assert isinstance(event, LogEvent)
        assert event.category == entry.category
        assert event.message
        result = validator.validate_event(event)
        assert result.valid, f"{entry.name}: {result}"


def test_run_scenario_falls_back_on_failure() -> None:
    def broken(ctx):
        raise RuntimeError("generator exploded")

    entry = Scenario(name="broken", category="test", generate=broken)
    event = run_scenario(entry, make_context())
    assert event.level is Level.INFO
    assert event.category == "test"
    assert event.get("fallback") is True
    assert event.get("scenario") == "broken"
    assert "generator exploded" in event.get("error")


def test_pick_scenarios_edge_cases() -> None:
    rng = random.Random(0)
    assert pick_scenarios(rng, [], 3) == []
    assert pick_scenarios(rng, registry(), 0) == []


def test_pick_scenarios_is_roughly_uniform() -> None:
    """Over many draws every scenario is picked close to its fair share."""
    catalog = registry()
    rng = random.Random(2024)
    draws = 200 * len(catalog)
    counts = Counter(s.name for s in pick_scenarios(rng, catalog, draws))
    assert set(counts) == {s.name for s in catalog}
    for name, count in counts.items():
        assert 120 <= count <= 280, name


def test_api_request_level_matches_status() -> None:
    for event in samples("api_request"):
        assert event.level is classify_status(event.get("statusCode"))


def test_payment_level_matches_outcome() -> None:
    events = samples("payment_processed", 400)
    for event in events:
        assert event.level is classify_outcome(event.get("status"))
        assert ("failureReason" in event.to_dict()) == (event.get("status") == "failed")
    assert {e.level for e in events} == {Level.INFO, Level.WARN, Level.ERROR}


def test_database_operation_warns_above_300ms() -> None:
    for event in samples("database_operation"):
        slow = event.get("duration") > 300
        assert event.get("slow") is slow
        assert event.level is (Level.WARN if slow else Level.INFO)


def test_external_call_warns_above_200ms() -> None:
    for event in samples("external_call"):
        expected = Level.WARN if event.get("latency") > 200 else Level.INFO
        assert event.level is expected


def test_background_job_failure_is_error() -> None:
    for event in samples("background_job"):
        if event.get("success"):
            assert event.level is Level.INFO
            assert event.get("error") is None
        else:
            assert event.level is Level.ERROR
            assert event.get("error")


def test_fixed_level_scenarios() -> None:
    assert {e.level for e in samples("circuit_breaker", 50)} == {Level.ERROR}
    assert {e.level for e in samples("rate_limit", 50)} == {Level.WARN}
    assert {e.level for e in samples("unhandled_exception", 50)} == {Level.ERROR}
    assert {e.level for e in samples("order_created", 50)} == {Level.INFO}


def test_same_seed_same_events() -> None:
    first = [e.to_dict() for e in samples("order_created", 5)]
    second = [e.to_dict() for e in samples("order_created", 5)]
    for a, b in zip(first, second):
        a.pop("timestamp")
        b.pop("timestamp")
    assert first == second


def test_context_helpers(ctx) -> None:
    assert ctx.choice([], "fallback") == "fallback"
    assert ctx.below(0) == 0
    assert all(1 <= ctx.between(5, 1) <= 5 for _ in range(50))
    octets = ctx.ip("10.0").split(".")
    assert len(octets) == 4 and octets[:2] == ["10", "0"]
    assert 1 <= ctx.amount(1, 2) <= 2
    assert not any(ctx.chance(0.0) for _ in range(50))
    assert all(ctx.chance(1.0) is True for _ in range(50))


def test_burst_builders(ctx) -> None:
    warning = errors.burst_detected(ctx, 4, "burst_1_1_abcdef")
    assert warning.level is Level.WARN
    assert warning.get("event") == "error_burst"
    assert warning.get("burstSize") == 4
    failure = errors.cascading_failure(ctx, "burst_1_1_abcdef", 2)
    assert failure.level is Level.ERROR
    assert failure.category == "application-error"
    assert failure.get("severity") in ("high", "critical")
    assert failure.get("correlationId") == "burst_1_1_abcdef"
    assert failure.get("burstIndex") == 2


def test_health_report(ctx) -> None:
    event = health.health_report(ctx)
    assert event.level is Level.INFO
    assert event.category == "health"
    assert event.get("event") == "periodic_check"
    assert event.get("rssMB") == 80
    assert event.get("cpuLoad") == [0.5, 0.4, 0.3]


def test_simulated_error(ctx) -> None:
    event = simulate.simulated_error(ctx)
    assert event.level is Level.ERROR
    assert event.category == "application-error"
    assert event.get("errorCode") == simulate.SIMULATED_ERROR_CODE
    assert event.get("severity") == "critical"
    assert "Traceback" in event.get("stack")


def test_slow_completed_threshold_flag(ctx) -> None:
    """The event is always a warning; the 3000 ms flag is strict."""
    over = simulate.slow_completed(ctx, 3500, "/api/simulate/slow")
    at = simulate.slow_completed(ctx, 3000, "/api/simulate/slow")
    assert over.level is Level.WARN and at.level is Level.WARN
    assert over.get("exceededThreshold") is True
    assert at.get("exceededThreshold") is False


def test_slow_delay_range(ctx) -> None:
    assert all(1000 <= simulate.slow_delay_ms(ctx) <= 5000 for _ in range(200))
