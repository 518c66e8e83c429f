"""Tests for layered configuration: defaults, config.yaml, environment."""

from pathlib import Path

import pytest

from logsim.config import (
    DEFAULT_ID_FORMATS,
    ConfigError,
    SchedulerSettings,
    load_settings,
    load_yaml,
    settings_from_mapping,
)

BUNDLED_CONFIG = Path(__file__).resolve().parents[1] / "resource" / "config" / "config.yaml"


def write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_when_config_missing(tmp_path: Path) -> None:
    settings = load_settings(tmp_path / "missing.yaml", env={})
    assert settings.service_name == "logsim"
    assert settings.port == 5000
    assert settings.seed is None
    assert settings.slow_request_ms == 1000.0
    assert settings.scheduler == SchedulerSettings()
    assert settings.id_formats == DEFAULT_ID_FORMATS


def test_bundled_config_loads() -> None:
    settings = load_settings(BUNDLED_CONFIG, env={})
    assert settings.service_name == "mern-backend"
    assert settings.scheduler.tick_interval_ms == 800.0
    assert settings.scheduler.burst_stagger_ms == 200.0


def test_yaml_values_are_applied(tmp_path: Path) -> None:
    path = write_config(
        tmp_path,
        """
service_name: shop-api
port: 8081
seed: 11
http:
  slow_request_ms: 2000
scheduler:
  tick_interval_ms: 500
  burst_max_size: 3
id_formats:
  request_id: "r-{hex:4}"
""",
    )
    settings = load_settings(path, env={})
    assert settings.service_name == "shop-api"
    assert settings.port == 8081
    assert settings.seed == 11
    assert settings.slow_request_ms == 2000.0
    assert settings.scheduler.tick_interval_ms == 500.0
    assert isinstance(settings.scheduler.tick_interval_ms, float)
    assert settings.scheduler.burst_max_size == 3
    assert settings.id_formats["request_id"] == "r-{hex:4}"
    assert settings.id_formats["order_id"] == DEFAULT_ID_FORMATS["order_id"]


def test_environment_overrides_yaml(tmp_path: Path) -> None:
    path = write_config(tmp_path, "port: 8081\nscheduler:\n  tick_interval_ms: 500\n")
    env = {
        "LOGSIM_PORT": "9090",
        "LOGSIM_SEED": "7",
        "LOGSIM_TICK_INTERVAL_MS": "250",
        "LOGSIM_SERVICE_NAME": "  env-service ",
        "LOGSIM_HOST": "",
    }
    settings = load_settings(path, env=env)
    assert settings.port == 9090
    assert settings.seed == 7
    assert settings.scheduler.tick_interval_ms == 250.0
    assert settings.service_name == "env-service"
    assert settings.host == "0.0.0.0"


def test_invalid_env_value_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "missing.yaml", env={"LOGSIM_PORT": "eighty"})


def test_invalid_yaml_value_raises(tmp_path: Path) -> None:
    path = write_config(tmp_path, "scheduler:\n  tick_interval_ms: fast\n")
    with pytest.raises(ConfigError):
        load_settings(path, env={})


@pytest.mark.parametrize(
    "text",
    [
        "scheduler:\n  burst_max_size: 5.9\n",
        "scheduler:\n  max_scenarios_per_tick: true\n",
        "port: 5000.5\n",
    ],
)
def test_fractional_value_for_int_field_rejected(tmp_path: Path, text: str) -> None:
    with pytest.raises(ConfigError):
        load_settings(write_config(tmp_path, text), env={})


def test_whole_float_for_int_field_accepted(tmp_path: Path) -> None:
    path = write_config(tmp_path, "scheduler:\n  burst_max_size: 5.0\n")
    settings = load_settings(path, env={})
    assert settings.scheduler.burst_max_size == 5
    assert isinstance(settings.scheduler.burst_max_size, int)


def test_inconsistent_scheduler_rejected(tmp_path: Path) -> None:
    path = write_config(tmp_path, "scheduler:\n  burst_min_s: 90\n  burst_max_s: 30\n")
    with pytest.raises(ConfigError):
        load_settings(path, env={})


def test_scheduler_section_must_be_mapping() -> None:
    with pytest.raises(ConfigError):
        settings_from_mapping({"scheduler": [1, 2]})


def test_load_yaml_falls_back_on_garbage(tmp_path: Path) -> None:
    path = write_config(tmp_path, "key: [unclosed\n")
    assert load_yaml(path) == {}
    assert load_yaml(tmp_path / "nope.yaml", {"a": 1}) == {"a": 1}


@pytest.mark.parametrize(
    "overrides",
    [
        {"tick_interval_ms": 0.0},
        {"min_scenarios_per_tick": 0},
        {"min_scenarios_per_tick": 5, "max_scenarios_per_tick": 4},
        {"burst_min_size": 7},
        {"burst_stagger_ms": -1.0},
    ],
)
def test_scheduler_validate(overrides) -> None:
    with pytest.raises(ConfigError):
        SchedulerSettings(**overrides).validate()
