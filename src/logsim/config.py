"""
Configuration for the log traffic simulator.

Settings come from three layers, later layers winning:
1. built-in defaults (the cadences and thresholds below)
2. config/config.yaml under the resources root
3. LOGSIM_* environment variables

The resources root is LOGSIM_ROOT when set; otherwise resource/ next to the
pyproject.toml when running from source. CLI flags are applied on top by the
caller.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

DEFAULT_SERVICE_NAME = "logsim"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5000

DEFAULT_ID_FORMATS = {
    "request_id": "req_{millis}_{b36:6}",
    "session_id": "sess_{millis}_{b36:6}",
    "order_id": "ORD-{millis}-{b36:4}",
    "transaction_id": "TXN-{millis}",
    "job_id": "job_{millis}_{b36:4}",
    "correlation_id": "burst_{millis}_{seq}_{hex:6}",
}


class ConfigError(ValueError):
    """Raised when a configuration value is missing or invalid."""

    pass


def get_resources_root() -> Path:
    """Return the root directory for config resources.

    Resolution order:
    1. LOGSIM_ROOT env var (must contain config/)
    2. resource/ under directory containing pyproject.toml (when running from source)
    3. logsim/resources/ next to this package
    """
    env_root = os.environ.get("LOGSIM_ROOT")
    if env_root:
        p = Path(env_root).resolve()
        if p.is_dir():
            return p
    here = Path(__file__).resolve().parent
    for candidate in [here, *here.parents]:
        if (candidate / "pyproject.toml").is_file():
            return candidate / "resource"
    return Path(__file__).resolve().parent / "resources"


CONFIG_PATH = get_resources_root() / "config" / "config.yaml"


def load_yaml(path: Path, default: Any = None) -> Any:
    """Load YAML file; return default on missing file or parse error."""
    if default is None:
        default = {}
    if not path.exists():
        return default
    try:
        with path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return default
    return data if isinstance(data, dict) else default


@dataclass(frozen=True)
class SchedulerSettings:
    """Cadences of the three continuous loops."""

    tick_interval_ms: float = 800.0
    min_scenarios_per_tick: int = 1
    max_scenarios_per_tick: int = 4
    health_interval_s: float = 10.0
    burst_min_s: float = 30.0
    burst_max_s: float = 60.0
    burst_min_size: int = 2
    burst_max_size: int = 6
    burst_stagger_ms: float = 200.0

    def validate(self) -> "SchedulerSettings":
        if self.tick_interval_ms <= 0 or self.health_interval_s <= 0:
            raise ConfigError("scheduler intervals must be positive")
        if not 1 <= self.min_scenarios_per_tick <= self.max_scenarios_per_tick:
            raise ConfigError("scheduler scenarios per tick must satisfy 1 <= min <= max")
        if not 0 < self.burst_min_s <= self.burst_max_s:
            raise ConfigError("scheduler burst period must satisfy 0 < min <= max")
        if not 1 <= self.burst_min_size <= self.burst_max_size:
            raise ConfigError("scheduler burst size must satisfy 1 <= min <= max")
        if self.burst_stagger_ms < 0:
            raise ConfigError("scheduler burst_stagger_ms must be non-negative")
        return self


@dataclass(frozen=True)
class Settings:
    """Resolved simulator settings."""

    service_name: str = DEFAULT_SERVICE_NAME
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    seed: int | None = None
    slow_request_ms: float = 1000.0
    scheduler: SchedulerSettings = field(default_factory=SchedulerSettings)
    id_formats: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ID_FORMATS))


_SCHEDULER_ENV = {
    "LOGSIM_TICK_INTERVAL_MS": ("tick_interval_ms", float),
    "LOGSIM_HEALTH_INTERVAL_S": ("health_interval_s", float),
    "LOGSIM_BURST_MIN_S": ("burst_min_s", float),
    "LOGSIM_BURST_MAX_S": ("burst_max_s", float),
    "LOGSIM_BURST_STAGGER_MS": ("burst_stagger_ms", float),
}


def _coerce(name: str, raw: Any, kind: type) -> Any:
    # int() would truncate 5.9 to 5 and read true as 1
    if kind is int and (isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer())):
        raise ConfigError(f"{name} must be int, got {raw!r}")
    try:
        return kind(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be {kind.__name__}, got {raw!r}") from None


def _scheduler_from_mapping(data: Mapping[str, Any]) -> SchedulerSettings:
    base = SchedulerSettings()
    overrides: dict[str, Any] = {}
    for f in fields(base):
        name, default = f.name, getattr(base, f.name)
        if name in data and data[name] is not None:
            overrides[name] = _coerce(f"scheduler.{name}", data[name], type(default))
    return replace(base, **overrides)


def settings_from_mapping(data: Mapping[str, Any]) -> Settings:
    """Build Settings from a parsed config.yaml mapping."""
    scheduler_raw = data.get("scheduler") or {}
    if not isinstance(scheduler_raw, Mapping):
        raise ConfigError("scheduler must be a mapping")
    http_raw = data.get("http") or {}
    if not isinstance(http_raw, Mapping):
        raise ConfigError("http must be a mapping")
    id_formats = dict(DEFAULT_ID_FORMATS)
    raw_formats = data.get("id_formats") or {}
    if not isinstance(raw_formats, Mapping):
        raise ConfigError("id_formats must be a mapping")
    id_formats.update({str(k): str(v) for k, v in raw_formats.items() if isinstance(v, str)})

    seed = data.get("seed")
    return Settings(
        service_name=str(data.get("service_name") or DEFAULT_SERVICE_NAME),
        host=str(data.get("host") or DEFAULT_HOST),
        port=_coerce("port", data.get("port", DEFAULT_PORT), int),
        seed=_coerce("seed", seed, int) if seed is not None else None,
        slow_request_ms=_coerce(
            "http.slow_request_ms", http_raw.get("slow_request_ms", 1000), float
        ),
        scheduler=_scheduler_from_mapping(scheduler_raw),
        id_formats=id_formats,
    )


def apply_env(settings: Settings, env: Mapping[str, str] | None = None) -> Settings:
    """Overlay LOGSIM_* environment variables onto settings."""
    env = os.environ if env is None else env
    top: dict[str, Any] = {}
    if env.get("LOGSIM_SERVICE_NAME", "").strip():
        top["service_name"] = env["LOGSIM_SERVICE_NAME"].strip()
    if env.get("LOGSIM_HOST", "").strip():
        top["host"] = env["LOGSIM_HOST"].strip()
    if env.get("LOGSIM_PORT", "").strip():
        top["port"] = _coerce("LOGSIM_PORT", env["LOGSIM_PORT"].strip(), int)
    if env.get("LOGSIM_SEED", "").strip():
        top["seed"] = _coerce("LOGSIM_SEED", env["LOGSIM_SEED"].strip(), int)
    if env.get("LOGSIM_SLOW_REQUEST_MS", "").strip():
        top["slow_request_ms"] = _coerce(
            "LOGSIM_SLOW_REQUEST_MS", env["LOGSIM_SLOW_REQUEST_MS"].strip(), float
        )

    sched: dict[str, Any] = {}
    for var, (name, kind) in _SCHEDULER_ENV.items():
        raw = env.get(var, "").strip()
        if raw:
            sched[name] = _coerce(var, raw, kind)
    if sched:
        top["scheduler"] = replace(settings.scheduler, **sched)
    return replace(settings, **top)


def load_settings(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Resolve settings from defaults, config.yaml and environment."""
    data = load_yaml(config_path or CONFIG_PATH)
    settings = apply_env(settings_from_mapping(data), env)
    settings.scheduler.validate()
    return settings
