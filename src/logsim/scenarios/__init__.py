"""Scenario library: registered stateless event generators."""

# Importing the catalog modules registers their scenarios.
from . import (  # noqa: F401
    api,
    audit,
    business,
    database,
    errors,
    infrastructure,
    notification,
    security,
    user_activity,
    worker,
)
from .base import (
    Scenario,
    ScenarioContext,
    get_scenario,
    pick_scenarios,
    register,
    registry,
    run_scenario,
    scenario,
)
from .id_generator import IdGenerator

__all__ = [
    "Scenario",
    "ScenarioContext",
    "IdGenerator",
    "get_scenario",
    "pick_scenarios",
    "register",
    "registry",
    "run_scenario",
    "scenario",
]
