"""Scenario layer for seeding an engine from YAML files."""

from .builder import ScenarioBuild, build_engine, build_settings
from .errors import ScenarioLoadError, ScenarioValidationError
from .loader import load_yaml, parse_scenario, parse_scenario_from_string
from .models import Scenario, ScenarioEdge, ScenarioEvent, ScenarioNode

__all__ = [
    "ScenarioBuild",
    "build_engine",
    "build_settings",
    "ScenarioLoadError",
    "ScenarioValidationError",
    "load_yaml",
    "parse_scenario",
    "parse_scenario_from_string",
    "Scenario",
    "ScenarioEdge",
    "ScenarioEvent",
    "ScenarioNode",
]
