"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from lifeline.config import Settings
from lifeline.network.node_types import NodeType
from lifeline.scenario.loader import parse_scenario_from_string
from lifeline.simulation.engine import SimulationEngine


@pytest.fixture
def examples_dir() -> Path:
    """Return the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def settings() -> Settings:
    """Return fixed settings, independent of the environment."""
    return Settings(
        tick_period=0.01,
        source_output=40.0,
        default_max_flow=50.0,
    )


@pytest.fixture
def engine(settings) -> SimulationEngine:
    """Return an empty engine."""
    return SimulationEngine(settings)


@pytest.fixture
def notifications(engine) -> list[int]:
    """Record one entry per change notification fired by the engine."""
    calls: list[int] = []
    engine.subscribe(lambda: calls.append(len(calls)))
    return calls


@pytest.fixture
def source_sink(engine) -> tuple[str, str, str]:
    """Return (source, sink, edge) ids for S(100) -> T(100) with max_flow 50."""
    source = engine.add_node(NodeType.SOURCE, 100, 500, capacity=100)
    sink = engine.add_node(NodeType.SINK, 900, 500, capacity=100)
    edge = engine.add_edge(source, sink, max_flow=50)
    return source, sink, edge


@pytest.fixture
def minimal_scenario_yaml() -> str:
    """Return a minimal valid scenario YAML string."""
    return """
nodes:
  depot:
    type: SOURCE
    x: 100
    y: 500
    capacity: 100
  shelter:
    type: SINK
    capacity: 100

edges:
  - from: depot
    to: shelter
    max_flow: 50
    name: main_road
"""


@pytest.fixture
def minimal_scenario(minimal_scenario_yaml):
    """Return a parsed minimal scenario."""
    return parse_scenario_from_string(minimal_scenario_yaml)
