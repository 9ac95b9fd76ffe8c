"""Builder for seeding a SimulationEngine from a Scenario."""

from dataclasses import dataclass, field

from pydantic import ValidationError

from ..config import Settings, get_settings
from ..simulation.engine import SimulationEngine
from .errors import ScenarioValidationError
from .loader import validation_error_dicts
from .models import Scenario


@dataclass
class ScenarioBuild:
    """An engine seeded from a scenario, with scenario keys mapped to ids."""

    engine: SimulationEngine
    node_ids: dict[str, str] = field(default_factory=dict)
    edge_ids: dict[str, str] = field(default_factory=dict)

    def node(self, key: str):
        """Get the current view of a node by its scenario key."""
        return self.engine.get_node(self.node_ids[key])

    def edge(self, name: str):
        """Get the current view of an edge by its scenario name."""
        return self.engine.get_edge(self.edge_ids[name])


def build_settings(scenario: Scenario, base: Settings | None = None) -> Settings:
    """Apply a scenario's ``settings:`` overrides on top of base settings.

    Raises:
        ScenarioValidationError: If an override names an unknown setting or
            has an invalid value.
    """
    base = base or get_settings()
    if not scenario.settings:
        return base

    try:
        return Settings(**{**base.model_dump(), **scenario.settings})
    except ValidationError as e:
        errors = validation_error_dicts(e)
        for err in errors:
            err["loc"] = f"settings.{err['loc']}"
        raise ScenarioValidationError(
            f"Invalid scenario settings: {len(errors)} error(s)", errors
        ) from e


def build_engine(scenario: Scenario, settings: Settings | None = None) -> ScenarioBuild:
    """Build a SimulationEngine from a Scenario.

    Nodes are added first, then edges, then disaster events.

    Args:
        scenario: The parsed scenario.
        settings: Base settings; the scenario's overrides are applied on top.

    Returns:
        A ScenarioBuild holding the engine and key-to-id maps.

    Raises:
        ScenarioValidationError: If the scenario settings are invalid.
        InvalidReference: If an edge names an undefined node key.
        SelfLoop: If an edge connects a node to itself.
    """
    engine = SimulationEngine(build_settings(scenario, settings))
    build = ScenarioBuild(engine=engine)

    for key, node in scenario.nodes.items():
        build.node_ids[key] = engine.add_node(
            node.type,
            node.x,
            node.y,
            capacity=node.capacity,
            label=node.label if node.label is not None else key,
            height=node.height,
        )

    for edge in scenario.edges:
        edge_id = engine.add_edge(
            build.node_ids.get(edge.source, edge.source),
            build.node_ids.get(edge.target, edge.target),
            max_flow=edge.max_flow,
            edge_type=edge.type,
            curvature=edge.curvature,
        )
        if edge.name:
            build.edge_ids[edge.name] = edge_id

    for event in scenario.events:
        target_id = build.node_ids.get(event.target) or build.edge_ids.get(
            event.target, event.target
        )
        engine.set_disaster_event(target_id, event.kind)

    return build
