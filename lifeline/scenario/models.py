"""Pydantic models for scenario files."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..network.node_types import DisasterKind, EdgeType, NodeType


def _upper(value: Any) -> Any:
    return value.upper() if isinstance(value, str) else value


class ScenarioNode(BaseModel):
    """A facility to create."""

    key: str = ""  # Will be set from the mapping key
    type: NodeType
    x: float = 500.0
    y: float = 500.0
    capacity: float | None = None
    label: str | None = None
    height: float | None = None

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value: Any) -> Any:
        return _upper(value)


class ScenarioEdge(BaseModel):
    """A link between two scenario nodes, referenced by key."""

    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(alias="from")
    target: str = Field(alias="to")
    type: EdgeType = EdgeType.ROAD
    max_flow: float | None = None
    curvature: float | None = None
    name: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value: Any) -> Any:
        return _upper(value)


class ScenarioEvent(BaseModel):
    """A disaster applied once the network is built."""

    target: str
    kind: DisasterKind

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value


class Scenario(BaseModel):
    """Root model for a scenario YAML file."""

    settings: dict[str, Any] = Field(default_factory=dict)
    nodes: dict[str, ScenarioNode] = Field(default_factory=dict)
    edges: list[ScenarioEdge] = Field(default_factory=list)
    events: list[ScenarioEvent] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def normalize_scenario(cls, data: dict) -> dict:
        """Set node keys and expand the ``key: TYPE`` shorthand."""
        if not isinstance(data, dict):
            return data

        nodes = data.get("nodes") or {}
        if isinstance(nodes, dict):
            normalized = {}
            for key, node_data in nodes.items():
                if isinstance(node_data, str):
                    node_data = {"type": node_data}
                if isinstance(node_data, dict):
                    node_data = {**node_data, "key": str(key)}
                normalized[str(key)] = node_data
            data["nodes"] = normalized

        for list_field in ("edges", "events"):
            if data.get(list_field) is None:
                data[list_field] = []
        if data.get("settings") is None:
            data["settings"] = {}

        return data

    def get_node(self, key: str) -> ScenarioNode | None:
        return self.nodes.get(key)

    def get_node_keys(self) -> list[str]:
        return list(self.nodes.keys())

    def get_edge_names(self) -> list[str]:
        return [edge.name for edge in self.edges if edge.name]
