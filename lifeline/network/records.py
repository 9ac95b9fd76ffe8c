"""Read-only views of nodes and edges handed out by the graph store."""

from dataclasses import asdict, dataclass
from functools import cached_property
from typing import Any

from .node_types import EdgeState, EdgeType, NodeStatus, NodeType


@dataclass(frozen=True)
class NodeView:
    """Immutable snapshot of a node."""

    id: str
    type: NodeType
    x: float
    y: float
    capacity: float
    load: float
    status: NodeStatus
    label: str
    height: float | None = None
    overridden: bool = False

    @property
    def load_ratio(self) -> float:
        """Load as a fraction of capacity."""
        return self.load / self.capacity

    @property
    def load_percent(self) -> int:
        """Load as a rounded percentage of capacity."""
        return round(self.load_ratio * 100)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["type"] = self.type.value
        data["status"] = self.status.value
        return data


@dataclass(frozen=True)
class EdgeView:
    """Immutable snapshot of an edge."""

    id: str
    source: str
    target: str
    type: EdgeType
    max_flow: float
    flow: float
    state: EdgeState
    curvature: float | None = None
    overridden: bool = False

    @property
    def utilization(self) -> float:
        """Flow as a fraction of max_flow."""
        return self.flow / self.max_flow

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["type"] = self.type.value
        data["state"] = self.state.value
        return data


@dataclass(frozen=True)
class NetworkSnapshot:
    """A consistent view of the whole network after a tick or mutation."""

    tick: int
    nodes: tuple[NodeView, ...]
    edges: tuple[EdgeView, ...]

    @cached_property
    def _node_index(self) -> dict[str, NodeView]:
        return {node.id: node for node in self.nodes}

    @cached_property
    def _edge_index(self) -> dict[str, EdgeView]:
        return {edge.id: edge for edge in self.edges}

    def node(self, node_id: str) -> NodeView | None:
        return self._node_index.get(node_id)

    def edge(self, edge_id: str) -> EdgeView | None:
        return self._edge_index.get(edge_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tick": self.tick,
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
