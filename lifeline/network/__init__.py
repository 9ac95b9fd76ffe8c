"""Network layer: the canonical graph of facilities and links."""

from .condition import Condition, Derived, Override
from .errors import InvalidNodeType, InvalidReference, NetworkError, SelfLoop
from .network_graph import NetworkGraph
from .node_types import (
    DEFAULT_CAPACITY,
    DisasterKind,
    EdgeState,
    EdgeType,
    NodeStatus,
    NodeType,
)
from .records import EdgeView, NetworkSnapshot, NodeView

__all__ = [
    "Condition",
    "Derived",
    "Override",
    "InvalidNodeType",
    "InvalidReference",
    "NetworkError",
    "SelfLoop",
    "NetworkGraph",
    "DEFAULT_CAPACITY",
    "DisasterKind",
    "EdgeState",
    "EdgeType",
    "NodeStatus",
    "NodeType",
    "EdgeView",
    "NetworkSnapshot",
    "NodeView",
]
