"""Node, edge, status and disaster type definitions for the network graph."""

from enum import Enum


class NodeType(str, Enum):
    """Types of facilities in the network."""

    HOSPITAL = "HOSPITAL"
    WAREHOUSE = "WAREHOUSE"
    SOURCE = "SOURCE"
    SINK = "SINK"
    BRIDGE = "BRIDGE"
    AMBULANCE = "AMBULANCE"
    INDUSTRIAL = "INDUSTRIAL"
    VEHICLE = "VEHICLE"
    HOUSE = "HOUSE"
    BUILDING = "BUILDING"
    WATER = "WATER"
    CANAL = "CANAL"
    BEACH = "BEACH"
    PARK = "PARK"
    ZONE = "ZONE"
    HUB = "HUB"
    SHELTER = "SHELTER"


class EdgeType(str, Enum):
    """Types of links between facilities."""

    ROAD = "ROAD"
    RIVER = "RIVER"
    BRIDGE = "BRIDGE"


class NodeStatus(str, Enum):
    """Operational status of a node."""

    # Derived from load / capacity
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"

    # Injected by disaster events
    COLLAPSED = "collapsed"
    DISABLED = "disabled"
    FLOODED = "flooded"


class EdgeState(str, Enum):
    """Operational state of an edge."""

    NORMAL = "NORMAL"
    CONGESTED = "CONGESTED"
    BLOCKED = "BLOCKED"  # Injected only


class DisasterKind(str, Enum):
    """Externally injected disaster events."""

    COLLAPSED = "collapsed"
    DISABLED = "disabled"
    FLOODED = "flooded"
    BLOCKED = "blocked"

    @property
    def targets_edges(self) -> bool:
        """Whether this kind applies to edges rather than nodes."""
        return self is DisasterKind.BLOCKED


# Statuses that remove a node from routing for the tick
OFFLINE_STATUSES = frozenset({NodeStatus.COLLAPSED, NodeStatus.DISABLED})

NODE_OVERRIDES = {
    DisasterKind.COLLAPSED: NodeStatus.COLLAPSED,
    DisasterKind.DISABLED: NodeStatus.DISABLED,
    DisasterKind.FLOODED: NodeStatus.FLOODED,
}

EDGE_OVERRIDES = {
    DisasterKind.BLOCKED: EdgeState.BLOCKED,
}

DEFAULT_CAPACITY: dict[NodeType, float] = {
    NodeType.HOSPITAL: 200.0,
    NodeType.WAREHOUSE: 300.0,
    NodeType.SOURCE: 100.0,
    NodeType.SINK: 100.0,
    NodeType.BRIDGE: 80.0,
    NodeType.AMBULANCE: 20.0,
    NodeType.INDUSTRIAL: 150.0,
    NodeType.VEHICLE: 10.0,
    NodeType.HOUSE: 50.0,
    NodeType.BUILDING: 120.0,
    NodeType.WATER: 500.0,
    NodeType.CANAL: 250.0,
    NodeType.BEACH: 150.0,
    NodeType.PARK: 100.0,
    NodeType.ZONE: 200.0,
    NodeType.HUB: 250.0,
    NodeType.SHELTER: 150.0,
}
