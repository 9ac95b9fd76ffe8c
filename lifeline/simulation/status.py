"""Derive qualitative node and edge status from quantitative state.

Node staging (first match wins):

    override present        -> keep the injected status
    load / capacity >  0.8  -> critical
    load / capacity >  0.4  -> warning
    otherwise               -> normal

Edge staging:

    override present        -> keep BLOCKED
    flow / max_flow >= 1.0  -> CONGESTED
    otherwise               -> NORMAL
"""

from ..network.condition import Condition, Derived
from ..network.network_graph import NetworkGraph
from ..network.node_types import EdgeState, NodeStatus

WARNING_RATIO = 0.4
CRITICAL_RATIO = 0.8
CONGESTION_RATIO = 1.0


def classify_node_ratio(ratio: float) -> NodeStatus:
    """Map a load ratio onto a derived node status."""
    if ratio > CRITICAL_RATIO:
        return NodeStatus.CRITICAL
    if ratio > WARNING_RATIO:
        return NodeStatus.WARNING
    return NodeStatus.NORMAL


def classify_edge_utilization(utilization: float) -> EdgeState:
    """Map an edge utilization onto a derived edge state."""
    if utilization >= CONGESTION_RATIO:
        return EdgeState.CONGESTED
    return EdgeState.NORMAL


def node_ratio_condition(graph: NetworkGraph, node_id: str) -> Derived:
    """Classify a node by its load ratio alone, ignoring any override."""
    ratio = graph.node_attr(node_id, "load") / graph.node_attr(node_id, "capacity")
    return Derived(classify_node_ratio(ratio))


def edge_utilization_condition(graph: NetworkGraph, edge_id: str) -> Derived:
    """Classify an edge by its utilization alone, ignoring any override."""
    utilization = graph.edge_attr(edge_id, "flow") / graph.edge_attr(
        edge_id, "max_flow"
    )
    return Derived(classify_edge_utilization(utilization))


def derive_node_condition(graph: NetworkGraph, node_id: str) -> Condition:
    """Compute the condition a node should have right now."""
    condition: Condition = graph.node_attr(node_id, "condition")
    if condition.is_override:
        return condition
    return node_ratio_condition(graph, node_id)


def derive_edge_condition(graph: NetworkGraph, edge_id: str) -> Condition:
    """Compute the condition an edge should have right now."""
    condition: Condition = graph.edge_attr(edge_id, "condition")
    if condition.is_override:
        return condition
    return edge_utilization_condition(graph, edge_id)


def derive_statuses(graph: NetworkGraph) -> None:
    """Recompute the status of every node and edge in place.

    Args:
        graph: The network graph, after flow propagation for this tick.
    """
    for node_id in graph.node_ids():
        graph.set_node_attrs(node_id, condition=derive_node_condition(graph, node_id))

    for edge_id in graph.edge_ids():
        graph.set_edge_attrs(edge_id, condition=derive_edge_condition(graph, edge_id))
