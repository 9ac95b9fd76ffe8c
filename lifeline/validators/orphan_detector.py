"""Orphan node detection."""

from ..network.network_graph import NetworkGraph
from .base import ValidationResult


def check_orphan_nodes(graph: NetworkGraph) -> ValidationResult:
    """Check for nodes with no links.

    An orphan node takes no part in flow and always reports a normal
    status, which usually means a missing road.

    Args:
        graph: The network graph to check.

    Returns:
        ValidationResult with warnings for orphan nodes.
    """
    result = ValidationResult()

    for node_id in graph.isolated_nodes():
        label = graph.node_attr(node_id, "label")
        result.add_warning(
            code="ORPHAN_NODE",
            message=f"Node '{label}' has no links to other nodes",
            node=label,
            node_id=node_id,
        )

    return result
