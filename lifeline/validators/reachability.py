"""Source-to-sink reachability checks."""

from ..network.network_graph import NetworkGraph
from ..network.node_types import NodeType
from .base import ValidationResult


def check_source_reachability(graph: NetworkGraph) -> ValidationResult:
    """Check that every SOURCE can route flow to some SINK.

    Routing ignores blocked edges and collapsed or disabled nodes, so a
    disaster event can leave a source idle.

    Args:
        graph: The network graph to check.

    Returns:
        ValidationResult with warnings for idle sources.
    """
    result = ValidationResult()

    sources = graph.nodes_of_type(NodeType.SOURCE)
    if not sources:
        return result

    if not graph.nodes_of_type(NodeType.SINK):
        result.add_warning(
            code="NO_SINK",
            message=f"Network has {len(sources)} source(s) but no SINK to deliver to",
        )
        return result

    for source_id in sources:
        if not graph.reachable_sinks(source_id):
            label = graph.node_attr(source_id, "label")
            result.add_warning(
                code="IDLE_SOURCE",
                message=f"Source '{label}' has no open path to any SINK",
                node=label,
                node_id=source_id,
            )

    return result
