"""Reference integrity checks for scenario files."""

from ..scenario.models import Scenario
from .base import ValidationResult


def check_reference_integrity(scenario: Scenario) -> ValidationResult:
    """Check that all scenario references resolve.

    This check reports:
    - Edge endpoints that name undefined node keys
    - Edges that connect a node to itself
    - Duplicate edge names
    - Events whose target is neither a node key nor an edge name
    - Events whose kind does not fit their target (``blocked`` on a node,
      a node disaster on an edge)

    Args:
        scenario: The parsed scenario.

    Returns:
        ValidationResult with errors for broken references.
    """
    result = ValidationResult()

    node_keys = set(scenario.get_node_keys())
    edge_names: set[str] = set()

    for edge in scenario.edges:
        label = edge.name or f"{edge.source}->{edge.target}"

        for endpoint in (edge.source, edge.target):
            if endpoint not in node_keys:
                result.add_error(
                    code="UNDEFINED_NODE_REF",
                    message=f"Edge references undefined node '{endpoint}'",
                    edge=label,
                    referenced_node=endpoint,
                )

        if edge.source == edge.target:
            result.add_error(
                code="SELF_LOOP",
                message=f"Edge connects node '{edge.source}' to itself",
                edge=label,
            )

        if edge.name:
            if edge.name in edge_names:
                result.add_error(
                    code="DUPLICATE_EDGE_NAME",
                    message=f"Edge name '{edge.name}' is used more than once",
                    edge=edge.name,
                )
            edge_names.add(edge.name)

    for event in scenario.events:
        if event.target in node_keys:
            if event.kind.targets_edges:
                result.add_error(
                    code="EVENT_KIND_MISMATCH",
                    message=f"Event '{event.kind.value}' only applies to edges",
                    node=event.target,
                )
        elif event.target in edge_names:
            if not event.kind.targets_edges:
                result.add_error(
                    code="EVENT_KIND_MISMATCH",
                    message=f"Event '{event.kind.value}' only applies to nodes",
                    edge=event.target,
                )
        else:
            result.add_error(
                code="UNDEFINED_EVENT_TARGET",
                message=f"Event targets undefined node or edge '{event.target}'",
                referenced_target=event.target,
            )

    return result
