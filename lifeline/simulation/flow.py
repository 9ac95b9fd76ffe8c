"""Per-tick flow propagation from SOURCE nodes toward SINK nodes.

Flow and load are recomputed from zero every tick:

1. Collapsed/disabled nodes and BLOCKED edges are left out of routing.
2. Every routable node gets its hop distance to the nearest SINK. Flow only
   moves along edges that bring it one hop closer, so it always heads for a
   reachable SINK and never circles.
3. Each SOURCE with a path injects ``min(source_output, capacity)``.
4. Nodes are visited farthest-first. A node's load is everything that
   arrived at it. SINKs consume their load; every other node forwards at
   most its capacity, split across its outgoing lanes in proportion to each
   lane's spare capacity. Whatever cannot be forwarded is dropped.
"""

import logging
import math
from dataclasses import dataclass, field

import networkx as nx

from ..network.network_graph import NetworkGraph
from ..network.node_types import NodeType

logger = logging.getLogger(__name__)


@dataclass
class FlowReport:
    """Totals for one propagation pass."""

    generated: float = 0.0
    delivered: float = 0.0
    dropped: float = 0.0
    idle_sources: list[str] = field(default_factory=list)


def distances_to_sinks(graph: NetworkGraph) -> dict[str, int]:
    """Get the hop distance from every routable node to its nearest SINK.

    Nodes that cannot reach any SINK are absent from the result.
    """
    view = graph.routing_view()
    sinks = [
        node_id
        for node_id, data in view.nodes(data=True)
        if data["node_type"] == NodeType.SINK
    ]
    if not sinks:
        return {}

    # Walk backwards from the sinks; every edge counts as one hop.
    lengths = nx.multi_source_dijkstra_path_length(
        nx.reverse_view(view), sinks, weight=lambda u, v, d: 1
    )
    return {node_id: int(hops) for node_id, hops in lengths.items()}


def propagate_flow(graph: NetworkGraph, source_output: float) -> FlowReport:
    """Recompute edge flows and node loads for one tick.

    Args:
        graph: The network graph to update in place.
        source_output: Units each connected SOURCE injects this tick.

    Returns:
        A FlowReport with generation, delivery and overflow totals.
    """
    report = FlowReport()

    for node_id in graph.node_ids():
        graph.set_node_attrs(node_id, load=0.0)
    for edge_id in graph.edge_ids():
        graph.set_edge_attrs(edge_id, flow=0.0)

    distance = distances_to_sinks(graph)
    inbound = dict.fromkeys(distance, 0.0)

    for source_id in graph.nodes_of_type(NodeType.SOURCE):
        if source_id not in distance:
            report.idle_sources.append(source_id)
            continue
        injected = min(source_output, graph.node_attr(source_id, "capacity"))
        inbound[source_id] += injected
        report.generated += injected

    view = graph.routing_view()
    position = {node_id: index for index, node_id in enumerate(graph.node_ids())}
    order = sorted(distance, key=lambda n: (-distance[n], position[n]))

    for node_id in order:
        arriving = inbound[node_id]
        graph.set_node_attrs(node_id, load=arriving)
        if arriving <= 0:
            continue

        if graph.node_attr(node_id, "node_type") == NodeType.SINK:
            report.delivered += arriving
            continue

        budget = min(arriving, graph.node_attr(node_id, "capacity"))
        lanes = [
            (key, target)
            for _, target, key in view.out_edges(node_id, keys=True)
            if distance.get(target, math.inf) < distance[node_id]
        ]
        sent = _apportion(graph, lanes, budget, inbound)
        report.dropped += arriving - sent

    logger.debug(
        "Flow pass: generated=%.2f delivered=%.2f dropped=%.2f idle_sources=%d",
        report.generated,
        report.delivered,
        report.dropped,
        len(report.idle_sources),
    )
    return report


def _apportion(
    graph: NetworkGraph,
    lanes: list[tuple[str, str]],
    budget: float,
    inbound: dict[str, float],
) -> float:
    """Split a budget across lanes by spare capacity.

    Returns:
        The amount actually sent.
    """
    spare = {
        edge_id: graph.edge_attr(edge_id, "max_flow") - graph.edge_attr(edge_id, "flow")
        for edge_id, _ in lanes
    }
    total = sum(room for room in spare.values() if room > 0)
    if total <= 0 or budget <= 0:
        return 0.0

    send = min(budget, total)
    for edge_id, target in lanes:
        room = spare[edge_id]
        if room <= 0:
            continue
        # Fill every lane exactly when the budget covers all spare room
        amount = room if send >= total else send * room / total
        graph.set_edge_attrs(edge_id, flow=graph.edge_attr(edge_id, "flow") + amount)
        inbound[target] += amount

    return send
