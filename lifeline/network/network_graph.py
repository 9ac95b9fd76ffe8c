"""NetworkGraph wrapper around networkx for the logistics network."""

from typing import Any

import networkx as nx

from .condition import Condition, Derived
from .node_types import (
    OFFLINE_STATUSES,
    EdgeState,
    EdgeType,
    NodeStatus,
    NodeType,
)
from .records import EdgeView, NetworkSnapshot, NodeView

# Label tags that mark a node as part of a disaster zone regardless of status
DISTRESS_LABEL_MARKERS = ("risk: high", "botnet")


class NetworkGraph:
    """The canonical store of facilities and links.

    Wraps a networkx MultiDiGraph. Nodes are keyed by node id and edges by
    edge id, so parallel links between the same pair of facilities are
    allowed. Read accessors return frozen views; the write methods are
    meant for the simulation engine only.
    """

    def __init__(self):
        """Initialize an empty network graph."""
        self._graph = nx.MultiDiGraph()
        self._edge_index: dict[str, tuple[str, str]] = {}

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def insert_node(
        self,
        node_id: str,
        node_type: NodeType,
        x: float,
        y: float,
        capacity: float,
        label: str,
        height: float | None = None,
    ) -> None:
        """Insert a node with zero load and a derived normal status."""
        self._graph.add_node(
            node_id,
            node_type=node_type,
            x=x,
            y=y,
            capacity=capacity,
            load=0.0,
            condition=Derived(NodeStatus.NORMAL),
            label=label,
            height=height,
        )

    def insert_edge(
        self,
        edge_id: str,
        source: str,
        target: str,
        edge_type: EdgeType,
        max_flow: float,
        curvature: float | None = None,
    ) -> None:
        """Insert an edge with zero flow and a derived normal state.

        Both endpoints must already exist.
        """
        if not (self._graph.has_node(source) and self._graph.has_node(target)):
            raise KeyError(f"Edge {edge_id} endpoints must exist")

        self._graph.add_edge(
            source,
            target,
            key=edge_id,
            edge_type=edge_type,
            max_flow=max_flow,
            flow=0.0,
            condition=Derived(EdgeState.NORMAL),
            curvature=curvature,
        )
        self._edge_index[edge_id] = (source, target)

    def delete_node(self, node_id: str) -> list[str]:
        """Delete a node and every edge incident to it.

        Returns:
            The ids of the edges removed along with the node.
        """
        if not self._graph.has_node(node_id):
            return []

        removed = self.incident_edge_ids(node_id)
        for edge_id in removed:
            del self._edge_index[edge_id]
        self._graph.remove_node(node_id)
        return removed

    def delete_edge(self, edge_id: str) -> bool:
        """Delete an edge. Returns False if it did not exist."""
        endpoints = self._edge_index.pop(edge_id, None)
        if endpoints is None:
            return False
        self._graph.remove_edge(*endpoints, key=edge_id)
        return True

    def set_node_attrs(self, node_id: str, **attrs: Any) -> None:
        """Update stored attributes of a node."""
        self._graph.nodes[node_id].update(attrs)

    def set_edge_attrs(self, edge_id: str, **attrs: Any) -> None:
        """Update stored attributes of an edge."""
        source, target = self._edge_index[edge_id]
        self._graph.edges[source, target, edge_id].update(attrs)

    def node_attr(self, node_id: str, name: str) -> Any:
        """Get a single stored attribute of a node."""
        return self._graph.nodes[node_id][name]

    def edge_attr(self, edge_id: str, name: str) -> Any:
        """Get a single stored attribute of an edge."""
        source, target = self._edge_index[edge_id]
        return self._graph.edges[source, target, edge_id][name]

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def has_node(self, node_id: str) -> bool:
        return self._graph.has_node(node_id)

    def has_edge(self, edge_id: str) -> bool:
        return edge_id in self._edge_index

    @property
    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return len(self._edge_index)

    def node_ids(self) -> list[str]:
        """Get all node ids in insertion order."""
        return list(self._graph.nodes)

    def edge_ids(self) -> list[str]:
        """Get all edge ids in insertion order."""
        return list(self._edge_index)

    def endpoints(self, edge_id: str) -> tuple[str, str]:
        """Get the (source, target) pair of an edge."""
        return self._edge_index[edge_id]

    def get_node(self, node_id: str) -> NodeView | None:
        """Get a read-only view of a node, or None if it does not exist."""
        if not self._graph.has_node(node_id):
            return None
        return self._node_view(node_id, self._graph.nodes[node_id])

    def get_edge(self, edge_id: str) -> EdgeView | None:
        """Get a read-only view of an edge, or None if it does not exist."""
        endpoints = self._edge_index.get(edge_id)
        if endpoints is None:
            return None
        source, target = endpoints
        data = self._graph.edges[source, target, edge_id]
        return self._edge_view(edge_id, source, target, data)

    def list_nodes(self) -> list[NodeView]:
        """Get views of all nodes in insertion order."""
        return [
            self._node_view(node_id, data)
            for node_id, data in self._graph.nodes(data=True)
        ]

    def list_edges(self) -> list[EdgeView]:
        """Get views of all edges in insertion order."""
        return [edge for edge in map(self.get_edge, self._edge_index) if edge]

    def snapshot(self, tick: int = 0) -> NetworkSnapshot:
        """Get a consistent view of the whole network."""
        return NetworkSnapshot(
            tick=tick,
            nodes=tuple(self.list_nodes()),
            edges=tuple(self.list_edges()),
        )

    def incident_edge_ids(self, node_id: str) -> list[str]:
        """Get ids of all edges where the node is source or target."""
        if not self._graph.has_node(node_id):
            return []

        edge_ids = [key for _, _, key in self._graph.out_edges(node_id, keys=True)]
        edge_ids.extend(
            key
            for source, _, key in self._graph.in_edges(node_id, keys=True)
            if source != node_id
        )
        return edge_ids

    def edges_between(self, source: str, target: str) -> list[str]:
        """Get ids of all edges from source to target."""
        if not self._graph.has_edge(source, target):
            return []
        return list(self._graph[source][target])

    def nodes_of_type(self, node_type: NodeType) -> list[str]:
        """Get ids of all nodes of the given type."""
        return [
            node_id
            for node_id, data in self._graph.nodes(data=True)
            if data["node_type"] == node_type
        ]

    def distressed_nodes(self) -> list[NodeView]:
        """Get nodes in a disaster zone.

        A node is distressed when it is critical or collapsed, or when an
        operator has tagged its label with one of ``DISTRESS_LABEL_MARKERS``
        (case-insensitive).
        """
        return [
            node
            for node in self.list_nodes()
            if node.status in (NodeStatus.CRITICAL, NodeStatus.COLLAPSED)
            or any(marker in node.label.lower() for marker in DISTRESS_LABEL_MARKERS)
        ]

    def isolated_nodes(self) -> list[str]:
        """Get ids of nodes with no incident edges."""
        return list(nx.isolates(self._graph))

    # -------------------------------------------------------------------------
    # Routing
    # -------------------------------------------------------------------------

    def is_online(self, node_id: str) -> bool:
        """Check whether a node takes part in routing."""
        condition: Condition = self._graph.nodes[node_id]["condition"]
        return condition.status not in OFFLINE_STATUSES

    def is_blocked(self, edge_id: str) -> bool:
        """Check whether an edge is blocked by a disaster event."""
        return self.edge_attr(edge_id, "condition").status == EdgeState.BLOCKED

    def routing_view(self) -> nx.MultiDiGraph:
        """Get a view without offline nodes and blocked edges."""
        graph = self._graph

        def edge_ok(source: str, target: str, key: str) -> bool:
            condition = graph.edges[source, target, key]["condition"]
            return condition.status != EdgeState.BLOCKED

        return nx.subgraph_view(
            graph, filter_node=self.is_online, filter_edge=edge_ok
        )

    def reachable_sinks(self, node_id: str) -> set[str]:
        """Get the SINK nodes a node can route flow to.

        Args:
            node_id: The starting node id.

        Returns:
            Set of reachable SINK node ids (empty if the node is offline).
        """
        view = self.routing_view()
        if not view.has_node(node_id):
            return set()

        reachable = nx.descendants(view, node_id) | {node_id}
        return {
            other
            for other in reachable
            if view.nodes[other]["node_type"] == NodeType.SINK
        }

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _node_view(node_id: str, data: dict[str, Any]) -> NodeView:
        condition: Condition = data["condition"]
        return NodeView(
            id=node_id,
            type=data["node_type"],
            x=data["x"],
            y=data["y"],
            capacity=data["capacity"],
            load=data["load"],
            status=condition.status,
            label=data["label"],
            height=data["height"],
            overridden=condition.is_override,
        )

    @staticmethod
    def _edge_view(
        edge_id: str, source: str, target: str, data: dict[str, Any]
    ) -> EdgeView:
        condition: Condition = data["condition"]
        return EdgeView(
            id=edge_id,
            source=source,
            target=target,
            type=data["edge_type"],
            max_flow=data["max_flow"],
            flow=data["flow"],
            state=condition.status,
            curvature=data["curvature"],
            overridden=condition.is_override,
        )
