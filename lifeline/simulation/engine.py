"""Simulation engine: the mutation API over the network graph."""

import itertools
import logging
import threading

from ..config import Settings, get_settings
from ..network.condition import Override
from ..network.errors import InvalidNodeType, InvalidReference, SelfLoop
from ..network.network_graph import NetworkGraph
from ..network.node_types import (
    DEFAULT_CAPACITY,
    EDGE_OVERRIDES,
    NODE_OVERRIDES,
    DisasterKind,
    EdgeType,
    NodeType,
)
from ..network.records import EdgeView, NetworkSnapshot, NodeView
from .flow import FlowReport, propagate_flow
from .notifier import ChangeNotifier, Subscriber, Unsubscribe
from .status import (
    derive_edge_condition,
    derive_node_condition,
    derive_statuses,
    edge_utilization_condition,
    node_ratio_condition,
)

logger = logging.getLogger(__name__)

COORD_MIN = 0.0
COORD_MAX = 1000.0


def clamp_coord(value: float) -> float:
    """Clamp a coordinate into the planar bounds."""
    return max(COORD_MIN, min(COORD_MAX, float(value)))


def _coerce_node_type(node_type: NodeType | str) -> NodeType:
    if isinstance(node_type, NodeType):
        return node_type
    try:
        return NodeType(str(node_type).upper())
    except ValueError:
        raise InvalidNodeType(node_type) from None


def _coerce_edge_type(edge_type: EdgeType | str) -> EdgeType:
    if isinstance(edge_type, EdgeType):
        return edge_type
    try:
        return EdgeType(str(edge_type).upper())
    except ValueError:
        logger.warning("Unknown edge type %r; using ROAD", edge_type)
        return EdgeType.ROAD


def _coerce_kind(kind: DisasterKind | str) -> DisasterKind | None:
    if isinstance(kind, DisasterKind):
        return kind
    try:
        return DisasterKind(str(kind).lower())
    except ValueError:
        logger.warning("Ignoring unknown disaster kind %r", kind)
        return None


def _positive_or(value: float | None, fallback: float) -> float:
    if value is None or value <= 0:
        return fallback
    return float(value)


class SimulationEngine:
    """Owns the network graph and serialises every change to it.

    All methods are synchronous. Each completed mutation or tick fires
    exactly one change notification; calls that change nothing (unknown
    ids, rejected edges) fire none.

    Mutations and ticks run under one engine lock. Reads are served from a
    published ``NetworkSnapshot`` that is only rebuilt while that lock is
    held, so a reader on any thread sees the state after the last completed
    operation and never a tick in progress. Callers that mutate from other
    threads while a clock runs go through ``SimulationClock.submit``.
    """

    def __init__(self, settings: Settings | None = None):
        """Initialize an engine with an empty network.

        Args:
            settings: Simulation settings. Defaults to the process settings.
        """
        self.settings = settings or get_settings()
        self._graph = NetworkGraph()
        self._notifier = ChangeNotifier()
        self._node_seq = itertools.count(1)
        self._edge_seq = itertools.count(1)
        self._tick_count = 0
        self._lock = threading.RLock()
        # None until a read rebuilds it after a change
        self._published: NetworkSnapshot | None = None

    @property
    def graph(self) -> NetworkGraph:
        """Get the live graph store.

        Only safe to touch from the engine's execution context; other
        threads should read through ``snapshot()``.
        """
        return self._graph

    @property
    def tick_count(self) -> int:
        """Number of completed ticks."""
        return self._tick_count

    # -------------------------------------------------------------------------
    # Notification
    # -------------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Unsubscribe:
        """Register a change callback; returns its unsubscribe handle."""
        return self._notifier.subscribe(callback)

    def notify(self) -> None:
        self._notifier.notify()

    def _commit(self) -> None:
        # Caller holds the lock
        self._published = None

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def snapshot(self) -> NetworkSnapshot:
        """Get a consistent view of the network as of the last operation."""
        published = self._published
        if published is None:
            with self._lock:
                published = self._published
                if published is None:
                    published = self._graph.snapshot(self._tick_count)
                    self._published = published
        return published

    def get_node(self, node_id: str) -> NodeView | None:
        return self.snapshot().node(node_id)

    def get_edge(self, edge_id: str) -> EdgeView | None:
        return self.snapshot().edge(edge_id)

    def list_nodes(self) -> list[NodeView]:
        return list(self.snapshot().nodes)

    def list_edges(self) -> list[EdgeView]:
        return list(self.snapshot().edges)

    # -------------------------------------------------------------------------
    # Nodes
    # -------------------------------------------------------------------------

    def add_node(
        self,
        node_type: NodeType | str,
        x: float = 500.0,
        y: float = 500.0,
        *,
        capacity: float | None = None,
        label: str | None = None,
        height: float | None = None,
    ) -> str:
        """Add a facility to the network.

        Args:
            node_type: One of the NodeType members (or its name).
            x: Horizontal position, clamped into [0, 1000].
            y: Vertical position, clamped into [0, 1000].
            capacity: Throughput the node sustains. Missing or non-positive
                values fall back to the type default.
            label: Display label. Defaults to ``<TYPE>_<n>``.
            height: Visual height hint.

        Returns:
            The new node id.

        Raises:
            InvalidNodeType: If the type is not a known facility type.
        """
        node_type = _coerce_node_type(node_type)
        with self._lock:
            seq = next(self._node_seq)
            node_id = f"node-{seq}"
            self._graph.insert_node(
                node_id,
                node_type,
                x=clamp_coord(x),
                y=clamp_coord(y),
                capacity=_positive_or(capacity, DEFAULT_CAPACITY[node_type]),
                label=label if label is not None else f"{node_type.value}_{seq}",
                height=height,
            )
            self._commit()

        logger.debug("Added %s node %s", node_type.value, node_id)
        self.notify()
        return node_id

    def remove_node(self, node_id: str) -> None:
        """Remove a node and every edge touching it. Unknown ids are ignored."""
        with self._lock:
            if not self._graph.has_node(node_id):
                logger.debug("remove_node: unknown id %s", node_id)
                return
            removed_edges = self._graph.delete_node(node_id)
            self._commit()

        logger.debug(
            "Removed node %s and %d incident edge(s)", node_id, len(removed_edges)
        )
        self.notify()

    def set_node_position(self, node_id: str, x: float, y: float) -> None:
        """Move a node, clamping into bounds. Unknown ids are ignored."""
        with self._lock:
            if not self._graph.has_node(node_id):
                logger.debug("set_node_position: unknown id %s", node_id)
                return
            self._graph.set_node_attrs(node_id, x=clamp_coord(x), y=clamp_coord(y))
            self._commit()

        self.notify()

    def update_node(
        self,
        node_id: str,
        *,
        label: str | None = None,
        capacity: float | None = None,
        height: float | None = None,
    ) -> None:
        """Edit the caller-owned fields of a node.

        Non-positive capacities are ignored. Unknown ids are ignored.
        """
        changes: dict[str, object] = {}
        if label is not None:
            changes["label"] = label
        if height is not None:
            changes["height"] = height
        if capacity is not None:
            if capacity > 0:
                changes["capacity"] = float(capacity)
            else:
                logger.warning("Ignoring non-positive capacity %r for %s", capacity, node_id)

        with self._lock:
            if not self._graph.has_node(node_id):
                logger.debug("update_node: unknown id %s", node_id)
                return
            if not changes:
                return

            self._graph.set_node_attrs(node_id, **changes)
            if "capacity" in changes:
                self._graph.set_node_attrs(
                    node_id, condition=derive_node_condition(self._graph, node_id)
                )
            self._commit()

        self.notify()

    # -------------------------------------------------------------------------
    # Edges
    # -------------------------------------------------------------------------

    def add_edge(
        self,
        source_id: str,
        target_id: str,
        *,
        max_flow: float | None = None,
        edge_type: EdgeType | str = EdgeType.ROAD,
        curvature: float | None = None,
    ) -> str:
        """Connect two existing nodes.

        Args:
            source_id: Node the flow leaves.
            target_id: Node the flow enters.
            max_flow: Link capacity. Missing or non-positive values fall back
                to ``settings.default_max_flow``.
            edge_type: ROAD, RIVER or BRIDGE.
            curvature: Visual curvature hint.

        Returns:
            The new edge id.

        Raises:
            InvalidReference: If either endpoint does not exist.
            SelfLoop: If source and target are the same node.
        """
        edge_type = _coerce_edge_type(edge_type)
        with self._lock:
            for node_id in (source_id, target_id):
                if not self._graph.has_node(node_id):
                    raise InvalidReference(
                        f"Edge references unknown node '{node_id}'", node_id=node_id
                    )
            if source_id == target_id:
                raise SelfLoop(
                    f"Edge cannot connect node '{source_id}' to itself",
                    node_id=source_id,
                )

            edge_id = f"edge-{next(self._edge_seq)}"
            self._graph.insert_edge(
                edge_id,
                source_id,
                target_id,
                edge_type=edge_type,
                max_flow=_positive_or(max_flow, self.settings.default_max_flow),
                curvature=curvature,
            )
            self._commit()

        logger.debug("Added edge %s: %s -> %s", edge_id, source_id, target_id)
        self.notify()
        return edge_id

    def remove_edge(self, edge_id: str) -> None:
        """Remove an edge. Unknown ids are ignored."""
        with self._lock:
            if not self._graph.delete_edge(edge_id):
                logger.debug("remove_edge: unknown id %s", edge_id)
                return
            self._commit()

        self.notify()

    def update_edge(
        self,
        edge_id: str,
        *,
        max_flow: float | None = None,
        curvature: float | None = None,
    ) -> None:
        """Edit the caller-owned fields of an edge.

        Non-positive max_flow values are ignored. Unknown ids are ignored.
        """
        changes: dict[str, object] = {}
        if curvature is not None:
            changes["curvature"] = curvature
        if max_flow is not None:
            if max_flow > 0:
                changes["max_flow"] = float(max_flow)
            else:
                logger.warning("Ignoring non-positive max_flow %r for %s", max_flow, edge_id)

        with self._lock:
            if not self._graph.has_edge(edge_id):
                logger.debug("update_edge: unknown id %s", edge_id)
                return
            if not changes:
                return

            self._graph.set_edge_attrs(edge_id, **changes)
            if "max_flow" in changes:
                self._graph.set_edge_attrs(
                    edge_id, condition=derive_edge_condition(self._graph, edge_id)
                )
            self._commit()

        self.notify()

    # -------------------------------------------------------------------------
    # Disaster events
    # -------------------------------------------------------------------------

    def set_disaster_event(self, target_id: str, kind: DisasterKind | str) -> None:
        """Inject a disaster on a node or edge.

        ``collapsed``, ``disabled`` and ``flooded`` apply to nodes; ``blocked``
        applies to edges. The injected status sticks until
        ``clear_disaster_event`` is called. A kind that does not fit the
        target, or an unknown target, is ignored.
        """
        kind = _coerce_kind(kind)
        if kind is None:
            return

        with self._lock:
            if self._graph.has_node(target_id):
                if kind not in NODE_OVERRIDES:
                    logger.warning(
                        "Disaster %s does not apply to node %s", kind.value, target_id
                    )
                    return
                self._graph.set_node_attrs(
                    target_id, condition=Override(NODE_OVERRIDES[kind])
                )
            elif self._graph.has_edge(target_id):
                if kind not in EDGE_OVERRIDES:
                    logger.warning(
                        "Disaster %s does not apply to edge %s", kind.value, target_id
                    )
                    return
                self._graph.set_edge_attrs(
                    target_id, condition=Override(EDGE_OVERRIDES[kind])
                )
            else:
                logger.debug("set_disaster_event: unknown id %s", target_id)
                return
            self._commit()

        logger.info("Disaster %s injected on %s", kind.value, target_id)
        self.notify()

    def clear_disaster_event(self, target_id: str) -> None:
        """Lift an injected disaster and re-derive the status right away."""
        with self._lock:
            if self._graph.has_node(target_id):
                if not self._graph.node_attr(target_id, "condition").is_override:
                    return
                self._graph.set_node_attrs(
                    target_id, condition=node_ratio_condition(self._graph, target_id)
                )
            elif self._graph.has_edge(target_id):
                if not self._graph.edge_attr(target_id, "condition").is_override:
                    return
                self._graph.set_edge_attrs(
                    target_id,
                    condition=edge_utilization_condition(self._graph, target_id),
                )
            else:
                logger.debug("clear_disaster_event: unknown id %s", target_id)
                return
            self._commit()

        logger.info("Disaster cleared on %s", target_id)
        self.notify()

    # -------------------------------------------------------------------------
    # Simulation
    # -------------------------------------------------------------------------

    def tick(self) -> FlowReport:
        """Run one simulation step: propagate flow, derive statuses, notify."""
        with self._lock:
            report = propagate_flow(self._graph, self.settings.source_output)
            derive_statuses(self._graph)
            self._tick_count += 1
            self._commit()

        self.notify()
        return report
