"""Tests for source reachability checks."""

from lifeline.network.node_types import DisasterKind, NodeType
from lifeline.validators.reachability import check_source_reachability


class TestSourceReachability:
    def test_source_reaches_sink(self, engine, source_sink):
        assert check_source_reachability(engine.graph).issues == []

    def test_no_sources(self, engine):
        engine.add_node(NodeType.SINK)

        assert check_source_reachability(engine.graph).issues == []

    def test_no_sink(self, engine):
        engine.add_node(NodeType.SOURCE)
        engine.add_node(NodeType.SOURCE)

        result = check_source_reachability(engine.graph)

        assert result.codes() == ["NO_SINK"]
        assert "2 source(s)" in result.warnings[0].message

    def test_blocked_edge_idles_source(self, engine, source_sink):
        source, _, edge = source_sink
        engine.set_disaster_event(edge, DisasterKind.BLOCKED)

        result = check_source_reachability(engine.graph)

        assert result.codes() == ["IDLE_SOURCE"]
        assert result.warnings[0].details == {"node_id": source}

    def test_collapsed_relay_idles_source(self, engine):
        source = engine.add_node(NodeType.SOURCE, label="depot")
        bridge = engine.add_node(NodeType.BRIDGE)
        sink = engine.add_node(NodeType.SINK)
        engine.add_edge(source, bridge)
        engine.add_edge(bridge, sink)
        engine.set_disaster_event(bridge, DisasterKind.COLLAPSED)

        result = check_source_reachability(engine.graph)

        assert result.codes() == ["IDLE_SOURCE"]
        assert result.warnings[0].node == "depot"

    def test_edge_direction_matters(self, engine):
        source = engine.add_node(NodeType.SOURCE)
        sink = engine.add_node(NodeType.SINK)
        engine.add_edge(sink, source)

        assert check_source_reachability(engine.graph).codes() == ["IDLE_SOURCE"]

    def test_multi_hop_path(self, engine):
        source = engine.add_node(NodeType.SOURCE)
        hub = engine.add_node(NodeType.HUB)
        shelter = engine.add_node(NodeType.SHELTER)
        sink = engine.add_node(NodeType.SINK)
        engine.add_edge(source, hub)
        engine.add_edge(hub, shelter)
        engine.add_edge(shelter, sink)

        assert check_source_reachability(engine.graph).issues == []
