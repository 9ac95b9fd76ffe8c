"""Tests for scenario models."""

import pytest
from pydantic import ValidationError

from lifeline.network.node_types import DisasterKind, EdgeType, NodeType
from lifeline.scenario.models import Scenario, ScenarioEdge, ScenarioEvent, ScenarioNode


class TestScenarioNode:
    def test_defaults(self):
        node = ScenarioNode(type="HUB")

        assert node.type == NodeType.HUB
        assert (node.x, node.y) == (500.0, 500.0)
        assert node.capacity is None
        assert node.label is None

    def test_type_is_case_insensitive(self):
        assert ScenarioNode(type="hospital").type == NodeType.HOSPITAL

    def test_unknown_type(self):
        with pytest.raises(ValidationError):
            ScenarioNode(type="SPACESHIP")


class TestScenarioEdge:
    def test_from_and_to_aliases(self):
        edge = ScenarioEdge.model_validate({"from": "a", "to": "b"})

        assert edge.source == "a"
        assert edge.target == "b"
        assert edge.type == EdgeType.ROAD

    def test_field_names_also_accepted(self):
        edge = ScenarioEdge(source="a", target="b", type="river")

        assert edge.type == EdgeType.RIVER


class TestScenarioEvent:
    def test_kind_is_case_insensitive(self):
        event = ScenarioEvent(target="bridge", kind="COLLAPSED")

        assert event.kind == DisasterKind.COLLAPSED


class TestScenario:
    def test_keys_are_set_from_mapping(self):
        scenario = Scenario.model_validate(
            {"nodes": {"depot": {"type": "SOURCE"}, "shelter": {"type": "SINK"}}}
        )

        assert scenario.nodes["depot"].key == "depot"
        assert scenario.get_node("shelter").key == "shelter"
        assert scenario.get_node("missing") is None

    def test_type_shorthand(self):
        scenario = Scenario.model_validate({"nodes": {"depot": "source"}})

        assert scenario.nodes["depot"].type == NodeType.SOURCE
        assert scenario.nodes["depot"].key == "depot"

    def test_null_sections_become_empty(self):
        scenario = Scenario.model_validate(
            {"settings": None, "nodes": None, "edges": None, "events": None}
        )

        assert scenario.settings == {}
        assert scenario.nodes == {}
        assert scenario.edges == []
        assert scenario.events == []

    def test_numeric_keys_become_strings(self):
        scenario = Scenario.model_validate({"nodes": {7: "HUB"}})

        assert scenario.get_node_keys() == ["7"]

    def test_edge_names(self):
        scenario = Scenario.model_validate(
            {
                "nodes": {"a": "SOURCE", "b": "SINK"},
                "edges": [
                    {"from": "a", "to": "b", "name": "main"},
                    {"from": "a", "to": "b"},
                ],
            }
        )

        assert scenario.get_edge_names() == ["main"]
