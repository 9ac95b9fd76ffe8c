"""Tests for scenario loading."""

import pytest

from lifeline.network.node_types import NodeType
from lifeline.scenario.errors import ScenarioLoadError, ScenarioValidationError
from lifeline.scenario.loader import (
    load_yaml,
    parse_scenario,
    parse_scenario_from_string,
)


class TestLoadYaml:
    def test_load_valid_yaml(self, tmp_path):
        yaml_file = tmp_path / "scenario.yaml"
        yaml_file.write_text("nodes:\n  depot: SOURCE\n")

        data = load_yaml(yaml_file)
        assert data == {"nodes": {"depot": "SOURCE"}}

    def test_file_not_found(self):
        with pytest.raises(ScenarioLoadError) as exc_info:
            load_yaml("/nonexistent/scenario.yaml")
        assert "not found" in str(exc_info.value).lower()
        assert exc_info.value.path == "/nonexistent/scenario.yaml"

    def test_directory_is_rejected(self, tmp_path):
        with pytest.raises(ScenarioLoadError) as exc_info:
            load_yaml(tmp_path)
        assert "Not a file" in str(exc_info.value)

    def test_invalid_yaml(self, tmp_path):
        yaml_file = tmp_path / "broken.yaml"
        yaml_file.write_text("nodes: [unclosed")

        with pytest.raises(ScenarioLoadError) as exc_info:
            load_yaml(yaml_file)
        assert "Invalid YAML" in str(exc_info.value)

    def test_empty_file_returns_empty_dict(self, tmp_path):
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert load_yaml(yaml_file) == {}

    def test_non_mapping_at_root(self, tmp_path):
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- depot\n- shelter")

        with pytest.raises(ScenarioLoadError) as exc_info:
            load_yaml(yaml_file)
        assert "mapping" in str(exc_info.value).lower()


class TestParseScenarioFromString:
    def test_minimal(self, minimal_scenario_yaml):
        scenario = parse_scenario_from_string(minimal_scenario_yaml)

        assert scenario.get_node_keys() == ["depot", "shelter"]
        assert scenario.nodes["depot"].type == NodeType.SOURCE
        assert scenario.edges[0].source == "depot"
        assert scenario.edges[0].target == "shelter"

    def test_empty_string(self):
        scenario = parse_scenario_from_string("")

        assert scenario.nodes == {}
        assert scenario.edges == []

    def test_invalid_yaml(self):
        with pytest.raises(ScenarioLoadError):
            parse_scenario_from_string("nodes: {depot: ")

    def test_root_must_be_mapping(self):
        with pytest.raises(ScenarioLoadError):
            parse_scenario_from_string("just a string")

    def test_unknown_node_type(self):
        yaml_str = """
nodes:
  depot: SPACESHIP
"""
        with pytest.raises(ScenarioValidationError) as exc_info:
            parse_scenario_from_string(yaml_str)

        assert "1 error(s)" in str(exc_info.value)
        assert exc_info.value.errors[0]["loc"] == "nodes.depot.type"

    def test_unknown_disaster_kind(self):
        yaml_str = """
nodes:
  depot: SOURCE
events:
  - {target: depot, kind: tsunami}
"""
        with pytest.raises(ScenarioValidationError) as exc_info:
            parse_scenario_from_string(yaml_str)

        assert exc_info.value.errors[0]["loc"].startswith("events.0.kind")

    def test_edge_missing_endpoint(self):
        yaml_str = """
nodes:
  depot: SOURCE
edges:
  - {from: depot}
"""
        with pytest.raises(ScenarioValidationError) as exc_info:
            parse_scenario_from_string(yaml_str)

        locs = [err["loc"] for err in exc_info.value.errors]
        assert "edges.0.to" in locs


class TestParseScenario:
    def test_example_files_parse(self, examples_dir):
        for path in sorted(examples_dir.rglob("*.yaml")):
            scenario = parse_scenario(path)
            assert scenario.nodes, path

    def test_flood_response(self, examples_dir):
        scenario = parse_scenario(examples_dir / "flood_response.yaml")

        assert scenario.settings == {"source_output": 60}
        assert scenario.nodes["ambulance"].type == NodeType.AMBULANCE
        assert len(scenario.edges) == 7
        assert [e.target for e in scenario.events] == ["crossing", "coast_road"]
