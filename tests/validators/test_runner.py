"""Tests for the diagnostics runner."""

import pytest

from lifeline.scenario.errors import ScenarioLoadError
from lifeline.scenario.loader import parse_scenario, parse_scenario_from_string
from lifeline.validators.runner import check_scenario, run_validators, validate_scenario_file


class TestCheckScenario:
    def test_valid_scenario_is_built(self, minimal_scenario, settings):
        result, build = check_scenario(minimal_scenario, settings)

        assert result.is_valid
        assert not result.has_warnings
        assert build is not None
        assert build.engine.graph.node_count == 2

    def test_reference_errors_skip_build(self, examples_dir, settings):
        scenario = parse_scenario(examples_dir / "invalid" / "broken_reference.yaml")

        result, build = check_scenario(scenario, settings)

        assert build is None
        assert sorted(result.codes()) == [
            "EVENT_KIND_MISMATCH",
            "SELF_LOOP",
            "UNDEFINED_EVENT_TARGET",
            "UNDEFINED_NODE_REF",
        ]

    def test_graph_warnings(self, examples_dir, settings):
        scenario = parse_scenario(examples_dir / "invalid" / "idle_source.yaml")

        result, build = check_scenario(scenario, settings)

        assert build is not None
        assert result.is_valid
        assert sorted(result.codes()) == ["IDLE_SOURCE", "ORPHAN_NODE"]


class TestRunValidators:
    def test_without_graph_only_references(self):
        scenario = parse_scenario_from_string(
            """
nodes:
  depot: SOURCE
"""
        )

        assert run_validators(scenario, None).issues == []


class TestValidateScenarioFile:
    def test_example_files(self, examples_dir):
        assert validate_scenario_file(examples_dir / "minimal_valid.yaml").is_valid
        assert validate_scenario_file(examples_dir / "flood_response.yaml").is_valid

    def test_missing_file(self, tmp_path):
        with pytest.raises(ScenarioLoadError):
            validate_scenario_file(tmp_path / "missing.yaml")
