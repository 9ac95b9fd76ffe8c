"""Diagnostics runner that orchestrates all checks."""

from pathlib import Path

from ..config import Settings
from ..network.network_graph import NetworkGraph
from ..scenario.builder import ScenarioBuild, build_engine
from ..scenario.loader import parse_scenario
from ..scenario.models import Scenario
from .base import ValidationResult
from .orphan_detector import check_orphan_nodes
from .reachability import check_source_reachability
from .reference_integrity import check_reference_integrity


def run_validators(scenario: Scenario, graph: NetworkGraph | None) -> ValidationResult:
    """Run all checks on a scenario.

    Args:
        scenario: The parsed scenario.
        graph: The network built from it, or None if it could not be built.
            Graph checks are skipped without one.

    Returns:
        Combined ValidationResult from all checks.
    """
    result = ValidationResult()

    # Reference integrity first (most fundamental)
    result.merge(check_reference_integrity(scenario))

    if graph is not None:
        result.merge(check_orphan_nodes(graph))
        result.merge(check_source_reachability(graph))

    return result


def check_scenario(
    scenario: Scenario, settings: Settings | None = None
) -> tuple[ValidationResult, ScenarioBuild | None]:
    """Check a scenario and build it when its references are sound.

    Returns:
        The diagnostics, and the build (None if reference errors prevented it).

    Raises:
        ScenarioValidationError: If the scenario settings are invalid.
    """
    references = check_reference_integrity(scenario)
    if references.has_errors:
        return references, None

    build = build_engine(scenario, settings)
    return run_validators(scenario, build.engine.graph), build


def validate_scenario_file(path: str | Path) -> ValidationResult:
    """Load and check a scenario file.

    Raises:
        ScenarioLoadError: If the file cannot be loaded.
        ScenarioValidationError: If the scenario fails schema validation.
    """
    scenario = parse_scenario(path)
    result, _ = check_scenario(scenario)
    return result
