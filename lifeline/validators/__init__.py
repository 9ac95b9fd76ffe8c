"""Diagnostics for scenarios and network graphs."""

from .base import Severity, ValidationIssue, ValidationResult
from .orphan_detector import check_orphan_nodes
from .reachability import check_source_reachability
from .reference_integrity import check_reference_integrity
from .runner import check_scenario, run_validators, validate_scenario_file

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "check_orphan_nodes",
    "check_source_reachability",
    "check_reference_integrity",
    "check_scenario",
    "run_validators",
    "validate_scenario_file",
]
