"""Simulation layer: mutation API, tick rules, notification and clock."""

from .clock import SimulationClock
from .engine import SimulationEngine, clamp_coord
from .flow import FlowReport, distances_to_sinks, propagate_flow
from .notifier import ChangeNotifier
from .status import (
    CONGESTION_RATIO,
    CRITICAL_RATIO,
    WARNING_RATIO,
    classify_edge_utilization,
    classify_node_ratio,
    derive_statuses,
)

__all__ = [
    "SimulationClock",
    "SimulationEngine",
    "clamp_coord",
    "FlowReport",
    "distances_to_sinks",
    "propagate_flow",
    "ChangeNotifier",
    "CONGESTION_RATIO",
    "CRITICAL_RATIO",
    "WARNING_RATIO",
    "classify_edge_utilization",
    "classify_node_ratio",
    "derive_statuses",
]
