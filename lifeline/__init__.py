"""Lifeline: a simulation engine for disaster-response logistics networks."""

from .network import DisasterKind, EdgeType, NodeType
from .simulation import SimulationClock, SimulationEngine

__version__ = "0.1.0"

__all__ = [
    "DisasterKind",
    "EdgeType",
    "NodeType",
    "SimulationClock",
    "SimulationEngine",
]
