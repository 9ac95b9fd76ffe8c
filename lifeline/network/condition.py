"""Tagged status variants for nodes and edges.

A node or edge is always in exactly one of two conditions:

- ``Derived``: the status was computed from load/capacity (or flow/max_flow)
  and is recomputed every tick.
- ``Override``: the status was injected by a disaster event and stays
  until it is explicitly cleared.
"""

from dataclasses import dataclass

from .node_types import EdgeState, NodeStatus


@dataclass(frozen=True)
class Derived:
    """Status computed from quantitative state."""

    status: NodeStatus | EdgeState

    @property
    def is_override(self) -> bool:
        return False


@dataclass(frozen=True)
class Override:
    """Status injected by a disaster event."""

    status: NodeStatus | EdgeState

    @property
    def is_override(self) -> bool:
        return True


Condition = Derived | Override
