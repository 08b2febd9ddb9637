# rigsim/model.py
"""
RIG MODEL DEFINITIONS: Node, Segment, Rope, SimulationResult
============================================================

PURPOSE:
--------
The solver consumes a graph and returns numbers. This module defines both:

- Node:     a point in the rig (anchor, pulley, load or hauling point)
- Segment:  one straight rope strand between two nodes, one unknown tension
- Rope:     an ordered list of segments, from the HAUL end to the termination
- SimulationResult: solved tensions, node resultants and MA statistics

COORDINATES:
------------
Positions are screen coordinates: +x right, +y DOWN. Gravity on a load is
therefore (0, +W) and a rope holding a load up has a negative y direction.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from .vector import Vector2


class NodeType(Enum):
    """
    Closed set of node roles.

    Anchor-like nodes are fixed to the environment and get no force-balance
    equations. Every other node is FREE in the equilibrium sense.
    """
    ANCHOR = "ANCHOR"
    PULLEY_ANCHOR = "PULLEY_ANCHOR"
    LOAD = "LOAD"
    PULLEY_FREE = "PULLEY_FREE"
    FREE = "FREE"

    @property
    def is_anchor(self) -> bool:
        return self in (NodeType.ANCHOR, NodeType.PULLEY_ANCHOR)

    @property
    def is_free(self) -> bool:
        return not self.is_anchor

    @property
    def carries_load(self) -> bool:
        """LOAD nodes and moving pulley blocks hang the full load weight."""
        return self in (NodeType.LOAD, NodeType.PULLEY_FREE)

    @property
    def is_pulley(self) -> bool:
        return self in (NodeType.PULLEY_ANCHOR, NodeType.PULLEY_FREE)


@dataclass
class Node:
    """
    A node of the rig.

    Parameters:
    -----------
    id : str
        Unique key, referenced by Segment.node_a / node_b
    position : Vector2
        Current position. Owned by the caller (it changes while dragging);
        the solver only reads it.
    type : NodeType
        Role of the node. The enum name ("PULLEY_FREE") is accepted too.
    sheave_count : int, optional
        Number of sheaves in a block. Descriptive only.
    """
    id: str
    position: Vector2
    type: NodeType
    sheave_count: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.type, NodeType):
            self.type = NodeType(self.type)


@dataclass(frozen=True)
class Segment:
    """
    One straight rope strand between two nodes.

    The strand is undirected for the physics; its single unknown is the
    tension magnitude (>= 0).
    """
    id: str
    node_a: str
    node_b: str

    def touches(self, node_id: str) -> bool:
        return self.node_a == node_id or self.node_b == node_id

    def other(self, node_id: str) -> str:
        return self.node_b if self.node_a == node_id else self.node_a


@dataclass(frozen=True)
class Rope:
    """
    A continuous rope threaded through one or more segments.

    segment_ids runs from the HAUL (source) end to the termination.
    Consecutive segments are assumed to share the pulley they wrap.
    """
    id: str
    segment_ids: List[str]
    color: Optional[str] = None

    @property
    def haul_segment_id(self) -> Optional[str]:
        return self.segment_ids[0] if self.segment_ids else None


@dataclass(frozen=True)
class RigStats:
    haul_tension: float
    load_ref: float
    ideal_ma: float
    effective_ma: float


@dataclass
class SimulationResult:
    """
    Output of solve_equilibrium.

    Attributes:
    -----------
    tensions : Dict[str, float]
        Segment id -> tension, clamped to >= 0
    node_forces : Dict[str, Vector2]
        Node id -> resultant of incident tensions, plus gravity on LOAD nodes
    stats : RigStats
        Haul tension, reference load, ideal and effective MA
    rank_deficient : bool
        True when elimination skipped a near-zero pivot, i.e. some tension
        combination was unconstrained and reported as 0
    """
    tensions: Dict[str, float]
    node_forces: Dict[str, Vector2]
    stats: RigStats
    rank_deficient: bool = False

    @property
    def max_tension(self) -> float:
        if not self.tensions:
            return 0.0
        return max(self.tensions.values())

