# rigsim/kernel/assemble.py
"""
ASSEMBLY: Equilibrium System for Rope Tensions
==============================================

PURPOSE:
--------
Translate a rig graph into a linear system whose solution is the vector of
segment tensions. One unknown per segment, columns in segment list order.

Two families of rows are stacked into one matrix:

1. FORCE BALANCE (weight 1.0), two rows per free node (x and y):

       Σ  T_s · û_s  +  F_ext  =  0
      s∋n

   û_s is the unit vector from the node toward the segment's OTHER end, so a
   positive tension always pulls the node toward its neighbour. F_ext is
   (0, +W) on nodes that carry the load (screen y points down), which puts
   -W on the right-hand side of the y row.

2. ROPE CONTINUITY (weight 1000.0), one row per adjacent segment pair:

       T_next - η · T_prev = 0

   η is the pulley efficiency. Walking away from the haul end, tension
   drops by a factor η at every pulley the rope wraps.

WHY ONE WEIGHTED SYSTEM?
------------------------
Continuity could be eliminated exactly and the reduced system solved. Instead
the continuity rows are simply weighted heavily. The system stays linear and
uniform for every topology, including the degenerate ones a user produces
while dragging.

USAGE:
------
    system = build_system(nodes, segments, ropes, load_weight=100.0, efficiency=0.9)
    x = solve_weighted_least_squares(system.A, system.B, system.weights)
    tensions = {sid: x[j] for sid, j in system.segment_index.items()}
"""

from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np

from ..config import CONFIG
from ..model import Node, Segment, Rope


@dataclass
class EquilibriumSystem:
    """
    Weighted linear system A·T ≈ B for the segment tensions T.

    The builder creates and owns the arrays; the solver consumes them.
    A is a C-contiguous (row-major) float64 array.

    Attributes:
    -----------
    A : np.ndarray
        Coefficients, shape (n_rows, n_unknowns)
    B : np.ndarray
        Right-hand side, shape (n_rows,)
    weights : np.ndarray
        Row weights, shape (n_rows,)
    segment_index : Dict[str, int]
        Segment id -> column in A
    free_node_ids : List[str]
        Free nodes in row order; node k owns rows 2k (x) and 2k+1 (y)
    n_force_rows : int
        Number of force-balance rows; continuity rows follow them
    """
    A: np.ndarray
    B: np.ndarray
    weights: np.ndarray
    segment_index: Dict[str, int] = field(default_factory=dict)
    free_node_ids: List[str] = field(default_factory=list)
    n_force_rows: int = 0

    @property
    def n_rows(self) -> int:
        return self.A.shape[0]

    @property
    def n_unknowns(self) -> int:
        return self.A.shape[1]

    @property
    def is_empty(self) -> bool:
        return self.n_unknowns == 0


def segment_direction(nodes_by_id: Dict[str, Node], segment: Segment, node_id: str):
    """
    Unit vector from node_id toward the other end of the segment.

    Coincident endpoints give the zero vector.
    """
    here = nodes_by_id[node_id].position
    there = nodes_by_id[segment.other(node_id)].position
    return there.sub(here).normalize()


def build_system(
    nodes: List[Node],
    segments: List[Segment],
    ropes: List[Rope],
    load_weight: float,
    efficiency: float,
    *,
    force_weight: float = None,
    continuity_weight: float = None,
) -> EquilibriumSystem:
    """
    Assemble force-balance and continuity rows for a rig.

    Parameters:
    -----------
    nodes, segments, ropes :
        The rig graph. Every segment endpoint must name an existing node;
        a dangling id raises KeyError.
    load_weight : float
        Weight hung on every load-carrying node (LOAD, PULLEY_FREE)
    efficiency : float
        Pulley efficiency η in (0, 1]
    force_weight, continuity_weight : float, optional
        Row weights; default to CONFIG (1.0 and 1000.0)

    Returns:
    --------
    EquilibriumSystem
        Empty (0 columns) when there are no segments
    """
    if force_weight is None:
        force_weight = CONFIG.force_balance_weight
    if continuity_weight is None:
        continuity_weight = CONFIG.continuity_weight

    segment_index = {seg.id: j for j, seg in enumerate(segments)}
    n_unknowns = len(segments)
    if n_unknowns == 0:
        return EquilibriumSystem(
            A=np.zeros((0, 0), dtype=float),
            B=np.zeros(0, dtype=float),
            weights=np.zeros(0, dtype=float),
        )

    nodes_by_id = {node.id: node for node in nodes}
    free_nodes = [node for node in nodes if node.type.is_free]

    n_force_rows = 2 * len(free_nodes)
    n_continuity_rows = sum(max(0, len(rope.segment_ids) - 1) for rope in ropes)
    n_rows = n_force_rows + n_continuity_rows

    A = np.zeros((n_rows, n_unknowns), dtype=float)
    B = np.zeros(n_rows, dtype=float)
    weights = np.full(n_rows, force_weight, dtype=float)

    # 1. Force balance at free nodes
    row = 0
    for node in free_nodes:
        row_x, row_y = row, row + 1
        row += 2

        B[row_x] = 0.0
        B[row_y] = -load_weight if node.type.carries_load else 0.0

        for seg in segments:
            if not seg.touches(node.id):
                continue
            j = segment_index[seg.id]
            u = segment_direction(nodes_by_id, seg, node.id)
            A[row_x, j] += u.x
            A[row_y, j] += u.y

    # 2. Rope continuity: T_next = η · T_prev
    for rope in ropes:
        for prev_id, next_id in zip(rope.segment_ids[:-1], rope.segment_ids[1:]):
            A[row, segment_index[next_id]] = 1.0
            A[row, segment_index[prev_id]] = -efficiency
            B[row] = 0.0
            weights[row] = continuity_weight
            row += 1

    return EquilibriumSystem(
        A=A,
        B=B,
        weights=weights,
        segment_index=segment_index,
        free_node_ids=[node.id for node in free_nodes],
        n_force_rows=n_force_rows,
    )
