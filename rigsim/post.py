# rigsim/post.py
# node resultants, equilibrium residuals, summary tables

import numpy as np
import pandas as pd
from typing import Dict, List

from .config import CONFIG
from .model import Node, NodeType, Segment, Rope, SimulationResult
from .vector import Vector2
from .kernel.assemble import segment_direction


def node_resultants(
    nodes: List[Node],
    segments: List[Segment],
    tensions: Dict[str, float],
    load_weight: float,
) -> Dict[str, Vector2]:
    """
    Resultant force at every node.

    Sum of (unit direction to neighbour) × tension over incident segments,
    plus gravity (0, +W) on LOAD nodes.

    A moving pulley block (PULLEY_FREE) reports the bare tension sum, i.e.
    the pull of its ropes that the hung load balances.
    At an anchor it is the pull the anchor must resist.

    Parameters:
    -----------
    nodes : List[Node]
    segments : List[Segment]
    tensions : Dict[str, float]
        Segment id -> tension. Missing ids count as 0.
    load_weight : float

    Returns:
    --------
    Dict[str, Vector2]
        Node id -> resultant force
    """
    nodes_by_id = {node.id: node for node in nodes}
    forces = {}
    for node in nodes:
        force = Vector2.zero()
        if node.type is NodeType.LOAD:
            force = force.add(Vector2(0.0, load_weight))
        for seg in segments:
            if not seg.touches(node.id):
                continue
            t = tensions.get(seg.id, 0.0)
            force = force.add(segment_direction(nodes_by_id, seg, node.id).scale(t))
        forces[node.id] = force
    return forces


def force_balance_residuals(
    nodes: List[Node],
    segments: List[Segment],
    tensions: Dict[str, float],
    load_weight: float,
) -> Dict[str, float]:
    """
    Magnitude of the unbalanced force at every free node.

    Uses the same loads as the force-balance rows: the hung weight counts on
    PULLEY_FREE blocks as well as on LOAD nodes.
    """
    forces = node_resultants(nodes, segments, tensions, load_weight)
    residuals = {}
    for node in nodes:
        if not node.type.is_free:
            continue
        force = forces[node.id]
        if node.type.carries_load and node.type is not NodeType.LOAD:
            force = force.add(Vector2(0.0, load_weight))
        residuals[node.id] = force.length()
    return residuals


def max_force_residual(
    nodes: List[Node],
    segments: List[Segment],
    tensions: Dict[str, float],
    load_weight: float,
) -> float:
    residuals = force_balance_residuals(nodes, segments, tensions, load_weight)
    return max(residuals.values(), default=0.0)


def continuity_residuals(
    ropes: List[Rope],
    tensions: Dict[str, float],
    efficiency: float,
) -> Dict[str, List[float]]:
    """
    Per rope, T_next - η·T_prev for every adjacent segment pair.

    A rope of one segment has no pairs and maps to an empty list.
    """
    out = {}
    for rope in ropes:
        ids = rope.segment_ids
        out[rope.id] = [
            tensions.get(nxt, 0.0) - efficiency * tensions.get(prev, 0.0)
            for prev, nxt in zip(ids[:-1], ids[1:])
        ]
    return out


def tensions_table(
    result: SimulationResult,
    segments: List[Segment],
    ropes: List[Rope] = None,
) -> pd.DataFrame:
    """
    One row per segment: endpoints, tension, tension as a fraction of the
    load, owning rope and an overload flag (tension > overload_ratio × load).
    """
    load = result.stats.load_ref
    rope_of = {}
    for rope in ropes or []:
        for sid in rope.segment_ids:
            rope_of.setdefault(sid, rope.id)

    rows = []
    for seg in segments:
        t = result.tensions.get(seg.id, 0.0)
        rows.append({
            'segment': seg.id,
            'node_a': seg.node_a,
            'node_b': seg.node_b,
            'rope': rope_of.get(seg.id),
            'tension': t,
            'load_fraction': t / load if load else 0.0,
            'overloaded': t > CONFIG.overload_ratio * load,
        })
    return pd.DataFrame(rows, columns=[
        'segment', 'node_a', 'node_b', 'rope', 'tension', 'load_fraction', 'overloaded',
    ])


def nodes_table(result: SimulationResult, nodes: List[Node]) -> pd.DataFrame:
    rows = []
    for node in nodes:
        f = result.node_forces.get(node.id, Vector2.zero())
        rows.append({
            'node': node.id,
            'type': node.type.value,
            'fx': f.x,
            'fy': f.y,
            'magnitude': f.length(),
        })
    return pd.DataFrame(rows, columns=['node', 'type', 'fx', 'fy', 'magnitude'])


def get_rig_summary(
    result: SimulationResult,
    nodes: List[Node],
    segments: List[Segment],
    ropes: List[Rope],
    efficiency: float,
) -> Dict[str, float]:
    """
    Headline numbers for a solved rig.

    Returns:
    --------
    Dict with keys:
        haul_tension, load_ref, ideal_ma, effective_ma : from result.stats
        max_tension : largest segment tension
        overloaded : max_tension > overload_ratio × load
        max_force_residual : worst force imbalance at a free node
        max_continuity_residual : worst |T_next - η·T_prev| over all ropes
        rank_deficient : elimination skipped a pivot
    """
    stats = result.stats
    cont = continuity_residuals(ropes, result.tensions, efficiency)
    all_cont = [abs(r) for values in cont.values() for r in values]
    return {
        'haul_tension': stats.haul_tension,
        'load_ref': stats.load_ref,
        'ideal_ma': stats.ideal_ma,
        'effective_ma': stats.effective_ma,
        'max_tension': result.max_tension,
        'overloaded': bool(result.max_tension > CONFIG.overload_ratio * stats.load_ref),
        'max_force_residual': max_force_residual(nodes, segments, result.tensions, stats.load_ref),
        'max_continuity_residual': float(np.max(all_cont)) if all_cont else 0.0,
        'rank_deficient': result.rank_deficient,
    }
