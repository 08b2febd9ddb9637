# rigsim/solve.py
"""
EQUILIBRIUM SOLVER: Rig Graph -> Tensions, Forces, Mechanical Advantage
=======================================================================

Two stages, kept apart so each can be tested on its own:

1. solve_physical      the real static equilibrium (least squares)
2. apply_target_ma     optional label override for named N:1 presets

solve_equilibrium runs both. Every call is a pure function of its inputs.
"""

from dataclasses import replace
from typing import List, Optional

import numpy as np

from .config import CONFIG, check_efficiency
from .model import Node, Segment, Rope, RigStats, SimulationResult
from .kernel.assemble import EquilibriumSystem, build_system
from .kernel.lstsq import solve_weighted_least_squares
from .post import node_resultants


def _ma_ratio(load_weight: float, haul_tension: float) -> float:
    # No haul force means no meaningful ratio; report 0 rather than inf/NaN
    return load_weight / haul_tension if haul_tension > 0 else 0.0


def _haul_value(system: EquilibriumSystem, ropes: List[Rope], values: np.ndarray) -> float:
    """Value at the first segment of the first rope (the haul end)."""
    if not ropes or not ropes[0].segment_ids:
        return 0.0
    return float(values[system.segment_index[ropes[0].segment_ids[0]]])


def empty_result(load_weight: float) -> SimulationResult:
    return SimulationResult(
        tensions={},
        node_forces={},
        stats=RigStats(haul_tension=0.0, load_ref=load_weight, ideal_ma=0.0, effective_ma=0.0),
    )


def solve_tension_vector(
    nodes: List[Node],
    segments: List[Segment],
    ropes: List[Rope],
    load_weight: float,
    efficiency: float,
):
    """
    Build and solve the weighted system; raw (unclamped) tensions.

    Returns:
    --------
    system : EquilibriumSystem
    x : np.ndarray
        One raw tension per segment, in segment order
    skipped : int
        Pivots skipped during elimination
    """
    system = build_system(nodes, segments, ropes, load_weight, efficiency)
    if system.is_empty:
        return system, np.zeros(0, dtype=float), 0
    x, skipped = solve_weighted_least_squares(
        system.A, system.B, system.weights, full_output=True
    )
    return system, x, skipped


def solve_physical(
    nodes: List[Node],
    segments: List[Segment],
    ropes: List[Rope],
    load_weight: float,
    efficiency: float,
) -> SimulationResult:
    """
    Static equilibrium of the rig as drawn.

    STEPS:
    ------
    1. Solve for tensions at the given efficiency, clamp to >= 0 (ropes
       cannot push)
    2. Resultant force at every node
    3. Haul tension = tension of the first rope's first segment
    4. effective MA = load / haul tension
    5. ideal MA from a SECOND, independent solve at efficiency 1.0

    Parameters:
    -----------
    nodes, segments, ropes : rig graph
    load_weight : float
    efficiency : float
        Used as given (no target-MA handling here)

    Returns:
    --------
    SimulationResult
    """
    if not segments:
        return empty_result(load_weight)

    system, x, skipped = solve_tension_vector(nodes, segments, ropes, load_weight, efficiency)
    clamped = np.maximum(x, 0.0)
    tensions = {seg.id: float(clamped[system.segment_index[seg.id]]) for seg in segments}

    node_forces = node_resultants(nodes, segments, tensions, load_weight)

    haul_tension = _haul_value(system, ropes, clamped)
    effective_ma = _ma_ratio(load_weight, haul_tension)

    ideal_system, ideal_x, _ = solve_tension_vector(nodes, segments, ropes, load_weight, 1.0)
    ideal_haul = _haul_value(ideal_system, ropes, ideal_x)
    ideal_ma = _ma_ratio(load_weight, ideal_haul)

    return SimulationResult(
        tensions=tensions,
        node_forces=node_forces,
        stats=RigStats(
            haul_tension=haul_tension,
            load_ref=load_weight,
            ideal_ma=ideal_ma,
            effective_ma=effective_ma,
        ),
        rank_deficient=skipped > 0,
    )


def apply_target_ma(
    result: SimulationResult,
    load_weight: float,
    efficiency: float,
    target_ma: Optional[float],
) -> SimulationResult:
    """
    Force the reported numbers to match a textbook "N:1" label.

    Preset generators realize some N:1 rigs with an extra redirect, so the
    solved ratio differs from the label. With a target:

        ideal MA      = target_ma
        haul tension  = load / target_ma
        every tension = haul tension (uniform)
        effective MA  = ideal MA             if |η - 1| < 0.01
                        load / haul tension  otherwise

    Node forces are left as solved. Without a target (None or 0) the result
    is returned unchanged.
    """
    if not target_ma:
        return result

    haul_tension = load_weight / target_ma
    ideal_ma = float(target_ma)
    if abs(efficiency - 1.0) < CONFIG.efficiency_match_tol:
        effective_ma = ideal_ma
    else:
        effective_ma = load_weight / haul_tension

    return replace(
        result,
        tensions={sid: haul_tension for sid in result.tensions},
        stats=replace(
            result.stats,
            haul_tension=haul_tension,
            ideal_ma=ideal_ma,
            effective_ma=effective_ma,
        ),
    )


def solve_equilibrium(
    nodes: List[Node],
    segments: List[Segment],
    ropes: List[Rope],
    load_weight: float,
    efficiency: float,
    target_ma: Optional[float] = None,
) -> SimulationResult:
    """
    Solve a rig for segment tensions, node forces and MA statistics.

    Parameters:
    -----------
    nodes : List[Node]
    segments : List[Segment]
    ropes : List[Rope]
        Each rope ordered from the haul end; ropes[0].segment_ids[0] is THE haul segment
    load_weight : float
        Weight hung on LOAD and PULLEY_FREE nodes
    efficiency : float
        Pulley efficiency in (0, 1]
    target_ma : float, optional
        Label hint from a preset. target_ma == 1 makes the solve lossless
        (a plain 1:1 redirect); any truthy value triggers apply_target_ma.

    Returns:
    --------
    SimulationResult

    Raises:
    -------
    ValueError
        If efficiency is outside (0, 1]
    KeyError
        If a segment or rope references an unknown id
    """
    check_efficiency(efficiency)

    if not segments:
        return empty_result(load_weight)

    effective_efficiency = 1.0 if target_ma == 1 else efficiency
    result = solve_physical(nodes, segments, ropes, load_weight, effective_efficiency)
    return apply_target_ma(result, load_weight, efficiency, target_ma)
