# tests/test_invariants.py
"""
INVARIANT TESTS: Properties That Hold for Any Rig
=================================================

- Force balance at free nodes for layouts that are not presets
- Non-negative tensions, even for geometry a rope cannot hold
- Degenerate geometry never produces NaN
- Identical inputs give bit-identical outputs
"""

import math

import numpy as np

from rigsim import solve_equilibrium
from rigsim.model import Node, NodeType, Segment, Rope
from rigsim.post import force_balance_residuals
from rigsim.vector import Vector2


def test_asymmetric_two_cable_hang():
    """
    Load hung from two anchors by separate ropes (3-4-5 triangles):

        from L: to P = (-0.6, -0.8), to Q = (0.8, -0.6)

        x: -0.6 Tp + 0.8 Tq = 0
        y: -0.8 Tp - 0.6 Tq = -W      ->  Tp = 0.8 W, Tq = 0.6 W
    """
    W = 100.0
    nodes = [
        Node('P', Vector2(-30.0, -40.0), NodeType.ANCHOR),
        Node('Q', Vector2(40.0, -30.0), NodeType.ANCHOR),
        Node('L', Vector2(0.0, 0.0), NodeType.LOAD),
    ]
    segments = [Segment('sp', 'L', 'P'), Segment('sq', 'L', 'Q')]
    ropes = [Rope('rp', ['sp']), Rope('rq', ['sq'])]

    result = solve_equilibrium(nodes, segments, ropes, W, 1.0)

    assert np.isclose(result.tensions['sp'], 80.0, rtol=1e-9)
    assert np.isclose(result.tensions['sq'], 60.0, rtol=1e-9)
    assert result.node_forces['L'].length() < 1e-3 * W
    # Haul is the first rope's first segment
    assert np.isclose(result.stats.haul_tension, 80.0, rtol=1e-9)


def test_ring_with_three_legs_balances():
    """
    A free ring F held by two anchored ropes, with the load on a third
    strand hanging straight below it.
    """
    W = 250.0
    nodes = [
        Node('P', Vector2(0.0, 0.0), NodeType.ANCHOR),
        Node('Q', Vector2(100.0, 0.0), NodeType.ANCHOR),
        Node('F', Vector2(30.0, 40.0), NodeType.FREE),
        Node('L', Vector2(30.0, 100.0), NodeType.LOAD),
    ]
    segments = [
        Segment('fp', 'F', 'P'),
        Segment('fq', 'F', 'Q'),
        Segment('fl', 'F', 'L'),
    ]
    ropes = [Rope('r1', ['fp']), Rope('r2', ['fq']), Rope('r3', ['fl'])]

    result = solve_equilibrium(nodes, segments, ropes, W, 1.0)

    residuals = force_balance_residuals(nodes, segments, result.tensions, W)
    assert set(residuals) == {'F', 'L'}
    for node_id, r in residuals.items():
        assert r < 1e-3 * W, f"node {node_id} out of balance by {r}"
    assert np.isclose(result.tensions['fl'], W, rtol=1e-9)


def test_tensions_never_negative():
    """
    The anchor sits BELOW the load, so the rope would have to push.
    The solved value is -W; the reported tension is floored at 0.
    """
    nodes = [
        Node('L', Vector2(0.0, 0.0), NodeType.LOAD),
        Node('A', Vector2(0.0, 10.0), NodeType.ANCHOR),
    ]
    segments = [Segment('s', 'L', 'A')]
    ropes = [Rope('r', ['s'])]

    result = solve_equilibrium(nodes, segments, ropes, 100.0, 1.0)

    assert result.tensions['s'] == 0.0
    assert result.stats.haul_tension == 0.0
    assert result.stats.effective_ma == 0.0


def test_coincident_nodes_give_finite_result():
    nodes = [
        Node('A', Vector2(10.0, 10.0), NodeType.PULLEY_ANCHOR),
        Node('L', Vector2(10.0, 10.0), NodeType.PULLEY_FREE),
        Node('H', Vector2(10.0, -50.0), NodeType.ANCHOR),
    ]
    segments = [Segment('s_haul', 'L', 'H'), Segment('s_1', 'A', 'L')]
    ropes = [Rope('r1', ['s_haul', 's_1'])]

    result = solve_equilibrium(nodes, segments, ropes, 100.0, 0.9)

    for t in result.tensions.values():
        assert math.isfinite(t) and t >= 0.0
    for f in result.node_forces.values():
        assert math.isfinite(f.x) and math.isfinite(f.y)


def test_underdetermined_rig_is_flagged():
    # Two parallel strands, no rope linking them: any split is a solution
    nodes = [
        Node('A', Vector2(0.0, 0.0), NodeType.ANCHOR),
        Node('L', Vector2(0.0, 50.0), NodeType.LOAD),
    ]
    segments = [Segment('s1', 'A', 'L'), Segment('s2', 'A', 'L')]

    result = solve_equilibrium(nodes, segments, [], 100.0, 1.0)

    assert result.rank_deficient
    assert np.isclose(sum(result.tensions.values()), 100.0, rtol=1e-9)


def test_solve_is_idempotent():
    nodes = [
        Node('A', Vector2(380.0, 45.0), NodeType.PULLEY_ANCHOR),
        Node('L', Vector2(410.0, 310.0), NodeType.PULLEY_FREE),
        Node('H', Vector2(520.0, 20.0), NodeType.FREE),
    ]
    segments = [
        Segment('s_0', 'A', 'L'),
        Segment('s_1', 'L', 'A'),
        Segment('s_haul', 'A', 'H'),
    ]
    ropes = [Rope('r1', ['s_haul', 's_1', 's_0'])]

    first = solve_equilibrium(nodes, segments, ropes, 87.5, 0.75)
    second = solve_equilibrium(nodes, segments, ropes, 87.5, 0.75)

    assert first.tensions == second.tensions
    assert first.node_forces == second.node_forces
    assert first.stats == second.stats


def test_solver_does_not_move_nodes():
    nodes = [
        Node('P', Vector2(-30.0, -40.0), NodeType.ANCHOR),
        Node('L', Vector2(0.0, 0.0), NodeType.LOAD),
    ]
    before = [(n.id, n.position, n.type) for n in nodes]

    solve_equilibrium(nodes, [Segment('s', 'L', 'P')], [], 10.0, 1.0)

    assert [(n.id, n.position, n.type) for n in nodes] == before
