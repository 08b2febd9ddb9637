# tests/test_assemble.py
"""
ASSEMBLY TEST: Force-Balance and Continuity Rows
================================================

A 2:1 block and tackle small enough to check every entry by hand:

    H (haul, anchor)    A (fixed pulley)
    (400, 0)            (400, 50)
          \\             |
    s_haul \\            | s_0
            \\           |
              L (moving pulley, 400, 300)

Both strands leave L straight up, so each has direction (0, -1) from L.
"""

import numpy as np
import pytest

from rigsim.config import CONFIG
from rigsim.kernel.assemble import build_system
from rigsim.model import Node, NodeType, Segment, Rope
from rigsim.vector import Vector2


def make_two_to_one():
    nodes = [
        Node('n_anchor', Vector2(400.0, 50.0), NodeType.PULLEY_ANCHOR, sheave_count=1),
        Node('n_load', Vector2(400.0, 300.0), NodeType.PULLEY_FREE, sheave_count=1),
        Node('n_haul', Vector2(400.0, 0.0), NodeType.ANCHOR),
    ]
    segments = [
        Segment('s_0', 'n_anchor', 'n_load'),
        Segment('s_haul', 'n_load', 'n_haul'),
    ]
    ropes = [Rope('r1', ['s_haul', 's_0'])]
    return nodes, segments, ropes


def test_row_layout_and_coefficients():
    nodes, segments, ropes = make_two_to_one()

    system = build_system(nodes, segments, ropes, load_weight=100.0, efficiency=0.9)

    # One free node (2 rows) + one adjacent segment pair (1 row)
    assert system.n_rows == 3
    assert system.n_unknowns == 2
    assert system.n_force_rows == 2
    assert system.free_node_ids == ['n_load']
    assert system.segment_index == {'s_0': 0, 's_haul': 1}

    expected_A = np.array([
        [0.0, 0.0],     # x balance at L
        [-1.0, -1.0],   # y balance at L
        [1.0, -0.9],    # T(s_0) = 0.9 T(s_haul)
    ])
    np.testing.assert_allclose(system.A, expected_A, atol=1e-15)
    np.testing.assert_allclose(system.B, [0.0, -100.0, 0.0])
    np.testing.assert_allclose(system.weights, [1.0, 1.0, 1000.0])
    assert system.A.flags['C_CONTIGUOUS']


def test_anchor_nodes_get_no_rows():
    nodes, segments, ropes = make_two_to_one()
    nodes = [Node(n.id, n.position, NodeType.ANCHOR) for n in nodes]

    system = build_system(nodes, segments, ropes, 100.0, 1.0)

    assert system.n_force_rows == 0
    assert system.n_rows == 1


def test_only_load_carrying_nodes_get_weight():
    nodes = [
        Node('a', Vector2(0.0, 0.0), NodeType.ANCHOR),
        Node('ring', Vector2(0.0, 10.0), NodeType.FREE),
        Node('load', Vector2(0.0, 20.0), NodeType.LOAD),
    ]
    segments = [Segment('s1', 'a', 'ring'), Segment('s2', 'ring', 'load')]

    system = build_system(nodes, segments, [], load_weight=50.0, efficiency=1.0)

    # ring rows first, then load rows
    np.testing.assert_allclose(system.B, [0.0, 0.0, 0.0, -50.0])


def test_custom_weights_override_config():
    nodes, segments, ropes = make_two_to_one()

    system = build_system(nodes, segments, ropes, 100.0, 1.0,
                          force_weight=2.0, continuity_weight=10.0)

    np.testing.assert_allclose(system.weights, [2.0, 2.0, 10.0])
    assert CONFIG.continuity_weight == 1000.0


def test_node_type_accepts_names():
    node = Node('x', Vector2(0.0, 0.0), 'PULLEY_FREE')
    assert node.type is NodeType.PULLEY_FREE
    assert node.type.is_free and node.type.carries_load and node.type.is_pulley


def test_coincident_nodes_contribute_nothing():
    nodes = [
        Node('a', Vector2(5.0, 5.0), NodeType.ANCHOR),
        Node('load', Vector2(5.0, 5.0), NodeType.LOAD),
    ]
    segments = [Segment('s', 'a', 'load')]

    system = build_system(nodes, segments, [], 100.0, 1.0)

    np.testing.assert_array_equal(system.A, np.zeros((2, 1)))
    assert np.all(np.isfinite(system.A))


def test_empty_graph_builds_empty_system():
    system = build_system([], [], [], 100.0, 1.0)
    assert system.is_empty
    assert system.A.shape == (0, 0)


def test_single_segment_rope_has_no_continuity_rows():
    nodes, segments, _ = make_two_to_one()
    ropes = [Rope('r1', ['s_haul']), Rope('r2', ['s_0'])]

    system = build_system(nodes, segments, ropes, 100.0, 1.0)

    assert system.n_rows == system.n_force_rows == 2


def test_dangling_node_reference_raises():
    nodes = [Node('load', Vector2(0.0, 0.0), NodeType.LOAD)]
    segments = [Segment('s', 'load', 'missing')]

    with pytest.raises(KeyError):
        build_system(nodes, segments, [], 100.0, 1.0)


def test_row_weights_are_keyword_only():
    nodes, segments, ropes = make_two_to_one()

    with pytest.raises(TypeError):
        build_system(nodes, segments, ropes, 100.0, 1.0, 2.0, 10.0)
