"""
BLOCK AND TACKLE DEMO
=====================

PURPOSE:
--------
Build N:1 block and tackle rigs for N = 1..max_ma, solve each one and print
the mechanical advantage table:

- ideal MA (100% efficient pulleys)
- effective MA at the chosen efficiency
- pull force needed at the haul end

With --plot, also draws effective MA against pulley efficiency, which shows
why adding sheaves stops paying off once friction is realistic.

USAGE:
------
    python demos/run_block_and_tackle.py --load 100 --efficiency 0.9
    python demos/run_block_and_tackle.py --max-ma 7 --plot
"""

import argparse

import numpy as np
import pandas as pd

from rigsim import solve_equilibrium
from rigsim.model import Node, NodeType, Segment, Rope
from rigsim.post import get_rig_summary, tensions_table
from rigsim.vector import Vector2


def make_block_and_tackle(n_lines: int):
    """
    N:1 rig with all strands vertical.

    The hauler stands straight above the moving block and holds position,
    so the haul strand is one of the N supporting strands.
    """
    nodes = [
        Node('n_anchor', Vector2(400.0, 50.0), NodeType.PULLEY_ANCHOR, sheave_count=n_lines // 2),
        Node('n_load', Vector2(400.0, 300.0), NodeType.PULLEY_FREE, sheave_count=(n_lines - 1) // 2),
        Node('n_haul', Vector2(400.0, 0.0), NodeType.ANCHOR),
    ]
    segments = [Segment('s_haul', 'n_load', 'n_haul')]
    for i in range(1, n_lines):
        segments.append(Segment(f's_{i}', 'n_anchor', 'n_load'))
    ropes = [Rope('r1', [seg.id for seg in segments])]
    return nodes, segments, ropes


def ma_table(load: float, efficiency: float, max_ma: int) -> pd.DataFrame:
    rows = []
    for n in range(1, max_ma + 1):
        nodes, segments, ropes = make_block_and_tackle(n)
        result = solve_equilibrium(nodes, segments, ropes, load, efficiency)
        summary = get_rig_summary(result, nodes, segments, ropes, efficiency)
        rows.append({
            'system': f'{n}:1',
            'ideal_ma': summary['ideal_ma'],
            'effective_ma': summary['effective_ma'],
            'pull_force': summary['haul_tension'],
            'max_tension': summary['max_tension'],
            'max_force_residual': summary['max_force_residual'],
        })
    return pd.DataFrame(rows)


def plot_efficiency_curves(load: float, max_ma: int):
    import matplotlib.pyplot as plt

    etas = np.linspace(0.5, 1.0, 11)
    plt.figure(figsize=(8, 5))
    for n in range(1, max_ma + 1):
        nodes, segments, ropes = make_block_and_tackle(n)
        ma = [solve_equilibrium(nodes, segments, ropes, load, eta).stats.effective_ma
              for eta in etas]
        plt.plot(etas * 100.0, ma, 'o-', label=f'{n}:1')

    plt.xlabel("Pulley efficiency (%)")
    plt.ylabel("Effective MA")
    plt.title("Effective mechanical advantage vs. pulley efficiency")
    plt.grid(True, alpha=0.3)
    plt.legend()
    plt.show()


def main():
    parser = argparse.ArgumentParser(description="N:1 block and tackle tension table")
    parser.add_argument('--load', type=float, default=100.0, help="Load weight (kg)")
    parser.add_argument('--efficiency', type=float, default=0.9, help="Pulley efficiency (0, 1]")
    parser.add_argument('--max-ma', type=int, default=5, help="Largest N to build")
    parser.add_argument('--plot', action='store_true', help="Plot effective MA curves")
    args = parser.parse_args()

    df = ma_table(args.load, args.efficiency, args.max_ma)

    print(f"Block and Tackle - load {args.load:.0f} kg, efficiency {args.efficiency:.0%}")
    print("=" * 60)
    print(df.to_string(index=False, float_format=lambda v: f"{v:.2f}"))
    print()

    # Strand-by-strand view of the largest rig
    nodes, segments, ropes = make_block_and_tackle(args.max_ma)
    result = solve_equilibrium(nodes, segments, ropes, args.load, args.efficiency)
    print(f"{args.max_ma}:1 strand tensions (haul end first):")
    print(tensions_table(result, segments, ropes).to_string(index=False))

    if args.plot:
        plot_efficiency_curves(args.load, args.max_ma)


if __name__ == "__main__":
    main()
