"""
SKATE BLOCK DEMO
================

Sweep the carriage across a skyline strung between a building and a tree
and print how far it sags and which control line works.

    python demos/run_skate_block.py --skyline 400 --load 100
"""

import argparse

import numpy as np
import pandas as pd

from rigsim import solve_skate_block
from rigsim.vector import Vector2


def main():
    parser = argparse.ArgumentParser(description="Skate block carriage sweep")
    parser.add_argument('--skyline', type=float, default=400.0, help="Skyline tension at the building (kg)")
    parser.add_argument('--load', type=float, default=100.0, help="Load weight (kg)")
    parser.add_argument('--efficiency', type=float, default=0.9, help="Carriage sheave efficiency")
    parser.add_argument('--steps', type=int, default=9, help="Number of carriage positions")
    args = parser.parse_args()

    building = Vector2(100.0, 100.0)
    tree = Vector2(700.0, 150.0)

    rows = []
    for x in np.linspace(building.x + 50.0, tree.x - 50.0, args.steps):
        res = solve_skate_block(building, tree, float(x), args.skyline, args.load, args.efficiency)
        rows.append({
            'carriage_x': x,
            'carriage_y': res.carriage_y,
            'sag_below_tree': res.carriage_y - tree.y,
            'skyline_A': res.tension_a,
            'control_B': res.tension_b,
            'control_C': res.tension_c,
            'converged': res.converged,
        })
    df = pd.DataFrame(rows)

    print(f"Skate Block - skyline {args.skyline:.0f} kg, load {args.load:.0f} kg, "
          f"efficiency {args.efficiency:.0%}")
    print("=" * 70)
    print(df.to_string(index=False, float_format=lambda v: f"{v:.1f}"))

    if not df['converged'].all():
        print()
        print("Some positions could not hold the load: increase the skyline tension.")


if __name__ == "__main__":
    main()
