# rigsim/kernel - Numeric core of the tension solver
"""
KERNEL: THE NUMERIC FOUNDATION
==============================

This package contains everything between a rig graph and a tension vector:

- assemble.py   Rig graph -> weighted linear system (A, B, weights)
- lstsq.py      Weighted least squares via normal equations
- linalg.py     Dense products and lenient Gaussian elimination

Nothing here raises on a singular system. Rank deficiency degrades to zero
values along the unconstrained directions instead.
"""

from .linalg import (
    transpose,
    multiply_matrices,
    multiply_matrix_vector,
    gaussian_eliminate,
    solve_gaussian,
)
from .lstsq import solve_weighted_least_squares
from .assemble import EquilibriumSystem, build_system

__all__ = [
    'transpose',
    'multiply_matrices',
    'multiply_matrix_vector',
    'gaussian_eliminate',
    'solve_gaussian',
    'solve_weighted_least_squares',
    'EquilibriumSystem',
    'build_system',
]
