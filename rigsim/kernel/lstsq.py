# rigsim/kernel/lstsq.py
"""Weighted least squares via the normal equations."""

import numpy as np

from .linalg import (
    transpose,
    multiply_matrices,
    multiply_matrix_vector,
    gaussian_eliminate,
)


def solve_weighted_least_squares(
    A: np.ndarray,
    B: np.ndarray,
    weights: np.ndarray,
    full_output: bool = False,
):
    """
    Best-fit x for the rectangular system A·x ≈ B.

    The weights multiply each row of A and each entry of B DIRECTLY (not
    their square roots) before the normal equations are formed:

        Aw = W·A,  Bw = W·B
        (Awᵗ·Aw) x = Awᵗ·Bw

    so a row's weight enters the objective squared. A weight of 1000 makes
    that row 10⁶ times as important as a weight-1 row, which is how rope
    continuity rows act as near-hard constraints.

    Parameters:
    -----------
    A : np.ndarray
        Coefficient matrix (n_rows x n_unknowns)
    B : np.ndarray
        Right-hand side (n_rows,)
    weights : np.ndarray
        Per-row weight (n_rows,)
    full_output : bool
        If True, also return the number of skipped pivots

    Returns:
    --------
    x : np.ndarray
        Solution (n_unknowns,); empty if there are no unknowns
    skipped : int
        Only when full_output=True
    """
    A = np.asarray(A, dtype=float)
    n_cols = A.shape[1] if A.ndim == 2 else 0
    if n_cols == 0:
        x = np.zeros(0, dtype=float)
        return (x, 0) if full_output else x

    w = np.asarray(weights, dtype=float)
    Aw = A * w[:, None]
    Bw = np.asarray(B, dtype=float) * w

    At = transpose(Aw)
    AtA = multiply_matrices(At, Aw)
    AtB = multiply_matrix_vector(At, Bw)

    x, skipped = gaussian_eliminate(AtA, AtB)
    if full_output:
        return x, skipped
    return x
