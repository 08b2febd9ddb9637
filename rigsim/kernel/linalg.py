# rigsim/kernel/linalg.py
"""
DENSE LINEAR ALGEBRA: Products and Lenient Gaussian Elimination
===============================================================

PURPOSE:
--------
The tension solve needs only a handful of dense operations:

    transpose(M)                 -> Mᵗ
    multiply_matrices(A, B)      -> A·B
    multiply_matrix_vector(M, v) -> M·v
    solve_gaussian(A, b)         -> x with A·x = b

WHY NOT np.linalg.solve?
------------------------
np.linalg.solve raises LinAlgError on a singular matrix. An interactive rig
is singular all the time: a node dragged onto its neighbour, a rope that
nothing constrains, a rig with more strands than equations. The caller must
still get a displayable answer, so elimination here is LENIENT:

- A pivot below pivot_tol skips that elimination step (the column is
  treated as already eliminated)
- Back substitution writes 0 for a near-zero diagonal entry

The result along an unconstrained direction is arbitrary (zero), but it is
always finite and the call never raises.
"""

from typing import Tuple

import numpy as np

from ..config import CONFIG


def transpose(M: np.ndarray) -> np.ndarray:
    """Transpose of a dense matrix, as a new contiguous array."""
    return np.ascontiguousarray(np.asarray(M, dtype=float).T)


def multiply_matrices(A: np.ndarray, B: np.ndarray) -> np.ndarray:
    """
    Dense product A·B.

    Precondition: A.shape[1] == B.shape[0].
    """
    A = np.asarray(A, dtype=float)
    B = np.asarray(B, dtype=float)
    assert A.shape[1] == B.shape[0], \
        f"Cannot multiply {A.shape} by {B.shape}: inner dimensions differ"
    return A @ B


def multiply_matrix_vector(M: np.ndarray, v: np.ndarray) -> np.ndarray:
    M = np.asarray(M, dtype=float)
    v = np.asarray(v, dtype=float)
    assert M.shape[1] == v.shape[0], \
        f"Cannot multiply {M.shape} by vector of length {v.shape[0]}"
    return M @ v


def gaussian_eliminate(
    A: np.ndarray,
    b: np.ndarray,
    pivot_tol: float = None
) -> Tuple[np.ndarray, int]:
    """
    Solve the square system A·x = b with partial pivoting.

    ALGORITHM:
    ----------
    for each column k:
        pick the row (k..n-1) with the largest |M[i, k]|, swap it up
        if |M[k, k]| < pivot_tol: skip the column
        eliminate column k from every row below
    back-substitute, writing 0 where the diagonal is near zero

    Parameters:
    -----------
    A : np.ndarray
        Square coefficient matrix (n x n). Not modified.
    b : np.ndarray
        Right-hand side (n,). Not modified.
    pivot_tol : float, optional
        Near-zero threshold; defaults to CONFIG.pivot_tol (1e-10)

    Returns:
    --------
    x : np.ndarray
        Solution vector (n,), always finite for finite input
    skipped : int
        Number of columns whose pivot was below tolerance. Zero means the
        system had full rank as far as elimination could tell.
    """
    if pivot_tol is None:
        pivot_tol = CONFIG.pivot_tol

    x = np.array(b, dtype=float)
    n = x.shape[0]
    if n == 0:
        return np.zeros(0, dtype=float), 0

    M = np.array(A, dtype=float)
    assert M.shape == (n, n), f"Gaussian elimination needs a square matrix, got {M.shape}"

    skipped = 0

    for k in range(n):
        # argmax returns the first occurrence, so ties keep the upper row
        i_max = k + int(np.argmax(np.abs(M[k:, k])))
        if i_max != k:
            M[[k, i_max]] = M[[i_max, k]]
            x[k], x[i_max] = x[i_max], x[k]

        if abs(M[k, k]) < pivot_tol:
            skipped += 1
            continue

        f = M[k + 1:, k] / M[k, k]
        M[k + 1:, k:] -= np.outer(f, M[k, k:])
        x[k + 1:] -= f * x[k]

    result = np.zeros(n, dtype=float)
    for i in range(n - 1, -1, -1):
        s = M[i, i + 1:] @ result[i + 1:]
        if abs(M[i, i]) > pivot_tol:
            result[i] = (x[i] - s) / M[i, i]
        else:
            result[i] = 0.0

    return result, skipped


def solve_gaussian(A: np.ndarray, b: np.ndarray, pivot_tol: float = None) -> np.ndarray:
    """
    Solve A·x = b, degrading silently on singular input.

    See gaussian_eliminate for the algorithm; this variant drops the
    skipped-pivot count.
    """
    x, _ = gaussian_eliminate(A, b, pivot_tol)
    return x
