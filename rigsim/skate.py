# rigsim/skate.py
r"""
SKATE BLOCK: Carriage Sag on a Tensioned Skyline
================================================

PURPOSE:
--------
A skate block is a carriage riding on a skyline strung between two fixed
anchors (say a building and a tree). The load hangs from the carriage.

    anchor A o-----------------------------o anchor B
               \  skyline A          /
      line B    \                   /   line C
                 \                 /
                  [   carriage    ]
                         |
                        load

- Skyline A runs from anchor A over the carriage sheave to anchor B. Its
  tension T is set at anchor A (a friction device), and drops to η·T after
  the sheave.
- Control lines B (to anchor A) and C (to anchor B) hold the carriage at a
  chosen horizontal position. They can only pull, so they take up exactly
  the horizontal imbalance of the skyline: one line is taut, the other is
  slack.
- The carriage SAGS until the vertical support equals the load.

Unlike the general solver, the carriage position is an unknown here. For a
fixed horizontal position the problem reduces to one scalar equation in the
carriage's vertical coordinate, solved by bisection on the sag.

Coordinates are screen coordinates (+y DOWN), like the rest of the package.
"""

from dataclasses import dataclass
from typing import Tuple

from .config import CONFIG, check_efficiency
from .vector import Vector2


@dataclass(frozen=True)
class SkateBlockResult:
    """
    Attributes:
    -----------
    carriage_y : float
        Vertical coordinate of the carriage at equilibrium
    tension_a : float
        Skyline tension at anchor A (the given skyline tension)
    tension_b : float
        Control line to anchor A
    tension_c : float
        Control line to anchor B
    converged : bool
        False when the load cannot be balanced inside the sag limit; the
        carriage is then reported at the nearest end of the search range
    """
    carriage_y: float
    tension_a: float
    tension_b: float
    tension_c: float
    converged: bool = True


def _control_tensions(ua: Vector2, ub: Vector2, horizontal: float) -> Tuple[float, float]:
    """
    Control-line tensions cancelling a horizontal pull on the carriage.

    The line whose anchor lies on the opposite side of the pull takes all of
    it. If both qualify, the flatter line (smaller tension) is used.
    """
    need = -horizontal
    lever_b = ua.x * need
    lever_c = ub.x * need
    if lever_b <= 0.0 and lever_c <= 0.0:
        return 0.0, 0.0
    if lever_b >= lever_c:
        return need / ua.x, 0.0
    return 0.0, need / ub.x


def _carriage_balance(
    anchor_a: Vector2,
    anchor_b: Vector2,
    carriage: Vector2,
    skyline_tension: float,
    load_weight: float,
    efficiency: float,
) -> Tuple[float, float, float]:
    """Vertical residual at the carriage and the control tensions (tb, tc)."""
    ua = anchor_a.sub(carriage).normalize()
    ub = anchor_b.sub(carriage).normalize()

    skyline = ua.scale(skyline_tension).add(ub.scale(efficiency * skyline_tension))
    tb, tc = _control_tensions(ua, ub, skyline.x)

    vertical = load_weight + skyline.y + tb * ua.y + tc * ub.y
    return vertical, tb, tc


def solve_skate_block(
    anchor_a: Vector2,
    anchor_b: Vector2,
    carriage_x: float,
    skyline_tension: float,
    load_weight: float,
    efficiency: float,
    *,
    tol: float = None,
    max_iter: int = None,
) -> SkateBlockResult:
    """
    Carriage height and line tensions for a skate block rig.

    ALGORITHM:
    ----------
    residual(y) = W + vertical components of skyline and control lines
    (positive = load wins, carriage must sag further)

    bracket y between just below the higher anchor and the sag limit
    below the lower anchor
    bisect until |residual| < tol × max(W, 1)

    Parameters:
    -----------
    anchor_a, anchor_b : Vector2
        Fixed anchor positions
    carriage_x : float
        Horizontal position the control lines hold the carriage at
    skyline_tension : float
        Skyline tension at anchor A
    load_weight : float
    efficiency : float
        Carriage sheave efficiency in (0, 1]
    tol : float, optional
        Relative force tolerance (default CONFIG.skate_tol)
    max_iter : int, optional
        Bisection limit (default CONFIG.skate_max_iter)

    Returns:
    --------
    SkateBlockResult
        Never raises for degenerate geometry; see SkateBlockResult.converged
    """
    check_efficiency(efficiency)
    if tol is None:
        tol = CONFIG.skate_tol
    if max_iter is None:
        max_iter = CONFIG.skate_max_iter

    force_tol = tol * max(load_weight, 1.0)

    span = max(
        abs(anchor_a.x - anchor_b.x),
        abs(carriage_x - anchor_a.x),
        abs(carriage_x - anchor_b.x),
        1.0,
    )
    # Search from just below the higher anchor down past the lower one
    lo = min(anchor_a.y, anchor_b.y) + span * 1e-9
    hi = max(anchor_a.y, anchor_b.y) + span * CONFIG.skate_max_sag_ratio

    def balance(y: float):
        return _carriage_balance(
            anchor_a, anchor_b, Vector2(carriage_x, y),
            skyline_tension, load_weight, efficiency,
        )

    def result(y: float, tb: float, tc: float, converged: bool) -> SkateBlockResult:
        return SkateBlockResult(
            carriage_y=y,
            tension_a=skyline_tension,
            tension_b=tb,
            tension_c=tc,
            converged=converged,
        )

    g_lo, tb, tc = balance(lo)
    if g_lo <= 0.0:
        # Support exceeds the load even with no sag
        return result(lo, tb, tc, abs(g_lo) <= force_tol)

    g_hi, tb, tc = balance(hi)
    if g_hi > 0.0:
        # Skyline too slack to hold the load inside the sag limit
        return result(hi, tb, tc, g_hi <= force_tol)

    y = 0.5 * (lo + hi)
    g, tb, tc = balance(y)
    for _ in range(max_iter):
        if abs(g) <= force_tol or hi - lo <= span * 1e-15:
            break
        if g > 0.0:
            lo = y
        else:
            hi = y
        y = 0.5 * (lo + hi)
        g, tb, tc = balance(y)

    return result(y, tb, tc, abs(g) <= force_tol)
