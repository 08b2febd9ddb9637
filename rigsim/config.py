# rigsim/config.py
"""
Solver configuration and defaults.
"""

from dataclasses import dataclass


@dataclass
class SolverConfig:
    """Global solver configuration."""

    # Least-squares row weights. Continuity rows outweigh force balance so
    # that tension continuity behaves like a hard constraint.
    force_balance_weight: float = 1.0
    continuity_weight: float = 1000.0

    # Numerical thresholds
    pivot_tol: float = 1e-10
    zero_length_tol: float = 1e-12

    # |efficiency - 1| below this counts as lossless for the target-MA label
    efficiency_match_tol: float = 0.01

    # Skate block sag search
    skate_tol: float = 1e-9
    skate_max_iter: int = 200
    skate_max_sag_ratio: float = 20.0

    # A segment above overload_ratio x load is flagged in summaries
    overload_ratio: float = 2.0


# Global config instance
CONFIG = SolverConfig()


def check_efficiency(efficiency: float) -> None:
    """Raise ValueError unless 0 < efficiency <= 1."""
    if not (0.0 < efficiency <= 1.0):
        raise ValueError(f"efficiency must be in (0, 1], got {efficiency}")
