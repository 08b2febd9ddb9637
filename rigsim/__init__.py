# rigsim - Static equilibrium of rope rigging systems
"""
RIGSIM: Rope Rigging Tension Solver
===================================

This package provides:
- Static equilibrium of arbitrary rope/pulley graphs (weighted least squares)
- Ideal and effective mechanical advantage with pulley friction
- A closed-form skate block (carriage on skyline) solver
- Residual checks and tabular summaries of solved rigs

ARCHITECTURE:
-------------
    kernel/         Numeric core (system assembly, least squares, elimination)
    vector.py       Vector2 value type
    model.py        Rig model (Node, Segment, Rope, SimulationResult)
    config.py       Solver weights and tolerances
    solve.py        solve_equilibrium: physical solve + target-MA override
    post.py         Node resultants, residuals, DataFrame summaries
    skate.py        Skate block sub-solver
"""

from .vector import Vector2
from .model import NodeType, Node, Segment, Rope, RigStats, SimulationResult
from .config import SolverConfig, CONFIG
from .solve import solve_equilibrium, solve_physical, apply_target_ma
from .skate import solve_skate_block, SkateBlockResult

__version__ = "0.1.0"

__all__ = [
    'Vector2',
    'NodeType',
    'Node',
    'Segment',
    'Rope',
    'RigStats',
    'SimulationResult',
    'SolverConfig',
    'CONFIG',
    'solve_equilibrium',
    'solve_physical',
    'apply_target_ma',
    'solve_skate_block',
    'SkateBlockResult',
]
