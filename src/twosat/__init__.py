"""
twosat: deterministic and randomized decision engines for 2-SAT.
"""

from twosat.instance import Clause, Instance
from twosat.graph import ImplicationGraph, build_implication_graph
from twosat.solvers import SolverRegistry, SolverResult, SolverStatus
from twosat.decision import (
    cross_validate,
    decide_deterministic,
    decide_randomized,
    solve,
    solve_deterministic,
    solve_randomized,
)
from twosat.utils.exceptions import DecisionError, InvalidLiteralError

__version__ = "0.1.0"

__all__ = [
    "Clause",
    "Instance",
    "ImplicationGraph",
    "build_implication_graph",
    "SolverRegistry",
    "SolverResult",
    "SolverStatus",
    "solve",
    "solve_deterministic",
    "solve_randomized",
    "decide_deterministic",
    "decide_randomized",
    "cross_validate",
    "DecisionError",
    "InvalidLiteralError",
]
