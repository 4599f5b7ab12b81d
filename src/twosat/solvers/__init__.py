"""
2-SAT decision engines with a unified interface.
"""

from .base import SolverBase, SolverResult, SolverStatus
from .config import SolverConfig, get_config, load_config
from .registry import SolverRegistry, register_solver

# Import the built-in engines so they register themselves
SolverRegistry.load_engines()
SolverRegistry.set_default(get_config().get("solver.name", "scc"))

from .papadimitriou_solver import PapadimitriouSolver  # noqa: E402
from .scc_solver import SCCSolver  # noqa: E402

__all__ = [
    "SolverBase",
    "SolverResult",
    "SolverStatus",
    "SolverRegistry",
    "register_solver",
    "get_config",
    "load_config",
    "SolverConfig",
    "SCCSolver",
    "PapadimitriouSolver",
]
