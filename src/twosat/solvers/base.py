"""
Base interface for the 2-SAT decision engines.
Defines the standardized solver interface that all engine implementations must follow.
"""

import logging
import time
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from twosat.instance import Instance

# Set up logging
logger = logging.getLogger(__name__)


class SolverStatus(Enum):
    """Enum representing the status of a solver run."""

    UNKNOWN = "unknown"
    SATISFIABLE = "satisfiable"
    UNSATISFIABLE = "unsatisfiable"


class SolverResult:
    """
    Standardized result object returned by all engines.

    ``UNKNOWN`` is only produced by inexact engines that ran out of budget;
    it is reported as a ``False`` verdict but is not a proof of
    unsatisfiability.
    """

    def __init__(
        self,
        status: SolverStatus = SolverStatus.UNKNOWN,
        engine: str = "",
        exact: bool = True,
        solution: list[int] | None = None,
        runtime: float = 0.0,
        satisfied_clauses: int = 0,
        total_clauses: int = 0,
        statistics: dict[str, Any] | None = None,
        error_message: str | None = None,
    ):
        self.status = status
        self.engine = engine
        self.exact = exact
        self.solution = solution
        self.runtime = runtime
        self.satisfied_clauses = satisfied_clauses
        self.total_clauses = total_clauses
        self.statistics = statistics or {}
        self.error_message = error_message

    @property
    def is_sat(self) -> bool:
        """Returns True if the problem is satisfiable."""
        return self.status == SolverStatus.SATISFIABLE

    @property
    def is_unsat(self) -> bool:
        """Returns True if the problem was proven unsatisfiable."""
        return self.status == SolverStatus.UNSATISFIABLE

    @property
    def is_conclusive(self) -> bool:
        """Returns True unless the engine gave up without an answer."""
        return self.status != SolverStatus.UNKNOWN

    @property
    def verdict(self) -> bool:
        """Boolean verdict; an exhausted budget counts as unsatisfiable."""
        return self.is_sat

    @property
    def satisfaction_ratio(self) -> float:
        """Returns the ratio of satisfied clauses."""
        if self.total_clauses == 0:
            return 1.0
        return self.satisfied_clauses / self.total_clauses

    def to_dict(self) -> dict[str, Any]:
        return {
            "engine": self.engine,
            "status": self.status.value,
            "verdict": self.verdict,
            "exact": self.exact,
            "runtime": self.runtime,
            "satisfied_clauses": self.satisfied_clauses,
            "total_clauses": self.total_clauses,
            "statistics": dict(self.statistics),
            "error_message": self.error_message,
        }

    def __str__(self) -> str:
        """String representation of the result."""
        status_str = str(self.status.value).upper()
        if self.status == SolverStatus.SATISFIABLE:
            return f"[{self.engine}] {status_str} ({self.satisfied_clauses}/{self.total_clauses} clauses, {self.runtime:.4f}s)"
        elif self.status == SolverStatus.UNSATISFIABLE:
            return f"[{self.engine}] {status_str} (proved in {self.runtime:.4f}s)"
        else:
            return f"[{self.engine}] {status_str} ({self.error_message}, {self.runtime:.4f}s)"


class SolverBase(ABC):
    """
    Abstract base class for 2-SAT engine implementations.
    All engine implementations must inherit from this class.

    An engine is bound to one instance. Every call to ``solve`` starts from
    fresh per-call state, so the same engine object can be solved repeatedly.
    """

    solver_name: str = "base"
    exact: bool = True
    configurable: tuple[str, ...] = ()

    def __init__(self, instance: Instance):
        self.instance = instance
        self.solution: list[int] | None = None
        self.stats: dict[str, Any] = {"solver_name": self.solver_name}

    @abstractmethod
    def _solve(self) -> SolverResult:
        """
        Run the decision procedure on a non-empty instance.

        Returns:
            SolverResult containing the verdict and statistics
        """

    def solve(self) -> SolverResult:
        """
        Decide the bound instance.

        Empty instances (no variables or no clauses) are satisfiable and are
        answered without running the engine.

        Returns:
            SolverResult containing the solution status and other information
        """
        start_time = time.time()
        self.solution = None
        self.stats = {"solver_name": self.solver_name}

        if self.instance.is_empty:
            self.stats["empty_instance"] = True
            self.solution = [var for var in range(1, self.instance.num_vars + 1)]
            result = SolverResult(
                status=SolverStatus.SATISFIABLE,
                solution=self.solution,
                total_clauses=self.instance.num_clauses,
                satisfied_clauses=self.instance.num_clauses,
                statistics=self.stats,
            )
        else:
            result = self._solve()

        result.engine = self.solver_name
        result.exact = self.exact
        result.runtime = time.time() - start_time
        self.stats["runtime"] = result.runtime
        return result

    def configure(self, config: dict[str, Any]) -> None:
        """
        Configure the engine with the given parameters.

        Args:
            config: Dictionary of configuration parameters
        """
        for key, value in config.items():
            if key in self.configurable:
                setattr(self, key, value)
                logger.debug(f"Set {key}={value} for {self.solver_name} solver")
            else:
                logger.warning(f"Unknown configuration parameter: {key}")
