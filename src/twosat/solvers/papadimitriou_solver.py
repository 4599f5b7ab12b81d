"""
Papadimitriou's randomized 2-SAT algorithm using the unified solver interface.

The outer loop draws ceil(log2 N) fresh random assignments. From each one the
inner loop performs a bounded random walk of 2 * N^2 steps: pick an
unsatisfied clause at random, flip one of its two variables at random, and
update the unsatisfied set using only the clauses that mention the flipped
variable.

A satisfiable verdict is always correct. Running out of budget yields
``SolverStatus.UNKNOWN``: the instance is unsatisfiable with high
probability, not with certainty.
"""

import logging
import math
import random
from collections.abc import Iterator
from dataclasses import dataclass

from twosat.instance import Clause, Instance, assignment_to_model

from .base import SolverBase, SolverResult, SolverStatus
from .config import get_config
from .registry import register_solver

# Set up logging
logger = logging.getLogger(__name__)


class UnsatisfiedClauseSet:
    """
    Set of clauses with O(1) add, discard and uniform random choice.

    Members live in a list; a position index lets removal swap the last
    element into the freed slot.
    """

    def __init__(self):
        self._items: list[Clause] = []
        self._positions: dict[Clause, int] = {}

    def add(self, clause: Clause) -> None:
        if clause not in self._positions:
            self._positions[clause] = len(self._items)
            self._items.append(clause)

    def discard(self, clause: Clause) -> None:
        position = self._positions.pop(clause, None)
        if position is None:
            return
        last = self._items.pop()
        if position < len(self._items):
            self._items[position] = last
            self._positions[last] = position

    def choice(self, rng: random.Random) -> Clause:
        return self._items[rng.randrange(len(self._items))]

    def __contains__(self, clause: Clause) -> bool:
        return clause in self._positions

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Clause]:
        return iter(list(self._items))


@dataclass(frozen=True)
class PrunedInstance:
    """Result of fixing every single-polarity variable."""

    fixed: dict[int, bool]
    clauses: tuple[Clause, ...]
    occurrences: dict[int, tuple[Clause, ...]]


def prune_pure_literals(instance: Instance) -> PrunedInstance:
    """
    Fix variables that occur with only one polarity.

    Such a variable is set to satisfy every clause it appears in, and those
    clauses are dropped. This is a single pass over the instance.

    Args:
        instance: The instance to prune

    Returns:
        PrunedInstance with the fixed values, the remaining clauses and a
        variable -> clauses index over the remaining clauses
    """
    by_literal = instance.literal_occurrences()
    fixed = {
        abs(literal): literal > 0
        for literal in by_literal
        if -literal not in by_literal
    }
    remaining = tuple(
        clause
        for clause in instance
        if not any(abs(literal) in fixed for literal in clause)
    )

    occurrences: dict[int, list[Clause]] = {}
    for clause in remaining:
        for var in clause.variables:
            occurrences.setdefault(var, []).append(clause)

    return PrunedInstance(
        fixed=fixed,
        clauses=remaining,
        occurrences={var: tuple(clauses) for var, clauses in occurrences.items()},
    )


def attempt_count(num_vars: int) -> int:
    """Number of outer attempts: ceil(log2 N), and at least one."""
    if num_vars <= 1:
        return 1
    return max(1, math.ceil(math.log2(num_vars)))


@register_solver("papadimitriou")
class PapadimitriouSolver(SolverBase):
    """
    Random-walk 2-SAT engine with one-sided error.
    """

    exact = False
    configurable = ("seed", "max_attempts", "flip_budget_factor")

    def __init__(
        self,
        instance: Instance,
        seed: int | None = None,
        max_attempts: int | None = None,
        flip_budget_factor: int | None = None,
        **kwargs,
    ):
        """
        Initialize the engine.

        Args:
            instance: The Instance to decide
            seed: Random seed; None reads the configured seed
            max_attempts: Outer attempts; None means ceil(log2 N)
            flip_budget_factor: Inner loop runs factor * N^2 flips
            **kwargs: Ignored engine options
        """
        super().__init__(instance)
        config = get_config()

        self.seed = seed if seed is not None else config.get("solver.papadimitriou.seed")
        self.max_attempts = (
            max_attempts
            if max_attempts is not None
            else config.get("solver.papadimitriou.max_attempts")
        )
        self.flip_budget_factor = (
            flip_budget_factor
            if flip_budget_factor is not None
            else config.get("solver.papadimitriou.flip_budget_factor", 2)
        )
        if kwargs:
            logger.debug(f"Ignoring options for Papadimitriou solver: {sorted(kwargs)}")

        self.rng = random.Random(self.seed)

    def configure(self, config):
        super().configure(config)
        if "seed" in config:
            self.rng = random.Random(self.seed)

    @property
    def attempts(self) -> int:
        if self.max_attempts is not None:
            return max(1, int(self.max_attempts))
        return attempt_count(self.instance.num_vars)

    @property
    def flip_budget(self) -> int:
        return int(self.flip_budget_factor * self.instance.num_vars**2)

    def _random_assignment(self, pruned: PrunedInstance) -> dict[int, bool]:
        assignment = {
            var: self.rng.random() < 0.5
            for var in range(1, self.instance.num_vars + 1)
        }
        assignment.update(pruned.fixed)
        return assignment

    def _walk(
        self,
        assignment: dict[int, bool],
        unsatisfied: UnsatisfiedClauseSet,
        occurrences: dict[int, tuple[Clause, ...]],
    ) -> bool:
        """
        Inner loop: bounded random walk from one starting assignment.

        Returns:
            True if every clause became satisfied within the flip budget
        """
        for _ in range(self.flip_budget):
            if not unsatisfied:
                return True

            clause = unsatisfied.choice(self.rng)
            var = abs(clause.random_literal(self.rng))
            assignment[var] = not assignment[var]
            self.stats["flips"] += 1

            for affected in occurrences[var]:
                if affected.evaluate(assignment):
                    unsatisfied.discard(affected)
                else:
                    unsatisfied.add(affected)

            self.stats["min_unsatisfied"] = min(
                self.stats["min_unsatisfied"], len(unsatisfied)
            )

        return not unsatisfied

    def _solve(self) -> SolverResult:
        pruned = prune_pure_literals(self.instance)
        total = self.instance.num_clauses

        self.stats.update(
            {
                "flips": 0,
                "attempts": 0,
                "max_attempts": self.attempts,
                "flip_budget": self.flip_budget,
                "pruned_variables": len(pruned.fixed),
                "active_clauses": len(pruned.clauses),
                "min_unsatisfied": len(pruned.clauses),
                "seed": self.seed,
            }
        )

        for attempt in range(self.attempts):
            self.stats["attempts"] += 1
            assignment = self._random_assignment(pruned)

            # Dropped clauses hold a fixed pure literal, so only active ones can fail
            unsatisfied = UnsatisfiedClauseSet()
            for clause in self.instance.unsatisfied_clauses(assignment):
                unsatisfied.add(clause)
            self.stats["min_unsatisfied"] = min(
                self.stats["min_unsatisfied"], len(unsatisfied)
            )

            logger.debug(
                f"Attempt {attempt + 1}/{self.attempts}: "
                f"{len(unsatisfied)} of {len(pruned.clauses)} clauses unsatisfied"
            )

            if self._walk(assignment, unsatisfied, pruned.occurrences):
                self.solution = assignment_to_model(assignment)
                logger.debug(
                    f"Satisfying assignment found after {self.stats['flips']} flips"
                )
                return SolverResult(
                    status=SolverStatus.SATISFIABLE,
                    solution=self.solution,
                    satisfied_clauses=total,
                    total_clauses=total,
                    statistics=self.stats,
                )

        logger.debug(
            f"Flip budget exhausted after {self.stats['attempts']} attempts "
            f"({self.stats['flips']} flips)"
        )
        return SolverResult(
            status=SolverStatus.UNKNOWN,
            satisfied_clauses=total - self.stats["min_unsatisfied"],
            total_clauses=total,
            statistics=self.stats,
            error_message=(
                f"Flip budget exhausted after {self.stats['attempts']} attempts; "
                "probably unsatisfiable"
            ),
        )
