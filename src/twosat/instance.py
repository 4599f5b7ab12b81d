"""
Data model for 2-SAT instances.

Literals are signed integers: the magnitude identifies a variable
(1-indexed) and a negative sign encodes negation. A clause is an unordered
pair of literals stored in canonical (ascending) order, so ``(a, b)`` and
``(b, a)`` are the same clause.
"""

import numbers
import random
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from twosat.utils.exceptions import InvalidClauseError, InvalidLiteralError


def variable_of(literal: int) -> int:
    """Return the variable id a literal refers to."""
    return abs(literal)


def negate(literal: int) -> int:
    """Return the complementary literal."""
    return -literal


def literal_value(literal: int, assignment: Mapping[int, bool]) -> bool:
    """
    Evaluate a literal under an assignment.

    Args:
        literal: Signed literal
        assignment: Mapping of variable id to boolean value

    Returns:
        Truth value of the literal
    """
    value = assignment[abs(literal)]
    return value if literal > 0 else not value


@dataclass(frozen=True, order=True)
class Clause:
    """
    A disjunction of exactly two literals.

    The literals are reordered on construction so that ``first <= second``.
    """

    first: int
    second: int

    def __post_init__(self):
        for name in ("first", "second"):
            literal = getattr(self, name)
            if isinstance(literal, bool) or not isinstance(literal, numbers.Integral):
                raise InvalidLiteralError("Literal must be an integer", literal)
            if literal == 0:
                raise InvalidLiteralError("Literal must be nonzero", literal)
            object.__setattr__(self, name, int(literal))
        if self.first > self.second:
            lo, hi = self.second, self.first
            object.__setattr__(self, "first", lo)
            object.__setattr__(self, "second", hi)

    @property
    def literals(self) -> tuple[int, int]:
        return (self.first, self.second)

    @property
    def variables(self) -> frozenset[int]:
        return frozenset((abs(self.first), abs(self.second)))

    def __iter__(self) -> Iterator[int]:
        return iter(self.literals)

    def __repr__(self) -> str:
        return f"({self.first} v {self.second})"

    def evaluate(self, assignment: Mapping[int, bool]) -> bool:
        """
        Evaluate the clause under a variable assignment.

        Args:
            assignment: Mapping of variable id to boolean value

        Returns:
            True if at least one literal is true
        """
        return literal_value(self.first, assignment) or literal_value(
            self.second, assignment
        )

    def random_literal(self, rng: random.Random) -> int:
        """Pick one of the two literals uniformly at random."""
        return self.first if rng.random() < 0.5 else self.second


def _pair_to_clause(pair: Iterable[int]) -> Clause:
    literals = list(pair)
    if len(literals) != 2:
        raise InvalidClauseError("A 2-SAT clause needs exactly two literals", clause=literals)
    return Clause(*literals)


class Instance:
    """
    A 2-CNF formula: a variable count N and a set of clauses.

    Instances are immutable after construction. Clauses are deduplicated
    and iterated in canonical sorted order.
    """

    def __init__(self, num_vars: int, clauses: Iterable[Clause | tuple[int, int]] = ()):
        """
        Initialize the instance.

        Args:
            num_vars: Declared number of variables
            clauses: Clauses or literal pairs

        Raises:
            ValueError: If num_vars is negative
            InvalidLiteralError: If a literal is 0 or its magnitude exceeds num_vars
            InvalidClauseError: If a literal pair does not hold exactly two literals
        """
        if num_vars < 0:
            raise ValueError(f"Variable count must be non-negative, got {num_vars}")
        self._num_vars = num_vars

        unique = set()
        for clause in clauses:
            if not isinstance(clause, Clause):
                clause = _pair_to_clause(clause)
            for literal in clause:
                self.check_literal(literal)
            unique.add(clause)
        self._clauses = tuple(sorted(unique))

    @classmethod
    def from_pairs(cls, num_vars: int, pairs: Iterable[Iterable[int]]) -> "Instance":
        """Build an instance from an iterable of two-literal sequences."""
        return cls(num_vars, (_pair_to_clause(pair) for pair in pairs))

    def check_literal(self, literal: int) -> None:
        """
        Validate a literal against the declared variable count.

        Raises:
            InvalidLiteralError: If the literal is out of range
        """
        if literal == 0 or abs(literal) > self._num_vars:
            raise InvalidLiteralError(
                "Literal out of range", literal=literal, num_vars=self._num_vars
            )

    @property
    def num_vars(self) -> int:
        return self._num_vars

    @property
    def clauses(self) -> tuple[Clause, ...]:
        return self._clauses

    @property
    def num_clauses(self) -> int:
        return len(self._clauses)

    @property
    def is_empty(self) -> bool:
        """True for N = 0 or an empty clause set; such instances are trivially satisfiable."""
        return self._num_vars == 0 or not self._clauses

    def variables(self) -> list[int]:
        """Variables that occur in at least one clause, in ascending order."""
        return sorted({var for clause in self._clauses for var in clause.variables})

    def literal_occurrences(self) -> dict[int, list[Clause]]:
        """Map each literal to the clauses it occurs in."""
        occurrences: dict[int, list[Clause]] = {}
        for clause in self._clauses:
            for literal in set(clause.literals):
                occurrences.setdefault(literal, []).append(clause)
        return occurrences

    def unsatisfied_clauses(self, assignment: Mapping[int, bool]) -> list[Clause]:
        """Clauses that evaluate to false under the assignment."""
        return [clause for clause in self._clauses if not clause.evaluate(assignment)]

    def is_satisfied_by(self, assignment: Mapping[int, bool]) -> bool:
        """Check whether an assignment satisfies every clause."""
        return all(clause.evaluate(assignment) for clause in self._clauses)

    def __len__(self) -> int:
        return len(self._clauses)

    def __iter__(self) -> Iterator[Clause]:
        return iter(self._clauses)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Instance):
            return NotImplemented
        return self._num_vars == other._num_vars and self._clauses == other._clauses

    def __hash__(self) -> int:
        return hash((self._num_vars, self._clauses))

    def __repr__(self) -> str:
        return f"Instance(num_vars={self._num_vars}, num_clauses={len(self._clauses)})"


def model_to_assignment(model: Iterable[int]) -> dict[int, bool]:
    """Convert a signed-literal model such as ``[1, -2, 3]`` to a variable mapping."""
    return {abs(literal): literal > 0 for literal in model}


def assignment_to_model(assignment: Mapping[int, bool]) -> list[int]:
    """Convert a variable mapping to a signed-literal model sorted by variable."""
    return [var if assignment[var] else -var for var in sorted(assignment)]
