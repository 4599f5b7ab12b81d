"""
Functions for generating random 2-SAT instances.
"""

import numpy as np

from twosat.instance import Clause, Instance


def _signed(variables: np.ndarray, signs: np.ndarray) -> np.ndarray:
    return np.where(signs, variables, -variables)


def generate_instance(
    num_vars: int, num_clauses: int, seed: int | None = None
) -> Instance:
    """
    Generate a uniformly random 2-CNF instance.

    Each clause picks two variables (possibly the same one) and negates each
    with probability 1/2. Duplicate clauses collapse, so the instance may
    hold fewer than ``num_clauses`` clauses.

    Args:
        num_vars: Number of variables
        num_clauses: Number of clauses to draw
        seed: Random seed for reproducibility

    Returns:
        The generated Instance
    """
    if num_vars < 1:
        return Instance(max(num_vars, 0))

    rng = np.random.default_rng(seed)
    variables = rng.integers(1, num_vars + 1, size=(num_clauses, 2))
    signs = rng.random((num_clauses, 2)) < 0.5
    literals = _signed(variables, signs)

    return Instance(num_vars, (Clause(int(a), int(b)) for a, b in literals))


def generate_planted_instance(
    num_vars: int, num_clauses: int, seed: int | None = None
) -> tuple[Instance, dict[int, bool]]:
    """
    Generate a 2-CNF instance satisfied by a hidden assignment.

    Clauses are drawn uniformly and any clause falsified by the hidden
    assignment has one literal flipped, which makes it true.

    Args:
        num_vars: Number of variables
        num_clauses: Number of clauses to draw
        seed: Random seed for reproducibility

    Returns:
        Tuple of (instance, planted assignment)
    """
    if num_vars < 1:
        return Instance(max(num_vars, 0)), {}

    rng = np.random.default_rng(seed)
    hidden = rng.random(num_vars + 1) < 0.5
    variables = rng.integers(1, num_vars + 1, size=(num_clauses, 2))
    signs = rng.random((num_clauses, 2)) < 0.5

    # A literal is true when its sign matches the hidden value
    satisfied = (signs == hidden[variables]).any(axis=1)
    repair = rng.integers(0, 2, size=num_clauses)
    rows = np.flatnonzero(~satisfied)
    signs[rows, repair[rows]] = ~signs[rows, repair[rows]]

    literals = _signed(variables, signs)
    instance = Instance(num_vars, (Clause(int(a), int(b)) for a, b in literals))
    assignment = {var: bool(hidden[var]) for var in range(1, num_vars + 1)}
    return instance, assignment
