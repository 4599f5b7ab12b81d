"""
Entry points for deciding 2-SAT instances.

``decide_*`` return a plain boolean verdict. ``solve_*`` return the full
:class:`~twosat.solvers.base.SolverResult`, which also says which engine
produced the verdict and whether a ``False`` is exact or only the
randomized engine running out of budget.
"""

import logging
from typing import Any

from twosat.instance import Instance
from twosat.solvers import SolverRegistry, SolverResult
from twosat.utils.exceptions import VerdictMismatchError

# Set up logging
logger = logging.getLogger(__name__)


def solve(instance: Instance, engine: str | None = None, **kwargs) -> SolverResult:
    """
    Decide an instance with a registered engine.

    Args:
        instance: The instance to decide
        engine: Registered engine name, or None for the configured default
        **kwargs: Engine options (e.g. ``seed`` for the randomized engine)

    Returns:
        SolverResult of a fresh engine run
    """
    solver = SolverRegistry.create(engine, instance, **kwargs)
    result = solver.solve()
    logger.debug(f"{instance!r}: {result}")
    return result


def solve_deterministic(instance: Instance) -> SolverResult:
    return solve(instance, "scc")


def solve_randomized(instance: Instance, **kwargs) -> SolverResult:
    return solve(instance, "papadimitriou", **kwargs)


def decide_deterministic(instance: Instance) -> bool:
    """Exact verdict from the SCC engine."""
    return solve_deterministic(instance).verdict


def decide_randomized(instance: Instance, **kwargs) -> bool:
    """
    Verdict from the random-walk engine.

    ``True`` is always correct. ``False`` means the flip budget ran out and
    the instance is unsatisfiable only with high probability; use
    :func:`solve_randomized` to tell the two apart.
    """
    return solve_randomized(instance, **kwargs).verdict


def cross_validate(
    instance: Instance, runs: int = 1, seed: int | None = None, **kwargs
) -> dict[str, Any]:
    """
    Run both engines on the same instance and compare their verdicts.

    Args:
        instance: The instance to decide
        runs: Number of randomized runs
        seed: Seed of the first randomized run; run ``i`` uses ``seed + i``
        **kwargs: Extra options for the randomized engine

    Returns:
        Dictionary with the deterministic result, the randomized results and
        whether every randomized verdict matched the deterministic one

    Raises:
        VerdictMismatchError: If a randomized run found a model for an
            instance the deterministic engine proved unsatisfiable
    """
    exact = solve_deterministic(instance)
    randomized = []
    for run in range(runs):
        run_seed = None if seed is None else seed + run
        result = solve_randomized(instance, seed=run_seed, **kwargs)
        randomized.append(result)

        if result.is_sat and exact.is_unsat:
            raise VerdictMismatchError(
                details={
                    "instance": repr(instance),
                    "deterministic": exact.to_dict(),
                    "randomized": result.to_dict(),
                }
            )

    agree = all(result.verdict == exact.verdict for result in randomized)
    if not agree:
        logger.warning(
            f"{instance!r}: randomized engine missed a satisfying assignment "
            f"in {sum(not r.verdict for r in randomized)} of {runs} runs"
        )
    return {"deterministic": exact, "randomized": randomized, "agree": agree}
