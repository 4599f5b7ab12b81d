"""
Unit tests for the randomized (Papadimitriou) engine.
"""

import random
import unittest

from twosat.instance import Clause, Instance, model_to_assignment
from twosat.solvers import SolverStatus
from twosat.solvers.papadimitriou_solver import (
    PapadimitriouSolver,
    UnsatisfiedClauseSet,
    attempt_count,
    prune_pure_literals,
)
from twosat.utils.generators import generate_planted_instance

UNSAT_TWO_VARS = [(1, 2), (-1, 2), (1, -2), (-1, -2)]


class TestUnsatisfiedClauseSet(unittest.TestCase):
    """Test cases for the UnsatisfiedClauseSet bookkeeping structure."""

    def test_add_discard(self):
        clauses = UnsatisfiedClauseSet()
        a, b, c = Clause(1, 2), Clause(-1, 3), Clause(2, 3)
        for clause in (a, b, c, a):
            clauses.add(clause)
        self.assertEqual(len(clauses), 3)

        clauses.discard(a)
        clauses.discard(a)
        self.assertEqual(len(clauses), 2)
        self.assertNotIn(a, clauses)
        self.assertEqual(set(clauses), {b, c})

        clauses.discard(c)
        clauses.discard(b)
        self.assertFalse(clauses)

    def test_choice_is_member(self):
        rng = random.Random(1)
        clauses = UnsatisfiedClauseSet()
        members = [Clause(i, i + 1) for i in range(1, 8)]
        for clause in members:
            clauses.add(clause)
        clauses.discard(members[2])
        picks = {clauses.choice(rng) for _ in range(300)}
        self.assertEqual(picks, set(members) - {members[2]})


class TestPruning(unittest.TestCase):
    """Test cases for pure literal pruning."""

    def test_single_polarity_variables_are_fixed(self):
        instance = Instance(4, [(1, 2), (-2, 3), (2, -3), (-4, -4)])
        pruned = prune_pure_literals(instance)
        self.assertEqual(pruned.fixed, {1: True, 4: False})
        self.assertEqual(set(pruned.clauses), {Clause(-2, 3), Clause(2, -3)})
        self.assertEqual(set(pruned.occurrences), {2, 3})
        self.assertEqual(len(pruned.occurrences[2]), 2)

    def test_pruning_is_deterministic(self):
        instance, _ = generate_planted_instance(15, 30, seed=4)
        self.assertEqual(prune_pure_literals(instance), prune_pure_literals(instance))

    def test_fixed_values_satisfy_dropped_clauses(self):
        instance, _ = generate_planted_instance(15, 20, seed=6)
        pruned = prune_pure_literals(instance)
        solver = PapadimitriouSolver(instance, seed=0)
        for _ in range(20):
            assignment = solver._random_assignment(pruned)
            failing = set(instance.unsatisfied_clauses(assignment))
            self.assertLessEqual(failing, set(pruned.clauses))

    def test_fully_prunable_instance(self):
        pruned = prune_pure_literals(Instance(3, [(1, 2), (2, 3)]))
        self.assertEqual(pruned.clauses, ())
        self.assertEqual(pruned.fixed, {1: True, 2: True, 3: True})


class TestAttemptCount(unittest.TestCase):
    def test_attempt_count(self):
        self.assertEqual(attempt_count(0), 1)
        self.assertEqual(attempt_count(1), 1)
        self.assertEqual(attempt_count(2), 1)
        self.assertEqual(attempt_count(3), 2)
        self.assertEqual(attempt_count(8), 3)
        self.assertEqual(attempt_count(9), 4)
        self.assertEqual(attempt_count(1000), 10)


class TestPapadimitriouSolver(unittest.TestCase):
    """Test cases for the PapadimitriouSolver engine."""

    def solve(self, num_vars, pairs, **kwargs):
        kwargs.setdefault("seed", 0)
        return PapadimitriouSolver(Instance(num_vars, pairs), **kwargs).solve()

    def test_concrete_satisfiable(self):
        result = self.solve(2, [(1, 2), (-1, -2)])
        self.assertEqual(result.status, SolverStatus.SATISFIABLE)
        assignment = model_to_assignment(result.solution)
        self.assertNotEqual(assignment[1], assignment[2])

    def test_concrete_unsatisfiable(self):
        result = self.solve(2, UNSAT_TWO_VARS)
        self.assertEqual(result.status, SolverStatus.UNKNOWN)
        self.assertFalse(result.verdict)
        self.assertFalse(result.exact)
        self.assertFalse(result.is_conclusive)
        self.assertIn("budget", result.error_message)

    def test_single_variable_cases(self):
        result = self.solve(1, [(1, 1)])
        self.assertTrue(result.is_sat)
        self.assertEqual(result.solution, [1])
        self.assertEqual(result.statistics["pruned_variables"], 1)

        self.assertEqual(self.solve(1, [(1, 1), (-1, -1)]).status, SolverStatus.UNKNOWN)

    def test_empty_instance(self):
        result = self.solve(3, [])
        self.assertTrue(result.is_sat)
        self.assertTrue(result.statistics["empty_instance"])

    def test_budget_accounting(self):
        """An unsatisfiable instance spends the full budget of every attempt."""
        result = self.solve(2, UNSAT_TWO_VARS, max_attempts=3)
        stats = result.statistics
        self.assertEqual(stats["attempts"], 3)
        self.assertEqual(stats["flip_budget"], 2 * 2**2)
        self.assertEqual(stats["flips"], 3 * 8)

        default = self.solve(9, [(1, 2), (-1, 2), (1, -2), (-1, -2)])
        self.assertEqual(default.statistics["attempts"], 4)
        self.assertEqual(default.statistics["flip_budget"], 2 * 81)

    def test_flip_budget_factor(self):
        result = self.solve(2, UNSAT_TWO_VARS, flip_budget_factor=5)
        self.assertEqual(result.statistics["flip_budget"], 20)

    def test_models_satisfy_instance(self):
        for seed in range(20):
            instance, _ = generate_planted_instance(12, 24, seed=seed)
            result = PapadimitriouSolver(instance, seed=seed, max_attempts=20).solve()
            self.assertTrue(result.is_sat, msg=f"seed={seed}")
            self.assertEqual(len(result.solution), instance.num_vars)
            self.assertTrue(instance.is_satisfied_by(model_to_assignment(result.solution)))

    def test_same_seed_same_run(self):
        instance, _ = generate_planted_instance(16, 30, seed=8)
        first = PapadimitriouSolver(instance, seed=42).solve()
        second = PapadimitriouSolver(instance, seed=42).solve()
        self.assertEqual(first.status, second.status)
        self.assertEqual(first.solution, second.solution)
        self.assertEqual(first.statistics["flips"], second.statistics["flips"])

    def test_incremental_unsatisfied_set(self):
        """After a walk the live set equals a from-scratch re-evaluation."""
        instance = Instance(3, UNSAT_TWO_VARS + [(2, 3), (-2, -3), (-1, 3)])
        pruned = prune_pure_literals(instance)

        for seed in range(10):
            solver = PapadimitriouSolver(instance, seed=seed, flip_budget_factor=3)
            solver.stats.update(flips=0, min_unsatisfied=len(pruned.clauses))

            assignment = solver._random_assignment(pruned)
            unsatisfied = UnsatisfiedClauseSet()
            for clause in pruned.clauses:
                if not clause.evaluate(assignment):
                    unsatisfied.add(clause)

            solver._walk(assignment, unsatisfied, pruned.occurrences)
            expected = {c for c in pruned.clauses if not c.evaluate(assignment)}
            self.assertEqual(set(unsatisfied), expected)
            self.assertEqual(solver.stats["flips"], 27)

    def test_configure(self):
        solver = PapadimitriouSolver(Instance(2, UNSAT_TWO_VARS), seed=1)
        solver.configure({"max_attempts": 2, "seed": 7, "unknown_option": 3})
        self.assertEqual(solver.max_attempts, 2)
        self.assertEqual(solver.seed, 7)
        self.assertEqual(solver.solve().statistics["attempts"], 2)


if __name__ == "__main__":
    unittest.main()
