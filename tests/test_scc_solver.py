"""
Unit tests for the SCC (Kosaraju) engine.

networkx serves as an independent oracle for strongly connected components.
"""

import itertools
import sys
import unittest

import networkx as nx

from twosat.graph import ImplicationGraph, build_implication_graph
from twosat.instance import Instance
from twosat.solvers import SolverStatus
from twosat.solvers.scc_solver import (
    SCCSolver,
    assign_components,
    compute_finishing_ranks,
    decompose,
)
from twosat.utils.generators import generate_instance


def brute_force_satisfiable(instance: Instance) -> bool:
    for values in itertools.product([False, True], repeat=instance.num_vars):
        assignment = dict(enumerate(values, start=1))
        if instance.is_satisfied_by(assignment):
            return True
    return False


def to_networkx(graph: ImplicationGraph) -> nx.DiGraph:
    digraph = nx.DiGraph()
    digraph.add_nodes_from(graph.vertices())
    digraph.add_edges_from(graph.edges())
    return digraph


class TestFinishingRanks(unittest.TestCase):
    """Test cases for the first pass."""

    def test_bijection_over_all_vertices(self):
        for seed in range(10):
            graph = build_implication_graph(generate_instance(20, 25, seed=seed))
            ranks = compute_finishing_ranks(graph.reverse())
            self.assertEqual(set(ranks), graph.vertices())
            self.assertEqual(sorted(ranks.values()), list(range(1, graph.num_vertices + 1)))

    def test_target_only_vertices_are_ranked(self):
        graph = ImplicationGraph()
        graph.adjacency = {3: {1}, 2: {1}}
        ranks = compute_finishing_ranks(graph)
        self.assertEqual(set(ranks), {1, 2, 3})

    def test_post_order_and_scan_order(self):
        """Larger literals start first; a vertex finishes after its successors."""
        graph = ImplicationGraph({3: {1}, 2: {1}, 1: set()})
        ranks = compute_finishing_ranks(graph)
        self.assertEqual(ranks, {1: 1, 3: 2, 2: 3})

    def test_isolated_vertex(self):
        graph = ImplicationGraph()
        graph.add_vertex(7)
        self.assertEqual(compute_finishing_ranks(graph), {7: 1})


class TestComponents(unittest.TestCase):
    """Test cases for the second pass and full decomposition."""

    def assert_matches_networkx(self, graph: ImplicationGraph):
        decomposition = decompose(graph)
        ours = {frozenset(members) for members in decomposition.components.values()}
        expected = {frozenset(c) for c in nx.strongly_connected_components(to_networkx(graph))}
        self.assertEqual(ours, expected)

        # Every literal belongs to exactly one component
        self.assertEqual(set(decomposition.leaders), graph.vertices())
        total = sum(len(members) for members in decomposition.components.values())
        self.assertEqual(total, graph.num_vertices)

        for leader, members in decomposition.components.items():
            self.assertEqual(decomposition.leaders[leader], leader)
            for literal in members:
                self.assertEqual(decomposition.leaders[literal], leader)

    def test_matches_networkx_on_random_graphs(self):
        for seed in range(25):
            instance = generate_instance(8 + seed % 10, 10 + seed, seed=seed)
            self.assert_matches_networkx(build_implication_graph(instance))

    def test_mutual_reachability(self):
        graph = build_implication_graph(generate_instance(10, 14, seed=5))
        digraph = to_networkx(graph)
        decomposition = decompose(graph)
        for members in decomposition.components.values():
            for a, b in itertools.combinations(members, 2):
                self.assertTrue(nx.has_path(digraph, a, b))
                self.assertTrue(nx.has_path(digraph, b, a))

    def test_conflict_detection(self):
        graph = build_implication_graph(Instance(1, [(1, 1), (-1, -1)]))
        decomposition = decompose(graph, stop_on_conflict=True)
        self.assertEqual(decomposition.conflict_variable, 1)
        self.assertFalse(decomposition.satisfiable)

    def test_full_pass_reports_first_conflict(self):
        graph = build_implication_graph(Instance(2, [(1, 2), (-1, 2), (1, -2), (-1, -2)]))
        decomposition = decompose(graph, stop_on_conflict=False)
        self.assertIsNotNone(decomposition.conflict_variable)
        self.assertEqual(decomposition.component_of(1), {1, -1, 2, -2})

    def test_second_pass_uses_given_ranks(self):
        graph = ImplicationGraph({1: {2}, 2: {1}, 3: set()})
        ranks = compute_finishing_ranks(graph.reverse())
        decomposition = assign_components(graph, ranks)
        self.assertEqual(decomposition.component_of(1), {1, 2})
        self.assertEqual(decomposition.component_of(3), {3})
        self.assertEqual(decomposition.finishing_order()[-1], max(ranks, key=ranks.get))


class TestSCCSolver(unittest.TestCase):
    """Test cases for the SCCSolver engine."""

    def decide(self, num_vars, pairs):
        return SCCSolver(Instance(num_vars, pairs)).solve()

    def test_concrete_scenarios(self):
        self.assertTrue(self.decide(2, [(1, 2), (-1, -2)]).is_sat)
        self.assertTrue(self.decide(2, [(1, 2), (-1, 2), (1, -2), (-1, -2)]).is_unsat)
        self.assertTrue(self.decide(1, [(1, 1)]).is_sat)
        self.assertTrue(self.decide(1, [(1, 1), (-1, -1)]).is_unsat)
        self.assertTrue(self.decide(1, [(1, -1)]).is_sat)

    def test_empty_instance(self):
        result = self.decide(3, [])
        self.assertEqual(result.status, SolverStatus.SATISFIABLE)
        self.assertTrue(result.statistics["empty_instance"])
        self.assertTrue(self.decide(0, []).is_sat)

    def test_result_metadata(self):
        result = self.decide(2, [(1, 2), (-1, -2)])
        self.assertEqual(result.engine, "scc")
        self.assertTrue(result.exact)
        self.assertTrue(result.verdict)
        self.assertEqual(result.statistics["vertices"], 4)
        self.assertEqual(result.statistics["edges"], 4)

    def test_matches_brute_force(self):
        for seed in range(60):
            num_vars = 2 + seed % 7
            instance = generate_instance(num_vars, num_vars + seed % 5, seed=seed)
            result = SCCSolver(instance).solve()
            self.assertEqual(result.verdict, brute_force_satisfiable(instance), msg=f"seed={seed}")

    def test_repeated_solves_are_independent(self):
        solver = SCCSolver(Instance(2, [(1, 2), (-1, 2), (1, -2), (-1, -2)]))
        first = solver.solve()
        second = solver.solve()
        self.assertEqual(first.status, second.status)
        self.assertEqual(first.statistics["components"], second.statistics["components"])

    def test_deep_implication_chain(self):
        """A chain far longer than the recursion limit must not overflow the stack."""
        n = sys.getrecursionlimit() * 3
        chain = [(-i, i + 1) for i in range(1, n)]

        self.assertTrue(SCCSolver(Instance(n, chain)).solve().is_sat)

        # Closing the chain into one cycle through x1 and -x1 makes it unsatisfiable
        closed = Instance(n, chain + [(1, 1), (-n, -n)])
        result = SCCSolver(closed, stop_on_conflict=False).solve()
        self.assertTrue(result.is_unsat)
        self.assertEqual(result.statistics["components"], 1)


if __name__ == "__main__":
    unittest.main()
