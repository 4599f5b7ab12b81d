"""
Deterministic 2-SAT engine based on strongly connected components.

The instance is satisfiable iff no variable shares a strongly connected
component of the implication graph with its own negation. Components are
found with Kosaraju's two-pass depth-first search:

1. Traverse the reverse graph, scanning start vertices from the largest
   literal down, and rank every vertex by post-order finishing time.
2. Traverse the original graph, starting from vertices in decreasing rank.
   Each start vertex becomes the leader of everything it reaches that no
   earlier traversal claimed.

Both passes use an explicit stack of (vertex, successor-iterator) frames,
so graph depth is not limited by the interpreter's recursion limit.
"""

import logging
from dataclasses import dataclass, field

from twosat.graph import ImplicationGraph, build_implication_graph

from .base import SolverBase, SolverResult, SolverStatus
from .registry import register_solver

# Set up logging
logger = logging.getLogger(__name__)


@dataclass
class SCCDecomposition:
    """Outcome of both Kosaraju passes for one decision attempt."""

    finishing_ranks: dict[int, int]
    leaders: dict[int, int] = field(default_factory=dict)
    components: dict[int, set[int]] = field(default_factory=dict)
    conflict_variable: int | None = None

    @property
    def satisfiable(self) -> bool:
        return self.conflict_variable is None

    def finishing_order(self) -> list[int]:
        """Vertices sorted by increasing finishing rank."""
        return sorted(self.finishing_ranks, key=self.finishing_ranks.__getitem__)

    def component_of(self, literal: int) -> set[int]:
        return self.components[self.leaders[literal]]


def _descending(vertices) -> list[int]:
    return sorted(vertices, reverse=True)


def compute_finishing_ranks(reverse_graph: ImplicationGraph) -> dict[int, int]:
    """
    First pass: post-order finishing ranks over the reverse graph.

    The outer scan visits vertices in decreasing literal order, and a vertex
    is ranked only after all of its unexplored successors are finished.

    Args:
        reverse_graph: The reversed implication graph

    Returns:
        Mapping of every vertex to a distinct rank in [1, vertex_count]
    """
    ranks: dict[int, int] = {}
    explored: set[int] = set()

    for start in _descending(reverse_graph.vertices()):
        if start in explored:
            continue
        explored.add(start)
        stack = [(start, iter(_descending(reverse_graph.successors(start))))]

        while stack:
            vertex, successors = stack[-1]
            for successor in successors:
                if successor not in explored:
                    explored.add(successor)
                    stack.append(
                        (successor, iter(_descending(reverse_graph.successors(successor))))
                    )
                    break
            else:
                stack.pop()
                ranks[vertex] = len(ranks) + 1

    return ranks


def assign_components(
    graph: ImplicationGraph,
    finishing_ranks: dict[int, int],
    stop_on_conflict: bool = True,
) -> SCCDecomposition:
    """
    Second pass: leader assignment over the original graph.

    Start vertices are taken in decreasing finishing rank. A literal joining
    the component that already holds its negation is a contradiction; with
    ``stop_on_conflict`` the pass ends there.

    Args:
        graph: The implication graph
        finishing_ranks: Ranks produced by :func:`compute_finishing_ranks`
        stop_on_conflict: Return as soon as a contradiction is found

    Returns:
        SCCDecomposition with leaders, components and the first conflicting
        variable (None if there is none)
    """
    decomposition = SCCDecomposition(finishing_ranks=dict(finishing_ranks))
    leaders = decomposition.leaders
    components = decomposition.components

    def claim(literal: int, leader: int) -> bool:
        leaders[literal] = leader
        components[leader].add(literal)
        if leaders.get(-literal) == leader and decomposition.conflict_variable is None:
            decomposition.conflict_variable = abs(literal)
            logger.debug(f"Variable {abs(literal)} shares a component with its negation")
            return True
        return False

    for start in sorted(finishing_ranks, key=finishing_ranks.__getitem__, reverse=True):
        if start in leaders:
            continue
        components[start] = set()
        if claim(start, start) and stop_on_conflict:
            return decomposition
        stack = [iter(graph.successors(start))]

        while stack:
            for successor in stack[-1]:
                if successor not in leaders:
                    if claim(successor, start) and stop_on_conflict:
                        return decomposition
                    stack.append(iter(graph.successors(successor)))
                    break
            else:
                stack.pop()

    return decomposition


def decompose(graph: ImplicationGraph, stop_on_conflict: bool = False) -> SCCDecomposition:
    """
    Run both Kosaraju passes on a graph.

    Args:
        graph: The implication graph
        stop_on_conflict: Stop the second pass at the first contradiction

    Returns:
        SCCDecomposition of the graph
    """
    ranks = compute_finishing_ranks(graph.reverse())
    return assign_components(graph, ranks, stop_on_conflict=stop_on_conflict)


@register_solver("scc")
class SCCSolver(SolverBase):
    """
    Kosaraju-based exact 2-SAT engine.

    The graphs and component maps of the most recent run are kept on the
    engine for inspection and are rebuilt on every ``solve`` call.
    """

    exact = True
    configurable = ("stop_on_conflict",)

    def __init__(self, instance, stop_on_conflict: bool = True, **kwargs):
        """
        Initialize the engine.

        Args:
            instance: The Instance to decide
            stop_on_conflict: End the second pass at the first contradiction
            **kwargs: Ignored engine options
        """
        super().__init__(instance)
        self.stop_on_conflict = stop_on_conflict
        self.graph: ImplicationGraph | None = None
        self.decomposition: SCCDecomposition | None = None
        if kwargs:
            logger.debug(f"Ignoring options for SCC solver: {sorted(kwargs)}")

    def _solve(self) -> SolverResult:
        self.graph = build_implication_graph(self.instance)
        reverse_graph = build_implication_graph(self.instance, reverse=True)

        ranks = compute_finishing_ranks(reverse_graph)
        self.decomposition = assign_components(
            self.graph, ranks, stop_on_conflict=self.stop_on_conflict
        )

        self.stats.update(
            {
                "vertices": len(ranks),
                "edges": self.graph.num_edges,
                "components": len(self.decomposition.components),
                "conflict_variable": self.decomposition.conflict_variable,
            }
        )

        if self.decomposition.satisfiable:
            logger.debug(
                f"SCC: satisfiable, {len(self.decomposition.components)} components"
            )
            return SolverResult(
                status=SolverStatus.SATISFIABLE,
                total_clauses=self.instance.num_clauses,
                satisfied_clauses=self.instance.num_clauses,
                statistics=self.stats,
            )

        logger.debug(
            f"SCC: unsatisfiable, x{self.decomposition.conflict_variable} and its negation are equivalent"
        )
        return SolverResult(
            status=SolverStatus.UNSATISFIABLE,
            total_clauses=self.instance.num_clauses,
            statistics=self.stats,
        )
