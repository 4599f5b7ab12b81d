"""
Implication graph construction for 2-CNF instances.

A clause ``(a v b)`` contributes exactly two directed edges, ``-a -> b`` and
``-b -> a``: falsifying one literal forces the other to be true.
"""

import logging
from collections.abc import Iterable, Iterator

from twosat.instance import Clause, Instance

# Set up logging
logger = logging.getLogger(__name__)


class ImplicationGraph:
    """
    Directed graph over literals stored as an adjacency mapping.

    Stored as: source -> set(targets). A vertex that only ever appears as
    an edge target is still a vertex of the graph, with no successors.
    """

    def __init__(self, edges: dict[int, set[int]] | None = None):
        self.adjacency: dict[int, set[int]] = {}
        for source, targets in (edges or {}).items():
            self.add_vertex(source)
            for target in targets:
                self.add_edge(source, target)

    def add_vertex(self, vertex: int) -> None:
        self.adjacency.setdefault(vertex, set())

    def add_edge(self, source: int, target: int) -> None:
        self.adjacency.setdefault(source, set()).add(target)
        self.adjacency.setdefault(target, set())

    def successors(self, vertex: int) -> set[int]:
        """Outgoing neighbours of a vertex; empty for vertices without a key."""
        return self.adjacency.get(vertex, set())

    def vertices(self) -> set[int]:
        """Every vertex, whether it appears as a source or only as a target."""
        found = set(self.adjacency)
        for targets in self.adjacency.values():
            found.update(targets)
        return found

    def edges(self) -> set[tuple[int, int]]:
        return {
            (source, target)
            for source, targets in self.adjacency.items()
            for target in targets
        }

    @property
    def num_vertices(self) -> int:
        return len(self.vertices())

    @property
    def num_edges(self) -> int:
        return sum(len(targets) for targets in self.adjacency.values())

    def reverse(self) -> "ImplicationGraph":
        """Return a new graph with every edge direction swapped."""
        reversed_graph = ImplicationGraph()
        for vertex in self.vertices():
            reversed_graph.add_vertex(vertex)
        for source, target in self.edges():
            reversed_graph.add_edge(target, source)
        return reversed_graph

    def __contains__(self, vertex: int) -> bool:
        return vertex in self.vertices()

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self.vertices()))

    def __eq__(self, other) -> bool:
        if not isinstance(other, ImplicationGraph):
            return NotImplemented
        return self.vertices() == other.vertices() and self.edges() == other.edges()

    def __repr__(self) -> str:
        out = [f"{source} -> {target}" for source, target in sorted(self.edges())]
        return "\n".join(out) + ("\n" if out else "")


def clause_edges(clause: Clause) -> tuple[tuple[int, int], tuple[int, int]]:
    """The two implications encoded by a clause."""
    a, b = clause.literals
    return (-a, b), (-b, a)


def build_implication_graph(
    instance: Instance | Iterable[Clause], reverse: bool = False
) -> ImplicationGraph:
    """
    Build the implication graph of a set of clauses.

    Args:
        instance: An Instance or any iterable of clauses
        reverse: Build the reverse graph (every edge read backward)

    Returns:
        The (possibly reversed) implication graph. The input is not modified.
    """
    graph = ImplicationGraph()
    count = 0
    for clause in instance:
        for source, target in clause_edges(clause):
            if reverse:
                graph.add_edge(target, source)
            else:
                graph.add_edge(source, target)
        count += 1

    logger.debug(
        f"Built {'reverse ' if reverse else ''}implication graph from {count} clauses: "
        f"{graph.num_vertices} vertices, {graph.num_edges} edges"
    )
    return graph
