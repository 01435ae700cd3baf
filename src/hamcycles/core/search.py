"""Backtracking enumeration of simple Hamiltonian cycles.

A search state pairs a visibility graph with the path built so far. Each
extension commits the edge from the path's endpoint to an unvisited visible
vertex, which prunes every pair that edge crosses, so a completed path never
crosses itself.

Two branch strategies give identical counts:
- CLONE: every child branch gets its own copy of the graph
- UNDO: one graph is mutated in place and each commit is reverted on
  backtrack
"""

import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from hamcycles.config import BranchStrategy, GraphConfig, SearchConfig, TerminalPolicy
from hamcycles.core.visibility import EdgeCommit, VisibilityGraph
from hamcycles.domain import Point
from hamcycles.exceptions import InvalidEdgeError, InvalidInputError, VertexIndexError
from hamcycles.utils import SearchStats


@dataclass
class CycleSearchState:
    """A visibility graph and the partial path through it.

    Attributes:
        graph: Graph whose real edges are exactly the path's edges
        path: Distinct vertex indices, path[0] being the anchor
    """

    graph: VisibilityGraph
    path: list[int] = field(default_factory=list)

    @classmethod
    def start(cls, graph: VisibilityGraph, anchor: int = 0) -> "CycleSearchState":
        """Create the root state of a search.

        Raises:
            VertexIndexError: If anchor is not a vertex of graph
        """
        if not 0 <= anchor < len(graph):
            raise VertexIndexError(anchor, len(graph))
        return cls(graph=graph, path=[anchor])

    @property
    def anchor(self) -> int:
        return self.path[0]

    @property
    def last(self) -> int:
        return self.path[-1]

    @property
    def is_complete(self) -> bool:
        return len(self.path) == len(self.graph)

    def candidates(self) -> list[int]:
        """Unvisited vertices visible from the path's endpoint, ascending."""
        visited = set(self.path)
        return sorted(v for v in self.graph.visible_from(self.last) if v not in visited)

    def extend(self, vertex: int) -> "CycleSearchState":
        """Return a child state on a cloned graph; self is left untouched."""
        self._check_unvisited(vertex)
        graph = self.graph.copy()
        graph.add_edge(self.last, vertex)
        return CycleSearchState(graph=graph, path=[*self.path, vertex])

    def push(self, vertex: int) -> EdgeCommit:
        """Extend the path in place.

        Returns:
            The commit to hand back to pop()
        """
        self._check_unvisited(vertex)
        commit = self.graph.add_edge(self.last, vertex)
        self.path.append(vertex)
        return commit

    def pop(self, commit: EdgeCommit) -> None:
        """Undo the most recent push()."""
        self.graph.revert(commit)
        self.path.pop()

    def closing_edge_visible(self) -> bool:
        """Check that the edge back to the anchor crosses no path edge."""
        if len(self.path) < 3:
            return False
        return self.graph.is_visible(self.last, self.anchor)

    def _check_unvisited(self, vertex: int) -> None:
        if vertex in self.path:
            raise InvalidEdgeError(
                (self.last, vertex), "vertex is already on the path"
            )


class HamiltonianCounter:
    """Counts simple Hamiltonian cycles (or paths) from a search state.

    Every cycle through the anchor is found once per traversal direction,
    so under the CYCLE policy each geometric cycle contributes 2.

    Example:
        counter = HamiltonianCounter(SearchConfig(terminal_policy=TerminalPolicy.CYCLE))
        counter.count_points([Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)])  # 2
    """

    def __init__(self, config: SearchConfig | None = None) -> None:
        """Initialize the counter.

        Args:
            config: Search settings; defaults to SearchConfig()
        """
        self.config = config or SearchConfig()
        self.stats = SearchStats()

    def count(self, state: CycleSearchState) -> int:
        """Count completions reachable from state.

        Under the UNDO strategy state is mutated during the search and
        restored before returning.

        Args:
            state: State to search from

        Returns:
            Number of accepted completions
        """
        self.stats = SearchStats()
        self.stats.start_time = time.time()

        if self.config.branch_strategy is BranchStrategy.UNDO:
            total = self._count_in_place(state)
        else:
            total = self._count_cloned(state)

        self.stats.count = total
        self.stats.end_time = time.time()
        return total

    def count_points(
        self, points: Sequence[Point], graph_config: GraphConfig | None = None
    ) -> int:
        """Build a visibility graph over points and count from the anchor.

        Raises:
            InvalidInputError: If points is empty, not in general position, or
                the anchor is out of range
        """
        if not points:
            raise InvalidInputError("Point set is empty")
        graph_config = graph_config or GraphConfig()
        graph = VisibilityGraph.from_points(
            points, require_general_position=graph_config.require_general_position
        )
        return self.count(CycleSearchState.start(graph, self.config.anchor))

    def _count_in_place(self, state: CycleSearchState) -> int:
        self.stats.nodes_expanded += 1
        if state.is_complete:
            return self._accept(state)

        candidates = state.candidates()
        if not candidates:
            self.stats.dead_ends += 1
            return 0

        total = 0
        for vertex in candidates:
            commit = state.push(vertex)
            try:
                total += self._count_in_place(state)
            finally:
                state.pop(commit)
        return total

    def _count_cloned(self, state: CycleSearchState) -> int:
        self.stats.nodes_expanded += 1
        if state.is_complete:
            return self._accept(state)

        candidates = state.candidates()
        if not candidates:
            self.stats.dead_ends += 1
            return 0

        return sum(self._count_cloned(state.extend(vertex)) for vertex in candidates)

    def _accept(self, state: CycleSearchState) -> int:
        self.stats.completed_paths += 1
        if self.config.terminal_policy is TerminalPolicy.PATH:
            return 1
        if state.closing_edge_visible():
            return 1
        self.stats.rejected_closings += 1
        return 0
