"""Incrementally maintained visibility graph over a planar point set.

The graph keeps two disjoint edge sets over an append-only vertex list:

- real edges: committed edges, never removed except by reverting the most
  recent commit during backtracking
- visibility edges: every vertex pair whose segment crosses no real edge

Edges are always stored as normalised (low, high) index pairs and resolved
against the vertex list on demand, so no geometry is ever duplicated.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from itertools import combinations
from typing import Any

from hamcycles.core.geometry import orientation, segments_intersect
from hamcycles.domain import Orientation, Point, Segment
from hamcycles.exceptions import (
    CollinearPointsError,
    DuplicatePointError,
    EdgeNotVisibleError,
    GraphInvariantError,
    InvalidEdgeError,
    PreconditionError,
    VertexIndexError,
)

Edge = tuple[int, int]


def edge_key(i: int, j: int) -> Edge:
    """Normalise an undirected vertex pair to (low, high)."""
    return (i, j) if i < j else (j, i)


@dataclass(frozen=True)
class EdgeCommit:
    """Record of a single add_edge call, used to undo it.

    Attributes:
        edge: The committed edge
        pruned: Every visibility edge removed by the commit, the committed
            edge included
    """

    edge: Edge
    pruned: frozenset[Edge]


class VisibilityGraph:
    """Point set with committed edges and the pairs still connectable.

    Example:
        graph = VisibilityGraph.from_points([Point(0, 0), Point(1, 0), Point(0, 1)])
        graph.add_edge(0, 1)
        graph.visible_from(1)  # {2}
    """

    def __init__(self, require_general_position: bool = True) -> None:
        """Initialize an empty graph.

        Args:
            require_general_position: Reject vertices collinear with two
                existing vertices
        """
        self.require_general_position = require_general_position
        self._vertices: list[Point] = []
        self._real_edges: list[Edge] = []
        self._visibility_edges: set[Edge] = set()

    @classmethod
    def from_points(
        cls, points: Iterable[Point], require_general_position: bool = True
    ) -> "VisibilityGraph":
        """Build a graph by adding each point in order."""
        graph = cls(require_general_position=require_general_position)
        for point in points:
            graph.add_vertex(point)
        return graph

    def __len__(self) -> int:
        return len(self._vertices)

    def __repr__(self) -> str:
        return (
            f"VisibilityGraph(vertices={len(self._vertices)}, "
            f"real_edges={len(self._real_edges)}, "
            f"visibility_edges={len(self._visibility_edges)})"
        )

    @property
    def vertices(self) -> tuple[Point, ...]:
        return tuple(self._vertices)

    @property
    def real_edges(self) -> tuple[Edge, ...]:
        """Committed edges in commit order."""
        return tuple(self._real_edges)

    @property
    def visibility_edges(self) -> frozenset[Edge]:
        return frozenset(self._visibility_edges)

    def segment(self, i: int, j: int) -> Segment:
        """Resolve a vertex pair to the segment between them."""
        self._check_index(i)
        self._check_index(j)
        return Segment(self._vertices[i], self._vertices[j])

    def add_vertex(self, point: Point) -> int:
        """Append a vertex and connect it to every vertex it can see.

        Args:
            point: New vertex position

        Returns:
            Index of the new vertex

        Raises:
            DuplicatePointError: If point coincides with an existing vertex
            CollinearPointsError: If general position is required and point
                lies on the line through two existing vertices
        """
        self._validate_new_vertex(point)

        index = len(self._vertices)
        self._vertices.append(point)

        for j in range(index):
            candidate = Segment(self._vertices[j], point)
            if not self._crosses_real_edge(candidate):
                self._visibility_edges.add((j, index))

        return index

    def add_edge(self, i: int, j: int) -> EdgeCommit:
        """Commit an edge and prune every visibility edge it crosses.

        Nothing is modified if validation fails.

        Args:
            i: First endpoint index
            j: Second endpoint index

        Returns:
            EdgeCommit describing exactly what changed

        Raises:
            VertexIndexError: If either index is out of range
            InvalidEdgeError: If i == j
            EdgeNotVisibleError: If the pair is not currently visible
        """
        self._check_index(i)
        self._check_index(j)
        if i == j:
            raise InvalidEdgeError((i, j), "an edge needs two distinct vertices")

        key = edge_key(i, j)
        if key not in self._visibility_edges:
            raise EdgeNotVisibleError(key)

        committed = self.segment(*key)
        pruned = {key}
        for other in self._visibility_edges:
            if other != key and segments_intersect(committed, self.segment(*other)):
                pruned.add(other)

        self._real_edges.append(key)
        self._visibility_edges -= pruned
        return EdgeCommit(edge=key, pruned=frozenset(pruned))

    def revert(self, commit: EdgeCommit) -> None:
        """Undo the most recent add_edge call.

        Args:
            commit: The record returned by that call

        Raises:
            PreconditionError: If commit is not the most recent commit, or its
                pruned set does not match this graph's state
        """
        if not self._real_edges or self._real_edges[-1] != commit.edge:
            raise PreconditionError(
                f"Edge {commit.edge} is not the most recent commit and cannot be reverted"
            )
        if commit.edge not in commit.pruned or commit.pruned & self._visibility_edges:
            raise PreconditionError(
                f"Commit of edge {commit.edge} was not made on this graph state"
            )
        self._real_edges.pop()
        self._visibility_edges |= commit.pruned

    def visible_from(self, i: int) -> set[int]:
        """Return every vertex connectable to i by a visibility edge."""
        self._check_index(i)
        result: set[int] = set()
        for a, b in self._visibility_edges:
            if a == i:
                result.add(b)
            elif b == i:
                result.add(a)
        return result

    def is_visible(self, i: int, j: int) -> bool:
        return edge_key(i, j) in self._visibility_edges

    def copy(self) -> "VisibilityGraph":
        """Return a fully independent clone."""
        clone = VisibilityGraph(require_general_position=self.require_general_position)
        clone._vertices = list(self._vertices)
        clone._real_edges = list(self._real_edges)
        clone._visibility_edges = set(self._visibility_edges)
        return clone

    def check_invariants(self) -> None:
        """Recompute visibility from scratch and compare with the stored state.

        Raises:
            GraphInvariantError: If visibility edges differ from the pairs that
                cross no real edge, or if two real edges cross
        """
        expected: set[Edge] = set()
        for i, j in combinations(range(len(self._vertices)), 2):
            if not self._crosses_real_edge(self.segment(i, j)):
                expected.add((i, j))

        if expected != self._visibility_edges:
            missing = sorted(expected - self._visibility_edges)
            unexpected = sorted(self._visibility_edges - expected)
            raise GraphInvariantError(
                f"Visibility edges out of date: missing {missing}, unexpected {unexpected}"
            )

        for e, f in combinations(self._real_edges, 2):
            if segments_intersect(self.segment(*e), self.segment(*f)):
                raise GraphInvariantError(f"Committed edges {e} and {f} cross")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with vertices, real edges in commit order and the
            general position flag
        """
        return {
            "vertices": [p.to_dict() for p in self._vertices],
            "real_edges": [list(e) for e in self._real_edges],
            "require_general_position": self.require_general_position,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VisibilityGraph":
        """Deserialize from dictionary.

        The graph is rebuilt by replaying every vertex and commit, so the
        visibility set is recomputed rather than trusted.

        Args:
            data: Dictionary representation of a graph

        Returns:
            VisibilityGraph instance
        """
        graph = cls.from_points(
            (Point.from_dict(p) for p in data["vertices"]),
            require_general_position=data.get("require_general_position", True),
        )
        for i, j in data["real_edges"]:
            graph.add_edge(i, j)
        return graph

    def _check_index(self, i: int) -> None:
        if not 0 <= i < len(self._vertices):
            raise VertexIndexError(i, len(self._vertices))

    def _crosses_real_edge(self, candidate: Segment) -> bool:
        return any(
            segments_intersect(candidate, self.segment(*e)) for e in self._real_edges
        )

    def _validate_new_vertex(self, point: Point) -> None:
        for index, vertex in enumerate(self._vertices):
            if vertex == point:
                raise DuplicatePointError(point, index)

        if not self.require_general_position:
            return

        for i, j in combinations(range(len(self._vertices)), 2):
            line = Segment(self._vertices[i], self._vertices[j])
            if orientation(line, point) is Orientation.COLLINEAR:
                raise CollinearPointsError(point, i, j)
