"""Core algorithms for hamcycles.

This module contains the core algorithms for:

- Exact geometry (orientation, segment containment, segment intersection)
- Visibility graph maintenance under edge commits
- Backtracking enumeration of simple Hamiltonian cycles
- Search orchestration across worker processes

Key functions:
- orientation: Side of a directed segment a point lies on
- segment_contains_point: Point-on-closed-segment test
- segments_intersect: Segment crossing test with shared-endpoint policy
- find_collinear_triple: Locate a general position violation
- is_general_position: Check a point set for degeneracies
- count_branch: Picklable worker entry point

Key classes:
- VisibilityGraph: Point set with committed and visible edges
- EdgeCommit: Undo record of a committed edge
- CycleSearchState: Graph plus partial path
- HamiltonianCounter: Recursive backtracking counter
- SearchProcessor: Runs a full count, in-process or in parallel
"""

from hamcycles.core.geometry import (
    find_collinear_triple,
    is_general_position,
    orientation,
    segment_contains_point,
    segments_intersect,
)
from hamcycles.core.processor import SearchProcessor, count_branch
from hamcycles.core.search import CycleSearchState, HamiltonianCounter
from hamcycles.core.visibility import EdgeCommit, VisibilityGraph, edge_key

__all__ = [
    # Search classes
    "CycleSearchState",
    # Visibility classes
    "EdgeCommit",
    "HamiltonianCounter",
    # Processor classes
    "SearchProcessor",
    "VisibilityGraph",
    "count_branch",
    "edge_key",
    # Geometry functions
    "find_collinear_triple",
    "is_general_position",
    "orientation",
    "segment_contains_point",
    "segments_intersect",
]
