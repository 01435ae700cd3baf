"""Exact geometric predicates for the visibility graph.

This module provides the sign-exact predicates the whole search relies on:
- Orientation of a point relative to a directed segment
- Containment of a point in a closed segment
- Segment intersection with an explicit shared-endpoint policy
- General position checks for point sets

All functions are pure, stateless and operate on fractions.Fraction values
only. There are no tolerances anywhere in this module.
"""

from collections.abc import Sequence
from itertools import combinations

from hamcycles.domain import Orientation, Point, Segment


def orientation(segment: Segment, point: Point) -> Orientation:
    """Classify a point against the directed line through a segment.

    Uses the exact sign of the cross product of (end - start) and
    (point - start).

    Args:
        segment: Directed segment defining the line
        point: Point to classify

    Returns:
        LEFT if the point is counter-clockwise of the line, RIGHT if clockwise,
        COLLINEAR if it lies exactly on the infinite line

    Examples:
        >>> s = Segment(Point(0, 0), Point(1, 0))
        >>> orientation(s, Point(0, 1))
        <Orientation.LEFT: 1>
        >>> orientation(s, Point(5, 0))
        <Orientation.COLLINEAR: 3>
    """
    det = segment.as_vector().det(point - segment.start)
    if det > 0:
        return Orientation.LEFT
    if det < 0:
        return Orientation.RIGHT
    return Orientation.COLLINEAR


def segment_contains_point(segment: Segment, point: Point) -> bool:
    """Check whether a point lies on the closed segment.

    The point must be exactly collinear with the segment and its projection
    parameter must lie in [0, 1].

    Args:
        segment: Segment to test against
        point: Point to test

    Returns:
        True if the point lies on the segment, endpoints included
    """
    if segment.start == segment.end:
        return point == segment.start
    if orientation(segment, point) is not Orientation.COLLINEAR:
        return False
    t = point.project_onto(segment)
    return 0 <= t <= 1


def segments_intersect(a: Segment, b: Segment) -> bool:
    """Check whether two closed segments intersect.

    Segments that share exactly one endpoint are not considered intersecting
    unless they also overlap collinearly beyond that endpoint. Two segments
    with the same pair of endpoints always intersect.

    Args:
        a: First segment
        b: Second segment

    Returns:
        True if the segments cross, touch away from a shared endpoint, or
        overlap

    Examples:
        >>> diag1 = Segment(Point(0, 0), Point(1, 1))
        >>> diag2 = Segment(Point(1, 0), Point(0, 1))
        >>> segments_intersect(diag1, diag2)
        True
        >>> segments_intersect(diag1, Segment(Point(1, 1), Point(2, 0)))
        False
    """
    shared = a.endpoints & b.endpoints
    if shared:
        if a.endpoints == b.endpoints:
            return True
        (pivot,) = shared
        a_other = a.end if a.start == pivot else a.start
        b_other = b.end if b.start == pivot else b.start
        return segment_contains_point(a, b_other) or segment_contains_point(b, a_other)

    o1 = orientation(a, b.start)
    o2 = orientation(a, b.end)
    o3 = orientation(b, a.start)
    o4 = orientation(b, a.end)

    if Orientation.COLLINEAR in (o1, o2, o3, o4):
        # Any intersection must then include an endpoint of one segment
        return (
            segment_contains_point(a, b.start)
            or segment_contains_point(a, b.end)
            or segment_contains_point(b, a.start)
            or segment_contains_point(b, a.end)
        )

    return o1 is not o2 and o3 is not o4


def find_collinear_triple(points: Sequence[Point]) -> tuple[int, int, int] | None:
    """Find three exactly collinear points.

    Args:
        points: Point set to scan

    Returns:
        Indices (i, j, k) with i < j < k of the first collinear triple found,
        or None if the set is in general position
    """
    for i, j, k in combinations(range(len(points)), 3):
        if orientation(Segment(points[i], points[j]), points[k]) is Orientation.COLLINEAR:
            return (i, j, k)
    return None


def is_general_position(points: Sequence[Point]) -> bool:
    """Check that no point repeats and no three points are collinear."""
    if len(set(points)) != len(points):
        return False
    return find_collinear_triple(points) is None
