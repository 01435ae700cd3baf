"""Exact geometric primitives for planar point sets.

This module defines the fundamental geometric types used throughout hamcycles:
- Point: A 2D point with exact rational coordinates
- Vector: The difference of two points
- Segment: A directed segment between two points
- Triangle: Three points, used to describe faces of a point set
- Orientation: Tri-state result of the orientation predicate

All coordinates are stored as fractions.Fraction. Floats are accepted on
construction but converted exactly, so no rounding ever enters a predicate.
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto
from fractions import Fraction
from numbers import Rational
from typing import Any

from hamcycles.exceptions import InvalidCoordinateError


def to_exact(value: Any) -> Fraction:
    """Convert a coordinate value to an exact Fraction.

    Args:
        value: int, Fraction, finite float or Decimal, or a string such as
            "3", "-1/2" or "0.125"

    Returns:
        Exactly equal Fraction

    Raises:
        InvalidCoordinateError: If the value is not a finite rational number
    """
    if isinstance(value, bool):
        raise InvalidCoordinateError(value, "booleans are not coordinates")
    if isinstance(value, Fraction):
        return value
    if isinstance(value, Rational):
        return Fraction(value.numerator, value.denominator)
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidCoordinateError(value, "value is not finite")
    if isinstance(value, (float, Decimal, str)):
        try:
            return Fraction(value.strip() if isinstance(value, str) else value)
        except (ValueError, ZeroDivisionError, OverflowError) as e:
            raise InvalidCoordinateError(value, str(e)) from e
    raise InvalidCoordinateError(value, f"unsupported type {type(value).__name__}")


class Orientation(Enum):
    """Side of a directed line on which a point lies."""

    LEFT = auto()
    RIGHT = auto()
    COLLINEAR = auto()

    def opposite(self) -> "Orientation":
        """Orientation seen from the reversed line."""
        if self is Orientation.LEFT:
            return Orientation.RIGHT
        if self is Orientation.RIGHT:
            return Orientation.LEFT
        return Orientation.COLLINEAR


@dataclass(frozen=True, slots=True)
class Vector:
    """A 2D displacement with exact components."""

    dx: Fraction
    dy: Fraction

    def dot(self, other: "Vector") -> Fraction:
        return self.dx * other.dx + self.dy * other.dy

    def det(self, other: "Vector") -> Fraction:
        """2D cross product (determinant of [self, other]).

        Positive when other points counter-clockwise from self.
        """
        return self.dx * other.dy - self.dy * other.dx

    def norm(self) -> Fraction:
        """Squared length."""
        return self.dot(self)


@dataclass(frozen=True, slots=True)
class Point:
    """A point in the plane with exact rational coordinates.

    Immutable and hashable. Equality is positional: two points with equal
    coordinates are equal regardless of how they were constructed.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: Fraction
    y: Fraction

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", to_exact(self.x))
        object.__setattr__(self, "y", to_exact(self.y))

    def __sub__(self, other: "Point") -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def project_onto(self, segment: "Segment") -> Fraction:
        """Scalar projection onto a segment, normalised by its squared length.

        0 corresponds to segment.start and 1 to segment.end.

        Args:
            segment: Non-degenerate segment to project onto

        Returns:
            Projection parameter along the segment
        """
        v = segment.as_vector()
        return (self - segment.start).dot(v) / v.norm()

    def to_tuple(self) -> tuple[Fraction, Fraction]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, str]:
        """Serialize to dictionary for IPC.

        Coordinates are written as exact "p/q" strings.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": str(self.x), "y": str(self.y)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True, slots=True)
class Segment:
    """A directed segment from start to end.

    Segments are derived from pairs of vertex indices and never stored as
    free-standing geometry in a graph.
    """

    start: Point
    end: Point

    @property
    def endpoints(self) -> frozenset[Point]:
        return frozenset((self.start, self.end))

    def as_vector(self) -> Vector:
        return self.end - self.start

    def reversed(self) -> "Segment":
        return Segment(self.end, self.start)

    def shares_endpoint(self, other: "Segment") -> bool:
        return bool(self.endpoints & other.endpoints)


@dataclass(frozen=True, slots=True)
class Triangle:
    """Three points describing a face of a point set."""

    a: Point
    b: Point
    c: Point

    def signed_area(self) -> Fraction:
        """Signed area, positive when a, b, c wind counter-clockwise."""
        return (self.b - self.a).det(self.c - self.a) / 2

    def centroid(self) -> Point:
        """Center of mass of the three corners."""
        return Point(
            (self.a.x + self.b.x + self.c.x) / 3,
            (self.a.y + self.b.y + self.c.y) / 3,
        )

    def contains_point(self, p: Point) -> bool:
        """Check whether p lies strictly inside the triangle.

        Args:
            p: Point to test

        Returns:
            True if p is in the open interior, False on the boundary or outside
        """
        d1 = (self.b - self.a).det(p - self.a)
        d2 = (self.c - self.b).det(p - self.b)
        d3 = (self.a - self.c).det(p - self.c)
        return (d1 > 0 and d2 > 0 and d3 > 0) or (d1 < 0 and d2 < 0 and d3 < 0)
