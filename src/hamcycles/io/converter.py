"""Conversion between point set text lines and domain models.

A point line holds two exact rational tokens separated by whitespace or a
comma, for example "1/3 -2" or "0.25, 7". Everything after a '#' is a comment.
"""

import re
from fractions import Fraction

from hamcycles.domain import Point, to_exact

_SEPARATOR = re.compile(r"[\s,]+")


def parse_coordinate(token: str) -> Fraction:
    """Parse a single exact rational token.

    Args:
        token: Integer, fraction ("-1/3") or decimal ("0.125") text

    Returns:
        Exact Fraction value

    Raises:
        InvalidCoordinateError: If the token is not a finite rational
    """
    return to_exact(token)


def format_coordinate(value: Fraction) -> str:
    """Format a coordinate so that parse_coordinate reads it back exactly."""
    return str(value)


def parse_point_line(line: str) -> Point | None:
    """Convert one line of a point file to a Point.

    Args:
        line: Raw line, possibly with a trailing comment

    Returns:
        Point, or None for blank and comment-only lines

    Raises:
        ValueError: If the line does not hold exactly two tokens
        InvalidCoordinateError: If a token is not a rational number
    """
    content = line.split("#", 1)[0].strip()
    if not content:
        return None

    tokens = [t for t in _SEPARATOR.split(content) if t]
    if len(tokens) != 2:
        raise ValueError(f"expected 2 coordinates, found {len(tokens)}")

    x, y = (parse_coordinate(t) for t in tokens)
    return Point(x, y)


def format_point_line(point: Point) -> str:
    """Convert a Point to one line of a point file."""
    return f"{format_coordinate(point.x)} {format_coordinate(point.y)}"
