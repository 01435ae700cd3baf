"""Domain models for hamcycles.

This module contains the exact geometric types the kernel and the search are
built on. All models are designed to be:

- Immutable (using frozen dataclasses)
- Exact (coordinates are fractions.Fraction, never floats)
- Serializable for inter-process communication (parallel search)

Key classes:
- Point: A 2D point with exact rational coordinates
- Vector: Difference of two points (dot, det, norm)
- Segment: A directed segment between two points
- Triangle: Three points describing a face
- Orientation: LEFT, RIGHT or COLLINEAR
"""

from hamcycles.domain.primitives import (
    Orientation,
    Point,
    Segment,
    Triangle,
    Vector,
    to_exact,
)

__all__: list[str] = [
    # Enums
    "Orientation",
    # Core types
    "Point",
    "Vector",
    "Segment",
    "Triangle",
    # Helpers
    "to_exact",
]
