"""Point set writer for text point files.

This module provides the PointSetWriter class for saving point sets in the
format PointSetReader reads, with coordinates written exactly.
"""

from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from hamcycles import __version__
from hamcycles.domain import Point
from hamcycles.io.converter import format_point_line


class PointSetWriter:
    """Writes point sets to point files.

    Example:
        writer = PointSetWriter(points, Path("points.txt"))
        writer.save()
    """

    def __init__(self, points: Iterable[Point], path: Path) -> None:
        """Initialize the writer.

        Args:
            points: Points to write, in order
            path: Output path
        """
        self._points = list(points)
        self._path = path

    def save(self, header: bool = True) -> None:
        """Write the point file, creating parent directories as needed.

        Args:
            header: Prefix the file with a comment naming the generator
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)
        lines: list[str] = []
        if header:
            timestamp = datetime.now().isoformat(timespec="seconds")
            lines.append(f"# {len(self._points)} points, hamcycles {__version__}, {timestamp}")
        lines.extend(format_point_line(p) for p in self._points)
        self._path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def write_points(points: Iterable[Point], path: Path) -> None:
    """Write points to a point file."""
    PointSetWriter(points, path).save()
