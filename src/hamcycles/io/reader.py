"""Point set reader for text point files.

This module provides the PointSetReader class for loading point files
into domain models.
"""

from collections.abc import Iterator
from pathlib import Path

from hamcycles.domain import Point
from hamcycles.exceptions import (
    InvalidCoordinateError,
    PointFileFormatError,
    PointFileNotFoundError,
)
from hamcycles.io.converter import parse_point_line


class PointSetReader:
    """Loads point files and converts them to exact Points.

    Example:
        reader = PointSetReader(Path("points.txt"))
        reader.load()
        for point in reader.iter_points():
            print(point)
    """

    def __init__(self, path: Path) -> None:
        """Initialize the reader.

        Args:
            path: Path to the point file
        """
        self._path = path
        self._points: list[Point] | None = None

    def load(self) -> None:
        """Load and parse the point file.

        Raises:
            PointFileNotFoundError: If the file does not exist
            PointFileFormatError: If a line is not valid UTF-8 or not a valid point
        """
        if not self._path.is_file():
            raise PointFileNotFoundError(str(self._path))

        points: list[Point] = []
        # Decode line by line so an encoding error reports its line number
        for line_number, raw_line in enumerate(self._path.read_bytes().splitlines(), start=1):
            try:
                point = parse_point_line(raw_line.decode("utf-8"))
            except UnicodeDecodeError as e:
                raise PointFileFormatError(
                    str(self._path), line_number, f"not valid UTF-8 ({e.reason})"
                ) from e
            except (ValueError, InvalidCoordinateError) as e:
                raise PointFileFormatError(str(self._path), line_number, str(e)) from e
            if point is not None:
                points.append(point)

        self._points = points

    @property
    def points(self) -> list[Point]:
        """Return the loaded points in file order.

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        if self._points is None:
            raise RuntimeError("Point file not loaded. Call load() first.")
        return list(self._points)

    @property
    def point_count(self) -> int:
        if self._points is None:
            raise RuntimeError("Point file not loaded. Call load() first.")
        return len(self._points)

    def iter_points(self) -> Iterator[Point]:
        if self._points is None:
            raise RuntimeError("Point file not loaded. Call load() first.")
        yield from self._points

    def __enter__(self) -> "PointSetReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self._points = None


def read_points(path: Path) -> list[Point]:
    """Load all points from a point file."""
    with PointSetReader(path) as reader:
        return reader.points
