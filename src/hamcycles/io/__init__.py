"""Point set I/O layer for hamcycles.

This module handles reading and writing point files. Coordinates are parsed
and written as exact rationals, so a file round-trips without loss.

Key responsibilities:
- Load point files into domain Points
- Report malformed lines with their line number
- Write point sets in the same format

Key classes:
- PointSetReader: Load point files
- PointSetWriter: Save point files
"""

from hamcycles.io.reader import PointSetReader, read_points
from hamcycles.io.writer import PointSetWriter, write_points

__all__ = [
    "PointSetReader",
    "PointSetWriter",
    "read_points",
    "write_points",
]
