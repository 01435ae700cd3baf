"""Unit tests for the point set I/O layer.

Tests for PointSetReader, PointSetWriter, and converter functions.
"""

from fractions import Fraction
from pathlib import Path

import pytest

from hamcycles.domain import Point
from hamcycles.exceptions import (
    InvalidCoordinateError,
    PointFileFormatError,
    PointFileNotFoundError,
)
from hamcycles.io import PointSetReader, PointSetWriter, read_points, write_points
from hamcycles.io.converter import (
    format_coordinate,
    format_point_line,
    parse_coordinate,
    parse_point_line,
)


class TestConverter:
    """Tests for line and coordinate conversion."""

    def test_parse_coordinate(self):
        assert parse_coordinate("-7/3") == Fraction(-7, 3)
        assert parse_coordinate("0.125") == Fraction(1, 8)

    def test_parse_coordinate_invalid(self):
        with pytest.raises(InvalidCoordinateError):
            parse_coordinate("seven")

    def test_format_coordinate(self):
        assert format_coordinate(Fraction(-7, 3)) == "-7/3"
        assert format_coordinate(Fraction(4)) == "4"

    def test_parse_whitespace_line(self):
        assert parse_point_line("  1/2\t-3 \n") == Point("1/2", -3)

    def test_parse_comma_line(self):
        assert parse_point_line("1, 2") == Point(1, 2)

    def test_parse_comment_and_blank(self):
        assert parse_point_line("# a comment") is None
        assert parse_point_line("   \n") is None
        assert parse_point_line("3 4  # trailing") == Point(3, 4)

    def test_parse_wrong_arity(self):
        with pytest.raises(ValueError, match="expected 2 coordinates, found 3"):
            parse_point_line("1 2 3")

    def test_format_point_line(self):
        assert format_point_line(Point("1/3", "-0.5")) == "1/3 -1/2"


class TestPointSetReader:
    """Tests for PointSetReader class."""

    def test_init(self):
        """Test PointSetReader initialization."""
        path = Path("points.txt")
        reader = PointSetReader(path)
        assert reader._path == path
        assert reader._points is None

    def test_load_nonexistent_file(self, tmp_path: Path):
        reader = PointSetReader(tmp_path / "missing.txt")
        with pytest.raises(PointFileNotFoundError):
            reader.load()

    def test_points_before_load(self):
        """Accessing points before loading raises RuntimeError."""
        reader = PointSetReader(Path("points.txt"))
        with pytest.raises(RuntimeError, match="Point file not loaded"):
            _ = reader.points
        with pytest.raises(RuntimeError, match="Point file not loaded"):
            _ = reader.point_count
        with pytest.raises(RuntimeError, match="Point file not loaded"):
            list(reader.iter_points())

    def test_load(self, tmp_path: Path):
        path = tmp_path / "square.txt"
        path.write_text(
            "# unit square\n0 0\n1, 0\n\n1 1  # corner\n0 1\n",
            encoding="utf-8",
        )

        reader = PointSetReader(path)
        reader.load()

        assert reader.point_count == 4
        assert reader.points == [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]
        assert list(reader.iter_points())[2] == Point(1, 1)

    def test_format_error_reports_line(self, tmp_path: Path):
        path = tmp_path / "bad.txt"
        path.write_text("0 0\n\n1 x\n", encoding="utf-8")

        with pytest.raises(PointFileFormatError) as excinfo:
            read_points(path)

        assert excinfo.value.line_number == 3
        assert "line 3" in str(excinfo.value)

    def test_invalid_utf8_reports_line(self, tmp_path: Path):
        """Undecodable bytes are a format error, not a decode crash."""
        path = tmp_path / "binary.txt"
        path.write_bytes(b"0 0\n1 0\n\xff\xfe 1\n")

        with pytest.raises(PointFileFormatError) as excinfo:
            read_points(path)

        assert excinfo.value.line_number == 3
        assert "UTF-8" in str(excinfo.value)

    def test_invalid_utf8_first_line(self, tmp_path: Path):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"\xff\xfe 1\n")
        with pytest.raises(PointFileFormatError):
            read_points(path)

    def test_crlf_line_endings(self, tmp_path: Path):
        path = tmp_path / "crlf.txt"
        path.write_bytes(b"0 0\r\n1/2 3\r\n")
        assert read_points(path) == [Point(0, 0), Point("1/2", 3)]

    def test_context_manager(self, tmp_path: Path):
        path = tmp_path / "tri.txt"
        path.write_text("0 0\n1 0\n0 1\n", encoding="utf-8")
        with PointSetReader(path) as reader:
            assert reader.point_count == 3
        with pytest.raises(RuntimeError):
            _ = reader.points


class TestPointSetWriter:
    """Tests for PointSetWriter class."""

    def test_written_file_reads_back_exactly(self, tmp_path: Path):
        points = [Point("1/3", "-2/7"), Point(5, "0.1"), Point(-1, 4)]
        path = tmp_path / "out" / "points.txt"

        write_points(points, path)

        assert read_points(path) == points

    def test_header(self, tmp_path: Path):
        path = tmp_path / "points.txt"
        PointSetWriter([Point(0, 0)], path).save()
        first_line = path.read_text(encoding="utf-8").splitlines()[0]
        assert first_line.startswith("# 1 points, hamcycles")

    def test_no_header(self, tmp_path: Path):
        path = tmp_path / "points.txt"
        PointSetWriter([Point(0, 0), Point("1/2", 3)], path).save(header=False)
        assert path.read_text(encoding="utf-8") == "0 0\n1/2 3\n"
