"""End-to-end tests for the hamcycles command line."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from hamcycles import __version__
from hamcycles.cli.app import app

runner = CliRunner()


def write_point_file(directory: Path, name: str, lines: list[str]) -> Path:
    path = directory / name
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def square_file(tmp_path: Path) -> Path:
    return write_point_file(tmp_path, "square.txt", ["# unit square", "0 0", "1 0", "1 1", "0 1"])


@pytest.fixture
def log_args(tmp_path: Path) -> list[str]:
    """Keep log files inside the test directory."""
    return ["--log-file", str(tmp_path / "hamcycles.log")]


def last_line(output: str) -> str:
    return output.strip().splitlines()[-1].strip()


class TestCountCommand:
    """Tests for the count command."""

    def test_quiet_prints_only_count(self, square_file: Path, log_args: list[str]):
        result = runner.invoke(app, [str(square_file), "--quiet", *log_args])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "2"

    def test_path_policy(self, square_file: Path, log_args: list[str]):
        result = runner.invoke(app, [str(square_file), "-q", "--policy", "path", *log_args])
        assert result.exit_code == 0, result.output
        assert last_line(result.output) == "4"

    def test_clone_strategy(self, square_file: Path, log_args: list[str]):
        result = runner.invoke(app, [str(square_file), "-q", "--strategy", "clone", *log_args])
        assert result.exit_code == 0, result.output
        assert last_line(result.output) == "2"

    def test_interior_point(self, tmp_path: Path, log_args: list[str]):
        path = write_point_file(tmp_path, "tri.txt", ["0 0", "4 0", "0 4", "1 1"])
        result = runner.invoke(app, [str(path), "-q", "--anchor", "3", *log_args])
        assert result.exit_code == 0, result.output
        assert last_line(result.output) == "6"

    def test_summary_output(self, square_file: Path, log_args: list[str]):
        result = runner.invoke(app, [str(square_file), "--verbose", *log_args])
        assert result.exit_code == 0, result.output
        assert "Complete" in result.output
        assert "simple Hamiltonian cycles" in result.output
        assert "Nodes expanded" in result.output
        assert "Rejected closings" in result.output

    def test_writes_log_file(self, square_file: Path, tmp_path: Path):
        log_file = tmp_path / "run.log"
        result = runner.invoke(app, [str(square_file), "-q", "--log-file", str(log_file)])
        assert result.exit_code == 0, result.output
        assert "Cycle search complete" in log_file.read_text(encoding="utf-8")


class TestCountErrors:
    """Tests for failing invocations."""

    def test_invalid_policy(self, square_file: Path, log_args: list[str]):
        result = runner.invoke(app, [str(square_file), "--policy", "loop", *log_args])
        assert result.exit_code == 1
        assert "Invalid policy" in result.output

    def test_invalid_strategy(self, square_file: Path, log_args: list[str]):
        result = runner.invoke(app, [str(square_file), "--strategy", "fork", *log_args])
        assert result.exit_code == 1
        assert "Invalid strategy" in result.output

    def test_verbose_and_quiet(self, square_file: Path, log_args: list[str]):
        result = runner.invoke(app, [str(square_file), "-v", "-q", *log_args])
        assert result.exit_code == 1

    def test_missing_file(self, tmp_path: Path, log_args: list[str]):
        result = runner.invoke(app, [str(tmp_path / "missing.txt"), *log_args])
        assert result.exit_code == 1
        assert "Point file not found" in result.output

    def test_malformed_file(self, tmp_path: Path, log_args: list[str]):
        path = write_point_file(tmp_path, "bad.txt", ["0 0", "1 one"])
        result = runner.invoke(app, [str(path), *log_args])
        assert result.exit_code == 1
        assert "Could not read points" in result.output

    def test_undecodable_file(self, tmp_path: Path, log_args: list[str]):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"0 0\n1 0\n\xff\xfe 1\n")
        result = runner.invoke(app, [str(path), "-q", *log_args])
        assert result.exit_code == 1
        assert not isinstance(result.exception, UnicodeDecodeError)
        assert "Could not read points" in result.output

    def test_collinear_points(self, tmp_path: Path, log_args: list[str]):
        path = write_point_file(tmp_path, "line.txt", ["0 0", "1 1", "2 2"])
        result = runner.invoke(app, [str(path), *log_args])
        assert result.exit_code == 1
        assert "Invalid input" in result.output
        assert "collinear" in result.output

    def test_collinear_points_allowed(self, tmp_path: Path, log_args: list[str]):
        path = write_point_file(tmp_path, "line.txt", ["0 0", "1 1", "2 2"])
        result = runner.invoke(
            app, [str(path), "-q", "--allow-degenerate", "--policy", "path", *log_args]
        )
        assert result.exit_code == 0, result.output

    def test_anchor_out_of_range(self, square_file: Path, log_args: list[str]):
        result = runner.invoke(app, [str(square_file), "--anchor", "7", *log_args])
        assert result.exit_code == 1
        assert "Invalid input" in result.output


class TestVersion:
    """Tests for version output."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
