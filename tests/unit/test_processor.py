"""Tests for search orchestration and parallel branch processing."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from hamcycles.config import (
    BranchStrategy,
    HamCyclesSettings,
    LoggingConfig,
    SearchConfig,
    TerminalPolicy,
)
from hamcycles.core.processor import SearchProcessor, count_branch
from hamcycles.core.visibility import VisibilityGraph
from hamcycles.domain import Point
from hamcycles.exceptions import CollinearPointsError, InvalidInputError, SearchError

SQUARE = [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]
HEXAGON_WITH_INTERIOR = [
    Point(-2, 4),
    Point(-1, 1),
    Point(0, 0),
    Point(1, 1),
    Point(2, 4),
    Point("1/2", "37/10"),
]


@pytest.fixture
def logger() -> MagicMock:
    """Stand-in for a configured structlog logger."""
    return MagicMock()


@pytest.fixture
def settings() -> HamCyclesSettings:
    """Create test settings."""
    return HamCyclesSettings(
        search=SearchConfig(
            terminal_policy=TerminalPolicy.CYCLE,
            branch_strategy=BranchStrategy.UNDO,
        )
    )


class TestCountBranch:
    """Tests for count_branch function."""

    def test_count_branch_success(self, settings: HamCyclesSettings):
        """A first-level branch of the square holds one cycle."""
        graph_dict = VisibilityGraph.from_points(SQUARE).to_dict()
        config_dict = settings.search.model_dump()

        result = count_branch(graph_dict, [0, 1], config_dict)

        assert "error" not in result
        assert result["count"] == 1
        assert result["stats"]["completed_paths"] == 2
        assert result["duration_ms"] >= 0

    def test_count_branch_dead_branch(self, settings: HamCyclesSettings):
        """The diagonal branch of the square has no completions."""
        graph_dict = VisibilityGraph.from_points(SQUARE).to_dict()

        result = count_branch(graph_dict, [0, 2], settings.search.model_dump())

        assert result["count"] == 0
        assert result["stats"]["dead_ends"] == 2

    def test_count_branch_error(self, settings: HamCyclesSettings):
        """Invalid branches are reported, not raised."""
        graph_dict = VisibilityGraph.from_points(SQUARE).to_dict()

        result = count_branch(graph_dict, [0, 9], settings.search.model_dump())

        assert "error" in result
        assert result["error_type"] == "VertexIndexError"
        assert result["branch"] == [0, 9]
        assert "Traceback" in result["traceback"]


class TestSearchProcessor:
    """Tests for SearchProcessor class."""

    def test_run_in_process(self, settings: HamCyclesSettings, logger: MagicMock):
        processor = SearchProcessor(settings, logger=logger)

        stats = processor.run(SQUARE, max_workers=1)

        assert stats.count == 2
        assert stats.branch_count == 3
        assert stats.completed_paths == 4
        assert stats.duration_seconds >= 0
        logger.info.assert_any_call(
            "Starting cycle search",
            vertices=4,
            anchor=0,
            policy="cycle",
            strategy="undo",
        )

    def test_run_uses_configured_workers(self, logger: MagicMock):
        settings = HamCyclesSettings(
            search=SearchConfig(terminal_policy=TerminalPolicy.PATH, max_workers=1)
        )
        stats = SearchProcessor(settings, logger=logger).run(SQUARE)
        assert stats.count == 4

    def test_parallel_matches_serial(self, settings: HamCyclesSettings, logger: MagicMock):
        """Splitting the first level across processes changes nothing."""
        processor = SearchProcessor(settings, logger=logger)

        serial = processor.run(HEXAGON_WITH_INTERIOR, max_workers=1)
        parallel = processor.run(HEXAGON_WITH_INTERIOR, max_workers=2)

        assert parallel.count == serial.count
        assert parallel.nodes_expanded == serial.nodes_expanded
        assert parallel.completed_paths == serial.completed_paths
        assert parallel.dead_ends == serial.dead_ends
        assert parallel.branch_count == 5
        assert parallel.error_count == 0

    def test_parallel_progress_callback(self, settings: HamCyclesSettings, logger: MagicMock):
        calls: list[tuple[int, int]] = []
        processor = SearchProcessor(settings, logger=logger)

        processor.run(SQUARE, max_workers=2, progress_callback=lambda c, t: calls.append((c, t)))

        assert calls == [(1, 3), (2, 3), (3, 3)]

    def test_branch_failure_aborts_search(self, settings: HamCyclesSettings, logger: MagicMock):
        """No partial count is reported when a branch fails."""
        failing = {
            "error": "boom",
            "error_type": "RuntimeError",
            "branch": [0, 1],
            "traceback": "Traceback ...",
            "duration_ms": 0.0,
        }
        processor = SearchProcessor(settings, logger=logger)

        with (
            patch("hamcycles.core.processor.ProcessPoolExecutor", ThreadPoolExecutor),
            patch("hamcycles.core.processor.count_branch", return_value=failing),
        ):
            with pytest.raises(SearchError, match="3 of 3 branches failed"):
                processor.run(SQUARE, max_workers=2)

        assert logger.error.call_count == 3

    def test_single_point_parallel(self, settings: HamCyclesSettings, logger: MagicMock):
        """A complete root state never reaches the executor."""
        stats = SearchProcessor(settings, logger=logger).run([Point(0, 0)], max_workers=4)
        assert stats.count == 0

    def test_empty_input(self, settings: HamCyclesSettings, logger: MagicMock):
        with pytest.raises(InvalidInputError):
            SearchProcessor(settings, logger=logger).run([])

    def test_collinear_input(self, settings: HamCyclesSettings, logger: MagicMock):
        with pytest.raises(CollinearPointsError):
            SearchProcessor(settings, logger=logger).run(
                [Point(0, 0), Point(1, 1), Point(2, 2)]
            )

    def test_configures_logging(self, settings: HamCyclesSettings, tmp_path: Path):
        """Without an explicit logger the processor logs to the configured file."""
        log_file = tmp_path / "search.log"
        settings.logging = LoggingConfig(log_file=log_file, log_level="ERROR")

        SearchProcessor(settings).run(SQUARE)

        content = log_file.read_text(encoding="utf-8")
        assert "Starting cycle search" in content
        assert "Cycle search complete" in content
