"""Logging utilities for hamcycles."""

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

import structlog


@dataclass
class SearchStats:
    """Statistics from a cycle search."""

    count: int = 0
    nodes_expanded: int = 0
    completed_paths: int = 0
    rejected_closings: int = 0
    dead_ends: int = 0
    branch_count: int = 0
    error_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate search duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    def merge(self, other: "SearchStats") -> None:
        """Add the node counters of a sub-search to this one."""
        self.nodes_expanded += other.nodes_expanded
        self.completed_paths += other.completed_paths
        self.rejected_closings += other.rejected_closings
        self.dead_ends += other.dead_ends

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        data = asdict(self)
        data["errors"] = [list(e) for e in self.errors]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchStats":
        """Deserialize from dictionary."""
        values = dict(data)
        values["errors"] = [tuple(e) for e in values.get("errors", [])]
        return cls(**values)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (auto-generated if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(f"hamcycles_{timestamp}.log")

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if (handler.get_name() or "").startswith("hamcycles."):
            root_logger.removeHandler(handler)
            handler.close()

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.set_name("hamcycles.file")
    file_handler.setLevel(getattr(logging, file_level.upper()))
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )

    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.set_name("hamcycles.console")
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("hamcycles")
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class SearchLogger:
    """Logger for tracking search progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = SearchStats()

    def log_search_start(
        self,
        vertex_count: int,
        anchor: int,
        policy: str,
        strategy: str,
    ) -> None:
        """Log start of a search."""
        self._logger.info(
            "Starting cycle search",
            vertices=vertex_count,
            anchor=anchor,
            policy=policy,
            strategy=strategy,
        )

    def log_branch_complete(
        self,
        branch: list[int],
        count: int,
        duration_ms: float,
    ) -> None:
        """Log a finished first-level branch."""
        self._logger.debug(
            "Branch searched",
            branch=branch,
            count=count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.branch_count += 1
        self._stats.count += count

    def log_branch_error(
        self,
        branch: list[int],
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log a failed first-level branch."""
        self._logger.error(
            "Branch search failed",
            branch=branch,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((str(branch), str(error)))

    def log_search_complete(self, stats: SearchStats) -> None:
        """Log the final result of a search."""
        self._logger.info(
            "Cycle search complete",
            count=stats.count,
            nodes=stats.nodes_expanded,
            dead_ends=stats.dead_ends,
            rejected_closings=stats.rejected_closings,
            duration_seconds=round(stats.duration_seconds, 2),
        )

    @property
    def stats(self) -> SearchStats:
        """Get current branch statistics."""
        return self._stats
