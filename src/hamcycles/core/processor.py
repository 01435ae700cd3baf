"""Search orchestration with optional parallel branch processing.

This module runs a complete cycle count over a point set. When more than one
worker is requested, the first level of the search tree is split across a
ProcessPoolExecutor; every worker rebuilds its own graph from a serialized
copy, so no two branches ever share mutable state.

Key components:
- count_branch: Top-level picklable function for parallel execution
- SearchProcessor: Main orchestrator class for a search run
"""

import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any

import structlog

from hamcycles.config import HamCyclesSettings, SearchConfig
from hamcycles.core.search import CycleSearchState, HamiltonianCounter
from hamcycles.core.visibility import VisibilityGraph
from hamcycles.domain import Point
from hamcycles.exceptions import InvalidInputError, SearchError
from hamcycles.utils import SearchLogger, SearchStats, configure_logging


def count_branch(
    graph_dict: dict[str, Any],
    branch: list[int],
    config_dict: dict[str, Any],
) -> dict[str, Any]:
    """Count completions below a single branch of the search tree.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Rebuilds the graph, replays the branch's edges and searches from there.

    Args:
        graph_dict: Serialized root graph (from VisibilityGraph.to_dict())
        branch: Path prefix starting at the anchor
        config_dict: Serialized search configuration

    Returns:
        Dictionary containing either:
        - Success: {"count": int, "stats": dict, "duration_ms": float}
        - Error: {"error": str, "error_type": str, "branch": list,
          "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        graph = VisibilityGraph.from_dict(graph_dict)
        state = CycleSearchState.start(graph, branch[0])
        for vertex in branch[1:]:
            state.push(vertex)

        counter = HamiltonianCounter(SearchConfig(**config_dict))
        count = counter.count(state)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "count": count,
            "stats": counter.stats.to_dict(),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "error_type": type(e).__name__,
            "branch": branch,
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


class SearchProcessor:
    """Orchestrates a complete cycle count over a point set.

    Manages the workflow:
    1. Build the visibility graph (validating general position)
    2. Create the root state at the configured anchor
    3. Count in-process, or split first-level branches across workers
    4. Collect results and statistics; fail the whole run on any branch error

    Example:
        processor = SearchProcessor(HamCyclesSettings())
        stats = processor.run(points, max_workers=4)
        print(stats.count)
    """

    def __init__(
        self,
        config: HamCyclesSettings,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the processor.

        Args:
            config: Settings containing graph, search and logging config
            logger: Preconfigured logger; configure_logging() is called with
                config.logging when omitted
        """
        self.config = config
        self.logger = logger or configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )
        self.search_logger = SearchLogger(self.logger)

    def run(
        self,
        points: Sequence[Point],
        max_workers: int | None = None,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> SearchStats:
        """Count simple Hamiltonian cycles through points.

        Args:
            points: Point set in general position
            max_workers: Worker processes (None = use config; 1 = in-process)
            progress_callback: Optional callback(completed, total) called as
                first-level branches finish

        Returns:
            SearchStats whose count field holds the result

        Raises:
            InvalidInputError: If the point set is empty or degenerate
            SearchError: If any branch fails; no partial count is returned
        """
        search = self.config.search
        if max_workers is None:
            max_workers = search.max_workers

        if not points:
            raise InvalidInputError("Point set is empty")

        stats = SearchStats()
        stats.start_time = time.time()
        self.search_logger = SearchLogger(self.logger)

        graph = VisibilityGraph.from_points(
            points, require_general_position=self.config.graph.require_general_position
        )
        state = CycleSearchState.start(graph, search.anchor)

        self.search_logger.log_search_start(
            vertex_count=len(graph),
            anchor=search.anchor,
            policy=search.terminal_policy.value,
            strategy=search.branch_strategy.value,
        )

        if max_workers == 1 or state.is_complete:
            counter = HamiltonianCounter(search)
            stats.count = counter.count(state)
            stats.merge(counter.stats)
            stats.branch_count = len(state.candidates())
        else:
            stats.count = self._count_parallel(
                state=state,
                max_workers=max_workers,
                stats=stats,
                progress_callback=progress_callback,
            )

        stats.end_time = time.time()
        self.search_logger.log_search_complete(stats)
        return stats

    def _count_parallel(
        self,
        state: CycleSearchState,
        max_workers: int | None,
        stats: SearchStats,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> int:
        """Count first-level branches in parallel using ProcessPoolExecutor.

        Args:
            state: Root state (path holds only the anchor)
            max_workers: Maximum worker processes
            stats: Statistics object to update
            progress_callback: Optional callback(completed, total)

        Returns:
            Sum of all branch counts
        """
        stats.nodes_expanded += 1
        branches = [[*state.path, vertex] for vertex in state.candidates()]
        if not branches:
            stats.dead_ends += 1
            return 0

        graph_dict = state.graph.to_dict()
        config_dict = self.config.search.model_dump()

        self.logger.info(
            "Starting parallel search",
            branch_count=len(branches),
            max_workers=max_workers,
        )

        total = len(branches)
        completed = 0
        count = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for branch in branches:
                future = executor.submit(count_branch, graph_dict, branch, config_dict)
                pending_futures[future] = branch

            try:
                for future in as_completed(pending_futures):
                    branch = pending_futures.pop(future)

                    try:
                        result = future.result()
                    except Exception as e:
                        # Executor-level error
                        self.search_logger.log_branch_error(
                            branch=branch,
                            error=e,
                            traceback=traceback.format_exc(),
                        )
                    else:
                        if "error" in result:
                            self.search_logger.log_branch_error(
                                branch=branch,
                                error=SearchError(
                                    f"{result['error_type']}: {result['error']}"
                                ),
                                traceback=result.get("traceback"),
                            )
                        else:
                            count += result["count"]
                            stats.merge(SearchStats.from_dict(result["stats"]))
                            self.search_logger.log_branch_complete(
                                branch=branch,
                                count=result["count"],
                                duration_ms=result.get("duration_ms", 0.0),
                            )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()
                executor.shutdown(wait=True, cancel_futures=True)
                raise

        branch_stats = self.search_logger.stats
        stats.branch_count = branch_stats.branch_count
        stats.error_count = branch_stats.error_count
        stats.errors = list(branch_stats.errors)

        if stats.error_count:
            first_branch, first_error = stats.errors[0]
            raise SearchError(
                f"{stats.error_count} of {total} branches failed "
                f"(first: branch {first_branch}: {first_error})"
            )

        return count
