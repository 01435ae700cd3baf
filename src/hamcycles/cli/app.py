"""CLI application entry point for hamcycles.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from hamcycles import __version__
from hamcycles.cli.output import (
    console,
    create_progress,
    print_error,
    print_header,
    print_point_set_info,
    print_result,
    print_search_info,
    print_step,
)
from hamcycles.config import (
    BranchStrategy,
    GraphConfig,
    HamCyclesSettings,
    LoggingConfig,
    SearchConfig,
    TerminalPolicy,
)
from hamcycles.core import SearchProcessor
from hamcycles.exceptions import HamCyclesError, InvalidInputError, PointFileError
from hamcycles.io import read_points

# Create the Typer app
app = typer.Typer(
    name="hamcycles",
    help="Count crossing-free Hamiltonian cycles through a planar point set.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]hamcycles[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def count(
    points_file: Annotated[
        Path,
        typer.Argument(
            help="Path to a point file (one 'x y' pair of exact rationals per line)",
            show_default=False,
        ),
    ],
    policy: Annotated[
        str,
        typer.Option(
            "--policy",
            "-p",
            help="What to count: closed simple cycles or open simple paths (cycle|path)",
        ),
    ] = "cycle",
    strategy: Annotated[
        str,
        typer.Option(
            "--strategy",
            "-s",
            help="Branch strategy: undo commits in place or clone per branch (undo|clone)",
        ),
    ] = "undo",
    anchor: Annotated[
        int,
        typer.Option(
            "--anchor",
            "-a",
            help="Index of the vertex every path starts from",
            min=0,
        ),
    ] = 0,
    workers: Annotated[
        int,
        typer.Option(
            "--workers",
            "-j",
            help="Worker processes for the first search level (1 = in-process)",
            min=1,
        ),
    ] = 1,
    allow_degenerate: Annotated[
        bool,
        typer.Option(
            "--allow-degenerate",
            help="Accept collinear triples (duplicate points are always rejected)",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show search statistics",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Print only the count",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Count simple Hamiltonian cycles through the points in POINTS_FILE.

    Points must be in general position: no duplicates and no three collinear.
    Every cycle is counted once per traversal direction.

    Example:
        hamcycles square.txt --policy path --verbose
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    try:
        terminal_policy = TerminalPolicy(policy.lower())
    except ValueError:
        print_error(f"Invalid policy: {policy}", details="Valid values: cycle, path")
        raise typer.Exit(code=1)

    try:
        branch_strategy = BranchStrategy(strategy.lower())
    except ValueError:
        print_error(f"Invalid strategy: {strategy}", details="Valid values: undo, clone")
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    settings = HamCyclesSettings(
        graph=GraphConfig(require_general_position=not allow_degenerate),
        search=SearchConfig(
            anchor=anchor,
            terminal_policy=terminal_policy,
            branch_strategy=branch_strategy,
            max_workers=workers,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "ERROR",
        ),
    )

    try:
        if not quiet:
            print_step("Loading points")

        points = read_points(points_file)

        if not quiet:
            print_point_set_info(path=str(points_file), point_count=len(points))
            print_step("Searching")
            print_search_info(
                policy=terminal_policy.value,
                strategy=branch_strategy.value,
                anchor=anchor,
                workers=workers,
            )

        processor = SearchProcessor(settings)

        if not quiet and workers > 1:
            with create_progress() as progress:
                task_id = progress.add_task("Searching branches", total=None)

                def update_progress(completed: int, total: int) -> None:
                    progress.update(task_id, completed=completed, total=total)

                stats = processor.run(points, progress_callback=update_progress)
        else:
            stats = processor.run(points)

        if quiet:
            console.print(str(stats.count))
        else:
            print_result(stats, policy=terminal_policy.value, verbose=verbose)

    except PointFileError as e:
        print_error(f"Could not read points: {e}")
        raise typer.Exit(code=1)
    except InvalidInputError as e:
        print_error("Invalid input", details=str(e))
        raise typer.Exit(code=1)
    except HamCyclesError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        print_error("Cancelled", details="No count reported")
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
