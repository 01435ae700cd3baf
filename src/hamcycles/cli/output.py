"""Rich console output for the hamcycles CLI.

Headers, step markers, the branch progress bar used by parallel searches and
the final count with its optional statistics table.
"""


from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from hamcycles.utils import SearchStats

console = Console()

SYM_STEP = "▸"
SYM_OK = "✓"
SYM_ERR = "✗"
SYM_DOT = "·"


def create_progress() -> Progress:
    """Create the progress bar shown while first-level branches finish.

    Returns:
        Progress with a bar, a completed/total branch counter and elapsed time
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="cyan", finished_style="green"),
        MofNCompleteColumn(),
        TextColumn("branches"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def print_header(version: str) -> None:
    console.print(f"\n[bold]hamcycles[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    console.print(f"\n{SYM_STEP} {message}")


def print_point_set_info(path: str, point_count: int) -> None:
    """Print where the points came from and how many there are.

    Args:
        path: Path to the point file
        point_count: Number of points loaded
    """
    # Text avoids rich markup parsing of brackets in paths
    line = Text("  ")
    line.append(path)
    console.print(line)
    console.print(f"  {point_count:,} points")


def print_search_info(policy: str, strategy: str, anchor: int, workers: int | None) -> None:
    """Print the search configuration on one line.

    Args:
        policy: Terminal policy value
        strategy: Branch strategy value
        anchor: Anchor vertex index
        workers: Worker process count (None = auto)
    """
    parts = [
        f"{policy} policy",
        f"{strategy} strategy",
        f"anchor {anchor}",
        f"{'auto' if workers is None else workers} workers",
    ]
    console.print("  " + f" {SYM_DOT} ".join(parts))


def _format_duration(seconds: float) -> str:
    if seconds >= 60:
        minutes, rest = divmod(seconds, 60)
        return f"{int(minutes)}m {rest:.1f}s"
    if seconds >= 1:
        return f"{seconds:.1f}s"
    return f"{seconds * 1000:.0f}ms"


def print_result(stats: SearchStats, policy: str, verbose: bool = False) -> None:
    """Print the count with a summary.

    Args:
        stats: Statistics of the finished search
        policy: Terminal policy value, used to name what was counted
        verbose: Whether to show the node statistics table
    """
    noun = "cycles" if policy == "cycle" else "paths"

    console.print(
        f"\n[bold green]{SYM_OK} Complete[/bold green] in "
        f"{_format_duration(stats.duration_seconds)}"
    )
    console.print(f"  [bold]{stats.count}[/bold] simple Hamiltonian {noun}")

    if not verbose:
        return

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column(justify="right")
    for label, value in (
        ("Nodes expanded", stats.nodes_expanded),
        ("Completed paths", stats.completed_paths),
        ("Rejected closings", stats.rejected_closings),
        ("Dead ends", stats.dead_ends),
        ("First-level branches", stats.branch_count),
    ):
        table.add_row(label, f"{value:,}")
    console.print(table)


def print_error(message: str, details: str | None = None) -> None:
    """Print an error and optional details below it."""
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
