"""Command-line interface for hamcycles.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Cycle or path counting from a point file
- Undo or clone branch strategies
- Optional parallel search with a progress bar
- Verbose/quiet output modes
"""

from hamcycles.cli.app import cli, main

__all__ = ["cli", "main"]
