"""Configuration settings for hamcycles."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class TerminalPolicy(str, Enum):
    """What a complete search branch counts as."""

    CYCLE = "cycle"
    PATH = "path"


class BranchStrategy(str, Enum):
    """How each search branch gets its private copy of the graph."""

    UNDO = "undo"
    CLONE = "clone"


class GraphConfig(BaseModel):
    """Configuration for visibility graph construction."""

    require_general_position: bool = Field(
        default=True,
        description="Reject vertices that are collinear with two existing vertices",
    )


class SearchConfig(BaseModel):
    """Configuration for the Hamiltonian cycle search."""

    anchor: int = Field(
        default=0,
        ge=0,
        description="Index of the vertex every counted path starts from",
    )
    terminal_policy: TerminalPolicy = Field(
        default=TerminalPolicy.CYCLE,
        description="Count closed simple cycles or open simple paths",
    )
    branch_strategy: BranchStrategy = Field(
        default=BranchStrategy.UNDO,
        description="Undo commits on backtrack or clone the graph per branch",
    )
    max_workers: int | None = Field(
        default=1,
        ge=1,
        description="Worker processes for the first search level (None = auto)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class HamCyclesSettings(BaseModel):
    """Main application settings."""

    graph: GraphConfig = Field(default_factory=GraphConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> HamCyclesSettings:
    """Get default application settings."""
    return HamCyclesSettings()
