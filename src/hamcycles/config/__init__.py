"""Configuration management for hamcycles.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GraphConfig: Visibility graph construction settings
- SearchConfig: Cycle search settings
- LoggingConfig: Logging settings
- HamCyclesSettings: Main application settings
"""

from hamcycles.config.settings import (
    BranchStrategy,
    GraphConfig,
    HamCyclesSettings,
    LoggingConfig,
    SearchConfig,
    TerminalPolicy,
    get_default_settings,
)

__all__ = [
    "BranchStrategy",
    "GraphConfig",
    "HamCyclesSettings",
    "LoggingConfig",
    "SearchConfig",
    "TerminalPolicy",
    "get_default_settings",
]
