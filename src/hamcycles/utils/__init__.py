"""Utility functions for hamcycles.

This module provides utility functions including:

- Logging setup and configuration
- Search statistics and progress logging
"""

from hamcycles.utils.logging import (
    SearchLogger,
    SearchStats,
    configure_logging,
)

__all__ = [
    "SearchLogger",
    "SearchStats",
    "configure_logging",
]
