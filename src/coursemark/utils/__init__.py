"""Utility functions for coursemark.

This module provides utility functions including:

- Logging setup and configuration
- Print progress and statistics tracking
"""

from coursemark.utils.logging import (
    PrintLogger,
    PrintStats,
    configure_logging,
)

__all__ = [
    "PrintLogger",
    "PrintStats",
    "configure_logging",
]
