"""Utility functions for polykit.

This module provides logging setup and operation statistics tracking.
"""

from polykit.utils.logging import (
    OperationLogger,
    OperationStats,
    configure_logging,
)

__all__ = [
    "OperationLogger",
    "OperationStats",
    "configure_logging",
]
