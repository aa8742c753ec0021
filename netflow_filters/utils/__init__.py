"""Utility modules for netflow-filters."""

from netflow_filters.utils.output import (
    console,
    error,
    info,
    warning,
)

__all__ = [
    "console",
    "error",
    "info",
    "warning",
]
