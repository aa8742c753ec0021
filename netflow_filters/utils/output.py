"""Rich console output helpers for netflow-filters."""

from __future__ import annotations

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.theme import Theme

# Module-level verbosity flag (set by cli.py after argument parsing)
_verbose_enabled: bool = False

# Custom theme for netflow-filters
THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "filter.id": "bold",
        "filter.field": "magenta",
        "filter.value": "green",
    }
)

# Global console instances
console = Console(theme=THEME, stderr=False)
error_console = Console(theme=THEME, stderr=True)


def set_verbosity(*, verbose: bool = False, debug: bool = False) -> None:
    """Configure module-level verbosity flags and library logging.

    Called from the CLI entry point after argument parsing. Debug mode also
    routes the package loggers to stderr.
    """
    global _verbose_enabled
    _verbose_enabled = verbose or debug  # debug implies verbose

    package_logger = logging.getLogger("netflow_filters")
    package_logger.handlers.clear()
    if debug:
        package_logger.addHandler(RichHandler(console=error_console, show_path=False))
        package_logger.setLevel(logging.DEBUG)
    else:
        package_logger.setLevel(logging.WARNING)


def set_color(enabled: bool) -> None:
    """Enable or disable color on both console instances."""
    console.no_color = not enabled
    error_console.no_color = not enabled


def info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/info]")


def warning(message: str) -> None:
    """Print a warning message to stderr."""
    error_console.print(f"[warning]Warning:[/warning] {message}")


def error(message: str, hint: str | None = None) -> None:
    """Print an error message to stderr.

    Args:
        message: The error message.
        hint: Optional hint for resolution.
    """
    error_console.print(f"[error]Error:[/error] {message}")
    if hint:
        error_console.print(f"  [info]Hint:[/info] {hint}")


def verbose(message: str) -> None:
    """Print a message only when verbose mode is enabled."""
    if _verbose_enabled:
        console.print(f"[info]{message}[/info]")


def create_table(title: str | None = None, **kwargs: Any) -> Table:
    """Create a styled table.

    Args:
        title: Optional table title.
        **kwargs: Additional Table arguments.

    Returns:
        Rich Table instance.
    """
    return Table(title=title, **kwargs)
