"""Shared CLI utilities.

This module provides the standardized exit codes and console helpers used by
the command implementation.
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Never

from rich.markup import escape

if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "ExitCode",
    "exit_with_error",
    "get_error_console",
]


class ExitCode(IntEnum):
    """Standard exit codes for the gitsync CLI."""

    SUCCESS = 0
    FAILURE = 1
    INTERRUPTED = 130


def get_error_console(*, no_color: bool = False) -> Console:
    """Get a Rich console configured for error output to stderr.

    Args:
        no_color: Disable colored output.

    Returns:
        Console instance writing to stderr.
    """
    from rich.console import Console

    return Console(stderr=True, no_color=no_color)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.FAILURE,
    *,
    console: Console | None = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display. Markup in it is not rendered.
        code: The exit code to use (defaults to FAILURE).
        console: Optional Rich console for output. If not provided,
            a new stderr console will be created.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {escape(message)}")
    raise SystemExit(code)
