"""Utilities used by the gitsync CLI."""

from ._app import app, build_cli_overrides, create_app, main, resolve_mode
from ._shared import ExitCode

__all__ = [
    "ExitCode",
    "app",
    "build_cli_overrides",
    "create_app",
    "main",
    "resolve_mode",
]
