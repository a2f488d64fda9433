"""Logging utilities for gitsync.

This module provides standalone structlog logger factories that write
JSON-formatted or text-formatted logs to the gitsync log file. Each logger is
self-contained and does not modify global structlog configuration.
"""

from __future__ import annotations

import logging
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, cast

import structlog

from ._paths import get_default_log_file

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, GITSYNC_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer.
    """
    if respect_env and getenv("GITSYNC_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def _create_logger(
    log_file_path: str,
    *,
    log_level: int = logging.INFO,
    log_format: LogFormatType = "json",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a standalone structlog logger writing to the specified file.

    Args:
        log_file_path: Path to the log file (will be opened in append mode).
        log_level: Minimum level that is written.
        log_format: Output format, either "json" or "text".

    Returns:
        A configured FilteringBoundLogger instance.
    """
    log_path = Path(log_file_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger_factory = structlog.WriteLoggerFactory(file=log_path.open("a"))

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Text format: "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            logger_factory(),
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
            context_class=dict,
        ),
    )


def create_null_logger() -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger that discards every event.

    Returns:
        A FilteringBoundLogger that never writes anything.
    """
    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.ReturnLogger(),
            processors=[],
            wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
            context_class=dict,
        ),
    )


def create_cli_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "json",
    log_file: str = "",
    command: str = "",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger for CLI runs.

    Creates a standalone structlog logger that writes structured logs to either
    the specified file or the default log file in the user log directory.

    The log level can be overridden by environment variables:
    - GITSYNC_DEBUG: If set, enables DEBUG level logging regardless of config

    Args:
        level: Log level threshold (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to log file (uses the default log file if empty).
        command: Name of the CLI command for context (bound to all entries).

    Returns:
        A FilteringBoundLogger instance configured for CLI logging.
    """
    effective_file = log_file if log_file else str(get_default_log_file())
    effective_level = _log_level_from_string(level, respect_env=True)

    logger = _create_logger(
        effective_file,
        log_level=effective_level,
        log_format=log_format,
    )

    if command:
        return logger.bind(command=command)
    return logger
