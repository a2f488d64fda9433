"""Execution utilities for external commands.

This module provides a small wrapper around subprocess for running external
tools such as git with output capture and structured error reporting.
"""

import subprocess
from dataclasses import dataclass
from pathlib import Path

# Maximum output size in bytes kept in log records
MAX_OUTPUT_BYTES: int = 102400  # 100KB


@dataclass(frozen=True, slots=True)
class CommandConfig:
    """Configuration for command execution.

    Attributes:
        args: Program and arguments to execute.
        cwd: Working directory for execution.
    """

    args: tuple[str, ...] = ()
    cwd: str | Path | None = None


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result from command execution.

    Attributes:
        success: Whether the command was executed (regardless of exit code).
        exit_code: Process exit code, or None if execution failed.
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        error: Error message if execution failed.
        command_not_found: Whether the command was not found.
    """

    success: bool
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    error: str | None = None
    command_not_found: bool = False

    @property
    def ok(self) -> bool:
        """Whether the command ran and exited with status 0."""
        return self.success and self.exit_code == 0


def truncate_output(output: str, max_bytes: int = MAX_OUTPUT_BYTES) -> str:
    """Truncate output to max bytes, preserving valid UTF-8.

    Args:
        output: The string to truncate.
        max_bytes: Maximum size in bytes.

    Returns:
        Truncated string with indicator if truncated.
    """
    if not output:
        return output

    encoded = output.encode("utf-8")
    if len(encoded) <= max_bytes:
        return output

    # Use 'ignore' to skip incomplete multi-byte sequences at the end
    truncated = encoded[:max_bytes].decode("utf-8", errors="ignore")

    return truncated + "\n... [output truncated]"


def run_command(config: CommandConfig) -> CommandResult:
    """Execute an external command and capture its output.

    Missing executables and OS errors are reported through the result, as is a
    non-zero exit code.

    Args:
        config: Command configuration specifying args and cwd.

    Returns:
        CommandResult with execution outcome.
    """
    if not config.args:
        return CommandResult(success=False, error="No command specified")

    cwd = str(config.cwd) if config.cwd else None

    try:
        result = subprocess.run(  # noqa: S603
            list(config.args),
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            check=False,
        )
    except FileNotFoundError as e:
        return CommandResult(success=False, error=str(e), command_not_found=True)
    except OSError as e:
        return CommandResult(success=False, error=str(e))

    return CommandResult(
        success=True,
        exit_code=result.returncode,
        stdout=result.stdout.decode("utf-8", errors="replace"),
        stderr=result.stderr.decode("utf-8", errors="replace"),
    )
