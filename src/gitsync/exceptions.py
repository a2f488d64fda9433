"""gitsync exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class GitSyncError(Exception):
    """Base exception for gitsync errors."""


# =============================================================================
# Git Exceptions
# =============================================================================


class GitCommandError(GitSyncError):
    """Raised when an invoked git command fails.

    Attributes:
        command: The full command line that was executed.
        exit_code: Process exit code, or None if the command could not run.
        stderr: Standard error captured from the command.
        stdout: Standard output captured from the command.
    """

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str],
        exit_code: int | None = None,
        stderr: str = "",
        stdout: str = "",
    ) -> None:
        """Initialize with error message and command context.

        Args:
            message: Human-readable error message.
            command: The full command line that was executed.
            exit_code: Process exit code, or None if the command could not run.
            stderr: Standard error captured from the command.
            stdout: Standard output captured from the command.
        """
        super().__init__(message)
        self.command: tuple[str, ...] = tuple(command)
        self.exit_code: int | None = exit_code
        self.stderr: str = stderr
        self.stdout: str = stdout

    def __str__(self) -> str:
        message = super().__str__()
        detail = self.stderr.strip() or self.stdout.strip()
        if detail:
            return f"{message}\n{detail}"
        return message


class RemoteNotConfiguredError(GitSyncError):
    """Raised when no remote URL is configured and the remote does not exist.

    Attributes:
        remote: Name of the missing remote.
    """

    def __init__(self, message: str, *, remote: str) -> None:
        """Initialize with error message and remote name."""
        super().__init__(message)
        self.remote: str = remote


# =============================================================================
# Sync Exceptions
# =============================================================================


class SyncError(GitSyncError):
    """Base exception for failures that abort a sync run."""


class RebaseError(SyncError):
    """Raised when rebasing local commits onto the remote branch fails.

    The repository is left with the rebase in progress for manual resolution.

    Attributes:
        remote: Name of the remote that was pulled from.
        branch: Name of the branch that was rebased.
    """

    def __init__(self, message: str, *, remote: str, branch: str) -> None:
        """Initialize with error message and rebase context."""
        super().__init__(message)
        self.remote: str = remote
        self.branch: str = branch


class StashRestoreError(SyncError):
    """Raised when the automatic stash cannot be reapplied.

    The stash entry is kept so the changes can be recovered manually.

    Attributes:
        stash_message: Message of the stash entry left in place.
    """

    def __init__(self, message: str, *, stash_message: str) -> None:
        """Initialize with error message and stash context."""
        super().__init__(message)
        self.stash_message: str = stash_message


class PushRejectedError(SyncError):
    """Raised when the remote rejects a push.

    Attributes:
        remote: Name of the remote that rejected the push.
        branch: Name of the branch that was pushed.
        force: Whether the rejected push was a forced push.
    """

    def __init__(
        self, message: str, *, remote: str, branch: str, force: bool = False
    ) -> None:
        """Initialize with error message and push context."""
        super().__init__(message)
        self.remote: str = remote
        self.branch: str = branch
        self.force: bool = force


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(GitSyncError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
