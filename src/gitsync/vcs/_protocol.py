# ruff: noqa: TC003  # Path needed at runtime for Protocol method bodies
"""Version-control protocol for type-safe dependency injection.

This module defines a runtime-checkable Protocol covering every git and
Git LFS capability the sync orchestrator relies on. GitCli implements it
against the real ``git`` executable and FakeVcs implements it in memory.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gitsync.utils import CommitSummary


@runtime_checkable
class VcsProtocol(Protocol):
    """Protocol for the version-control operations used by a sync run.

    Queries whose answer is an exit status return booleans. Every other
    operation raises GitCommandError when the underlying command fails.

    Example:
        >>> def publish(vcs: VcsProtocol, message: str) -> None:
        ...     vcs.add_tracked()
        ...     if vcs.has_changes():
        ...         vcs.commit(message)
        ...         vcs.push("origin", "main")
    """

    @property
    def root(self) -> Path:
        """Project directory every command runs in."""
        ...

    # -------------------------------------------------------------------------
    # Repository setup
    # -------------------------------------------------------------------------

    def is_repository(self) -> bool:
        """Check whether the project directory is itself a git worktree root."""
        ...

    def init(self, initial_branch: str) -> None:
        """Initialize a repository and rename the unborn branch.

        Args:
            initial_branch: Name given to the first branch.
        """
        ...

    def is_safe_directory(self) -> bool:
        """Check whether the project directory is a global ``safe.directory``."""
        ...

    def add_safe_directory(self) -> None:
        """Register the project directory as a global ``safe.directory``."""
        ...

    def get_remote_url(self, name: str) -> str | None:
        """Get the URL of a remote.

        Args:
            name: Remote name.

        Returns:
            The configured URL, or None if the remote does not exist.
        """
        ...

    def set_remote_url(self, name: str, url: str) -> None:
        """Change the URL of an existing remote."""
        ...

    def add_remote(self, name: str, url: str) -> None:
        """Add a new remote."""
        ...

    def remote_branch_exists(self, remote: str, branch: str) -> bool:
        """Check whether ``branch`` exists on ``remote``.

        Contacts the remote. A missing branch returns False; an unreachable
        remote raises GitCommandError.
        """
        ...

    # -------------------------------------------------------------------------
    # Working tree state
    # -------------------------------------------------------------------------

    def has_head(self) -> bool:
        """Check whether the current branch has at least one commit."""
        ...

    def has_tracked_changes(self) -> bool:
        """Check whether tracked files differ from HEAD.

        Untracked files are not considered.
        """
        ...

    def has_changes(self) -> bool:
        """Check for staged or unstaged changes to tracked files.

        Untracked files are not considered.
        """
        ...

    def list_untracked(self) -> list[str]:
        """List untracked paths not excluded by ignore rules.

        Returns:
            Paths relative to the project directory, in git's order.
        """
        ...

    # -------------------------------------------------------------------------
    # Stash, rebase and submodules
    # -------------------------------------------------------------------------

    def stash_push(self, message: str) -> None:
        """Stash tracked changes under ``message``."""
        ...

    def stash_pop(self) -> bool:
        """Reapply and drop the latest stash entry.

        Returns:
            True on success. False if the stash could not be applied, in which
            case the entry is kept.
        """
        ...

    def pull_rebase(self, remote: str, branch: str) -> None:
        """Fetch ``branch`` from ``remote`` and rebase local commits onto it."""
        ...

    def update_submodules(self) -> None:
        """Update submodules to their remote-tracking revisions, merging."""
        ...

    # -------------------------------------------------------------------------
    # Staging, committing and publishing
    # -------------------------------------------------------------------------

    def add(self, paths: Sequence[str]) -> None:
        """Stage the given paths."""
        ...

    def add_all(self) -> None:
        """Stage every change in the working tree, untracked files included."""
        ...

    def add_tracked(self) -> None:
        """Stage modifications and deletions of tracked files only."""
        ...

    def commit(self, message: str) -> None:
        """Create a commit from the index."""
        ...

    def push(self, remote: str, branch: str, *, force: bool = False) -> None:
        """Push ``branch`` to ``remote``, overwriting it when ``force`` is set."""
        ...

    def last_commit(self) -> CommitSummary | None:
        """Summarize HEAD, or None when there are no commits."""
        ...

    # -------------------------------------------------------------------------
    # Git LFS
    # -------------------------------------------------------------------------

    def lfs_install(self) -> None:
        """Install the Git LFS hooks."""
        ...

    def lfs_track(self, pattern: str) -> None:
        """Track ``pattern`` with Git LFS."""
        ...

    def lfs_push_all(self, remote: str, branch: str) -> None:
        """Upload every Git LFS object referenced by ``branch`` to ``remote``."""
        ...
