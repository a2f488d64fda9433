# ruff: noqa: TC003  # Path and Sequence needed at runtime for dataclass fields
"""Fake version-control adapter for testing.

This module provides a FakeVcs class that implements VcsProtocol in memory
for use in tests without requiring git, a remote, or Git LFS.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pendulum

from gitsync.exceptions import GitCommandError
from gitsync.utils import CommitSummary


@dataclass(slots=True)
class FakeVcs:
    """Fake version-control adapter for testing.

    The fake keeps a small model of repository state that tests set up
    directly, and records every mutating call in ``calls`` as a tuple of the
    method name followed by its arguments. Queries are not recorded.

    Failures are scripted with ``fail_on``; the next call to that method
    raises GitCommandError. ``stash_pop_fails`` makes ``stash_pop`` report
    a conflict and keep the stash entry.

    Example:
        >>> vcs = FakeVcs(untracked=["data.csv"])
        >>> vcs.add(["data.csv"])
        >>> vcs.has_changes()
        True
        >>> vcs.calls
        [('add', ('data.csv',))]
    """

    root: Path = field(default_factory=lambda: Path("/fake/project"))
    repository: bool = True
    head: bool = True
    safe_directories: set[str] = field(default_factory=set)
    remotes: dict[str, str] = field(default_factory=dict)
    remote_branches: set[tuple[str, str]] = field(default_factory=set)
    tracked_changes: bool = False
    untracked: list[str] = field(default_factory=list)
    staged: list[str] = field(default_factory=list)
    stashes: list[str] = field(default_factory=list)
    commits: list[str] = field(default_factory=list)
    pushes: list[tuple[str, str, bool]] = field(default_factory=list)
    lfs_installed: bool = False
    lfs_tracked: list[str] = field(default_factory=list)
    stash_pop_fails: bool = False
    calls: list[tuple[object, ...]] = field(default_factory=list)
    _failures: dict[str, GitCommandError] = field(default_factory=dict)
    _last_commit: CommitSummary | None = None

    # =========================================================================
    # Test helpers
    # =========================================================================

    def fail_on(self, method: str, *, stderr: str = "", exit_code: int = 1) -> None:
        """Make the next call to ``method`` raise GitCommandError.

        Args:
            method: Name of a mutating VcsProtocol method (e.g. "push").
            stderr: Error output attached to the exception.
            exit_code: Exit code attached to the exception.
        """
        msg = f"git {method} failed with exit code {exit_code}"
        self._failures[method] = GitCommandError(
            msg,
            command=("git", method),
            exit_code=exit_code,
            stderr=stderr,
        )

    def called(self, method: str) -> bool:
        """Check whether ``method`` was called at least once."""
        return any(call[0] == method for call in self.calls)

    def call_names(self) -> list[str]:
        """Return the names of recorded calls in order."""
        return [str(call[0]) for call in self.calls]

    def _record(self, method: str, *args: object) -> None:
        self.calls.append((method, *args))
        error = self._failures.pop(method, None)
        if error is not None:
            raise error

    # =========================================================================
    # VcsProtocol: repository setup
    # =========================================================================

    def is_repository(self) -> bool:
        return self.repository

    def init(self, initial_branch: str) -> None:
        self._record("init", initial_branch)
        self.repository = True
        self.head = False

    def is_safe_directory(self) -> bool:
        return str(self.root) in self.safe_directories

    def add_safe_directory(self) -> None:
        self._record("add_safe_directory")
        self.safe_directories.add(str(self.root))

    def get_remote_url(self, name: str) -> str | None:
        return self.remotes.get(name)

    def set_remote_url(self, name: str, url: str) -> None:
        self._record("set_remote_url", name, url)
        if name not in self.remotes:
            msg = f"error: No such remote '{name}'"
            raise GitCommandError(
                msg, command=("git", "remote", "set-url", name, url), exit_code=2
            )
        self.remotes[name] = url

    def add_remote(self, name: str, url: str) -> None:
        self._record("add_remote", name, url)
        self.remotes[name] = url

    def remote_branch_exists(self, remote: str, branch: str) -> bool:
        return (remote, branch) in self.remote_branches

    # =========================================================================
    # VcsProtocol: working tree state
    # =========================================================================

    def has_head(self) -> bool:
        return self.head

    def has_tracked_changes(self) -> bool:
        return self.tracked_changes

    def has_changes(self) -> bool:
        return self.tracked_changes or bool(self.staged)

    def list_untracked(self) -> list[str]:
        return list(self.untracked)

    # =========================================================================
    # VcsProtocol: stash, rebase and submodules
    # =========================================================================

    def stash_push(self, message: str) -> None:
        self._record("stash_push", message)
        self.stashes.append(message)
        self.tracked_changes = False

    def stash_pop(self) -> bool:
        self._record("stash_pop")
        if self.stash_pop_fails or not self.stashes:
            return False
        _ = self.stashes.pop()
        self.tracked_changes = True
        return True

    def pull_rebase(self, remote: str, branch: str) -> None:
        self._record("pull_rebase", remote, branch)

    def update_submodules(self) -> None:
        self._record("update_submodules")

    # =========================================================================
    # VcsProtocol: staging, committing and publishing
    # =========================================================================

    def add(self, paths: Sequence[str]) -> None:
        self._record("add", tuple(paths))
        for path in paths:
            if path in self.untracked:
                self.untracked.remove(path)
            if path not in self.staged:
                self.staged.append(path)

    def add_all(self) -> None:
        self._record("add_all")
        self.staged.extend(p for p in self.untracked if p not in self.staged)
        self.untracked.clear()

    def add_tracked(self) -> None:
        self._record("add_tracked")

    def commit(self, message: str) -> None:
        self._record("commit", message)
        if not self.has_changes():
            msg = "nothing to commit, working tree clean"
            raise GitCommandError(msg, command=("git", "commit", "-m", message), exit_code=1)
        self.commits.append(message)
        self.staged.clear()
        self.tracked_changes = False
        self.head = True
        self._last_commit = CommitSummary(
            sha=f"{len(self.commits):040x}",
            subject=message.splitlines()[0],
            committed_at=pendulum.now(),
        )

    def push(self, remote: str, branch: str, *, force: bool = False) -> None:
        self._record("push", remote, branch, force)
        self.pushes.append((remote, branch, force))
        self.remote_branches.add((remote, branch))

    def last_commit(self) -> CommitSummary | None:
        return self._last_commit

    # =========================================================================
    # VcsProtocol: Git LFS
    # =========================================================================

    def lfs_install(self) -> None:
        self._record("lfs_install")
        self.lfs_installed = True

    def lfs_track(self, pattern: str) -> None:
        self._record("lfs_track", pattern)
        self.lfs_tracked.append(pattern)

    def lfs_push_all(self, remote: str, branch: str) -> None:
        self._record("lfs_push_all", remote, branch)
