"""Common git utility functions.

This module provides shared helper functions for read-only repository access
through dulwich: repository discovery, path handling, byte/string conversion
and last-commit lookup.
"""

from pathlib import Path

import pendulum
from dulwich.errors import NotGitRepository
from dulwich.repo import Repo

from gitsync.utils._git._models import CommitSummary


def decode_bytes(value: bytes | str) -> str:
    """Decode bytes to str if needed.

    Args:
        value: A bytes or str value.

    Returns:
        The value as a string.
    """
    if isinstance(value, bytes):
        return value.decode()
    return value


def discover_repo(cwd: Path | str | None = None) -> Repo | None:
    """Discover git repository from the given directory.

    Args:
        cwd: Directory to start search from. If None, uses current directory.

    Returns:
        Repo instance if found, None otherwise.
    """
    try:
        if cwd is not None:
            return Repo.discover(str(cwd))
        return Repo.discover()
    except NotGitRepository:
        return None


def open_repo(root: Path) -> Repo | None:
    """Open the repository whose worktree is exactly ``root``.

    Unlike discover_repo, parent directories are not searched.

    Args:
        root: Worktree directory.

    Returns:
        Repo instance, or None if ``root`` is not a repository.
    """
    try:
        return Repo(str(root))
    except NotGitRepository:
        return None


def get_worktree_dir(repo: Repo) -> Path:
    """Get the worktree directory for a repository.

    Args:
        repo: The repository instance.

    Returns:
        Path to the worktree directory.
    """
    repo_path = repo.path
    if isinstance(repo_path, bytes):
        repo_path = repo_path.decode()

    path = Path(repo_path)
    # If path is .git directory, return parent
    if path.name == ".git":
        return path.parent
    return path


def find_worktree_root(start: Path | None = None) -> Path | None:
    """Find the root of the worktree containing ``start``.

    Args:
        start: Directory to start searching from. Defaults to cwd.

    Returns:
        Worktree root path, or None if not inside a git repository.
    """
    repo = discover_repo(start)
    if repo is None:
        return None
    try:
        return get_worktree_dir(repo).resolve()
    finally:
        repo.close()


def get_last_commit(root: Path) -> CommitSummary | None:
    """Summarize the commit HEAD points at.

    Args:
        root: Worktree directory of the repository.

    Returns:
        CommitSummary for HEAD, or None if the repository has no commits.
    """
    repo = open_repo(root)
    if repo is None:
        return None

    try:
        try:
            head = repo.head()
        except KeyError:
            return None

        commit = repo[head]
        message = decode_bytes(commit.message)  # pyright: ignore[reportAttributeAccessIssue]
        subject = message.splitlines()[0] if message else ""
        committed_at = pendulum.from_timestamp(
            commit.commit_time,  # pyright: ignore[reportAttributeAccessIssue]
        )

        return CommitSummary(
            sha=decode_bytes(head),
            subject=subject,
            committed_at=committed_at,
        )
    finally:
        repo.close()
