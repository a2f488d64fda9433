"""Git utilities for gitsync.

This package provides read-only git helpers built on dulwich: repository
discovery and last-commit lookup.
"""

from gitsync.utils._git._common import (
    decode_bytes,
    discover_repo,
    find_worktree_root,
    get_last_commit,
    get_worktree_dir,
    open_repo,
)
from gitsync.utils._git._models import CommitSummary

__all__ = [
    "CommitSummary",
    "decode_bytes",
    "discover_repo",
    "find_worktree_root",
    "get_last_commit",
    "get_worktree_dir",
    "open_repo",
]
