"""Version-control adapters.

This package wraps the git and Git LFS operations a sync run performs behind
a protocol, so the orchestrator can be driven by the real ``git`` executable
or by an in-memory fake.

Classes:
    VcsProtocol: Runtime-checkable protocol for dependency injection.
    GitCli: Implementation that runs the ``git`` executable.
    FakeVcs: In-memory implementation for tests.

Example:
    >>> from pathlib import Path
    >>> from gitsync.vcs import GitCli
    >>> vcs = GitCli(Path.cwd())
    >>> vcs.list_untracked()
    ['notes.txt']
"""

from gitsync.vcs._fake import FakeVcs
from gitsync.vcs._git import GIT_EXECUTABLE, GitCli
from gitsync.vcs._protocol import VcsProtocol

__all__ = [
    "GIT_EXECUTABLE",
    "FakeVcs",
    "GitCli",
    "VcsProtocol",
]
