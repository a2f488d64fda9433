"""Git CLI implementation of VcsProtocol.

Every operation shells out to ``git`` with the project directory as working
directory. Read-only lookups that need no porcelain semantics go through
dulwich instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gitsync.exceptions import GitCommandError
from gitsync.utils import (
    CommandConfig,
    CommandResult,
    create_null_logger,
    get_last_commit,
    open_repo,
    run_command,
    truncate_output,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from structlog.typing import FilteringBoundLogger

    from gitsync.utils import CommitSummary

GIT_EXECUTABLE = "git"

# Exit status of `git diff-index --quiet` when differences exist
_DIFF_FOUND_EXIT_CODE = 1
# Exit status of `git ls-remote --exit-code` when no ref matches
_NO_MATCHING_REFS_EXIT_CODE = 2


class GitCli:
    """VcsProtocol implementation backed by the ``git`` executable.

    Attributes:
        root: Project directory every command runs in.
    """

    def __init__(
        self,
        root: Path,
        *,
        logger: FilteringBoundLogger | None = None,
        git: str = GIT_EXECUTABLE,
    ) -> None:
        """Create an adapter for the repository at ``root``.

        Args:
            root: Project directory. It does not need to be a repository yet.
            logger: Logger receiving a ``git_command`` debug event per call.
            git: Name or path of the git executable.
        """
        self._root: Path = root.resolve()
        self._logger: FilteringBoundLogger = logger or create_null_logger()
        self._git: str = git

    @property
    def root(self) -> Path:
        """Project directory every command runs in."""
        return self._root

    # =========================================================================
    # Command execution
    # =========================================================================

    def _run(self, *args: str, check: bool = True) -> CommandResult:
        """Run a git subcommand in the project directory.

        Args:
            *args: Arguments following ``git``.
            check: Raise on a non-zero exit status.

        Returns:
            The command result.

        Raises:
            GitCommandError: If git cannot be executed, or if ``check`` is set
                and the command exits non-zero.
        """
        command = (self._git, *args)
        result = run_command(CommandConfig(args=command, cwd=self._root))

        self._logger.debug(
            "git_command",
            args=list(args),
            exit_code=result.exit_code,
            stderr=truncate_output(result.stderr),
        )

        if not result.success:
            msg = f"Failed to execute {self._git}: {result.error}"
            raise GitCommandError(msg, command=command)

        if check and result.exit_code != 0:
            msg = f"git {args[0]} failed with exit code {result.exit_code}"
            raise GitCommandError(
                msg,
                command=command,
                exit_code=result.exit_code,
                stderr=result.stderr,
                stdout=result.stdout,
            )

        return result

    # =========================================================================
    # Repository setup
    # =========================================================================

    def is_repository(self) -> bool:
        repo = open_repo(self._root)
        if repo is None:
            return False
        repo.close()
        return True

    def init(self, initial_branch: str) -> None:
        _ = self._run("init")
        _ = self._run("branch", "-M", initial_branch)

    def is_safe_directory(self) -> bool:
        # Exit status 1 means the key is not set at all
        result = self._run(
            "config", "--global", "--get-all", "safe.directory", check=False
        )
        entries = {line.strip() for line in result.stdout.splitlines()}
        return str(self._root) in entries or "*" in entries

    def add_safe_directory(self) -> None:
        _ = self._run("config", "--global", "--add", "safe.directory", str(self._root))

    def get_remote_url(self, name: str) -> str | None:
        result = self._run("remote", "get-url", name, check=False)
        if result.exit_code != 0:
            return None
        return result.stdout.strip() or None

    def set_remote_url(self, name: str, url: str) -> None:
        _ = self._run("remote", "set-url", name, url)

    def add_remote(self, name: str, url: str) -> None:
        _ = self._run("remote", "add", name, url)

    def remote_branch_exists(self, remote: str, branch: str) -> bool:
        result = self._run(
            "ls-remote", "--exit-code", "--heads", remote, branch, check=False
        )
        if result.exit_code == 0:
            return True
        if result.exit_code == _NO_MATCHING_REFS_EXIT_CODE:
            return False
        msg = f"Could not query branch '{branch}' on remote '{remote}'"
        raise GitCommandError(
            msg,
            command=(self._git, "ls-remote", "--exit-code", "--heads", remote, branch),
            exit_code=result.exit_code,
            stderr=result.stderr,
        )

    # =========================================================================
    # Working tree state
    # =========================================================================

    def has_head(self) -> bool:
        result = self._run("rev-parse", "--verify", "--quiet", "HEAD", check=False)
        return result.exit_code == 0

    def has_tracked_changes(self) -> bool:
        # Refresh stat info so touched but unmodified files do not count
        _ = self._run("update-index", "-q", "--refresh", check=False)
        result = self._run("diff-index", "--quiet", "HEAD", "--", check=False)
        if result.exit_code == 0:
            return False
        if result.exit_code == _DIFF_FOUND_EXIT_CODE:
            return True
        msg = "Could not compare the working tree with HEAD"
        raise GitCommandError(
            msg,
            command=(self._git, "diff-index", "--quiet", "HEAD", "--"),
            exit_code=result.exit_code,
            stderr=result.stderr,
        )

    def has_changes(self) -> bool:
        result = self._run("status", "--porcelain", "--untracked-files=no")
        return bool(result.stdout.strip())

    def list_untracked(self) -> list[str]:
        result = self._run("ls-files", "--others", "--exclude-standard", "-z")
        return [path for path in result.stdout.split("\0") if path]

    # =========================================================================
    # Stash, rebase and submodules
    # =========================================================================

    def stash_push(self, message: str) -> None:
        _ = self._run("stash", "push", "-m", message)

    def stash_pop(self) -> bool:
        return self._run("stash", "pop", check=False).exit_code == 0

    def pull_rebase(self, remote: str, branch: str) -> None:
        _ = self._run("pull", "--rebase", remote, branch)

    def update_submodules(self) -> None:
        _ = self._run("submodule", "update", "--remote", "--merge")

    # =========================================================================
    # Staging, committing and publishing
    # =========================================================================

    def add(self, paths: Sequence[str]) -> None:
        if not paths:
            return
        _ = self._run("add", "--", *paths)

    def add_all(self) -> None:
        _ = self._run("add", "--all")

    def add_tracked(self) -> None:
        _ = self._run("add", "--update")

    def commit(self, message: str) -> None:
        _ = self._run("commit", "-m", message)

    def push(self, remote: str, branch: str, *, force: bool = False) -> None:
        if force:
            _ = self._run("push", "--force", remote, branch)
        else:
            _ = self._run("push", remote, branch)

    def last_commit(self) -> CommitSummary | None:
        return get_last_commit(self._root)

    # =========================================================================
    # Git LFS
    # =========================================================================

    def lfs_install(self) -> None:
        _ = self._run("lfs", "install")

    def lfs_track(self, pattern: str) -> None:
        _ = self._run("lfs", "track", "--filename", pattern)

    def lfs_push_all(self, remote: str, branch: str) -> None:
        _ = self._run("lfs", "push", "--all", remote, branch)
