import shutil
import subprocess
from collections.abc import Callable
from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console
from structlog.typing import FilteringBoundLogger

from gitsync.config import Config
from gitsync.sync import ScriptedPrompter, SyncMode, SyncOrchestrator, SyncResult
from gitsync.vcs import GitCli


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


def git(path: Path, *args: str) -> str:
    """Run git in ``path`` and return its standard output."""
    result = subprocess.run(
        ["git", *args],
        cwd=str(path),
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def _lfs_available() -> bool:
    if shutil.which("git") is None:
        return False
    result = subprocess.run(
        ["git", "lfs", "version"], capture_output=True, check=False
    )
    return result.returncode == 0


LFS_AVAILABLE = _lfs_available()


class LfsFreeGitCli(GitCli):
    """GitCli whose large-file steps do nothing, for hosts without git-lfs."""

    def lfs_install(self) -> None:
        pass

    def lfs_track(self, pattern: str) -> None:
        pass

    def lfs_push_all(self, remote: str, branch: str) -> None:
        pass


@pytest.fixture(autouse=True)
def isolated_git(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point git at a throwaway global config and home directory.

    Returns:
        Path of the global git config file.
    """
    if shutil.which("git") is None:
        pytest.skip("git is required")

    home = tmp_path / "home"
    home.mkdir()
    global_config = home / ".gitconfig"
    _ = global_config.write_text(
        "[user]\n"
        "\tname = Test User\n"
        "\temail = test@example.com\n"
        "[init]\n"
        "\tdefaultBranch = main\n"
    )
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(global_config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.delenv("GIT_DIR", raising=False)
    monkeypatch.delenv("GIT_WORK_TREE", raising=False)
    return global_config


@pytest.fixture
def remote(tmp_path: Path) -> Path:
    """Empty bare repository standing in for the remote."""
    path = tmp_path / "remote.git"
    path.mkdir()
    _ = git(path, "init", "--bare")
    _ = git(path, "symbolic-ref", "HEAD", "refs/heads/main")
    return path


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Empty project directory that is not a repository yet."""
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def clone(tmp_path: Path, remote: Path) -> Callable[[str], Path]:
    """Return a function cloning the remote into a named directory."""

    def _clone(name: str) -> Path:
        dest = tmp_path / name
        _ = git(tmp_path, "clone", str(remote), str(dest))
        return dest

    return _clone


GitRunner = Callable[..., str]
SyncRunner = Callable[..., SyncResult]
VcsFactory = Callable[..., GitCli]


@pytest.fixture
def run_git() -> GitRunner:
    """Return a function running git in a directory and returning its output."""
    return git


@pytest.fixture
def vcs_factory() -> VcsFactory:
    """Return a function building the git adapter for a project directory.

    Large-file steps are real when git-lfs is installed and no-ops otherwise.
    """

    def _make(root: Path, logger: FilteringBoundLogger | None = None) -> GitCli:
        cls = GitCli if LFS_AVAILABLE else LfsFreeGitCli
        return cls(root, logger=logger)

    return _make


@pytest.fixture
def run_sync(project: Path, remote: Path, vcs_factory: VcsFactory) -> SyncRunner:
    """Return a function running one sync of ``project`` against ``remote``."""

    def _run(
        mode: SyncMode = SyncMode.SAFE,
        answers: list[str] | None = None,
        *,
        prompter: ScriptedPrompter | None = None,
        **sections: dict[str, object],
    ) -> SyncResult:
        config = Config.from_dict({"remote": {"url": str(remote)}, **sections})
        orchestrator = SyncOrchestrator(
            vcs_factory(project),
            prompter or ScriptedPrompter(answers or []),
            config,
            console=Console(file=StringIO(), width=200),
        )
        return orchestrator.run(mode)

    return _run
