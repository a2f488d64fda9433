from pathlib import Path
from unittest.mock import MagicMock

import pytest
from dulwich.repo import Repo
from pytest_mock import MockerFixture

from gitsync.exceptions import GitCommandError
from gitsync.utils import CommandResult
from gitsync.vcs import GitCli, VcsProtocol


def _ok(stdout: str = "", exit_code: int = 0, stderr: str = "") -> CommandResult:
    return CommandResult(success=True, exit_code=exit_code, stdout=stdout, stderr=stderr)


@pytest.fixture
def run_command(mocker: MockerFixture) -> MagicMock:
    mock = mocker.patch("gitsync.vcs._git.run_command")
    mock.return_value = _ok()
    return mock


@pytest.fixture
def git(tmp_path: Path) -> GitCli:
    return GitCli(tmp_path)


def _argv(mock: MagicMock) -> list[tuple[str, ...]]:
    return [call.args[0].args for call in mock.call_args_list]


class TestGitCliBasics:
    def test_conforms_to_protocol(self, git: GitCli) -> None:
        assert isinstance(git, VcsProtocol)

    def test_root_is_resolved(self, tmp_path: Path) -> None:
        assert GitCli(tmp_path / "." / "x" / "..").root == tmp_path.resolve()

    def test_runs_in_project_directory(
        self, git: GitCli, run_command: MagicMock, tmp_path: Path
    ) -> None:
        git.add_all()

        config = run_command.call_args.args[0]
        assert config.cwd == tmp_path.resolve()
        assert config.args == ("git", "add", "--all")

    def test_custom_executable(self, tmp_path: Path, run_command: MagicMock) -> None:
        GitCli(tmp_path, git="/opt/git/bin/git").add_tracked()

        assert _argv(run_command) == [("/opt/git/bin/git", "add", "--update")]

    def test_non_zero_exit_raises(self, git: GitCli, run_command: MagicMock) -> None:
        run_command.return_value = _ok(exit_code=1, stderr="! [rejected]")

        with pytest.raises(GitCommandError) as exc_info:
            git.push("origin", "main")

        error = exc_info.value
        assert error.exit_code == 1
        assert error.command == ("git", "push", "origin", "main")
        assert "! [rejected]" in str(error)

    def test_missing_executable_raises(
        self, git: GitCli, run_command: MagicMock
    ) -> None:
        run_command.return_value = CommandResult(
            success=False, error="No such file", command_not_found=True
        )

        with pytest.raises(GitCommandError) as exc_info:
            git.add_all()

        assert exc_info.value.exit_code is None
        assert "Failed to execute git" in str(exc_info.value)


class TestGitCliRepositorySetup:
    def test_is_repository(self, tmp_path: Path) -> None:
        git = GitCli(tmp_path)
        assert git.is_repository() is False

        Repo.init(str(tmp_path)).close()

        assert git.is_repository() is True

    def test_init_renames_branch(self, git: GitCli, run_command: MagicMock) -> None:
        git.init("trunk")

        assert _argv(run_command) == [
            ("git", "init"),
            ("git", "branch", "-M", "trunk"),
        ]

    @pytest.mark.parametrize(
        ("stdout", "expected"),
        [("", False), ("/elsewhere\n", False), ("*\n", True)],
    )
    def test_is_safe_directory(
        self, git: GitCli, run_command: MagicMock, stdout: str, expected: bool
    ) -> None:
        run_command.return_value = _ok(stdout=stdout, exit_code=0 if stdout else 1)

        assert git.is_safe_directory() is expected

    def test_is_safe_directory_matches_root(
        self, git: GitCli, run_command: MagicMock
    ) -> None:
        run_command.return_value = _ok(stdout=f"/elsewhere\n{git.root}\n")

        assert git.is_safe_directory() is True

    def test_add_safe_directory(self, git: GitCli, run_command: MagicMock) -> None:
        git.add_safe_directory()

        assert _argv(run_command) == [
            ("git", "config", "--global", "--add", "safe.directory", str(git.root))
        ]

    def test_get_remote_url(self, git: GitCli, run_command: MagicMock) -> None:
        run_command.return_value = _ok(stdout="git@example.com:team/project.git\n")

        assert git.get_remote_url("origin") == "git@example.com:team/project.git"
        assert _argv(run_command) == [("git", "remote", "get-url", "origin")]

    def test_get_remote_url_missing(self, git: GitCli, run_command: MagicMock) -> None:
        run_command.return_value = _ok(exit_code=2, stderr="error: No such remote")

        assert git.get_remote_url("origin") is None

    def test_set_and_add_remote(self, git: GitCli, run_command: MagicMock) -> None:
        git.add_remote("origin", "url-a")
        git.set_remote_url("origin", "url-b")

        assert _argv(run_command) == [
            ("git", "remote", "add", "origin", "url-a"),
            ("git", "remote", "set-url", "origin", "url-b"),
        ]

    @pytest.mark.parametrize(("exit_code", "expected"), [(0, True), (2, False)])
    def test_remote_branch_exists(
        self, git: GitCli, run_command: MagicMock, exit_code: int, expected: bool
    ) -> None:
        run_command.return_value = _ok(exit_code=exit_code)

        assert git.remote_branch_exists("origin", "main") is expected
        assert _argv(run_command) == [
            ("git", "ls-remote", "--exit-code", "--heads", "origin", "main")
        ]

    def test_remote_branch_exists_raises_when_unreachable(
        self, git: GitCli, run_command: MagicMock
    ) -> None:
        run_command.return_value = _ok(exit_code=128, stderr="Could not read")

        with pytest.raises(GitCommandError) as exc_info:
            _ = git.remote_branch_exists("origin", "main")

        assert exc_info.value.exit_code == 128


class TestGitCliWorkingTree:
    @pytest.mark.parametrize(("exit_code", "expected"), [(0, True), (1, False)])
    def test_has_head(
        self, git: GitCli, run_command: MagicMock, exit_code: int, expected: bool
    ) -> None:
        run_command.return_value = _ok(exit_code=exit_code)

        assert git.has_head() is expected

    @pytest.mark.parametrize(("exit_code", "expected"), [(0, False), (1, True)])
    def test_has_tracked_changes(
        self, git: GitCli, run_command: MagicMock, exit_code: int, expected: bool
    ) -> None:
        run_command.side_effect = [_ok(exit_code=1), _ok(exit_code=exit_code)]

        assert git.has_tracked_changes() is expected
        assert _argv(run_command) == [
            ("git", "update-index", "-q", "--refresh"),
            ("git", "diff-index", "--quiet", "HEAD", "--"),
        ]

    def test_has_tracked_changes_raises_on_error(
        self, git: GitCli, run_command: MagicMock
    ) -> None:
        run_command.side_effect = [_ok(), _ok(exit_code=128, stderr="bad revision")]

        with pytest.raises(GitCommandError):
            _ = git.has_tracked_changes()

    @pytest.mark.parametrize(("stdout", "expected"), [("", False), ("M  a.txt\n", True)])
    def test_has_changes(
        self, git: GitCli, run_command: MagicMock, stdout: str, expected: bool
    ) -> None:
        run_command.return_value = _ok(stdout=stdout)

        assert git.has_changes() is expected
        assert _argv(run_command) == [
            ("git", "status", "--porcelain", "--untracked-files=no")
        ]

    def test_list_untracked_splits_on_nul(
        self, git: GitCli, run_command: MagicMock
    ) -> None:
        run_command.return_value = _ok(stdout="data.csv\0dir/with space.bin\0")

        assert git.list_untracked() == ["data.csv", "dir/with space.bin"]

    def test_list_untracked_empty(self, git: GitCli, run_command: MagicMock) -> None:
        assert git.list_untracked() == []


class TestGitCliSync:
    def test_stash_push(self, git: GitCli, run_command: MagicMock) -> None:
        git.stash_push("gitsync: stash")

        assert _argv(run_command) == [("git", "stash", "push", "-m", "gitsync: stash")]

    @pytest.mark.parametrize(("exit_code", "expected"), [(0, True), (1, False)])
    def test_stash_pop(
        self, git: GitCli, run_command: MagicMock, exit_code: int, expected: bool
    ) -> None:
        run_command.return_value = _ok(exit_code=exit_code)

        assert git.stash_pop() is expected

    def test_pull_rebase_and_submodules(
        self, git: GitCli, run_command: MagicMock
    ) -> None:
        git.pull_rebase("origin", "main")
        git.update_submodules()

        assert _argv(run_command) == [
            ("git", "pull", "--rebase", "origin", "main"),
            ("git", "submodule", "update", "--remote", "--merge"),
        ]


class TestGitCliPublishing:
    def test_add_paths(self, git: GitCli, run_command: MagicMock) -> None:
        git.add(["-weird-name", "b.txt"])

        assert _argv(run_command) == [("git", "add", "--", "-weird-name", "b.txt")]

    def test_add_nothing_is_noop(self, git: GitCli, run_command: MagicMock) -> None:
        git.add([])

        run_command.assert_not_called()

    def test_commit(self, git: GitCli, run_command: MagicMock) -> None:
        git.commit("feat(auto): sync files at 2024-01-01 00:00")

        assert _argv(run_command) == [
            ("git", "commit", "-m", "feat(auto): sync files at 2024-01-01 00:00")
        ]

    @pytest.mark.parametrize(
        ("force", "expected"),
        [
            (False, ("git", "push", "origin", "main")),
            (True, ("git", "push", "--force", "origin", "main")),
        ],
    )
    def test_push(
        self,
        git: GitCli,
        run_command: MagicMock,
        force: bool,
        expected: tuple[str, ...],
    ) -> None:
        git.push("origin", "main", force=force)

        assert _argv(run_command) == [expected]

    def test_last_commit_delegates_to_dulwich_helper(
        self, git: GitCli, mocker: MockerFixture
    ) -> None:
        helper = mocker.patch("gitsync.vcs._git.get_last_commit", return_value=None)

        assert git.last_commit() is None
        helper.assert_called_once_with(git.root)


class TestGitCliLfs:
    def test_lfs_commands(self, git: GitCli, run_command: MagicMock) -> None:
        git.lfs_install()
        git.lfs_track("assets/model.bin")
        git.lfs_push_all("origin", "main")

        assert _argv(run_command) == [
            ("git", "lfs", "install"),
            ("git", "lfs", "track", "--filename", "assets/model.bin"),
            ("git", "lfs", "push", "--all", "origin", "main"),
        ]


class TestGitCliLogging:
    def test_logs_each_command(self, tmp_path: Path, run_command: MagicMock) -> None:
        logger = MagicMock()
        git = GitCli(tmp_path, logger=logger)

        git.add_all()

        logger.debug.assert_called_once_with(
            "git_command", args=["add", "--all"], exit_code=0, stderr=""
        )
