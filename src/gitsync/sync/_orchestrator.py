"""Sync orchestrator.

Drives one interactive sync run: repository preparation followed by either a
safe rebase-based sync or a forced mirror of the local state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pendulum
from rich.console import Console
from rich.markup import escape

from gitsync.exceptions import (
    GitCommandError,
    GitSyncError,
    PushRejectedError,
    RebaseError,
    RemoteNotConfiguredError,
    StashRestoreError,
)
from gitsync.sync._models import SyncMode, SyncOutcome, SyncResult, TriageDecision
from gitsync.sync._triage import triage_untracked
from gitsync.utils import create_null_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from pendulum import DateTime
    from structlog.typing import FilteringBoundLogger

    from gitsync.config import Config
    from gitsync.sync._prompt import PrompterProtocol
    from gitsync.vcs import VcsProtocol

STASH_MESSAGE = "gitsync: automatic stash before sync"
TIMESTAMP_PLACEHOLDER = "{timestamp}"

_RULE = "=" * 44


def render_message(template: str, timestamp: DateTime, timestamp_format: str) -> str:
    """Render a commit message template.

    Args:
        template: Message that may contain a ``{timestamp}`` placeholder.
        timestamp: Time substituted for the placeholder.
        timestamp_format: pendulum format tokens for the timestamp.

    Returns:
        The message. Braces other than the placeholder are kept verbatim.

    Examples:
        >>> render_message(
        ...     "feat(auto): sync files at {timestamp}",
        ...     pendulum.datetime(2026, 3, 1, 9, 30),
        ...     "YYYY-MM-DD HH:mm",
        ... )
        'feat(auto): sync files at 2026-03-01 09:30'
    """
    return template.replace(TIMESTAMP_PLACEHOLDER, timestamp.format(timestamp_format))


class SyncOrchestrator:
    """Runs the preparation, sync, and publish steps against a repository.

    The orchestrator owns no state between runs. Operator-facing progress
    goes to ``console``; structured events go to ``logger``.
    """

    def __init__(
        self,
        vcs: VcsProtocol,
        prompter: PrompterProtocol,
        config: Config,
        *,
        console: Console | None = None,
        logger: FilteringBoundLogger | None = None,
        clock: Callable[[], DateTime] = pendulum.now,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            vcs: Repository adapter commands are issued through.
            prompter: Source of operator confirmations and triage choices.
            config: Effective configuration.
            console: Console for progress lines. If None, creates one.
            logger: Structured event logger. If None, events are discarded.
            clock: Returns the current time for messages and the report.
        """
        self._vcs: VcsProtocol = vcs
        self._prompter: PrompterProtocol = prompter
        self._config: Config = config
        self._console: Console = console or Console()
        self._logger: FilteringBoundLogger = logger or create_null_logger()
        self._clock: Callable[[], DateTime] = clock

    # =========================================================================
    # Entry point
    # =========================================================================

    def run(self, mode: SyncMode) -> SyncResult:
        """Execute one sync run.

        In FORCE mode the operator is asked for confirmation before anything
        is changed; declining ends the run with outcome CANCELLED.

        Args:
            mode: Which protocol to run.

        Returns:
            Summary of the run.

        Raises:
            GitSyncError: If any step fails. The repository is left as the
                failing step left it.
        """
        remote = self._config.remote
        self._logger.info(
            "sync_started",
            mode=mode.value,
            root=str(self._vcs.root),
            remote=remote.name,
            branch=remote.branch,
        )
        self._console.log(f"[blue]{_RULE}[/blue]")
        self._console.log("[blue]  STARTING SYNC[/blue]")
        self._console.log(f"[blue]{_RULE}[/blue]")

        try:
            if mode is SyncMode.FORCE:
                if not self.confirm_force():
                    self._console.log("[green]Operation cancelled by the user.[/green]")
                    self._logger.info("sync_cancelled", mode=mode.value)
                    return SyncResult(mode=mode, outcome=SyncOutcome.CANCELLED)
                self.prepare()
                return self.force_mirror()

            self.prepare()
            return self.safe_sync()
        except GitSyncError as e:
            self._logger.error(
                "sync_failed",
                mode=mode.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

    # =========================================================================
    # Preparation
    # =========================================================================

    def prepare(self) -> None:
        """Make sure a repository, a remote, and the LFS hooks are in place.

        Raises:
            RemoteNotConfiguredError: If no remote URL is configured and the
                remote does not exist.
            GitCommandError: If a setup command fails.
        """
        repository = self._config.repository
        remote = self._config.remote
        root = self._vcs.root

        self._console.log(f"[yellow]Project directory: {escape(str(root))}[/yellow]")

        if repository.mark_safe_directory and not self._vcs.is_safe_directory():
            self._vcs.add_safe_directory()

        if not self._vcs.is_repository():
            self._console.log(
                "[yellow]No git repository found. Initializing a new one...[/yellow]"
            )
            self._vcs.init(repository.initial_branch)

        current_url = self._vcs.get_remote_url(remote.name)
        if remote.url:
            self._console.log(
                f"[blue]Configuring remote '{remote.name}': {escape(remote.url)}[/blue]"
            )
            if current_url is None:
                self._vcs.add_remote(remote.name, remote.url)
            elif current_url != remote.url:
                self._vcs.set_remote_url(remote.name, remote.url)
        elif current_url is None:
            msg = (
                f"Remote '{remote.name}' does not exist and no remote URL is configured; "
                "set remote.url or pass --remote-url"
            )
            raise RemoteNotConfiguredError(msg, remote=remote.name)
        else:
            self._console.log(
                f"[blue]Using remote '{remote.name}': {escape(current_url)}[/blue]"
            )

        self._vcs.lfs_install()

    # =========================================================================
    # Force-Mirror
    # =========================================================================

    def confirm_force(self) -> bool:
        """Warn about the forced mirror and ask the operator to confirm."""
        branch = self._config.remote.branch
        self._console.log("[bold red]FORCE MODE ENABLED[/bold red]")
        self._console.log(
            "[yellow]The remote repository will become an exact mirror of the "
            "local directory.[/yellow]"
        )
        self._console.log(
            f"[red]WARNING: commits on the remote '{escape(branch)}' branch that are "
            "not present locally will be lost.[/red]"
        )
        return self._prompter.confirm("Are you sure you want to continue?")

    def force_mirror(self) -> SyncResult:
        """Mirror the local state to the remote, overwriting its history.

        Expects a prepared repository and a confirmed operator.

        Returns:
            Summary with outcome PUSHED.

        Raises:
            PushRejectedError: If the forced push fails.
            GitCommandError: If staging or the LFS upload fails.
        """
        remote = self._config.remote
        commit = self._config.commit

        self._console.log("[blue]Staging all files...[/blue]")
        self._vcs.add_all()

        self._console.log("[blue]Creating mirror commit...[/blue]")
        message = render_message(commit.mirror_message, self._clock(), commit.timestamp_format)
        try:
            self._vcs.commit(message)
        except GitCommandError as e:
            self._console.log("[yellow]Nothing new to commit; pushing current state.[/yellow]")
            self._logger.info("mirror_commit_skipped", reason=str(e))

        self._console.log("[blue]Uploading large files via Git LFS (if any)...[/blue]")
        self._vcs.lfs_push_all(remote.name, remote.branch)

        self._console.log(f"[red]Force-pushing to '{escape(remote.branch)}'...[/red]")
        try:
            self._vcs.push(remote.name, remote.branch, force=True)
        except GitCommandError as e:
            msg = f"Forced push to {remote.name}/{remote.branch} failed: {e}"
            raise PushRejectedError(
                msg, remote=remote.name, branch=remote.branch, force=True
            ) from e

        return self.report(SyncMode.FORCE)

    # =========================================================================
    # Safe-Sync
    # =========================================================================

    def safe_sync(self) -> SyncResult:
        """Rebase onto the remote, triage untracked files, commit, and push.

        Expects a prepared repository.

        Returns:
            Summary with outcome PUSHED, or UP_TO_DATE when nothing changed.

        Raises:
            RebaseError: If rebasing onto the remote branch fails.
            StashRestoreError: If the automatic stash cannot be reapplied.
            PushRejectedError: If the remote rejects the push.
            GitCommandError: If any other command fails.
        """
        remote = self._config.remote
        commit = self._config.commit

        self._console.log("[green]Running in safe sync mode.[/green]")

        stashed = self._stash_tracked_changes()
        self._converge_with_remote(stashed=stashed)

        self._console.log("[blue]Updating submodules (if any) to their remote versions...[/blue]")
        self._vcs.update_submodules()

        if stashed:
            self._restore_stash()

        decisions = triage_untracked(
            self._vcs,
            self._prompter,
            self._config.files,
            console=self._console,
            logger=self._logger,
        )

        self._vcs.add_tracked()

        if not self._vcs.has_changes():
            self._console.log(
                "[green]Local repository is already in sync. Nothing new to push.[/green]"
            )
            self._logger.info("sync_up_to_date", stashed=stashed, decisions=len(decisions))
            return SyncResult(
                mode=SyncMode.SAFE,
                outcome=SyncOutcome.UP_TO_DATE,
                stashed=stashed,
                decisions=decisions,
            )

        self._console.log("[blue]Committing local changes...[/blue]")
        message = render_message(commit.sync_message, self._clock(), commit.timestamp_format)
        self._vcs.commit(message)

        self._console.log("[blue]Uploading large files via Git LFS (if any)...[/blue]")
        self._vcs.lfs_push_all(remote.name, remote.branch)

        self._console.log("[green]Pushing changes to the remote...[/green]")
        try:
            self._vcs.push(remote.name, remote.branch)
        except GitCommandError as e:
            msg = f"Push to {remote.name}/{remote.branch} was rejected: {e}"
            raise PushRejectedError(msg, remote=remote.name, branch=remote.branch) from e

        return self.report(SyncMode.SAFE, stashed=stashed, decisions=decisions)

    def _stash_tracked_changes(self) -> bool:
        if not self._vcs.has_head():
            self._console.log("[green]No commits yet. No stash needed.[/green]")
            return False

        if not self._vcs.has_tracked_changes():
            self._console.log("[green]No changes to tracked files. No stash needed.[/green]")
            return False

        self._console.log(
            "[yellow]Changes to tracked files detected. Stashing them temporarily...[/yellow]"
        )
        self._vcs.stash_push(STASH_MESSAGE)
        self._console.log("[green]    Changes stashed.[/green]")
        self._logger.info("stash_created", message=STASH_MESSAGE)
        return True

    def _converge_with_remote(self, *, stashed: bool) -> None:
        remote = self._config.remote

        if not self._vcs.remote_branch_exists(remote.name, remote.branch):
            self._console.log(
                f"[yellow]Branch '{escape(remote.branch)}' does not exist on "
                f"'{remote.name}' yet. Skipping rebase.[/yellow]"
            )
            self._logger.info("rebase_skipped", remote=remote.name, branch=remote.branch)
            return

        self._console.log("[blue]Syncing with the remote (pull --rebase)...[/blue]")
        try:
            self._vcs.pull_rebase(remote.name, remote.branch)
        except GitCommandError as e:
            msg = f"Rebase onto {remote.name}/{remote.branch} failed; resolve it manually"
            if stashed:
                msg += f" (local changes are kept in the stash '{STASH_MESSAGE}')"
            raise RebaseError(f"{msg}: {e}", remote=remote.name, branch=remote.branch) from e

    def _restore_stash(self) -> None:
        self._console.log("[blue]Restoring stashed local changes...[/blue]")
        if not self._vcs.stash_pop():
            msg = (
                "Conflict while restoring stashed changes. They are still saved in "
                f"the stash '{STASH_MESSAGE}'; resolve the conflicts shown in the files"
            )
            raise StashRestoreError(msg, stash_message=STASH_MESSAGE)
        self._console.log("[green]    Changes restored.[/green]")
        self._logger.info("stash_restored")

    # =========================================================================
    # Report
    # =========================================================================

    def report(
        self,
        mode: SyncMode,
        *,
        stashed: bool = False,
        decisions: tuple[TriageDecision, ...] = (),
    ) -> SyncResult:
        """Print the completion banner and the last pushed commit.

        Args:
            mode: Mode the run executed in.
            stashed: Whether a stash was created and restored.
            decisions: Triage decisions made during the run.

        Returns:
            Summary with outcome PUSHED.
        """
        last_commit = self._vcs.last_commit()

        self._console.log(f"[green]{_RULE}[/green]")
        self._console.log("[green]    SYNC COMPLETED SUCCESSFULLY[/green]")
        self._console.log(f"[green]{_RULE}[/green]")
        if last_commit is not None:
            self._console.log("[yellow]Last commit pushed:[/yellow]")
            self._console.print(last_commit.describe(self._clock()), markup=False)
        self._console.log(f"[green]{_RULE}[/green]")

        remote = self._config.remote
        self._logger.info(
            "sync_pushed",
            mode=mode.value,
            remote=remote.name,
            branch=remote.branch,
            commit=last_commit.sha if last_commit else None,
            stashed=stashed,
            decisions=len(decisions),
        )

        return SyncResult(
            mode=mode,
            outcome=SyncOutcome.PUSHED,
            stashed=stashed,
            decisions=decisions,
            last_commit=last_commit,
        )
