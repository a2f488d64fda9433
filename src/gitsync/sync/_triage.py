"""Untracked-file triage.

Each untracked path is offered to the operator once and the chosen action is
applied before the next path is shown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from gitsync.sync._models import TriageChoice, TriageDecision
from gitsync.utils import append_ignore_entry

if TYPE_CHECKING:
    from rich.console import Console
    from structlog.typing import FilteringBoundLogger

    from gitsync.config import FilesConfig
    from gitsync.sync._prompt import PrompterProtocol
    from gitsync.vcs import VcsProtocol

_CHOICES_BY_KEY: dict[str, TriageChoice] = {choice.value: choice for choice in TriageChoice}


def parse_choice(answer: str) -> TriageChoice:
    """Map an operator answer to a triage choice.

    Surrounding whitespace is ignored. Empty or unrecognized answers select
    SKIP.

    Examples:
        >>> parse_choice("2")
        <TriageChoice.LFS: '2'>
        >>> parse_choice("")
        <TriageChoice.SKIP: '4'>
        >>> parse_choice("yes")
        <TriageChoice.SKIP: '4'>
    """
    return _CHOICES_BY_KEY.get(answer.strip(), TriageChoice.SKIP)


def apply_choice(
    vcs: VcsProtocol,
    path: str,
    choice: TriageChoice,
    files: FilesConfig,
    *,
    console: Console,
) -> None:
    """Apply one triage choice to an untracked path.

    Args:
        vcs: Repository adapter.
        path: Untracked path relative to the project directory.
        choice: What to do with it.
        files: Names of the ignore list and LFS attributes file.
        console: Console for progress lines.

    Raises:
        GitCommandError: If staging or LFS tracking fails.
    """
    shown = escape(path)
    match choice:
        case TriageChoice.IGNORE:
            console.log(f"   -> Adding '{shown}' to {files.ignore_file}...")
            if append_ignore_entry(vcs.root / files.ignore_file, path):
                console.log(f"[green]   '{shown}' added to {files.ignore_file}.[/green]")
            else:
                console.log(f"[yellow]   '{shown}' is already listed in {files.ignore_file}.[/yellow]")
            vcs.add([files.ignore_file])
        case TriageChoice.LFS:
            console.log(f"   -> Tracking '{shown}' with Git LFS...")
            vcs.lfs_track(path)
            vcs.add([files.lfs_attributes_file])
            vcs.add([path])
            console.log(f"[green]   '{shown}' is now tracked by Git LFS.[/green]")
        case TriageChoice.TRACK:
            console.log(f"   -> Tracking '{shown}'...")
            vcs.add([path])
            console.log(f"[green]   '{shown}' added.[/green]")
        case TriageChoice.SKIP:
            console.log(f"[yellow]   -> '{shown}' is skipped in this sync.[/yellow]")


def triage_untracked(
    vcs: VcsProtocol,
    prompter: PrompterProtocol,
    files: FilesConfig,
    *,
    console: Console,
    logger: FilteringBoundLogger,
) -> tuple[TriageDecision, ...]:
    """Walk every untracked path through the triage menu.

    The untracked list is read once; paths are handled in the order git
    lists them and none is offered twice.

    Args:
        vcs: Repository adapter.
        prompter: Source of operator decisions.
        files: Names of the ignore list and LFS attributes file.
        console: Console for progress lines.
        logger: Logger receiving a ``triage_decision`` event per path.

    Returns:
        The decisions made, in order.
    """
    console.log("[yellow]Checking for untracked files and directories...[/yellow]")
    decisions: list[TriageDecision] = []

    for path in vcs.list_untracked():
        choice = prompter.choose(path)
        apply_choice(vcs, path, choice, files, console=console)
        logger.info("triage_decision", path=path, choice=choice.name.lower())
        decisions.append(TriageDecision(path=path, choice=choice))

    return tuple(decisions)
