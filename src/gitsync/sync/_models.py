"""Data models for sync runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gitsync.utils import CommitSummary


class SyncMode(StrEnum):
    """How local state is published to the remote."""

    SAFE = "safe"
    FORCE = "force"


class SyncOutcome(StrEnum):
    """How a sync run ended without error."""

    PUSHED = "pushed"
    UP_TO_DATE = "up_to_date"
    CANCELLED = "cancelled"


class TriageChoice(StrEnum):
    """Operator decision for one untracked path.

    Values are the menu keys shown to the operator.
    """

    IGNORE = "1"
    LFS = "2"
    TRACK = "3"
    SKIP = "4"

    @property
    def label(self) -> str:
        """Menu text for this choice."""
        return _CHOICE_LABELS[self]


_CHOICE_LABELS: dict[TriageChoice, str] = {
    TriageChoice.IGNORE: "Ignore permanently (add to the ignore list)",
    TriageChoice.LFS: "Track with Git LFS (data and large files)",
    TriageChoice.TRACK: "Track normally (source code and small files)",
    TriageChoice.SKIP: "Skip for now",
}


@dataclass(frozen=True, slots=True)
class TriageDecision:
    """A triage choice applied to one untracked path.

    Attributes:
        path: Path relative to the project directory, as listed by git.
        choice: What the operator chose.
    """

    path: str
    choice: TriageChoice


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Summary of a completed sync run.

    Attributes:
        mode: Mode the run executed in.
        outcome: How the run ended.
        stashed: Whether tracked changes were stashed and restored.
        decisions: Triage decisions in the order they were made.
        last_commit: HEAD after a push, None otherwise.
    """

    mode: SyncMode
    outcome: SyncOutcome
    stashed: bool = False
    decisions: tuple[TriageDecision, ...] = field(default_factory=tuple)
    last_commit: CommitSummary | None = None

    @property
    def pushed(self) -> bool:
        """Whether the run published to the remote."""
        return self.outcome is SyncOutcome.PUSHED
