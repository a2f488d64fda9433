# ruff: noqa: TC002  # DateTime needed at runtime for dataclass field
"""Git commit summary dataclass."""

from dataclasses import dataclass

import pendulum
from pendulum import DateTime


@dataclass(frozen=True, slots=True)
class CommitSummary:
    """One-line description of a commit.

    Attributes:
        sha: Full commit SHA hex string.
        subject: First line of the commit message.
        committed_at: Committer timestamp.
    """

    sha: str
    subject: str
    committed_at: DateTime

    @property
    def short_sha(self) -> str:
        """Abbreviated 7-character SHA."""
        return self.sha[:7]

    def describe(self, now: DateTime | None = None) -> str:
        """Render as ``<short sha> - <subject> (<age> ago)``.

        Args:
            now: Reference time for the relative age. Defaults to now.

        Returns:
            The formatted description.
        """
        reference = now if now is not None else pendulum.now()
        age = self.committed_at.diff_for_humans(reference, absolute=True)
        return f"{self.short_sha} - {self.subject} ({age} ago)"
