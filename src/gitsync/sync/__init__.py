"""Interactive sync runs.

This package drives a sync run against a repository adapter: preparation,
the safe rebase-based protocol or the forced mirror, untracked-file triage
and the completion report.

Example:
    >>> from gitsync.config import Config
    >>> from gitsync.sync import ScriptedPrompter, SyncMode, SyncOrchestrator
    >>> from gitsync.vcs import FakeVcs
    >>> vcs = FakeVcs(remotes={"origin": "git@example.com:team/repo.git"})
    >>> result = SyncOrchestrator(vcs, ScriptedPrompter(), Config.from_dict({})).run(
    ...     SyncMode.SAFE
    ... )
    >>> result.outcome
    <SyncOutcome.UP_TO_DATE: 'up_to_date'>
"""

from gitsync.sync._models import (
    SyncMode,
    SyncOutcome,
    SyncResult,
    TriageChoice,
    TriageDecision,
)
from gitsync.sync._orchestrator import (
    STASH_MESSAGE,
    SyncOrchestrator,
    render_message,
)
from gitsync.sync._prompt import (
    CONTROLLING_TERMINAL,
    PrompterProtocol,
    ScriptedPrompter,
    TerminalPrompter,
    is_affirmative,
)
from gitsync.sync._triage import apply_choice, parse_choice, triage_untracked

__all__ = [
    "CONTROLLING_TERMINAL",
    "STASH_MESSAGE",
    "PrompterProtocol",
    "ScriptedPrompter",
    "SyncMode",
    "SyncOrchestrator",
    "SyncOutcome",
    "SyncResult",
    "TerminalPrompter",
    "TriageChoice",
    "TriageDecision",
    "apply_choice",
    "is_affirmative",
    "parse_choice",
    "render_message",
    "triage_untracked",
]
