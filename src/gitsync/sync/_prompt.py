"""Operator prompts for sync runs.

This module defines the protocol the orchestrator uses to ask the operator
questions, a terminal implementation and a scripted one for tests.
"""

from __future__ import annotations

import sys
from collections import deque
from typing import TYPE_CHECKING, Protocol, TextIO, runtime_checkable

from rich.console import Console
from rich.text import Text

from gitsync.sync._models import TriageChoice
from gitsync.sync._triage import parse_choice

if TYPE_CHECKING:
    from collections.abc import Iterable

CONTROLLING_TERMINAL = "/dev/tty"

_AFFIRMATIVE_ANSWERS: frozenset[str] = frozenset({"y", "Y"})

_CHOICE_STYLES: dict[TriageChoice, str] = {
    TriageChoice.IGNORE: "red",
    TriageChoice.LFS: "blue",
    TriageChoice.TRACK: "green",
    TriageChoice.SKIP: "",
}


def is_affirmative(answer: str) -> bool:
    """Check whether a confirmation answer is exactly ``y`` or ``Y``."""
    return answer.strip() in _AFFIRMATIVE_ANSWERS


@runtime_checkable
class PrompterProtocol(Protocol):
    """Questions a sync run asks the operator."""

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question where anything but yes means no.

        Args:
            message: The question to display.

        Returns:
            True only for an affirmative answer.
        """
        ...

    def choose(self, path: str) -> TriageChoice:
        """Ask what to do with an untracked path.

        Args:
            path: The untracked path, relative to the project directory.

        Returns:
            The selected choice. Empty or unrecognized input selects SKIP.
        """
        ...


class TerminalPrompter:
    """Prompter that reads answers from the controlling terminal.

    Answers are read from ``/dev/tty`` so that prompts keep working when
    standard input is redirected. When no terminal can be opened, standard
    input is used instead. End of input counts as an empty answer.
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        tty_path: str = CONTROLLING_TERMINAL,
    ) -> None:
        """Initialize the prompter.

        Args:
            console: Console used to render questions. If None, creates one.
            tty_path: Terminal device to read answers from.
        """
        self._console: Console = console or Console()
        self._tty_path: str = tty_path
        self._stream: TextIO | None = None
        self._owns_stream: bool = False

    def _input_stream(self) -> TextIO:
        if self._stream is None:
            try:
                self._stream = open(self._tty_path, encoding="utf-8")  # noqa: SIM115
                self._owns_stream = True
            except OSError:
                self._stream = sys.stdin
        return self._stream

    def _ask(self, prompt: str | Text) -> str:
        return self._console.input(prompt, stream=self._input_stream()).strip()

    def close(self) -> None:
        """Close the terminal device if this prompter opened it."""
        if self._stream is not None and self._owns_stream:
            self._stream.close()
        self._stream = None
        self._owns_stream = False

    def confirm(self, message: str) -> bool:
        answer = self._ask(Text.assemble((message, "bold yellow"), " (y/N): "))
        return is_affirmative(answer)

    def choose(self, path: str) -> TriageChoice:
        self._console.print(
            Text.assemble("Untracked item found: ", (path, "bold"), ". What to do?")
        )
        for choice in TriageChoice:
            self._console.print(
                Text.assemble(f"   {choice.value}. ", (choice.label, _CHOICE_STYLES[choice]))
            )
        answer = self._ask(f"   Your choice [1-4, default={TriageChoice.SKIP.value}]: ")
        return parse_choice(answer)


class ScriptedPrompter:
    """Prompter that replays predefined answers.

    Answers are consumed in order by both ``confirm`` and ``choose``. Once
    they run out every question gets an empty answer, which declines a
    confirmation and skips a path.

    Attributes:
        prompts: Every question asked, in order.

    Example:
        >>> prompter = ScriptedPrompter(["y", "3"])
        >>> prompter.confirm("Continue?")
        True
        >>> prompter.choose("notes.txt")
        <TriageChoice.TRACK: '3'>
    """

    def __init__(self, answers: Iterable[str] = ()) -> None:
        """Initialize with the answers to replay."""
        self._answers: deque[str] = deque(answers)
        self.prompts: list[str] = []

    @property
    def remaining(self) -> int:
        """Number of answers not consumed yet."""
        return len(self._answers)

    def _next_answer(self) -> str:
        return self._answers.popleft() if self._answers else ""

    def confirm(self, message: str) -> bool:
        self.prompts.append(message)
        return is_affirmative(self._next_answer())

    def choose(self, path: str) -> TriageChoice:
        self.prompts.append(path)
        return parse_choice(self._next_answer())
