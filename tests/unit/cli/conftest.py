from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console
from structlog.typing import FilteringBoundLogger

from gitsync.cli import create_app
from gitsync.sync import PrompterProtocol, ScriptedPrompter
from gitsync.vcs import FakeVcs

CliRunner = Callable[..., int]


@pytest.fixture
def vcs_roots() -> list[Path]:
    """Project directories the CLI built an adapter for."""
    return []


@pytest.fixture
def gitsync_cli(
    console: Console, fake_vcs: FakeVcs, vcs_roots: list[Path]
) -> Callable[..., CliRunner]:
    """Return a factory for a CLI runner wired to ``fake_vcs``.

    The factory takes the operator answers (or a prompter) and returns a
    callable that runs the CLI and returns its exit code.
    """

    def _factory(
        answers: list[str] | None = None, *, prompter: PrompterProtocol | None = None
    ) -> CliRunner:
        def _make_vcs(root: Path, logger: FilteringBoundLogger) -> FakeVcs:
            vcs_roots.append(root)
            return fake_vcs

        app = create_app(
            console=console,
            error_console=console,
            prompter=prompter or ScriptedPrompter(answers or []),
            vcs_factory=_make_vcs,
        )

        def _run(*args: str) -> int:
            try:
                app([*args, "--project-root", str(fake_vcs.root)])
            except SystemExit as e:
                return e.code if isinstance(e.code, int) else 1
            else:
                return 0

        return _run

    return _factory
