from collections.abc import Callable
from io import StringIO

import pytest
from rich.console import Console


@pytest.fixture
def log_console() -> Console:
    """Console writing plain, unwrapped lines to a buffer."""
    return Console(
        file=StringIO(),
        width=200,
        color_system=None,
        highlight=False,
        log_time=False,
        log_path=False,
    )


@pytest.fixture
def console_output(log_console: Console) -> Callable[[], str]:
    """Return a function reading everything written to ``log_console``."""

    def _read() -> str:
        file = log_console.file
        assert isinstance(file, StringIO)
        return file.getvalue()

    return _read
