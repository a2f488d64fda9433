"""Shared test fixtures for gitsync tests."""

import os
from pathlib import Path

import pytest
from rich.console import Console


@pytest.fixture(autouse=True)
def isolated_user_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep tests away from the real user config, log file and environment.

    Returns:
        Directory that stands in for the user's config and log directories.
    """
    user_dir = tmp_path / "user"

    for key in list(os.environ):
        if key.startswith("GITSYNC_"):
            monkeypatch.delenv(key)

    monkeypatch.setattr(
        "gitsync.config._discovery.get_user_config_path",
        lambda: user_dir / "config.toml",
    )
    monkeypatch.setattr(
        "gitsync.utils._logging.get_default_log_file",
        lambda: user_dir / "logs" / "sync.log",
    )
    return user_dir


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )
