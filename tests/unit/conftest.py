from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pendulum import DateTime

    from gitsync.config import Config
    from gitsync.vcs import FakeVcs


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.unit)


FreezeTimeFunc = Callable[..., "DateTime"]


@pytest.fixture
def freeze_time(monkeypatch: pytest.MonkeyPatch) -> FreezeTimeFunc:
    """Return a function to freeze pendulum.now() to a fixed time."""
    import pendulum

    real_now = pendulum.now

    def _freeze(
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
    ) -> DateTime:
        fixed = pendulum.datetime(year, month, day, hour, minute, second, tz="UTC")

        def mock_now(tz: str | None = None) -> DateTime:
            return fixed if tz in (None, "UTC") else real_now(tz)

        monkeypatch.setattr("pendulum.now", mock_now)
        return fixed

    return _freeze


@pytest.fixture
def fake_vcs(tmp_path: Path) -> FakeVcs:
    """FakeVcs rooted in a real temporary directory with an origin remote."""
    from gitsync.vcs import FakeVcs

    root = tmp_path / "project"
    root.mkdir()
    return FakeVcs(
        root=root,
        remotes={"origin": "git@example.com:team/project.git"},
        remote_branches={("origin", "main")},
    )


@pytest.fixture
def make_config() -> Callable[..., Config]:
    """Return a factory building a Config from keyword sections."""
    from gitsync.config import Config

    def _make(**sections: dict[str, object]) -> Config:
        return Config.from_dict(dict(sections))

    return _make
