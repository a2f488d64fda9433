"""Unit tests for logging utilities."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


class TestLogLevelFromString:
    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("debug", logging.DEBUG),
            ("info", logging.INFO),
            ("WARNING", logging.WARNING),
            ("error", logging.ERROR),
            ("bogus", logging.INFO),
        ],
    )
    def test_maps_names(self, level: str, expected: int) -> None:
        from gitsync.utils._logging import _log_level_from_string

        assert _log_level_from_string(level) == expected

    def test_debug_env_var_forces_debug(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from gitsync.utils._logging import _log_level_from_string

        monkeypatch.setenv("GITSYNC_DEBUG", "1")

        assert _log_level_from_string("error", respect_env=True) == logging.DEBUG
        assert _log_level_from_string("error") == logging.ERROR


class TestCreateLogger:
    def test_creates_log_directory_if_missing(self, fs: FakeFilesystem) -> None:
        from gitsync.utils._logging import _create_logger

        log_path = Path("/logs/test.log")
        assert not log_path.parent.exists()

        _ = _create_logger(str(log_path))

        assert log_path.parent.exists()

    def test_default_format_is_json(self, fs: FakeFilesystem) -> None:
        from gitsync.utils._logging import _create_logger

        logger = _create_logger("/logs/test.log")
        logger.info("sync_started", mode="safe")

        record = json.loads(Path("/logs/test.log").read_text().splitlines()[0])
        assert record["event"] == "sync_started"
        assert record["mode"] == "safe"
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_text_format(self, fs: FakeFilesystem) -> None:
        from gitsync.utils._logging import _create_logger

        logger = _create_logger("/logs/test.log", log_format="text")
        logger.info("stash_created", message="auto")

        log_content = Path("/logs/test.log").read_text()
        assert "stash_created" in log_content
        assert "message=auto" in log_content

    def test_filters_below_level(self, fs: FakeFilesystem) -> None:
        from gitsync.utils._logging import _create_logger

        logger = _create_logger("/logs/test.log", log_level=logging.WARNING)
        logger.info("ignored")
        logger.warning("kept")

        log_content = Path("/logs/test.log").read_text()
        assert "ignored" not in log_content
        assert "kept" in log_content


class TestCreateNullLogger:
    def test_discards_events(self) -> None:
        from gitsync.utils import create_null_logger

        logger = create_null_logger()
        logger.info("anything", key="value")
        logger.error("still_nothing")


class TestCreateCliLogger:
    def test_binds_command(self, fs: FakeFilesystem) -> None:
        from gitsync.utils import create_cli_logger

        logger = create_cli_logger(log_file="/logs/cli.log", command="sync")
        logger.info("sync_pushed")

        record = json.loads(Path("/logs/cli.log").read_text().splitlines()[0])
        assert record["command"] == "sync"
        assert record["event"] == "sync_pushed"

    def test_uses_default_log_file(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from gitsync.utils import create_cli_logger

        monkeypatch.setattr(
            "gitsync.utils._logging.get_default_log_file",
            lambda: Path("/default/logs/sync.log"),
        )

        logger = create_cli_logger()
        logger.info("sync_up_to_date")

        assert "sync_up_to_date" in Path("/default/logs/sync.log").read_text()

    def test_debug_events_written_when_level_is_debug(self, fs: FakeFilesystem) -> None:
        from gitsync.utils import create_cli_logger

        logger = create_cli_logger(level="debug", log_file="/logs/cli.log")
        logger.debug("git_command", args=["status"])

        assert "git_command" in Path("/logs/cli.log").read_text()

    def test_debug_events_dropped_at_info(self, fs: FakeFilesystem) -> None:
        from gitsync.utils import create_cli_logger

        logger = create_cli_logger(level="info", log_file="/logs/cli.log")
        logger.debug("git_command", args=["status"])

        assert Path("/logs/cli.log").read_text() == ""
