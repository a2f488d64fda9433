from pathlib import Path

import pytest

from gitsync.config import STRICT_CONFIG_ENV_VAR, safe_load_config


def _write(path: Path, content: str) -> Path:
    _ = path.write_text(content)
    return path


class TestSafeLoadConfig:
    def test_loads_project_config(self, tmp_path: Path) -> None:
        _ = _write(tmp_path / ".gitsync.toml", '[remote]\nbranch = "dev"\n')

        config, error = safe_load_config(project_root=tmp_path)

        assert error is None
        assert config.remote.branch == "dev"

    def test_explicit_path_with_overrides(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "custom.toml", '[remote]\nurl = "file-url"\n')

        config, error = safe_load_config(
            config_path=path, cli_overrides={"remote": {"branch": "cli-branch"}}
        )

        assert error is None
        assert config.remote.url == "file-url"
        assert config.remote.branch == "cli-branch"

    def test_missing_explicit_path_exits(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _ = safe_load_config(config_path=tmp_path / "missing.toml")

        assert exc_info.value.code == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_invalid_config_falls_back_to_defaults(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _ = _write(tmp_path / ".gitsync.toml", '[logging]\nlevel = "loud"\n')

        config, error = safe_load_config(project_root=tmp_path)

        assert error is not None
        assert "logging.level" in error
        assert config.logging.level.value == "info"
        assert "Warning: Failed to load config" in capsys.readouterr().err

    def test_fallback_keeps_valid_cli_overrides(self, tmp_path: Path) -> None:
        _ = _write(tmp_path / ".gitsync.toml", "[remote\n")

        config, error = safe_load_config(
            project_root=tmp_path, cli_overrides={"remote": {"url": "cli-url"}}
        )

        assert error is not None
        assert config.remote.url == "cli-url"

    def test_strict_mode_exits_on_error(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv(STRICT_CONFIG_ENV_VAR, "1")
        _ = _write(tmp_path / ".gitsync.toml", "[remote\n")

        with pytest.raises(SystemExit) as exc_info:
            _ = safe_load_config(project_root=tmp_path)

        assert exc_info.value.code == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_strict_mode_rejects_unknown_keys(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv(STRICT_CONFIG_ENV_VAR, "1")
        _ = _write(tmp_path / ".gitsync.toml", '[remote]\ncolour = "blue"\n')

        with pytest.raises(SystemExit) as exc_info:
            _ = safe_load_config(project_root=tmp_path)

        assert exc_info.value.code == 1
        assert "remote.colour" in capsys.readouterr().err

    def test_unknown_keys_allowed_outside_strict_mode(self, tmp_path: Path) -> None:
        _ = _write(tmp_path / ".gitsync.toml", '[remote]\ncolour = "blue"\n')

        _, error = safe_load_config(project_root=tmp_path)

        assert error is None
