from pathlib import Path

import platformdirs

APP_NAME = "gitsync"


def get_user_config_path() -> Path:
    r"""Get platform-specific user config file path.

    - Linux: ``~/.config/gitsync/config.toml``
    - macOS: ``~/Library/Application Support/gitsync/config.toml``
    - Windows: ``%APPDATA%\gitsync\config.toml``

    The path is returned regardless of whether the file exists.
    """
    return platformdirs.user_config_path(APP_NAME) / "config.toml"


def get_log_dir() -> Path:
    """Get the platform-specific user log directory for gitsync."""
    return platformdirs.user_log_path(APP_NAME)


def get_default_log_file() -> Path:
    """Get the path to the default sync log file."""
    return get_log_dir() / "sync.log"


def get_project_config_path(root: Path) -> Path:
    """Get the path to the versioned project config file."""
    return root / ".gitsync.toml"


def get_local_config_path(root: Path) -> Path:
    """Get the path to the unversioned, repository-local config file."""
    return root / ".git" / "gitsync.toml"
