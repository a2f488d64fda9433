"""Configuration source discovery.

This module locates the repository whose configuration applies and lists
every configuration source in precedence order.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from gitsync.utils import (
    find_worktree_root,
    get_local_config_path,
    get_project_config_path,
    get_user_config_path,
)

from ._defaults import DEFAULT_CONFIG
from ._models._common import ConfigSource, ConfigSourceName


def find_project_root(start: Path | None = None) -> Path:
    """Find the directory gitsync operates on.

    The root of the enclosing git worktree when there is one, otherwise the
    starting directory itself (a repository is created there on first sync).

    Args:
        start: Directory to start searching from. Defaults to the current
            working directory.

    Returns:
        Absolute path of the project directory.
    """
    base = (start or Path.cwd()).resolve()
    return find_worktree_root(base) or base


def _file_exists(path: Path) -> bool:
    """Check if a file exists, handling permission errors gracefully."""
    try:
        return path.is_file()
    except OSError:
        return False


def _file_source(name: ConfigSourceName, path: Path) -> ConfigSource:
    return ConfigSource(name=name, path=path, exists=_file_exists(path), values={})


def discover_sources(
    project_root: Path | None = None,
    *,
    include_env: bool = True,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> list[ConfigSource]:
    """Discover all configuration sources.

    Sources are returned in precedence order, highest first. File-based
    sources are checked for existence and included either way.

    Args:
        project_root: Project directory. If None, auto-detect from the
            current directory.
        include_env: Include environment variables as a source.
        cli_overrides: Values given on the command line. A CLI source is
            listed only when this is not None.

    Returns:
        List of ConfigSource objects in precedence order (highest first).

    Examples:
        >>> sources = discover_sources(Path("/srv/project"))
        >>> [s.name.value for s in sources]
        ['env', 'local', 'project', 'user', 'default']
    """
    sources: list[ConfigSource] = []
    resolved_root = project_root.resolve() if project_root else find_project_root()

    if cli_overrides is not None:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.CLI,
                path=None,
                exists=bool(cli_overrides),
                values=cli_overrides,
            )
        )

    if include_env:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.ENV,
                path=None,
                exists=True,  # Actual values parsed during loading phase
                values={},
            )
        )

    sources.append(
        _file_source(ConfigSourceName.LOCAL, get_local_config_path(resolved_root))
    )
    sources.append(
        _file_source(ConfigSourceName.PROJECT, get_project_config_path(resolved_root))
    )
    sources.append(_file_source(ConfigSourceName.USER, get_user_config_path()))

    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )

    return sources
