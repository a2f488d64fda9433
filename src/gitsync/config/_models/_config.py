# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Configuration container with typed access.

This module provides the main Config class that serves as the primary
interface for accessing gitsync configuration values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, TypeVar, overload

from pydantic import BaseModel, ConfigDict, PrivateAttr

from gitsync.config._defaults import DEFAULT_CONFIG
from gitsync.config._loader import deep_merge, parse_env_vars, read_toml_file
from gitsync.config._models._commit import CommitConfig
from gitsync.config._models._common import ConfigSource, ConfigSourceName
from gitsync.config._models._files import FilesConfig
from gitsync.config._models._logging import LoggingConfig
from gitsync.config._models._remote import RemoteConfig
from gitsync.config._models._repository import RepositoryConfig

if TYPE_CHECKING:
    from pathlib import Path
    from typing import Self

    from gitsync.config._validation import ConfigSchema

T = TypeVar("T")


class Config(BaseModel):
    """Configuration container with typed access.

    This class provides immutable, type-safe access to gitsync configuration.
    Use factory methods to create instances rather than the constructor.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())
    _remote: RemoteConfig = PrivateAttr(default_factory=RemoteConfig)
    _repository: RepositoryConfig = PrivateAttr(default_factory=RepositoryConfig)
    _files: FilesConfig = PrivateAttr(default_factory=FilesConfig)
    _commit: CommitConfig = PrivateAttr(default_factory=CommitConfig)
    _logging: LoggingConfig = PrivateAttr(default_factory=LoggingConfig)

    def __init__(
        self,
        *,
        _data: dict[str, Any] | None = None,
        _sources: tuple[ConfigSource, ...] = (),
        _schema: ConfigSchema | None = None,
    ) -> None:
        """Initialize configuration container.

        This constructor is intended for internal use. Use factory methods
        like from_dict(), from_file(), or load() to create Config instances.

        Args:
            _data: The complete merged configuration dictionary.
            _sources: Sources that contributed to this configuration.
            _schema: Validated sections parsed from ``_data``.
        """
        super().__init__()
        self._data = _data if _data is not None else {}
        self._sources = _sources
        if _schema is not None:
            self._remote = _schema.remote
            self._repository = _schema.repository
            self._files = _schema.files
            self._commit = _schema.commit
            self._logging = _schema.logging

    @classmethod
    def _from_merged(
        cls,
        merged: dict[str, Any],
        sources: tuple[ConfigSource, ...],
        *,
        source: str | None = None,
    ) -> Self:
        # Deferred import to avoid circular dependency
        from gitsync.config._validation import parse_config  # noqa: PLC0415

        schema = parse_config(merged, source=source)
        return cls(_data=merged, _sources=sources, _schema=schema)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create configuration from a dictionary.

        Args:
            data: Dictionary of configuration values, merged over the defaults.

        Returns:
            Configuration object from the dictionary.

        Raises:
            ConfigValidationError: If validation fails.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        return cls._from_merged(merged, ())

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a specific file.

        Args:
            path: Path to the TOML config file.

        Returns:
            Configuration object from the specified file only.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        data = read_toml_file(path)
        source = ConfigSource(
            name=ConfigSourceName.PROJECT,  # Treat single file as project source
            path=path,
            exists=True,
            values=data,
        )
        merged = deep_merge(DEFAULT_CONFIG, data)
        return cls._from_merged(merged, (source,), source=str(path))

    @classmethod
    def load(
        cls,
        *,
        project_root: Path | None = None,
        include_env: bool = True,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load merged configuration from all sources.

        Discovers all configuration sources and merges them in precedence order
        (defaults -> user -> project -> local -> env -> cli).

        Args:
            project_root: Repository root. If None, auto-detect from the
                current directory.
            include_env: Include environment variables as a source.
            cli_overrides: Dict of CLI argument overrides.

        Returns:
            Merged configuration object.

        Raises:
            ConfigLoadError: If config files cannot be loaded.
            ConfigValidationError: If merged config fails validation.
        """
        from gitsync.config._discovery import discover_sources  # noqa: PLC0415

        sources = discover_sources(
            project_root=project_root,
            include_env=include_env,
            cli_overrides=cli_overrides,
        )

        # Sources are discovered highest-to-lowest, so reverse for merging
        merged: dict[str, Any] = {}
        loaded_sources: list[ConfigSource] = []

        for source in reversed(sources):
            values: dict[str, Any] = {}

            if source.name == ConfigSourceName.ENV:
                values = parse_env_vars()
            elif source.path is None:
                # Default and CLI values are pre-populated
                values = source.values
            elif source.exists:
                values = read_toml_file(source.path)

            loaded_sources.append(
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                )
            )

            if values:
                merged = deep_merge(merged, values)

        return cls._from_merged(merged, tuple(reversed(loaded_sources)))

    def with_overrides(self, overrides: dict[str, Any]) -> Self:
        """Return a copy with CLI overrides merged on top.

        Args:
            overrides: Nested dictionary of override values.

        Returns:
            New configuration object; this one is unchanged.

        Raises:
            ConfigValidationError: If the overridden config fails validation.
        """
        source = ConfigSource(
            name=ConfigSourceName.CLI,
            path=None,
            exists=bool(overrides),
            values=overrides,
        )
        merged = deep_merge(self._data, overrides)
        return self._from_merged(merged, (source, *self._sources))

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed to this configuration."""
        return list(self._sources)

    @property
    def remote(self) -> RemoteConfig:
        """Return the remote configuration section."""
        return self._remote

    @property
    def repository(self) -> RepositoryConfig:
        """Return the repository setup section."""
        return self._repository

    @property
    def files(self) -> FilesConfig:
        """Return the metadata files section."""
        return self._files

    @property
    def commit(self) -> CommitConfig:
        """Return the commit message section."""
        return self._commit

    @property
    def logging(self) -> LoggingConfig:
        """Return the logging configuration section."""
        return self._logging

    @overload
    def get(self, key: str) -> Any: ...

    @overload
    def get(self, key: str, default: T) -> T: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., "remote.branch").
            default: Default value if key not found.

        Returns:
            The configuration value, or default if not found.

        Examples:
            >>> config.get("remote.branch")
            'main'
            >>> config.get("nonexistent", "fallback")
            'fallback'
        """
        current: Any = self._data

        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current
