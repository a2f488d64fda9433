"""Configuration models.

This module provides Pydantic models for gitsync configuration sections
and the main Config container class.
"""

from gitsync.config._models._commit import CommitConfig
from gitsync.config._models._common import (
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LogLevel,
)
from gitsync.config._models._config import Config
from gitsync.config._models._files import FilesConfig
from gitsync.config._models._logging import LoggingConfig
from gitsync.config._models._remote import RemoteConfig
from gitsync.config._models._repository import RepositoryConfig

__all__ = [
    "CommitConfig",
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "FilesConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "RemoteConfig",
    "RepositoryConfig",
]
