"""gitsync configuration.

This module provides the public API for gitsync configuration management,
including loading, validation, and typed access to configuration values.

Example:
    >>> from gitsync.config import Config
    >>> config = Config.load()
    >>> config.remote.branch
    'main'
"""

# Re-export exceptions from main exceptions module
from gitsync.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

# Defaults
from ._defaults import DEFAULT_CONFIG

# Discovery utilities
from ._discovery import discover_sources, find_project_root
from ._load import STRICT_CONFIG_ENV_VAR, safe_load_config

# Loader utilities
from ._loader import (
    ENV_PREFIX,
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)

# All models from the _models subpackage
from ._models import (
    CommitConfig,
    Config,
    ConfigSource,
    ConfigSourceName,
    FilesConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    RemoteConfig,
    RepositoryConfig,
)

# Validation
from ._validation import (
    ConfigSchema,
    ValidationIssue,
    parse_config,
    raise_if_validation_errors,
    validate_config,
    validate_source,
)

__all__ = [
    "DEFAULT_CONFIG",
    "ENV_PREFIX",
    "STRICT_CONFIG_ENV_VAR",
    "CommitConfig",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSchema",
    "ConfigSource",
    "ConfigSourceName",
    "ConfigValidationError",
    "FilesConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "RemoteConfig",
    "RepositoryConfig",
    "ValidationIssue",
    "deep_merge",
    "discover_sources",
    "find_project_root",
    "parse_config",
    "parse_env_vars",
    "parse_string_value",
    "raise_if_validation_errors",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
    "validate_config",
    "validate_source",
]
