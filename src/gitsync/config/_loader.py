# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""TOML configuration file loading and merging."""

from __future__ import annotations

import json
import os
import tomllib
from typing import TYPE_CHECKING, Any

from gitsync.exceptions import ConfigLoadError

if TYPE_CHECKING:
    from pathlib import Path

ENV_PREFIX = "GITSYNC_"

# Environment variables with the prefix that are switches, not config keys
_RESERVED_ENV_VARS: frozenset[str] = frozenset({"GITSYNC_DEBUG", "GITSYNC_STRICT_CONFIG"})


def read_toml_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read and parse a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed TOML content as dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file cannot be parsed.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse TOML file: {e}"
        raise ConfigLoadError(
            msg,
            path=path,
            line=getattr(e, "lineno", None),
            column=getattr(e, "colno", None),
        ) from e


def deep_merge(
    base: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    override: dict[str, Any],  # pyright: ignore[reportExplicitAny]
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Deep merge two configuration dictionaries.

    Merges `override` into `base`, returning a new dictionary. Neither input
    is modified.

    Merge rules:
        - Dictionaries are recursively merged
        - Arrays are replaced entirely (no element-wise merge)
        - Scalars are replaced with override value
        - Missing keys in override preserve base values

    Args:
        base: Base configuration (lower precedence).
        override: Override configuration (higher precedence).

    Returns:
        Merged configuration dictionary.
    """
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for key in base.keys() | override.keys():
        if key not in override:
            result[key] = copy_value(base[key])
        elif key not in base:
            result[key] = copy_value(override[key])
        else:
            base_val = base[key]
            override_val = override[key]

            if isinstance(base_val, dict) and isinstance(override_val, dict):
                result[key] = deep_merge(base_val, override_val)
            else:
                # Type mismatch or non-dicts - override wins
                result[key] = copy_value(override_val)

    return result


def copy_value(value: Any) -> Any:  # pyright: ignore[reportExplicitAny]
    """Create a deep copy of a configuration value.

    Args:
        value: The value to copy.

    Returns:
        A deep copy of the value.
    """
    if isinstance(value, dict):
        return {k: copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_value(item) for item in value]
    # Primitives are immutable, no copy needed
    return value


def parse_env_vars(
    prefix: str = ENV_PREFIX,
    environ: dict[str, str] | None = None,
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Parse environment variables into config dictionary.

    Environment variable naming:
        - Add prefix (GITSYNC_)
        - Convert to uppercase
        - Replace dots with double underscores
        - Example: remote.url -> GITSYNC_REMOTE__URL

    Args:
        prefix: Environment variable prefix (default: "GITSYNC_").
        environ: Mapping to read instead of os.environ.

    Returns:
        Dictionary of parsed config values with nested structure.
    """
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
    source = os.environ if environ is None else environ

    for key, value in source.items():
        if not key.startswith(prefix) or key in _RESERVED_ENV_VARS:
            continue

        config_key = key[len(prefix) :]
        if not config_key:
            continue

        # GITSYNC_REMOTE__URL -> remote.url
        config_path = config_key.replace("__", ".").lower()
        set_nested_key(result, config_path, parse_string_value(value))

    return result


def parse_string_value(value: str) -> Any:  # pyright: ignore[reportExplicitAny]
    """Parse a string value with automatic type inference.

    Precedence:
    1. Boolean: true/false (case-insensitive)
    2. Integer: parseable as int (no decimal)
    3. JSON array/object: starts with [ or {
    4. String: fallback

    Args:
        value: Raw string value to parse.

    Returns:
        Parsed value with inferred type.

    Examples:
        >>> parse_string_value("true")
        True
        >>> parse_string_value("42")
        42
        >>> parse_string_value("git@example.com:team/repo.git")
        'git@example.com:team/repo.git'
    """
    lower_value = value.lower()
    if lower_value in ("true", "false"):
        return lower_value == "true"

    try:
        return int(value)
    except ValueError:
        pass

    if (value.startswith("[") and value.endswith("]")) or (
        value.startswith("{") and value.endswith("}")
    ):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

    return value


def set_nested_key(
    d: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    key_path: str,
    value: Any,  # pyright: ignore[reportExplicitAny]
) -> None:
    """Set a value at a dotted key path in a nested dictionary.

    Creates intermediate dictionaries as needed.

    Args:
        d: The dictionary to modify.
        key_path: Dotted key path (e.g., "remote.branch").
        value: The value to set.

    Example:
        >>> d = {}
        >>> set_nested_key(d, "remote.branch", "main")
        >>> d
        {'remote': {'branch': 'main'}}
    """
    parts = key_path.split(".")
    current = d

    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]

    current[parts[-1]] = value
