from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

from gitsync.exceptions import ConfigError

from ._models import Config
from ._validation import raise_if_validation_errors, validate_source

if TYPE_CHECKING:
    from pathlib import Path

STRICT_CONFIG_ENV_VAR = "GITSYNC_STRICT_CONFIG"


def safe_load_config(
    *,
    config_path: Path | None = None,
    project_root: Path | None = None,
    cli_overrides: dict[str, object] | None = None,
) -> tuple[Config, str | None]:
    """Load configuration with error handling.

    Attempts to load configuration and handles errors based on the
    GITSYNC_STRICT_CONFIG environment variable:
    - If unset or "0": warn to stderr and return the default config
    - If "1": fail fast with sys.exit(1), and also reject unknown keys

    When config_path is provided, the file must exist (explicit user request)
    and CLI overrides are still applied on top of it.

    Args:
        config_path: Explicit path to config file (--config flag).
        project_root: Project directory override (--project-root flag).
        cli_overrides: CLI argument overrides to pass to Config.load().

    Returns:
        Tuple of (Config, error_message). On success, error_message is None.
        On failure (non-strict mode), returns the default Config with the
        error message.
    """
    strict_mode = os.environ.get(STRICT_CONFIG_ENV_VAR, "0") == "1"

    try:
        if config_path is not None:
            if not config_path.exists():
                error_msg = f"Config file not found: {config_path}"
                print(f"Error: {error_msg}", file=sys.stderr)  # noqa: T201
                sys.exit(1)
            config = Config.from_file(config_path)
            if cli_overrides:
                config = config.with_overrides(cli_overrides)
        else:
            config = Config.load(
                project_root=project_root,
                include_env=True,
                cli_overrides=cli_overrides,
            )
        if strict_mode:
            _reject_unknown_keys(config)
    except ConfigError as e:
        error_msg = str(e)
        if strict_mode:
            print(f"Error: {error_msg}", file=sys.stderr)  # noqa: T201
            sys.exit(1)
        print(  # noqa: T201
            f"Warning: Failed to load config: {error_msg}",
            file=sys.stderr,
        )
        return _fallback(cli_overrides), error_msg
    except OSError as e:
        error_msg = f"Failed to load config: {e}"
        if strict_mode:
            print(f"Error: {error_msg}", file=sys.stderr)  # noqa: T201
            sys.exit(1)
        print(f"Warning: {error_msg}", file=sys.stderr)  # noqa: T201
        return _fallback(cli_overrides), error_msg
    else:
        return config, None


def _reject_unknown_keys(config: Config) -> None:
    for source in config.sources:
        raise_if_validation_errors(
            validate_source(source, strict=True), source=source.name.value
        )


def _fallback(cli_overrides: dict[str, object] | None) -> Config:
    """Build the default config, keeping CLI overrides when they are valid."""
    if cli_overrides:
        try:
            return Config.from_dict(cli_overrides)
        except ConfigError:
            pass
    return Config.from_dict({})
