"""Shared utilities for gitsync."""

from ._exec import CommandConfig, CommandResult, run_command, truncate_output
from ._git import (
    CommitSummary,
    decode_bytes,
    discover_repo,
    find_worktree_root,
    get_last_commit,
    get_worktree_dir,
    open_repo,
)
from ._ignore import append_ignore_entry, escape_ignore_entry
from ._logging import create_cli_logger, create_null_logger
from ._paths import (
    get_default_log_file,
    get_local_config_path,
    get_log_dir,
    get_project_config_path,
    get_user_config_path,
)

__all__ = [
    "CommandConfig",
    "CommandResult",
    "CommitSummary",
    "append_ignore_entry",
    "create_cli_logger",
    "create_null_logger",
    "decode_bytes",
    "discover_repo",
    "escape_ignore_entry",
    "find_worktree_root",
    "get_default_log_file",
    "get_last_commit",
    "get_local_config_path",
    "get_log_dir",
    "get_project_config_path",
    "get_user_config_path",
    "get_worktree_dir",
    "open_repo",
    "run_command",
    "truncate_output",
]
