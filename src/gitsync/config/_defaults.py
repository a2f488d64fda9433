"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values.

Note: DEFAULT_CONFIG is intentionally a plain dict for type compatibility
with functions like deep_merge. The merge functions create copies, so mutation
of the original is not a concern in practice.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "remote": {
        "name": "origin",
        "url": "",
        "branch": "main",
    },
    "repository": {
        "initial_branch": "main",
        "mark_safe_directory": True,
    },
    "files": {
        "ignore_file": ".gitignore",
        "lfs_attributes_file": ".gitattributes",
    },
    "commit": {
        "sync_message": "feat(auto): sync files at {timestamp}",
        "mirror_message": "refactor(force): mirror local state at {timestamp}",
        "timestamp_format": "YYYY-MM-DD HH:mm",
    },
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
}
