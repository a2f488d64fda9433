"""Gitignore file maintenance.

This module provides utilities for appending literal entries to a gitignore
file.
"""

from pathlib import Path  # noqa: TC003 - Used at runtime in function parameters

# Leading characters that git would otherwise read as a comment or negation
_SPECIAL_LEADING_CHARS: frozenset[str] = frozenset({"#", "!"})

# Characters git reads as wildcards or escapes anywhere in a pattern
_GLOB_CHARS: frozenset[str] = frozenset({"\\", "[", "]", "*", "?"})


def escape_ignore_entry(entry: str) -> str:
    """Escape a repository-relative path so git reads it as a literal name.

    Wildcards and backslashes are escaped wherever they appear, as are a
    leading # or !. Git strips unescaped trailing spaces, so each one gets a
    backslash.

    Args:
        entry: Path to escape.

    Returns:
        The escaped entry.

    Examples:
        >>> escape_ignore_entry("data[1].csv")
        'data\\\\[1\\\\].csv'
        >>> escape_ignore_entry("#notes.md")
        '\\\\#notes.md'
    """
    escaped = "".join(f"\\{char}" if char in _GLOB_CHARS else char for char in entry)
    if escaped and escaped[0] in _SPECIAL_LEADING_CHARS:
        escaped = "\\" + escaped

    body = escaped.rstrip(" ")
    return body + "\\ " * (len(escaped) - len(body))


def append_ignore_entry(path: Path, entry: str) -> bool:
    """Append an entry to a gitignore file.

    A newline separator is written first when the file is non-empty and does
    not already end with one. The file is created when missing. Entries that
    are already present as a whole line are not written again.

    Args:
        path: Path to the gitignore file.
        entry: Repository-relative path to ignore.

    Returns:
        True if the entry was appended, False if it was already present.
    """
    line = escape_ignore_entry(entry)

    existing = path.read_text(encoding="utf-8") if path.is_file() else ""
    if line in existing.splitlines():
        return False

    with path.open("a", encoding="utf-8") as f:
        if existing and not existing.endswith("\n"):
            _ = f.write("\n")
        _ = f.write(f"{line}\n")

    return True
