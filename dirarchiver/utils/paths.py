"""Path utilities for archive entry names.

Archive entry names always use ``/`` as the separator, and directory entries
always end with ``/``. These helpers are the only place that rule is applied.
"""

from __future__ import annotations

ARCHIVE_PATH_SEPARATOR = "/"
WIN_PATH_SEPARATOR = "\\"


def normalize_name(path: str, is_directory: bool) -> str:
    """Canonicalize ``path`` into the archive's path convention.

    Backslashes become forward slashes and directory names gain a trailing
    slash. Nothing else is touched: no case folding, no percent-encoding and
    no resolution of ``..`` segments.

    Args:
        path: Relative path using either separator convention
        is_directory: Whether the path names a directory

    Returns:
        Normalized archive path
    """
    normalized = path.replace(WIN_PATH_SEPARATOR, ARCHIVE_PATH_SEPARATOR)
    if is_directory and not normalized.endswith(ARCHIVE_PATH_SEPARATOR):
        normalized += ARCHIVE_PATH_SEPARATOR
    return normalized


def normalize_prefix(prefix: str | None) -> str:
    """Normalize an optional root prefix; ``None`` or ``""`` yields ``""``."""
    if not prefix:
        return ""
    return normalize_name(prefix, True)


def archive_path_for(normalized_prefix: str, relative_path: str, is_directory: bool) -> str:
    """Compose the archive path for a node below the (already normalized) prefix."""
    return normalize_name(normalized_prefix + relative_path, is_directory)
