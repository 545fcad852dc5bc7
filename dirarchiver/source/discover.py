"""Source tree discovery for archive builds."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterator
from pathlib import Path

from pydantic import BaseModel, Field

from dirarchiver.errors import SourceError

logger = logging.getLogger(__name__)


class SourceNode(BaseModel):
    """Directory or regular file encountered while walking a source tree."""

    path: Path = Field(..., description="Absolute path to the node")
    relative_path: str = Field(
        ..., description="Path relative to the traversal root (host separators, '' for the root)"
    )
    is_dir: bool = Field(..., description="True for directories")
    mtime: float = Field(..., description="Modification time (seconds since the epoch)")
    size: int = Field(0, ge=0, description="Byte length; always 0 for directories")
    mode: int = Field(0, ge=0, description="Permission bits")

    @classmethod
    def from_stat(cls, path: Path, root: Path, st: os.stat_result) -> SourceNode:
        """Build a node from an ``lstat``/``stat`` result."""
        is_dir = stat.S_ISDIR(st.st_mode)
        relative = "" if path == root else str(path.relative_to(root))
        return cls(
            path=path,
            relative_path=relative,
            is_dir=is_dir,
            mtime=st.st_mtime,
            size=0 if is_dir else st.st_size,
            mode=stat.S_IMODE(st.st_mode),
        )


def resolve_source_root(source: Path) -> SourceNode:
    """Validate ``source`` and return the node for the traversal root.

    Raises:
        SourceError: If the path is missing, unreadable, or not a directory
    """
    root = Path(source).absolute()
    try:
        st = root.stat()
    except FileNotFoundError as exc:
        raise SourceError(f"Source directory not found: {root}") from exc
    except OSError as exc:
        raise SourceError(f"Cannot read source directory {root}: {exc}") from exc

    if not stat.S_ISDIR(st.st_mode):
        raise SourceError(f"Source must be a directory: {root}")

    return SourceNode.from_stat(root, root, st)


def walk_source_tree(root: SourceNode) -> Iterator[SourceNode]:
    """Yield every directory and regular file below ``root`` in pre-order.

    A directory is always yielded before its children; the root itself is not
    yielded. Siblings come out in filesystem enumeration order. Symbolic links
    are skipped without being followed. Any other node that is neither a
    regular file nor a directory (FIFOs, sockets, devices) aborts the walk.

    Raises:
        SourceError: If a directory cannot be listed or holds an unsupported node
    """
    yield from _walk(root.path, root.path)


def _walk(directory: Path, root: Path) -> Iterator[SourceNode]:
    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as exc:
        raise SourceError(f"Cannot list directory {directory}: {exc}") from exc

    for entry in entries:
        path = Path(entry.path)
        if entry.is_symlink():
            logger.debug("Skipping symbolic link %s", path)
            continue

        try:
            st = entry.stat(follow_symlinks=False)
        except OSError as exc:
            raise SourceError(f"Cannot stat {path}: {exc}") from exc

        if stat.S_ISDIR(st.st_mode):
            yield SourceNode.from_stat(path, root, st)
            yield from _walk(path, root)
        elif stat.S_ISREG(st.st_mode):
            yield SourceNode.from_stat(path, root, st)
        else:
            raise SourceError(f"Unsupported source node (neither file nor directory): {path}")
