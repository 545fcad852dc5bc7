"""Directory tree serialization into an open archive container."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from dirarchiver.app.ports import ArchiveContainerPort, ArchiveEntry, FormatAdapterPort
from dirarchiver.errors import SourceError
from dirarchiver.source.discover import SourceNode, walk_source_tree
from dirarchiver.utils.paths import archive_path_for

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SerializationStats:
    """Counts collected while serializing one tree."""

    directories: int = 0
    files: int = 0
    payload_bytes: int = 0


def serialize_tree(
    root: SourceNode,
    normalized_prefix: str,
    container: ArchiveContainerPort,
    adapter: FormatAdapterPort,
) -> SerializationStats:
    """Write one entry per directory and regular file below ``root``.

    With a non-empty prefix, a directory entry for the prefix itself is
    written first so the nesting exists even though no source node maps to
    it. The tree is then walked in pre-order: directory entries are opened
    and closed immediately, file entries receive the full file contents
    before being closed. The first error aborts the whole walk.

    Args:
        root: Traversal root (not itself archived)
        normalized_prefix: Root prefix already passed through ``normalize_prefix``
        container: Open container writer
        adapter: Format adapter that builds native entries

    Returns:
        Directory, file and payload byte counts (the prefix entry is not counted)
    """
    stats = SerializationStats()

    if normalized_prefix:
        logger.debug("Creating archive entry for root prefix %s", normalized_prefix)
        _write_directory(container, adapter.make_entry(root, normalized_prefix))

    for node in walk_source_tree(root):
        archive_path = archive_path_for(normalized_prefix, node.relative_path, node.is_dir)
        if node.is_dir:
            logger.debug("Creating archive entry for directory %s at %s", node.path, archive_path)
            _write_directory(container, adapter.make_entry(node, archive_path))
            stats.directories += 1
        else:
            logger.debug("Creating archive entry for file %s at %s", node.path, archive_path)
            stats.payload_bytes += _write_file(
                container, adapter.make_entry(node, archive_path), node.path
            )
            stats.files += 1

    return stats


def _write_directory(container: ArchiveContainerPort, entry: ArchiveEntry) -> None:
    container.put_archive_entry(entry)
    container.close_archive_entry()


def _write_file(container: ArchiveContainerPort, entry: ArchiveEntry, path: Path) -> int:
    try:
        handle = path.open("rb")
    except OSError as exc:
        raise SourceError(f"Cannot read source file {path}: {exc}") from exc

    with handle:
        container.put_archive_entry(entry)
        copied = container.write_payload(handle)
        container.close_archive_entry()
    return copied
