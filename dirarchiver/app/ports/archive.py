"""Archive format port interfaces.

A format adapter knows how to decorate the destination stream, how to open
the format's container writer over it, what to inject before the tree is
written, and how to turn a source node into a format-native entry record.
The tree serializer only ever talks to these two protocols.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, BinaryIO, Literal, Protocol

if TYPE_CHECKING:  # pragma: no cover
    from dirarchiver.source.discover import SourceNode

ArchiveFormat = Literal["zip", "jar", "tar", "tgz"]
ARCHIVE_FORMATS: tuple[ArchiveFormat, ...] = ("zip", "jar", "tar", "tgz")


@dataclass(slots=True)
class ArchiveEntry:
    """Format-native entry record paired with its archive name.

    An entry is written once: after :meth:`ArchiveContainerPort.close_archive_entry`
    it is sealed and cannot be put again.
    """

    name: str
    is_dir: bool
    mtime: float
    size: int
    native: Any
    closed: bool = False


class ArchiveContainerPort(Protocol):
    """Open archive container accepting one entry at a time.

    Side effects: Writes archive bytes to the wrapped output stream.
    """

    entry_count: int

    def put_archive_entry(self, entry: ArchiveEntry) -> None:
        """Start ``entry``; no other entry may be open."""
        ...

    def write_payload(self, source: BinaryIO) -> int:
        """Stream the remaining bytes of ``source`` into the open file entry.

        Returns:
            Number of bytes copied
        """
        ...

    def close_archive_entry(self) -> None:
        """Seal the open entry."""
        ...

    def flush(self) -> None:
        """Flush buffered archive bytes to the underlying stream."""
        ...

    def close(self) -> None:
        """Finish the archive; safe to call more than once."""
        ...


class FormatAdapterPort(Protocol):
    """Per-format capabilities used by the archive writer and tree serializer."""

    name: str

    def wrap_output_stream(self, raw: BinaryIO) -> BinaryIO:
        """Decorate the destination file stream (e.g. with a compressor)."""
        ...

    def open_container(self, stream: BinaryIO, *, chunk_size: int) -> ArchiveContainerPort:
        """Open the format's container writer over ``stream``."""
        ...

    def post_open_hook(self, container: ArchiveContainerPort) -> None:
        """Write any entries that must precede the tree content."""
        ...

    def make_entry(self, node: SourceNode, archive_path: str) -> ArchiveEntry:
        """Build the native entry for ``node`` at ``archive_path`` without payload."""
        ...
