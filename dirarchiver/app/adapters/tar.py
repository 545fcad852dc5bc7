"""Tar and compressed-tar format adapters built on :mod:`tarfile`.

Archives are written in POSIX.1-2001 (PAX) format, so names longer than the
classic 100-byte header field and non-ASCII names are carried in extended
headers instead of being truncated or rejected.
"""

from __future__ import annotations

import gzip
import logging
import tarfile
from collections.abc import Callable
from typing import BinaryIO

from dirarchiver.app.adapters.base import BaseArchiveContainer
from dirarchiver.app.ports import ArchiveContainerPort, ArchiveEntry, FormatAdapterPort
from dirarchiver.errors import ArchiveIOError, FormatConfigurationError
from dirarchiver.source.discover import SourceNode

logger = logging.getLogger(__name__)

TAR_NAME_ENCODING = "utf-8"

COMPRESSORS: dict[str, Callable[[BinaryIO], BinaryIO]] = {
    "gz": lambda raw: gzip.GzipFile(fileobj=raw, mode="wb"),  # type: ignore[dict-item]
}


def build_tar_info(name: str, *, is_dir: bool, mtime: float, size: int, mode: int) -> tarfile.TarInfo:
    """Create a :class:`tarfile.TarInfo` header for ``name`` without writing anything."""
    info = tarfile.TarInfo(name)
    info.mtime = int(mtime)
    info.mode = mode
    if is_dir:
        info.type = tarfile.DIRTYPE
        info.size = 0
    else:
        info.type = tarfile.REGTYPE
        info.size = size
    return info


class TarArchiveContainer(BaseArchiveContainer):
    """Container writer over :class:`tarfile.TarFile`.

    Tar headers must carry the payload size up front, so a file entry's header
    and data are written together when the payload arrives.
    """

    def __init__(self, stream: BinaryIO, *, chunk_size: int) -> None:
        super().__init__(stream, chunk_size=chunk_size)
        self._archive = tarfile.open(
            fileobj=stream,
            mode="w",
            format=tarfile.PAX_FORMAT,
            encoding=TAR_NAME_ENCODING,
            copybufsize=chunk_size,
        )
        self._written = False

    def _begin_entry(self, entry: ArchiveEntry) -> None:
        self._written = False

    def _write_payload(self, entry: ArchiveEntry, source: BinaryIO) -> int:
        if self._written:
            raise ArchiveIOError(f"Payload for {entry.name} was already written")
        info: tarfile.TarInfo = entry.native
        self._archive.addfile(info, source)
        self._written = True
        # The header size is fixed up front; leftover bytes mean the file grew.
        if source.read(1):
            raise ArchiveIOError(
                f"Source for {entry.name} changed size while being archived "
                f"(header declared {info.size} bytes)"
            )
        return info.size

    def _end_entry(self, entry: ArchiveEntry) -> None:
        if self._written:
            return
        info: tarfile.TarInfo = entry.native
        if info.size:
            raise ArchiveIOError(
                f"Entry {entry.name} closed before its {info.size}-byte payload was written"
            )
        self._archive.addfile(info)

    def _abort_entry(self, entry: ArchiveEntry) -> None:
        return None

    def _finish(self) -> None:
        self._archive.close()


class TarFormatAdapter(FormatAdapterPort):
    """Tar archives, optionally wrapped in a compressor stream."""

    def __init__(self, compressor: str | None = None, *, name: str = "tar") -> None:
        self.compressor = compressor
        self.name = name

    def wrap_output_stream(self, raw: BinaryIO) -> BinaryIO:
        if self.compressor is None:
            return raw

        try:
            factory = COMPRESSORS[self.compressor]
        except KeyError as exc:
            raise FormatConfigurationError(
                f"Unknown compressor '{self.compressor}'. "
                f"Supported compressors: {', '.join(sorted(COMPRESSORS))}"
            ) from exc

        try:
            return factory(raw)
        except (OSError, ValueError) as exc:
            raise FormatConfigurationError(
                f"Error wrapping the archive into a {self.compressor} stream: {exc}"
            ) from exc

    def open_container(self, stream: BinaryIO, *, chunk_size: int) -> ArchiveContainerPort:
        return TarArchiveContainer(stream, chunk_size=chunk_size)

    def post_open_hook(self, container: ArchiveContainerPort) -> None:
        return None

    def make_entry(self, node: SourceNode, archive_path: str) -> ArchiveEntry:
        info = build_tar_info(
            archive_path,
            is_dir=node.is_dir,
            mtime=node.mtime,
            size=node.size,
            mode=node.mode,
        )
        return ArchiveEntry(
            name=archive_path,
            is_dir=node.is_dir,
            mtime=node.mtime,
            size=node.size,
            native=info,
        )
