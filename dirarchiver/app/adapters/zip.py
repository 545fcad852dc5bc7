"""Zip and Jar format adapters built on :mod:`zipfile`.

Entry names are written as UTF-8 (``zipfile`` sets the language-encoding flag
for any non-ASCII name), never in the platform default code page. File
payloads are deflated; directories are stored with the MS-DOS directory
attribute and Unix mode bits.
"""

from __future__ import annotations

import io
import logging
import stat
import struct
import time
from typing import BinaryIO
from zipfile import ZIP_DEFLATED, ZipFile, ZipInfo

from dirarchiver.app.adapters.base import BaseArchiveContainer
from dirarchiver.app.ports import ArchiveContainerPort, ArchiveEntry, FormatAdapterPort
from dirarchiver.errors import ArchiveIOError
from dirarchiver.source.discover import SourceNode

logger = logging.getLogger(__name__)

MANIFEST_NAME = "META-INF/MANIFEST.MF"
DEFAULT_MANIFEST_VERSION = "1.0"

# Extra field (header id 0xCAFE, no data) that marks a zip as a jar.
JAR_MAGIC_EXTRA = struct.pack("<HH", 0xCAFE, 0)

_MSDOS_DIRECTORY_FLAG = 0x10
_EARLIEST_ZIP_TIME = (1980, 1, 1, 0, 0, 0)
_LATEST_ZIP_TIME = (2107, 12, 31, 23, 59, 58)


def _zip_date_time(mtime: float) -> tuple[int, int, int, int, int, int]:
    """Convert an epoch timestamp into the DOS date range zip headers can hold."""
    date_time = tuple(time.localtime(mtime)[:6])
    if date_time[0] < 1980:
        return _EARLIEST_ZIP_TIME
    if date_time[0] > 2107:
        return _LATEST_ZIP_TIME
    return date_time  # type: ignore[return-value]


def build_zip_info(name: str, *, is_dir: bool, mtime: float, size: int, mode: int) -> ZipInfo:
    """Create a :class:`ZipInfo` record for ``name`` without writing anything."""
    info = ZipInfo(name, date_time=_zip_date_time(mtime))
    if is_dir:
        info.external_attr = ((stat.S_IFDIR | mode) & 0xFFFF) << 16 | _MSDOS_DIRECTORY_FLAG
        info.file_size = 0
        info.compress_size = 0
        info.CRC = 0
    else:
        info.external_attr = ((stat.S_IFREG | mode) & 0xFFFF) << 16
        info.file_size = size
        info.compress_type = ZIP_DEFLATED
    return info


def render_manifest(attributes: dict[str, str]) -> bytes:
    """Render main manifest attributes the way jar tooling writes them."""
    lines = [f"{key}: {value}\r\n" for key, value in attributes.items()]
    return ("".join(lines) + "\r\n").encode("utf-8")


def _make_zip_entry(node: SourceNode, archive_path: str) -> ArchiveEntry:
    info = build_zip_info(
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


class ZipArchiveContainer(BaseArchiveContainer):
    """Container writer over :class:`zipfile.ZipFile`."""

    def __init__(
        self,
        stream: BinaryIO,
        *,
        chunk_size: int,
        first_entry_extra: bytes = b"",
    ) -> None:
        super().__init__(stream, chunk_size=chunk_size)
        self._archive = ZipFile(stream, mode="w", compression=ZIP_DEFLATED)
        self._first_entry_extra = first_entry_extra
        self._entry_stream: BinaryIO | None = None

    def _begin_entry(self, entry: ArchiveEntry) -> None:
        info: ZipInfo = entry.native
        if self._first_entry_extra:
            info.extra = self._first_entry_extra + info.extra
            self._first_entry_extra = b""

        if entry.is_dir:
            self._archive.mkdir(info)
        else:
            self._entry_stream = self._archive.open(info, mode="w")

    def _write_payload(self, entry: ArchiveEntry, source: BinaryIO) -> int:
        entry_stream = self._entry_stream
        if entry_stream is None:
            raise ArchiveIOError(f"Entry {entry.name} has no open payload stream")
        copied = 0
        for chunk in iter(lambda: source.read(self._chunk_size), b""):
            entry_stream.write(chunk)
            copied += len(chunk)
        return copied

    def _end_entry(self, entry: ArchiveEntry) -> None:
        if self._entry_stream is not None:
            entry_stream, self._entry_stream = self._entry_stream, None
            entry_stream.close()

    def _abort_entry(self, entry: ArchiveEntry) -> None:
        # ZipFile refuses to close while a write handle is open.
        self._end_entry(entry)

    def _finish(self) -> None:
        self._archive.close()


class ZipFormatAdapter(FormatAdapterPort):
    """Plain zip archives."""

    name = "zip"

    def wrap_output_stream(self, raw: BinaryIO) -> BinaryIO:
        return raw

    def open_container(self, stream: BinaryIO, *, chunk_size: int) -> ArchiveContainerPort:
        return ZipArchiveContainer(stream, chunk_size=chunk_size)

    def post_open_hook(self, container: ArchiveContainerPort) -> None:
        return None

    def make_entry(self, node: SourceNode, archive_path: str) -> ArchiveEntry:
        return _make_zip_entry(node, archive_path)


class JarFormatAdapter(FormatAdapterPort):
    """Jar archives: a zip whose first entry is a minimal manifest."""

    name = "jar"

    def wrap_output_stream(self, raw: BinaryIO) -> BinaryIO:
        return raw

    def open_container(self, stream: BinaryIO, *, chunk_size: int) -> ArchiveContainerPort:
        return ZipArchiveContainer(
            stream, chunk_size=chunk_size, first_entry_extra=JAR_MAGIC_EXTRA
        )

    def post_open_hook(self, container: ArchiveContainerPort) -> None:
        manifest = render_manifest({"Manifest-Version": DEFAULT_MANIFEST_VERSION})
        now = time.time()
        entry = ArchiveEntry(
            name=MANIFEST_NAME,
            is_dir=False,
            mtime=now,
            size=len(manifest),
            native=build_zip_info(
                MANIFEST_NAME, is_dir=False, mtime=now, size=len(manifest), mode=0o644
            ),
        )
        logger.debug("Writing jar manifest %s", MANIFEST_NAME)
        container.put_archive_entry(entry)
        container.write_payload(io.BytesIO(manifest))
        container.close_archive_entry()

    def make_entry(self, node: SourceNode, archive_path: str) -> ArchiveEntry:
        return _make_zip_entry(node, archive_path)
