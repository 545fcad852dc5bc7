"""Entry bookkeeping shared by the concrete archive containers."""

from __future__ import annotations

from typing import BinaryIO

from dirarchiver.app.ports import ArchiveContainerPort, ArchiveEntry
from dirarchiver.errors import ArchiveIOError


class BaseArchiveContainer(ArchiveContainerPort):
    """Enforces the put / payload / close entry lifecycle.

    Subclasses supply the format-specific ``_begin_entry``, ``_write_payload``,
    ``_end_entry``, ``_abort_entry`` and ``_finish`` steps.
    """

    def __init__(self, stream: BinaryIO, *, chunk_size: int) -> None:
        self._stream = stream
        self._chunk_size = chunk_size
        self._current: ArchiveEntry | None = None
        self._closed = False
        self.entry_count = 0

    def put_archive_entry(self, entry: ArchiveEntry) -> None:
        if self._closed:
            raise ArchiveIOError(f"Cannot add {entry.name}: archive is already closed")
        if self._current is not None:
            raise ArchiveIOError(
                f"Cannot add {entry.name}: entry {self._current.name} is still open"
            )
        if entry.closed:
            raise ArchiveIOError(f"Entry {entry.name} was already written and cannot be reopened")

        self._begin_entry(entry)
        self._current = entry

    def write_payload(self, source: BinaryIO) -> int:
        entry = self._require_open_entry()
        if entry.is_dir:
            raise ArchiveIOError(f"Directory entry {entry.name} cannot carry a payload")
        return self._write_payload(entry, source)

    def close_archive_entry(self) -> None:
        entry = self._require_open_entry()
        self._current = None
        entry.closed = True
        self._end_entry(entry)
        self.entry_count += 1

    def flush(self) -> None:
        if not self._closed:
            self._stream.flush()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        entry, self._current = self._current, None
        try:
            if entry is not None:
                entry.closed = True
                self._abort_entry(entry)
        finally:
            self._finish()

    def _require_open_entry(self) -> ArchiveEntry:
        if self._current is None:
            raise ArchiveIOError("No archive entry is open")
        return self._current

    def _begin_entry(self, entry: ArchiveEntry) -> None:
        raise NotImplementedError

    def _write_payload(self, entry: ArchiveEntry, source: BinaryIO) -> int:
        raise NotImplementedError

    def _end_entry(self, entry: ArchiveEntry) -> None:
        raise NotImplementedError

    def _abort_entry(self, entry: ArchiveEntry) -> None:
        raise NotImplementedError

    def _finish(self) -> None:
        raise NotImplementedError
