"""Archive service for directory-to-archive builds.

Orchestrates a single build: opens the destination, lets the format adapter
decorate the stream and open its container writer, injects format metadata,
serializes the tree, and closes everything on every exit path.
"""

from __future__ import annotations

import logging
import tarfile
import zipfile
from collections.abc import Callable
from contextlib import ExitStack
from pathlib import Path
from typing import BinaryIO

from pydantic import BaseModel, Field

from dirarchiver.app.ports import FormatAdapterPort
from dirarchiver.app.serializer import serialize_tree
from dirarchiver.errors import ArchiveBuildError, ArchiveIOError, DestinationError
from dirarchiver.source.discover import resolve_source_root
from dirarchiver.utils.hashing import compute_sha256_file
from dirarchiver.utils.paths import normalize_prefix

logger = logging.getLogger(__name__)

AdapterResolver = Callable[[str], FormatAdapterPort]


class ArchiveSummary(BaseModel):
    """Outcome of a successful archive build."""

    destination: str = Field(..., description="Path of the archive that was written")
    format: str = Field(..., description="Format identifier (zip, jar, tar, tgz)")
    root_prefix: str = Field("", description="Normalized root prefix ('' when absent)")
    directory_count: int = Field(..., ge=0, description="Directory entries from the source tree")
    file_count: int = Field(..., ge=0, description="File entries from the source tree")
    payload_bytes: int = Field(..., ge=0, description="File content bytes copied into the archive")
    entry_count: int = Field(
        ..., ge=0, description="All entries written, including prefix and manifest entries"
    )
    sha256: str | None = Field(None, description="SHA-256 of the finished archive")


class ArchiveService:
    """Builds archives of whole directories.

    The service holds no per-build state; every call owns its own streams,
    container writer and traversal.
    """

    def __init__(
        self,
        resolve_adapter: AdapterResolver,
        *,
        chunk_size: int = 65536,
        compute_digest: bool = True,
    ) -> None:
        """Initialize archive service.

        Args:
            resolve_adapter: Maps a format identifier to a fresh format adapter
            chunk_size: Buffer size used when copying file contents
            compute_digest: Whether summaries carry the archive's SHA-256
        """
        self._resolve_adapter = resolve_adapter
        self._chunk_size = chunk_size
        self._compute_digest = compute_digest

    def create_archive(
        self,
        destination: Path | str,
        source_directory: Path | str,
        root_prefix: str | None = None,
        *,
        format: str = "zip",
        adapter: FormatAdapterPort | None = None,
    ) -> ArchiveSummary:
        """Archive every directory and regular file under ``source_directory``.

        Args:
            destination: Archive file to create (must be writable, not a directory)
            source_directory: Existing directory to archive
            root_prefix: Optional path (``/`` or ``\\`` separated) to nest the tree under
            format: Format identifier used when ``adapter`` is not given
            adapter: Explicit format adapter, bypassing the resolver

        Returns:
            ArchiveSummary describing the written archive

        Raises:
            SourceError: Source directory missing, unreadable, or holding unsupported nodes
            DestinationError: Destination cannot be opened for writing
            FormatConfigurationError: Unknown format or compressor
            ArchiveIOError: Any failure while writing entries or closing the archive
        """
        dest_path = Path(destination)
        source_root = resolve_source_root(Path(source_directory))
        format_adapter = adapter if adapter is not None else self._resolve_adapter(format)
        normalized_prefix = normalize_prefix(root_prefix)

        logger.info(
            "Creating %s archive of %s at %s", format_adapter.name, source_root.path, dest_path
        )

        try:
            with ExitStack() as stack:
                raw = stack.enter_context(_open_destination(dest_path))
                stream = format_adapter.wrap_output_stream(raw)
                if stream is not raw:
                    stack.callback(stream.close)

                container = format_adapter.open_container(stream, chunk_size=self._chunk_size)
                stack.callback(container.close)

                format_adapter.post_open_hook(container)
                stats = serialize_tree(source_root, normalized_prefix, container, format_adapter)
                container.flush()
        except ArchiveBuildError as exc:
            logger.warning("Archive build failed for %s: %s", dest_path, exc, exc_info=True)
            raise
        except (OSError, ValueError, tarfile.TarError, zipfile.LargeZipFile) as exc:
            logger.warning("Archive build failed for %s: %s", dest_path, exc, exc_info=True)
            raise ArchiveIOError(f"Error creating archive {dest_path}: {exc}") from exc

        sha256 = None
        if self._compute_digest:
            try:
                sha256 = compute_sha256_file(dest_path)
            except OSError as exc:
                raise ArchiveIOError(f"Cannot read back archive {dest_path}: {exc}") from exc

        summary = ArchiveSummary(
            destination=str(dest_path),
            format=format_adapter.name,
            root_prefix=normalized_prefix,
            directory_count=stats.directories,
            file_count=stats.files,
            payload_bytes=stats.payload_bytes,
            entry_count=container.entry_count,
            sha256=sha256,
        )
        logger.info(
            "Created %s archive %s (%d entries)",
            summary.format,
            summary.destination,
            summary.entry_count,
        )
        return summary


def _open_destination(path: Path) -> BinaryIO:
    try:
        return path.open("wb")
    except OSError as exc:
        raise DestinationError(f"Cannot open archive destination {path} for writing: {exc}") from exc
