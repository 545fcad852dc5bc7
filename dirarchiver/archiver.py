"""Convenience entry points that archive an entire directory.

Create a zip of ``/project/data/source`` at ``/project/data/source.zip``::

    from dirarchiver import create_zip_archive

    create_zip_archive("/project/data/source.zip", "/project/data/source")

Immediate children of the source directory land at the root of the archive.
Passing a root prefix nests them instead: with ``"test/one"``,
``/project/data/source/file.txt`` appears at ``test/one/file.txt``. Prefix
segments may be separated by ``/`` or ``\\``.

Jar archives are built the same way, plus a ``META-INF/MANIFEST.MF`` entry
carrying only ``Manifest-Version: 1.0``.

Symbolic links are never followed and are left out of every archive, whether
they point at a directory or at a regular file. A link to a file is *not*
replaced by the target's contents; copy the target into the tree first if it
should be archived.
"""

from __future__ import annotations

from pathlib import Path

from dirarchiver.app.archive_service import ArchiveSummary
from dirarchiver.bootstrap import bootstrap_application
from dirarchiver.config import Settings


def create_archive(
    destination: Path | str,
    source_directory: Path | str,
    root_prefix: str | None = None,
    format: str = "zip",
    *,
    settings: Settings | None = None,
) -> ArchiveSummary:
    """Archive ``source_directory`` into ``destination`` using ``format``.

    Raises:
        ArchiveBuildError: On any source, destination, format, or I/O failure
    """
    container = bootstrap_application(settings)
    return container.archive_service.create_archive(
        destination, source_directory, root_prefix, format=format
    )


def create_zip_archive(
    destination: Path | str, source_directory: Path | str, root_prefix: str | None = None
) -> ArchiveSummary:
    """Create a zip archive with all the contents of ``source_directory``."""
    return create_archive(destination, source_directory, root_prefix, "zip")


def create_jar_archive(
    destination: Path | str, source_directory: Path | str, root_prefix: str | None = None
) -> ArchiveSummary:
    """Create a jar archive (zip plus manifest) with all the contents of ``source_directory``."""
    return create_archive(destination, source_directory, root_prefix, "jar")


def create_tar_archive(
    destination: Path | str, source_directory: Path | str, root_prefix: str | None = None
) -> ArchiveSummary:
    """Create an uncompressed tar archive with all the contents of ``source_directory``."""
    return create_archive(destination, source_directory, root_prefix, "tar")


def create_gzipped_tar_archive(
    destination: Path | str, source_directory: Path | str, root_prefix: str | None = None
) -> ArchiveSummary:
    """Create a gzip-compressed tar archive with all the contents of ``source_directory``."""
    return create_archive(destination, source_directory, root_prefix, "tgz")
