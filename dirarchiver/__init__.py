"""dirarchiver - archive whole directory trees into Zip, Jar, Tar, or gzipped Tar files.

The tree is written once, in a single traversal, with an optional synthetic
root prefix and format-specific metadata (a minimal manifest for Jar).
"""

__version__ = "0.1.0"
__author__ = "dirarchiver Contributors"

from dirarchiver.archiver import (
    create_archive,
    create_gzipped_tar_archive,
    create_jar_archive,
    create_tar_archive,
    create_zip_archive,
)
from dirarchiver.config import Settings, get_settings
from dirarchiver.errors import (
    ArchiveBuildError,
    ArchiveIOError,
    DestinationError,
    FormatConfigurationError,
    SourceError,
)

__all__ = [
    "ArchiveBuildError",
    "ArchiveIOError",
    "DestinationError",
    "FormatConfigurationError",
    "Settings",
    "SourceError",
    "create_archive",
    "create_gzipped_tar_archive",
    "create_jar_archive",
    "create_tar_archive",
    "create_zip_archive",
    "get_settings",
    "__version__",
]
