"""Exception hierarchy for archive builds.

Every failure during a build surfaces as :class:`ArchiveBuildError` (or one of
its subclasses) with the underlying exception chained as ``__cause__``. The
base class derives from :class:`OSError` so callers that already handle plain
I/O failures keep working.
"""


class ArchiveBuildError(OSError):
    """Raised when an archive cannot be built."""


class SourceError(ArchiveBuildError):
    """Source directory is missing, unreadable, or holds an unsupported node."""


class DestinationError(ArchiveBuildError):
    """Destination path cannot be opened for writing."""


class FormatConfigurationError(ArchiveBuildError):
    """Archive format or compressor identifier is unknown or misconfigured."""


class ArchiveIOError(ArchiveBuildError):
    """Failure while creating entries, copying payload, or closing the archive."""
