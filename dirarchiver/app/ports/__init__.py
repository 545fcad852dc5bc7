"""Port interfaces for the dirarchiver application layer.

Domain logic depends on these protocols, never on concrete adapters.
"""

__all__ = [
    "ARCHIVE_FORMATS",
    "ArchiveContainerPort",
    "ArchiveEntry",
    "ArchiveFormat",
    "FormatAdapterPort",
]

from dirarchiver.app.ports.archive import (
    ARCHIVE_FORMATS,
    ArchiveContainerPort,
    ArchiveEntry,
    ArchiveFormat,
    FormatAdapterPort,
)
