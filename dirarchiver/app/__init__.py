"""Application layer for dirarchiver.

Services here orchestrate archive builds through port interfaces; the
format-specific work lives in adapters wired up by ``dirarchiver.bootstrap``.
"""

__all__ = [
    "ArchiveService",
    "ArchiveSummary",
    "SerializationStats",
    "serialize_tree",
]

from dirarchiver.app.archive_service import ArchiveService, ArchiveSummary
from dirarchiver.app.serializer import SerializationStats, serialize_tree
