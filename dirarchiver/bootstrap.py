"""Application bootstrap wiring ports, adapters, and services."""

from __future__ import annotations

from dataclasses import dataclass

from dirarchiver.app import ArchiveService
from dirarchiver.app.adapters import resolve_format_adapter
from dirarchiver.config import Settings, get_settings


@dataclass(slots=True)
class ApplicationContainer:
    """Aggregates wired services for the CLI and the public entry points."""

    settings: Settings
    archive_service: ArchiveService


def bootstrap_application(settings: Settings | None = None) -> ApplicationContainer:
    """Instantiate adapters and services from ``settings`` (or the global settings)."""

    active_settings = settings or get_settings()

    archive_service = ArchiveService(
        resolve_format_adapter,
        chunk_size=active_settings.copy_chunk_size,
        compute_digest=active_settings.compute_digest,
    )

    return ApplicationContainer(
        settings=active_settings,
        archive_service=archive_service,
    )
