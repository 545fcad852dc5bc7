"""Concrete format adapters wiring the archive ports to zipfile and tarfile."""

from __future__ import annotations

from collections.abc import Callable

from dirarchiver.app.ports import ARCHIVE_FORMATS, FormatAdapterPort
from dirarchiver.errors import FormatConfigurationError

from .tar import TarArchiveContainer, TarFormatAdapter
from .zip import JarFormatAdapter, ZipArchiveContainer, ZipFormatAdapter

FORMAT_ADAPTERS: dict[str, Callable[[], FormatAdapterPort]] = {
    "zip": ZipFormatAdapter,
    "jar": JarFormatAdapter,
    "tar": TarFormatAdapter,
    "tgz": lambda: TarFormatAdapter(compressor="gz", name="tgz"),
}


def resolve_format_adapter(format: str) -> FormatAdapterPort:
    """Return a fresh adapter for the ``format`` identifier.

    Raises:
        FormatConfigurationError: If the identifier is not a known format
    """
    try:
        factory = FORMAT_ADAPTERS[format.lower()]
    except KeyError as exc:
        raise FormatConfigurationError(
            f"Unsupported archive format '{format}'. Choose one of: {', '.join(ARCHIVE_FORMATS)}"
        ) from exc
    return factory()


__all__ = [
    "FORMAT_ADAPTERS",
    "JarFormatAdapter",
    "TarArchiveContainer",
    "TarFormatAdapter",
    "ZipArchiveContainer",
    "ZipFormatAdapter",
    "resolve_format_adapter",
]
