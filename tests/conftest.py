"""Pytest configuration and fixtures."""

import gc
import os
import shutil
import tarfile
import tempfile
import time
import zipfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from dirarchiver.config import Settings

# Relative paths of the sample tree; trailing "/" marks a directory.
SAMPLE_TREE = (
    "temp/",
    "temp/test1/",
    "temp/test1/file1.txt",
    "temp/test2/",
    "temp/test2/file1.txt",
    "temp/test2/file2.bin",
    "tmp/",
    "tmp/test3/",
    "tmp/test3/test4/",
    "tmp/test3/test4/test5/",
    "tmp/test3/test4/test5/file3.bin",
    "tmp/test3/test4/test5/file3.txt",
)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    try:
        yield Path(tmpdir)
    finally:
        # Force garbage collection to release any file handles
        gc.collect()
        # Small delay to allow OS to release file locks
        time.sleep(0.1)
        shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def override_settings() -> Generator[Settings, None, None]:
    """Provide isolated dirarchiver settings scoped to tests."""

    import dirarchiver.config as config_module

    original_settings = getattr(config_module, "_settings", None)

    settings = config_module.Settings(copy_chunk_size=4096, compute_digest=True)
    config_module._settings = settings

    try:
        yield settings
    finally:
        config_module._settings = original_settings


@pytest.fixture
def source_tree(temp_dir: Path) -> Path:
    """Populate ``temp_dir/source`` with the sample tree and random file contents."""
    root = temp_dir / "source"
    root.mkdir()
    for relative in SAMPLE_TREE:
        target = root / relative
        if relative.endswith("/"):
            target.mkdir(parents=True, exist_ok=True)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            size = int.from_bytes(os.urandom(2), "big") % 8192
            target.write_bytes(os.urandom(size))
    return root


@pytest.fixture
def expected_entries(source_tree: Path) -> Callable[[str], dict[str, bytes | None]]:
    """Build the expected ``{archive name: content}`` map for a normalized prefix.

    Directories map to ``None``. A non-empty prefix contributes its own
    directory entry.
    """

    def build(normalized_prefix: str = "") -> dict[str, bytes | None]:
        expected: dict[str, bytes | None] = {}
        if normalized_prefix:
            expected[normalized_prefix] = None
        for relative in SAMPLE_TREE:
            name = normalized_prefix + relative
            if relative.endswith("/"):
                expected[name] = None
            else:
                expected[name] = (source_tree / relative).read_bytes()
        return expected

    return build


def _read_zip_entries(path: Path) -> dict[str, bytes | None]:
    """Read a zip or jar into ``{name: content}`` with ``None`` for directories."""
    entries: dict[str, bytes | None] = {}
    with zipfile.ZipFile(path) as archive:
        for info in archive.infolist():
            entries[info.filename] = None if info.is_dir() else archive.read(info)
    return entries


def _read_tar_entries(path: Path) -> dict[str, bytes | None]:
    """Read a (possibly compressed) tar into ``{name: content}``.

    ``tarfile`` strips the trailing slash from directory names on read, so it
    is restored here to match the archive's own naming.
    """
    entries: dict[str, bytes | None] = {}
    with tarfile.open(path, mode="r:*") as archive:
        for member in archive.getmembers():
            if member.isdir():
                entries[member.name.rstrip("/") + "/"] = None
            else:
                handle = archive.extractfile(member)
                assert handle is not None
                with handle:
                    entries[member.name] = handle.read()
    return entries


@pytest.fixture
def zip_reader() -> Callable[[Path], dict[str, bytes | None]]:
    """Expose the zip/jar reader to tests."""
    return _read_zip_entries


@pytest.fixture
def tar_reader() -> Callable[[Path], dict[str, bytes | None]]:
    """Expose the tar/tgz reader to tests."""
    return _read_tar_entries
