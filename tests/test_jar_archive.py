"""Tests for jar archive creation."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from dirarchiver import create_jar_archive
from dirarchiver.app.adapters.zip import JAR_MAGIC_EXTRA, MANIFEST_NAME
from dirarchiver.config import Settings
from dirarchiver.utils.paths import normalize_prefix


@pytest.mark.parametrize("prefix", [None, "", "prefix/path", "prefix\\path\\win"])
def test_jar_contains_manifest_and_tree(
    temp_dir: Path,
    source_tree: Path,
    expected_entries,
    zip_reader,
    override_settings: Settings,
    prefix: str | None,
) -> None:
    destination = temp_dir / "out.jar"

    create_jar_archive(destination, source_tree, prefix)

    entries = zip_reader(destination)
    manifest = entries.pop(MANIFEST_NAME)
    assert manifest == b"Manifest-Version: 1.0\r\n\r\n"
    assert entries == expected_entries(normalize_prefix(prefix))


def test_jar_manifest_is_first_and_unique(
    temp_dir: Path, source_tree: Path, override_settings: Settings
) -> None:
    destination = temp_dir / "out.jar"

    create_jar_archive(destination, source_tree, "prefix/path")

    with zipfile.ZipFile(destination) as archive:
        names = archive.namelist()
    assert names[0] == MANIFEST_NAME
    assert names.count(MANIFEST_NAME) == 1
    # The manifest is written directly; no META-INF/ directory entry is added.
    assert "META-INF/" not in names


def test_jar_first_entry_carries_jar_marker(
    temp_dir: Path, source_tree: Path, override_settings: Settings
) -> None:
    destination = temp_dir / "out.jar"

    create_jar_archive(destination, source_tree)

    with zipfile.ZipFile(destination) as archive:
        infos = archive.infolist()
    assert infos[0].extra.startswith(JAR_MAGIC_EXTRA)
    assert all(JAR_MAGIC_EXTRA not in info.extra for info in infos[1:])


def test_jar_of_empty_directory_holds_only_manifest(
    temp_dir: Path, override_settings: Settings
) -> None:
    source = temp_dir / "empty"
    source.mkdir()
    destination = temp_dir / "empty.jar"

    summary = create_jar_archive(destination, source)

    with zipfile.ZipFile(destination) as archive:
        assert archive.namelist() == [MANIFEST_NAME]
    assert summary.entry_count == 1
    assert summary.file_count == 0
