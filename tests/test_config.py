"""Tests for settings and application wiring."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from dirarchiver import create_archive
from dirarchiver.bootstrap import bootstrap_application
from dirarchiver.config import Settings, get_settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DEFAULT_FORMAT", "COPY_CHUNK_SIZE", "COMPUTE_DIGEST", "LOG_LEVEL"):
        monkeypatch.delenv(f"DIRARCHIVER_{name}", raising=False)

    settings = Settings(_env_file=None)

    assert settings.default_format == "zip"
    assert settings.copy_chunk_size == 65536
    assert settings.compute_digest is True
    assert settings.log_level == "WARNING"


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DIRARCHIVER_DEFAULT_FORMAT", "tgz")
    monkeypatch.setenv("DIRARCHIVER_COPY_CHUNK_SIZE", "512")
    monkeypatch.setenv("DIRARCHIVER_COMPUTE_DIGEST", "false")

    settings = Settings(_env_file=None)

    assert settings.default_format == "tgz"
    assert settings.copy_chunk_size == 512
    assert settings.compute_digest is False


def test_settings_reject_invalid_values() -> None:
    with pytest.raises(ValidationError):
        Settings(copy_chunk_size=0)
    with pytest.raises(ValidationError):
        Settings(default_format="rar")


def test_get_settings_returns_override(override_settings: Settings) -> None:
    assert get_settings() is override_settings


def test_bootstrap_uses_supplied_settings() -> None:
    settings = Settings(copy_chunk_size=7, compute_digest=False)

    container = bootstrap_application(settings)

    assert container.settings is settings


def test_small_chunk_size_still_copies_whole_files(
    temp_dir: Path, source_tree: Path, expected_entries, zip_reader, tar_reader
) -> None:
    settings = Settings(copy_chunk_size=7)

    create_archive(temp_dir / "out.zip", source_tree, settings=settings)
    create_archive(temp_dir / "out.tar", source_tree, format="tar", settings=settings)

    assert zip_reader(temp_dir / "out.zip") == expected_entries("")
    assert tar_reader(temp_dir / "out.tar") == expected_entries("")
