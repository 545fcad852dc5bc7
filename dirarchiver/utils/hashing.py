"""Hashing utilities for archive digests."""

import hashlib
from pathlib import Path
from typing import BinaryIO


def compute_sha256_stream(handle: BinaryIO, chunk_size: int = 65536) -> str:
    """Compute SHA-256 hash of everything left in a readable binary stream."""
    sha256 = hashlib.sha256()
    for chunk in iter(lambda: handle.read(chunk_size), b""):
        sha256.update(chunk)
    return sha256.hexdigest()


def compute_sha256_file(file_path: Path, chunk_size: int = 65536) -> str:
    """Compute SHA-256 hash of a file.

    Args:
        file_path: Path to file
        chunk_size: Size of chunks to read (default 64KB)

    Returns:
        Hexadecimal hash string

    Raises:
        FileNotFoundError: If file does not exist
        PermissionError: If file cannot be read
    """
    with open(file_path, "rb") as f:
        return compute_sha256_stream(f, chunk_size)
