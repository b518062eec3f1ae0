"""Durable byte store capability.

This module defines the path-addressed byte store contract consumed by
the entity store and its local filesystem implementation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class ByteStore(Protocol):
    """Path-addressed durable byte storage.

    Implementations raise FileNotFoundError for absent paths on read and
    OSError for every other failure.
    """

    def ensure_directory(self, path: Path) -> None: ...

    def write_bytes(self, path: Path, data: bytes) -> None: ...

    def read_bytes(self, path: Path) -> bytes: ...


class LocalByteStore:
    """Filesystem-backed byte store."""

    def ensure_directory(self, path: Path) -> None:
        """Create path and its parents if absent."""
        path.mkdir(parents=True, exist_ok=True)

    def write_bytes(self, path: Path, data: bytes) -> None:
        """Replace the full contents of path with data."""
        path.write_bytes(data)

    def read_bytes(self, path: Path) -> bytes:
        """Return the full contents of path."""
        return path.read_bytes()
