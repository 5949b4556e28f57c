"""File system helpers for document browsing."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ...domain.document.base import DocumentKind

LOGGER = logging.getLogger(__name__)


def is_supported(path: Path) -> bool:
    return DocumentKind.from_path(path) is not None


def collect_supported_files(directory: Path) -> list[Path]:
    """Return the supported regular files directly inside *directory*, sorted by path.

    An unreadable directory yields an empty list.
    """
    try:
        entries = [entry for entry in Path(directory).iterdir() if entry.is_file() and is_supported(entry)]
    except OSError as exc:
        LOGGER.warning("Cannot list %s: %s", directory, exc)
        return []
    return sorted(entries)


def file_size(path: Path) -> int:
    """Return the size of *path* in bytes, or ``0`` if it cannot be stat'ed."""
    try:
        return Path(path).stat().st_size
    except OSError:
        return 0


def read_file_bytes(path: Path) -> Optional[bytes]:
    try:
        return Path(path).read_bytes()
    except OSError:
        return None
