"""File-level metadata shown in the info panel."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np

_KB = 1024
_MB = _KB * 1024
_GB = _MB * 1024


def format_file_size(size: int) -> str:
    """Render *size* bytes as ``B``, ``KB``, ``MB`` or ``GB``."""
    if size >= _GB:
        return f"{size / _GB:.2f} GB"
    if size >= _MB:
        return f"{size / _MB:.2f} MB"
    if size >= _KB:
        return f"{size / _KB:.1f} KB"
    return f"{size} B"


@dataclass(frozen=True)
class BasicMeta:
    file_name: str
    file_path: str
    format: str
    width: int
    height: int
    file_size: int
    color_type: str

    @classmethod
    def from_path(cls, path: Path, fmt: str, width: int, height: int, color_type: str) -> "BasicMeta":
        try:
            file_size = path.stat().st_size
        except OSError:
            file_size = 0
        return cls(
            file_name=path.name or "unknown",
            file_path=str(path),
            format=fmt,
            width=width,
            height=height,
            file_size=file_size,
            color_type=color_type,
        )

    def file_size_display(self) -> str:
        return format_file_size(self.file_size)

    def resolution_display(self) -> str:
        return f"{self.width} × {self.height}"


@dataclass(frozen=True)
class DocumentMeta:
    basic: BasicMeta
    page_count: Optional[int] = None


@dataclass
class Page:
    """One page of a paginated document and its (optional) thumbnail."""

    index: int
    width: int
    height: int
    thumbnail: Optional[np.ndarray] = None

    @property
    def aspect_ratio(self) -> float:
        if self.height == 0:
            return 1.0
        return self.width / self.height


__all__ = ["BasicMeta", "DocumentMeta", "Page", "format_file_size"]
