"""Shared contract for the three document variants."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import ClassVar, Optional

import numpy as np

from ...config import PAGINATED_EXTENSIONS, RASTER_EXTENSIONS, VECTOR_EXTENSIONS
from ..transform import FlipAxis, InterpolationQuality, Rotation, TransformState


class DocumentKind(str, Enum):
    RASTER = "raster"
    VECTOR = "vector"
    PAGINATED = "paginated"

    @classmethod
    def from_extension(cls, extension: str) -> Optional["DocumentKind"]:
        ext = extension.lower().lstrip(".")
        if ext in RASTER_EXTENSIONS:
            return cls.RASTER
        if ext in VECTOR_EXTENSIONS:
            return cls.VECTOR
        if ext in PAGINATED_EXTENSIONS:
            return cls.PAGINATED
        return None

    @classmethod
    def from_path(cls, path: Path | str) -> Optional["DocumentKind"]:
        """Return the kind implied by the file extension, or ``None``."""
        return cls.from_extension(Path(path).suffix)


@dataclass(frozen=True)
class RenderOutput:
    """Displayable pixels plus their size.

    ``handle`` is a read-only ``H x W x 4`` RGBA array; the presentation
    layer wraps it in whatever image type it draws with.
    """

    handle: np.ndarray
    width: int
    height: int


@dataclass(frozen=True)
class DocumentInfo:
    native_width: int
    native_height: int
    format_name: str


def make_handle(pixels: np.ndarray) -> np.ndarray:
    handle = pixels.view()
    handle.flags.writeable = False
    return handle


class BaseDocument(ABC):
    """Operations every document variant supports.

    Transform operations mutate the document in place and keep the
    reported dimensions equal to the displayable pixels.
    """

    kind: ClassVar[DocumentKind]
    format_name: ClassVar[str]

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        self._interpolation = InterpolationQuality.BALANCED

    def __repr__(self) -> str:
        width, height = self.dimensions()
        name = self.path.name if self.path is not None else "<memory>"
        return f"{type(self).__name__}({name!r}, {width}x{height})"

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    @abstractmethod
    def render(self, scale: float) -> RenderOutput:
        ...

    @abstractmethod
    def info(self) -> DocumentInfo:
        ...

    @abstractmethod
    def dimensions(self) -> tuple[int, int]:
        """Return the size of the currently displayable pixels."""

    @abstractmethod
    def native_dimensions(self) -> tuple[int, int]:
        ...

    @property
    @abstractmethod
    def pixels(self) -> np.ndarray:
        """The currently displayable RGBA buffer."""

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------
    @abstractmethod
    def transform_state(self) -> TransformState:
        ...

    @abstractmethod
    def rotate(self, rotation: Rotation) -> None:
        """Set the quarter-turn rotation, leaving any fine angle behind."""

    @abstractmethod
    def flip(self, axis: FlipAxis) -> None:
        ...

    @abstractmethod
    def rotate_fine(self, degrees: float) -> None:
        """Add *degrees* of clockwise fine rotation."""

    @abstractmethod
    def reset_fine_rotation(self) -> None:
        """Drop the fine angle, returning to the quarter turn it started from."""

    @abstractmethod
    def crop(self, x: int, y: int, width: int, height: int) -> None:
        ...

    @property
    def interpolation_quality(self) -> InterpolationQuality:
        return self._interpolation

    def set_interpolation_quality(self, quality: InterpolationQuality) -> None:
        self._interpolation = quality


__all__ = [
    "BaseDocument",
    "DocumentInfo",
    "DocumentKind",
    "RenderOutput",
    "make_handle",
]
