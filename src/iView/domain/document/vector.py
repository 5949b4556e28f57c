"""Vector documents: a resolution-independent scene plus a cached rasterization."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Protocol

import numpy as np

from ...config import MIN_PIXMAP_SIZE
from ...errors import RenderError
from ..crop import CropRegion
from ..transform import FlipAxis, Rotation, TransformState
from . import pixels as px
from .base import BaseDocument, DocumentInfo, DocumentKind, RenderOutput, make_handle

LOGGER = logging.getLogger(__name__)

_SCALE_EPSILON = 1e-9


class VectorScene(Protocol):
    """A parsed vector scene able to rasterize itself."""

    @property
    def intrinsic_size(self) -> tuple[float, float]:
        ...

    def render(self, width: int, height: int) -> np.ndarray:
        """Return an RGBA rasterization filling ``width x height``."""
        ...


def rendered_size(native_width: int, native_height: int, scale: float) -> tuple[int, int]:
    """Pixel size of a scene rasterized at *scale*; rounded up, at least one pixel."""
    return (
        max(MIN_PIXMAP_SIZE, math.ceil(native_width * scale)),
        max(MIN_PIXMAP_SIZE, math.ceil(native_height * scale)),
    )


class VectorDocument(BaseDocument):
    """An SVG-like document.

    The scene is authoritative; the rendered buffer is a cache for the
    current ``(scale, transform)`` pair. Cropping only trims that cache, so
    the next re-render at a different scale shows the whole scene again.
    """

    kind = DocumentKind.VECTOR
    format_name = "SVG"

    def __init__(self, scene: VectorScene, path: Path | None = None) -> None:
        super().__init__(path)
        self._scene = scene
        width, height = scene.intrinsic_size
        self._native_width = max(MIN_PIXMAP_SIZE, math.ceil(width))
        self._native_height = max(MIN_PIXMAP_SIZE, math.ceil(height))
        self._state = TransformState()
        self._pre_fine_rotation = Rotation.NONE
        self._scale = 1.0
        self._rendered = self._rasterize(self._scale, self._state)
        self._handle = make_handle(self._rendered)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    @property
    def scene(self) -> VectorScene:
        return self._scene

    @property
    def current_scale(self) -> float:
        return self._scale

    @property
    def pixels(self) -> np.ndarray:
        return self._handle

    def dimensions(self) -> tuple[int, int]:
        height, width = self._rendered.shape[:2]
        return (width, height)

    def native_dimensions(self) -> tuple[int, int]:
        return (self._native_width, self._native_height)

    def info(self) -> DocumentInfo:
        return DocumentInfo(self._native_width, self._native_height, self.format_name)

    def render(self, scale: float) -> RenderOutput:
        self.render_at_scale(scale)
        width, height = self.dimensions()
        return RenderOutput(self._handle, width, height)

    def render_at_scale(self, scale: float) -> bool:
        """Re-rasterize at *scale*; return ``False`` when the scale is unchanged."""
        if abs(self._scale - scale) < _SCALE_EPSILON:
            return False
        self._commit(self._rasterize(scale, self._state), scale, self._state)
        return True

    def _rasterize(self, scale: float, state: TransformState) -> np.ndarray:
        width, height = rendered_size(self._native_width, self._native_height, scale)
        try:
            base = px.ensure_rgba(self._scene.render(width, height))
        except ValueError as exc:
            raise RenderError(f"Scene produced an unusable raster: {exc}") from exc
        return px.apply_transform(base, state, self._interpolation)

    def _commit(self, rendered: np.ndarray, scale: float, state: TransformState) -> None:
        self._rendered = rendered
        self._handle = make_handle(rendered)
        self._scale = scale
        self._state = state

    def _rerender(self, state: TransformState) -> None:
        # Rasterize before touching any field so a failure leaves the document intact.
        self._commit(self._rasterize(self._scale, state), self._scale, state)

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------
    def transform_state(self) -> TransformState:
        return self._state

    def rotate(self, rotation: Rotation) -> None:
        self._rerender(self._state.with_rotation(rotation))

    def flip(self, axis: FlipAxis) -> None:
        self._rerender(self._state.flipped(axis))

    def rotate_fine(self, degrees: float) -> None:
        if not self._state.is_fine:
            self._pre_fine_rotation = self._state.rotation
        self._rerender(self._state.with_fine_angle(self._state.degrees + degrees))

    def reset_fine_rotation(self) -> None:
        if not self._state.is_fine:
            return
        self._rerender(self._state.with_rotation(self._pre_fine_rotation))
        self._pre_fine_rotation = Rotation.NONE

    def crop(self, x: int, y: int, width: int, height: int) -> None:
        """Trim the current rasterization; the scene itself is untouched."""
        current_w, current_h = self.dimensions()
        region = CropRegion(x, y, width, height).clamped_to(current_w, current_h)
        cropped = px.crop(self._rendered, *region.as_tuple())
        self._rendered = cropped
        self._handle = make_handle(cropped)
        LOGGER.debug("Cropped vector rasterization to %s", region)

    def crop_to_image(self, x: int, y: int, width: int, height: int) -> np.ndarray:
        current_w, current_h = self.dimensions()
        region = CropRegion(x, y, width, height).clamped_to(current_w, current_h)
        return px.crop(self._rendered, *region.as_tuple())


__all__ = ["VectorDocument", "VectorScene", "rendered_size"]
