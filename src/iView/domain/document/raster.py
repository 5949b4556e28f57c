"""Bitmap documents backed by a decoded RGBA buffer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import numpy as np

from ..crop import CropRegion
from ..transform import FlipAxis, Rotation, TransformState
from . import pixels as px
from .base import BaseDocument, DocumentInfo, DocumentKind, RenderOutput, make_handle

LOGGER = logging.getLogger(__name__)


class RasterDocument(BaseDocument):
    """A decoded bitmap.

    Quarter turns and flips are applied to the buffer as exact deltas from
    the current state. Fine rotation is always re-rendered from the
    quarter-turned buffer it started from, so repeated adjustments do not
    accumulate resampling blur.
    """

    kind = DocumentKind.RASTER
    format_name = "Raster"

    def __init__(self, pixels: np.ndarray, path: Path | None = None, color_type: str = "RGBA") -> None:
        super().__init__(path)
        self._pixels = px.ensure_rgba(pixels)
        self._native_height, self._native_width = self._pixels.shape[:2]
        self._state = TransformState()
        self._handle = make_handle(self._pixels)
        self.color_type = color_type
        # Buffer and quarter turn in effect when fine rotation began.
        self._upright: Optional[np.ndarray] = None
        self._upright_rotation = Rotation.NONE
        self._fine_delta = 0.0

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    @property
    def pixels(self) -> np.ndarray:
        return self._handle

    def dimensions(self) -> tuple[int, int]:
        height, width = self._pixels.shape[:2]
        return (width, height)

    def native_dimensions(self) -> tuple[int, int]:
        return (self._native_width, self._native_height)

    def render(self, scale: float) -> RenderOutput:
        # Bitmaps are shown as-is; zooming happens in the presentation layer.
        width, height = self.dimensions()
        return RenderOutput(self._handle, width, height)

    def info(self) -> DocumentInfo:
        return DocumentInfo(self._native_width, self._native_height, self.format_name)

    def _set_pixels(self, pixels: np.ndarray) -> None:
        self._pixels = pixels
        self._handle = make_handle(pixels)

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------
    def transform_state(self) -> TransformState:
        return self._state

    def rotate(self, rotation: Rotation) -> None:
        current = self._state.rotation
        base = self._pixels
        if self._state.is_fine:
            base = self._upright if self._upright is not None else self._pixels
            current = self._upright_rotation
            self._clear_fine()
        delta = px.quarter_delta(current, rotation)
        self._set_pixels(px.rotate_quarter(base, delta))
        self._state = self._state.with_rotation(rotation)

    def flip(self, axis: FlipAxis) -> None:
        if self._state.is_fine and self._upright is not None:
            self._upright = px.flip(self._upright, px.display_axis(axis, self._upright_rotation))
            self._set_pixels(px.rotate_fine(self._upright, self._fine_delta, self._interpolation))
        else:
            self._set_pixels(px.flip(self._pixels, px.display_axis(axis, self._state.rotation)))
        self._state = self._state.flipped(axis)

    def rotate_fine(self, degrees: float) -> None:
        if not self._state.is_fine:
            self._upright = self._pixels
            self._upright_rotation = self._state.rotation
            self._fine_delta = 0.0
        self._fine_delta += degrees
        self._set_pixels(px.rotate_fine(self._upright, self._fine_delta, self._interpolation))
        self._state = self._state.with_fine_angle(self._upright_rotation.degrees + self._fine_delta)

    def reset_fine_rotation(self) -> None:
        if not self._state.is_fine:
            return
        if self._upright is not None:
            self._set_pixels(self._upright)
        self._state = self._state.with_rotation(self._upright_rotation)
        self._clear_fine()

    def _clear_fine(self) -> None:
        self._upright = None
        self._upright_rotation = Rotation.NONE
        self._fine_delta = 0.0

    # ------------------------------------------------------------------
    # Cropping and resizing
    # ------------------------------------------------------------------
    def crop(self, x: int, y: int, width: int, height: int) -> None:
        """Destructively crop the displayed pixels.

        The cropped buffer becomes the new native image, so the transform
        state (including any fine angle) resets to identity.
        """
        current_w, current_h = self.dimensions()
        region = CropRegion(x, y, width, height).clamped_to(current_w, current_h)
        cropped = px.crop(self._pixels, *region.as_tuple())
        self._clear_fine()
        self._set_pixels(cropped)
        self._native_width, self._native_height = region.width, region.height
        self._state = TransformState()
        LOGGER.debug("Cropped raster to %s", region)

    def crop_to_image(self, x: int, y: int, width: int, height: int) -> np.ndarray:
        """Return a cropped copy of the displayed pixels without mutating the document."""
        current_w, current_h = self.dimensions()
        region = CropRegion(x, y, width, height).clamped_to(current_w, current_h)
        return px.crop(self._pixels, *region.as_tuple())

    def resize_to(self, width: int, height: int) -> None:
        """Resample the displayed pixels to exactly ``width x height``.

        Like :meth:`crop`, the result becomes the new native image.
        """
        self._set_pixels(px.resize(self._pixels, width, height, self._interpolation))
        self._native_width, self._native_height = self.dimensions()
        self._state = TransformState()
        self._clear_fine()
