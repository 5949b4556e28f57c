"""Viewport state: scale, pan and the screen/document coordinate mapping."""

from __future__ import annotations

from enum import Enum

from ...config import MIN_SCALE
from ..geometry import Bounds, calculate_fit_scale


class ViewMode(Enum):
    FIT = "fit"
    ACTUAL_SIZE = "actual_size"
    CUSTOM = "custom"


class Viewport:
    """Maps between canvas (screen) coordinates and document pixels.

    The document is centred in the canvas and then shifted by the pan
    offset::

        origin = ((canvas_w - doc_w * scale) / 2 + pan_x,
                  (canvas_h - doc_h * scale) / 2 + pan_y)

    In :attr:`ViewMode.FIT` the scale is recomputed whenever the canvas or
    the document size changes. Any explicit scale change, and any pan while
    fitted, moves the viewport to :attr:`ViewMode.CUSTOM`.
    """

    def __init__(self) -> None:
        self._mode = ViewMode.FIT
        self._pan_x = 0.0
        self._pan_y = 0.0
        self._scale = 1.0
        self._canvas_width = 0.0
        self._canvas_height = 0.0
        self._document_width = 0.0
        self._document_height = 0.0

    def __repr__(self) -> str:
        return (
            f"Viewport(mode={self._mode.value}, scale={self._scale:.4f}, "
            f"pan=({self._pan_x:.1f}, {self._pan_y:.1f}), "
            f"canvas={self._canvas_width:g}x{self._canvas_height:g}, "
            f"document={self._document_width:g}x{self._document_height:g})"
        )

    # ------------------------------------------------------------------
    # Sizes
    # ------------------------------------------------------------------
    @property
    def canvas_size(self) -> tuple[float, float]:
        return (self._canvas_width, self._canvas_height)

    @property
    def document_size(self) -> tuple[float, float]:
        return (self._document_width, self._document_height)

    def set_canvas_size(self, width: float, height: float) -> None:
        self._canvas_width = float(width)
        self._canvas_height = float(height)
        self._update_scale_if_fit()

    def set_document_size(self, width: float, height: float) -> None:
        self._document_width = float(width)
        self._document_height = float(height)
        self._update_scale_if_fit()

    @property
    def scaled_document_size(self) -> tuple[float, float]:
        return (self._document_width * self._scale, self._document_height * self._scale)

    # ------------------------------------------------------------------
    # Mode and scale
    # ------------------------------------------------------------------
    @property
    def view_mode(self) -> ViewMode:
        return self._mode

    def set_view_mode(self, mode: ViewMode) -> None:
        self._mode = mode
        if mode is ViewMode.FIT:
            self.reset_pan()
            self._update_scale_if_fit()
        elif mode is ViewMode.ACTUAL_SIZE:
            self.reset_pan()
            self._scale = 1.0

    @property
    def scale(self) -> float:
        return self._scale

    def set_scale(self, scale: float) -> None:
        self._scale = max(float(scale), MIN_SCALE)
        self._mode = ViewMode.CUSTOM

    def zoom_in(self, factor: float) -> None:
        self.set_scale(self._scale * factor)

    def zoom_out(self, factor: float) -> None:
        self.set_scale(self._scale / factor)

    def calculate_fit_scale(self) -> float:
        return calculate_fit_scale(
            self._document_width,
            self._document_height,
            self._canvas_width,
            self._canvas_height,
        )

    def _update_scale_if_fit(self) -> None:
        if self._mode is ViewMode.FIT:
            self._scale = self.calculate_fit_scale()

    # ------------------------------------------------------------------
    # Pan
    # ------------------------------------------------------------------
    @property
    def pan_offset(self) -> tuple[float, float]:
        return (self._pan_x, self._pan_y)

    def set_pan(self, x: float, y: float) -> None:
        self._pan_x = float(x)
        self._pan_y = float(y)
        if self._mode is ViewMode.FIT:
            self._mode = ViewMode.CUSTOM

    def pan_by(self, dx: float, dy: float) -> None:
        self._pan_x += dx
        self._pan_y += dy
        if self._mode is ViewMode.FIT:
            self._mode = ViewMode.CUSTOM

    def reset_pan(self) -> None:
        self._pan_x = 0.0
        self._pan_y = 0.0

    def reset(self) -> None:
        """Return to a centred, fitted view."""
        self._mode = ViewMode.FIT
        self.reset_pan()
        self._update_scale_if_fit()

    # ------------------------------------------------------------------
    # Coordinate mapping
    # ------------------------------------------------------------------
    def document_origin(self) -> tuple[float, float]:
        """Return the canvas position of the document's top-left pixel."""
        scaled_w, scaled_h = self.scaled_document_size
        return (
            (self._canvas_width - scaled_w) / 2.0 + self._pan_x,
            (self._canvas_height - scaled_h) / 2.0 + self._pan_y,
        )

    def screen_to_document(self, x: float, y: float) -> tuple[float, float]:
        origin_x, origin_y = self.document_origin()
        return ((x - origin_x) / self._scale, (y - origin_y) / self._scale)

    def document_to_screen(self, x: float, y: float) -> tuple[float, float]:
        origin_x, origin_y = self.document_origin()
        return (origin_x + x * self._scale, origin_y + y * self._scale)

    def document_screen_bounds(self) -> Bounds:
        """Return where the whole document lands on the canvas."""
        origin_x, origin_y = self.document_origin()
        scaled_w, scaled_h = self.scaled_document_size
        return Bounds(origin_x, origin_y, scaled_w, scaled_h)

    def visible_bounds(self) -> Bounds:
        """Return the part of the document visible through the canvas, in document pixels."""
        left, top = self.screen_to_document(0.0, 0.0)
        right, bottom = self.screen_to_document(self._canvas_width, self._canvas_height)
        x = max(left, 0.0)
        y = max(top, 0.0)
        width = min(right - left, self._document_width - x)
        height = min(bottom - top, self._document_height - y)
        return Bounds(x, y, width, height)
