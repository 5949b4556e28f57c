"""Higher-level navigation built on top of :class:`Viewport`."""

from __future__ import annotations

from enum import Enum

from ...config import (
    DEFAULT_ZOOM_STEP,
    MIN_ZOOM_STEP,
    PAN_SPEED_FAST,
    PAN_SPEED_NORMAL,
    PAN_SPEED_SLOW,
)
from .viewport import Viewport


class PanDirection(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class PanSpeed(Enum):
    SLOW = "slow"
    NORMAL = "normal"
    FAST = "fast"

    @property
    def multiplier(self) -> float:
        """Fraction of the canvas extent moved per pan step."""
        return {
            PanSpeed.SLOW: PAN_SPEED_SLOW,
            PanSpeed.NORMAL: PAN_SPEED_NORMAL,
            PanSpeed.FAST: PAN_SPEED_FAST,
        }[self]


class Camera:
    """Keyboard/wheel style navigation: stepped pans and zooms."""

    def __init__(self, pan_speed: PanSpeed = PanSpeed.NORMAL, zoom_step: float = DEFAULT_ZOOM_STEP) -> None:
        self.pan_speed = pan_speed
        self._zoom_step = max(float(zoom_step), MIN_ZOOM_STEP)

    @property
    def zoom_step(self) -> float:
        return self._zoom_step

    def set_zoom_step(self, step: float) -> None:
        self._zoom_step = max(float(step), MIN_ZOOM_STEP)

    def pan(self, viewport: Viewport, direction: PanDirection, speed: PanSpeed | None = None) -> None:
        """Move the view one step towards *direction*.

        Looking left means the content slides right, so the pan offset
        grows in the opposite sense of the direction name.
        """
        canvas_w, canvas_h = viewport.canvas_size
        multiplier = (speed or self.pan_speed).multiplier
        dx, dy = {
            PanDirection.LEFT: (canvas_w * multiplier, 0.0),
            PanDirection.RIGHT: (-canvas_w * multiplier, 0.0),
            PanDirection.UP: (0.0, canvas_h * multiplier),
            PanDirection.DOWN: (0.0, -canvas_h * multiplier),
        }[direction]
        viewport.pan_by(dx, dy)

    def zoom_in(self, viewport: Viewport) -> None:
        viewport.zoom_in(self._zoom_step)

    def zoom_out(self, viewport: Viewport) -> None:
        viewport.zoom_out(self._zoom_step)

    def zoom_to(self, viewport: Viewport, scale: float) -> None:
        viewport.set_scale(scale)

    def center(self, viewport: Viewport) -> None:
        viewport.reset_pan()

    def calculate_pan_to_center_point(self, viewport: Viewport, doc_x: float, doc_y: float) -> tuple[float, float]:
        """Return the pan delta that brings document point ``(doc_x, doc_y)`` to the canvas centre."""
        canvas_w, canvas_h = viewport.canvas_size
        screen_x, screen_y = viewport.document_to_screen(doc_x, doc_y)
        return (canvas_w / 2.0 - screen_x, canvas_h / 2.0 - screen_y)

    def pan_to_center_point(self, viewport: Viewport, doc_x: float, doc_y: float) -> None:
        dx, dy = self.calculate_pan_to_center_point(viewport, doc_x, doc_y)
        viewport.pan_by(dx, dy)

    def zoom_at_point(self, viewport: Viewport, screen_x: float, screen_y: float, factor: float) -> None:
        """Zoom by *factor* keeping the document point under ``(screen_x, screen_y)`` fixed."""
        doc_x, doc_y = viewport.screen_to_document(screen_x, screen_y)
        viewport.set_scale(viewport.scale * factor)
        new_x, new_y = viewport.document_to_screen(doc_x, doc_y)
        viewport.pan_by(screen_x - new_x, screen_y - new_y)
