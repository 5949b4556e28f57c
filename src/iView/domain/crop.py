"""Crop regions and the canvas-to-pixel crop mapper."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..errors import InvalidRegionError
from .geometry import Bounds, round_half_away

if TYPE_CHECKING:  # pragma: no cover - only for type checking
    from .viewport import Viewport


class ContentFit(Enum):
    """How the document is laid into the canvas before zoom is applied."""

    CONTAIN = "contain"
    NONE = "none"


@dataclass(frozen=True)
class CropRegion:
    """Integer rectangle in the pixel space it was produced in."""

    x: int
    y: int
    width: int
    height: int

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)

    def is_valid(self) -> bool:
        return self.width > 0 and self.height > 0

    def clamped_to(self, width: int, height: int) -> "CropRegion":
        """Return the region trimmed to a ``width x height`` source.

        The origin must lie inside the source; the size is shrunk to the
        remaining extent.

        Raises
        ------
        InvalidRegionError
            If the origin is outside the source or the trimmed area is empty.
        """
        if self.x < 0 or self.y < 0 or self.x >= width or self.y >= height:
            raise InvalidRegionError(
                f"Crop origin ({self.x}, {self.y}) is outside the {width}x{height} bounds"
            )
        clamped_w = min(self.width, width - self.x)
        clamped_h = min(self.height, height - self.y)
        if clamped_w <= 0 or clamped_h <= 0:
            raise InvalidRegionError("Crop region has zero width or height")
        return CropRegion(self.x, self.y, clamped_w, clamped_h)


def _displayed_size(
    canvas_size: tuple[float, float],
    image_size: tuple[float, float],
    content_fit: ContentFit,
) -> tuple[float, float]:
    image_w, image_h = image_size
    if content_fit is ContentFit.NONE:
        return (image_w, image_h)
    canvas_w, canvas_h = canvas_size
    aspect = image_w / image_h
    if aspect > canvas_w / canvas_h:
        return (canvas_w, canvas_w / aspect)
    return (canvas_h * aspect, canvas_h)


def canvas_to_image_point(
    point: tuple[float, float],
    canvas_size: tuple[float, float],
    image_size: tuple[float, float],
    scale: float,
    pan: tuple[float, float] = (0.0, 0.0),
    content_fit: ContentFit = ContentFit.CONTAIN,
) -> tuple[float, float]:
    """Map a canvas-local point to (unclamped) image pixel coordinates.

    Parameters
    ----------
    point:
        Canvas-local ``(x, y)``.
    canvas_size, image_size:
        ``(width, height)`` of the canvas and of the document's pixels.
    scale:
        Zoom applied on top of the content fit.
    pan:
        Pan offset in canvas units.
    content_fit:
        Layout of the document before zoom.

    Returns
    -------
    tuple[float, float]
        Pixel coordinates; may lie outside the image.
    """
    display_w, display_h = _displayed_size(canvas_size, image_size, content_fit)
    canvas_w, canvas_h = canvas_size
    origin_x = (canvas_w - display_w * scale) / 2.0 + pan[0]
    origin_y = (canvas_h - display_h * scale) / 2.0 + pan[1]
    local_x = (point[0] - origin_x) / scale
    local_y = (point[1] - origin_y) / scale
    return (local_x / display_w * image_size[0], local_y / display_h * image_size[1])


def canvas_rect_to_image_rect(
    selection: Bounds,
    canvas_size: tuple[float, float],
    image_size: tuple[float, float],
    scale: float,
    pan: tuple[float, float] = (0.0, 0.0),
    content_fit: ContentFit = ContentFit.CONTAIN,
) -> CropRegion:
    """Convert a canvas selection into a clamped pixel :class:`CropRegion`.

    Both corners are mapped independently, normalised so the rectangle has
    a positive extent, clamped into ``[0, image_size]`` and rounded.

    Raises
    ------
    InvalidRegionError
        When the canvas or image is degenerate, or the clamped region is
        one pixel or less on either side.
    """
    canvas_w, canvas_h = canvas_size
    image_w, image_h = image_size
    if canvas_w <= 1 or canvas_h <= 1:
        raise InvalidRegionError(f"Canvas {canvas_w}x{canvas_h} is too small to crop from")
    if image_w <= 0 or image_h <= 0 or scale <= 0:
        raise InvalidRegionError("Document has no pixels to crop")

    args = (canvas_size, image_size, scale, pan, content_fit)
    x1, y1 = canvas_to_image_point((selection.x, selection.y), *args)
    x2, y2 = canvas_to_image_point((selection.right, selection.bottom), *args)

    left = min(max(min(x1, x2), 0.0), image_w)
    top = min(max(min(y1, y2), 0.0), image_h)
    right = min(max(max(x1, x2), 0.0), image_w)
    bottom = min(max(max(y1, y2), 0.0), image_h)

    x = round_half_away(left)
    y = round_half_away(top)
    width = round_half_away(right) - x
    height = round_half_away(bottom) - y
    if width <= 1 or height <= 1:
        raise InvalidRegionError(
            f"Selection maps to a {width}x{height} region, which is too small to crop"
        )
    return CropRegion(x, y, width, height)


def viewport_rect_to_image_rect(selection: Bounds, viewport: "Viewport") -> CropRegion:
    """Convert a selection drawn over *viewport* into document pixels.

    The viewport's scale is absolute, so no additional content fit applies.
    """
    return canvas_rect_to_image_rect(
        selection,
        viewport.canvas_size,
        viewport.document_size,
        viewport.scale,
        viewport.pan_offset,
        ContentFit.NONE,
    )


__all__ = [
    "ContentFit",
    "CropRegion",
    "canvas_rect_to_image_rect",
    "canvas_to_image_point",
    "viewport_rect_to_image_rect",
]
