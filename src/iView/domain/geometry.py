"""Pure geometry helpers shared by the viewport, documents and crop mapper.

All functions here are free of side effects and operate on plain floats or
on the immutable :class:`Bounds` rectangle.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..config import MIN_PIXMAP_SIZE


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned rectangle anchored at its top-left corner."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_corners(cls, x1: float, y1: float, x2: float, y2: float) -> "Bounds":
        """Return the rectangle spanned by two opposite corners in any order."""
        return cls(min(x1, x2), min(y1, y2), abs(x2 - x1), abs(y2 - y1))

    @classmethod
    def centered(cls, center_x: float, center_y: float, width: float, height: float) -> "Bounds":
        return cls(center_x - width / 2.0, center_y - height / 2.0, width, height)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)

    @property
    def top_left(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def top_right(self) -> tuple[float, float]:
        return (self.right, self.y)

    @property
    def bottom_left(self) -> tuple[float, float]:
        return (self.x, self.bottom)

    @property
    def bottom_right(self) -> tuple[float, float]:
        return (self.right, self.bottom)

    @property
    def area(self) -> float:
        return self.width * self.height

    def is_empty(self) -> bool:
        return self.width <= 0.0 or self.height <= 0.0

    def contains_point(self, x: float, y: float) -> bool:
        """Return ``True`` when the point lies inside or on the edge."""
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def contains_bounds(self, other: "Bounds") -> bool:
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def intersects(self, other: "Bounds") -> bool:
        # Touching edges do not count as an overlap.
        return (
            self.x < other.right
            and self.right > other.x
            and self.y < other.bottom
            and self.bottom > other.y
        )

    def intersection(self, other: "Bounds") -> "Bounds | None":
        if not self.intersects(other):
            return None
        x = max(self.x, other.x)
        y = max(self.y, other.y)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        return Bounds(x, y, right - x, bottom - y)

    def union(self, other: "Bounds") -> "Bounds":
        x = min(self.x, other.x)
        y = min(self.y, other.y)
        right = max(self.right, other.right)
        bottom = max(self.bottom, other.bottom)
        return Bounds(x, y, right - x, bottom - y)

    def expand(self, margin: float) -> "Bounds":
        return Bounds(
            self.x - margin,
            self.y - margin,
            self.width + 2.0 * margin,
            self.height + 2.0 * margin,
        )

    def shrink(self, margin: float) -> "Bounds | None":
        """Return the rectangle inset by *margin*, or ``None`` if it collapses."""
        width = self.width - 2.0 * margin
        height = self.height - 2.0 * margin
        if width <= 0.0 or height <= 0.0:
            return None
        return Bounds(self.x + margin, self.y + margin, width, height)

    def scale(self, factor: float) -> "Bounds":
        """Scale about the centre."""
        cx, cy = self.center
        return Bounds.centered(cx, cy, self.width * factor, self.height * factor)

    def translate(self, dx: float, dy: float) -> "Bounds":
        return Bounds(self.x + dx, self.y + dy, self.width, self.height)

    def clamp_to(self, container: "Bounds") -> "Bounds":
        """Move (never resize) the rectangle so it sits inside *container*."""
        x = min(max(self.x, container.x), container.right - self.width)
        y = min(max(self.y, container.y), container.bottom - self.height)
        return Bounds(x, y, self.width, self.height)


def calculate_fit_scale(width: float, height: float, target_width: float, target_height: float) -> float:
    """Return the largest scale at which ``width x height`` fits the target.

    Parameters
    ----------
    width, height:
        Source dimensions.
    target_width, target_height:
        Available space.

    Returns
    -------
    float
        ``min(target_width / width, target_height / height)``; ``1.0`` when
        any dimension is zero or negative.
    """
    if width <= 0 or height <= 0 or target_width <= 0 or target_height <= 0:
        return 1.0
    return min(target_width / float(width), target_height / float(height))


def calculate_fill_scale(width: float, height: float, target_width: float, target_height: float) -> float:
    """Return the smallest scale at which the source covers the whole target."""
    if width <= 0 or height <= 0 or target_width <= 0 or target_height <= 0:
        return 1.0
    return max(target_width / float(width), target_height / float(height))


def scale_dimensions(width: int, height: int, scale: float) -> tuple[int, int]:
    """Return ``(width, height)`` scaled and rounded, never below one pixel."""
    return (
        max(MIN_PIXMAP_SIZE, round_half_away(width * scale)),
        max(MIN_PIXMAP_SIZE, round_half_away(height * scale)),
    )


def rotated_bounding_box(width: float, height: float, degrees: float) -> tuple[float, float]:
    """Return the axis-aligned size enclosing ``width x height`` rotated by *degrees*.

    Parameters
    ----------
    width, height:
        Unrotated dimensions.
    degrees:
        Rotation angle; the sign does not affect the result.

    Returns
    -------
    tuple[float, float]
        ``(w|cos| + h|sin|, w|sin| + h|cos|)``
    """
    radians = math.radians(degrees)
    cos_a = abs(math.cos(radians))
    sin_a = abs(math.sin(radians))
    return (width * cos_a + height * sin_a, width * sin_a + height * cos_a)


def normalize_degrees(degrees: float) -> float:
    """Map *degrees* into ``[0, 360)``."""
    value = math.fmod(degrees, 360.0)
    if value < 0.0:
        value += 360.0
    # fmod can return 360.0 for tiny negative inputs after the correction.
    return 0.0 if value >= 360.0 else value


def snap_to_right_angle(degrees: float) -> int:
    """Return the multiple of 90 in ``{0, 90, 180, 270}`` nearest to *degrees*."""
    return round_half_away(degrees / 90.0) * 90 % 360


def round_half_away(value: float) -> int:
    """Round to the nearest integer with ties away from zero.

    :func:`round` uses banker's rounding, which would snap 45 degrees to 0
    and 135 degrees to 180 instead of treating both ties the same way.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))
