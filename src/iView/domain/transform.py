"""Rotation and flip bookkeeping, independent of any pixel data.

Rendering always applies the flips first and the rotation second, in the
document's native frame. Quantized (right-angle) and fine rotation are
mutually exclusive: a state carries either a :class:`Rotation` or a fine
angle, never both.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from ..config import RIGHT_ANGLE_TOLERANCE
from .geometry import normalize_degrees, rotated_bounding_box, snap_to_right_angle


class Rotation(Enum):
    """Clockwise quarter-turn rotation."""

    NONE = 0
    CW90 = 90
    CW180 = 180
    CW270 = 270

    @property
    def degrees(self) -> int:
        return self.value

    @classmethod
    def from_degrees(cls, degrees: float) -> "Rotation":
        """Return the quarter turn nearest to *degrees*."""
        return cls(snap_to_right_angle(degrees))

    def rotate_cw(self) -> "Rotation":
        return Rotation((self.value + 90) % 360)

    def rotate_ccw(self) -> "Rotation":
        return Rotation((self.value + 270) % 360)

    def swaps_dimensions(self) -> bool:
        return self in (Rotation.CW90, Rotation.CW270)


class FlipAxis(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    def swapped(self) -> "FlipAxis":
        """Return the other axis."""
        return FlipAxis.VERTICAL if self is FlipAxis.HORIZONTAL else FlipAxis.HORIZONTAL


class InterpolationQuality(Enum):
    """Resampling quality for fine rotation and resizing."""

    FAST = "fast"
    BALANCED = "balanced"
    BEST = "best"


@dataclass(frozen=True)
class TransformState:
    """Immutable snapshot of the rotation and flips applied to a document."""

    rotation: Rotation = Rotation.NONE
    fine_angle: Optional[float] = None
    flip_horizontal: bool = False
    flip_vertical: bool = False

    def __post_init__(self) -> None:
        if self.fine_angle is not None and self.rotation is not Rotation.NONE:
            raise ValueError("fine rotation and quantized rotation are exclusive")

    @property
    def is_fine(self) -> bool:
        return self.fine_angle is not None

    @property
    def degrees(self) -> float:
        """Clockwise rotation in degrees, fine or quantized."""
        if self.fine_angle is not None:
            return self.fine_angle
        return float(self.rotation.degrees)

    def is_multiple_of_90(self) -> bool:
        if self.fine_angle is None:
            return True
        remainder = self.fine_angle % 90.0
        return min(remainder, 90.0 - remainder) < RIGHT_ANGLE_TOLERANCE

    def is_identity(self) -> bool:
        return (
            not self.flip_horizontal
            and not self.flip_vertical
            and self.rotation_is_none()
        )

    def rotation_is_none(self) -> bool:
        if self.fine_angle is None:
            return self.rotation is Rotation.NONE
        return abs(self.fine_angle) < RIGHT_ANGLE_TOLERANCE

    def quantized(self) -> Rotation:
        """Return the quarter turn nearest to the current rotation."""
        if self.fine_angle is None:
            return self.rotation
        return Rotation.from_degrees(self.fine_angle)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def rotated_cw(self) -> "TransformState":
        """Advance one quarter turn, snapping a fine angle first."""
        return replace(self, rotation=self.quantized().rotate_cw(), fine_angle=None)

    def rotated_ccw(self) -> "TransformState":
        return replace(self, rotation=self.quantized().rotate_ccw(), fine_angle=None)

    def with_rotation(self, rotation: Rotation) -> "TransformState":
        return replace(self, rotation=rotation, fine_angle=None)

    def with_fine_angle(self, degrees: float) -> "TransformState":
        return replace(self, rotation=Rotation.NONE, fine_angle=normalize_degrees(degrees))

    def flipped(self, axis: FlipAxis) -> "TransformState":
        if axis is FlipAxis.HORIZONTAL:
            return replace(self, flip_horizontal=not self.flip_horizontal)
        return replace(self, flip_vertical=not self.flip_vertical)

    # ------------------------------------------------------------------
    # Dimensions
    # ------------------------------------------------------------------
    def displayed_size(self, width: float, height: float) -> tuple[float, float]:
        """Return the size of ``width x height`` content once this state is applied."""
        if self.fine_angle is not None:
            return rotated_bounding_box(width, height, self.fine_angle)
        if self.rotation.swaps_dimensions():
            return (height, width)
        return (width, height)


class TransformStateMachine:
    """Mutable holder driving :class:`TransformState` transitions."""

    def __init__(self, state: TransformState | None = None) -> None:
        self._state = state or TransformState()

    @property
    def state(self) -> TransformState:
        return self._state

    def rotate_cw(self) -> TransformState:
        self._state = self._state.rotated_cw()
        return self._state

    def rotate_ccw(self) -> TransformState:
        self._state = self._state.rotated_ccw()
        return self._state

    def rotate_to(self, rotation: Rotation) -> TransformState:
        self._state = self._state.with_rotation(rotation)
        return self._state

    def flip(self, axis: FlipAxis) -> TransformState:
        self._state = self._state.flipped(axis)
        return self._state

    def set_fine_angle(self, degrees: float) -> TransformState:
        self._state = self._state.with_fine_angle(degrees)
        return self._state

    def reset(self) -> TransformState:
        self._state = TransformState()
        return self._state


__all__ = [
    "FlipAxis",
    "InterpolationQuality",
    "Rotation",
    "TransformState",
    "TransformStateMachine",
]
