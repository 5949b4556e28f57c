"""Type-agnostic transform operations over any document variant.

Application code should call these rather than the per-variant methods:
they handle the fine-angle to quarter-turn conversion in one place.
"""

from __future__ import annotations

from ..transform import FlipAxis, Rotation, TransformState
from .base import BaseDocument


def rotate_document_cw(document: BaseDocument) -> Rotation:
    """Rotate a quarter turn clockwise; a fine angle snaps to the nearest right angle first."""
    target = document.transform_state().rotated_cw().rotation
    document.rotate(target)
    return target


def rotate_document_ccw(document: BaseDocument) -> Rotation:
    target = document.transform_state().rotated_ccw().rotation
    document.rotate(target)
    return target


def rotate_document_to(document: BaseDocument, rotation: Rotation) -> None:
    document.rotate(rotation)


def rotate_document_fine(document: BaseDocument, degrees: float) -> None:
    document.rotate_fine(degrees)


def flip_document(document: BaseDocument, axis: FlipAxis) -> None:
    document.flip(axis)


def flip_document_horizontal(document: BaseDocument) -> None:
    document.flip(FlipAxis.HORIZONTAL)


def flip_document_vertical(document: BaseDocument) -> None:
    document.flip(FlipAxis.VERTICAL)


def reset_document_transforms(document: BaseDocument) -> None:
    """Return *document* to its untransformed orientation."""
    state = document.transform_state()
    if state.is_fine:
        document.reset_fine_rotation()
    document.rotate(Rotation.NONE)
    state = document.transform_state()
    if state.flip_horizontal:
        document.flip(FlipAxis.HORIZONTAL)
    if state.flip_vertical:
        document.flip(FlipAxis.VERTICAL)


def dimensions_after_rotation(width: int, height: int, state: TransformState) -> tuple[int, int]:
    """Return the integer size of ``width x height`` content under *state*."""
    new_w, new_h = state.displayed_size(width, height)
    return (int(round(new_w)), int(round(new_h)))


__all__ = [
    "dimensions_after_rotation",
    "flip_document",
    "flip_document_horizontal",
    "flip_document_vertical",
    "reset_document_transforms",
    "rotate_document_ccw",
    "rotate_document_cw",
    "rotate_document_fine",
    "rotate_document_to",
]
