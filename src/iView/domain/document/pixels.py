"""numpy/Pillow primitives operating on ``H x W x 4`` ``uint8`` RGBA buffers."""

from __future__ import annotations

import numpy as np
from PIL import Image

from ...config import FINE_ROTATION_FILL, MIN_PIXMAP_SIZE
from ..transform import FlipAxis, InterpolationQuality, Rotation, TransformState

_RESAMPLE = {
    InterpolationQuality.FAST: Image.Resampling.NEAREST,
    InterpolationQuality.BALANCED: Image.Resampling.BILINEAR,
    InterpolationQuality.BEST: Image.Resampling.BICUBIC,
}


def resample_filter(quality: InterpolationQuality) -> Image.Resampling:
    return _RESAMPLE[quality]


def ensure_rgba(pixels: np.ndarray) -> np.ndarray:
    """Validate and normalise *pixels* to a contiguous RGBA ``uint8`` array."""
    array = np.asarray(pixels)
    if array.ndim != 3 or array.shape[2] != 4:
        raise ValueError(f"expected an H x W x 4 RGBA array, got shape {array.shape}")
    if array.shape[0] < MIN_PIXMAP_SIZE or array.shape[1] < MIN_PIXMAP_SIZE:
        raise ValueError(f"pixel buffer is empty: {array.shape}")
    return np.ascontiguousarray(array, dtype=np.uint8)


def image_to_rgba(image: Image.Image) -> np.ndarray:
    return np.array(image.convert("RGBA"), dtype=np.uint8)


def rgba_to_image(pixels: np.ndarray) -> Image.Image:
    return Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))


def rotate_quarter(pixels: np.ndarray, rotation: Rotation) -> np.ndarray:
    """Rotate clockwise by a quarter-turn multiple."""
    if rotation is Rotation.NONE:
        return pixels
    # np.rot90 turns counter-clockwise for positive k.
    return np.ascontiguousarray(np.rot90(pixels, k=-(rotation.degrees // 90)))


def flip(pixels: np.ndarray, axis: FlipAxis) -> np.ndarray:
    if axis is FlipAxis.HORIZONTAL:
        return np.ascontiguousarray(pixels[:, ::-1])
    return np.ascontiguousarray(pixels[::-1])


def rotate_fine(pixels: np.ndarray, degrees: float, quality: InterpolationQuality) -> np.ndarray:
    """Rotate clockwise by *degrees* about the centre, growing the canvas to fit.

    Exposed corners are transparent.
    """
    # Pillow rotates counter-clockwise for positive angles.
    rotated = rgba_to_image(pixels).rotate(
        -degrees,
        resample=resample_filter(quality),
        expand=True,
        fillcolor=FINE_ROTATION_FILL,
    )
    return image_to_rgba(rotated)


def resize(pixels: np.ndarray, width: int, height: int, quality: InterpolationQuality) -> np.ndarray:
    resized = rgba_to_image(pixels).resize(
        (max(MIN_PIXMAP_SIZE, int(width)), max(MIN_PIXMAP_SIZE, int(height))),
        resample=resample_filter(quality),
    )
    return image_to_rgba(resized)


def crop(pixels: np.ndarray, x: int, y: int, width: int, height: int) -> np.ndarray:
    return np.ascontiguousarray(pixels[y:y + height, x:x + width]).copy()


def apply_transform(
    pixels: np.ndarray,
    state: TransformState,
    quality: InterpolationQuality = InterpolationQuality.BALANCED,
) -> np.ndarray:
    """Apply *state* to untransformed content: flips first, then rotation."""
    result = pixels
    if state.flip_horizontal:
        result = flip(result, FlipAxis.HORIZONTAL)
    if state.flip_vertical:
        result = flip(result, FlipAxis.VERTICAL)
    if state.fine_angle is not None:
        if state.rotation_is_none():
            return result
        return rotate_fine(result, state.fine_angle, quality)
    return rotate_quarter(result, state.rotation)


def display_axis(axis: FlipAxis, rotation: Rotation) -> FlipAxis:
    """Return the axis to flip already-rotated pixels on so the result matches
    flipping the native content on *axis* before rotating.
    """
    return axis.swapped() if rotation.swaps_dimensions() else axis


def quarter_delta(current: Rotation, target: Rotation) -> Rotation:
    """Return the clockwise turn that takes *current* to *target*."""
    return Rotation((target.degrees - current.degrees + 360) % 360)
