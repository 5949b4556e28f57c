"""Conversions between :class:`QImage` and numpy RGBA buffers."""

from __future__ import annotations

import os

import numpy as np
from PySide6.QtCore import QCoreApplication
from PySide6.QtGui import QGuiApplication, QImage


def ensure_gui_application() -> QCoreApplication:
    """Return the running Qt application, creating a headless one if needed.

    Painting onto a :class:`QImage` needs a :class:`QGuiApplication` for font
    and platform services, even when nothing is shown on screen.
    """
    app = QCoreApplication.instance()
    if app is None:
        if not (os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY")) and os.name == "posix":
            os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
        app = QGuiApplication([])
    return app


def qimage_to_rgba(image: QImage) -> np.ndarray:
    """Copy *image* into a new ``H x W x 4`` straight-alpha RGBA array."""
    converted = image.convertToFormat(QImage.Format.Format_RGBA8888)
    width = converted.width()
    height = converted.height()
    bytes_per_line = converted.bytesPerLine()
    buffer = converted.constBits()
    byte_count = bytes_per_line * height
    if hasattr(buffer, "setsize"):
        buffer.setsize(byte_count)
    surface = np.frombuffer(memoryview(buffer), dtype=np.uint8, count=byte_count)
    surface = surface.reshape((height, bytes_per_line))
    return surface[:, : width * 4].reshape((height, width, 4)).copy()


def rgba_to_qimage(pixels: np.ndarray) -> QImage:
    """Wrap an RGBA array in a detached :class:`QImage`."""
    array = np.ascontiguousarray(pixels, dtype=np.uint8)
    height, width = array.shape[:2]
    return QImage(array.data, width, height, array.strides[0], QImage.Format.Format_RGBA8888).copy()
