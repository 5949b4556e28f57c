"""Parse and rasterize SVG files with Qt's SVG module."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QImage, QPainter
from PySide6.QtSvg import QSvgRenderer

from ...domain.document.vector import VectorDocument
from ...errors import DocumentLoadError, RenderError
from ...utils.qimage import ensure_gui_application, qimage_to_rgba

LOGGER = logging.getLogger(__name__)


class QtSvgScene:
    """A :class:`~iView.domain.document.vector.VectorScene` backed by :class:`QSvgRenderer`."""

    def __init__(self, renderer: QSvgRenderer) -> None:
        self._renderer = renderer

    @classmethod
    def from_file(cls, path: Path) -> "QtSvgScene":
        ensure_gui_application()
        renderer = QSvgRenderer(str(path))
        if not renderer.isValid():
            raise DocumentLoadError(path, "invalid SVG document")
        return cls(renderer)

    @classmethod
    def from_bytes(cls, data: bytes) -> "QtSvgScene":
        ensure_gui_application()
        renderer = QSvgRenderer(data)
        if not renderer.isValid():
            raise DocumentLoadError("<memory>", "invalid SVG document")
        return cls(renderer)

    @property
    def intrinsic_size(self) -> tuple[float, float]:
        size = self._renderer.defaultSize()
        if size.isValid() and size.width() > 0 and size.height() > 0:
            return (float(size.width()), float(size.height()))
        box = self._renderer.viewBoxF()
        if box.width() > 0 and box.height() > 0:
            return (box.width(), box.height())
        raise RenderError("SVG document has no usable size")

    def render(self, width: int, height: int) -> np.ndarray:
        image = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
        if image.isNull():
            raise RenderError(f"Could not allocate a {width}x{height} surface")
        image.fill(Qt.GlobalColor.transparent)
        painter = QPainter(image)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
            self._renderer.render(painter, QRectF(0.0, 0.0, float(width), float(height)))
        finally:
            painter.end()
        return qimage_to_rgba(image)


class SvgLoader:
    def load(self, path: Path) -> VectorDocument:
        if not path.exists():
            raise DocumentLoadError(path, "file not found")
        scene = QtSvgScene.from_file(path)
        try:
            document = VectorDocument(scene, path=path)
        except RenderError as exc:
            raise DocumentLoadError(path, str(exc)) from exc
        LOGGER.debug("Parsed SVG %s (%dx%d)", path, *document.native_dimensions())
        return document
