"""Open PDF files with PyMuPDF."""

from __future__ import annotations

import logging
from pathlib import Path

import fitz  # PyMuPDF
import numpy as np

from ...domain.document import pixels as px
from ...domain.document.paginated import PaginatedDocument
from ...domain.transform import InterpolationQuality
from ...errors import DocumentLoadError, RenderError

LOGGER = logging.getLogger(__name__)


class FitzPageBackend:
    """A :class:`~iView.domain.document.paginated.PageBackend` over a ``fitz.Document``."""

    def __init__(self, document: "fitz.Document") -> None:
        self._document = document

    @classmethod
    def open(cls, path: Path) -> "FitzPageBackend":
        try:
            document = fitz.open(str(path))
        except (RuntimeError, ValueError) as exc:
            # PyMuPDF raises FileDataError (a RuntimeError) for corrupt files.
            raise DocumentLoadError(path, str(exc)) from exc
        if document.needs_pass:
            document.close()
            raise DocumentLoadError(path, "document is password protected")
        return cls(document)

    @property
    def page_count(self) -> int:
        return self._document.page_count

    def page_size(self, index: int) -> tuple[float, float]:
        rect = self._document[index].rect
        return (rect.width, rect.height)

    def render_page(self, index: int, width: int, height: int) -> np.ndarray:
        page = self._document[index]
        rect = page.rect
        matrix = fitz.Matrix(width / rect.width, height / rect.height)
        try:
            pixmap = page.get_pixmap(matrix=matrix, alpha=False)
        except RuntimeError as exc:
            raise RenderError(f"Failed to render page {index}: {exc}") from exc
        rgb = np.frombuffer(pixmap.samples, dtype=np.uint8)
        rgb = rgb.reshape((pixmap.height, pixmap.stride))[:, : pixmap.width * pixmap.n]
        rgb = rgb.reshape((pixmap.height, pixmap.width, pixmap.n))[:, :, :3]
        alpha = np.full((pixmap.height, pixmap.width, 1), 255, dtype=np.uint8)
        rgba = np.concatenate([rgb, alpha], axis=2)
        if (pixmap.width, pixmap.height) != (width, height):
            # The matrix can land a pixel short of the requested size.
            rgba = px.resize(rgba, width, height, InterpolationQuality.BALANCED)
        return rgba

    def close(self) -> None:
        self._document.close()


class PdfLoader:
    def load(self, path: Path) -> PaginatedDocument:
        if not path.exists():
            raise DocumentLoadError(path, "file not found")
        backend = FitzPageBackend.open(path)
        try:
            document = PaginatedDocument(backend, path=path)
        except RenderError as exc:
            backend.close()
            raise DocumentLoadError(path, str(exc)) from exc
        LOGGER.debug("Opened PDF %s with %d page(s)", path, document.page_count)
        return document
