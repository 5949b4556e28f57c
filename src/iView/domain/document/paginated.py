"""Multi-page documents (PDF) rendered one page at a time."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Optional, Protocol

import numpy as np

from ...config import MIN_PIXMAP_SIZE, THUMBNAIL_SIZE
from ...errors import InvalidPageError, RenderError, UnsupportedOperationError
from ..transform import FlipAxis, Rotation, TransformState
from . import pixels as px
from .base import BaseDocument, DocumentInfo, DocumentKind, RenderOutput, make_handle
from .vector import rendered_size

LOGGER = logging.getLogger(__name__)

_SCALE_EPSILON = 1e-9


class PageBackend(Protocol):
    """An opened multi-page file."""

    @property
    def page_count(self) -> int:
        ...

    def page_size(self, index: int) -> tuple[float, float]:
        ...

    def render_page(self, index: int, width: int, height: int) -> np.ndarray:
        """Return page *index* as RGBA pixels filling ``width x height``."""
        ...

    def close(self) -> None:
        ...


class PaginatedDocument(BaseDocument):
    """A paged document showing one page at a time.

    The transform state belongs to the document and carries over when the
    current page changes. Page thumbnails are generated on demand and kept
    for the lifetime of the document; the set only ever grows.
    """

    kind = DocumentKind.PAGINATED
    format_name = "PDF"

    def __init__(self, backend: PageBackend, path: Path | None = None, page: int = 0) -> None:
        super().__init__(path)
        self._backend = backend
        self._page_count = int(backend.page_count)
        if self._page_count <= 0:
            raise RenderError("Document has no pages")
        self._check_page(page)
        self._page = page
        self._state = TransformState()
        self._pre_fine_rotation = Rotation.NONE
        self._scale = 1.0
        self._thumbnails: dict[int, np.ndarray] = {}
        self._rendered = self._rasterize(self._page, self._scale, self._state)
        self._handle = make_handle(self._rendered)

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------
    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def current_page(self) -> int:
        return self._page

    def go_to_page(self, page: int) -> None:
        self._check_page(page)
        if page == self._page:
            return
        rendered = self._rasterize(page, self._scale, self._state)
        self._page = page
        self._commit(rendered, self._scale, self._state)
        LOGGER.debug("Switched to page %d of %d", page + 1, self._page_count)

    def _check_page(self, page: int) -> None:
        if page < 0 or page >= self._page_count:
            raise InvalidPageError(page, self._page_count)

    def page_dimensions(self, page: Optional[int] = None) -> tuple[int, int]:
        index = self._page if page is None else page
        self._check_page(index)
        width, height = self._backend.page_size(index)
        return (max(MIN_PIXMAP_SIZE, math.ceil(width)), max(MIN_PIXMAP_SIZE, math.ceil(height)))

    # ------------------------------------------------------------------
    # Thumbnails
    # ------------------------------------------------------------------
    def render_thumbnail(self, page: int, max_size: int = THUMBNAIL_SIZE) -> np.ndarray:
        """Rasterize *page* untransformed so its longest side is *max_size*."""
        page_w, page_h = self.page_dimensions(page)
        scale = max_size / float(max(page_w, page_h))
        width, height = rendered_size(page_w, page_h, scale)
        return self._render_raw(page, width, height)

    def thumbnail(self, page: int) -> Optional[np.ndarray]:
        self._check_page(page)
        return self._thumbnails.get(page)

    def store_thumbnail(self, page: int, pixels: np.ndarray) -> None:
        self._check_page(page)
        self._thumbnails[page] = px.ensure_rgba(pixels)

    def generate_thumbnail(self, page: int, max_size: int = THUMBNAIL_SIZE) -> np.ndarray:
        existing = self.thumbnail(page)
        if existing is not None:
            return existing
        pixels = self.render_thumbnail(page, max_size)
        self._thumbnails[page] = pixels
        return pixels

    def generate_all_thumbnails(self, max_size: int = THUMBNAIL_SIZE) -> None:
        for page in range(self._page_count):
            self.generate_thumbnail(page, max_size)

    def thumbnails_ready(self) -> bool:
        """``True`` once at least one thumbnail exists."""
        return bool(self._thumbnails)

    def thumbnails_loaded(self) -> bool:
        """``True`` once every page has a thumbnail."""
        return len(self._thumbnails) == self._page_count

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    @property
    def pixels(self) -> np.ndarray:
        return self._handle

    @property
    def current_scale(self) -> float:
        return self._scale

    def dimensions(self) -> tuple[int, int]:
        height, width = self._rendered.shape[:2]
        return (width, height)

    def native_dimensions(self) -> tuple[int, int]:
        return self.page_dimensions()

    def info(self) -> DocumentInfo:
        width, height = self.page_dimensions()
        return DocumentInfo(width, height, self.format_name)

    def render(self, scale: float) -> RenderOutput:
        if abs(self._scale - scale) >= _SCALE_EPSILON:
            self._commit(self._rasterize(self._page, scale, self._state), scale, self._state)
        width, height = self.dimensions()
        return RenderOutput(self._handle, width, height)

    def _rasterize(self, page: int, scale: float, state: TransformState) -> np.ndarray:
        page_w, page_h = self.page_dimensions(page)
        width, height = rendered_size(page_w, page_h, scale)
        base = self._render_raw(page, width, height)
        return px.apply_transform(base, state, self._interpolation)

    def _render_raw(self, page: int, width: int, height: int) -> np.ndarray:
        try:
            return px.ensure_rgba(self._backend.render_page(page, width, height))
        except ValueError as exc:
            raise RenderError(f"Page {page} produced an unusable raster: {exc}") from exc

    def _commit(self, rendered: np.ndarray, scale: float, state: TransformState) -> None:
        self._rendered = rendered
        self._handle = make_handle(rendered)
        self._scale = scale
        self._state = state

    def _rerender(self, state: TransformState) -> None:
        self._commit(self._rasterize(self._page, self._scale, state), self._scale, state)

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------
    def transform_state(self) -> TransformState:
        return self._state

    def rotate(self, rotation: Rotation) -> None:
        self._rerender(self._state.with_rotation(rotation))

    def flip(self, axis: FlipAxis) -> None:
        self._rerender(self._state.flipped(axis))

    def rotate_fine(self, degrees: float) -> None:
        if not self._state.is_fine:
            self._pre_fine_rotation = self._state.rotation
        self._rerender(self._state.with_fine_angle(self._state.degrees + degrees))

    def reset_fine_rotation(self) -> None:
        if not self._state.is_fine:
            return
        self._rerender(self._state.with_rotation(self._pre_fine_rotation))
        self._pre_fine_rotation = Rotation.NONE

    def crop(self, x: int, y: int, width: int, height: int) -> None:
        raise UnsupportedOperationError("Paginated documents cannot be cropped")

    def close(self) -> None:
        self._backend.close()


__all__ = ["PageBackend", "PaginatedDocument"]
