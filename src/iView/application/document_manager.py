"""Single owner of the open document, its folder and the viewport."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..domain.document import (
    BaseDocument,
    BasicMeta,
    DocumentCollection,
    DocumentKind,
    DocumentMeta,
    PaginatedDocument,
    RenderOutput,
    VectorDocument,
)
from ..domain.transform import InterpolationQuality
from ..domain.viewport import Camera, Viewport
from ..errors import DocumentLoadError, NoDocumentError, UnsupportedOperationError
from ..events.bus import EventBus
from ..events.document_events import (
    DocumentChangedEvent,
    DocumentClosedEvent,
    DocumentOpenedEvent,
    NavigationChangedEvent,
)
from ..infrastructure.filesystem.file_ops import collect_supported_files
from ..infrastructure.loaders import DocumentLoaderFactory
from .services.thumbnail_service import ThumbnailService

LOGGER = logging.getLogger(__name__)


class DocumentManager:
    """Coordinates loading, navigation and rendering.

    The manager is the authoritative document state for the control loop.
    Listeners on the event bus are notified after every change and should
    treat whatever they have cached as stale.
    """

    def __init__(
        self,
        loader_factory: Optional[DocumentLoaderFactory] = None,
        thumbnail_service: Optional[ThumbnailService] = None,
        event_bus: Optional[EventBus] = None,
        *,
        camera: Optional[Camera] = None,
        wrap_navigation: bool = True,
        interpolation: InterpolationQuality = InterpolationQuality.BALANCED,
    ) -> None:
        self._loader = loader_factory or DocumentLoaderFactory()
        self._thumbnails = thumbnail_service
        self._events = event_bus or EventBus()
        self._collection = DocumentCollection()
        self._viewport = Viewport()
        self._camera = camera or Camera()
        self._wrap_navigation = wrap_navigation
        self._interpolation = interpolation
        # Kept apart from the collection so a paged backend can be closed after the
        # collection drops its reference on an index change.
        self._active: Optional[BaseDocument] = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def collection(self) -> DocumentCollection:
        return self._collection

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def camera(self) -> Camera:
        return self._camera

    @property
    def events(self) -> EventBus:
        return self._events

    @property
    def thumbnail_service(self) -> Optional[ThumbnailService]:
        return self._thumbnails

    @property
    def document(self) -> Optional[BaseDocument]:
        return self._collection.current_document

    @property
    def wrap_navigation(self) -> bool:
        return self._wrap_navigation

    def set_wrap_navigation(self, enabled: bool) -> None:
        self._wrap_navigation = bool(enabled)

    def set_interpolation_quality(self, quality: InterpolationQuality) -> None:
        self._interpolation = quality
        document = self.document
        if document is not None:
            document.set_interpolation_quality(quality)

    def require_document(self) -> BaseDocument:
        document = self.document
        if document is None:
            raise NoDocumentError("No document is open")
        return document

    # ------------------------------------------------------------------
    # Opening and navigation
    # ------------------------------------------------------------------
    def open_document(self, path: Path) -> BaseDocument:
        """Open *path* and make its folder the navigation set.

        A directory opens its first supported file. The document is loaded
        before any state changes, so a failure leaves the current document
        in place.
        """
        path = Path(path).absolute()
        if path.is_dir():
            files = collect_supported_files(path)
            if not files:
                raise DocumentLoadError(path, "folder contains no supported documents")
            target = files[0]
        else:
            target = path
            files = collect_supported_files(path.parent)
            if target not in files:
                files.append(target)
                files.sort()

        document = self._loader.load(target)
        self._release_active()
        self._collection = DocumentCollection.from_paths(files)
        index = self._collection.index_of(target)
        self._collection.goto(index if index is not None else 0)
        self._install(document)
        self._publish_navigation()
        return document

    def next_document(self) -> Optional[BaseDocument]:
        """Advance to the next file, wrapping to the first when enabled."""
        if self._collection.is_empty():
            return None
        if self._collection.next() is None:
            if not self._wrap_navigation or len(self._collection) < 2:
                return None
            self._collection.goto(0)
        return self._load_current()

    def previous_document(self) -> Optional[BaseDocument]:
        if self._collection.is_empty():
            return None
        if self._collection.previous() is None:
            if not self._wrap_navigation or len(self._collection) < 2:
                return None
            self._collection.goto(len(self._collection) - 1)
        return self._load_current()

    def go_to_index(self, index: int) -> Optional[BaseDocument]:
        previous = self._collection.current_index
        if not self._collection.goto(index):
            return None
        if index == previous and self.document is not None:
            return self.document
        return self._load_current()

    def _load_current(self) -> BaseDocument:
        self._release_active()
        self._publish_navigation()
        path = self._collection.current_path()
        document = self._loader.load(path)
        self._install(document)
        return document

    def close_document(self) -> None:
        document = self.document
        if document is None:
            return
        self._release_active()
        self._viewport.set_document_size(0, 0)
        self._viewport.reset()
        self._events.publish(DocumentClosedEvent(path=document.path))

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------
    def go_to_page(self, page: int) -> None:
        document = self.require_document()
        if not isinstance(document, PaginatedDocument):
            raise UnsupportedOperationError(f"{document.format_name} documents have no pages")
        document.go_to_page(page)
        self.notify_changed("page")

    def page_thumbnail(self, page: int):
        document = self.require_document()
        if not isinstance(document, PaginatedDocument):
            raise UnsupportedOperationError(f"{document.format_name} documents have no pages")
        if self._thumbnails is None:
            return document.generate_thumbnail(page)
        return self._thumbnails.thumbnail(document, page)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self) -> RenderOutput:
        """Render the document for the current viewport.

        Bitmaps are returned as-is and scaled by the presentation layer;
        vector and paged documents are rasterized at the viewport scale.
        """
        document = self.require_document()
        self._viewport.set_document_size(*self.logical_size(document))
        if document.kind is DocumentKind.RASTER:
            return document.render(1.0)
        return document.render(self._viewport.scale)

    def logical_size(self, document: BaseDocument) -> tuple[float, float]:
        """Displayed size of *document* at a scale of one."""
        width, height = document.dimensions()
        if isinstance(document, (VectorDocument, PaginatedDocument)):
            scale = document.current_scale
            return (width / scale, height / scale)
        return (float(width), float(height))

    def notify_changed(self, reason: str) -> None:
        """Resync the viewport with the document and announce the change."""
        document = self.require_document()
        self._viewport.set_document_size(*self.logical_size(document))
        width, height = document.dimensions()
        LOGGER.debug("Document changed (%s): %dx%d", reason, width, height)
        self._events.publish(
            DocumentChangedEvent(path=document.path, reason=reason, width=width, height=height)
        )

    def current_metadata(self) -> Optional[DocumentMeta]:
        document = self.document
        if document is None or document.path is None:
            return None
        width, height = document.native_dimensions()
        fmt = document.path.suffix.lstrip(".").upper() or document.format_name
        color_type = getattr(document, "color_type", "RGBA")
        basic = BasicMeta.from_path(document.path, fmt, width, height, color_type)
        page_count = document.page_count if isinstance(document, PaginatedDocument) else None
        return DocumentMeta(basic=basic, page_count=page_count)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _install(self, document: BaseDocument) -> None:
        document.set_interpolation_quality(self._interpolation)
        self._collection.set_current_document(document)
        self._active = document
        self._viewport.set_document_size(*self.logical_size(document))
        self._viewport.reset()
        width, height = document.dimensions()
        LOGGER.info("Opened %s (%dx%d)", document.path, width, height)
        self._events.publish(
            DocumentOpenedEvent(
                path=document.path,
                kind=document.kind.value,
                width=width,
                height=height,
            )
        )

    def _release_active(self) -> None:
        if isinstance(self._active, PaginatedDocument):
            self._active.close()
        self._active = None
        self._collection.clear_current_document()

    def _publish_navigation(self) -> None:
        self._events.publish(
            NavigationChangedEvent(
                index=self._collection.current_index,
                path=self._collection.current_path(),
                total=len(self._collection),
            )
        )


__all__ = ["DocumentManager"]
