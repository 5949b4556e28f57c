"""Page thumbnails resolved through memory, disk and finally the document."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import numpy as np

from ...config import THUMBNAIL_SIZE
from ...domain.document import PaginatedDocument
from ...events.bus import EventBus
from ...events.document_events import ThumbnailReadyEvent
from ...infrastructure.cache.memory_cache import MemoryThumbnailCache
from ...infrastructure.cache.thumbnail_cache import ThumbnailCache, cache_key

LOGGER = logging.getLogger(__name__)


class ThumbnailService:
    """Three-tier thumbnail lookup.

    L1 is an in-process LRU keyed like the disk cache, L2 is the
    :class:`ThumbnailCache` directory and L3 renders the page from the open
    document. Whatever tier answers, the result is stored on the document
    so its filmstrip state stays consistent.
    """

    def __init__(
        self,
        disk_cache: ThumbnailCache,
        memory_cache: Optional[MemoryThumbnailCache] = None,
        event_bus: Optional[EventBus] = None,
        size: int = THUMBNAIL_SIZE,
        enabled: bool = True,
    ) -> None:
        self._disk = disk_cache
        self._memory = memory_cache or MemoryThumbnailCache()
        self._events = event_bus
        self._size = size
        self._enabled = enabled

    @property
    def disk_cache(self) -> ThumbnailCache:
        return self._disk

    @property
    def memory_cache(self) -> MemoryThumbnailCache:
        return self._memory

    def thumbnail(self, document: PaginatedDocument, page: int) -> np.ndarray:
        """Return the thumbnail for *page*, rendering and caching it on a miss."""
        existing = document.thumbnail(page)
        if existing is not None:
            return existing

        path = document.path
        key = cache_key(path, page) if (path is not None and self._enabled) else None

        if key is not None:
            cached = self._memory.get(key)
            if cached is None:
                cached = self._disk.load(path, page)
                if cached is not None:
                    self._memory.put(key, cached)
            if cached is not None:
                document.store_thumbnail(page, cached)
                return document.thumbnail(page)

        pixels = document.generate_thumbnail(page, self._size)
        if key is not None:
            self._memory.put(key, pixels)
            self._disk.save(path, page, pixels)
        if path is not None and self._events is not None:
            self._events.publish(ThumbnailReadyEvent(path=Path(path), page=page))
        return pixels

    def thumbnails(self, document: PaginatedDocument) -> list[np.ndarray]:
        """Resolve every page of *document* in order."""
        return [self.thumbnail(document, page) for page in range(document.page_count)]

    def clear(self) -> None:
        """Drop both the memory tier and the disk tier."""
        self._memory.clear()
        self._disk.clear_all()
        LOGGER.info("Thumbnail caches cleared")


__all__ = ["ThumbnailService"]
