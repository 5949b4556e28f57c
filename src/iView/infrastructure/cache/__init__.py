from .memory_cache import MemoryThumbnailCache
from .thumbnail_cache import ThumbnailCache

__all__ = ["MemoryThumbnailCache", "ThumbnailCache"]
