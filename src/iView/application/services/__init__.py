from .thumbnail_service import ThumbnailService

__all__ = ["ThumbnailService"]
