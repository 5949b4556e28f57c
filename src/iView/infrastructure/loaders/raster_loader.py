"""Decode bitmap files with Pillow."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

from ...domain.document.pixels import image_to_rgba
from ...domain.document.raster import RasterDocument
from ...errors import DocumentLoadError

LOGGER = logging.getLogger(__name__)


class RasterLoader:
    """Load PNG, JPEG, WebP and other Pillow-readable bitmaps."""

    def load(self, path: Path) -> RasterDocument:
        try:
            with Image.open(path) as image:
                # Multi-frame formats (GIF, TIFF) show their first frame.
                image.seek(0)
                color_type = image.mode
                pixels = image_to_rgba(image)
        except FileNotFoundError as exc:
            raise DocumentLoadError(path, "file not found") from exc
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            raise DocumentLoadError(path, str(exc) or exc.__class__.__name__) from exc
        LOGGER.debug("Decoded %s (%s, %dx%d)", path, color_type, pixels.shape[1], pixels.shape[0])
        return RasterDocument(pixels, path=path, color_type=color_type)
