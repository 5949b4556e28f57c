"""Default configuration values for iView."""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Viewport
# ---------------------------------------------------------------------------

MIN_SCALE: Final[float] = 0.01
DEFAULT_ZOOM_STEP: Final[float] = 1.25
# Zoom steps at or below 1.0 would never zoom in.
MIN_ZOOM_STEP: Final[float] = 1.01

PAN_SPEED_SLOW: Final[float] = 0.1
PAN_SPEED_NORMAL: Final[float] = 0.25
PAN_SPEED_FAST: Final[float] = 0.5

# Angles within this many degrees of a right angle count as quantized.
RIGHT_ANGLE_TOLERANCE: Final[float] = 0.01

# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

MIN_PIXMAP_SIZE: Final[int] = 1
# Fully transparent white fills the corners exposed by fine rotation.
FINE_ROTATION_FILL: Final[tuple[int, int, int, int]] = (255, 255, 255, 0)

# ---------------------------------------------------------------------------
# Thumbnails
# ---------------------------------------------------------------------------

THUMBNAIL_SIZE: Final[int] = 256
THUMBNAIL_EXT: Final[str] = "png"
CACHE_DIR_NAME: Final[str] = "iView"
THUMBNAIL_SUBDIR: Final[str] = "thumbnails"
MEMORY_CACHE_ENTRIES: Final[int] = 64

# ---------------------------------------------------------------------------
# Formats
# ---------------------------------------------------------------------------

RASTER_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {"png", "jpg", "jpeg", "gif", "bmp", "webp", "tif", "tiff", "ico"}
)
VECTOR_EXTENSIONS: Final[frozenset[str]] = frozenset({"svg", "svgz"})
PAGINATED_EXTENSIONS: Final[frozenset[str]] = frozenset({"pdf"})
SUPPORTED_EXTENSIONS: Final[frozenset[str]] = (
    RASTER_EXTENSIONS | VECTOR_EXTENSIONS | PAGINATED_EXTENSIONS
)

DEFAULT_EXPORT_QUALITY: Final[int] = 90
