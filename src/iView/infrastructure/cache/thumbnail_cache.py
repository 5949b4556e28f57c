"""L2: Disk cache for page thumbnails, one PNG per (file, mtime, page)."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

import numpy as np
import xxhash
from PIL import Image

from ...config import THUMBNAIL_EXT
from ...domain.document.pixels import image_to_rgba, rgba_to_image
from ...errors import CacheError

LOGGER = logging.getLogger(__name__)


def cache_key(path: Path, page: int) -> Optional[str]:
    """Return the cache key for *page* of *path*, or ``None`` if it cannot be stat'ed.

    The key hashes the absolute path, the modification time in whole
    seconds and the page index. Touching the file changes the key, so a
    stale entry is never returned; it simply stops being looked up.
    """
    absolute = Path(path).absolute()
    try:
        mtime = int(absolute.stat().st_mtime)
    except OSError:
        return None
    hasher = xxhash.xxh3_128()
    hasher.update(os.fsencode(absolute))
    hasher.update(mtime.to_bytes(8, "little", signed=True))
    hasher.update(int(page).to_bytes(8, "little", signed=False))
    return hasher.hexdigest()


class ThumbnailCache:
    """Flat directory of ``<hexdigest>.png`` files.

    Entries are never evicted individually; :meth:`clear_all` removes the
    whole directory. Reads and writes are best-effort: failures are logged
    and reported as a miss or ``False``.
    """

    def __init__(self, cache_dir: Path):
        self._cache_dir = Path(cache_dir)

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def thumbnail_path(self, path: Path, page: int) -> Optional[Path]:
        key = cache_key(path, page)
        if key is None:
            return None
        return self._cache_dir / f"{key}.{THUMBNAIL_EXT}"

    def has(self, path: Path, page: int) -> bool:
        target = self.thumbnail_path(path, page)
        return target is not None and target.exists()

    def load(self, path: Path, page: int) -> Optional[np.ndarray]:
        target = self.thumbnail_path(path, page)
        if target is None or not target.exists():
            LOGGER.debug("Thumbnail cache miss: file=%s page=%d", path, page)
            return None
        try:
            with Image.open(target) as image:
                pixels = image_to_rgba(image)
        except (OSError, ValueError) as exc:
            LOGGER.warning("Unreadable cached thumbnail %s: %s", target, exc)
            return None
        LOGGER.debug("Thumbnail cache hit: file=%s page=%d", path, page)
        return pixels

    def save(self, path: Path, page: int, pixels: np.ndarray) -> bool:
        target = self.thumbnail_path(path, page)
        if target is None:
            LOGGER.warning("Cannot cache thumbnail for missing file %s", path)
            return False
        tmp_name: Optional[str] = None
        try:
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._cache_dir, suffix=".tmp")
            with os.fdopen(fd, "wb") as handle:
                rgba_to_image(pixels).save(handle, format="PNG")
            os.replace(tmp_name, target)
        except (OSError, ValueError) as exc:
            LOGGER.warning("Failed to cache thumbnail: file=%s page=%d: %s", path, page, exc)
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            return False
        LOGGER.debug("Thumbnail cached: file=%s page=%d path=%s", path, page, target)
        return True

    def clear_all(self) -> None:
        """Delete every cached thumbnail.

        Raises
        ------
        CacheError
            If the directory exists but cannot be removed.
        """
        if not self._cache_dir.exists():
            return
        try:
            shutil.rmtree(self._cache_dir)
        except OSError as exc:
            raise CacheError(f"Failed to clear thumbnail cache {self._cache_dir}: {exc}") from exc
        LOGGER.info("Cleared thumbnail cache at %s", self._cache_dir)
