"""Encode rendered documents and write them to disk."""

from __future__ import annotations

import io
import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image

from ..config import DEFAULT_EXPORT_QUALITY
from ..domain.document.pixels import rgba_to_image
from ..errors import ExportError

_LOGGER = logging.getLogger(__name__)


class ExportFormat(Enum):
    PNG = "png"
    JPEG = "jpeg"
    WEBP = "webp"
    PDF = "pdf"
    SVG = "svg"

    @property
    def extension(self) -> str:
        return "jpg" if self is ExportFormat.JPEG else self.value

    @property
    def mime_type(self) -> str:
        return {
            ExportFormat.PNG: "image/png",
            ExportFormat.JPEG: "image/jpeg",
            ExportFormat.WEBP: "image/webp",
            ExportFormat.PDF: "application/pdf",
            ExportFormat.SVG: "image/svg+xml",
        }[self]

    @property
    def is_raster(self) -> bool:
        return self in (ExportFormat.PNG, ExportFormat.JPEG, ExportFormat.WEBP)

    @classmethod
    def from_path(cls, path: Path | str) -> Optional["ExportFormat"]:
        ext = Path(path).suffix.lower().lstrip(".")
        if ext in ("jpg", "jpeg"):
            return cls.JPEG
        try:
            return cls(ext)
        except ValueError:
            return None


@dataclass(frozen=True)
class ImageExportOptions:
    quality: int = DEFAULT_EXPORT_QUALITY


_PIL_FORMATS = {
    ExportFormat.PNG: "PNG",
    ExportFormat.JPEG: "JPEG",
    ExportFormat.WEBP: "WEBP",
}


def encode_image(
    pixels: np.ndarray,
    fmt: ExportFormat,
    options: ImageExportOptions = ImageExportOptions(),
) -> bytes:
    """Encode an RGBA buffer as *fmt*.

    Raises
    ------
    ExportError
        For formats without a raster encoder (PDF, SVG) or encoder failures.
    """
    if not fmt.is_raster:
        raise ExportError(None, f"export to {fmt.extension} is not supported")
    image = rgba_to_image(pixels)
    params: dict = {}
    if fmt is ExportFormat.JPEG:
        # JPEG has no alpha channel.
        image = image.convert("RGB")
        params["quality"] = options.quality
    elif fmt is ExportFormat.WEBP:
        params["quality"] = options.quality
    buffer = io.BytesIO()
    try:
        image.save(buffer, format=_PIL_FORMATS[fmt], **params)
    except (OSError, ValueError, KeyError) as exc:
        raise ExportError(None, str(exc)) from exc
    return buffer.getvalue()


def export_image(
    pixels: np.ndarray,
    path: Path,
    fmt: Optional[ExportFormat] = None,
    options: ImageExportOptions = ImageExportOptions(),
) -> Path:
    """Encode *pixels* and atomically write them to *path*.

    The format defaults to the one implied by the extension.
    """
    path = Path(path)
    fmt = fmt or ExportFormat.from_path(path)
    if fmt is None:
        raise ExportError(path, f"unknown export format '{path.suffix}'")
    try:
        payload = encode_image(pixels, fmt, options)
    except ExportError as exc:
        raise ExportError(path, exc.reason) from exc

    tmp_name: Optional[str] = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".part")
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        raise ExportError(path, str(exc)) from exc
    _LOGGER.info("Exported %s (%s, %d bytes)", path, fmt.mime_type, len(payload))
    return path


def export_to_paper_format(
    pixels: np.ndarray,
    path: Path,
    target_width: int,
    target_height: int,
    fmt: Optional[ExportFormat] = None,
) -> Path:
    """Scale *pixels* to fit ``target_width x target_height`` (aspect preserved) and export."""
    image = rgba_to_image(pixels)
    ratio = min(target_width / image.width, target_height / image.height)
    size = (max(1, round(image.width * ratio)), max(1, round(image.height * ratio)))
    resized = image.resize(size, Image.Resampling.LANCZOS)
    return export_image(np.asarray(resized), path, fmt)


def get_unique_destination(destination: Path) -> Path:
    """Return *destination* or a variant with a counter if it exists."""
    if not destination.exists():
        return destination

    parent = destination.parent
    stem = destination.stem
    suffix = destination.suffix
    counter = 1
    while True:
        candidate = parent / f"{stem} ({counter}){suffix}"
        if not candidate.exists():
            return candidate
        counter += 1
