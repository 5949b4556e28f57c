"""Factory choosing a loader from the file extension."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

from ...domain.document import BaseDocument, DocumentKind
from ...errors import UnsupportedFormatError

LOGGER = logging.getLogger(__name__)


class DocumentLoader(Protocol):
    def load(self, path: Path) -> BaseDocument:
        ...


def _default_loader(kind: DocumentKind) -> DocumentLoader:
    # Backends are imported lazily so a missing Qt or PyMuPDF only affects its own formats.
    if kind is DocumentKind.RASTER:
        from .raster_loader import RasterLoader

        return RasterLoader()
    if kind is DocumentKind.VECTOR:
        from .svg_loader import SvgLoader

        return SvgLoader()
    from .pdf_loader import PdfLoader

    return PdfLoader()


class DocumentLoaderFactory:
    """Dispatch :meth:`load` to the loader registered for the path's kind."""

    def __init__(self, loaders: Optional[dict[DocumentKind, DocumentLoader]] = None) -> None:
        self._loaders: dict[DocumentKind, DocumentLoader] = dict(loaders or {})

    def register(self, kind: DocumentKind, loader: DocumentLoader) -> None:
        self._loaders[kind] = loader

    def detect_kind(self, path: Path) -> Optional[DocumentKind]:
        return DocumentKind.from_path(path)

    def is_supported(self, path: Path) -> bool:
        return self.detect_kind(path) is not None

    def load(self, path: Path) -> BaseDocument:
        """Open *path*.

        Raises
        ------
        UnsupportedFormatError
            If the extension maps to no document kind.
        DocumentLoadError
            If the file cannot be read or decoded.
        """
        path = Path(path)
        kind = self.detect_kind(path)
        if kind is None:
            raise UnsupportedFormatError(path, path.suffix.lstrip("."))
        loader = self._loaders.get(kind)
        if loader is None:
            loader = _default_loader(kind)
            self._loaders[kind] = loader
        LOGGER.info("Loading %s as %s", path, kind.value)
        return loader.load(path)
