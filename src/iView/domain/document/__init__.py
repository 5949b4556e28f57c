from typing import Union

from .base import BaseDocument, DocumentInfo, DocumentKind, RenderOutput
from .collection import DocumentCollection
from .metadata import BasicMeta, DocumentMeta, Page
from .paginated import PageBackend, PaginatedDocument
from .raster import RasterDocument
from .vector import VectorDocument, VectorScene

Document = Union[RasterDocument, VectorDocument, PaginatedDocument]

__all__ = [
    "BaseDocument",
    "BasicMeta",
    "Document",
    "DocumentCollection",
    "DocumentInfo",
    "DocumentKind",
    "DocumentMeta",
    "Page",
    "PageBackend",
    "PaginatedDocument",
    "RasterDocument",
    "RenderOutput",
    "VectorDocument",
    "VectorScene",
]
