from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ...config import DEFAULT_EXPORT_QUALITY
from ...errors import IViewError
from ...infrastructure.export import ExportFormat, ImageExportOptions, export_image, get_unique_destination
from .base import DocumentUseCase, UseCaseRequest, UseCaseResponse


@dataclass(frozen=True)
class SaveDocumentRequest(UseCaseRequest):
    destination: Path = Path()
    format: Optional[ExportFormat] = None
    quality: int = DEFAULT_EXPORT_QUALITY
    overwrite: bool = True


@dataclass(frozen=True)
class SaveDocumentResponse(UseCaseResponse):
    path: Optional[Path] = None


class SaveDocumentUseCase(DocumentUseCase):
    """Write the currently displayed pixels to an image file."""

    def execute(self, request: SaveDocumentRequest) -> SaveDocumentResponse:
        destination = Path(request.destination)
        if not request.overwrite:
            destination = get_unique_destination(destination)
        try:
            document = self._manager.require_document()
            written = export_image(
                document.pixels,
                destination,
                request.format,
                ImageExportOptions(quality=request.quality),
            )
        except IViewError as exc:
            self._report(
                exc, "Save to %s failed: %s", destination, exc, context={"destination": str(destination)}
            )
            return SaveDocumentResponse(success=False, error=str(exc))
        return SaveDocumentResponse(path=written)
