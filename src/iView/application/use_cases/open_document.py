from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ...errors import IViewError
from .base import DocumentUseCase, UseCaseRequest, UseCaseResponse


@dataclass(frozen=True)
class OpenDocumentRequest(UseCaseRequest):
    path: Path = Path()


@dataclass(frozen=True)
class OpenDocumentResponse(UseCaseResponse):
    path: Optional[Path] = None
    kind: Optional[str] = None
    width: int = 0
    height: int = 0
    index: Optional[int] = None
    total: int = 0


class OpenDocumentUseCase(DocumentUseCase):
    def execute(self, request: OpenDocumentRequest) -> OpenDocumentResponse:
        self._logger.info("Opening %s", request.path)
        try:
            document = self._manager.open_document(request.path)
        except IViewError as exc:
            self._report(exc, "Could not open %s: %s", request.path, exc)
            return OpenDocumentResponse(success=False, error=str(exc))

        width, height = document.dimensions()
        collection = self._manager.collection
        return OpenDocumentResponse(
            path=document.path,
            kind=document.kind.value,
            width=width,
            height=height,
            index=collection.current_index,
            total=len(collection),
        )
