from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...domain.document import operations
from ...domain.transform import TransformState
from ...errors import IViewError
from .base import DocumentUseCase, UseCaseRequest, UseCaseResponse


class TransformAction(Enum):
    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"
    FLIP_HORIZONTAL = "flip_horizontal"
    FLIP_VERTICAL = "flip_vertical"
    ROTATE_FINE = "rotate_fine"
    RESET_FINE = "reset_fine"
    RESET = "reset"


@dataclass(frozen=True)
class TransformDocumentRequest(UseCaseRequest):
    action: TransformAction = TransformAction.ROTATE_CW
    degrees: float = 0.0


@dataclass(frozen=True)
class TransformDocumentResponse(UseCaseResponse):
    state: Optional[TransformState] = None
    width: int = 0
    height: int = 0


class TransformDocumentUseCase(DocumentUseCase):
    """Apply one rotate/flip step to the open document."""

    def execute(self, request: TransformDocumentRequest) -> TransformDocumentResponse:
        try:
            document = self._manager.require_document()
            self._apply(document, request)
        except IViewError as exc:
            self._report(
                exc, "Transform %s failed: %s", request.action.value, exc, context={"action": request.action.value}
            )
            return TransformDocumentResponse(success=False, error=str(exc))

        self._manager.notify_changed(request.action.value)
        width, height = document.dimensions()
        return TransformDocumentResponse(
            state=document.transform_state(),
            width=width,
            height=height,
        )

    @staticmethod
    def _apply(document, request: TransformDocumentRequest) -> None:
        action = request.action
        if action is TransformAction.ROTATE_CW:
            operations.rotate_document_cw(document)
        elif action is TransformAction.ROTATE_CCW:
            operations.rotate_document_ccw(document)
        elif action is TransformAction.FLIP_HORIZONTAL:
            operations.flip_document_horizontal(document)
        elif action is TransformAction.FLIP_VERTICAL:
            operations.flip_document_vertical(document)
        elif action is TransformAction.ROTATE_FINE:
            operations.rotate_document_fine(document, request.degrees)
        elif action is TransformAction.RESET_FINE:
            document.reset_fine_rotation()
        else:
            operations.reset_document_transforms(document)
