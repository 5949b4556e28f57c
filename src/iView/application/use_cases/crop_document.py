from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...domain.crop import ContentFit, CropRegion, canvas_rect_to_image_rect
from ...domain.geometry import Bounds
from ...errors import InvalidRegionError, NoDocumentError, UnsupportedOperationError
from .base import DocumentUseCase, UseCaseRequest, UseCaseResponse


class CropFailure(Enum):
    NO_DOCUMENT = "no_document"
    INVALID_REGION = "invalid_region"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class CropDocumentRequest(UseCaseRequest):
    """Either ``region`` (document pixels) or ``selection`` (canvas space).

    A selection without ``canvas_size`` is mapped through the manager's
    viewport. With ``canvas_size`` the explicit canvas, image size, scale,
    pan and content fit are used; ``image_size`` defaults to the document's
    current dimensions.
    """
    region: Optional[CropRegion] = None
    selection: Optional[Bounds] = None
    canvas_size: Optional[tuple[float, float]] = None
    image_size: Optional[tuple[float, float]] = None
    scale: float = 1.0
    pan: tuple[float, float] = (0.0, 0.0)
    content_fit: ContentFit = ContentFit.CONTAIN


@dataclass(frozen=True)
class CropDocumentResponse(UseCaseResponse):
    failure: Optional[CropFailure] = None
    region: Optional[CropRegion] = None
    width: int = 0
    height: int = 0


class CropDocumentUseCase(DocumentUseCase):
    def execute(self, request: CropDocumentRequest) -> CropDocumentResponse:
        try:
            document = self._manager.require_document()
            region = self._resolve_region(document, request)
            document.crop(*region.as_tuple())
        except NoDocumentError as exc:
            return self._fail(CropFailure.NO_DOCUMENT, exc)
        except UnsupportedOperationError as exc:
            return self._fail(CropFailure.UNSUPPORTED, exc)
        except InvalidRegionError as exc:
            return self._fail(CropFailure.INVALID_REGION, exc)

        self._manager.notify_changed("crop")
        width, height = document.dimensions()
        self._logger.info("Cropped %s to %dx%d", document.path, width, height)
        return CropDocumentResponse(region=region, width=width, height=height)

    def _resolve_region(self, document, request: CropDocumentRequest) -> CropRegion:
        if request.region is not None:
            return request.region
        if request.selection is None:
            raise InvalidRegionError("Crop needs a region or a selection")
        if request.canvas_size is None:
            return self._map_through_viewport(document, request.selection)
        image_size = request.image_size or document.dimensions()
        return canvas_rect_to_image_rect(
            request.selection,
            request.canvas_size,
            image_size,
            request.scale,
            request.pan,
            request.content_fit,
        )

    def _map_through_viewport(self, document, selection: Bounds) -> CropRegion:
        """Map *selection* onto the pixels the document currently holds.

        The viewport works in logical units; vector and paged documents keep a
        buffer rasterized at their own scale, so the zoom is divided by it.
        """
        viewport = self._manager.viewport
        render_scale = getattr(document, "current_scale", 1.0)
        return canvas_rect_to_image_rect(
            selection,
            viewport.canvas_size,
            document.dimensions(),
            viewport.scale / render_scale,
            viewport.pan_offset,
            ContentFit.NONE,
        )

    def _fail(self, failure: CropFailure, exc: Exception) -> CropDocumentResponse:
        self._report(exc, "Crop rejected (%s): %s", failure.value, exc, context={"failure": failure.value})
        return CropDocumentResponse(success=False, error=str(exc), failure=failure)
