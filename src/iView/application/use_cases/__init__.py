from .base import DocumentUseCase, UseCase, UseCaseRequest, UseCaseResponse
from .open_document import OpenDocumentUseCase, OpenDocumentRequest, OpenDocumentResponse
from .navigate import NavigateUseCase, NavigateRequest, NavigateResponse, NavigationDirection
from .transform_document import (
    TransformAction,
    TransformDocumentUseCase,
    TransformDocumentRequest,
    TransformDocumentResponse,
)
from .crop_document import CropDocumentUseCase, CropDocumentRequest, CropDocumentResponse, CropFailure
from .save_document import SaveDocumentUseCase, SaveDocumentRequest, SaveDocumentResponse
