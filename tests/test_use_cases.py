"""Tests for the request/response use cases driving the document manager."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from PIL import Image

from iView.application.document_manager import DocumentManager
from iView.application.use_cases import (
    CropDocumentRequest,
    CropDocumentUseCase,
    CropFailure,
    NavigateRequest,
    NavigateUseCase,
    NavigationDirection,
    OpenDocumentRequest,
    OpenDocumentUseCase,
    SaveDocumentRequest,
    SaveDocumentUseCase,
    TransformAction,
    TransformDocumentRequest,
    TransformDocumentUseCase,
)
from iView.domain.crop import CropRegion
from iView.domain.document import DocumentKind, PaginatedDocument, VectorDocument
from iView.domain.geometry import Bounds
from iView.domain.transform import Rotation
from iView.errors import InvalidRegionError
from iView.errors.handler import ErrorHandler, ErrorOccurredEvent, ErrorSeverity
from iView.events import DocumentChangedEvent
from iView.events.bus import EventBus
from iView.infrastructure.loaders import DocumentLoaderFactory


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def manager(bus: EventBus) -> DocumentManager:
    return DocumentManager(event_bus=bus)


@pytest.fixture
def opened(manager: DocumentManager, write_png, tmp_path: Path) -> DocumentManager:
    folder = tmp_path / "album"
    write_png("a.png", 12, 8, directory=folder)
    write_png("b.png", 5, 5, directory=folder)
    write_png("c.png", 7, 3, directory=folder)
    manager.open_document(folder / "a.png")
    return manager


def test_open_document_success(manager: DocumentManager, write_png):
    path = write_png("photo.png", 12, 8)
    response = OpenDocumentUseCase(manager).execute(OpenDocumentRequest(path=path))
    assert response.success
    assert response.kind == "raster"
    assert (response.width, response.height) == (12, 8)
    assert (response.index, response.total) == (0, 1)


def test_open_document_missing_file(manager: DocumentManager, tmp_path: Path):
    response = OpenDocumentUseCase(manager).execute(OpenDocumentRequest(path=tmp_path / "gone.png"))
    assert not response.success
    assert response.error
    assert manager.document is None


def test_navigate(opened: DocumentManager):
    use_case = NavigateUseCase(opened)
    response = use_case.execute(NavigateRequest(direction=NavigationDirection.NEXT))
    assert response.moved and response.index == 1
    assert response.path.name == "b.png"
    response = use_case.execute(NavigateRequest(direction=NavigationDirection.LAST))
    assert response.index == 2
    response = use_case.execute(NavigateRequest(direction=NavigationDirection.INDEX, index=2))
    assert not response.moved
    response = use_case.execute(NavigateRequest(direction=NavigationDirection.FIRST))
    assert response.index == 0
    response = use_case.execute(NavigateRequest(direction=NavigationDirection.PREVIOUS))
    assert response.path.name == "c.png"


def test_navigate_out_of_range(opened: DocumentManager):
    response = NavigateUseCase(opened).execute(
        NavigateRequest(direction=NavigationDirection.INDEX, index=9)
    )
    assert response.success
    assert not response.moved
    assert response.index == 0


def test_transform_rotates_and_notifies(opened: DocumentManager, bus: EventBus):
    changes = []
    bus.subscribe(DocumentChangedEvent, changes.append)
    use_case = TransformDocumentUseCase(opened)
    response = use_case.execute(TransformDocumentRequest(action=TransformAction.ROTATE_CW))
    assert response.success
    assert response.state.rotation is Rotation.CW90
    assert (response.width, response.height) == (8, 12)
    assert changes[-1].reason == "rotate_cw"
    assert opened.viewport.document_size == (8.0, 12.0)

    response = use_case.execute(TransformDocumentRequest(action=TransformAction.RESET))
    assert response.state.is_identity()
    assert (response.width, response.height) == (12, 8)


def test_transform_fine_rotation_round_trip(opened: DocumentManager):
    use_case = TransformDocumentUseCase(opened)
    use_case.execute(TransformDocumentRequest(action=TransformAction.ROTATE_CW))
    response = use_case.execute(TransformDocumentRequest(action=TransformAction.ROTATE_FINE, degrees=10))
    assert response.state.is_fine
    response = use_case.execute(TransformDocumentRequest(action=TransformAction.RESET_FINE))
    assert response.state.rotation is Rotation.CW90
    assert (response.width, response.height) == (8, 12)


def test_transform_without_document(manager: DocumentManager):
    response = TransformDocumentUseCase(manager).execute(TransformDocumentRequest())
    assert not response.success


def test_crop_with_region(opened: DocumentManager):
    response = CropDocumentUseCase(opened).execute(CropDocumentRequest(region=CropRegion(2, 1, 4, 3)))
    assert response.success
    assert (response.width, response.height) == (4, 3)
    assert tuple(opened.document.pixels[0, 0, :2]) == (2, 1)


def test_crop_with_viewport_selection(opened: DocumentManager):
    opened.viewport.set_canvas_size(24, 16)
    response = CropDocumentUseCase(opened).execute(
        CropDocumentRequest(selection=Bounds(0, 0, 12, 8))
    )
    assert response.region == CropRegion(0, 0, 6, 4)
    assert opened.document.dimensions() == (6, 4)


def test_crop_with_explicit_canvas(opened: DocumentManager):
    response = CropDocumentUseCase(opened).execute(
        CropDocumentRequest(selection=Bounds(60, 40, 60, 40), canvas_size=(120, 80))
    )
    assert response.region == CropRegion(6, 4, 6, 4)
    assert tuple(opened.document.pixels[0, 0, :2]) == (6, 4)


def test_crop_rejects_bad_region(opened: DocumentManager):
    response = CropDocumentUseCase(opened).execute(CropDocumentRequest(region=CropRegion(40, 40, 2, 2)))
    assert response.failure is CropFailure.INVALID_REGION
    assert opened.document.dimensions() == (12, 8)


def test_crop_without_document(manager: DocumentManager):
    response = CropDocumentUseCase(manager).execute(CropDocumentRequest(region=CropRegion(0, 0, 2, 2)))
    assert response.failure is CropFailure.NO_DOCUMENT


def test_crop_paginated_is_unsupported(bus: EventBus, tmp_path: Path, backend_factory):
    class _Loader:
        def load(self, path):
            return PaginatedDocument(backend_factory(), path=path)

    (tmp_path / "doc.pdf").write_bytes(b"%PDF")
    manager = DocumentManager(DocumentLoaderFactory({DocumentKind.PAGINATED: _Loader()}), event_bus=bus)
    manager.open_document(tmp_path / "doc.pdf")
    response = CropDocumentUseCase(manager).execute(CropDocumentRequest(region=CropRegion(0, 0, 5, 5)))
    assert response.failure is CropFailure.UNSUPPORTED


def test_save_document(opened: DocumentManager, tmp_path: Path):
    TransformDocumentUseCase(opened).execute(TransformDocumentRequest(action=TransformAction.ROTATE_CW))
    target = tmp_path / "out" / "rotated.png"
    response = SaveDocumentUseCase(opened).execute(SaveDocumentRequest(destination=target))
    assert response.success
    assert response.path == target
    with Image.open(target) as image:
        assert image.size == (8, 12)


def test_save_document_keeps_existing_file(opened: DocumentManager, tmp_path: Path):
    target = tmp_path / "copy.png"
    target.write_bytes(b"existing")
    response = SaveDocumentUseCase(opened).execute(
        SaveDocumentRequest(destination=target, overwrite=False)
    )
    assert response.path == tmp_path / "copy (1).png"
    assert target.read_bytes() == b"existing"


def test_save_document_failures(opened: DocumentManager, tmp_path: Path):
    response = SaveDocumentUseCase(DocumentManager()).execute(SaveDocumentRequest(destination=tmp_path / "x.png"))
    assert not response.success
    response = SaveDocumentUseCase(opened).execute(SaveDocumentRequest(destination=tmp_path / "x.pdf"))
    assert not response.success
    assert not (tmp_path / "x.pdf").exists()


def test_crop_vector_selection_follows_render_scale(bus: EventBus, tmp_path: Path, scene_factory):
    class _Loader:
        def load(self, path):
            return VectorDocument(scene_factory(40, 20), path=path)

    (tmp_path / "shape.svg").write_text("<svg/>")
    manager = DocumentManager(DocumentLoaderFactory({DocumentKind.VECTOR: _Loader()}), event_bus=bus)
    manager.open_document(tmp_path / "shape.svg")
    manager.viewport.set_canvas_size(80, 40)
    manager.render()
    assert manager.document.dimensions() == (80, 40)

    response = CropDocumentUseCase(manager).execute(
        CropDocumentRequest(selection=Bounds(40, 0, 40, 40))
    )
    assert response.region == CropRegion(40, 0, 40, 40)
    assert (response.width, response.height) == (40, 40)
    assert manager.document.pixels[0, 0, 0] == 40


def test_failures_go_through_error_handler(opened: DocumentManager, bus: EventBus):
    reported = []
    bus.subscribe(ErrorOccurredEvent, reported.append)
    errors = ErrorHandler(logging.getLogger("iView.test"), bus)
    response = CropDocumentUseCase(opened, errors=errors).execute(
        CropDocumentRequest(region=CropRegion(40, 40, 2, 2))
    )
    assert response.failure is CropFailure.INVALID_REGION
    assert len(reported) == 1
    assert isinstance(reported[0].error, InvalidRegionError)
    assert reported[0].severity is ErrorSeverity.WARNING
    assert reported[0].context["failure"] == "invalid_region"
