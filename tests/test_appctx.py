from __future__ import annotations

from pathlib import Path

import pytest

pytest.importorskip("PySide6", reason="PySide6 is required for settings", exc_type=ImportError)

from iView.appctx import AppContext
from iView.domain.transform import InterpolationQuality
from iView.domain.viewport import PanSpeed
from iView.settings.manager import SettingsManager


@pytest.fixture
def settings(tmp_path: Path) -> SettingsManager:
    manager = SettingsManager(path=tmp_path / "settings.json")
    manager.load()
    manager.set("cache_dir", tmp_path / "cache")
    return manager


def test_context_builds_collaborators_from_settings(settings: SettingsManager, tmp_path: Path):
    context = AppContext(settings=settings)
    assert context.cache_dir == tmp_path / "cache"
    assert context.thumbnails.disk_cache.cache_dir == tmp_path / "cache"
    assert context.documents.events is context.events
    assert context.documents.wrap_navigation is True
    assert context.documents.camera.zoom_step == pytest.approx(1.25)


def test_settings_changes_reach_the_document_manager(settings: SettingsManager, tmp_path: Path, write_png):
    context = AppContext(settings=settings)
    document = context.documents.open_document(write_png("a.png", 4, 4))
    settings.set("view.wrap_navigation", False)
    settings.set("view.interpolation", "best")
    settings.set("view.zoom_step", 2.0)
    settings.set("view.pan_speed", "fast")
    assert context.documents.wrap_navigation is False
    assert document.interpolation_quality is InterpolationQuality.BEST
    assert context.documents.camera.zoom_step == pytest.approx(2.0)
    assert context.documents.camera.pan_speed is PanSpeed.FAST


def test_use_cases_report_through_context_error_handler(settings: SettingsManager, tmp_path: Path):
    from iView.application.use_cases import OpenDocumentRequest, OpenDocumentUseCase
    from iView.errors.handler import ErrorOccurredEvent, ErrorSeverity

    context = AppContext(settings=settings)
    reported = []
    context.events.subscribe(ErrorOccurredEvent, reported.append)
    response = context.use_case(OpenDocumentUseCase).execute(
        OpenDocumentRequest(path=tmp_path / "missing.png")
    )
    assert not response.success
    assert [event.severity for event in reported] == [ErrorSeverity.ERROR]
    assert reported[0].context["path"] == str(tmp_path / "missing.png")
