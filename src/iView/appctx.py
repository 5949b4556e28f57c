"""Composition root wiring settings, caches and the document manager."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional, TypeVar

from .domain.transform import InterpolationQuality
from .domain.viewport import Camera, PanSpeed
from .events.bus import EventBus

if TYPE_CHECKING:  # pragma: no cover - only for type checking
    from .application.document_manager import DocumentManager
    from .application.services.thumbnail_service import ThumbnailService
    from .errors.handler import ErrorHandler
    from .settings.manager import SettingsManager

LOGGER = logging.getLogger(__name__)

UC = TypeVar("UC")


def _create_settings_manager() -> "SettingsManager":
    from .settings.manager import SettingsManager

    manager = SettingsManager()
    manager.load()
    return manager


@dataclass
class AppContext:
    """Container object shared by the CLI and any front end.

    Collaborators left as ``None`` are built from the settings in
    :meth:`__post_init__`.
    """

    settings: "SettingsManager" = field(default_factory=_create_settings_manager)
    events: EventBus = field(default_factory=EventBus)
    cache_dir: Optional[Path] = None
    thumbnails: Optional["ThumbnailService"] = None
    documents: Optional["DocumentManager"] = None
    errors: Optional["ErrorHandler"] = None

    def __post_init__(self) -> None:
        from .application.document_manager import DocumentManager
        from .application.services.thumbnail_service import ThumbnailService
        from .errors.handler import ErrorHandler
        from .infrastructure.cache.thumbnail_cache import ThumbnailCache
        from .settings.manager import default_cache_dir

        if self.cache_dir is None:
            configured = self.settings.get("cache_dir")
            self.cache_dir = Path(configured).expanduser() if configured else default_cache_dir()

        if self.thumbnails is None:
            self.thumbnails = ThumbnailService(
                ThumbnailCache(self.cache_dir),
                event_bus=self.events,
                size=int(self.settings.get("thumbnails.size")),
                enabled=bool(self.settings.get("thumbnails.enabled", True)),
            )

        if self.documents is None:
            camera = Camera(
                pan_speed=PanSpeed(self.settings.get("view.pan_speed", "normal")),
                zoom_step=float(self.settings.get("view.zoom_step")),
            )
            self.documents = DocumentManager(
                thumbnail_service=self.thumbnails,
                event_bus=self.events,
                camera=camera,
                wrap_navigation=bool(self.settings.get("view.wrap_navigation", True)),
                interpolation=InterpolationQuality(self.settings.get("view.interpolation", "balanced")),
            )

        if self.errors is None:
            self.errors = ErrorHandler(LOGGER, self.events)

        self.settings.settingsChanged.connect(self._on_settings_changed)

    def use_case(self, factory: Callable[..., "UC"]) -> "UC":
        """Build a document use case whose failures go through :attr:`errors`."""
        return factory(self.documents, errors=self.errors)

    def _on_settings_changed(self, key: str, value: object) -> None:
        if key == "view.wrap_navigation":
            self.documents.set_wrap_navigation(bool(value))
        elif key == "view.interpolation":
            self.documents.set_interpolation_quality(InterpolationQuality(value))
        elif key == "view.zoom_step":
            self.documents.camera.set_zoom_step(float(value))
        elif key == "view.pan_speed":
            self.documents.camera.pan_speed = PanSpeed(value)
