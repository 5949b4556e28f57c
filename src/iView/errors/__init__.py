"""Custom exception hierarchy for iView."""

from __future__ import annotations

from pathlib import Path


class IViewError(Exception):
    """Base class for all custom errors raised by iView."""


# --- 3-layer hierarchy ---

class DomainError(IViewError):
    """Base class for domain-level errors."""


class InfrastructureError(IViewError):
    """Base class for infrastructure-level errors."""


class ApplicationError(IViewError):
    """Base class for application-level errors."""


# --- Domain errors ---

class InvalidRegionError(DomainError):
    """Raised when a crop region is empty or lies outside the document."""


class UnsupportedOperationError(DomainError):
    """Raised when a document variant does not support the requested operation."""


class InvalidPageError(DomainError):
    """Raised when a page index is outside the document's page range."""

    def __init__(self, requested: int, total: int) -> None:
        super().__init__(f"Invalid page {requested}: document has {total} page(s)")
        self.requested = requested
        self.total = total


class RenderError(DomainError):
    """Raised when a document cannot be rasterized."""


# --- Infrastructure errors ---

class DocumentLoadError(InfrastructureError):
    """Raised when a file cannot be read or decoded."""

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"Failed to load {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


class UnsupportedFormatError(DocumentLoadError):
    """Raised when the file extension maps to no known document kind."""

    def __init__(self, path: Path | str, extension: str) -> None:
        super().__init__(path, f"unsupported format '{extension or '<none>'}'")
        self.extension = extension


class ExportError(InfrastructureError):
    """Raised when a document cannot be encoded or written."""

    def __init__(self, path: Path | str | None, reason: str) -> None:
        target = f" {path}" if path is not None else ""
        super().__init__(f"Failed to export{target}: {reason}")
        self.path = Path(path) if path is not None else None
        self.reason = reason


class CacheError(InfrastructureError):
    """Raised when the thumbnail cache cannot be cleared."""


class WallpaperError(InfrastructureError):
    """Raised when no wallpaper backend accepted the image."""


# --- Application errors ---

class NoDocumentError(ApplicationError):
    """Raised when an operation needs an open document and none is loaded."""


# --- Settings ---

class SettingsError(IViewError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""
