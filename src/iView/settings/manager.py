"""Persistent user preferences with schema validation and change signals."""

from __future__ import annotations

import os
import sys
from copy import deepcopy
from pathlib import Path
from typing import Any

from jsonschema import ValidationError
from PySide6.QtCore import QObject, Signal

from ..config import CACHE_DIR_NAME, THUMBNAIL_SUBDIR
from ..errors import SettingsLoadError, SettingsValidationError
from ..utils.jsonio import read_json, write_json
from .schema import DEFAULT_SETTINGS, merge_with_defaults

_MISSING = object()


def _user_root(windows_env: str, windows_fallback: str, macos: str, xdg_env: str, xdg_fallback: str) -> Path:
    if os.name == "nt":
        base = os.environ.get(windows_env)
        return Path(base) if base else Path.home() / "AppData" / windows_fallback
    if sys.platform == "darwin":
        return Path.home() / "Library" / macos
    base = os.environ.get(xdg_env)
    return Path(base) if base else Path.home() / xdg_fallback


def default_settings_path() -> Path:
    """Location of ``settings.json`` for the current platform."""
    root = _user_root("APPDATA", "Roaming", "Application Support", "XDG_CONFIG_HOME", ".config")
    return root / CACHE_DIR_NAME / "settings.json"


def default_cache_dir() -> Path:
    """Directory holding the on-disk page thumbnails."""
    root = _user_root("LOCALAPPDATA", "Local", "Caches", "XDG_CACHE_HOME", ".cache")
    return root / CACHE_DIR_NAME / THUMBNAIL_SUBDIR


def _to_json(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json(item) for item in value]
    if isinstance(value, Path):
        return str(value)
    return value


def _lookup(data: dict[str, Any], parts: list[str]) -> Any:
    node: Any = data
    for part in parts:
        if not isinstance(node, dict) or part not in node:
            return _MISSING
        node = node[part]
    return node


def _assign(data: dict[str, Any], parts: list[str], value: Any) -> None:
    node = data
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = node[part] = {}
        node = child
    node[parts[-1]] = value


class SettingsManager(QObject):
    """User settings backed by a JSON file.

    Keys use dotted paths (``"view.zoom_step"``). Every successful
    :meth:`set` is written to disk before ``settingsChanged`` fires, and a
    rejected value leaves both the file and the in-memory copy untouched.
    """

    settingsChanged = Signal(str, object)

    def __init__(self, path: Path | None = None) -> None:
        super().__init__()
        self._path = Path(path) if path is not None else default_settings_path()
        self._data: dict[str, Any] = deepcopy(DEFAULT_SETTINGS)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> None:
        """Read the file (if any), fill in defaults and write the result back.

        Raises
        ------
        SettingsLoadError
            The file is unreadable, not JSON, or not a JSON object.
        SettingsValidationError
            The file parses but violates the schema.
        """
        payload = None
        if self._path.exists():
            try:
                payload = read_json(self._path)
            except (OSError, ValueError) as exc:
                raise SettingsLoadError(str(exc)) from exc
            if not isinstance(payload, dict):
                raise SettingsLoadError(f"{self._path} does not contain a JSON object")
        self._data = self._validated(payload)
        write_json(self._path, self._data)

    def get(self, key: str, default: Any | None = None) -> Any:
        value = _lookup(self._data, key.split("."))
        return default if value is _MISSING else value

    def set(self, key: str, value: Any) -> None:
        value = _to_json(value)
        candidate = deepcopy(self._data)
        _assign(candidate, key.split("."), value)
        self._data = self._validated(candidate)
        write_json(self._path, self._data)
        self.settingsChanged.emit(key, value)

    def reset(self, key: str) -> None:
        """Restore the default value of *key*."""
        default = _lookup(DEFAULT_SETTINGS, key.split("."))
        if default is _MISSING:
            raise SettingsValidationError(f"Unknown setting '{key}'")
        self.set(key, deepcopy(default))

    def as_dict(self) -> dict[str, Any]:
        return deepcopy(self._data)

    @staticmethod
    def _validated(payload: dict[str, Any] | None) -> dict[str, Any]:
        try:
            return merge_with_defaults(payload)
        except ValidationError as exc:
            raise SettingsValidationError(exc.message) from exc


__all__ = ["SettingsManager", "default_cache_dir", "default_settings_path"]
