from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

pytest.importorskip("PySide6", reason="PySide6 is required for settings tests", exc_type=ImportError)

from jsonschema import ValidationError

from iView.errors import SettingsLoadError, SettingsValidationError
from iView.settings.manager import SettingsManager, default_cache_dir, default_settings_path
from iView.settings.schema import DEFAULT_SETTINGS, merge_with_defaults


def test_settings_manager_roundtrip(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    manager = SettingsManager(path=settings_path)
    manager.load()
    assert settings_path.exists()
    assert manager.get("default_image_dir") is None
    changes = []
    manager.settingsChanged.connect(lambda key, value: changes.append((key, value)))
    image_dir = tmp_path / "Pictures"
    manager.set("default_image_dir", image_dir)
    assert changes == [("default_image_dir", str(image_dir))]
    assert manager.get("default_image_dir") == str(image_dir)
    stored = json.loads(settings_path.read_text(encoding="utf-8"))
    assert stored["default_image_dir"] == str(image_dir)


def test_settings_manager_nested_updates_preserve_defaults(tmp_path: Path) -> None:
    manager = SettingsManager(path=tmp_path / "settings.json")
    manager.load()
    manager.set("view.zoom_step", 1.5)
    assert manager.get("view.zoom_step") == 1.5
    assert manager.get("view.pan_speed") == "normal"
    assert manager.get("thumbnails.size") == DEFAULT_SETTINGS["thumbnails"]["size"]
    assert manager.get("view.missing.deeper", "fallback") == "fallback"


def test_settings_manager_reload_keeps_values(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    first = SettingsManager(path=path)
    first.load()
    first.set("view.wrap_navigation", False)
    second = SettingsManager(path=path)
    second.load()
    assert second.get("view.wrap_navigation") is False


def test_invalid_value_is_rejected_and_previous_kept(tmp_path: Path) -> None:
    manager = SettingsManager(path=tmp_path / "settings.json")
    manager.load()
    with pytest.raises(SettingsValidationError):
        manager.set("view.pan_speed", "warp")
    assert manager.get("view.pan_speed") == "normal"


def test_corrupt_file_raises_load_error(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SettingsLoadError):
        SettingsManager(path=path).load()


def test_invalid_file_raises_validation_error(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"thumbnails": {"size": 1}}), encoding="utf-8")
    with pytest.raises(SettingsValidationError):
        SettingsManager(path=path).load()


def test_merge_with_defaults() -> None:
    merged = merge_with_defaults({"view": {"interpolation": "best"}, "cache_dir": ""})
    assert merged["view"]["interpolation"] == "best"
    assert merged["view"]["zoom_step"] == DEFAULT_SETTINGS["view"]["zoom_step"]
    assert merged["cache_dir"] is None
    assert set(merged["view"]) == {"zoom_step", "pan_speed", "interpolation", "wrap_navigation"}
    with pytest.raises(ValidationError):
        merge_with_defaults({"view": {"zoom_step": 0.5}})


@pytest.mark.skipif(sys.platform in ("win32", "darwin"), reason="XDG paths only apply on Linux")
def test_default_paths_follow_xdg(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    assert default_settings_path() == tmp_path / "config" / "iView" / "settings.json"
    assert default_cache_dir() == tmp_path / "cache" / "iView" / "thumbnails"


def test_reset_restores_default(tmp_path: Path) -> None:
    manager = SettingsManager(path=tmp_path / "settings.json")
    manager.load()
    manager.set("thumbnails.size", 128)
    manager.reset("thumbnails.size")
    assert manager.get("thumbnails.size") == DEFAULT_SETTINGS["thumbnails"]["size"]
    with pytest.raises(SettingsValidationError):
        manager.reset("view.nonexistent")
