"""Tests for desktop wallpaper backends."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from iView.errors import WallpaperError
from iView.infrastructure.system import wallpaper
from iView.infrastructure.system.wallpaper import COSMIC_CONFIG, set_as_wallpaper, spawn_wallpaper_task


class FakeRunner:
    def __init__(self, returncodes: dict[str, int] | None = None) -> None:
        self.commands: list[list[str]] = []
        self._returncodes = returncodes or {}

    def __call__(self, command):
        command = list(command)
        self.commands.append(command)
        code = self._returncodes.get(command[0], 0)
        return subprocess.CompletedProcess(command, code, stdout=b"", stderr=b"boom")


@pytest.fixture
def image(tmp_path: Path) -> Path:
    target = tmp_path / "wall.png"
    target.write_bytes(b"png")
    return target


@pytest.fixture
def home(tmp_path: Path) -> Path:
    target = tmp_path / "home"
    target.mkdir()
    return target


@pytest.fixture
def tools(monkeypatch):
    available: set[str] = set()
    monkeypatch.setattr(wallpaper.shutil, "which", lambda name: f"/usr/bin/{name}" if name in available else None)
    return available


def test_cosmic_config_wins(image, home, tools):
    config = home / COSMIC_CONFIG
    config.parent.mkdir(parents=True)
    config.write_text("old")
    runner = FakeRunner()
    tools.add("gsettings")

    assert set_as_wallpaper(image, home=home, runner=runner) == "cosmic"
    assert str(image.resolve()) in config.read_text()
    assert runner.commands == []


def test_gsettings_sets_light_and_dark_uris(image, home, tools):
    tools.update({"gsettings", "feh"})
    runner = FakeRunner()
    assert set_as_wallpaper(image, home=home, runner=runner) == "gsettings"
    uri = image.resolve().as_uri()
    assert [command[2] for command in runner.commands] == ["org.gnome.desktop.background"] * 2
    assert [command[3] for command in runner.commands] == ["picture-uri", "picture-uri-dark"]
    assert [command[4] for command in runner.commands] == [uri, uri]


def test_falls_back_to_feh(image, home, tools):
    tools.update({"gsettings", "feh"})
    runner = FakeRunner({"gsettings": 1})
    assert set_as_wallpaper(image, home=home, runner=runner) == "feh"
    assert runner.commands[-1] == ["feh", "--bg-scale", str(image.resolve())]


def test_no_backend_raises(image, home, tools):
    with pytest.raises(WallpaperError):
        set_as_wallpaper(image, home=home, runner=FakeRunner())


def test_missing_image_raises(tmp_path, home, tools):
    with pytest.raises(WallpaperError):
        set_as_wallpaper(tmp_path / "missing.png", home=home, runner=FakeRunner())


def test_background_task_swallows_failure(tmp_path, home, tools):
    thread = spawn_wallpaper_task(tmp_path / "missing.png", home=home, runner=FakeRunner())
    thread.join(timeout=5)
    assert not thread.is_alive()
    assert thread.daemon
