from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image
from typer.testing import CliRunner

from iView.cli import app
from iView.domain.document.pixels import apply_transform
from iView.domain.transform import Rotation, TransformState

runner = CliRunner()


def _read(path: Path) -> np.ndarray:
    with Image.open(path) as image:
        return np.asarray(image.convert("RGBA"))


def test_info_lists_basic_metadata(write_png):
    source = write_png("photo.png", 12, 8)
    result = runner.invoke(app, ["info", str(source)])
    assert result.exit_code == 0, result.output
    assert "PNG" in result.output
    assert "12 × 8" in result.output
    assert "Pages" not in result.output


def test_export_flips_then_rotates(write_png, tmp_path: Path, pixels_factory):
    source = write_png("photo.png", 12, 8)
    destination = tmp_path / "out.png"
    result = runner.invoke(app, ["export", str(source), str(destination), "--rotate", "90", "--flip-h"])
    assert result.exit_code == 0, result.output
    assert "Exported" in result.output
    expected = apply_transform(
        pixels_factory(12, 8),
        TransformState(rotation=Rotation.CW90, flip_horizontal=True),
    )
    np.testing.assert_array_equal(_read(destination), expected)


def test_export_with_crop(write_png, tmp_path: Path):
    source = write_png("photo.png", 12, 8)
    destination = tmp_path / "crop.png"
    result = runner.invoke(app, ["export", str(source), str(destination), "--crop", "2", "1", "4", "3"])
    assert result.exit_code == 0, result.output
    pixels = _read(destination)
    assert pixels.shape == (3, 4, 4)
    assert tuple(pixels[0, 0, :2]) == (2, 1)


def test_export_rejects_crop_outside_image(write_png, tmp_path: Path):
    source = write_png("photo.png", 12, 8)
    destination = tmp_path / "crop.png"
    result = runner.invoke(app, ["export", str(source), str(destination), "--crop", "50", "50", "4", "4"])
    assert result.exit_code == 1
    assert "Error" in result.output
    assert not destination.exists()


def test_export_rejects_unknown_format(write_png, tmp_path: Path):
    source = write_png("photo.png", 12, 8)
    result = runner.invoke(app, ["export", str(source), str(tmp_path / "out.xyz")])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_info_reports_broken_file(tmp_path: Path):
    broken = tmp_path / "broken.png"
    broken.write_bytes(b"not an image")
    result = runner.invoke(app, ["info", str(broken)])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_thumbs_clear(tmp_path: Path):
    cache_dir = tmp_path / "thumbs"
    cache_dir.mkdir()
    (cache_dir / "entry.png").write_bytes(b"x")
    result = runner.invoke(app, ["thumbs", "clear", "--cache-dir", str(cache_dir)])
    assert result.exit_code == 0, result.output
    assert not (cache_dir / "entry.png").exists()


def test_wallpaper_reports_backend(write_png, monkeypatch):
    from iView.infrastructure.system import wallpaper

    source = write_png("photo.png", 12, 8)
    calls = []

    def _fake(path):
        calls.append(path)
        return "feh"

    monkeypatch.setattr(wallpaper, "set_as_wallpaper", _fake)
    result = runner.invoke(app, ["wallpaper", str(source)])
    assert result.exit_code == 0, result.output
    assert "feh" in result.output
    assert calls == [source.resolve()]
