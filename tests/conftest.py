import os
import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def make_pixels(width: int, height: int) -> np.ndarray:
    """Return an RGBA buffer whose pixels encode their own coordinates.

    Red holds ``x``, green holds ``y`` and blue is constant, so every pixel is
    distinct for sizes below 256 and transforms can be checked exactly.
    """
    ys, xs = np.mgrid[0:height, 0:width]
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[..., 0] = xs
    pixels[..., 1] = ys
    pixels[..., 2] = 7
    pixels[..., 3] = 255
    return pixels


class FakeScene:
    """Vector scene drawing a coordinate gradient at any size."""

    def __init__(self, width: float = 40.0, height: float = 20.0) -> None:
        self._size = (width, height)
        self.render_calls: list[tuple[int, int]] = []

    @property
    def intrinsic_size(self) -> tuple[float, float]:
        return self._size

    def render(self, width: int, height: int) -> np.ndarray:
        self.render_calls.append((width, height))
        return make_pixels(width, height)


class FakePageBackend:
    """Paged backend whose pages differ only in their blue channel."""

    def __init__(self, sizes=((30.0, 40.0), (50.0, 20.0), (30.0, 40.0))) -> None:
        self._sizes = list(sizes)
        self.render_calls: list[tuple[int, int, int]] = []
        self.closed = False

    @property
    def page_count(self) -> int:
        return len(self._sizes)

    def page_size(self, index: int) -> tuple[float, float]:
        return self._sizes[index]

    def render_page(self, index: int, width: int, height: int) -> np.ndarray:
        self.render_calls.append((index, width, height))
        pixels = make_pixels(width, height)
        pixels[..., 2] = index
        return pixels

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def pixels_factory():
    return make_pixels


@pytest.fixture
def write_png(tmp_path: Path):
    """Return a helper writing a coordinate-gradient PNG under ``tmp_path``."""
    from PIL import Image

    def _write(name: str, width: int = 12, height: int = 8, directory: Path | None = None) -> Path:
        target = (directory or tmp_path) / name
        target.parent.mkdir(parents=True, exist_ok=True)
        Image.fromarray(make_pixels(width, height)).save(target)
        return target

    return _write


@pytest.fixture(scope="session")
def qapp():
    """Offscreen ``QGuiApplication`` for Qt-backed SVG rendering."""
    pytest.importorskip("PySide6", reason="PySide6 is required for Qt tests", exc_type=ImportError)
    pytest.importorskip("PySide6.QtSvg", reason="QtSvg not available", exc_type=ImportError)
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PySide6.QtGui import QGuiApplication

    app = QGuiApplication.instance()
    if app is None:
        app = QGuiApplication([])
    yield app


@pytest.fixture
def scene_factory():
    return FakeScene


@pytest.fixture
def backend_factory():
    return FakePageBackend
