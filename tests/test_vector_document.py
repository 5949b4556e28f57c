"""Tests for re-rendered vector documents."""

from __future__ import annotations

import numpy as np
import pytest

from iView.domain.document import RasterDocument, VectorDocument
from iView.domain.document import pixels as px
from iView.domain.document.vector import rendered_size
from iView.domain.transform import FlipAxis, Rotation
from iView.errors import InvalidRegionError, RenderError


@pytest.fixture
def scene(scene_factory):
    return scene_factory(40, 20)


@pytest.fixture
def document(scene) -> VectorDocument:
    return VectorDocument(scene)


def test_native_size_comes_from_scene(scene_factory):
    document = VectorDocument(scene_factory(10.2, 4.0))
    assert document.native_dimensions() == (11, 4)
    assert document.dimensions() == (11, 4)


def test_rendered_size_rounds_up_and_never_vanishes():
    assert rendered_size(40, 20, 0.51) == (21, 11)
    assert rendered_size(40, 20, 0.0001) == (1, 1)


def test_render_rescales_only_when_scale_changes(document: VectorDocument, scene):
    output = document.render(2.0)
    assert (output.width, output.height) == (80, 40)
    calls = len(scene.render_calls)
    document.render(2.0)
    assert len(scene.render_calls) == calls
    assert document.render_at_scale(2.0) is False
    assert document.render_at_scale(0.5) is True
    assert document.dimensions() == (20, 10)


def test_rotation_rerenders_at_current_scale(document: VectorDocument):
    document.render(2.0)
    document.rotate(Rotation.CW90)
    assert document.dimensions() == (40, 80)
    expected = px.apply_transform(px.ensure_rgba(np.asarray(document.scene.render(80, 40))), document.transform_state())
    assert np.array_equal(document.pixels, expected)


@pytest.mark.parametrize(
    "steps",
    [
        [("flip", FlipAxis.HORIZONTAL), ("rotate", Rotation.CW90)],
        [("rotate", Rotation.CW90), ("flip", FlipAxis.HORIZONTAL), ("flip", FlipAxis.VERTICAL)],
        [("rotate", Rotation.CW270), ("flip", FlipAxis.VERTICAL), ("rotate", Rotation.CW180)],
    ],
)
def test_matches_raster_pixels_for_same_operations(document: VectorDocument, pixels_factory, steps):
    raster = RasterDocument(pixels_factory(40, 20))
    for kind, arg in steps:
        for target in (document, raster):
            if kind == "rotate":
                target.rotate(arg)
            else:
                target.flip(arg)
    assert document.transform_state() == raster.transform_state()
    assert np.array_equal(document.pixels, raster.pixels)


def test_crop_is_view_only(document: VectorDocument):
    document.crop(5, 5, 10, 10)
    assert document.dimensions() == (10, 10)
    assert document.native_dimensions() == (40, 20)
    document.render(1.5)
    assert document.dimensions() == (60, 30)


def test_invalid_crop_is_rejected(document: VectorDocument):
    with pytest.raises(InvalidRegionError):
        document.crop(40, 0, 5, 5)
    assert document.dimensions() == (40, 20)


def test_fine_rotation_and_reset(document: VectorDocument):
    document.rotate(Rotation.CW180)
    document.rotate_fine(20)
    state = document.transform_state()
    assert state.fine_angle == pytest.approx(200)
    width, height = document.dimensions()
    assert document.pixels.shape[:2] == (height, width)
    assert width > 40
    document.reset_fine_rotation()
    assert document.transform_state().rotation is Rotation.CW180
    assert document.dimensions() == (40, 20)


class _BrokenScene:
    intrinsic_size = (10.0, 10.0)

    def __init__(self) -> None:
        self.fail = False

    def render(self, width: int, height: int) -> np.ndarray:
        if self.fail:
            return np.zeros((height, width, 3), dtype=np.uint8)
        return np.zeros((height, width, 4), dtype=np.uint8)


def test_failed_rerender_keeps_previous_state():
    scene = _BrokenScene()
    document = VectorDocument(scene)
    scene.fail = True
    with pytest.raises(RenderError):
        document.rotate(Rotation.CW90)
    assert document.transform_state().rotation is Rotation.NONE
    assert document.dimensions() == (10, 10)
    with pytest.raises(RenderError):
        document.render(2.0)
    assert document.current_scale == 1.0
