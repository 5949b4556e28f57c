"""Tests for the rotation/flip state machine."""

from __future__ import annotations

import pytest

from iView.domain.transform import (
    FlipAxis,
    Rotation,
    TransformState,
    TransformStateMachine,
)


def test_rotation_cycles_clockwise():
    assert Rotation.NONE.rotate_cw() is Rotation.CW90
    assert Rotation.CW270.rotate_cw() is Rotation.NONE
    assert Rotation.NONE.rotate_ccw() is Rotation.CW270


def test_four_clockwise_turns_return_to_start():
    machine = TransformStateMachine()
    for _ in range(4):
        machine.rotate_cw()
    assert machine.state.rotation is Rotation.NONE
    assert machine.state.is_identity()


def test_cw_then_ccw_is_identity():
    machine = TransformStateMachine()
    machine.rotate_cw()
    machine.rotate_ccw()
    assert machine.state == TransformState()


def test_flip_twice_is_identity():
    machine = TransformStateMachine()
    machine.flip(FlipAxis.HORIZONTAL)
    assert machine.state.flip_horizontal
    machine.flip(FlipAxis.HORIZONTAL)
    assert machine.state.is_identity()


def test_flip_and_rotation_commute_in_state():
    a = TransformState().rotated_cw().flipped(FlipAxis.VERTICAL)
    b = TransformState().flipped(FlipAxis.VERTICAL).rotated_cw()
    assert a == b


def test_from_degrees_snaps():
    assert Rotation.from_degrees(100) is Rotation.CW90
    assert Rotation.from_degrees(-90) is Rotation.CW270


def test_fine_and_quantized_rotation_are_exclusive():
    with pytest.raises(ValueError):
        TransformState(rotation=Rotation.CW90, fine_angle=10.0)


def test_fine_angle_is_normalised():
    state = TransformState().with_fine_angle(-30)
    assert state.fine_angle == pytest.approx(330)
    assert state.rotation is Rotation.NONE
    assert state.is_fine


def test_rotating_from_fine_snaps_first():
    state = TransformState().with_fine_angle(80)
    turned = state.rotated_cw()
    assert turned.rotation is Rotation.CW180
    assert turned.fine_angle is None


def test_rotating_keeps_flips():
    state = TransformState(flip_horizontal=True).with_fine_angle(15).rotated_ccw()
    assert state.flip_horizontal
    assert state.rotation is Rotation.CW270


def test_multiple_of_90_with_tolerance():
    assert TransformState().is_multiple_of_90()
    assert TransformState(fine_angle=180.005).is_multiple_of_90()
    assert not TransformState(fine_angle=12.0).is_multiple_of_90()


def test_rotation_is_none_for_tiny_fine_angle():
    assert TransformState(fine_angle=0.001).rotation_is_none()
    assert not TransformState(fine_angle=5.0).rotation_is_none()


def test_displayed_size():
    assert TransformState(rotation=Rotation.CW90).displayed_size(40, 20) == (20, 40)
    assert TransformState(rotation=Rotation.CW180).displayed_size(40, 20) == (40, 20)
    w, h = TransformState(fine_angle=90.0).displayed_size(40, 20)
    assert (w, h) == (pytest.approx(20), pytest.approx(40))


def test_machine_reset_and_rotate_to():
    machine = TransformStateMachine()
    machine.flip(FlipAxis.VERTICAL)
    machine.rotate_to(Rotation.CW180)
    assert machine.state.rotation is Rotation.CW180
    assert machine.reset() == TransformState()
    assert machine.set_fine_angle(12).degrees == pytest.approx(12)
