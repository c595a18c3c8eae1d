import math

import pytest

from raycube.vector import Color, Vec, hex_to_rgb, rgb_to_hex


@pytest.mark.parametrize(
    "color",
    [Color(0, 0, 0), Color(255, 255, 255), Color(220, 100, 0), Color(1, 2, 3)],
)
def test_color_round_trip(color):
    assert hex_to_rgb(rgb_to_hex(color)) == color


@pytest.mark.parametrize("value", [0, 0x123456, 0xFFFFFF, 0x00FF00])
def test_hex_round_trip(value):
    assert rgb_to_hex(hex_to_rgb(value)) == value


def test_red_packs_into_high_byte():
    assert rgb_to_hex(Color(255, 0, 0)) == 0xFF0000


def test_blue_unpacks_from_low_byte():
    assert hex_to_rgb(0x0000FF) == Color(0, 0, 255)


def test_bits_above_24_are_ignored():
    value = 0x345678
    assert hex_to_rgb(value | (1 << 24)) == hex_to_rgb(value)


def test_rotation_by_zero_keeps_vector():
    v = Vec(-1.0, 0.0).rotated(0)
    assert v.x == pytest.approx(-1.0)
    assert v.y == pytest.approx(0.0)


def test_quarter_turn():
    v = Vec(1.0, 0.0).rotated(math.pi / 2)
    assert v.x == pytest.approx(0.0, abs=1e-12)
    assert v.y == pytest.approx(1.0)


def test_two_half_turns_come_back():
    start = Vec(0.3, -0.7)
    back = start.rotated(math.pi).rotated(math.pi)
    assert back.x == pytest.approx(start.x)
    assert back.y == pytest.approx(start.y)


@pytest.mark.parametrize("angle", [0.1, 1.0, -2.5, math.pi / 3])
def test_rotation_preserves_length(angle):
    start = Vec(0.0, 0.66)
    turned = start.rotated(angle)
    assert math.hypot(turned.x, turned.y) == pytest.approx(math.hypot(start.x, start.y))


def test_rotated_does_not_modify_original():
    start = Vec(2.0, 5.0)
    start.rotated(1.2)
    assert start == Vec(2.0, 5.0)