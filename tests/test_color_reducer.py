"""Tests for color to luminance reduction."""

import numpy as np
import pytest

from conftest import COLOR_RGB_5X5, EXPECTED_LUMINANCE_5X5, le_bytes
from rgbd_pyramid.color import LUMA_WEIGHTS, reduce_color
from rgbd_pyramid.errors import InvalidDimension, TypeMismatch, UnsupportedChannelCount
from rgbd_pyramid.image import CanonicalColorImage, RawImageBuffer


def test_luma_weights_sum_to_one():
    assert LUMA_WEIGHTS == (0.299, 0.587, 0.114)
    assert sum(LUMA_WEIGHTS) == pytest.approx(1.0)


def test_rgb_fixture_matches_literal_bytes(color_raw):
    color = reduce_color(color_raw)
    assert isinstance(color, CanonicalColorImage)
    assert len(color.data) == 100
    assert bytes(color.data) == EXPECTED_LUMINANCE_5X5.tobytes()


def test_primary_colors_literal_bytes():
    raw = RawImageBuffer.from_array(np.array([[
        (255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 255),
    ]], dtype=np.uint8))
    assert le_bytes(reduce_color(raw).to_array()) == bytes([
        0x87, 0x16, 0x99, 0x3E,   # 0.299
        0xA2, 0x45, 0x16, 0x3F,   # 0.587
        0xD5, 0x78, 0xE9, 0x3D,   # 0.114
        0x00, 0x00, 0x80, 0x3F,   # 1.0
    ])


def test_gray_input_is_normalized():
    raw = RawImageBuffer.from_array(np.array([[0, 51, 255]], dtype=np.uint8))
    assert le_bytes(reduce_color(raw).to_array()) == bytes([
        0x00, 0x00, 0x00, 0x00,
        0xCD, 0xCC, 0x4C, 0x3E,   # 0.2
        0x00, 0x00, 0x80, 0x3F,
    ])


def test_gray_and_equal_rgb_agree():
    values = np.arange(256, dtype=np.uint8).reshape(16, 16)
    gray = reduce_color(RawImageBuffer.from_array(values)).to_array()
    rgb = reduce_color(RawImageBuffer.from_array(np.stack([values] * 3, axis=-1))).to_array()
    np.testing.assert_allclose(rgb, gray, atol=1e-7)
    assert gray.min() == 0.0 and gray.max() == 1.0


def test_output_keeps_dimensions():
    raw = RawImageBuffer.from_array(np.zeros((3, 7, 3), dtype=np.uint8))
    assert reduce_color(raw).shape == (3, 7)


@pytest.mark.parametrize("channels", [2, 4])
def test_unsupported_channel_count(channels):
    raw = RawImageBuffer.from_array(np.zeros((2, 2, channels), dtype=np.uint8))
    with pytest.raises(UnsupportedChannelCount):
        reduce_color(raw)


def test_requires_8bit_input():
    raw = RawImageBuffer.from_array(np.zeros((2, 2, 3), dtype=np.uint16))
    with pytest.raises(TypeMismatch):
        reduce_color(raw)


def test_empty_color_rejected():
    with pytest.raises(InvalidDimension):
        reduce_color(RawImageBuffer())


def test_color_fixture_is_unchanged(color_raw):
    reduce_color(color_raw)
    np.testing.assert_array_equal(color_raw.as_array(np.uint8), COLOR_RGB_5X5)
