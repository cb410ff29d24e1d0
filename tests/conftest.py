"""Shared fixtures: small literal color/depth images and reference pyramid bytes."""

import numpy as np
import pytest

from rgbd_pyramid.depth.decoder import DepthFormat, decode_depth
from rgbd_pyramid.image.buffer import RawImageBuffer
from rgbd_pyramid.image.canonical import CanonicalColorImage
from rgbd_pyramid.rgbd.pair import RGBDPair

# 5x5 RGB image: gray ramps (multiples of 51) mixed with pure primaries
COLOR_RGB_5X5 = np.array([
    [(0, 0, 0), (51, 51, 51), (102, 102, 102), (153, 153, 153), (204, 204, 204)],
    [(255, 255, 255), (255, 0, 0), (0, 255, 0), (0, 0, 255), (51, 51, 51)],
    [(204, 204, 204), (153, 153, 153), (102, 102, 102), (51, 51, 51), (0, 0, 0)],
    [(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 255), (102, 102, 102)],
    [(153, 153, 153), (0, 0, 0), (255, 255, 255), (204, 204, 204), (51, 51, 51)],
], dtype=np.uint8)

EXPECTED_LUMINANCE_5X5 = np.array([
    [0.0, 0.2, 0.4, 0.6, 0.8],
    [1.0, 0.299, 0.587, 0.114, 0.2],
    [0.8, 0.6, 0.4, 0.2, 0.0],
    [0.299, 0.587, 0.114, 1.0, 0.4],
    [0.6, 0.0, 1.0, 0.8, 0.2],
], dtype=np.float32)

# 5x5 raw depth in millimeters (multiples of 125 so every decode is exact)
DEPTH_MM_5X5 = np.array([
    [0, 125, 250, 500, 1000],
    [1500, 2000, 3000, 3875, 4000],
    [4500, 5000, 6000, 7000, 8000],
    [375, 625, 750, 1125, 2500],
    [0, 1250, 3500, 4125, 1000],
], dtype=np.uint16)

EXPECTED_REDWOOD_5X5 = np.array([
    [0.0, 0.125, 0.25, 0.5, 1.0],
    [1.5, 2.0, 3.0, 3.875, 4.0],
    [4.5, 5.0, 6.0, 7.0, 8.0],
    [0.375, 0.625, 0.75, 1.125, 2.5],
    [0.0, 1.25, 3.5, 4.125, 1.0],
], dtype=np.float32)

EXPECTED_TUM_5X5 = np.array([
    [0.0, 0.125, 0.25, 0.5, 1.0],
    [1.5, 2.0, 3.0, 3.875, 0.0],
    [0.0, 0.0, 0.0, 0.0, 0.0],
    [0.375, 0.625, 0.75, 1.125, 2.5],
    [0.0, 1.25, 3.5, 0.0, 1.0],
], dtype=np.float32)

# Rotating right by 3 keeps v / 8 when the low 3 bits are clear; otherwise
# the rotated value is >= 8192 mm and falls past the 7 m cutoff.
EXPECTED_SUN_5X5 = np.array([
    [0.0, 0.0, 0.0, 0.0, 0.125],
    [0.0, 0.25, 0.375, 0.0, 0.5],
    [0.0, 0.625, 0.75, 0.875, 1.0],
    [0.0, 0.0, 0.0, 0.0, 0.0],
    [0.0, 0.0, 0.0, 0.0, 0.125],
], dtype=np.float32)

# A 5x5 image lies entirely inside the NYU sensor border
EXPECTED_NYU_5X5 = np.zeros((5, 5), dtype=np.float32)

# Reference float32 little-endian bytes: a 5x5 luminance/depth pair and
# level 1 of its 2-level pyramid (color smoothed with the 3-tap Gaussian).
REFERENCE_COLOR_L0 = bytes([
    216, 2, 42, 63, 21, 162, 57, 63, 62, 210,
    42, 63, 216, 72, 38, 63, 116, 49, 38, 63,
    55, 245, 52, 63, 150, 19, 30, 63, 123, 6,
    19, 63, 193, 10, 23, 63, 83, 253, 46, 63,
    141, 0, 52, 63, 9, 144, 38, 63, 193, 19,
    55, 63, 19, 179, 45, 63, 56, 160, 49, 63,
    26, 10, 50, 63, 121, 185, 46, 63, 168, 239,
    16, 63, 183, 184, 35, 63, 63, 137, 21, 63,
    135, 1, 54, 63, 220, 15, 35, 63, 177, 246,
    44, 63, 207, 89, 38, 63, 56, 66, 57, 63,
])

REFERENCE_DEPTH_L0 = bytes([
    172, 219, 92, 54, 209, 104, 206, 53, 157, 96,
    77, 54, 110, 129, 81, 54, 89, 111, 111, 54,
    209, 104, 78, 53, 178, 114, 175, 53, 204, 63,
    73, 54, 146, 124, 144, 53, 199, 132, 17, 54,
    99, 193, 249, 53, 168, 32, 37, 54, 246, 245,
    191, 53, 136, 42, 6, 54, 99, 193, 121, 54,
    141, 119, 112, 54, 16, 49, 39, 54, 37, 213,
    59, 54, 99, 157, 20, 53, 110, 239, 30, 54,
    32, 26, 132, 51, 204, 209, 123, 53, 194, 91,
    12, 53, 214, 145, 83, 54, 214, 255, 32, 53,
])

REFERENCE_COLOR_L1 = bytes([
    96, 244, 44, 63, 151, 211, 36, 63, 137, 61,
    45, 63, 40, 111, 37, 63,
])

REFERENCE_DEPTH_L1 = bytes([
    208, 177, 231, 53, 8, 24, 44, 54, 126, 106,
    46, 54, 0, 145, 227, 53,
])


def le_float32_image(data: bytes, width: int, height: int) -> np.ndarray:
    """Decode little-endian float32 bytes into a native (H, W) array."""
    return np.frombuffer(data, dtype="<f4").reshape(height, width).astype(np.float32)


def le_bytes(array: np.ndarray) -> bytes:
    """float32 array as little-endian bytes, independent of host byte order."""
    return np.asarray(array, dtype="<f4").tobytes()


@pytest.fixture
def color_raw():
    """8-bit RGB 5x5 buffer."""
    return RawImageBuffer.from_array(COLOR_RGB_5X5)


@pytest.fixture
def depth_raw_mm():
    """uint16 millimeter 5x5 buffer."""
    return RawImageBuffer.from_array(DEPTH_MM_5X5)


@pytest.fixture
def depth_raw_mm_float():
    """The same millimeter table as a one-channel 4-byte float buffer."""
    return RawImageBuffer.from_array(DEPTH_MM_5X5.astype(np.float32))


@pytest.fixture
def reference_depth_raw():
    """Canonical float32 depth of the reference pair, as a raw buffer."""
    return RawImageBuffer.from_array(le_float32_image(REFERENCE_DEPTH_L0, 5, 5))


@pytest.fixture
def reference_pair(reference_depth_raw):
    """The reference 5x5 pair: given luminance plus identity-decoded depth."""
    color = CanonicalColorImage.from_float_array(le_float32_image(REFERENCE_COLOR_L0, 5, 5))
    depth = decode_depth(reference_depth_raw, DepthFormat.DIRECT)
    return RGBDPair(color, depth)
