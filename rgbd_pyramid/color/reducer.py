"""Reduce 8-bit gray or RGB images to canonical float32 luminance."""

import numpy as np

from rgbd_pyramid.errors import InvalidDimension, UnsupportedChannelCount
from rgbd_pyramid.image.buffer import RawImageBuffer
from rgbd_pyramid.image.canonical import CanonicalColorImage

# ITU-R BT.601 luma weights for (R, G, B)
LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def reduce_color(raw: RawImageBuffer) -> CanonicalColorImage:
    """
    Convert an 8-bit 1- or 3-channel image into luminance in [0, 1].

    Gray input is normalized by 255. RGB input (in R, G, B channel order)
    is weighted with LUMA_WEIGHTS first. Arithmetic runs in float64 and is
    rounded to float32 once at the end.

    Args:
        raw: Buffer with bytes_per_channel == 1.

    Returns:
        CanonicalColorImage of the same width and height.

    Raises:
        InvalidDimension: raw has not been allocated.
        TypeMismatch: raw is not 8-bit.
        UnsupportedChannelCount: raw has neither 1 nor 3 channels.
    """
    if raw.is_empty():
        raise InvalidDimension("Cannot reduce an empty color buffer")
    if raw.num_channels not in (1, 3):
        raise UnsupportedChannelCount(
            f"Color must have 1 or 3 channels, got {raw.num_channels}"
        )

    pixels = raw.as_array(np.uint8).astype(np.float64)
    if raw.num_channels == 3:
        r, g, b = LUMA_WEIGHTS
        pixels = r * pixels[..., 0] + g * pixels[..., 1] + b * pixels[..., 2]

    return CanonicalColorImage.from_float_array(pixels / 255.0)
