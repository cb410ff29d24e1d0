"""Immutable color + depth image pair and its constructors."""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np

from rgbd_pyramid.color.reducer import reduce_color
from rgbd_pyramid.config.settings import DepthDecodeConfig
from rgbd_pyramid.depth.decoder import DepthFormat, decode_depth
from rgbd_pyramid.errors import DimensionMismatch, TypeMismatch
from rgbd_pyramid.image.buffer import RawImageBuffer
from rgbd_pyramid.image.canonical import CanonicalColorImage, CanonicalDepthImage


@dataclass(frozen=True, eq=True)
class RGBDPair:
    """
    One canonical luminance image and one canonical depth image of equal size.

    Both images are frozen on construction. Images handed in unfrozen are
    copied first, so the caller keeps ownership of what it passed.
    """

    color: CanonicalColorImage
    depth: CanonicalDepthImage

    def __post_init__(self):
        if not isinstance(self.color, CanonicalColorImage):
            raise TypeMismatch(f"color must be a CanonicalColorImage, got {type(self.color).__name__}")
        if not isinstance(self.depth, CanonicalDepthImage):
            raise TypeMismatch(f"depth must be a CanonicalDepthImage, got {type(self.depth).__name__}")
        if self.color.shape != self.depth.shape:
            raise DimensionMismatch(
                f"Color is {self.color.width}x{self.color.height} but depth is "
                f"{self.depth.width}x{self.depth.height}"
            )

        if not self.color.frozen:
            object.__setattr__(self, "color", self.color.copy().freeze())
        if not self.depth.frozen:
            object.__setattr__(self, "depth", self.depth.copy().freeze())

    @classmethod
    def from_arrays(cls, color: np.ndarray, depth: np.ndarray) -> "RGBDPair":
        """Build a pair from (H, W) luminance and depth arrays."""
        return cls(
            CanonicalColorImage.from_float_array(color),
            CanonicalDepthImage.from_float_array(depth),
        )

    @property
    def width(self) -> int:
        return self.color.width

    @property
    def height(self) -> int:
        return self.color.height

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width)."""
        return self.color.shape


def pair_color_and_depth(
    color_raw: RawImageBuffer,
    depth_raw: RawImageBuffer,
    depth_format: Union[DepthFormat, str],
    config: Optional[DepthDecodeConfig] = None,
) -> RGBDPair:
    """
    Decode depth, reduce color and bundle both into an RGBDPair.

    Args:
        color_raw: 8-bit gray or RGB buffer.
        depth_raw: Raw depth buffer in ``depth_format``.
        depth_format: DepthFormat member or name.
        config: Depth decoding parameters.

    Returns:
        RGBDPair with frozen canonical images.

    Raises:
        UnsupportedFormat: Unknown depth format.
        UnsupportedChannelCount: Color or depth channel count not usable.
        TypeMismatch: Raw bytes per channel don't fit.
        DimensionMismatch: Color and depth differ in size.
    """
    depth = decode_depth(depth_raw, depth_format, config)
    color = reduce_color(color_raw)
    return RGBDPair(color.freeze(), depth.freeze())


def pair_from_direct(color_raw: RawImageBuffer, depth_raw: RawImageBuffer) -> RGBDPair:
    return pair_color_and_depth(color_raw, depth_raw, DepthFormat.DIRECT)


def pair_from_redwood(
    color_raw: RawImageBuffer,
    depth_raw: RawImageBuffer,
    config: Optional[DepthDecodeConfig] = None,
) -> RGBDPair:
    return pair_color_and_depth(color_raw, depth_raw, DepthFormat.REDWOOD, config)


def pair_from_tum(
    color_raw: RawImageBuffer,
    depth_raw: RawImageBuffer,
    config: Optional[DepthDecodeConfig] = None,
) -> RGBDPair:
    return pair_color_and_depth(color_raw, depth_raw, DepthFormat.TUM, config)


def pair_from_sun(
    color_raw: RawImageBuffer,
    depth_raw: RawImageBuffer,
    config: Optional[DepthDecodeConfig] = None,
) -> RGBDPair:
    return pair_color_and_depth(color_raw, depth_raw, DepthFormat.SUN, config)


def pair_from_nyu(
    color_raw: RawImageBuffer,
    depth_raw: RawImageBuffer,
    config: Optional[DepthDecodeConfig] = None,
) -> RGBDPair:
    return pair_color_and_depth(color_raw, depth_raw, DepthFormat.NYU, config)
