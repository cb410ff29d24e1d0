"""rgbd_pyramid - canonical RGB-D images and image pyramids.

Decodes sensor-specific raw depth (Redwood, TUM, SUN, NYU or direct float
meters) into float32 depth, reduces 8-bit color to float32 luminance, pairs
the two and builds half-resolution pyramids for coarse-to-fine alignment.
"""

from .errors import (
    RGBDError,
    InvalidDimension,
    IndexOutOfRange,
    TypeMismatch,
    UnsupportedFormat,
    UnsupportedChannelCount,
    DimensionMismatch,
)
from .image import RawImageBuffer, CanonicalColorImage, CanonicalDepthImage, prepare
from .depth import DepthFormat, decode_depth
from .color import reduce_color, LUMA_WEIGHTS
from .rgbd import (
    FilterType,
    RGBDPair,
    pair_color_and_depth,
    pair_from_direct,
    pair_from_redwood,
    pair_from_tum,
    pair_from_sun,
    pair_from_nyu,
    build_pyramid,
    build_pyramid_from_config,
    filter_pyramid,
    pyramid_shapes,
)

__all__ = [
    "RGBDError",
    "InvalidDimension",
    "IndexOutOfRange",
    "TypeMismatch",
    "UnsupportedFormat",
    "UnsupportedChannelCount",
    "DimensionMismatch",
    "RawImageBuffer",
    "CanonicalColorImage",
    "CanonicalDepthImage",
    "prepare",
    "DepthFormat",
    "decode_depth",
    "reduce_color",
    "LUMA_WEIGHTS",
    "FilterType",
    "RGBDPair",
    "pair_color_and_depth",
    "pair_from_direct",
    "pair_from_redwood",
    "pair_from_tum",
    "pair_from_sun",
    "pair_from_nyu",
    "build_pyramid",
    "build_pyramid_from_config",
    "filter_pyramid",
    "pyramid_shapes",
]
