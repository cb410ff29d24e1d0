"""RGB-D pairs, smoothing filters and image pyramids."""

from .filters import FilterType, KERNELS, get_kernel, smooth_image, smooth_depth
from .pair import (
    RGBDPair,
    pair_color_and_depth,
    pair_from_direct,
    pair_from_redwood,
    pair_from_tum,
    pair_from_sun,
    pair_from_nyu,
)
from .pyramid import build_pyramid, build_pyramid_from_config, filter_pyramid, pyramid_shapes

__all__ = [
    "FilterType",
    "KERNELS",
    "get_kernel",
    "smooth_image",
    "smooth_depth",
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
