"""Coarse-to-fine RGB-D image pyramids.

Level 0 is the input pair itself. Each further level is derived from the
previous one: optionally smoothed, then halved in both dimensions. Levels
depend on each other, so they are built strictly in order.
"""

import time
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from rgbd_pyramid.config.settings import PyramidConfig
from rgbd_pyramid.errors import InvalidDimension
from rgbd_pyramid.image.canonical import CanonicalColorImage, CanonicalDepthImage, FloatImage
from rgbd_pyramid.utils.logger import get_logger
from .filters import (
    FilterType,
    downsample_depth,
    downsample_image,
    half_size,
    smooth_depth,
    smooth_image,
)
from .pair import RGBDPair

logger = get_logger(__name__)


def pyramid_shapes(width: int, height: int, level_count: int) -> List[Tuple[int, int]]:
    """
    (width, height) of every pyramid level.

    Sizes are floor-halved per level and clamped to at least 1x1.

    Raises:
        InvalidDimension: If a size is not positive or level_count < 1.
    """
    if width <= 0 or height <= 0:
        raise InvalidDimension(f"Invalid base size {width}x{height}")
    if level_count < 1:
        raise InvalidDimension(f"level_count must be >= 1, got {level_count}")

    shapes = [(width, height)]
    for _ in range(1, level_count):
        shapes.append(half_size(*shapes[-1]))
    return shapes


def _allocate_level(image_cls, width: int, height: int, values: np.ndarray) -> FloatImage:
    image = image_cls().prepare(width, height)
    image.to_array()[...] = values
    return image.freeze()


def _next_level(
    pair: RGBDPair,
    filter_before_downsample: bool,
    filter_type: FilterType,
    filter_depth: bool,
) -> RGBDPair:
    width, height = half_size(pair.width, pair.height)

    color = pair.color.to_array()
    depth = pair.depth.to_array()
    if filter_before_downsample:
        color = smooth_image(color, filter_type)
        if filter_depth:
            depth = smooth_depth(depth, filter_type)

    return RGBDPair(
        _allocate_level(CanonicalColorImage, width, height, downsample_image(color)),
        _allocate_level(CanonicalDepthImage, width, height, downsample_depth(depth)),
    )


def build_pyramid(
    pair: RGBDPair,
    level_count: int,
    filter_before_downsample: bool = True,
    *,
    filter_type: Union[FilterType, str] = FilterType.GAUSSIAN_3,
    filter_depth: bool = False,
) -> Tuple[RGBDPair, ...]:
    """
    Build a pyramid of progressively half-resolution RGB-D pairs.

    Args:
        pair: Full-resolution pair; becomes level 0 unchanged.
        level_count: Number of levels to return, level 0 included.
        filter_before_downsample: Smooth color before halving.
        filter_type: Smoothing kernel.
        filter_depth: Also smooth depth (sentinel-aware) before halving.
            Only applies when filter_before_downsample is set.

    Returns:
        Tuple of level_count pairs, index 0 full resolution.

    Raises:
        InvalidDimension: If level_count < 1.
        UnsupportedFormat: Unknown filter_type.
    """
    if level_count < 1:
        raise InvalidDimension(f"level_count must be >= 1, got {level_count}")
    filter_type = FilterType.parse(filter_type)

    start_time = time.time()
    levels = [pair]
    for level in range(1, level_count):
        levels.append(
            _next_level(levels[-1], filter_before_downsample, filter_type, filter_depth)
        )
        logger.debug(f"Pyramid level {level}: {levels[-1].width}x{levels[-1].height}")

    elapsed_ms = (time.time() - start_time) * 1000
    logger.debug(
        f"Built {level_count}-level pyramid from {pair.width}x{pair.height} "
        f"in {elapsed_ms:.2f} ms"
    )
    return tuple(levels)


def build_pyramid_from_config(
    pair: RGBDPair,
    config: Optional[PyramidConfig] = None,
) -> Tuple[RGBDPair, ...]:
    """
    Build a pyramid with the level count and filtering taken from config.

    Args:
        pair: Full-resolution pair.
        config: Pyramid settings; defaults to PyramidConfig().

    Returns:
        Tuple of config.levels pairs.
    """
    if config is None:
        config = PyramidConfig()

    return build_pyramid(
        pair,
        config.levels,
        config.filter_before_downsample,
        filter_type=config.filter_type,
        filter_depth=config.filter_depth,
    )


def filter_pyramid(
    pyramid: Sequence[RGBDPair],
    filter_type: Union[FilterType, str] = FilterType.GAUSSIAN_3,
) -> Tuple[RGBDPair, ...]:
    """
    Smooth every level of an existing pyramid.

    Color is smoothed with the plain kernel, depth with the sentinel-aware
    variant. The input pyramid is left untouched.

    Args:
        pyramid: Sequence of pairs, e.g. from build_pyramid().
        filter_type: Smoothing kernel.

    Returns:
        New tuple of filtered pairs, same length and sizes.
    """
    filter_type = FilterType.parse(filter_type)
    return tuple(
        RGBDPair.from_arrays(
            smooth_image(level.color.to_array(), filter_type),
            smooth_depth(level.depth.to_array(), filter_type),
        )
        for level in pyramid
    )
