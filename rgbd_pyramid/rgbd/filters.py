"""Smoothing kernels and 2x downsampling for canonical float32 images.

Color smoothing is a separable binomial filter with edge-replicated borders.
Each pass accumulates in float64 and rounds to float32 once, so pyramids are
reproducible byte for byte.

Depth smoothing treats 0.0 as "no measurement": it is a normalized
convolution (weighted sum of valid samples divided by the sum of their
weights), so holes never drag neighboring depths toward zero. A window
without any valid sample stays 0.0. Depth downsampling follows the same
rule per 2x2 block.
"""

from enum import Enum
from typing import Tuple, Union

import cv2
import numpy as np

from rgbd_pyramid.errors import UnsupportedFormat


class FilterType(str, Enum):
    """Separable binomial (Gaussian-like) smoothing kernels."""

    GAUSSIAN_3 = "gaussian3"
    GAUSSIAN_5 = "gaussian5"
    GAUSSIAN_7 = "gaussian7"

    @classmethod
    def parse(cls, value: Union["FilterType", str]) -> "FilterType":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise UnsupportedFormat(
            f"Unsupported filter type {value!r}; expected one of {[f.value for f in cls]}"
        )


KERNELS = {
    FilterType.GAUSSIAN_3: (0.25, 0.5, 0.25),
    FilterType.GAUSSIAN_5: (0.0625, 0.25, 0.375, 0.25, 0.0625),
    FilterType.GAUSSIAN_7: (0.03125, 0.109375, 0.21875, 0.28125, 0.21875, 0.109375, 0.03125),
}


def get_kernel(filter_type: Union[FilterType, str]) -> np.ndarray:
    """1-D kernel weights (float64, sum 1) for a filter type."""
    return np.asarray(KERNELS[FilterType.parse(filter_type)], dtype=np.float64)


# -----------------------------------------------------------------------------
# Smoothing
# -----------------------------------------------------------------------------
def _filter_rows(image: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    half = len(kernel) // 2
    width = image.shape[1]
    padded = np.pad(image.astype(np.float64), ((0, 0), (half, half)), mode="edge")

    acc = np.zeros(image.shape, dtype=np.float64)
    for offset, weight in enumerate(kernel):
        acc += weight * padded[:, offset:offset + width]
    return acc.astype(np.float32)


def smooth_image(
    image: np.ndarray,
    filter_type: Union[FilterType, str] = FilterType.GAUSSIAN_3
) -> np.ndarray:
    """
    Smooth a float32 (H, W) image, horizontal pass then vertical pass.

    Args:
        image: 2-D image.
        filter_type: Kernel to apply along both axes.

    Returns:
        New float32 (H, W) array.
    """
    kernel = get_kernel(filter_type)
    rows = _filter_rows(np.asarray(image, dtype=np.float32), kernel)
    return np.ascontiguousarray(_filter_rows(rows.T, kernel).T)


def smooth_depth(
    depth: np.ndarray,
    filter_type: Union[FilterType, str] = FilterType.GAUSSIAN_3
) -> np.ndarray:
    """
    Smooth a depth image without mixing in invalid (0.0) samples.

    Args:
        depth: float32 (H, W) depth in meters.
        filter_type: Kernel to apply along both axes.

    Returns:
        New float32 (H, W) array; 0.0 wherever the whole window was invalid.
    """
    kernel = get_kernel(filter_type).astype(np.float32)
    depth = np.asarray(depth, dtype=np.float32)
    valid = depth > 0.0

    samples = np.ascontiguousarray(np.where(valid, depth, np.float32(0.0)))
    weights = np.ascontiguousarray(valid.astype(np.float32))

    weighted_sum = cv2.sepFilter2D(
        samples, cv2.CV_32F, kernel, kernel, borderType=cv2.BORDER_REPLICATE
    )
    weight_sum = cv2.sepFilter2D(
        weights, cv2.CV_32F, kernel, kernel, borderType=cv2.BORDER_REPLICATE
    )

    smoothed = np.zeros_like(depth)
    np.divide(weighted_sum, weight_sum, out=smoothed, where=weight_sum > 0.0)
    return smoothed


# -----------------------------------------------------------------------------
# Downsampling
# -----------------------------------------------------------------------------
def half_size(width: int, height: int) -> Tuple[int, int]:
    """Floor-halved size, never below 1x1."""
    return max(1, width // 2), max(1, height // 2)


def _pair_slices(length: int) -> Tuple[slice, slice]:
    # A single row/column is paired with itself
    if length < 2:
        return slice(0, 1), slice(0, 1)
    even = 2 * (length // 2)
    return slice(0, even, 2), slice(1, even, 2)


def _block_samples(image: np.ndarray):
    """The four samples of every 2x2 block: (x, y), (x+1, y), (x, y+1), (x+1, y+1)."""
    rows_even, rows_odd = _pair_slices(image.shape[0])
    cols_even, cols_odd = _pair_slices(image.shape[1])
    return (
        image[rows_even, cols_even],
        image[rows_even, cols_odd],
        image[rows_odd, cols_even],
        image[rows_odd, cols_odd],
    )


def downsample_image(image: np.ndarray) -> np.ndarray:
    """2x2 box average in float32; odd trailing rows/columns are dropped."""
    p00, p10, p01, p11 = _block_samples(np.asarray(image, dtype=np.float32))
    return (p00 + p10 + p01 + p11) / np.float32(4.0)


def downsample_depth(depth: np.ndarray) -> np.ndarray:
    """2x2 average over valid samples only; all-invalid blocks give 0.0."""
    samples = _block_samples(np.asarray(depth, dtype=np.float32))

    total = np.zeros(samples[0].shape, dtype=np.float32)
    count = np.zeros(samples[0].shape, dtype=np.float32)
    for sample in samples:
        valid = sample > 0.0
        total = total + np.where(valid, sample, np.float32(0.0))
        count += valid

    averaged = np.zeros_like(total)
    np.divide(total, count, out=averaged, where=count > 0.0)
    return averaged
