"""Canonical single-channel float32 images (depth in meters, luminance in [0, 1])."""

import numpy as np

from rgbd_pyramid.errors import InvalidDimension
from .buffer import RawImageBuffer


class FloatImage(RawImageBuffer):
    """RawImageBuffer restricted to one float32 channel."""

    def prepare(
        self,
        width: int,
        height: int,
        num_channels: int = 1,
        bytes_per_channel: int = 4
    ) -> "FloatImage":
        if num_channels != 1 or bytes_per_channel != 4:
            raise InvalidDimension(
                f"{type(self).__name__} is 1 channel x 4 bytes, "
                f"got {num_channels} x {bytes_per_channel}"
            )
        return super().prepare(width, height, num_channels, bytes_per_channel)

    @classmethod
    def from_float_array(cls, array: np.ndarray) -> "FloatImage":
        """
        Build an image from a 2-D array, casting it to float32.

        Raises:
            InvalidDimension: If the array is not 2-D or has a zero axis.
        """
        array = np.asarray(array)
        if array.ndim != 2:
            raise InvalidDimension(f"Expected a 2-D array, got shape {array.shape}")
        return cls.from_array(array.astype(np.float32, copy=False))

    def to_array(self) -> np.ndarray:
        """(H, W) float32 view."""
        return self.as_array(np.float32)


class CanonicalDepthImage(FloatImage):
    """Depth in meters; 0.0 marks pixels without a measurement."""

    def valid_mask(self) -> np.ndarray:
        """Boolean (H, W) mask of pixels holding a measurement."""
        return self.to_array() > 0.0

    def valid_count(self) -> int:
        return int(np.count_nonzero(self.valid_mask()))


class CanonicalColorImage(FloatImage):
    """Luminance in [0, 1]."""
