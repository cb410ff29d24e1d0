"""Image buffers: the raw packed buffer and its canonical float specializations."""

from .buffer import RawImageBuffer, prepare, VALID_BYTES_PER_CHANNEL
from .canonical import FloatImage, CanonicalDepthImage, CanonicalColorImage

__all__ = [
    "RawImageBuffer",
    "prepare",
    "VALID_BYTES_PER_CHANNEL",
    "FloatImage",
    "CanonicalDepthImage",
    "CanonicalColorImage",
]
