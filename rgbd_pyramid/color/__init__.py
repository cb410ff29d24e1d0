"""Color to luminance reduction."""

from .reducer import reduce_color, LUMA_WEIGHTS

__all__ = ["reduce_color", "LUMA_WEIGHTS"]
