"""Error types raised by the RGB-D conversion and pyramid pipeline."""


class RGBDError(Exception):
    """Base class for all rgbd_pyramid errors."""


class InvalidDimension(RGBDError):
    """Raised when an image geometry or level count is not allowed."""


class IndexOutOfRange(RGBDError, IndexError):
    """Raised when a pixel or channel lies outside the image."""


class TypeMismatch(RGBDError, TypeError):
    """Raised when a numeric type disagrees with bytes per channel."""


class UnsupportedFormat(RGBDError, ValueError):
    """Raised for an unknown depth format identifier."""


class UnsupportedChannelCount(RGBDError, ValueError):
    """Raised when an image has a channel count the operation can't use."""


class DimensionMismatch(RGBDError, ValueError):
    """Raised when color and depth images differ in width or height."""
