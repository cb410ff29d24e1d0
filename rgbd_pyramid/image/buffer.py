"""Packed-byte image buffer with an explicit geometry descriptor.

The buffer knows nothing about what its bytes mean. Pixels are stored
row-major and channel-interleaved, each channel value occupying
``bytes_per_channel`` bytes in native byte order. Numeric access goes
through numpy dtypes whose item size must agree with ``bytes_per_channel``.
"""

from typing import Tuple

import numpy as np

from rgbd_pyramid.errors import InvalidDimension, IndexOutOfRange, TypeMismatch

VALID_BYTES_PER_CHANNEL = (1, 2, 4)


class RawImageBuffer:
    """Generic packed image: width x height x channels x bytes per channel.

    A new buffer is empty until prepare() allocates it. Dimensions are
    read-only afterwards; calling prepare() again is the only way to change
    them.

    Example:
        buf = RawImageBuffer().prepare(640, 480, 1, 2)
        depth_mm = buf.as_array(np.uint16)   # (480, 640) view
    """

    def __init__(self):
        self._width = 0
        self._height = 0
        self._num_channels = 0
        self._bytes_per_channel = 0
        self._data = bytearray()
        self._frozen = False

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def num_channels(self) -> int:
        return self._num_channels

    @property
    def bytes_per_channel(self) -> int:
        return self._bytes_per_channel

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width), numpy order."""
        return (self._height, self._width)

    @property
    def data(self):
        """Backing bytes (bytearray, or bytes once frozen)."""
        return self._data

    @property
    def frozen(self) -> bool:
        return self._frozen

    def is_empty(self) -> bool:
        """True until prepare() has allocated the buffer."""
        return len(self._data) == 0

    @staticmethod
    def compute_size(
        width: int,
        height: int,
        num_channels: int,
        bytes_per_channel: int
    ) -> int:
        """Number of bytes a buffer with this geometry occupies."""
        return width * height * num_channels * bytes_per_channel

    # ------------------------------------------------------------------
    # Allocation
    # ------------------------------------------------------------------
    def prepare(
        self,
        width: int,
        height: int,
        num_channels: int,
        bytes_per_channel: int
    ) -> "RawImageBuffer":
        """
        (Re)allocate the backing buffer to the exact required size.

        The new contents are zero-filled.

        Args:
            width: Image width in pixels (> 0).
            height: Image height in pixels (> 0).
            num_channels: Channels per pixel (> 0).
            bytes_per_channel: 1, 2 or 4.

        Returns:
            self, to allow RawImageBuffer().prepare(...) chaining.

        Raises:
            InvalidDimension: If any dimension is out of range.
        """
        self._check_writeable()
        if width <= 0 or height <= 0 or num_channels <= 0:
            raise InvalidDimension(
                f"Invalid image geometry {width}x{height}x{num_channels}"
            )
        if bytes_per_channel not in VALID_BYTES_PER_CHANNEL:
            raise InvalidDimension(
                f"bytes_per_channel must be one of {VALID_BYTES_PER_CHANNEL}, "
                f"got {bytes_per_channel}"
            )

        size = self.compute_size(width, height, num_channels, bytes_per_channel)
        self._width = int(width)
        self._height = int(height)
        self._num_channels = int(num_channels)
        self._bytes_per_channel = int(bytes_per_channel)
        self._data = bytearray(size)
        return self

    @classmethod
    def from_array(cls, array: np.ndarray) -> "RawImageBuffer":
        """
        Build a buffer holding a copy of a numpy image.

        Args:
            array: (H, W) or (H, W, C) array of 1-, 2- or 4-byte integers
                or float32. Non-native byte order is converted.

        Returns:
            New buffer of the calling class.

        Raises:
            InvalidDimension: If the array is not 2-D/3-D or has a zero axis.
            TypeMismatch: If the dtype is not a 1/2/4-byte number.
        """
        array = np.asarray(array)
        if array.dtype.kind not in "uif" or array.dtype.itemsize not in VALID_BYTES_PER_CHANNEL:
            raise TypeMismatch(f"Cannot store dtype {array.dtype} in an image buffer")
        if array.ndim == 2:
            height, width = array.shape
            num_channels = 1
        elif array.ndim == 3:
            height, width, num_channels = array.shape
        else:
            raise InvalidDimension(f"Expected a 2-D or 3-D array, got shape {array.shape}")

        image = cls()
        image.prepare(width, height, num_channels, array.dtype.itemsize)
        native = np.ascontiguousarray(array, dtype=array.dtype.newbyteorder("="))
        image._data[:] = native.tobytes()
        return image

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------
    def _element_index(self, x: int, y: int, channel: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexOutOfRange(
                f"Pixel ({x}, {y}) outside {self._width}x{self._height} image"
            )
        if not 0 <= channel < self._num_channels:
            raise IndexOutOfRange(
                f"Channel {channel} outside {self._num_channels}-channel image"
            )
        return (y * self._width + x) * self._num_channels + channel

    def _checked_dtype(self, dtype) -> np.dtype:
        dtype = np.dtype(dtype)
        if dtype.kind not in "uif" or dtype.itemsize != self._bytes_per_channel:
            raise TypeMismatch(
                f"Cannot read {dtype} ({dtype.itemsize} bytes) from a buffer "
                f"with {self._bytes_per_channel} bytes per channel"
            )
        return dtype

    def pixel_bytes(self, x: int, y: int, channel: int = 0) -> bytes:
        """Raw bytes of one channel value."""
        offset = self._element_index(x, y, channel) * self._bytes_per_channel
        return bytes(self._data[offset:offset + self._bytes_per_channel])

    def value_at(self, x: int, y: int, channel: int = 0, dtype=np.float32):
        """
        Read one channel value reinterpreted as ``dtype``.

        Raises:
            IndexOutOfRange: If (x, y, channel) is outside the image.
            TypeMismatch: If dtype's size differs from bytes_per_channel.
        """
        dtype = self._checked_dtype(dtype)
        index = self._element_index(x, y, channel)
        return np.frombuffer(self._data, dtype=dtype)[index]

    def set_value(self, x: int, y: int, value, channel: int = 0, dtype=np.float32) -> None:
        """Write one channel value encoded as ``dtype``."""
        self._check_writeable()
        dtype = self._checked_dtype(dtype)
        index = self._element_index(x, y, channel)
        np.frombuffer(self._data, dtype=dtype)[index] = value

    def as_array(self, dtype) -> np.ndarray:
        """
        View the whole buffer as a numpy array of ``dtype``.

        Returns:
            (H, W) view for single-channel images, (H, W, C) otherwise.
            The view is read-only when the buffer is frozen.

        Raises:
            TypeMismatch: If dtype's size differs from bytes_per_channel.
        """
        dtype = self._checked_dtype(dtype)
        flat = np.frombuffer(self._data, dtype=dtype)
        if self._num_channels == 1:
            return flat.reshape(self._height, self._width)
        return flat.reshape(self._height, self._width, self._num_channels)

    # ------------------------------------------------------------------
    # Ownership
    # ------------------------------------------------------------------
    def copy(self) -> "RawImageBuffer":
        """Deep, writeable copy of the same class."""
        clone = type(self)()
        if not self.is_empty():
            clone.prepare(self._width, self._height, self._num_channels, self._bytes_per_channel)
            clone._data[:] = self._data
        return clone

    def freeze(self) -> "RawImageBuffer":
        """Make the buffer immutable; later writes raise ValueError."""
        if not self._frozen:
            self._data = bytes(self._data)
            self._frozen = True
        return self

    def _check_writeable(self) -> None:
        if self._frozen:
            raise ValueError(f"{type(self).__name__} is frozen and cannot be modified")

    def __eq__(self, other) -> bool:
        if not isinstance(other, RawImageBuffer):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self._num_channels == other._num_channels
            and self._bytes_per_channel == other._bytes_per_channel
            and self._data == other._data
        )

    def __hash__(self) -> int:
        # Only frozen contents are stable enough to hash
        if not self._frozen:
            raise TypeError(f"unhashable type: '{type(self).__name__}' (call freeze() first)")
        return hash((
            self._width,
            self._height,
            self._num_channels,
            self._bytes_per_channel,
            self._data,
        ))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(width={self._width}, height={self._height}, "
            f"num_channels={self._num_channels}, bytes_per_channel={self._bytes_per_channel})"
        )


def prepare(
    width: int,
    height: int,
    num_channels: int,
    bytes_per_channel: int
) -> RawImageBuffer:
    """Allocate a new RawImageBuffer with the given geometry."""
    return RawImageBuffer().prepare(width, height, num_channels, bytes_per_channel)
