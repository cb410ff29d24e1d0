"""Sensor-specific raw depth decoding into canonical float32 meters.

Supported encodings:
- direct:  already float32 meters, copied through unchanged
- redwood: millimeters (uint8, uint16 or float32)
- tum:     millimeters, readings at or beyond 4 m are dropped
- sun:     16-bit millimeter words rotated left by 3 bits; beyond 7 m dropped
- nyu:     16-bit millimeter words in swapped byte order, sensor border masked out

Millimeter input may be uint8, uint16 or float32. SUN and NYU first bring it
to 16-bit words: fractions are truncated and values clamped to 0..65535.

Every decoder keeps width and height and writes 0.0 for missing data.
"""

from enum import Enum
from typing import Callable, Dict, Optional, Union

import numpy as np

from rgbd_pyramid.config.settings import DepthDecodeConfig
from rgbd_pyramid.errors import InvalidDimension, UnsupportedChannelCount, UnsupportedFormat
from rgbd_pyramid.image.buffer import RawImageBuffer
from rgbd_pyramid.image.canonical import CanonicalDepthImage
from rgbd_pyramid.utils.logger import get_logger

logger = get_logger(__name__)

# Raw dtypes holding millimeter values, keyed by bytes per channel
_MILLIMETER_DTYPES = {1: np.uint8, 2: np.uint16, 4: np.float32}


class DepthFormat(str, Enum):
    """Raw depth encodings understood by decode_depth()."""

    DIRECT = "direct"
    REDWOOD = "redwood"
    TUM = "tum"
    SUN = "sun"
    NYU = "nyu"

    @classmethod
    def parse(cls, value: Union["DepthFormat", str]) -> "DepthFormat":
        """
        Resolve a format identifier.

        Args:
            value: DepthFormat member or its name/value, case-insensitive.

        Raises:
            UnsupportedFormat: For anything else.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise UnsupportedFormat(
            f"Unsupported depth format {value!r}; expected one of "
            f"{[f.value for f in cls]}"
        )


def _millimeters(raw: RawImageBuffer) -> np.ndarray:
    return raw.as_array(_MILLIMETER_DTYPES[raw.bytes_per_channel]).astype(np.float32)


def _millimeter_words(raw: RawImageBuffer) -> np.ndarray:
    # SUN and NYU are defined on 16-bit words; wider inputs are truncated
    # and clamped into that range first
    millimeters = np.nan_to_num(_millimeters(raw), nan=0.0, posinf=0.0, neginf=0.0)
    return np.clip(millimeters, 0, 65535).astype(np.uint16)


def _to_meters(millimeters: np.ndarray, config: DepthDecodeConfig) -> np.ndarray:
    # float32 division, as the datasets' reference tools do
    return millimeters.astype(np.float32, copy=False) / np.float32(config.depth_scale)


def _truncate(depth: np.ndarray, max_depth_m: float) -> np.ndarray:
    depth[depth >= np.float32(max_depth_m)] = 0.0
    return depth


def _decode_direct(raw: RawImageBuffer, config: DepthDecodeConfig) -> np.ndarray:
    return raw.as_array(np.float32).copy()


def _decode_redwood(raw: RawImageBuffer, config: DepthDecodeConfig) -> np.ndarray:
    return _to_meters(_millimeters(raw), config)


def _decode_tum(raw: RawImageBuffer, config: DepthDecodeConfig) -> np.ndarray:
    return _truncate(_to_meters(_millimeters(raw), config), config.tum_max_depth_m)


def _decode_sun(raw: RawImageBuffer, config: DepthDecodeConfig) -> np.ndarray:
    values = _millimeter_words(raw)
    # Firmware stores the value rotated left by 3 bits within the 16-bit word
    rotated = ((values >> np.uint16(3)) | (values << np.uint16(13))).astype(np.uint16)
    return _truncate(_to_meters(rotated, config), config.sun_max_depth_m)


def _decode_nyu(raw: RawImageBuffer, config: DepthDecodeConfig) -> np.ndarray:
    values = _millimeter_words(raw).byteswap()
    depth = _to_meters(values, config)

    height, width = depth.shape
    depth[:config.nyu_border_top, :] = 0.0
    depth[max(height - config.nyu_border_bottom, 0):, :] = 0.0
    depth[:, :config.nyu_border_left] = 0.0
    depth[:, max(width - config.nyu_border_right, 0):] = 0.0
    return depth


_DECODERS: Dict[DepthFormat, Callable[[RawImageBuffer, DepthDecodeConfig], np.ndarray]] = {
    DepthFormat.DIRECT: _decode_direct,
    DepthFormat.REDWOOD: _decode_redwood,
    DepthFormat.TUM: _decode_tum,
    DepthFormat.SUN: _decode_sun,
    DepthFormat.NYU: _decode_nyu,
}


def decode_depth(
    raw: RawImageBuffer,
    format_id: Union[DepthFormat, str],
    config: Optional[DepthDecodeConfig] = None,
) -> CanonicalDepthImage:
    """
    Convert a raw depth buffer into a canonical depth image.

    Args:
        raw: Single-channel raw depth buffer.
        format_id: DepthFormat member or name ("direct", "redwood", "tum",
            "sun", "nyu").
        config: Scale, truncation and border parameters. Defaults to
            DepthDecodeConfig().

    Returns:
        CanonicalDepthImage with the same width and height, in meters.

    Raises:
        UnsupportedFormat: Unknown format_id.
        InvalidDimension: raw has not been allocated.
        UnsupportedChannelCount: raw has more than one channel.
        TypeMismatch: raw's bytes per channel don't fit the format
            (direct needs float32).
    """
    depth_format = DepthFormat.parse(format_id)
    if config is None:
        config = DepthDecodeConfig()

    if raw.is_empty():
        raise InvalidDimension("Cannot decode an empty depth buffer")
    if raw.num_channels != 1:
        raise UnsupportedChannelCount(
            f"Depth must have 1 channel, got {raw.num_channels}"
        )

    depth = _DECODERS[depth_format](raw, config)
    image = CanonicalDepthImage.from_float_array(depth)

    logger.debug(
        f"Decoded {raw.width}x{raw.height} {depth_format.value} depth "
        f"({image.valid_count()}/{raw.width * raw.height} valid)"
    )
    return image


def decode_direct(raw: RawImageBuffer, config: Optional[DepthDecodeConfig] = None) -> CanonicalDepthImage:
    """Identity decode of an already-canonical float32 depth buffer."""
    return decode_depth(raw, DepthFormat.DIRECT, config)


def decode_redwood(raw: RawImageBuffer, config: Optional[DepthDecodeConfig] = None) -> CanonicalDepthImage:
    return decode_depth(raw, DepthFormat.REDWOOD, config)


def decode_tum(raw: RawImageBuffer, config: Optional[DepthDecodeConfig] = None) -> CanonicalDepthImage:
    return decode_depth(raw, DepthFormat.TUM, config)


def decode_sun(raw: RawImageBuffer, config: Optional[DepthDecodeConfig] = None) -> CanonicalDepthImage:
    return decode_depth(raw, DepthFormat.SUN, config)


def decode_nyu(raw: RawImageBuffer, config: Optional[DepthDecodeConfig] = None) -> CanonicalDepthImage:
    return decode_depth(raw, DepthFormat.NYU, config)
