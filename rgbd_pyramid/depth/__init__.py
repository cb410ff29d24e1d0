"""Raw depth decoding for the supported sensor formats."""

from .decoder import (
    DepthFormat,
    decode_depth,
    decode_direct,
    decode_redwood,
    decode_tum,
    decode_sun,
    decode_nyu,
)

__all__ = [
    "DepthFormat",
    "decode_depth",
    "decode_direct",
    "decode_redwood",
    "decode_tum",
    "decode_sun",
    "decode_nyu",
]
