"""Library configuration."""

from .settings import (
    DepthDecodeConfig,
    PyramidConfig,
    LoggingConfig,
    Settings,
    get_settings,
)

__all__ = [
    'DepthDecodeConfig',
    'PyramidConfig',
    'LoggingConfig',
    'Settings',
    'get_settings',
]
