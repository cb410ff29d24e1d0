"""Logging helpers."""

from .logger import setup_logger, setup_from_settings, get_logger

__all__ = ['setup_logger', 'setup_from_settings', 'get_logger']
