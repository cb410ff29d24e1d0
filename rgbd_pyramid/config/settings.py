"""Configuration management for rgbd_pyramid."""

import os
import yaml
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, validator
from dotenv import load_dotenv

CONFIG_PATH_ENV = "RGBD_PYRAMID_CONFIG"
LOG_LEVEL_ENV = "RGBD_PYRAMID_LOG_LEVEL"


class DepthDecodeConfig(BaseModel):
    """Depth decoding parameters shared by all sensor formats."""
    depth_scale: float = Field(default=1000.0, gt=0.0)
    tum_max_depth_m: float = Field(default=4.0, gt=0.0)
    sun_max_depth_m: float = Field(default=7.0, gt=0.0)
    # NYU Depth V2 projection mask: rows 45..471, cols 41..601 (1-based) of 480x640
    nyu_border_top: int = Field(default=44, ge=0)
    nyu_border_bottom: int = Field(default=9, ge=0)
    nyu_border_left: int = Field(default=40, ge=0)
    nyu_border_right: int = Field(default=39, ge=0)


class PyramidConfig(BaseModel):
    """Pyramid construction defaults."""
    levels: int = Field(default=4, ge=1, le=16)
    filter_before_downsample: bool = Field(default=True)
    filter_type: str = Field(default="gaussian3")
    filter_depth: bool = Field(default=False)

    @validator('filter_type')
    def validate_filter_type(cls, v):
        """Validate filter kernel name."""
        allowed = ['gaussian3', 'gaussian5', 'gaussian7']
        v = v.lower()
        if v not in allowed:
            raise ValueError(f"filter_type must be one of {allowed}")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default="INFO")
    console_colors: bool = Field(default=True)
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    @validator('level')
    def validate_level(cls, v):
        """Validate logging level."""
        allowed = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v = v.upper()
        if v not in allowed:
            raise ValueError(f"level must be one of {allowed}")
        return v


class Settings(BaseModel):
    """Top-level library settings."""
    depth: DepthDecodeConfig = Field(default_factory=DepthDecodeConfig)
    pyramid: PyramidConfig = Field(default_factory=PyramidConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """
        Load settings from YAML file and environment variables.

        Environment (a .env file is read first):
            RGBD_PYRAMID_CONFIG: config file used when config_path is None.
            RGBD_PYRAMID_LOG_LEVEL: overrides logging.level from the file.

        Args:
            config_path: Path to config.yaml file. If None, uses
                $RGBD_PYRAMID_CONFIG, then config/config.yaml next to the
                package.

        Returns:
            Settings instance with loaded configuration.
        """
        load_dotenv()

        if config_path is None:
            config_path = os.getenv(CONFIG_PATH_ENV)
        if config_path is None:
            project_root = Path(__file__).parent.parent.parent
            config_path = project_root / "config" / "config.yaml"

        config_path = Path(config_path)
        if config_path.exists():
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f) or {}
        else:
            # Use defaults if no config file found
            config_data = {}

        log_level = os.getenv(LOG_LEVEL_ENV)
        if log_level:
            config_data['logging'] = dict(config_data.get('logging') or {}, level=log_level)

        return cls(**config_data)


# Singleton instance
_settings: Optional[Settings] = None


def get_settings(config_path: Optional[Path] = None, reload: bool = False) -> Settings:
    """
    Get library settings (singleton pattern).

    Args:
        config_path: Path to config.yaml file. Only used on first call or when reload=True.
        reload: Force reload of settings.

    Returns:
        Settings instance.
    """
    global _settings

    if _settings is None or reload:
        _settings = Settings.load(config_path)

    return _settings
