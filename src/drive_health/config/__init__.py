"""Configuration management for Drive Health."""

from drive_health.config.loader import ConfigurationError, get_config, load_config, reload_config
from drive_health.config.settings import DriveHealthSettings

__all__ = [
    "ConfigurationError",
    "DriveHealthSettings",
    "get_config",
    "load_config",
    "reload_config",
]
