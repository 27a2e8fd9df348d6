"""Configuration loading with YAML and environment override support."""

from __future__ import annotations

import os
import threading
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from drive_health.config.settings import DriveHealthSettings, yaml_config_path


class ConfigurationError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


# Thread-safe global config storage
_config: Optional[DriveHealthSettings] = None
_config_path: Optional[str] = None
_config_lock = threading.Lock()


def load_yaml_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML file if specified.

    Args:
        config_path: Path to YAML config file. If None, checks CONFIG_PATH env var.

    Returns:
        Dict of configuration values from YAML, or empty dict if no file.
    """
    path = config_path or os.environ.get("CONFIG_PATH")

    if not path:
        return {}

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except FileNotFoundError:
        raise ConfigurationError(
            f"Configuration file not found: {path}\n"
            "Ensure CONFIG_PATH points to a valid YAML file, or remove it to use environment variables only."
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file {path}: {e}")
    except PermissionError:
        raise ConfigurationError(f"Cannot read configuration file {path}: permission denied")


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[str]:
    """Format Pydantic validation errors into user-friendly messages."""
    messages: List[str] = []
    for error in errors:
        loc = ".".join(str(part) for part in error.get("loc", []))
        msg = error.get("msg", "Invalid value")
        input_val = error.get("input")

        if not loc:
            messages.append(f"Configuration error: {msg}")
        elif input_val is not None and not isinstance(input_val, dict):
            messages.append(f"Configuration error: '{loc}' {msg}, got: {input_val}")
        else:
            messages.append(f"Configuration error: '{loc}' {msg}")

    return messages


def load_config(config_path: Optional[str] = None) -> DriveHealthSettings:
    """Load and validate configuration.

    Configuration is loaded with the following precedence:
    1. Environment variables (highest priority)
    2. .env file
    3. YAML configuration file
    4. Default values (lowest priority)

    Args:
        config_path: Optional path to YAML config file. Falls back to the
            CONFIG_PATH environment variable when not given.

    Returns:
        Validated DriveHealthSettings instance.

    Raises:
        ConfigurationError: If the configuration file cannot be read or the
            resulting settings fail validation.
    """
    global _config, _config_path

    path = config_path or os.environ.get("CONFIG_PATH")

    # Validate YAML file exists and is readable (gives better errors)
    # The actual loading happens in the pydantic settings source
    _ = load_yaml_config(path)

    token = yaml_config_path.set(path)
    try:
        settings = DriveHealthSettings()
    except ValidationError as e:
        raise ConfigurationError("\n".join(format_validation_errors(e.errors()))) from e
    finally:
        yaml_config_path.reset(token)

    with _config_lock:
        _config = settings
        _config_path = config_path
    return settings


def get_config() -> DriveHealthSettings:
    """Get the current configuration.

    Returns:
        Current DriveHealthSettings instance.

    Raises:
        ConfigurationError: If configuration has not been loaded.
    """
    with _config_lock:
        if _config is None:
            raise ConfigurationError("Configuration not loaded. Call load_config() first.")
        return _config


def reload_config() -> DriveHealthSettings:
    """Reload configuration from disk, using the path of the last load.

    Returns:
        New DriveHealthSettings instance.
    """
    global _config
    with _config_lock:
        _config = None
        config_path = _config_path
    return load_config(config_path)
