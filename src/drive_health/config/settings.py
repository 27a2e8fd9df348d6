"""Pydantic settings models for Drive Health configuration."""

from __future__ import annotations

import os
from contextvars import ContextVar
from typing import Any, Dict, Literal, Optional, Tuple, Type

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

# Explicit YAML path for the settings being built; falls back to CONFIG_PATH
yaml_config_path: ContextVar[Optional[str]] = ContextVar("yaml_config_path", default=None)


def resolve_config_path() -> Optional[str]:
    """Return the YAML config path in effect, if any."""
    return yaml_config_path.get() or os.environ.get("CONFIG_PATH")


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that loads values from a YAML file.

    The YAML file path is the one passed to load_config(), or the
    CONFIG_PATH environment variable when none was passed.
    """

    def get_field_value(
        self, field: Any, field_name: str
    ) -> Tuple[Any, str, bool]:
        """Get field value from YAML config."""
        yaml_config = self._load_yaml_config()
        field_value = yaml_config.get(field_name)
        return field_value, field_name, False

    def _load_yaml_config(self) -> Dict[str, Any]:
        """Load YAML configuration file."""
        config_path = resolve_config_path()
        if not config_path:
            return {}

        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)
                return data if isinstance(data, dict) else {}
        except (FileNotFoundError, yaml.YAMLError, PermissionError):
            # Errors will be handled by loader.py
            return {}

    def __call__(self) -> Dict[str, Any]:
        """Return the YAML config values."""
        return self._load_yaml_config()


class DriveHealthSettings(BaseSettings):
    """Drive Health configuration settings.

    Configuration is loaded in the following precedence (highest to lowest):
    1. Environment variables (DRIVE_HEALTH_ prefix)
    2. .env file
    3. YAML configuration file (via CONFIG_PATH)
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="DRIVE_HEALTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format: json (production) or text (development)",
    )

    # Observed threshold settings
    warning_failure_rate: float = Field(
        default=0.10,
        description="Annual failure rate at which an attribute is flagged (critical attributes fail)",
        gt=0.0,
        le=1.0,
    )
    critical_failure_rate: float = Field(
        default=0.20,
        description="Annual failure rate at which a non-critical attribute fails",
        gt=0.0,
        le=1.0,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to set precedence.

        Order (first = highest priority):
        1. init_settings (constructor arguments)
        2. env_settings (environment variables with DRIVE_HEALTH_ prefix)
        3. dotenv_settings (.env file)
        4. yaml_settings (CONFIG_PATH YAML file)
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
        )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL"}
        normalized = v.upper()
        if normalized == "WARN":
            normalized = "WARNING"
        if normalized not in valid_levels:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: DEBUG, INFO, WARNING, ERROR"
            )
        return normalized

    @model_validator(mode="after")
    def validate_failure_rates(self) -> "DriveHealthSettings":
        """Warning rate must not exceed the critical rate."""
        if self.warning_failure_rate > self.critical_failure_rate:
            raise ValueError(
                "warning_failure_rate must be less than or equal to critical_failure_rate"
            )
        return self
