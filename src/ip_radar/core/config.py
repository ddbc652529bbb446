"""
Configuration management for IP Radar.

Uses Pydantic Settings for environment variable validation and type safety.
Notification settings (sender, recipient, relay) are operator-editable and
live in the JSON settings file instead, see ip_radar.settings_store.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="IP_RADAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    config_file: str = Field(
        default="config.json",
        description="Path to the notification settings file"
    )
    poll_interval_seconds: int = Field(
        default=600,
        ge=1,
        description="Seconds between interface scans"
    )
    console_host: str = Field(
        default="0.0.0.0",
        description="Bind address of the configuration console"
    )
    console_port: int = Field(
        default=8087,
        ge=1,
        le=65535,
        description="Port of the configuration console"
    )
    smtp_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Socket timeout for a single mail delivery attempt"
    )
    retry_attempts: int = Field(
        default=3,
        ge=1,
        description="Total delivery attempts per notification"
    )
    retry_delay_seconds: float = Field(
        default=2.0,
        ge=0.0,
        description="Pause between delivery attempts"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v


# Global config instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the global configuration instance.

    Lazily loads configuration on first access.

    Returns:
        AppConfig: The global configuration instance
    """
    global _config
    if _config is None:
        _config = AppConfig()
    return _config


def reload_config() -> AppConfig:
    """
    Reload configuration from environment variables.

    Useful for testing or when environment changes.

    Returns:
        AppConfig: The reloaded configuration instance
    """
    global _config
    _config = None
    return get_config()
