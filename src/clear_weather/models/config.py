"""Configuration models for the ClearWeather forecast viewer.

Defines Pydantic models for application configuration including weather API
settings, device location, persisted settings location, and logging.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from clear_weather.constants import (
    DEFAULT_DAILY_DISPLAY_COUNT,
    DEFAULT_HOURLY_DISPLAY_COUNT,
    MAX_DAILY_POINTS,
)


class WeatherConfig(BaseModel):
    """Weather API configuration."""

    api_key: str
    language: str = "en"
    forecast_days: int = MAX_DAILY_POINTS
    hourly_forecast_count: int = DEFAULT_HOURLY_DISPLAY_COUNT
    daily_display_count: int = DEFAULT_DAILY_DISPLAY_COUNT
    timeout_seconds: float = 10.0

    @field_validator("forecast_days", "daily_display_count")
    @classmethod
    def validate_daily_count(cls, v: int) -> int:
        """Validate a daily count against the normalizer's truncation limit.

        Args:
            v: The number of daily entries.

        Returns:
            The validated count.

        Raises:
            ValueError: If the count is less than 1 or greater than 10.
        """
        if v < 1 or v > MAX_DAILY_POINTS:
            raise ValueError(f"Daily counts must be between 1 and {MAX_DAILY_POINTS}")
        return v

    @field_validator("hourly_forecast_count")
    @classmethod
    def validate_hourly_forecast_count(cls, v: int) -> int:
        """Validate the number of hourly forecasts to show.

        Args:
            v: The number of hourly forecasts.

        Returns:
            The validated hourly forecast count.

        Raises:
            ValueError: If the count is less than 1 or greater than 48.
        """
        if v < 1 or v > 48:
            raise ValueError("Hourly forecast count must be between 1 and 48")
        return v

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate the HTTP timeout is positive."""
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v


class DeviceLocationConfig(BaseModel):
    """Device location configuration.

    A disabled device location behaves like a denied location permission.
    """

    enabled: bool = False
    latitude: float | None = None
    longitude: float | None = None


class SettingsConfig(BaseModel):
    """Persisted settings configuration."""

    path: str | None = None  # None means use the default from path_resolver


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str | None = None
    format: str = "json"
    max_size_mb: int = 5
    backup_count: int = 3


class AppConfig(BaseModel):
    """Main application configuration."""

    weather: WeatherConfig
    device_location: DeviceLocationConfig = Field(default_factory=DeviceLocationConfig)
    settings: SettingsConfig = Field(default_factory=SettingsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    debug: bool = False

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "AppConfig":
        """Load configuration from YAML file.

        Args:
            config_path: Path to the YAML configuration file. Can be a string path
                or a Path object.

        Returns:
            An initialized AppConfig object with values from the YAML file.

        Raises:
            FileNotFoundError: If the specified config file doesn't exist.
            yaml.YAMLError: If the YAML file has invalid syntax.
            ValidationError: If the configuration values don't match the expected schema.
        """
        import yaml

        from clear_weather.utils.file_utils import read_text

        config_data = yaml.safe_load(read_text(config_path))

        return cls.model_validate(config_data)
