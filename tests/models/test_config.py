"""Tests for the configuration models.

Tests validate the behavior of Pydantic models in config.py, including:
- Default values
- Validators
- Configuration loading from YAML
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from clear_weather.models.config import (
    AppConfig,
    DeviceLocationConfig,
    LoggingConfig,
    SettingsConfig,
    WeatherConfig,
)


class TestWeatherConfig:
    """Test cases for WeatherConfig model."""

    def test_default_values(self) -> None:
        """Test default values for WeatherConfig."""
        weather_config = WeatherConfig(api_key="test_key")

        assert weather_config.api_key == "test_key"
        assert weather_config.language == "en"
        assert weather_config.forecast_days == 10
        assert weather_config.hourly_forecast_count == 24
        assert weather_config.daily_display_count == 8
        assert weather_config.timeout_seconds == 10.0

    def test_api_key_required(self) -> None:
        """Test that the API key is required."""
        with pytest.raises(ValidationError):
            WeatherConfig()  # type: ignore[call-arg]

    @pytest.mark.parametrize("days", [0, 11])
    def test_forecast_days_validation(self, days: int) -> None:
        """Test forecast_days must be within 1-10."""
        with pytest.raises(ValidationError):
            WeatherConfig(api_key="key", forecast_days=days)

    @pytest.mark.parametrize("count", [0, 11])
    def test_daily_display_count_validation(self, count: int) -> None:
        """Test daily_display_count must be within 1-10."""
        with pytest.raises(ValidationError):
            WeatherConfig(api_key="key", daily_display_count=count)

    @pytest.mark.parametrize("count", [0, 49])
    def test_hourly_forecast_count_validation(self, count: int) -> None:
        """Test hourly_forecast_count must be within 1-48."""
        with pytest.raises(ValidationError):
            WeatherConfig(api_key="key", hourly_forecast_count=count)

    def test_valid_boundaries(self) -> None:
        """Test boundary values are accepted."""
        config = WeatherConfig(
            api_key="key", forecast_days=1, hourly_forecast_count=48, daily_display_count=10
        )
        assert config.forecast_days == 1
        assert config.hourly_forecast_count == 48

    def test_timeout_must_be_positive(self) -> None:
        """Test non-positive timeouts are rejected."""
        with pytest.raises(ValidationError):
            WeatherConfig(api_key="key", timeout_seconds=0)


class TestSectionDefaults:
    """Test defaults of the optional sections."""

    def test_device_location_defaults(self) -> None:
        """Test device location is disabled by default."""
        config = DeviceLocationConfig()
        assert config.enabled is False
        assert config.latitude is None
        assert config.longitude is None

    def test_settings_defaults(self) -> None:
        """Test the settings path defaults to None."""
        assert SettingsConfig().path is None

    def test_logging_defaults(self) -> None:
        """Test logging defaults."""
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.file is None
        assert config.format == "json"
        assert config.max_size_mb == 5
        assert config.backup_count == 3


class TestAppConfig:
    """Test cases for AppConfig."""

    def test_minimal_config(self) -> None:
        """Test only the weather section is required."""
        config = AppConfig.model_validate({"weather": {"api_key": "key"}})
        assert config.device_location.enabled is False
        assert config.settings.path is None
        assert config.debug is False

    def test_from_yaml(self, test_config_path: Path) -> None:
        """Test loading the test configuration file."""
        config = AppConfig.from_yaml(test_config_path)

        assert config.weather.api_key == "test_api_key_12345"
        assert config.weather.timeout_seconds == 5.0
        assert config.device_location.enabled is True
        assert config.device_location.latitude == 33.884
        assert config.logging.format == "text"

    def test_from_yaml_string_path(self, test_config_path: Path) -> None:
        """Test loading from a string path."""
        config = AppConfig.from_yaml(str(test_config_path))
        assert config.weather.language == "en"

    def test_from_yaml_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            AppConfig.from_yaml(tmp_path / "missing.yaml")

    def test_from_yaml_invalid_values(self, tmp_path: Path) -> None:
        """Test invalid values raise a validation error."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({"weather": {"api_key": "k", "forecast_days": 20}}))

        with pytest.raises(ValidationError):
            AppConfig.from_yaml(config_file)
