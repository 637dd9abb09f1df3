"""Common fixtures for testing the ClearWeather forecast viewer."""

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest
import yaml

from clear_weather.forecast.normalizer import ForecastNormalizer
from clear_weather.models.config import AppConfig
from clear_weather.models.weather import Condition, HourlyPoint, WeatherSnapshot
from clear_weather.utils.file_utils import JsonData, read_json

DATA_DIR = Path(__file__).parent / "data"

# 2024-05-25T00:00:00Z, the local day used throughout the fixtures
DAY_START = 1716595200.0
HOUR = 3600.0


@pytest.fixture()
def test_config_path() -> Path:
    """Get the path to the test config file."""
    return DATA_DIR / "test_config.yaml"


@pytest.fixture()
def test_config_data(test_config_path: Path) -> dict[str, Any]:
    """Load test configuration data from YAML."""
    with open(test_config_path) as f:
        return yaml.safe_load(f)


@pytest.fixture()
def app_config(test_config_data: dict[str, Any]) -> AppConfig:
    """Create a test application configuration."""
    return AppConfig.model_validate(test_config_data)


@pytest.fixture()
def mock_onecall_data() -> JsonData:
    """Load the mock One Call response."""
    return read_json(DATA_DIR / "mock_onecall_response.json")


@pytest.fixture()
def snapshot(mock_onecall_data: dict[str, Any]) -> WeatherSnapshot:
    """Snapshot normalized from the mock One Call response."""
    return ForecastNormalizer().normalize(mock_onecall_data)


@pytest.fixture()
def make_point() -> Callable[..., HourlyPoint]:
    """Factory for hourly points at an hour offset from DAY_START."""

    def _make_point(hour: float, temperature: float, category: str = "Clear") -> HourlyPoint:
        return HourlyPoint(
            timestamp=DAY_START + hour * HOUR,
            temperature_celsius=temperature,
            conditions=(
                Condition(
                    code=800,
                    main_category=category,
                    description=category.lower(),
                    icon_hint="wi-day-sunny",
                ),
            ),
        )

    return _make_point


@pytest.fixture()
def mock_httpx_client() -> Generator[AsyncMock, None, None]:
    """Mock httpx.AsyncClient to avoid actual HTTP requests."""
    with patch("httpx.AsyncClient") as mock:
        mock_client = AsyncMock()
        mock.return_value.__aenter__.return_value = mock_client
        mock.return_value.__aexit__.return_value = None
        yield mock_client
