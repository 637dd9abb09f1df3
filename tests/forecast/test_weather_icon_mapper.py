"""Tests for the weather icon mapper."""

import logging
from datetime import datetime

import pytest

from clear_weather.forecast.weather_icon_mapper import (
    CLEAR_DAY_ICON,
    CLEAR_NIGHT_ICON,
    WeatherIconMapper,
)
from clear_weather.models.weather import Condition


def condition(main: str, description: str = "") -> Condition:
    """Build a condition for icon lookups."""
    return Condition(code=0, main_category=main, description=description, icon_hint="")


@pytest.fixture()
def mapper() -> WeatherIconMapper:
    """Create an icon mapper."""
    return WeatherIconMapper()


class TestResolveIcon:
    """Test condition to icon mapping."""

    def test_light_rain_day(self, mapper: WeatherIconMapper) -> None:
        """Test light rain picks the sprinkle icon."""
        assert mapper.resolve_icon(condition("Rain", "light rain"), True) == "wi-day-sprinkle"

    def test_clear_night(self, mapper: WeatherIconMapper) -> None:
        """Test clear sky at night."""
        assert mapper.resolve_icon(condition("Clear"), False) == CLEAR_NIGHT_ICON

    @pytest.mark.parametrize(
        ("main", "description", "is_day", "expected"),
        [
            ("Thunderstorm", "thunderstorm with rain", True, "wi-day-thunderstorm"),
            ("Thunderstorm", "thunderstorm", False, "wi-night-alt-thunderstorm"),
            ("Drizzle", "drizzle", True, "wi-day-sprinkle"),
            ("Rain", "moderate rain", True, "wi-day-rain"),
            ("Rain", "heavy intensity rain", True, "wi-day-rain-wind"),
            ("Rain", "Light Rain", False, "wi-night-alt-sprinkle"),
            ("Snow", "light snow", True, "wi-snow"),
            ("Snow", "Sleet", False, "wi-sleet"),
            ("Mist", "mist", True, "wi-day-fog"),
            ("Haze", "haze", False, "wi-night-fog"),
            ("Clouds", "few clouds", True, "wi-day-cloudy"),
            ("Clouds", "scattered clouds", False, "wi-night-alt-cloudy"),
            ("Clouds", "overcast clouds", True, "wi-cloudy"),
            ("Dust", "dust", True, "wi-dust"),
            ("Sand", "sand", False, "wi-dust"),
            ("Smoke", "smoke", True, "wi-smoke"),
            ("Ash", "volcanic ash", True, "wi-smoke"),
            ("Tornado", "tornado", False, "wi-tornado"),
            ("Squall", "squalls", True, "wi-strong-wind"),
        ],
    )
    def test_taxonomy(
        self, mapper: WeatherIconMapper, main: str, description: str, is_day: bool, expected: str
    ) -> None:
        """Test each taxonomy family."""
        assert mapper.resolve_icon(condition(main, description), is_day) == expected

    def test_case_insensitive_category(self, mapper: WeatherIconMapper) -> None:
        """Test categories match regardless of case."""
        assert mapper.resolve_icon(condition("CLEAR"), True) == CLEAR_DAY_ICON

    @pytest.mark.parametrize(
        ("is_day", "expected"), [(True, CLEAR_DAY_ICON), (False, CLEAR_NIGHT_ICON)]
    )
    def test_unknown_category_falls_back(
        self,
        mapper: WeatherIconMapper,
        caplog: pytest.LogCaptureFixture,
        is_day: bool,
        expected: str,
    ) -> None:
        """Test unmapped categories fall back to clear sky and log a diagnostic."""
        with caplog.at_level(logging.WARNING):
            icon = mapper.resolve_icon(condition("Volcano", "eruption"), is_day)

        assert icon == expected
        assert "Unhandled weather condition: Volcano - eruption" in caplog.text


class TestIsDay:
    """Test day/night classification."""

    def test_between_sun_events(self, mapper: WeatherIconMapper) -> None:
        """Test the half-open sunrise to sunset interval."""
        assert mapper.is_day(100.0, 100.0, 200.0)
        assert mapper.is_day(199.0, 100.0, 200.0)
        assert not mapper.is_day(200.0, 100.0, 200.0)
        assert not mapper.is_day(99.0, 100.0, 200.0)

    @pytest.mark.parametrize(("hour", "expected"), [(5, False), (6, True), (17, True), (18, False)])
    def test_fallback_local_hour(
        self, mapper: WeatherIconMapper, hour: int, expected: bool
    ) -> None:
        """Test the system local hour decides without sun events."""
        at = datetime(2024, 5, 25, hour, 30).timestamp()
        assert mapper.is_day(at) is expected

    def test_zero_sun_events_are_unknown(self, mapper: WeatherIconMapper) -> None:
        """Test the 0 sentinel falls back to the local hour."""
        at = datetime(2024, 5, 25, 12, 0).timestamp()
        assert mapper.is_day(at, 0.0, 0.0) is True

    def test_one_missing_event_uses_fallback(self, mapper: WeatherIconMapper) -> None:
        """Test both events are needed to use them."""
        at = datetime(2024, 5, 25, 22, 0).timestamp()
        assert mapper.is_day(at, at - 10, None) is False


class TestIconAt:
    """Test combined day/night and icon resolution."""

    def test_night_variant(self, mapper: WeatherIconMapper) -> None:
        """Test the instant selects the variant."""
        icon = mapper.icon_at(condition("Rain", "light rain"), 300.0, 100.0, 200.0)
        assert icon == "wi-night-alt-sprinkle"

    def test_missing_condition(self, mapper: WeatherIconMapper) -> None:
        """Test a missing condition shows clear sky."""
        assert mapper.icon_at(None, 150.0, 100.0, 200.0) == CLEAR_DAY_ICON
