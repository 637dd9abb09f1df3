"""Tests for the time formatter."""

import pytest

from clear_weather.forecast.time_formatter import TimeFormatter

DAY_START = 1716595200.0  # Saturday 2024-05-25T00:00:00Z


class TestTimeFormatter:
    """Test time formatting in the location timezone."""

    @pytest.mark.parametrize(
        ("hour", "expected"),
        [(0, "12AM"), (3, "3AM"), (11, "11AM"), (12, "12PM"), (15, "3PM"), (21, "9PM")],
    )
    def test_format_axis_hour(self, hour: int, expected: str) -> None:
        """Test axis labels."""
        assert TimeFormatter.format_axis_hour(hour) == expected

    def test_format_hour_label(self) -> None:
        """Test hourly strip labels are lower case."""
        formatter = TimeFormatter("UTC")
        assert formatter.format_hour_label(DAY_START + 9 * 3600) == "9am"
        assert formatter.format_hour_label(DAY_START) == "12am"

    def test_format_time(self) -> None:
        """Test cursor readout time."""
        formatter = TimeFormatter("UTC")
        assert formatter.format_time(DAY_START + 9 * 3600 + 5 * 60) == "9:05 AM"
        assert formatter.format_time(DAY_START + 12 * 3600) == "12:00 PM"
        assert formatter.format_time(DAY_START + 23 * 3600 + 59 * 60) == "11:59 PM"

    def test_uses_location_timezone(self) -> None:
        """Test times are rendered in the location's zone."""
        formatter = TimeFormatter("America/New_York")
        assert formatter.format_time(DAY_START + 9 * 3600) == "5:00 AM"

    def test_day_name(self) -> None:
        """Test today and weekday names."""
        formatter = TimeFormatter("UTC")
        now = DAY_START + 9 * 3600
        assert formatter.day_name(DAY_START + 12 * 3600, now) == "Today"
        assert formatter.day_name(DAY_START + 36 * 3600, now) == "Sun"

    def test_unknown_timezone_uses_system_zone(self) -> None:
        """Test an unknown zone resolves to the system timezone."""
        assert TimeFormatter("Invalid/Zone").tz is None
