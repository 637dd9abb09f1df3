"""Time and date formatting for forecast views.

Every label is rendered in the location's timezone, not the viewer's.
"""

from datetime import tzinfo

from clear_weather.constants import HOURS_PER_HALF_DAY
from clear_weather.utils.time_utils import local_datetime, resolve_timezone, same_local_date


class TimeFormatter:
    """Formats times and dates for one location.

    Attributes:
        tz: Location timezone, or None for the system local timezone
    """

    def __init__(self, timezone_id: str | None) -> None:
        """Initialize the time formatter.

        Args:
            timezone_id: IANA timezone of the location being displayed
        """
        self.tz: tzinfo | None = resolve_timezone(timezone_id)

    @staticmethod
    def format_axis_hour(hour: int) -> str:
        """Format an hour of day as a chart axis label.

        Args:
            hour: Hour of day, 0-23

        Returns:
            Label such as "12AM", "3AM", "12PM" or "9PM"
        """
        period = "AM" if hour < HOURS_PER_HALF_DAY else "PM"
        display_hour = hour % HOURS_PER_HALF_DAY or HOURS_PER_HALF_DAY
        return f"{display_hour}{period}"

    def format_hour_label(self, timestamp: float) -> str:
        """Short lower-case hour label for the hourly strip (e.g. "9am")."""
        dt = local_datetime(timestamp, self.tz)
        return self.format_axis_hour(dt.hour).lower()

    def format_time(self, timestamp: float) -> str:
        """Time of day for the chart cursor readout.

        Uses AM/PM format without leading zeros (e.g. "9:05 AM").
        """
        dt = local_datetime(timestamp, self.tz)
        hour = dt.hour % HOURS_PER_HALF_DAY or HOURS_PER_HALF_DAY
        period = "AM" if dt.hour < HOURS_PER_HALF_DAY else "PM"
        return f"{hour}:{dt.minute:02d} {period}"

    def day_name(self, timestamp: float, now: float) -> str:
        """Day label for the daily list.

        Args:
            timestamp: Daily entry timestamp
            now: Current instant

        Returns:
            "Today" for the local current date, otherwise the short weekday
        """
        if same_local_date(timestamp, now, self.tz):
            return "Today"
        return local_datetime(timestamp, self.tz).strftime("%a")
