"""Local-day windowing of hourly forecasts.

The provider does not promise any ordering of hourly points, so the window
is always filtered and then sorted here before anything indexes into it.
"""

from collections.abc import Iterable
from datetime import datetime

from clear_weather.models.weather import HourlyPoint
from clear_weather.utils.time_utils import DayBounds, local_day_bounds


def filter_to_bounds(hourly: Iterable[HourlyPoint], bounds: DayBounds) -> list[HourlyPoint]:
    """Keep points inside ``[bounds.start, bounds.end)``, sorted by timestamp.

    The sort is stable, so points sharing a timestamp keep provider order.
    """
    return sorted(
        (point for point in hourly if bounds.contains(point.timestamp)),
        key=lambda point: point.timestamp,
    )


def window_to_local_day(
    hourly: Iterable[HourlyPoint], timezone_id: str | None, now: datetime | float
) -> list[HourlyPoint]:
    """Restrict hourly points to the local calendar day containing ``now``.

    Args:
        hourly: Hourly points in provider order
        timezone_id: Location timezone; unresolvable ids use the system zone
        now: Current instant

    Returns:
        Points within the local day, ascending by timestamp (possibly empty)
    """
    return filter_to_bounds(hourly, local_day_bounds(timezone_id, now))
