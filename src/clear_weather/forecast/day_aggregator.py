"""Day markers for the temperature chart.

Finds the low, the high and the sample closest to the current observation
within a windowed day.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from clear_weather.exceptions import NoDataForWindowError
from clear_weather.models.weather import HourlyPoint


@dataclass(frozen=True)
class DayMarkers:
    """Static chart markers for one local day."""

    low: HourlyPoint
    high: HourlyPoint
    nearest_to_now: HourlyPoint


def aggregate_day(window: Sequence[HourlyPoint], current_timestamp: float) -> DayMarkers:
    """Derive the low, high and nearest-to-now points of a window.

    Ties go to the earliest point in window order; ``min``/``max`` return the
    first extreme they meet.

    Args:
        window: Sorted hourly points of one local day
        current_timestamp: Timestamp of the current observation

    Returns:
        DayMarkers for the window

    Raises:
        NoDataForWindowError: If the window is empty.
    """
    if not window:
        raise NoDataForWindowError(
            "No hourly data in the local day window",
            {"current_timestamp": current_timestamp},
        )

    return DayMarkers(
        low=min(window, key=lambda point: point.temperature_celsius),
        high=max(window, key=lambda point: point.temperature_celsius),
        nearest_to_now=min(window, key=lambda point: abs(point.timestamp - current_timestamp)),
    )


def fallback_point(hourly: Sequence[HourlyPoint]) -> HourlyPoint | None:
    """Point to show when the window is empty: the first unfiltered sample."""
    return hourly[0] if hourly else None
