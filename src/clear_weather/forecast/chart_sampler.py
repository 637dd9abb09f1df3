"""Cursor sampling for the interactive temperature chart.

A cursor position is a fraction of the local day. Between two hourly samples
the temperature is interpolated linearly; conditions are never interpolated
and come from the earlier sample.
"""

from collections.abc import Sequence

from clear_weather.exceptions import NoDataForWindowError
from clear_weather.models.weather import HourlyPoint


def fraction_for_position(x: float, width: float) -> float:
    """Convert a horizontal offset within the chart to a day fraction.

    Args:
        x: Cursor offset from the chart's left edge
        width: Chart width in the same units

    Returns:
        Fraction of the day clamped to [0, 1]; 0 for a non-positive width
    """
    if width <= 0:
        return 0.0
    return min(max(x / width, 0.0), 1.0)


def sample_at(
    window: Sequence[HourlyPoint],
    local_fraction: float,
    start_of_day: float,
    end_of_day: float,
) -> HourlyPoint:
    """Sample the window at a fraction of the local day.

    Args:
        window: Hourly points sorted ascending by timestamp
        local_fraction: Position within the day, 0 at start and 1 at end
        start_of_day: Local midnight (epoch seconds)
        end_of_day: Following local midnight (epoch seconds)

    Returns:
        A synthetic point at the target time when two samples bracket it,
        otherwise the window point nearest to the target

    Raises:
        NoDataForWindowError: If the window is empty.
    """
    if not window:
        raise NoDataForWindowError(
            "No hourly data to sample",
            {"start_of_day": start_of_day, "end_of_day": end_of_day},
        )

    target = start_of_day + local_fraction * (end_of_day - start_of_day)

    before = None
    after = None
    for point in window:
        if point.timestamp <= target:
            before = point
        elif after is None:
            after = point

    if before is not None and after is not None:
        factor = (target - before.timestamp) / (after.timestamp - before.timestamp)
        temperature = (
            before.temperature_celsius
            + factor * (after.temperature_celsius - before.temperature_celsius)
        )
        return HourlyPoint(
            timestamp=target,
            temperature_celsius=temperature,
            conditions=before.conditions,
        )

    return min(window, key=lambda point: abs(point.timestamp - target))
