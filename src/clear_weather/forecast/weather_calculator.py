"""Temperature conversions and display-range calculations.

Forecast data is stored in Celsius; everything here converts to the user's
display unit at the last moment.
"""

from collections.abc import Sequence

from clear_weather.constants import CHART_TEMPERATURE_PADDING, FAHRENHEIT_OFFSET
from clear_weather.models.weather import HourlyPoint


def to_display_unit(celsius: float, use_celsius: bool) -> float:
    """Convert a Celsius value to the display unit.

    Args:
        celsius: Temperature in degrees Celsius
        use_celsius: True to keep Celsius, False for Fahrenheit

    Returns:
        The temperature in the display unit
    """
    if use_celsius:
        return celsius
    return celsius * 9 / 5 + FAHRENHEIT_OFFSET


def display_temperature(celsius: float, use_celsius: bool) -> int:
    """Whole-degree display value, truncated toward zero."""
    return int(to_display_unit(celsius, use_celsius))


def high_low(hourly: Sequence[HourlyPoint], use_celsius: bool) -> tuple[float, float]:
    """Highest and lowest hourly temperature in the display unit.

    Args:
        hourly: Hourly points, in any order
        use_celsius: Display unit preference

    Returns:
        Tuple of (high, low); (0, 0) when there are no points.
    """
    temps = [to_display_unit(point.temperature_celsius, use_celsius) for point in hourly]
    if not temps:
        return 0.0, 0.0
    return max(temps), min(temps)


def temperature_range(
    hourly: Sequence[HourlyPoint],
    use_celsius: bool,
    padding: float = CHART_TEMPERATURE_PADDING,
) -> tuple[float, float]:
    """Chart y-domain covering every hourly temperature plus padding.

    Args:
        hourly: Hourly points, in any order
        use_celsius: Display unit preference
        padding: Degrees added below the minimum and above the maximum

    Returns:
        Tuple of (minimum, maximum) in the display unit
    """
    high, low = high_low(hourly, use_celsius)
    return low - padding, high + padding
