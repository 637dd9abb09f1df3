"""Module initialization."""

from clear_weather.utils.path_utils import path_resolver
from clear_weather.utils.time_utils import (
    DayBounds,
    local_day_bounds,
    resolve_timezone,
)

__all__ = [
    # Path utilities
    "path_resolver",
    # Time utilities
    "DayBounds",
    "local_day_bounds",
    "resolve_timezone",
]
