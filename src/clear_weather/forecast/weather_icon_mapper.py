"""Weather icon mapping functionality.

Maps provider weather conditions to Weather Icons font class names, choosing
day or night variants from sunrise/sunset where the icon set has one.
"""

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from clear_weather.constants import DAY_END_HOUR, DAY_START_HOUR, SUN_EVENT_ABSENT

if TYPE_CHECKING:
    from clear_weather.models.weather import Condition

logger = logging.getLogger(__name__)

CLEAR_DAY_ICON = "wi-day-sunny"
CLEAR_NIGHT_ICON = "wi-night-clear"

# Category families, matched against the lower-cased main category
THUNDERSTORM_CATEGORIES = frozenset({"thunderstorm", "thunder"})
DRIZZLE_CATEGORIES = frozenset({"drizzle", "lightrain"})
RAIN_CATEGORIES = frozenset({"rain", "showers"})
SNOW_CATEGORIES = frozenset({"snow", "blizzard", "wintry"})
FOG_CATEGORIES = frozenset({"fog", "mist", "haze", "foggy", "misty", "hazy"})
CLOUD_CATEGORIES = frozenset({"cloudy", "clouds", "overcast", "mostlycloudy", "partlycloudy"})
CLEAR_CATEGORIES = frozenset({"clear", "sunny", "fair", "mostlyclear"})
DUST_CATEGORIES = frozenset({"dust", "sand", "dusty", "sandy"})
SMOKE_CATEGORIES = frozenset({"smoke", "smoky", "ash"})
TORNADO_CATEGORIES = frozenset({"tornado", "waterspout"})
WIND_CATEGORIES = frozenset({"squall", "windy", "blustery"})

PARTLY_CLOUDY_QUALIFIERS = ("few", "scattered", "partly")


def _pick(is_day: bool, day_icon: str, night_icon: str) -> str:
    return day_icon if is_day else night_icon


class WeatherIconMapper:
    """Maps weather conditions to display icons.

    Supports:
    - A fixed taxonomy of provider categories
    - Day/night icon variants
    - Intensity qualifiers for rain and snow taken from the description
    - A clear-sky fallback for unmapped categories
    """

    def is_day(
        self, at: float, sunrise: float | None = None, sunset: float | None = None
    ) -> bool:
        """Check whether an instant is daytime.

        With both sun events known the instant is day when
        ``sunrise <= at < sunset``. Otherwise the system local hour is used:
        06:00 up to 18:00 counts as day, whatever the location's timezone.

        Args:
            at: Instant to classify (epoch seconds)
            sunrise: Sunrise (epoch seconds); None or 0 when unknown
            sunset: Sunset (epoch seconds); None or 0 when unknown

        Returns:
            True for day, False for night
        """
        if _known(sunrise) and _known(sunset):
            return sunrise <= at < sunset  # type: ignore[operator]

        hour = datetime.fromtimestamp(at).hour
        return DAY_START_HOUR <= hour < DAY_END_HOUR

    def resolve_icon(self, condition: "Condition", is_day: bool) -> str:
        """Get the display icon for a condition.

        Args:
            condition: Condition with provider category and description
            is_day: Whether to use the day variant

        Returns:
            Weather Icons class name
        """
        category = condition.main_category.lower()
        description = condition.description.lower()

        if category in THUNDERSTORM_CATEGORIES:
            return _pick(is_day, "wi-day-thunderstorm", "wi-night-alt-thunderstorm")
        if category in DRIZZLE_CATEGORIES:
            return _pick(is_day, "wi-day-sprinkle", "wi-night-alt-sprinkle")
        if category in RAIN_CATEGORIES:
            return self._rain_icon(description, is_day)
        if category in SNOW_CATEGORIES:
            return "wi-sleet" if "sleet" in description else "wi-snow"
        if category in FOG_CATEGORIES:
            return _pick(is_day, "wi-day-fog", "wi-night-fog")
        if category in CLOUD_CATEGORIES:
            if any(word in description for word in PARTLY_CLOUDY_QUALIFIERS):
                return _pick(is_day, "wi-day-cloudy", "wi-night-alt-cloudy")
            return "wi-cloudy"
        if category in CLEAR_CATEGORIES:
            return _pick(is_day, CLEAR_DAY_ICON, CLEAR_NIGHT_ICON)
        if category in DUST_CATEGORIES:
            return "wi-dust"
        if category in SMOKE_CATEGORIES:
            return "wi-smoke"
        if category in TORNADO_CATEGORIES:
            return "wi-tornado"
        if category in WIND_CATEGORIES:
            return "wi-strong-wind"

        logger.warning(
            f"Unhandled weather condition: {condition.main_category} - {condition.description}"
        )
        return _pick(is_day, CLEAR_DAY_ICON, CLEAR_NIGHT_ICON)

    def _rain_icon(self, description: str, is_day: bool) -> str:
        """Rain icon refined by the intensity in the description."""
        if "light" in description:
            return _pick(is_day, "wi-day-sprinkle", "wi-night-alt-sprinkle")
        if "heavy" in description:
            return _pick(is_day, "wi-day-rain-wind", "wi-night-alt-rain")
        return _pick(is_day, "wi-day-rain", "wi-night-alt-rain")

    def icon_at(
        self,
        condition: "Condition | None",
        at: float,
        sunrise: float | None = None,
        sunset: float | None = None,
    ) -> str:
        """Resolve the icon for a condition at a given instant.

        Args:
            condition: Condition to display; None shows clear sky
            at: Instant being displayed (epoch seconds)
            sunrise: Sunrise used for the day/night decision
            sunset: Sunset used for the day/night decision

        Returns:
            Weather Icons class name
        """
        day = self.is_day(at, sunrise, sunset)
        if condition is None:
            return _pick(day, CLEAR_DAY_ICON, CLEAR_NIGHT_ICON)
        return self.resolve_icon(condition, day)


def _known(sun_event: float | None) -> bool:
    """Sun events are unknown when missing or equal to the absent sentinel."""
    return sun_event is not None and sun_event != SUN_EVENT_ABSENT
