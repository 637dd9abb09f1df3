"""Normalization of raw provider responses.

Turns an OpenWeatherMap One Call payload into a WeatherSnapshot. Only the
fields the forecast views use are kept; temperatures stay in Celsius.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from clear_weather.constants import (
    MAX_DAILY_POINTS,
    MPS_TO_KMH,
    PERCENT_MAX,
    SUN_EVENT_ABSENT,
)
from clear_weather.exceptions import InvalidAPIResponseError, chain_exception
from clear_weather.forecast.weather_icon_mapper import WeatherIconMapper
from clear_weather.models.weather import (
    Condition,
    CurrentObservation,
    DailyPoint,
    HourlyPoint,
    WeatherSnapshot,
)

logger = logging.getLogger(__name__)

RawRecord = Mapping[str, Any]


def scale_humidity(value: float, is_fraction: bool = False) -> int:
    """Express humidity as a 0-100 integer, truncated.

    OpenWeatherMap reports integer percents, so values pass through unless
    ``is_fraction`` says the provider sends 0-1 fractions.
    """
    if is_fraction:
        return int(value * PERCENT_MAX)
    return int(value)


class ForecastNormalizer:
    """Maps raw provider records into the internal snapshot model.

    Attributes:
        icon_mapper: Resolver used to derive each condition's icon hint
        max_daily: Maximum number of daily entries kept
        humidity_as_fraction: Whether raw humidity is a 0-1 fraction
    """

    def __init__(
        self,
        icon_mapper: WeatherIconMapper | None = None,
        max_daily: int = MAX_DAILY_POINTS,
        humidity_as_fraction: bool = False,
    ) -> None:
        """Initialize the normalizer.

        Args:
            icon_mapper: Icon resolver; a default mapper is created if omitted
            max_daily: Daily truncation limit, capped at 10
            humidity_as_fraction: Scale humidity by 100 instead of passing
                percents through
        """
        self.icon_mapper = icon_mapper or WeatherIconMapper()
        self.max_daily = min(max_daily, MAX_DAILY_POINTS)
        self.humidity_as_fraction = humidity_as_fraction

    def normalize(
        self, raw: Mapping[str, Any], timezone_id: str | None = None
    ) -> WeatherSnapshot:
        """Build a snapshot from a raw provider response.

        Args:
            raw: Decoded provider payload
            timezone_id: Resolved timezone for the location; the payload's
                own ``timezone`` is used when omitted

        Returns:
            The normalized snapshot

        Raises:
            InvalidAPIResponseError: If required fields are missing or malformed.
        """
        try:
            daily = [self._daily_point(day) for day in raw.get("daily", [])[: self.max_daily]]
            first_daily = daily[0] if daily else None

            return WeatherSnapshot(
                current=self._current_observation(raw["current"], first_daily),
                hourly=tuple(self._hourly_point(hour) for hour in raw.get("hourly", [])),
                daily=tuple(daily),
                timezone_id=timezone_id or raw["timezone"],
                timezone_offset_seconds=int(raw.get("timezone_offset", 0)),
            )
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            logger.error(f"Malformed provider response: {e!r}")
            raise chain_exception(
                InvalidAPIResponseError(
                    "Invalid API response format",
                    {"error": str(e), "keys": sorted(raw) if isinstance(raw, Mapping) else None},
                    status_code=200,
                ),
                e
            ) from e

    def _conditions(self, records: Sequence[RawRecord] | None) -> tuple[Condition, ...]:
        """Convert provider condition records, deriving an icon hint for each."""
        conditions = []
        for record in records or ():
            icon_code = str(record.get("icon", ""))
            condition = Condition(
                code=int(record.get("id", 0)),
                main_category=str(record["main"]),
                description=str(record.get("description", "")),
                icon_hint="",
            )
            is_day = not icon_code.endswith("n")
            conditions.append(
                condition.model_copy(
                    update={"icon_hint": self.icon_mapper.resolve_icon(condition, is_day)}
                )
            )
        return tuple(conditions)

    def _current_observation(
        self, current: RawRecord | Sequence[RawRecord], first_daily: DailyPoint | None
    ) -> CurrentObservation:
        """Convert the most recent current-conditions record."""
        if isinstance(current, Sequence):
            if not current:
                raise ValueError("No current conditions records")
            current = max(current, key=lambda record: record["dt"])

        return CurrentObservation(
            timestamp=float(current["dt"]),
            sunrise=first_daily.sunrise if first_daily else SUN_EVENT_ABSENT,
            sunset=first_daily.sunset if first_daily else SUN_EVENT_ABSENT,
            temperature_celsius=float(current["temp"]),
            feels_like_celsius=float(current.get("feels_like", current["temp"])),
            humidity=scale_humidity(
                float(current.get("humidity", 0)), self.humidity_as_fraction
            ),
            uvi=float(current.get("uvi", 0.0)),
            wind_speed_kmh=float(current.get("wind_speed", 0.0)) * MPS_TO_KMH,
            conditions=self._conditions(current.get("weather")),
        )

    def _hourly_point(self, hour: RawRecord) -> HourlyPoint:
        """Convert one hourly record."""
        return HourlyPoint(
            timestamp=float(hour["dt"]),
            temperature_celsius=float(hour["temp"]),
            conditions=self._conditions(hour.get("weather")),
        )

    def _daily_point(self, day: RawRecord) -> DailyPoint:
        """Convert one daily record; missing sun events become the 0 sentinel."""
        return DailyPoint(
            timestamp=float(day["dt"]),
            temp_min=float(day["temp"]["min"]),
            temp_max=float(day["temp"]["max"]),
            conditions=self._conditions(day.get("weather")),
            sunrise=float(day.get("sunrise") or SUN_EVENT_ABSENT),
            sunset=float(day.get("sunset") or SUN_EVENT_ABSENT),
        )
