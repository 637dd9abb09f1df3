"""Weather data models used throughout the application.

Defines Pydantic models for the normalized forecast: the current observation,
hourly and daily forecast points, and the snapshot that bundles them for one
location. Snapshots are immutable and are replaced wholesale on every
successful fetch.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


class Condition(BaseModel):
    """Weather condition in provider vocabulary.

    ``main_category`` and ``description`` are passed through exactly as the
    provider sent them; matching against them is case-insensitive.
    """

    model_config = ConfigDict(frozen=True)

    code: int
    main_category: str
    description: str
    icon_hint: str


class CurrentObservation(BaseModel):
    """Current conditions at the location."""

    model_config = ConfigDict(frozen=True)

    timestamp: float
    sunrise: float  # 0 when the provider has no sun events
    sunset: float  # 0 when the provider has no sun events
    temperature_celsius: float
    feels_like_celsius: float
    humidity: int  # Percent, 0-100
    uvi: float
    wind_speed_kmh: float
    conditions: tuple[Condition, ...] = ()

    @property
    def observed_at(self) -> datetime:
        """Convert the observation timestamp to an aware UTC datetime.

        Returns:
            A datetime object representing the time of this observation.
        """
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)


class HourlyPoint(BaseModel):
    """Hourly forecast sample."""

    model_config = ConfigDict(frozen=True)

    timestamp: float
    temperature_celsius: float
    conditions: tuple[Condition, ...] = ()

    @property
    def primary_condition(self) -> Condition | None:
        """First condition reported for this hour, if any."""
        return self.conditions[0] if self.conditions else None


class DailyPoint(BaseModel):
    """Daily forecast entry.

    ``temp_min`` and ``temp_max`` are not cross-validated; whatever the
    provider sent is kept.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: float
    temp_min: float
    temp_max: float
    conditions: tuple[Condition, ...] = ()
    sunrise: float
    sunset: float

    @property
    def primary_condition(self) -> Condition | None:
        """First condition reported for this day, if any."""
        return self.conditions[0] if self.conditions else None


class WeatherSnapshot(BaseModel):
    """Complete normalized forecast for one location."""

    model_config = ConfigDict(frozen=True)

    current: CurrentObservation
    hourly: tuple[HourlyPoint, ...]
    daily: tuple[DailyPoint, ...]
    timezone_id: str
    timezone_offset_seconds: int
