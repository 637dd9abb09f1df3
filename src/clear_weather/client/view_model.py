"""State container for the forecast viewer.

``WeatherViewModel`` owns the current location, the saved locations, the
unit preference and the one current ``WeatherSnapshot``. Presentation code
subscribes to change notifications and pulls derived values (day window,
chart markers, cursor readout, hourly strip, daily rows) on demand, so
everything derived is recomputed from the latest state every time.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from clear_weather.constants import (
    CHART_AXIS_HOUR_STRIDE,
    SUN_EVENT_ABSENT,
)
from clear_weather.exceptions import (
    ErrorKind,
    LocationError,
    NoDataForWindowError,
    WeatherServiceError,
)
from clear_weather.forecast.chart_sampler import sample_at
from clear_weather.forecast.day_aggregator import DayMarkers, aggregate_day, fallback_point
from clear_weather.forecast.time_formatter import TimeFormatter
from clear_weather.forecast.weather_calculator import (
    display_temperature,
    high_low,
    temperature_range,
    to_display_unit,
)
from clear_weather.forecast.weather_icon_mapper import CLEAR_DAY_ICON, WeatherIconMapper
from clear_weather.forecast.windowing import filter_to_bounds
from clear_weather.models.config import WeatherConfig
from clear_weather.models.location import Location, PlaceMatch, ReversePlace
from clear_weather.models.weather import HourlyPoint, WeatherSnapshot
from clear_weather.services.device_location import DeviceLocation
from clear_weather.utils.settings_store import SettingsStore
from clear_weather.utils.time_utils import (
    DayBounds,
    local_day_bounds,
    same_local_hour,
    to_timestamp,
)

logger = logging.getLogger(__name__)


class WeatherProvider(Protocol):
    """Source of forecast snapshots."""

    async def fetch(
        self, latitude: float, longitude: float, timezone_id: str | None = None
    ) -> WeatherSnapshot:
        """Fetch a snapshot for a coordinate."""
        ...


class PlaceLookup(Protocol):
    """Forward and reverse geocoding."""

    async def forward_lookup(self, query: str) -> list[PlaceMatch]:
        """Find places matching a query."""
        ...

    async def reverse_lookup(self, latitude: float, longitude: float) -> ReversePlace:
        """Name a coordinate and resolve its timezone."""
        ...


class StateChangeCallback:
    """Wrapper for view-model change callbacks."""

    def __init__(self, callback: "Callable[[WeatherViewModel], None]") -> None:
        """Initialize callback wrapper.

        Args:
            callback: Function to call on every state change
        """
        self.callback = callback


@dataclass(frozen=True)
class DayView:
    """Derived values for the local day of the current snapshot.

    ``markers`` is None when no hourly point falls inside the day; ``fallback``
    is then the first unfiltered hourly point, if there is one.
    """

    bounds: DayBounds
    window: list[HourlyPoint]
    markers: DayMarkers | None
    fallback: HourlyPoint | None
    temperature_range: tuple[float, float]
    high: float
    low: float


@dataclass(frozen=True)
class CursorReadout:
    """Chart cursor value at a position within the day."""

    point: HourlyPoint
    time_label: str
    temperature: float


@dataclass(frozen=True)
class HourlyItem:
    """One entry of the hourly strip."""

    timestamp: float
    label: str
    icon: str
    temperature: int
    is_current_hour: bool
    is_sunrise: bool
    is_sunset: bool


@dataclass(frozen=True)
class DailyRow:
    """One row of the multi-day list."""

    timestamp: float
    day_name: str
    icon: str
    low: int
    high: int
    description: str


class WeatherViewModel:
    """Observable state for the forecast viewer.

    Every mutation notifies subscribers. Fetches are not cancelled or
    de-duplicated: whichever completes last owns ``current_weather``.

    Attributes:
        current_location: Location being displayed, if any
        saved_locations: User's saved locations in display order
        current_weather: Latest successful snapshot
        is_loading: True while any fetch is in flight
        last_error: Kind of the most recent failure, cleared by the next fetch
        use_celsius: Display unit preference
    """

    def __init__(
        self,
        provider: WeatherProvider,
        geocoder: PlaceLookup,
        device_location: DeviceLocation,
        store: SettingsStore,
        config: WeatherConfig,
        icon_mapper: WeatherIconMapper | None = None,
    ) -> None:
        """Initialize the view-model with its collaborators.

        Args:
            provider: Weather provider used for fetches
            geocoder: Place search and reverse lookup
            device_location: Single-shot device location source
            store: Persisted settings
            config: Weather configuration (display counts)
            icon_mapper: Icon resolver; a default one is created if omitted
        """
        self.provider = provider
        self.geocoder = geocoder
        self.device_location = device_location
        self.store = store
        self.config = config
        self.icon_mapper = icon_mapper or WeatherIconMapper()

        self.current_location: Location | None = None
        self.saved_locations: list[Location] = []
        self.current_weather: WeatherSnapshot | None = None
        self.is_loading = False
        self.last_error: ErrorKind | None = None
        self.use_celsius = store.use_celsius

        self._callbacks: list[StateChangeCallback] = []
        self._in_flight = 0

    # Subscriptions
    def subscribe(self, callback: "Callable[[WeatherViewModel], None]") -> StateChangeCallback:
        """Register a callback invoked after every state change.

        Args:
            callback: Function receiving this view-model

        Returns:
            Callback wrapper to pass to ``unsubscribe``
        """
        callback_obj = StateChangeCallback(callback)
        self._callbacks.append(callback_obj)
        return callback_obj

    def unsubscribe(self, callback_obj: StateChangeCallback) -> None:
        """Remove a previously registered callback."""
        if callback_obj in self._callbacks:
            self._callbacks.remove(callback_obj)

    def _notify(self) -> None:
        for callback_obj in list(self._callbacks):
            try:
                callback_obj.callback(self)
            except Exception as e:
                logger.error(f"Error in state change callback: {e}")

    # Lifecycle and fetching
    async def load(self) -> None:
        """Load persisted state and fetch the first saved location."""
        self.use_celsius = self.store.ensure_unit_preference()
        self.saved_locations = self.store.load_locations()
        self.current_location = self.saved_locations[0] if self.saved_locations else None
        self._notify()

        if self.current_location is not None:
            await self.fetch_weather(self.current_location)

    async def fetch_weather(self, location: Location) -> None:
        """Fetch the forecast for a location.

        A successful fetch replaces ``current_weather`` wholesale. A failure
        records its kind in ``last_error`` and leaves the previous snapshot
        untouched.

        Args:
            location: Location to fetch
        """
        self._in_flight += 1
        self.is_loading = True
        self.last_error = None
        self._notify()

        try:
            snapshot = await self.provider.fetch(location.latitude, location.longitude)
        except WeatherServiceError as e:
            logger.warning(f"Weather fetch failed for {location.name}: {e}")
            self.last_error = e.kind
        except Exception as e:
            logger.error(f"Unexpected error fetching weather for {location.name}: {e!r}")
            self.last_error = ErrorKind.UNKNOWN
        else:
            self.current_weather = snapshot
        finally:
            self._in_flight -= 1
            self.is_loading = self._in_flight > 0
            self._notify()

    async def refresh(self) -> None:
        """Re-fetch the current location, if there is one."""
        if self.current_location is not None:
            await self.fetch_weather(self.current_location)

    async def toggle_temperature_unit(self) -> None:
        """Flip and persist the unit preference, then re-fetch."""
        self.store.set_use_celsius(not self.use_celsius)
        self.use_celsius = not self.use_celsius
        self._notify()
        await self.refresh()

    def convert_temp(self, celsius: float) -> float:
        """Convert a Celsius value to the current display unit."""
        return to_display_unit(celsius, self.use_celsius)

    # Saved locations
    def _persist_locations(self, locations: list[Location]) -> None:
        """Write a new saved-location list, then adopt it.

        Raises:
            SettingsStoreError: If the write fails; the in-memory list is
                left unchanged.
        """
        self.store.save_locations(locations)
        self.saved_locations = locations

    async def add_location(self, location: Location) -> None:
        """Append a location, make it current and fetch it."""
        self._persist_locations([*self.saved_locations, location])
        self.current_location = location
        self._notify()
        await self.fetch_weather(location)

    async def select_location(self, location: Location) -> None:
        """Make a location current and fetch it."""
        self.current_location = location
        self._notify()
        await self.fetch_weather(location)

    async def delete_location(self, location: Location) -> None:
        """Remove a saved location.

        Deleting the current location moves the selection to the first
        remaining location, or clears it when none remain.
        """
        self._persist_locations([saved for saved in self.saved_locations if saved != location])

        if self.current_location != location:
            self._notify()
            return

        self.current_location = self.saved_locations[0] if self.saved_locations else None
        self._notify()
        if self.current_location is not None:
            await self.fetch_weather(self.current_location)

    def move_location(self, from_index: int, to_index: int) -> None:
        """Move a saved location to a new position.

        Raises:
            IndexError: If ``from_index`` is out of range.
            SettingsStoreError: If the new order cannot be persisted.
        """
        locations = list(self.saved_locations)
        location = locations.pop(from_index)
        locations.insert(to_index, location)
        self._persist_locations(locations)
        self._notify()

    async def search(self, query: str) -> list[Location]:
        """Search for places, returning unsaved location candidates.

        A lookup failure records ``LOCATION_ERROR`` and yields no results.
        """
        try:
            matches = await self.geocoder.forward_lookup(query)
        except LocationError as e:
            logger.warning(f"Location search failed for {query!r}: {e}")
            self.last_error = ErrorKind.LOCATION_ERROR
            self._notify()
            return []
        return [match.to_location() for match in matches]

    async def use_device_location(self) -> Location | None:
        """Add the device's current location.

        Returns:
            The added location, or None when location access is denied or
            the coordinate cannot be named.
        """
        coordinates = await self.device_location.request_once()
        if coordinates is None:
            self.last_error = ErrorKind.LOCATION_ERROR
            self._notify()
            return None

        try:
            place = await self.geocoder.reverse_lookup(coordinates.latitude, coordinates.longitude)
        except LocationError as e:
            logger.warning(f"Reverse lookup failed: {e}")
            self.last_error = ErrorKind.LOCATION_ERROR
            self._notify()
            return None

        location = Location(
            name=place.place_name,
            latitude=coordinates.latitude,
            longitude=coordinates.longitude,
        )
        await self.add_location(location)
        return location

    # Derived values
    def _formatter(self) -> TimeFormatter:
        return TimeFormatter(self.current_weather.timezone_id if self.current_weather else None)

    def day_view(self, now: datetime | float | None = None) -> DayView | None:
        """Compute the local-day window, markers and ranges.

        Args:
            now: Instant whose local day is shown; defaults to the current time

        Returns:
            DayView, or None when there is no snapshot
        """
        snapshot = self.current_weather
        if snapshot is None:
            return None

        bounds = local_day_bounds(snapshot.timezone_id, _now(now))
        window = filter_to_bounds(snapshot.hourly, bounds)

        markers: DayMarkers | None
        try:
            markers = aggregate_day(window, snapshot.current.timestamp)
            fallback = None
        except NoDataForWindowError:
            markers = None
            fallback = fallback_point(snapshot.hourly)

        high, low = high_low(snapshot.hourly, self.use_celsius)
        return DayView(
            bounds=bounds,
            window=window,
            markers=markers,
            fallback=fallback,
            temperature_range=temperature_range(snapshot.hourly, self.use_celsius),
            high=high,
            low=low,
        )

    def sample_cursor(
        self, fraction: float, now: datetime | float | None = None
    ) -> CursorReadout | None:
        """Chart readout at a fraction of the local day.

        Returns:
            CursorReadout, or None without a snapshot or hourly data in the day
        """
        view = self.day_view(now)
        if view is None:
            return None

        try:
            point = sample_at(view.window, fraction, view.bounds.start, view.bounds.end)
        except NoDataForWindowError:
            return None

        return CursorReadout(
            point=point,
            time_label=self._formatter().format_time(point.timestamp),
            temperature=self.convert_temp(point.temperature_celsius),
        )

    def hourly_items(self, now: datetime | float | None = None) -> list[HourlyItem]:
        """Items for the hourly strip, in provider order."""
        snapshot = self.current_weather
        if snapshot is None:
            return []

        formatter = self._formatter()
        current = _now(now)
        sunrise = snapshot.current.sunrise
        sunset = snapshot.current.sunset

        return [
            HourlyItem(
                timestamp=point.timestamp,
                label=formatter.format_hour_label(point.timestamp),
                icon=self.icon_mapper.icon_at(
                    point.primary_condition, point.timestamp, sunrise, sunset
                ),
                temperature=display_temperature(point.temperature_celsius, self.use_celsius),
                is_current_hour=same_local_hour(point.timestamp, current, formatter.tz),
                is_sunrise=_same_hour_as_event(point.timestamp, sunrise, formatter),
                is_sunset=_same_hour_as_event(point.timestamp, sunset, formatter),
            )
            for point in snapshot.hourly[: self.config.hourly_forecast_count]
        ]

    def daily_rows(self, now: datetime | float | None = None) -> list[DailyRow]:
        """Rows for the multi-day list, always using day icons."""
        snapshot = self.current_weather
        if snapshot is None:
            return []

        formatter = self._formatter()
        current = _now(now)
        rows = []
        for day in snapshot.daily[: self.config.daily_display_count]:
            condition = day.primary_condition
            rows.append(
                DailyRow(
                    timestamp=day.timestamp,
                    day_name=formatter.day_name(day.timestamp, current),
                    icon=(
                        self.icon_mapper.resolve_icon(condition, True)
                        if condition
                        else CLEAR_DAY_ICON
                    ),
                    low=display_temperature(day.temp_min, self.use_celsius),
                    high=display_temperature(day.temp_max, self.use_celsius),
                    description=condition.description if condition else "",
                )
            )
        return rows

    @staticmethod
    def axis_labels() -> list[str]:
        """Hour labels for the chart's x-axis."""
        return [
            TimeFormatter.format_axis_hour(hour) for hour in range(0, 24, CHART_AXIS_HOUR_STRIDE)
        ]


def _now(now: datetime | float | None) -> float:
    return time.time() if now is None else to_timestamp(now)


def _same_hour_as_event(timestamp: float, event: float, formatter: TimeFormatter) -> bool:
    if event == SUN_EVENT_ABSENT:
        return False
    return same_local_hour(timestamp, event, formatter.tz)
