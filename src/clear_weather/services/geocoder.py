"""Geocoding for place search and device-location naming.

Forward lookups turn a search query into candidate places. Reverse lookups
name a coordinate and resolve its timezone. Every failure surfaces as a
LocationError.
"""

import logging
from typing import Any

import httpx

from clear_weather.constants import (
    FORWARD_GEOCODE_LIMIT,
    OWM_GEOCODING_URL,
    OWM_REVERSE_GEOCODING_URL,
    OWM_TIMEZONE_ONLY_EXCLUDE,
    REVERSE_GEOCODE_LIMIT,
    US_STATE_CODES,
)
from clear_weather.exceptions import LocationError, WeatherServiceError, chain_exception
from clear_weather.models.config import WeatherConfig
from clear_weather.models.location import PlaceMatch, ReversePlace
from clear_weather.services.weather_api import WeatherAPIClient


class Geocoder:
    """Client for the OpenWeatherMap Geocoding API.

    Attributes:
        config: Weather API configuration (API key, language, timeout)
        weather_client: One Call client used to look up a coordinate's timezone
        logger: Logger instance for tracking geocoding operations
    """

    GEOCODING_URL = OWM_GEOCODING_URL
    REVERSE_GEOCODING_URL = OWM_REVERSE_GEOCODING_URL

    def __init__(
        self, config: WeatherConfig, weather_client: WeatherAPIClient | None = None
    ) -> None:
        """Initialize the geocoder.

        Args:
            config: Weather API configuration
            weather_client: Client for the timezone lookup; created if omitted
        """
        self.config = config
        self.weather_client = weather_client or WeatherAPIClient(config)
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def format_query(query: str) -> str:
        """Format a place query for the geocoding API.

        The API expects formats like "London" or "London,GB" without spaces
        around commas. A city followed by a US state code ("Smyrna, GA") gets
        the "US" country code appended; country codes ("London, GB") do not.

        Args:
            query: Free text typed by the user

        Returns:
            Formatted query string.
        """
        query = query.strip()
        if "," not in query:
            return query

        parts = [part.strip() for part in query.split(",")]
        if len(parts) == 2 and parts[1] in US_STATE_CODES:
            parts.append("US")
        return ",".join(parts)

    async def forward_lookup(self, query: str) -> list[PlaceMatch]:
        """Find places matching a search query.

        Args:
            query: Place name to search for

        Returns:
            Matching places, best match first (empty for a blank query)

        Raises:
            LocationError: If the request fails or the response is malformed.
        """
        formatted = self.format_query(query)
        if not formatted:
            return []

        results = await self._get(
            self.GEOCODING_URL,
            {"q": formatted, "limit": FORWARD_GEOCODE_LIMIT, "lang": self.config.language},
        )
        try:
            return [
                PlaceMatch(
                    place_name=self._place_name(result),
                    latitude=float(result["lat"]),
                    longitude=float(result["lon"]),
                )
                for result in results
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise chain_exception(
                LocationError("Malformed geocoding response", {"query": formatted}), e
            ) from e

    async def reverse_lookup(self, latitude: float, longitude: float) -> ReversePlace:
        """Name a coordinate and resolve its timezone.

        Args:
            latitude: Latitude
            longitude: Longitude

        Returns:
            Place name and timezone identifier

        Raises:
            LocationError: If no place is found or any request fails.
        """
        results = await self._get(
            self.REVERSE_GEOCODING_URL,
            {"lat": latitude, "lon": longitude, "limit": REVERSE_GEOCODE_LIMIT},
        )
        if not results:
            raise LocationError(
                "No place found for coordinates", {"lat": latitude, "lon": longitude}
            )

        try:
            payload = await self.weather_client.fetch_raw(
                latitude, longitude, {"exclude": OWM_TIMEZONE_ONLY_EXCLUDE}
            )
            timezone_id = str(payload["timezone"])
            place_name = self._place_name(results[0])
        except (WeatherServiceError, KeyError, TypeError) as e:
            self.logger.error(f"Timezone lookup failed for ({latitude}, {longitude}): {e}")
            raise chain_exception(
                LocationError(
                    "Could not resolve timezone for coordinates",
                    {"lat": latitude, "lon": longitude, "error": str(e)}
                ),
                e
            ) from e

        return ReversePlace(place_name=place_name, timezone_id=timezone_id)

    def _place_name(self, result: dict[str, Any]) -> str:
        """Localized place name when available, else the default name."""
        local_names = result.get("local_names") or {}
        return str(local_names.get(self.config.language) or result["name"])

    async def _get(self, url: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        """Perform a geocoding request.

        Raises:
            LocationError: On any HTTP, transport or decoding failure.
        """
        params = {**params, "appid": self.config.api_key}
        try:
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            self.logger.error(f"HTTP error during geocoding: {e}")
            raise chain_exception(
                LocationError(
                    "Geocoding API request failed",
                    {"endpoint": url},
                    status_code=e.response.status_code,
                    response_body=e.response.text
                ),
                e
            ) from e
        except (httpx.TransportError, ValueError) as e:
            self.logger.error(f"Error during geocoding: {e}")
            raise chain_exception(
                LocationError("Geocoding API request failed", {"endpoint": url, "error": str(e)}),
                e
            ) from e

        if not isinstance(data, list):
            raise LocationError(
                "Unexpected geocoding response", {"endpoint": url, "type": type(data).__name__}
            )
        return data
