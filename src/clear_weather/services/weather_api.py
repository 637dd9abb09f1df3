"""Weather API client for the OpenWeatherMap One Call service.

Fetches the current conditions, hourly and daily forecast for a coordinate
and hands the payload to the normalizer. Provider failures are translated
into the application's error taxonomy here, so nothing above this module
sees httpx exceptions.
"""

import logging
from typing import Any

import httpx

from clear_weather.constants import (
    HTTP_STATUS_FORBIDDEN,
    HTTP_STATUS_UNAUTHORIZED,
    OWM_FORECAST_EXCLUDE,
    OWM_ONECALL_URL,
    OWM_UNITS,
)
from clear_weather.exceptions import (
    APITimeoutError,
    AuthenticationFailedError,
    FetchFailedError,
    InvalidAPIResponseError,
    UnknownWeatherError,
    WeatherServiceError,
    chain_exception,
)
from clear_weather.forecast.normalizer import ForecastNormalizer
from clear_weather.models.config import WeatherConfig
from clear_weather.models.weather import WeatherSnapshot


class WeatherAPIClient:
    """Client for the OpenWeatherMap One Call API.

    Attributes:
        config: Weather API configuration including API key and preferences
        normalizer: Converts raw payloads into snapshots
        logger: Logger instance for tracking API operations
        BASE_URL: One Call API endpoint
    """

    BASE_URL = OWM_ONECALL_URL

    def __init__(
        self, config: WeatherConfig, normalizer: ForecastNormalizer | None = None
    ) -> None:
        """Initialize the API client.

        Args:
            config: Weather API configuration
            normalizer: Snapshot normalizer; a default one is created if omitted
        """
        self.config = config
        self.normalizer = normalizer or ForecastNormalizer(max_daily=config.forecast_days)
        self.logger = logging.getLogger(__name__)

    async def fetch(
        self, latitude: float, longitude: float, timezone_id: str | None = None
    ) -> WeatherSnapshot:
        """Fetch and normalize the forecast for a coordinate.

        Args:
            latitude: Latitude
            longitude: Longitude
            timezone_id: Resolved timezone for the location, if already known

        Returns:
            A new WeatherSnapshot

        Raises:
            AuthenticationFailedError: If the API key is rejected.
            FetchFailedError: For other HTTP, transport or payload problems.
            UnknownWeatherError: For anything else.
        """
        try:
            payload = await self.fetch_raw(
                latitude, longitude, {"exclude": OWM_FORECAST_EXCLUDE, "units": OWM_UNITS}
            )
            snapshot = self.normalizer.normalize(payload, timezone_id)
        except WeatherServiceError:
            raise
        except Exception as e:
            self.logger.error(f"Unexpected error during weather fetch: {e!r}")
            raise chain_exception(
                UnknownWeatherError(
                    "Unexpected error while fetching weather",
                    {"lat": latitude, "lon": longitude, "error": repr(e)}
                ),
                e
            ) from e

        self.logger.info(
            f"Weather data updated for ({latitude}, {longitude}): "
            f"{len(snapshot.hourly)} hourly, {len(snapshot.daily)} daily"
        )
        return snapshot

    async def fetch_raw(
        self, latitude: float, longitude: float, extra_params: dict[str, Any]
    ) -> dict[str, Any]:
        """Perform a One Call request and return the decoded JSON.

        Args:
            latitude: Latitude
            longitude: Longitude
            extra_params: Additional query parameters (exclude, units)

        Returns:
            Decoded response body

        Raises:
            AuthenticationFailedError: On HTTP 401/403.
            APITimeoutError: When the request times out.
            FetchFailedError: On other HTTP status or transport errors.
            InvalidAPIResponseError: When the body is not a JSON object.
        """
        params = {
            "lat": latitude,
            "lon": longitude,
            "appid": self.config.api_key,
            "lang": self.config.language,
            **extra_params,
        }

        try:
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                response = await client.get(self.BASE_URL, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            self.logger.error(f"HTTP error during weather fetch: {e}")
            raise self._status_error(e, latitude, longitude) from e
        except httpx.TimeoutException as e:
            self.logger.error(f"Timeout during weather fetch: {e}")
            raise chain_exception(
                APITimeoutError(
                    "Weather API request timed out",
                    {
                        "endpoint": self.BASE_URL,
                        "lat": latitude,
                        "lon": longitude,
                        "timeout": self.config.timeout_seconds,
                    }
                ),
                e
            ) from e
        except httpx.TransportError as e:
            self.logger.error(f"Network error during weather fetch: {e}")
            raise chain_exception(
                FetchFailedError(
                    "Weather API request failed",
                    {"endpoint": self.BASE_URL, "lat": latitude, "lon": longitude, "error": str(e)}
                ),
                e
            ) from e
        except ValueError as e:
            raise chain_exception(
                InvalidAPIResponseError(
                    "Weather API returned invalid JSON",
                    {"endpoint": self.BASE_URL},
                    status_code=200,
                ),
                e
            ) from e

        if not isinstance(data, dict):
            raise InvalidAPIResponseError(
                "Weather API returned an unexpected payload",
                {"endpoint": self.BASE_URL, "type": type(data).__name__},
                status_code=200,
                response_body=str(data)[:200],
            )
        return data

    def _status_error(
        self, error: httpx.HTTPStatusError, latitude: float, longitude: float
    ) -> WeatherServiceError:
        """Translate an HTTP status error into the error taxonomy."""
        status = error.response.status_code
        if status in (HTTP_STATUS_UNAUTHORIZED, HTTP_STATUS_FORBIDDEN):
            new_error: WeatherServiceError = AuthenticationFailedError(
                "Invalid API key for weather data",
                {
                    "api_key_prefix": self.config.api_key[:8] + "...",
                    "endpoint": self.BASE_URL
                },
                status_code=status,
                response_body=error.response.text
            )
        else:
            new_error = FetchFailedError(
                "Weather API request failed",
                {"endpoint": self.BASE_URL, "lat": latitude, "lon": longitude},
                status_code=status,
                response_body=error.response.text
            )
        new_error.__cause__ = error
        return new_error
