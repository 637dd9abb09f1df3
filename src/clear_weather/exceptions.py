"""Custom exception hierarchy for the ClearWeather application.

This module defines domain-specific exceptions so that provider, geocoding and
windowing failures can be told apart by the view-model without inspecting
library-specific errors.

Exception Hierarchy:
    ClearWeatherError (Base)
    ├── ConfigurationError
    │   └── ConfigFileNotFoundError
    ├── WeatherServiceError
    │   ├── AuthenticationFailedError
    │   ├── FetchFailedError
    │   │   ├── APITimeoutError
    │   │   └── InvalidAPIResponseError
    │   ├── LocationError
    │   └── UnknownWeatherError
    ├── NoDataForWindowError
    └── SettingsStoreError
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """User-facing error categories published by the view-model."""

    AUTHENTICATION_FAILED = "authentication_failed"
    FETCH_FAILED = "fetch_failed"
    LOCATION_ERROR = "location_error"
    NO_DATA_FOR_WINDOW = "no_data_for_window"
    UNKNOWN = "unknown"

    @property
    def retryable(self) -> bool:
        """Whether pull-to-refresh is expected to fix the problem."""
        return self is ErrorKind.FETCH_FAILED


# Base Exception
class ClearWeatherError(Exception):
    """Base exception for all ClearWeather errors.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary containing additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize the exception with message and optional details.

        Args:
            message: Human-readable error description
            details: Optional dictionary containing additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


# Configuration Exceptions
class ConfigurationError(ClearWeatherError):
    """Base exception for configuration-related errors."""
    pass


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when configuration file cannot be found."""
    pass


# Weather service Exceptions
class WeatherServiceError(ClearWeatherError):
    """Base exception for weather provider and geocoder failures."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
        response_body: str | None = None
    ) -> None:
        """Initialize service exception with additional context.

        Args:
            message: Human-readable error description
            details: Optional dictionary containing additional error context
            status_code: HTTP status code if applicable
            response_body: Raw response body for debugging
        """
        super().__init__(message, details)
        self.status_code = status_code
        self.response_body = response_body


class AuthenticationFailedError(WeatherServiceError):
    """Raised when the provider rejects the configured credentials.

    Not retried automatically.

    Example:
        raise AuthenticationFailedError(
            "Invalid API key for weather data",
            {"api_key_prefix": "abc123...", "endpoint": "/data/3.0/onecall"},
            status_code=401
        )
    """

    kind = ErrorKind.AUTHENTICATION_FAILED


class FetchFailedError(WeatherServiceError):
    """Raised for transient network or data problems; safe to retry."""

    kind = ErrorKind.FETCH_FAILED


class APITimeoutError(FetchFailedError):
    """Raised when a provider request times out.

    Example:
        raise APITimeoutError(
            "Weather API request timed out",
            {"endpoint": "/data/3.0/onecall", "timeout": 10.0}
        )
    """
    pass


class InvalidAPIResponseError(FetchFailedError):
    """Raised when the provider returns a malformed payload.

    Example:
        raise InvalidAPIResponseError(
            "Invalid API response format",
            {"missing": "current"},
            status_code=200
        )
    """
    pass


class LocationError(WeatherServiceError):
    """Raised when geocoding fails or device location is unavailable."""

    kind = ErrorKind.LOCATION_ERROR


class UnknownWeatherError(WeatherServiceError):
    """Catch-all for failures that match no other category."""

    kind = ErrorKind.UNKNOWN


class NoDataForWindowError(ClearWeatherError):
    """Raised when a local-day window contains no hourly points.

    Internal signal; callers substitute a fallback or omit the element.
    """

    kind = ErrorKind.NO_DATA_FOR_WINDOW


class SettingsStoreError(ClearWeatherError):
    """Raised when persisted settings cannot be written."""
    pass


# Utility function for exception chaining
def chain_exception(new_exception: ClearWeatherError, cause: Exception) -> ClearWeatherError:
    """Chain a new exception with its underlying cause.

    Args:
        new_exception: The new domain-specific exception to raise
        cause: The underlying exception that caused this error

    Returns:
        The new exception with cause properly chained

    Example:
        try:
            response = await client.get(url)
        except httpx.TransportError as e:
            raise chain_exception(
                FetchFailedError("Failed to fetch weather", {"url": url}),
                e
            ) from e
    """
    new_exception.__cause__ = cause
    return new_exception
