"""Application-wide constants for the ClearWeather forecast viewer.

This module centralizes the constants used throughout the application so the
normalizer, the windowing helpers, and the API clients agree on the same
values. Constants are grouped into the following categories:
- Path Constants: Application directory and file names
- OpenWeatherMap API: API endpoints and request parameters
- Forecast Constants: Truncation limits and chart layout values
- Time Constants: Day/night fallback hours and clock arithmetic
- Unit Conversion Constants: Factors for converting between measurement units
- Settings Constants: Keys and defaults for the persisted settings file
- Geocoding Constants: US state codes recognized in place queries
"""

# Path constants
APP_DIR_NAME = "clear-weather"  # Directory name for configuration and settings
DEFAULT_CONFIG_PATH = f"/etc/{APP_DIR_NAME}/config.yaml"  # Default config location
SETTINGS_FILENAME = "settings.json"  # Persisted unit preference and saved locations

# OpenWeatherMap API URLs
OWM_ONECALL_URL = "https://api.openweathermap.org/data/3.0/onecall"  # One Call API endpoint
OWM_GEOCODING_URL = "https://api.openweathermap.org/geo/1.0/direct"  # Forward geocoding
OWM_REVERSE_GEOCODING_URL = "https://api.openweathermap.org/geo/1.0/reverse"  # Reverse geocoding
OWM_UNITS = "metric"  # Temperatures are requested in Celsius
OWM_FORECAST_EXCLUDE = "minutely,alerts"  # Blocks not used by the forecast views
OWM_TIMEZONE_ONLY_EXCLUDE = "current,minutely,hourly,daily,alerts"  # Timezone lookup only
FORWARD_GEOCODE_LIMIT = 5  # Maximum search results for a place name query
REVERSE_GEOCODE_LIMIT = 1  # Only the best match is needed for a coordinate
HTTP_STATUS_UNAUTHORIZED = 401
HTTP_STATUS_FORBIDDEN = 403

# Forecast constants
MAX_DAILY_POINTS = 10  # Daily sequence is truncated to this many entries
DEFAULT_HOURLY_DISPLAY_COUNT = 24  # Hourly strip length
DEFAULT_DAILY_DISPLAY_COUNT = 8  # Rows in the multi-day list
CHART_TEMPERATURE_PADDING = 5.0  # Degrees added above and below the chart y-domain
CHART_AXIS_HOUR_STRIDE = 3  # Hours between x-axis labels
SUN_EVENT_ABSENT = 0.0  # Sentinel stored when the provider has no sunrise/sunset

# Time constants
DAY_START_HOUR = 6  # Fallback day/night heuristic: day begins at 06:00
DAY_END_HOUR = 18  # Fallback day/night heuristic: night begins at 18:00
HOURS_PER_HALF_DAY = 12  # 12-hour clock arithmetic

# Unit conversion constants
FAHRENHEIT_OFFSET = 32.0  # Celsius to Fahrenheit offset
MPS_TO_KMH = 3.6  # Metres per second to kilometres per hour
PERCENT_MAX = 100  # Humidity fractions are scaled to this
BYTES_PER_MEGABYTE = 1024 * 1024  # Bytes in a megabyte

# Settings constants
SETTINGS_KEY_USE_CELSIUS = "useCelsius"
SETTINGS_KEY_SAVED_LOCATIONS = "savedLocations"
DEFAULT_USE_CELSIUS = True  # Celsius on first run

# Geocoding constants
US_STATE_CODES = frozenset({
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "DC", "FL", "GA", "HI", "ID", "IL",
    "IN", "IA", "KS", "KY", "LA", "ME", "MD", "MA", "MI", "MN", "MS", "MO", "MT", "NE",
    "NV", "NH", "NJ", "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC", "SD",
    "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY", "PR",
})  # Second query part that gets the "US" country code appended
