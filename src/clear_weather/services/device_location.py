"""Single-shot device location requests.

The view-model only needs one coordinate or a "denied" outcome, so a device
location is anything with an async ``request_once``.
"""

import logging
from typing import Protocol

from clear_weather.models.config import DeviceLocationConfig
from clear_weather.models.location import Coordinates

logger = logging.getLogger(__name__)


class DeviceLocation(Protocol):
    """Source of the device's current coordinates."""

    async def request_once(self) -> Coordinates | None:
        """Return the current coordinates, or None when permission is denied."""
        ...


class ConfiguredDeviceLocation:
    """Device location backed by coordinates from the configuration file.

    A disabled configuration, or one without coordinates, is reported as a
    denied permission.
    """

    def __init__(self, config: DeviceLocationConfig) -> None:
        """Initialize from the device location configuration.

        Args:
            config: Device location settings
        """
        self.config = config

    async def request_once(self) -> Coordinates | None:
        """Return the configured coordinates when location access is enabled."""
        if not self.config.enabled:
            logger.info("Location access denied")
            return None

        if self.config.latitude is None or self.config.longitude is None:
            logger.warning("Device location enabled but no coordinates configured")
            return None

        return Coordinates(latitude=self.config.latitude, longitude=self.config.longitude)
