"""Persisted user settings.

Stores the temperature unit preference and the ordered list of saved
locations in a single JSON file. Every mutation is written through
immediately; there is no batching and no teardown step.
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from clear_weather.constants import (
    DEFAULT_USE_CELSIUS,
    SETTINGS_KEY_SAVED_LOCATIONS,
    SETTINGS_KEY_USE_CELSIUS,
)
from clear_weather.exceptions import SettingsStoreError, chain_exception
from clear_weather.models.location import Location
from clear_weather.utils import file_utils
from clear_weather.utils.path_utils import path_resolver

logger = logging.getLogger(__name__)


class SettingsStore:
    """Key/value settings persisted to a JSON file.

    Attributes:
        path: Location of the settings file
    """

    def __init__(self, path: str | Path | None = None) -> None:
        """Initialize the store and load whatever is on disk.

        Args:
            path: Settings file location; defaults to the user config directory.
        """
        self.path = (
            path_resolver.normalize_path(path) if path else path_resolver.get_settings_path()
        )
        self._data: dict[str, Any] = self._read()

    def _read(self) -> dict[str, Any]:
        """Read the settings file, returning an empty mapping when unusable."""
        if not file_utils.file_exists(self.path):
            return {}

        try:
            data = file_utils.read_json(self.path)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable settings file {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings file {self.path}: expected an object")
            return {}
        return data

    def _write(self, data: dict[str, Any]) -> None:
        """Write a full settings mapping to disk, then keep it in memory.

        On failure the previous mapping stays current.
        """
        try:
            file_utils.write_json_atomic(self.path, data)
        except OSError as e:
            raise chain_exception(
                SettingsStoreError("Failed to persist settings", {"path": str(self.path)}),
                e
            ) from e
        self._data = data

    @property
    def use_celsius(self) -> bool:
        """Unit preference; Celsius unless the user changed it."""
        value = self._data.get(SETTINGS_KEY_USE_CELSIUS)
        return value if isinstance(value, bool) else DEFAULT_USE_CELSIUS

    def ensure_unit_preference(self) -> bool:
        """Store the default unit preference on first run.

        Returns:
            The effective unit preference.
        """
        if not isinstance(self._data.get(SETTINGS_KEY_USE_CELSIUS), bool):
            self.set_use_celsius(DEFAULT_USE_CELSIUS)
        return self.use_celsius

    def set_use_celsius(self, use_celsius: bool) -> None:
        """Persist the unit preference."""
        self._write({**self._data, SETTINGS_KEY_USE_CELSIUS: use_celsius})

    def load_locations(self) -> list[Location]:
        """Load the saved locations in their stored order.

        A corrupt list is treated as no saved locations, matching a first run.
        """
        raw = self._data.get(SETTINGS_KEY_SAVED_LOCATIONS)
        if raw is None:
            return []

        try:
            return [Location.model_validate(item) for item in raw]
        except (ValidationError, TypeError) as e:
            logger.warning(f"Ignoring invalid saved locations: {e}")
            return []

    def save_locations(self, locations: Iterable[Location]) -> None:
        """Persist the saved locations, preserving order."""
        self._write({
            **self._data,
            SETTINGS_KEY_SAVED_LOCATIONS: [
                location.model_dump(mode="json") for location in locations
            ],
        })
