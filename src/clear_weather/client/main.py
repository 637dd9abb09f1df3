"""Command line entry point for the ClearWeather forecast viewer.

Wires the view-model to the real collaborators (OpenWeatherMap client,
geocoder, configured device location, settings file) and prints the derived
forecast values as plain text.
"""

import argparse
import asyncio
import sys
import time
from pathlib import Path

import yaml
from pydantic import ValidationError

from clear_weather.client.view_model import WeatherViewModel
from clear_weather.constants import DEFAULT_CONFIG_PATH
from clear_weather.exceptions import ConfigFileNotFoundError, SettingsStoreError
from clear_weather.forecast.time_formatter import TimeFormatter
from clear_weather.models.config import AppConfig
from clear_weather.services.device_location import ConfiguredDeviceLocation
from clear_weather.services.geocoder import Geocoder
from clear_weather.services.weather_api import WeatherAPIClient
from clear_weather.utils.early_error_handler import handle_keyboard_interrupt, handle_startup_error
from clear_weather.utils.logging import setup_logging
from clear_weather.utils.path_utils import validate_config_path
from clear_weather.utils.settings_store import SettingsStore


def build_view_model(config: AppConfig) -> WeatherViewModel:
    """Create a view-model backed by the configured services.

    Args:
        config: Application configuration

    Returns:
        A view-model that has not loaded any state yet
    """
    provider = WeatherAPIClient(config.weather)
    return WeatherViewModel(
        provider=provider,
        geocoder=Geocoder(config.weather, provider),
        device_location=ConfiguredDeviceLocation(config.device_location),
        store=SettingsStore(config.settings.path),
        config=config.weather,
    )


def _unit_symbol(view_model: WeatherViewModel) -> str:
    return "°C" if view_model.use_celsius else "°F"


def _report_error(view_model: WeatherViewModel) -> int:
    if view_model.last_error is None:
        return 0
    print(f"Error: {view_model.last_error.value}", file=sys.stderr)
    if view_model.last_error.retryable:
        print("This may be temporary; run the command again to retry", file=sys.stderr)
    return 1


def _print_forecast(view_model: WeatherViewModel) -> None:
    snapshot = view_model.current_weather
    location = view_model.current_location
    if snapshot is None or location is None:
        print("No forecast available")
        return

    unit = _unit_symbol(view_model)
    current = snapshot.current
    condition = current.conditions[0].description if current.conditions else ""
    print(f"{location.name} ({snapshot.timezone_id})")
    print(f"  observed {current.observed_at:%Y-%m-%d %H:%M} UTC")
    print(
        f"  {int(view_model.convert_temp(current.temperature_celsius))}{unit} {condition}"
        f"  feels like {int(view_model.convert_temp(current.feels_like_celsius))}{unit}"
    )
    print(
        f"  humidity {current.humidity}%  uv {current.uvi:g}"
        f"  wind {current.wind_speed_kmh:.0f} km/h"
    )

    day = view_model.day_view()
    if day is not None:
        formatter = TimeFormatter(snapshot.timezone_id)
        print(f"  H: {int(day.high)}{unit}  L: {int(day.low)}{unit}")
        if day.markers is not None:
            low = day.markers.low
            high = day.markers.high
            print(
                f"  Low {int(view_model.convert_temp(low.temperature_celsius))}{unit}"
                f" at {formatter.format_time(low.timestamp)},"
                f" high {int(view_model.convert_temp(high.temperature_celsius))}{unit}"
                f" at {formatter.format_time(high.timestamp)}"
            )
            fraction = (time.time() - day.bounds.start) / day.bounds.duration
            readout = view_model.sample_cursor(min(max(fraction, 0.0), 1.0))
            if readout is not None:
                print(f"  Now ({readout.time_label}): {readout.temperature:.1f}{unit}")
        elif day.fallback is not None:
            print(f"  Next: {int(view_model.convert_temp(day.fallback.temperature_celsius))}{unit}")

    print("\nHourly:")
    for item in view_model.hourly_items():
        flags = "".join(
            marker
            for marker, enabled in (
                (" now", item.is_current_hour),
                (" sunrise", item.is_sunrise),
                (" sunset", item.is_sunset),
            )
            if enabled
        )
        print(f"  {item.label:>5} {item.temperature:>4}{unit} {item.icon}{flags}")

    print("\nDaily:")
    for row in view_model.daily_rows():
        print(
            f"  {row.day_name:<5} {row.low:>4}{unit} / {row.high:>4}{unit}"
            f" {row.icon} {row.description}"
        )


def _print_locations(view_model: WeatherViewModel) -> None:
    if not view_model.saved_locations:
        print("No saved locations")
        return
    for index, location in enumerate(view_model.saved_locations):
        marker = "*" if location == view_model.current_location else " "
        print(
            f"{marker} {index}: {location.name}"
            f" ({location.latitude:.4f}, {location.longitude:.4f})"
        )


async def run_command(view_model: WeatherViewModel, args: argparse.Namespace) -> int:
    """Execute one CLI command against a view-model.

    Args:
        view_model: View-model to operate on
        args: Parsed command line arguments

    Returns:
        Process exit code
    """
    store = view_model.store
    view_model.use_celsius = store.ensure_unit_preference()
    view_model.saved_locations = store.load_locations()

    if args.command == "show":
        if args.index is not None:
            if not 0 <= args.index < len(view_model.saved_locations):
                print(f"No saved location at index {args.index}", file=sys.stderr)
                return 1
            await view_model.select_location(view_model.saved_locations[args.index])
        else:
            await view_model.load()
        _print_forecast(view_model)
        return _report_error(view_model)

    if args.command == "locations":
        _print_locations(view_model)
        return 0

    if args.command == "search":
        candidates = await view_model.search(args.query)
        for index, candidate in enumerate(candidates):
            print(
                f"{index}: {candidate.name}"
                f" ({candidate.latitude:.4f}, {candidate.longitude:.4f})"
            )
        return _report_error(view_model)

    if args.command == "add":
        if args.device:
            added = await view_model.use_device_location()
            if added is None:
                return _report_error(view_model)
        else:
            candidates = await view_model.search(args.query or "")
            if not candidates or not 0 <= args.pick < len(candidates):
                print("No matching place", file=sys.stderr)
                return _report_error(view_model) or 1
            await view_model.add_location(candidates[args.pick])
        _print_forecast(view_model)
        return _report_error(view_model)

    if args.command == "remove":
        if not 0 <= args.index < len(view_model.saved_locations):
            print(f"No saved location at index {args.index}", file=sys.stderr)
            return 1
        await view_model.delete_location(view_model.saved_locations[args.index])
        _print_locations(view_model)
        return 0

    if args.command == "move":
        count = len(view_model.saved_locations)
        if not (0 <= args.source < count and 0 <= args.destination < count):
            print("Location index out of range", file=sys.stderr)
            return 1
        view_model.move_location(args.source, args.destination)
        _print_locations(view_model)
        return 0

    if args.command == "units":
        wanted = {"celsius": True, "fahrenheit": False}.get(args.unit, not view_model.use_celsius)
        if args.unit is not None and wanted != view_model.use_celsius:
            store.set_use_celsius(wanted)
            view_model.use_celsius = wanted
        print("celsius" if view_model.use_celsius else "fahrenheit")
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``clear-weather`` command."""
    parser = argparse.ArgumentParser(description="ClearWeather forecast viewer")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="Show the forecast for a saved location")
    show.add_argument("index", type=int, nargs="?", default=None, help="Saved location index")

    subparsers.add_parser("locations", help="List saved locations")

    search = subparsers.add_parser("search", help="Search for places")
    search.add_argument("query", help="Place name, e.g. 'Smyrna, GA'")

    add = subparsers.add_parser("add", help="Save a location and show its forecast")
    add.add_argument("query", nargs="?", default=None, help="Place to search for")
    add.add_argument("--pick", type=int, default=0, help="Search result to add (default: 0)")
    add.add_argument("--device", action="store_true", help="Add the device location instead")

    remove = subparsers.add_parser("remove", help="Delete a saved location")
    remove.add_argument("index", type=int, help="Saved location index")

    move = subparsers.add_parser("move", help="Reorder saved locations")
    move.add_argument("source", type=int, help="Current index")
    move.add_argument("destination", type=int, help="New index")

    units = subparsers.add_parser("units", help="Show or change the temperature unit")
    units.add_argument(
        "unit", nargs="?", choices=("celsius", "fahrenheit", "toggle"), default=None
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the ``clear-weather`` command.

    Parses command line arguments, loads configuration, sets up logging and
    runs the requested command.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "add" and not args.device and not args.query:
        parser.error("add requires a query or --device")

    try:
        config_path: Path = validate_config_path(args.config)
        config = AppConfig.from_yaml(config_path)
    except ConfigFileNotFoundError as e:
        handle_startup_error("CONFIG_ERROR", e.message, e.details)
        sys.exit(1)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        handle_startup_error("CONFIG_ERROR", "Invalid configuration file", {"error": str(e)})
        sys.exit(1)

    setup_logging(config.logging, "clear_weather")
    view_model = build_view_model(config)

    try:
        exit_code = asyncio.run(run_command(view_model, args))
    except KeyboardInterrupt:
        handle_keyboard_interrupt()
        sys.exit(130)
    except SettingsStoreError as e:
        handle_startup_error("SETTINGS_ERROR", e.message, e.details)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
