"""Tests for the command line entry point."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
import yaml
from freezegun import freeze_time

from clear_weather.client.main import build_parser, build_view_model, main, run_command
from clear_weather.client.view_model import WeatherViewModel
from clear_weather.exceptions import FetchFailedError
from clear_weather.models.config import AppConfig
from clear_weather.models.location import Location, PlaceMatch
from clear_weather.models.weather import WeatherSnapshot
from clear_weather.services.weather_api import WeatherAPIClient
from clear_weather.utils.settings_store import SettingsStore

OSLO = Location(name="Oslo", latitude=59.91, longitude=10.75)
PARIS = Location(name="Paris", latitude=48.8566, longitude=2.3522)


@pytest.fixture()
def store(tmp_path: Path) -> SettingsStore:
    """Settings store in a temporary directory."""
    return SettingsStore(tmp_path / "settings.json")


@pytest.fixture()
def view_model(
    store: SettingsStore, app_config: AppConfig, snapshot: WeatherSnapshot
) -> WeatherViewModel:
    """View-model with mocked network collaborators."""
    provider = AsyncMock()
    provider.fetch.return_value = snapshot
    return WeatherViewModel(provider, AsyncMock(), AsyncMock(), store, app_config.weather)


def parse(*argv: str):
    """Parse CLI arguments."""
    return build_parser().parse_args(list(argv))


def test_build_view_model(app_config: AppConfig, tmp_path: Path) -> None:
    """Test the real collaborators are wired from configuration."""
    settings = app_config.settings.model_copy(update={"path": str(tmp_path / "settings.json")})
    config = app_config.model_copy(update={"settings": settings})

    view_model = build_view_model(config)

    assert isinstance(view_model.provider, WeatherAPIClient)
    assert view_model.store.path == tmp_path / "settings.json"
    assert view_model.config == config.weather


class TestParser:
    """Test argument parsing."""

    def test_show_defaults(self) -> None:
        """Test show without an index."""
        args = parse("show")
        assert args.command == "show"
        assert args.index is None
        assert args.config is None

    def test_add_options(self) -> None:
        """Test add with a pick."""
        args = parse("--config", "alt.yaml", "add", "Paris", "--pick", "2")
        assert (args.config, args.query, args.pick, args.device) == ("alt.yaml", "Paris", 2, False)

    def test_command_required(self) -> None:
        """Test a command must be given."""
        with pytest.raises(SystemExit):
            parse()

    def test_invalid_unit(self) -> None:
        """Test unknown units are rejected."""
        with pytest.raises(SystemExit):
            parse("units", "kelvin")


class TestRunCommand:
    """Test command execution."""

    @pytest.mark.asyncio()
    async def test_show(
        self,
        view_model: WeatherViewModel,
        store: SettingsStore,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test the forecast for the first location is printed."""
        store.save_locations([OSLO, PARIS])

        with freeze_time("2024-05-25 09:00:00"):
            assert await run_command(view_model, parse("show")) == 0

        out = capsys.readouterr().out
        assert out.startswith("Oslo (UTC)")
        assert out.splitlines()[1].startswith("  observed 2024-")
        assert "H: 20°C  L: 5°C" in out
        assert "Now (9:00 AM): 12.5°C" in out
        assert "Today" in out

    @pytest.mark.asyncio()
    async def test_show_index(
        self, view_model: WeatherViewModel, store: SettingsStore
    ) -> None:
        """Test a saved location is selected by index."""
        store.save_locations([OSLO, PARIS])

        assert await run_command(view_model, parse("show", "1")) == 0
        assert view_model.current_location == PARIS

    @pytest.mark.asyncio()
    async def test_show_bad_index(
        self, view_model: WeatherViewModel, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test an out of range index fails."""
        assert await run_command(view_model, parse("show", "3")) == 1
        assert "No saved location at index 3" in capsys.readouterr().err

    @pytest.mark.asyncio()
    async def test_show_fetch_error(
        self,
        view_model: WeatherViewModel,
        store: SettingsStore,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test a failed fetch reports its kind."""
        store.save_locations([OSLO])
        view_model.provider.fetch.side_effect = FetchFailedError("offline")

        assert await run_command(view_model, parse("show")) == 1

        captured = capsys.readouterr()
        assert "No forecast available" in captured.out
        assert "Error: fetch_failed" in captured.err
        assert "run the command again to retry" in captured.err

    @pytest.mark.asyncio()
    async def test_locations(
        self,
        view_model: WeatherViewModel,
        store: SettingsStore,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test saved locations are listed in order."""
        store.save_locations([OSLO, PARIS])

        assert await run_command(view_model, parse("locations")) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines == ["  0: Oslo (59.9100, 10.7500)", "  1: Paris (48.8566, 2.3522)"]

    @pytest.mark.asyncio()
    async def test_add_from_search(
        self, view_model: WeatherViewModel, store: SettingsStore
    ) -> None:
        """Test the picked search result is saved."""
        view_model.geocoder.forward_lookup.return_value = [
            PlaceMatch(place_name="Paris", latitude=48.8566, longitude=2.3522),
            PlaceMatch(place_name="Paris", latitude=33.6609, longitude=-95.5555),
        ]

        assert await run_command(view_model, parse("add", "Paris", "--pick", "1")) == 0

        saved = SettingsStore(store.path).load_locations()
        assert [(loc.name, loc.latitude) for loc in saved] == [("Paris", 33.6609)]

    @pytest.mark.asyncio()
    async def test_add_no_match(
        self, view_model: WeatherViewModel, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test adding fails when nothing matches."""
        view_model.geocoder.forward_lookup.return_value = []

        assert await run_command(view_model, parse("add", "Nowhere")) == 1
        assert "No matching place" in capsys.readouterr().err

    @pytest.mark.asyncio()
    async def test_add_device_denied(
        self, view_model: WeatherViewModel, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test a denied device location reports a location error."""
        view_model.device_location.request_once.return_value = None

        assert await run_command(view_model, parse("add", "--device")) == 1
        err = capsys.readouterr().err
        assert "Error: location_error" in err
        assert "retry" not in err

    @pytest.mark.asyncio()
    async def test_remove(self, view_model: WeatherViewModel, store: SettingsStore) -> None:
        """Test a saved location is deleted by index."""
        store.save_locations([OSLO, PARIS])

        assert await run_command(view_model, parse("remove", "0")) == 0
        assert SettingsStore(store.path).load_locations() == [PARIS]

    @pytest.mark.asyncio()
    async def test_move(self, view_model: WeatherViewModel, store: SettingsStore) -> None:
        """Test saved locations are reordered."""
        store.save_locations([OSLO, PARIS])

        assert await run_command(view_model, parse("move", "1", "0")) == 0
        assert SettingsStore(store.path).load_locations() == [PARIS, OSLO]

    @pytest.mark.asyncio()
    async def test_move_out_of_range(self, view_model: WeatherViewModel) -> None:
        """Test invalid indexes are rejected."""
        assert await run_command(view_model, parse("move", "0", "5")) == 1

    @pytest.mark.asyncio()
    @pytest.mark.parametrize(
        ("unit", "expected"),
        [(None, True), ("celsius", True), ("fahrenheit", False), ("toggle", False)],
    )
    async def test_units(
        self,
        view_model: WeatherViewModel,
        store: SettingsStore,
        capsys: pytest.CaptureFixture[str],
        unit: str | None,
        expected: bool,
    ) -> None:
        """Test the unit preference is shown and changed."""
        argv = ["units"] if unit is None else ["units", unit]

        assert await run_command(view_model, parse(*argv)) == 0

        assert SettingsStore(store.path).use_celsius is expected
        assert capsys.readouterr().out.strip() == ("celsius" if expected else "fahrenheit")


class TestMain:
    """Test the process entry point."""

    def test_missing_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a missing configuration file exits with an error."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(tmp_path / "missing.yaml"), "locations"])

        assert exc_info.value.code == 1
        assert "CONFIG_ERROR" in capsys.readouterr().err

    def test_invalid_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a configuration without an API key exits with an error."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.safe_dump({"weather": {"language": "en"}}))

        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(config_path), "locations"])

        assert exc_info.value.code == 1
        assert "Invalid configuration file" in capsys.readouterr().err

    def test_add_requires_query(self) -> None:
        """Test add without a query or --device is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            main(["add"])
        assert exc_info.value.code == 2

    def test_runs_command(
        self, tmp_path: Path, test_config_data: dict, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test a command runs against the configured settings file."""
        test_config_data["settings"]["path"] = str(tmp_path / "settings.json")
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.safe_dump(test_config_data))

        with patch("clear_weather.client.main.setup_logging") as mock_setup:
            with pytest.raises(SystemExit) as exc_info:
                main(["--config", str(config_path), "units", "fahrenheit"])

        assert exc_info.value.code == 0
        mock_setup.assert_called_once()
        assert capsys.readouterr().out.strip() == "fahrenheit"
        assert SettingsStore(tmp_path / "settings.json").use_celsius is False
