"""Where ClearWeather looks for its files.

Configuration is searched in the working directory, the user's config
directory, ``/etc`` and finally the source checkout. Settings always live in
the user's config directory unless the configuration names another file.
"""

from pathlib import Path

from clear_weather.constants import APP_DIR_NAME, SETTINGS_FILENAME
from clear_weather.exceptions import ConfigFileNotFoundError

CONFIG_FILENAME = "config.yaml"


class PathResolver:
    """Resolves configuration and settings locations.

    Attributes:
        project_root: Checkout root when running from source
        system_config_dir: ``/etc/clear-weather``
        user_config_dir: ``~/.config/clear-weather``
    """

    def __init__(self) -> None:
        """Initialize the path resolver."""
        self.project_root = self._find_project_root()
        self.system_config_dir = Path("/etc") / APP_DIR_NAME
        self.user_config_dir = Path.home() / ".config" / APP_DIR_NAME

    @staticmethod
    def _find_project_root() -> Path:
        """Parent of the nearest enclosing ``src`` directory.

        Falls back to three levels above this module, which is the checkout
        root for the src layout.
        """
        for parent in Path(__file__).parents:
            if parent.name == "src":
                return parent.parent
        return Path(__file__).parents[2]

    def config_search_paths(self, config_filename: str = CONFIG_FILENAME) -> list[Path]:
        """Candidate configuration files, highest priority first."""
        return [
            directory / config_filename
            for directory in (
                Path.cwd(),
                self.user_config_dir,
                self.system_config_dir,
                self.project_root,
            )
        ]

    def get_config_path(self, config_filename: str = CONFIG_FILENAME) -> Path:
        """First existing configuration candidate.

        Returns:
            The first candidate that exists, otherwise the system path.
        """
        return next(
            (path for path in self.config_search_paths(config_filename) if path.exists()),
            self.system_config_dir / config_filename,
        )

    def get_settings_path(self) -> Path:
        """Default location of the persisted settings file."""
        return self.user_config_dir / SETTINGS_FILENAME

    def normalize_path(self, path: str | Path) -> Path:
        """Turn a string into a Path, expanding ``~``; Paths pass through."""
        return Path(path).expanduser() if isinstance(path, str) else path

    def ensure_dir_exists(self, path: str | Path) -> Path:
        """Create a directory and its parents if missing."""
        dir_path = self.normalize_path(path)
        dir_path.mkdir(parents=True, exist_ok=True)
        return dir_path


path_resolver = PathResolver()


def validate_config_path(config_path: str | Path | None = None) -> Path:
    """Resolve the configuration file for the CLI.

    Args:
        config_path: Explicit path from ``--config``; searched for when None

    Returns:
        Path of an existing configuration file

    Raises:
        ConfigFileNotFoundError: If no configuration file exists. The details
            list every searched location when no explicit path was given.
    """
    if config_path is not None:
        resolved_path = path_resolver.normalize_path(config_path)
        searched: list[str] = []
    else:
        resolved_path = path_resolver.get_config_path()
        searched = [str(path) for path in path_resolver.config_search_paths()]

    if resolved_path.exists():
        return resolved_path

    message = f"Configuration file not found: {resolved_path}"
    if searched:
        message += "\n\nSearched in the following locations:\n"
        message += "\n".join(f"  - {location}" for location in searched)

    raise ConfigFileNotFoundError(
        message,
        {"path": str(resolved_path), "cwd": str(Path.cwd()), "searched_locations": searched or None},
    )
