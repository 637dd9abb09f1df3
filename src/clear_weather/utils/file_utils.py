"""File helpers for configuration and settings files.

Settings are rewritten on every change, so writes go through a temporary
file in the same directory and are moved into place with ``os.replace``.
A reader sees either the old settings or the new ones, never a mix.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from clear_weather.utils.path_utils import path_resolver

PathLike = str | Path
JsonData = dict[str, Any] | list[Any]


def read_text(file_path: PathLike) -> str:
    """Read a UTF-8 text file.

    Raises:
        OSError: If the file is missing or unreadable.
    """
    return path_resolver.normalize_path(file_path).read_text(encoding="utf-8")


def read_json(file_path: PathLike) -> JsonData:
    """Read and decode a JSON file.

    Args:
        file_path: File to read; ``~`` is expanded

    Returns:
        The decoded object or array

    Raises:
        OSError: If the file is missing or unreadable.
        json.JSONDecodeError: If the content is not valid JSON.
    """
    return json.loads(read_text(file_path))


def file_exists(file_path: PathLike) -> bool:
    """Check that a path exists and is a regular file."""
    return path_resolver.normalize_path(file_path).is_file()


def atomic_write(file_path: PathLike, content: str) -> None:
    """Replace a file's content in one step.

    Parent directories are created as needed. On failure the temporary file
    is removed and the original file is left as it was.

    Args:
        file_path: Destination file
        content: Complete new text content

    Raises:
        OSError: If the directory or file cannot be written.
    """
    target = path_resolver.normalize_path(file_path)
    path_resolver.ensure_dir_exists(target.parent)

    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=target.parent, suffix=target.suffix, delete=False
    ) as tmp:
        temp_path = Path(tmp.name)
        try:
            tmp.write(content)
        except BaseException:
            tmp.close()
            temp_path.unlink(missing_ok=True)
            raise

    try:
        os.replace(temp_path, target)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise


def write_json_atomic(file_path: PathLike, data: JsonData, indent: int = 2) -> None:
    """Serialize ``data`` as JSON and write it with ``atomic_write``.

    Raises:
        TypeError: If ``data`` is not JSON serializable.
        OSError: If the file cannot be written.
    """
    atomic_write(file_path, json.dumps(data, indent=indent))
