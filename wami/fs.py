"""Filesystem probe and manifest readers.

The upward walk checks the start directory first and stops after the
filesystem root. A missing file is a normal negative answer; only the
readers raise, and always as ManifestParseError.
"""

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Optional

from wami.errors import ManifestParseError

logger = logging.getLogger(__name__)


def find_file_upwards(start: Path, filename: str) -> Optional[Path]:
    """Return the nearest directory at or above `start` containing `filename`."""
    for directory in _walk_up(start):
        if (directory / filename).is_file():
            return directory
    return None


def find_all_files_upwards(start: Path, filename: str) -> list[Path]:
    """Return every directory at or above `start` containing `filename`.

    Ordered nearest first.
    """
    return [d for d in _walk_up(start) if (d / filename).is_file()]


def read_json_file(path: Path) -> Any:
    """Read and decode a JSON file."""
    path = Path(path)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ManifestParseError(path, f"invalid JSON: {exc}", exc) from exc
    except OSError as exc:
        raise ManifestParseError(path, f"could not read file: {exc}", exc) from exc


def read_toml_file(path: Path) -> dict[str, Any]:
    """Read and decode a TOML file."""
    path = Path(path)
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ManifestParseError(path, f"invalid TOML: {exc}", exc) from exc
    except OSError as exc:
        raise ManifestParseError(path, f"could not read file: {exc}", exc) from exc


def dig(data: Any, *keys: str, default: Any = None) -> Any:
    """Safely look up a nested key path in a loosely typed manifest tree.

    Returns `default` as soon as a level is missing or is not a mapping.
    """
    current = data
    for key in keys:
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


def _walk_up(start: Path):
    current = Path(start).resolve()
    while True:
        yield current
        if current.parent == current:
            return
        current = current.parent
