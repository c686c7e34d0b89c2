"""Project-local command overrides (.wami.json / wami.json).

The override file lets a user add commands, replace detected ones and
hide the ones they never run:

    {
      "commands": {
        "test": "pytest -x",
        "serve": {"command": "uvicorn app:app", "description": "Dev server"}
      },
      "ignore": ["freeze"],
      "venv": {"path": ".venv", "activate": true}
    }

Ignore runs before add/replace, so a name can be hidden and re-added in
the same file. The `venv` block is validated and passed through on the
ProjectInfo; nothing acts on it yet.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ValidationError

from wami.errors import ConfigError
from wami.types import Command, CommandSource, ProjectInfo

logger = logging.getLogger(__name__)

CONFIG_FILENAMES: tuple[str, ...] = (".wami.json", "wami.json")

VENV_DIRS: tuple[str, ...] = (".venv", "venv", "env")


class CommandOverride(BaseModel):
    """Object form of an override entry."""

    command: str
    description: Optional[str] = None
    interactive: bool = False


class VenvConfig(BaseModel):
    path: Optional[str] = None
    activate: Optional[bool] = None


class WamiConfig(BaseModel):
    """Schema of the override file. Every field is optional."""

    commands: dict[str, Union[str, CommandOverride]] = {}
    ignore: list[str] = []
    venv: Optional[VenvConfig] = None


def find_config_file(project_root: Path) -> Optional[Path]:
    """Return the first override file present in `project_root`."""
    for filename in CONFIG_FILENAMES:
        candidate = Path(project_root) / filename
        if candidate.is_file():
            return candidate
    return None


def load_config(project_root: Path) -> Optional[WamiConfig]:
    """Load and validate the override file for a project.

    Returns None when there is no override file.

    Raises:
        ConfigError: The file exists but is not valid JSON or does not
            match the schema.
    """
    path = find_config_file(project_root)
    if path is None:
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(path, f"invalid JSON: {exc}", exc) from exc
    except OSError as exc:
        raise ConfigError(path, f"could not read file: {exc}", exc) from exc

    try:
        return WamiConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(path, f"invalid config: {exc}", exc) from exc


def apply_overrides(commands: list[Command], config: Optional[WamiConfig]) -> list[Command]:
    """Apply ignore and add/replace rules and return a new command list.

    Replaced commands keep their position; new ones are appended in
    file order. The input list is not modified.
    """
    if config is None:
        return list(commands)

    ignored = set(config.ignore)
    result = [c for c in commands if c.name not in ignored]

    for name, entry in config.commands.items():
        override = _to_command(name, entry)
        index = next((i for i, c in enumerate(result) if c.name == name), None)
        if index is None:
            result.append(override)
        else:
            result[index] = override

    return result


def apply_project_config(project: ProjectInfo) -> ProjectInfo:
    """Load the project's override file and apply it in place.

    A malformed file is not fatal: the commands are left untouched, a
    warning is logged and the diagnostic is stored on `config_error`.
    """
    try:
        config = load_config(project.root)
    except ConfigError as exc:
        logger.warning("Ignoring override file: %s", exc)
        project.config_error = str(exc)
        return project

    if config is None:
        return project

    project.commands = apply_overrides(project.commands, config)
    if config.venv is not None:
        project.venv_config = config.venv.model_dump(exclude_none=True)
    return project


def detect_venv(project_root: Path) -> Optional[Path]:
    """Return the first conventional virtual-environment directory found."""
    for name in VENV_DIRS:
        candidate = Path(project_root) / name
        if candidate.is_dir():
            return candidate
    return None


def _to_command(name: str, entry: Union[str, CommandOverride]) -> Command:
    if isinstance(entry, str):
        return Command(name=name, command=entry, source=CommandSource.CONFIG)
    return Command(
        name=name,
        command=entry.command,
        description=entry.description,
        interactive=entry.interactive,
        source=CommandSource.CONFIG,
    )
