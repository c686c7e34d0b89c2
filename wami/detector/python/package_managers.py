"""Python package managers: detection, run prefixes and default commands."""

import logging
from pathlib import Path
from typing import Any, Optional

from wami.fs import dig
from wami.types import Command, CommandSource

logger = logging.getLogger(__name__)

# Prefix used to run a command inside the manager's environment.
# pip has none: commands run in whatever environment is active.
RUN_PREFIXES: dict[str, str] = {
    "uv": "uv run",
    "poetry": "poetry run",
    "pdm": "pdm run",
    "pipenv": "pipenv run",
}

# Commands every project of a given manager gets, appended after its
# declared scripts. Tuples are (name, command, description).
DEFAULT_COMMANDS: dict[str, list[tuple[str, str, Optional[str]]]] = {
    "poetry": [
        ("install", "poetry install", "Install dependencies"),
        ("shell", "poetry shell", "Spawn a shell in the virtual environment"),
        ("run", "poetry run python", "Run Python interpreter"),
    ],
    "pdm": [
        ("install", "pdm install", "Install dependencies"),
        ("run", "pdm run", None),
    ],
    "uv": [
        ("sync", "uv sync", "Install and sync dependencies"),
        ("python", "uv run python", "Run Python interpreter"),
    ],
    "pip": [
        ("install", "pip install -e .", "Install package in editable mode"),
    ],
    "pipenv": [
        ("install", "pipenv install", "Install dependencies"),
        ("shell", "pipenv shell", "Spawn a shell in the virtual environment"),
        ("run", "pipenv run", None),
    ],
}

# requirements.txt-only projects get exactly this pair.
REQUIREMENTS_COMMANDS: list[tuple[str, str, Optional[str]]] = [
    ("install", "pip install -r requirements.txt", "Install requirements"),
    ("freeze", "pip freeze > requirements.txt", "Write installed packages to requirements.txt"),
]


def detect_package_manager(project_root: Path, pyproject: Optional[dict[str, Any]] = None) -> str:
    """Pick the package manager for a Python project.

    With a pyproject.toml, first match wins:
    1. [tool.poetry] or poetry.lock -> poetry
    2. [tool.pdm] or pdm.lock       -> pdm
    3. [tool.uv] or uv.lock         -> uv
    4. pip

    Without one, a Pipfile means pipenv, anything else pip.
    """
    root = Path(project_root)

    if pyproject is not None:
        tool = dig(pyproject, "tool", default={})
        if not isinstance(tool, dict):
            tool = {}
        if "poetry" in tool or (root / "poetry.lock").exists():
            return "poetry"
        if "pdm" in tool or (root / "pdm.lock").exists():
            return "pdm"
        if "uv" in tool or (root / "uv.lock").exists():
            return "uv"
        return "pip"

    if (root / "Pipfile").exists():
        return "pipenv"
    return "pip"


def default_commands(package_manager: str) -> list[Command]:
    return _to_commands(DEFAULT_COMMANDS.get(package_manager, []))


def requirements_commands() -> list[Command]:
    return _to_commands(REQUIREMENTS_COMMANDS)


def is_wrapped(command: str, package_manager: str) -> bool:
    """True when `command` already invokes a Python manager.

    A plain substring check; kept as is because existing override files
    rely on it, even though an argument mentioning a manager matches too.
    """
    if package_manager in command:
        return True
    return any(prefix in command for prefix in RUN_PREFIXES.values())


def wrap_command(command: str, package_manager: str) -> str:
    prefix = RUN_PREFIXES.get(package_manager)
    return f"{prefix} {command}" if prefix else command


def _to_commands(entries: list[tuple[str, str, Optional[str]]]) -> list[Command]:
    return [
        Command(name=name, command=command, description=description, source=CommandSource.BUILTIN)
        for name, command, description in entries
    ]
