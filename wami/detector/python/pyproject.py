"""pyproject.toml parser for Python project name, scripts and dependencies.

Handles the PEP 621 [project] table and the Poetry, PDM and uv tool
sections. Script tables differ per manager; all are normalised to
Command.
"""

import logging
import re
from typing import Any, Iterable, Optional

from wami.fs import dig
from wami.types import Command, CommandSource

logger = logging.getLogger(__name__)

# Leading distribution name of a PEP 508 string: "ruff>=0.1" -> "ruff",
# "pytest[asyncio]" -> "pytest".
_PKG_NAME = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)")

# Keys of a [tool.pdm.scripts] table entry that carry the command.
_PDM_COMMAND_KEYS: tuple[str, ...] = ("cmd", "shell", "call")


def project_name(data: dict[str, Any], package_manager: str) -> Optional[str]:
    """Declared project name, looked up where the manager declares it."""
    candidates: list[Any] = []
    if package_manager == "poetry":
        candidates.append(dig(data, "tool", "poetry", "name"))
    elif package_manager == "pdm":
        candidates.append(dig(data, "tool", "pdm", "name"))
    candidates.append(dig(data, "project", "name"))

    for candidate in candidates:
        if isinstance(candidate, str) and candidate:
            return candidate
    return None


def extract_scripts(data: dict[str, Any], package_manager: str) -> list[Command]:
    """Return the declared scripts for the active package manager."""
    if package_manager == "poetry":
        return _string_table(dig(data, "tool", "poetry", "scripts"))
    if package_manager == "pdm":
        return _pdm_scripts(dig(data, "tool", "pdm", "scripts"))

    scripts = dig(data, "project", "scripts")
    if not isinstance(scripts, dict):
        return []
    if package_manager == "uv":
        return [_script(name, f"uv run {name}") for name in scripts]
    # pip: console scripts land on PATH once the package is installed.
    return [_script(name, name) for name in scripts]


def collect_dependencies(data: dict[str, Any]) -> set[str]:
    """Collect all dependency names from known pyproject.toml layouts."""
    deps: set[str] = set()

    # PEP 621 [project.dependencies]: list of "pkg>=version" strings
    deps.update(extract_dependency_names(dig(data, "project", "dependencies", default=[])))

    # PEP 621 optional deps
    for extra in _dict_values(dig(data, "project", "optional-dependencies")):
        deps.update(extract_dependency_names(extra))

    # PEP 735 [dependency-groups]; non-string entries are include-group tables
    for group in _dict_values(dig(data, "dependency-groups")):
        deps.update(extract_dependency_names(group))

    # Poetry: dicts of {name: version}
    deps.update(extract_dependency_names(dig(data, "tool", "poetry", "dependencies", default={})))
    deps.update(extract_dependency_names(dig(data, "tool", "poetry", "dev-dependencies", default={})))
    for group in _dict_values(dig(data, "tool", "poetry", "group")):
        deps.update(extract_dependency_names(dig(group, "dependencies", default={})))

    # PDM dev groups: {group: ["pkg>=1"]}
    for group in _dict_values(dig(data, "tool", "pdm", "dev-dependencies")):
        deps.update(extract_dependency_names(group))

    # uv dev deps: ["pkg>=1"]
    deps.update(extract_dependency_names(dig(data, "tool", "uv", "dev-dependencies", default=[])))

    deps.discard("python")
    return deps


def extract_dependency_names(dependencies: Any) -> list[str]:
    """Normalise a dependency declaration to lower-case package names.

    Lists hold PEP 508 strings whose version specifiers and extras are
    stripped; mappings (Poetry, Pipfile) use the package name as key.
    """
    if isinstance(dependencies, dict):
        return [str(name).lower() for name in dependencies]
    if not isinstance(dependencies, list):
        return []

    names: list[str] = []
    for dep in dependencies:
        if not isinstance(dep, str):
            continue
        match = _PKG_NAME.match(dep)
        if match:
            names.append(match.group(1).lower())
    return names


def _string_table(table: Any) -> list[Command]:
    if not isinstance(table, dict):
        return []
    return [_script(name, value) for name, value in table.items() if isinstance(value, str)]


def _pdm_scripts(table: Any) -> list[Command]:
    if not isinstance(table, dict):
        return []

    commands: list[Command] = []
    for name, value in table.items():
        # "_" holds settings shared by all scripts, not a script
        if name == "_":
            continue
        if isinstance(value, str):
            commands.append(_script(name, value))
            continue
        if not isinstance(value, dict):
            continue
        command = next((value[k] for k in _PDM_COMMAND_KEYS if isinstance(value.get(k), str)), "")
        if isinstance(value.get("cmd"), list):
            command = " ".join(str(part) for part in value["cmd"])
        elif isinstance(value.get("composite"), list):
            command = " && ".join(str(part) for part in value["composite"])
        if not command:
            logger.debug("Skipping pdm script %r without a command", name)
            continue
        help_text = value.get("help")
        commands.append(
            Command(
                name=name,
                command=command,
                description=help_text if isinstance(help_text, str) else None,
                source=CommandSource.MANIFEST,
            )
        )
    return commands


def _script(name: str, command: str) -> Command:
    return Command(name=name, command=command, source=CommandSource.MANIFEST)


def _dict_values(value: Any) -> Iterable[Any]:
    return value.values() if isinstance(value, dict) else ()
