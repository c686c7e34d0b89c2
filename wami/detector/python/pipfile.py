"""Pipfile parser: [scripts] plus [packages] / [dev-packages] names."""

from typing import Any

from wami.detector.python.pyproject import extract_dependency_names
from wami.fs import dig
from wami.types import Command, CommandSource


def extract_scripts(data: dict[str, Any]) -> list[Command]:
    scripts = dig(data, "scripts")
    if not isinstance(scripts, dict):
        return []
    return [
        Command(name=name, command=command, source=CommandSource.MANIFEST)
        for name, command in scripts.items()
        if isinstance(command, str)
    ]


def collect_dependencies(data: dict[str, Any]) -> set[str]:
    deps: set[str] = set()
    for section in ("packages", "dev-packages"):
        deps.update(extract_dependency_names(dig(data, section, default={})))
    return deps
