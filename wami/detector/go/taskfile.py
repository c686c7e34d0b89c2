"""Taskfile (https://taskfile.dev) task extraction."""

import logging
from pathlib import Path
from typing import Optional

import yaml

from wami.types import Command, CommandSource

logger = logging.getLogger(__name__)

TASKFILE_NAMES: tuple[str, ...] = ("Taskfile.yml", "Taskfile.yaml", "taskfile.yml", "taskfile.yaml")

# Structural keys of a task definition; never task names.
RESERVED_KEYS: frozenset[str] = frozenset(
    {"cmds", "desc", "vars", "env", "deps", "generates", "sources", "dir", "silent"}
)


def find_taskfile(project_root: Path) -> Optional[Path]:
    for name in TASKFILE_NAMES:
        candidate = Path(project_root) / name
        if candidate.is_file():
            return candidate
    return None


def parse_taskfile_tasks(content: str) -> list[tuple[str, Optional[str]]]:
    """Return (task name, desc) pairs from a Taskfile document.

    Raises:
        yaml.YAMLError: The document is not valid YAML.
    """
    data = yaml.safe_load(content)
    tasks = data.get("tasks") if isinstance(data, dict) else None
    if not isinstance(tasks, dict):
        return []

    result: list[tuple[str, Optional[str]]] = []
    for name, body in tasks.items():
        name = str(name)
        if name in RESERVED_KEYS:
            continue
        desc = body.get("desc") if isinstance(body, dict) else None
        result.append((name, desc if isinstance(desc, str) and desc else None))
    return result


def taskfile_commands(project_root: Path) -> list[Command]:
    """`task:<name>` commands for the project's Taskfile, if any.

    A malformed Taskfile is logged and contributes nothing.
    """
    path = find_taskfile(project_root)
    if path is None:
        return []

    try:
        tasks = parse_taskfile_tasks(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return []

    return [
        Command(
            name=f"task:{name}",
            command=f"task {name}",
            description=desc or f"Run task {name}",
            source=CommandSource.TASK_RUNNER,
        )
        for name, desc in tasks
    ]
