"""Task runners configured inside pyproject.toml.

Each runner parser checks for its own [tool.*] table and turns the tasks
it finds into namespaced commands ("poe:lint") so they never collide
with the manifest's own script names.

To add a runner: subclass TaskParser and register it in
build_task_runner_registry().
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

from wami.fs import dig
from wami.types import Command, CommandSource

logger = logging.getLogger(__name__)


class TaskParser(ABC):
    """Abstract base class for task-runner parsers."""

    #: Task runner name, e.g. "poethepoet"
    name: str = ""

    #: Namespace prefix of produced command names
    prefix: str = ""

    #: Executable that runs a task by name
    executable: str = ""

    @abstractmethod
    def tasks_table(self, data: dict[str, Any]) -> Any:
        """Return the raw tasks table from the manifest, or None."""
        ...

    def is_configured(self, data: dict[str, Any]) -> bool:
        tasks = self.tasks_table(data)
        return isinstance(tasks, dict) and bool(tasks)

    def parse(self, data: dict[str, Any]) -> list[Command]:
        if not self.is_configured(data):
            return []

        commands: list[Command] = []
        for task_name, task in self.tasks_table(data).items():
            if task_name.startswith("_"):
                continue
            resolved = resolve_task(task)
            if resolved is None:
                logger.debug("Skipping %s task %r with no command", self.name, task_name)
                continue
            _, help_text = resolved
            commands.append(
                Command(
                    name=f"{self.prefix}:{task_name}",
                    command=f"{self.executable} {task_name}",
                    description=help_text or f"Run {self.prefix} task: {task_name}",
                    source=CommandSource.TASK_RUNNER,
                )
            )
        return commands


class PoeTaskParser(TaskParser):
    """poethepoet: [tool.poe.tasks]"""

    name = "poethepoet"
    prefix = "poe"
    executable = "poe"

    def tasks_table(self, data: dict[str, Any]) -> Any:
        return dig(data, "tool", "poe", "tasks")


class TaskipyParser(TaskParser):
    """taskipy: [tool.taskipy.tasks]"""

    name = "taskipy"
    prefix = "task"
    executable = "task"

    def tasks_table(self, data: dict[str, Any]) -> Any:
        return dig(data, "tool", "taskipy", "tasks")


# Keys of a task table that carry the command, in lookup order.
_COMMAND_KEYS: tuple[str, ...] = ("shell", "script", "cmd")


def resolve_task(task: Any) -> Optional[tuple[str, Optional[str]]]:
    """Return (command, help) for one task entry, or None if it has no command.

    An entry is a bare string, a table with shell / script / cmd /
    sequence, or an array of steps joined with "&&".
    """
    if isinstance(task, str):
        return (task, None) if task else None
    if isinstance(task, list):
        joined = _join_steps(task)
        return (joined, None) if joined else None
    if not isinstance(task, dict):
        return None

    command = ""
    for key in _COMMAND_KEYS:
        value = task.get(key)
        if isinstance(value, str) and value:
            command = value
            break
        if isinstance(value, list) and value:
            command = " ".join(str(part) for part in value)
            break
    if not command and isinstance(task.get("sequence"), list):
        command = _join_steps(task["sequence"])
    if not command:
        return None

    help_text = task.get("help")
    return command, help_text if isinstance(help_text, str) and help_text else None


def _join_steps(steps: Iterable[Any]) -> str:
    parts = []
    for step in steps:
        resolved = resolve_task(step)
        if resolved is not None:
            parts.append(resolved[0])
    return " && ".join(parts)


class TaskRunnerRegistry:
    """Ordered collection of task parsers."""

    def __init__(self, parsers: Optional[Iterable[TaskParser]] = None):
        self._parsers: list[TaskParser] = []
        for parser in parsers or ():
            self.register(parser)

    def register(self, parser: TaskParser) -> None:
        self._parsers.append(parser)

    @property
    def parser_names(self) -> list[str]:
        return [p.name for p in self._parsers]

    def parse_all(self, data: dict[str, Any]) -> list[Command]:
        """Commands from every configured parser, in registration order."""
        commands: list[Command] = []
        for parser in self._parsers:
            if parser.is_configured(data):
                commands.extend(parser.parse(data))
        return commands


def build_task_runner_registry() -> TaskRunnerRegistry:
    return TaskRunnerRegistry([PoeTaskParser(), TaskipyParser()])
