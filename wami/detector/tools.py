"""Dev-tool inference shared by the Python and Node.js detectors.

A tool contributes commands when one of its package names appears in the
project's dependency set, without the project declaring any script for
it. The registry tries every tool in registration order; that order is
also the display order of the commands they contribute.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from wami.types import Command, CommandSource

logger = logging.getLogger(__name__)


class DevTool:
    """A development tool recognised from the dependency list.

    Subclasses override `commands()` when the contribution depends on the
    project layout (e.g. whether a docs/ directory exists).
    """

    def __init__(
        self,
        name: str,
        package_names: Iterable[str],
        commands: Iterable[tuple[str, str, str]] = (),
    ):
        self.name = name
        self.package_names = tuple(p.lower() for p in package_names)
        self._commands = tuple(commands)

    def matches(self, dependencies: set[str]) -> bool:
        return any(p in dependencies for p in self.package_names)

    def commands(self, project_root: Path) -> list[Command]:
        return [tool_command(name, cmd, desc) for name, cmd, desc in self._commands]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class ToolRegistry:
    """Ordered collection of DevTools."""

    def __init__(self, tools: Optional[Iterable[DevTool]] = None):
        self._tools: list[DevTool] = []
        for tool in tools or ():
            self.register(tool)

    def register(self, tool: DevTool) -> None:
        self._tools.append(tool)

    @property
    def tools(self) -> list[DevTool]:
        return list(self._tools)

    def detect(self, dependencies: set[str], project_root: Path) -> list[Command]:
        """Return the commands of every tool found in `dependencies`."""
        commands: list[Command] = []
        for tool in self._tools:
            if tool.matches(dependencies):
                contributed = tool.commands(project_root)
                logger.debug("Tool %s contributed %d commands", tool.name, len(contributed))
                commands.extend(contributed)
        return commands


def merge_unique(commands: list[Command], extra: list[Command]) -> list[Command]:
    """Append the commands of `extra` whose names are not already taken."""
    taken = {c.name for c in commands}
    merged = list(commands)
    for command in extra:
        if command.name not in taken:
            merged.append(command)
            taken.add(command.name)
    return merged


def tool_command(name: str, command: str, description: str) -> Command:
    return Command(name=name, command=command, description=description, source=CommandSource.TOOL)
