"""Shared types for wami.

Every detector produces a ProjectInfo wrapped in a DetectionResult.
Commands are frozen: layers that need a different command build a new
one and replace the old entry by name.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from wami.detector.base import EcosystemDetector


class CommandSource(StrEnum):
    """Which layer contributed a command."""

    MANIFEST = "manifest"
    TASK_RUNNER = "task-runner"
    TOOL = "tool"
    BUILTIN = "builtin"
    CONFIG = "config"


@dataclass(frozen=True)
class Command:
    """A named, runnable shell instruction.

    `command` is the literal shell string. It is not yet prefixed with the
    package manager's run syntax unless it is already a full command.
    """

    name: str
    command: str
    description: Optional[str] = None
    interactive: bool = False
    source: CommandSource = CommandSource.MANIFEST

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "command": self.command,
            "description": self.description,
            "interactive": self.interactive,
            "source": str(self.source),
        }


@dataclass
class WorkspaceInfo:
    """Relationship between a project and the workspace that declares it."""

    is_workspace: bool
    workspace_root: Optional[Path] = None
    workspace_name: Optional[str] = None
    relative_path: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "is_workspace": self.is_workspace,
            "workspace_root": str(self.workspace_root) if self.workspace_root else None,
            "workspace_name": self.workspace_name,
            "relative_path": self.relative_path,
        }


@dataclass
class ProjectInfo:
    """Normalized description of one detected project.

    `path` is the marker file that identified the project, `root` its
    directory. Built fresh on every detection call.
    """

    path: Path
    name: str
    package_manager: str
    ecosystem: str
    commands: list[Command] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    workspace: Optional[WorkspaceInfo] = None
    has_venv: bool = False
    venv_path: Optional[Path] = None
    venv_config: Optional[dict[str, Any]] = None
    config_error: Optional[str] = None

    @property
    def root(self) -> Path:
        return self.path.parent

    def get_command(self, name: str) -> Optional[Command]:
        for command in self.commands:
            if command.name == name:
                return command
        return None

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "root": str(self.root),
            "name": self.name,
            "ecosystem": self.ecosystem,
            "package_manager": self.package_manager,
            "commands": [c.to_dict() for c in self.commands],
            "dependencies": self.dependencies,
            "workspace": self.workspace.to_dict() if self.workspace else None,
            "has_venv": self.has_venv,
            "venv_path": str(self.venv_path) if self.venv_path else None,
            "venv_config": self.venv_config,
            "config_error": self.config_error,
        }


@dataclass
class DetectionResult:
    """Outcome of a detection run.

    When found, carries the project and the detector that produced it so
    the caller can later call `detector.build_command(project, name)`.
    """

    found: bool
    project: Optional[ProjectInfo] = None
    detector: Optional["EcosystemDetector"] = None
    error: Optional[str] = None
    supported: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "found": self.found,
            "ecosystem": self.detector.name if self.detector else None,
            "project": self.project.to_dict() if self.project else None,
            "error": self.error,
            "supported": self.supported,
        }
