"""Go ecosystem detector.

go.mod only names the module; runnable commands come from the Makefile
and Taskfile, topped up with the standard go toolchain commands.
"""

from pathlib import Path
from typing import Optional

from wami.detector.base import EcosystemDetector
from wami.detector.go.gomod import module_basename, parse_gomod
from wami.detector.go.makefile import makefile_commands
from wami.detector.go.taskfile import taskfile_commands
from wami.detector.go.workspace import detect_go_workspace
from wami.detector.tools import merge_unique
from wami.fs import find_file_upwards
from wami.overrides import apply_project_config
from wami.types import Command, CommandSource, ProjectInfo

MANIFEST = "go.mod"

DEFAULT_COMMANDS: list[tuple[str, str, str]] = [
    ("run", "go run .", "Run the main package"),
    ("build", "go build ./...", "Build all packages"),
    ("test", "go test ./...", "Run all tests"),
    ("test:race", "go test -race ./...", "Run tests with race detector"),
    ("test:cover", "go test -cover ./...", "Run tests with coverage"),
    ("vet", "go vet ./...", "Run go vet"),
    ("tidy", "go mod tidy", "Tidy module dependencies"),
    ("download", "go mod download", "Download module dependencies"),
    ("generate", "go generate ./...", "Run code generation"),
]


class GoDetector(EcosystemDetector):
    name = "Go"
    marker_files = (MANIFEST,)

    def detect(self, cwd: Path) -> Optional[Path]:
        return find_file_upwards(cwd, MANIFEST)

    def parse(self, project_root: Path) -> ProjectInfo:
        project_root = Path(project_root).resolve()
        path = project_root / MANIFEST
        module = parse_gomod(path)

        # Makefile targets first: they are the project's own workflow.
        commands = makefile_commands(project_root) + taskfile_commands(project_root)
        commands = merge_unique(commands, default_go_commands())

        project = ProjectInfo(
            path=path,
            name=module_basename(module.module) if module.module else project_root.name,
            package_manager="go",
            ecosystem=self.name,
            commands=commands,
            dependencies=list(module.requires),
            workspace=detect_go_workspace(project_root),
        )
        return apply_project_config(project)

    def build_command(self, project: ProjectInfo, command_name: str) -> str:
        command = project.get_command(command_name)
        return command.command if command is not None else f"go {command_name}"


def default_go_commands() -> list[Command]:
    return [
        Command(name=name, command=command, description=description, source=CommandSource.BUILTIN)
        for name, command, description in DEFAULT_COMMANDS
    ]


__all__ = ["GoDetector"]
