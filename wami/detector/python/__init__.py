"""Python ecosystem detector.

Markers, in priority order: pyproject.toml, Pipfile, requirements.txt.
Supports uv, poetry, pdm, pipenv and pip.
"""

import logging
from pathlib import Path
from typing import Optional

from wami.detector.base import EcosystemDetector
from wami.detector.python import pipfile, pyproject
from wami.detector.python.package_managers import (
    default_commands,
    detect_package_manager,
    is_wrapped,
    requirements_commands,
    wrap_command,
)
from wami.detector.python.requirements import parse_requirements
from wami.detector.python.task_runners import TaskRunnerRegistry, build_task_runner_registry
from wami.detector.python.tools import build_python_tool_registry
from wami.detector.tools import ToolRegistry, merge_unique
from wami.errors import ManifestParseError
from wami.fs import find_file_upwards, read_toml_file
from wami.overrides import apply_project_config, detect_venv
from wami.types import ProjectInfo

logger = logging.getLogger(__name__)

PYPROJECT = "pyproject.toml"
PIPFILE = "Pipfile"
REQUIREMENTS = "requirements.txt"


class PythonDetector(EcosystemDetector):
    name = "Python"
    marker_files = (PYPROJECT, PIPFILE, REQUIREMENTS)

    def __init__(
        self,
        tools: Optional[ToolRegistry] = None,
        task_runners: Optional[TaskRunnerRegistry] = None,
    ):
        self.tools = tools if tools is not None else build_python_tool_registry()
        self.task_runners = task_runners if task_runners is not None else build_task_runner_registry()

    def detect(self, cwd: Path) -> Optional[Path]:
        for marker in self.marker_files:
            root = find_file_upwards(cwd, marker)
            if root is not None:
                return root
        return None

    def parse(self, project_root: Path) -> ProjectInfo:
        project_root = Path(project_root).resolve()

        if (project_root / PYPROJECT).is_file():
            project = self._parse_pyproject(project_root)
        elif (project_root / PIPFILE).is_file():
            project = self._parse_pipfile(project_root)
        elif (project_root / REQUIREMENTS).is_file():
            project = self._parse_requirements(project_root)
        else:
            raise ManifestParseError(project_root, "no Python manifest found")

        venv_path = detect_venv(project_root)
        project.has_venv = venv_path is not None
        project.venv_path = venv_path
        return apply_project_config(project)

    def build_command(self, project: ProjectInfo, command_name: str) -> str:
        manager = project.package_manager
        command = project.get_command(command_name)

        if command is not None:
            if is_wrapped(command.command, manager):
                return command.command
            return wrap_command(command.command, manager)

        if manager == "pip":
            return f"python {command_name}"
        return wrap_command(command_name, manager)

    # ------------------------------------------------------------------
    # Per-manifest parsing
    # ------------------------------------------------------------------

    def _parse_pyproject(self, project_root: Path) -> ProjectInfo:
        path = project_root / PYPROJECT
        data = read_toml_file(path)
        manager = detect_package_manager(project_root, data)

        commands = pyproject.extract_scripts(data, manager)
        commands = merge_unique(commands, default_commands(manager))
        commands = merge_unique(commands, self.task_runners.parse_all(data))

        dependencies = pyproject.collect_dependencies(data)
        commands = merge_unique(commands, self.tools.detect(dependencies, project_root))

        return ProjectInfo(
            path=path,
            name=pyproject.project_name(data, manager) or project_root.name,
            package_manager=manager,
            ecosystem=self.name,
            commands=commands,
            dependencies=sorted(dependencies),
        )

    def _parse_pipfile(self, project_root: Path) -> ProjectInfo:
        path = project_root / PIPFILE
        data = read_toml_file(path)
        manager = detect_package_manager(project_root)

        commands = merge_unique(pipfile.extract_scripts(data), default_commands(manager))
        dependencies = pipfile.collect_dependencies(data)
        commands = merge_unique(commands, self.tools.detect(dependencies, project_root))

        return ProjectInfo(
            path=path,
            name=project_root.name,
            package_manager=manager,
            ecosystem=self.name,
            commands=commands,
            dependencies=sorted(dependencies),
        )

    def _parse_requirements(self, project_root: Path) -> ProjectInfo:
        path = project_root / REQUIREMENTS
        # Dependencies are recorded only; plain requirements projects get
        # the install/freeze pair and nothing inferred.
        dependencies = parse_requirements(path)
        return ProjectInfo(
            path=path,
            name=project_root.name,
            package_manager="pip",
            ecosystem=self.name,
            commands=requirements_commands(),
            dependencies=sorted(dependencies),
        )


__all__ = ["PythonDetector"]
