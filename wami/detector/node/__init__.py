"""Node.js ecosystem detector.

Finds the nearest package.json, reads its scripts, infers extra commands
from known dev-tool dependencies and resolves the package manager from
lock files.
"""

import logging
from pathlib import Path
from typing import Optional

from wami.detector.base import EcosystemDetector
from wami.detector.node.package_managers import (
    DEFAULT_PACKAGE_MANAGER,
    detect_package_manager,
    find_node_package_manager,
)
from wami.detector.node.tools import build_node_tool_registry, collect_dependencies
from wami.detector.node.workspace import detect_workspace
from wami.detector.tools import ToolRegistry, merge_unique
from wami.errors import ManifestParseError
from wami.fs import find_file_upwards, read_json_file
from wami.overrides import apply_project_config
from wami.types import Command, CommandSource, ProjectInfo

logger = logging.getLogger(__name__)

MANIFEST = "package.json"


class NodeDetector(EcosystemDetector):
    name = "Node.js"
    marker_files = (MANIFEST,)

    def __init__(self, tools: Optional[ToolRegistry] = None):
        self.tools = tools if tools is not None else build_node_tool_registry()

    def detect(self, cwd: Path) -> Optional[Path]:
        return find_file_upwards(cwd, MANIFEST)

    def parse(self, project_root: Path) -> ProjectInfo:
        project_root = Path(project_root).resolve()
        manifest_path = project_root / MANIFEST
        data = read_json_file(manifest_path)
        if not isinstance(data, dict):
            raise ManifestParseError(manifest_path, "top-level value is not an object")

        name = data.get("name")
        pm = detect_package_manager(project_root, data)

        dependencies = collect_dependencies(data)
        commands = extract_scripts(data)
        inferred = self.tools.detect(dependencies, project_root)
        commands = merge_unique(commands, inferred)

        project = ProjectInfo(
            path=manifest_path,
            name=name if isinstance(name, str) and name else project_root.name,
            package_manager=pm.id,
            ecosystem=self.name,
            commands=commands,
            dependencies=sorted(dependencies),
            workspace=detect_workspace(project_root, MANIFEST),
        )
        return apply_project_config(project)

    def build_command(self, project: ProjectInfo, command_name: str) -> str:
        """Format the shell string for a command.

        Package scripts always go through the manager's run syntax, by
        name, so node_modules/.bin and pre/post hooks apply. Override-file
        commands run verbatim. Tool commands run through the exec prefix
        unless they already invoke the manager.
        """
        pm = find_node_package_manager(project.package_manager) or DEFAULT_PACKAGE_MANAGER
        command = project.get_command(command_name)
        if command is None or command.source == CommandSource.MANIFEST:
            return pm.build_run_command(command_name)
        if command.source == CommandSource.CONFIG:
            return command.command

        # Substring check; may false-positive on arguments that mention
        # the manager.
        if pm.is_wrapped(command.command):
            return command.command
        return pm.build_exec_command(command.command)


def extract_scripts(package_json: dict) -> list[Command]:
    """Commands from the flat `scripts` table; non-string entries are skipped."""
    scripts = package_json.get("scripts")
    if not isinstance(scripts, dict):
        return []

    commands: list[Command] = []
    for name, command in scripts.items():
        if not isinstance(command, str):
            logger.debug("Skipping non-string script %r", name)
            continue
        commands.append(Command(name=name, command=command, source=CommandSource.MANIFEST))
    return commands


__all__ = ["NodeDetector", "extract_scripts"]
