"""Workspace (monorepo) resolution for Node.js projects.

A package is part of a workspace when some ancestor's package.json
declares `workspaces` (or the ancestor holds a pnpm-workspace.yaml).
Nested manifests without such a declaration, e.g. vendored packages,
are treated as standalone.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from wami.errors import ManifestParseError
from wami.fs import find_all_files_upwards, read_json_file
from wami.types import WorkspaceInfo

logger = logging.getLogger(__name__)

PNPM_WORKSPACE_FILE = "pnpm-workspace.yaml"


def detect_workspace(project_root: Path, manifest: str = "package.json") -> Optional[WorkspaceInfo]:
    """Return WorkspaceInfo when `project_root` belongs to a workspace."""
    roots = find_all_files_upwards(project_root, manifest)
    if len(roots) <= 1:
        return None

    current = roots[0]
    for parent in roots[1:]:
        try:
            data = read_json_file(parent / manifest)
        except ManifestParseError as exc:
            logger.warning("Skipping unreadable workspace candidate: %s", exc)
            continue
        if not isinstance(data, dict):
            continue

        if declares_workspaces(data) or _has_pnpm_workspace(parent):
            name = data.get("name")
            return WorkspaceInfo(
                is_workspace=True,
                workspace_root=parent,
                workspace_name=name if isinstance(name, str) and name else parent.name,
                relative_path=Path(os.path.relpath(current, parent)).as_posix(),
            )

    return None


def declares_workspaces(package_json: dict[str, Any]) -> bool:
    """True for `"workspaces": [...]` and `"workspaces": {"packages": [...]}`."""
    workspaces = package_json.get("workspaces")
    if isinstance(workspaces, list):
        return bool(workspaces)
    if isinstance(workspaces, dict):
        return bool(workspaces.get("packages"))
    return False


def _has_pnpm_workspace(directory: Path) -> bool:
    path = directory / PNPM_WORKSPACE_FILE
    if not path.is_file():
        return False
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return False
    return isinstance(data, dict) and bool(data.get("packages"))
