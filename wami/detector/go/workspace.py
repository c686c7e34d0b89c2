"""Go workspace (go.work) resolution."""

import os
from pathlib import Path
from typing import Optional

from wami.fs import find_all_files_upwards
from wami.types import WorkspaceInfo

GO_WORK = "go.work"


def detect_go_workspace(project_root: Path) -> Optional[WorkspaceInfo]:
    """Return WorkspaceInfo when a strict ancestor of `project_root` holds go.work.

    A go.work next to the module's own go.mod makes the module the
    workspace root itself, which is not a nesting relationship.
    """
    project_root = Path(project_root).resolve()
    for directory in find_all_files_upwards(project_root, GO_WORK):
        if directory == project_root:
            continue
        return WorkspaceInfo(
            is_workspace=True,
            workspace_root=directory,
            workspace_name=directory.name,
            relative_path=Path(os.path.relpath(project_root, directory)).as_posix(),
        )
    return None
