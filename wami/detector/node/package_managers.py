"""Node.js package manager definitions.

Each definition owns everything wami knows about one manager: the lock
files that reveal it, the config files it reads, and how it runs a
package script or a locally installed binary.

Detection walks NODE_PACKAGE_MANAGERS in order, so order matters: bun
is the most specific, npm is last because it is also the fallback.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodePackageManager:
    id: str
    lock_files: tuple[str, ...]
    config_files: tuple[str, ...]
    #: Prefix that runs a package.json script, e.g. "npm run"
    run_prefix: str
    #: Prefix that runs a binary from node_modules/.bin, e.g. "npx"
    exec_prefix: str

    def build_run_command(self, script_name: str) -> str:
        return f"{self.run_prefix} {script_name}"

    def build_exec_command(self, command: str) -> str:
        return f"{self.exec_prefix} {command}"

    def is_wrapped(self, command: str) -> bool:
        """True when `command` already invokes this manager."""
        return self.run_prefix in command or self.exec_prefix in command


BUN = NodePackageManager(
    id="bun",
    lock_files=("bun.lockb", "bun.lock"),
    config_files=("bunfig.toml",),
    run_prefix="bun",
    exec_prefix="bunx",
)

# pnpm reads .npmrc in addition to its own workspace file
PNPM = NodePackageManager(
    id="pnpm",
    lock_files=("pnpm-lock.yaml",),
    config_files=(".npmrc", "pnpm-workspace.yaml"),
    run_prefix="pnpm",
    exec_prefix="pnpm exec",
)

YARN = NodePackageManager(
    id="yarn",
    lock_files=("yarn.lock",),
    config_files=(".yarnrc.yml", ".yarnrc", "yarn.config.mjs"),
    run_prefix="yarn",
    exec_prefix="yarn",
)

NPM = NodePackageManager(
    id="npm",
    lock_files=("package-lock.json",),
    config_files=(".npmrc",),
    run_prefix="npm run",
    exec_prefix="npx",
)

NODE_PACKAGE_MANAGERS: tuple[NodePackageManager, ...] = (BUN, PNPM, YARN, NPM)

DEFAULT_PACKAGE_MANAGER = NPM


def find_node_package_manager(pm_id: str) -> Optional[NodePackageManager]:
    """Look up a definition by id; None for ids of other ecosystems."""
    for pm in NODE_PACKAGE_MANAGERS:
        if pm.id == pm_id:
            return pm
    return None


def detect_package_manager(project_root: Path, package_json: Optional[dict[str, Any]] = None) -> NodePackageManager:
    """Pick the package manager for a Node.js project.

    Priority order:
    1. Lock files, in NODE_PACKAGE_MANAGERS order
    2. The "packageManager" field of package.json (e.g. "pnpm@9.1.0")
    3. npm
    """
    for pm in NODE_PACKAGE_MANAGERS:
        for lock_file in pm.lock_files:
            if (Path(project_root) / lock_file).exists():
                logger.debug("Package manager %s from lock file %s", pm.id, lock_file)
                return pm

    field = (package_json or {}).get("packageManager")
    if isinstance(field, str):
        pm = find_node_package_manager(field.split("@", 1)[0].strip())
        if pm is not None:
            logger.debug("Package manager %s from packageManager field", pm.id)
            return pm

    return DEFAULT_PACKAGE_MANAGER
