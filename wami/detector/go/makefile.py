"""Makefile target extraction.

Targets come from `.PHONY:` declarations first, then from `name:` and
`name::` rule lines. Variable assignments (`CC := gcc`, `X ::= y`) are
not rules.
"""

import logging
import re
from pathlib import Path
from typing import Optional

from wami.types import Command, CommandSource

logger = logging.getLogger(__name__)

# Same lookup order as GNU make.
MAKEFILE_NAMES: tuple[str, ...] = ("GNUmakefile", "makefile", "Makefile")

_PHONY = re.compile(r"^\.PHONY\s*:\s*(.+)$", re.MULTILINE)
_TARGET = re.compile(r"^([a-zA-Z][a-zA-Z0-9_-]*)\s*:(?!:?=)", re.MULTILINE)


def find_makefile(project_root: Path) -> Optional[Path]:
    for name in MAKEFILE_NAMES:
        candidate = Path(project_root) / name
        if candidate.is_file():
            return candidate
    return None


def parse_makefile_targets(content: str) -> list[str]:
    """Return target names in first-seen order, without duplicates."""
    targets: dict[str, None] = {}

    for match in _PHONY.finditer(content):
        for target in match.group(1).split():
            targets.setdefault(target, None)

    for match in _TARGET.finditer(content):
        targets.setdefault(match.group(1), None)

    return list(targets)


def makefile_commands(project_root: Path) -> list[Command]:
    """`make:<target>` commands for the project's Makefile, if any.

    An unreadable Makefile is logged and contributes nothing.
    """
    path = find_makefile(project_root)
    if path is None:
        return []

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to read %s: %s", path, exc)
        return []

    return [
        Command(
            name=f"make:{target}",
            command=f"make {target}",
            description=f"Run make {target}",
            source=CommandSource.TASK_RUNNER,
        )
        for target in parse_makefile_targets(content)
    ]
