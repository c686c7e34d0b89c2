"""go.mod parser.

Parses go.mod with a simple line-by-line parser, no external library
needed. Handles both single-line and multi-line require blocks.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from wami.errors import ManifestParseError

logger = logging.getLogger(__name__)


@dataclass
class GoModule:
    module: str = ""
    go_version: str = ""
    requires: list[str] = field(default_factory=list)


def parse_gomod(path: Path) -> GoModule:
    """Parse a go.mod file.

    Raises:
        ManifestParseError: The file cannot be read or decoded.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestParseError(path, f"could not read file: {exc}", exc) from exc
    return parse_gomod_text(text)


def parse_gomod_text(text: str) -> GoModule:
    result = GoModule()
    in_require_block = False

    for line in text.splitlines():
        stripped = line.split("//", 1)[0].strip()
        if not stripped:
            continue

        if in_require_block:
            if stripped == ")":
                in_require_block = False
                continue
            # Inside require block: "github.com/foo/bar v1.0.0"
            parts = stripped.split()
            if parts:
                result.requires.append(parts[0])
        elif stripped.startswith("module "):
            result.module = stripped[7:].strip().strip('"')
        elif stripped.startswith("go "):
            result.go_version = stripped[3:].strip()
        elif stripped in ("require (", "require("):
            in_require_block = True
        elif stripped.startswith("require "):
            # Single-line require: "require github.com/foo/bar v1.0.0"
            parts = stripped[8:].strip().split()
            if parts:
                result.requires.append(parts[0])

    return result


def module_basename(module: str) -> str:
    """Last path segment of a module path: "github.com/acme/api" -> "api"."""
    return module.rstrip("/").rsplit("/", 1)[-1]
