"""requirements.txt parser.

Parses requirements.txt line-by-line. Strips version specifiers, extras,
environment markers, comments and pip flags.
"""

import logging
import re
from pathlib import Path

from wami.errors import ManifestParseError

logger = logging.getLogger(__name__)


def parse_requirements(path: Path) -> list[str]:
    """Return the lower-cased package names listed in a requirements file.

    Raises:
        ManifestParseError: The file cannot be read or decoded.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestParseError(path, f"could not read file: {exc}", exc) from exc

    packages: list[str] = []
    for line in text.splitlines():
        line = line.split("#", 1)[0].strip()
        # Skip blank lines and pip flags (-r, -e, --index-url, etc.)
        if not line or line.startswith("-"):
            continue
        name = re.split(r"[><=!~;@\[\s]", line)[0].strip().lower()
        if name and name not in packages:
            packages.append(name)
    return packages
