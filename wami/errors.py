"""Error types raised inside wami.

Detectors raise these; the registry catches them and moves on to the
next detector, so none of them reach the caller of `detect()`.
"""

from pathlib import Path
from typing import Optional


class WamiError(Exception):
    """Base class for all wami errors."""


class ManifestParseError(WamiError):
    """A manifest or marker file could not be read or decoded.

    Carries the offending path and the original error for logging.
    """

    def __init__(self, path: Path, message: str, cause: Optional[Exception] = None):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{self.path}: {message}")


class ConfigError(WamiError):
    """The project override file (.wami.json / wami.json) is malformed."""

    def __init__(self, path: Path, message: str, cause: Optional[Exception] = None):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{self.path}: {message}")
