"""wami: find out where you are and what you can run there.

Public API:
    detect(cwd) -> DetectionResult
    detect_all(cwd) -> list[DetectionResult]
"""

from pathlib import Path

from wami.detector import DetectorRegistry, EcosystemDetector
from wami.errors import ConfigError, ManifestParseError, WamiError
from wami.types import Command, CommandSource, DetectionResult, ProjectInfo, WorkspaceInfo

__version__ = "0.1.0"


def detect(cwd: Path) -> DetectionResult:
    """Detect the project containing `cwd` with the default detectors."""
    return DetectorRegistry().detect(cwd)


def detect_all(cwd: Path) -> list[DetectionResult]:
    """List the projects around `cwd` with the default detectors."""
    return DetectorRegistry().detect_all(cwd)


__all__ = [
    "detect",
    "detect_all",
    "DetectorRegistry",
    "EcosystemDetector",
    "Command",
    "CommandSource",
    "DetectionResult",
    "ProjectInfo",
    "WorkspaceInfo",
    "WamiError",
    "ManifestParseError",
    "ConfigError",
]
