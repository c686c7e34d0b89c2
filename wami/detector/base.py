"""Base class for ecosystem detectors.

Each ecosystem (Node.js, Python, Go) subclasses EcosystemDetector and
owns all of its parsing logic. The registry only ever calls the three
operations below.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from wami.types import ProjectInfo


class EcosystemDetector(ABC):
    """Abstract base class for all ecosystem detectors.

    detect() finds the nearest project root at or above a directory,
    parse() turns that root into a ProjectInfo, and build_command()
    formats the shell string that runs one of its commands.
    """

    #: Human-readable ecosystem name, e.g. "Node.js"
    name: str = ""

    #: Marker files in detection priority order
    marker_files: tuple[str, ...] = ()

    @abstractmethod
    def detect(self, cwd: Path) -> Optional[Path]:
        """Return the project root for `cwd`, or None when not a match."""
        ...

    @abstractmethod
    def parse(self, project_root: Path) -> ProjectInfo:
        """Parse the project at `project_root`.

        Raises:
            ManifestParseError: The manifest is malformed.
        """
        ...

    @abstractmethod
    def build_command(self, project: ProjectInfo, command_name: str) -> str:
        """Return the full shell string that runs `command_name`."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
