"""Detector registry: tries each ecosystem and routes to the first match.

Detection flow for `detect(cwd)`:
1. Ask each registered detector, in priority order, for a project root.
2. The first detector that returns one parses it; that result wins.
3. A detector that fails while detecting or parsing is logged and
   skipped; the next detector is tried.

Default priority (most specific first):
  go.mod                                         → Go
  pyproject.toml / Pipfile / requirements.txt    → Python
  package.json                                   → Node.js

`detect_all(cwd)` lists every project reachable from `cwd` for monorepo
switching: the current directory, its siblings, then children up to
`scan_depth` levels, each project root reported once.
"""

import logging
from collections import deque
from pathlib import Path
from typing import Iterable, Optional

from wami.config import DEFAULT_IGNORED_DIRS, Settings
from wami.detector.base import EcosystemDetector
from wami.detector.go import GoDetector
from wami.detector.node import NodeDetector
from wami.detector.python import PythonDetector
from wami.errors import WamiError
from wami.types import DetectionResult

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "No supported project found in current directory or parent directories"

DEFAULT_SCAN_DEPTH = 2

# Failures that mean "this detector does not match". Anything else is a
# bug and propagates.
_DETECTOR_ERRORS = (WamiError, OSError, ValueError)


def default_detectors() -> list[EcosystemDetector]:
    return [GoDetector(), PythonDetector(), NodeDetector()]


class DetectorRegistry:
    """Ordered set of ecosystem detectors plus the multi-project scan."""

    def __init__(
        self,
        detectors: Optional[Iterable[EcosystemDetector]] = None,
        scan_depth: int = DEFAULT_SCAN_DEPTH,
        ignored_dirs: Optional[Iterable[str]] = None,
    ):
        self._detectors: list[EcosystemDetector] = []
        for detector in default_detectors() if detectors is None else detectors:
            self.register(detector)
        self.scan_depth = scan_depth
        self.ignored_dirs = frozenset(DEFAULT_IGNORED_DIRS if ignored_dirs is None else ignored_dirs)

    @classmethod
    def from_settings(cls, settings: Settings) -> "DetectorRegistry":
        return cls(scan_depth=settings.scan_depth, ignored_dirs=settings.ignored_dirs)

    def register(self, detector: EcosystemDetector) -> None:
        self._detectors.append(detector)

    @property
    def detectors(self) -> list[EcosystemDetector]:
        return list(self._detectors)

    def supported_ecosystems(self) -> list[str]:
        return [d.name for d in self._detectors]

    # ------------------------------------------------------------------
    # Single-project detection
    # ------------------------------------------------------------------

    def detect(self, cwd: Path) -> DetectionResult:
        """Detect the project containing `cwd`.

        Never raises for a missing or malformed project; returns a
        not-found result listing the supported ecosystems instead.
        """
        cwd = Path(cwd)
        for detector in self._detectors:
            try:
                root = detector.detect(cwd)
                if root is None:
                    continue
                project = detector.parse(root)
            except _DETECTOR_ERRORS as exc:
                logger.warning("Detector %s failed: %s", detector.name, exc)
                continue

            logger.info(
                "Detected %s project %r at %s (pm=%s, %d commands)",
                detector.name,
                project.name,
                project.root,
                project.package_manager,
                len(project.commands),
            )
            return DetectionResult(found=True, project=project, detector=detector)

        return DetectionResult(
            found=False,
            error=NOT_FOUND_MESSAGE,
            supported=self.supported_ecosystems(),
        )

    # ------------------------------------------------------------------
    # Multi-project scan
    # ------------------------------------------------------------------

    def detect_all(self, cwd: Path) -> list[DetectionResult]:
        """List every project around `cwd`, each project root once.

        Phases run in order: the current directory, every sibling
        directory, then a breadth-first walk of child directories down to
        `scan_depth` levels. Hidden and ignored directories are skipped.
        Unreadable directories are skipped silently.
        """
        cwd = Path(cwd).resolve()
        seen: set[Path] = set()
        results: list[DetectionResult] = []

        def record(path: Path) -> None:
            result = self._detect_unseen(path, seen)
            if result is not None:
                results.append(result)

        record(cwd)

        if cwd.parent != cwd:
            for sibling in self._child_dirs(cwd.parent):
                record(sibling)

        queue: deque[tuple[Path, int]] = deque()
        if self.scan_depth >= 1:
            queue.extend((child, 1) for child in self._child_dirs(cwd))
        while queue:
            path, depth = queue.popleft()
            record(path)
            if depth < self.scan_depth:
                queue.extend((child, depth + 1) for child in self._child_dirs(path))

        logger.info("Found %d projects around %s", len(results), cwd)
        return results

    def _detect_unseen(self, path: Path, seen: set[Path]) -> Optional[DetectionResult]:
        """Detect at `path`, skipping project roots already in `seen`.

        The root is added to `seen` right after the probe, before parsing,
        so a root is never parsed twice.
        """
        for detector in self._detectors:
            try:
                root = detector.detect(path)
                if root is None:
                    continue
                root = Path(root).resolve()
                if root in seen:
                    return None
                seen.add(root)
                project = detector.parse(root)
            except _DETECTOR_ERRORS as exc:
                logger.debug("Detector %s failed at %s: %s", detector.name, path, exc)
                continue
            return DetectionResult(found=True, project=project, detector=detector)
        return None

    def _child_dirs(self, path: Path) -> list[Path]:
        try:
            entries = sorted(path.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            logger.debug("Cannot read %s: %s", path, exc)
            return []
        return [
            entry
            for entry in entries
            if not entry.name.startswith(".")
            and entry.name not in self.ignored_dirs
            and _is_dir(entry)
        ]


def _is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError:
        return False
