"""Ecosystem detectors and the registry that orchestrates them.

Public API:
    DetectorRegistry().detect(cwd) -> DetectionResult
    DetectorRegistry().detect_all(cwd) -> list[DetectionResult]
"""

from wami.detector.base import EcosystemDetector
from wami.detector.go import GoDetector
from wami.detector.node import NodeDetector
from wami.detector.python import PythonDetector
from wami.detector.registry import NOT_FOUND_MESSAGE, DetectorRegistry, default_detectors

__all__ = [
    "EcosystemDetector",
    "GoDetector",
    "NodeDetector",
    "PythonDetector",
    "DetectorRegistry",
    "NOT_FOUND_MESSAGE",
    "default_detectors",
]
