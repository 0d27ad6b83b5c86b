# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Registry for diagnostic detector plugins with priority-based dispatch."""

import logging
from typing import List

from .base import DiagnosticDetector

logger = logging.getLogger(__name__)


class DetectorRegistry:
    """Registry for diagnostic detector plugins.

    Detectors are returned highest priority first, with the detector name
    as a tiebreak so that dispatch order is stable.

    Thread Safety:
    - NOT thread-safe: register all detectors before analyzing
    """

    def __init__(self) -> None:
        self._detectors: List[DiagnosticDetector] = []
        self._sorted: bool = True

    def register(self, detector: DiagnosticDetector) -> None:
        """Register a detector plugin.

        Raises:
            TypeError: If detector is not a DiagnosticDetector instance.
        """
        if not isinstance(detector, DiagnosticDetector):
            raise TypeError(f"Detector must be a DiagnosticDetector instance, got {type(detector)}")

        self._detectors.append(detector)
        self._sorted = False

        logger.debug(f"Registered detector '{detector.name()}' with priority {detector.priority()}")

    def get_detectors(self) -> List[DiagnosticDetector]:
        """Get all registered detectors, highest priority first."""
        if not self._sorted:
            self._detectors.sort(key=lambda d: (-d.priority(), d.name()))
            self._sorted = True

        return self._detectors

    def clear(self) -> None:
        self._detectors.clear()
        self._sorted = True

    def count(self) -> int:
        return len(self._detectors)
