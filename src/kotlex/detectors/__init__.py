# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Detector plugins for token-level diagnostics.

Components:
- DiagnosticDetector: Abstract base class for detector plugins
- DetectionContext: Shared state for one detection pass
- DetectorRegistry: Priority-based registry for detector plugins
- MisspelledKeywordDetector: Identifiers resembling keywords (E2)
- UndeclaredIdentifierDetector: Identifiers used before declaration (E3)
- AssignmentTypeDetector: Assignments that do not fit the declared type (E1)
- RelationalOperatorDetector: Relational operators missing operands (E4)
"""

from kotlex.detectors.assignment_type_detector import AssignmentTypeDetector
from kotlex.detectors.base import DetectionContext, DiagnosticDetector
from kotlex.detectors.misspelled_keyword_detector import (
    MisspelledKeywordDetector,
    closest_keyword,
    levenshtein,
)
from kotlex.detectors.registry import DetectorRegistry
from kotlex.detectors.relational_operator_detector import RelationalOperatorDetector
from kotlex.detectors.undeclared_identifier_detector import UndeclaredIdentifierDetector

__all__ = [
    # Base classes
    "DiagnosticDetector",
    "DetectionContext",
    "DetectorRegistry",
    # Detectors
    "MisspelledKeywordDetector",
    "UndeclaredIdentifierDetector",
    "AssignmentTypeDetector",
    "RelationalOperatorDetector",
    # Helpers
    "closest_keyword",
    "levenshtein",
]
