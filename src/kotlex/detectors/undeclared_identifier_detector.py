# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Detector for identifiers used before (or without) a declaration (E3).

Variables are visible from their declaration onwards; functions, classes
and objects are visible throughout the file. Member accesses (after '.',
'?.' or '::') are not checked because their declarations live elsewhere.
"""

import logging
from typing import List

from kotlex.detectors.base import DetectionContext, DiagnosticDetector
from kotlex.models import Diagnostic, DiagnosticCode, TokenKind

logger = logging.getLogger(__name__)

MEMBER_ACCESS_OPERATORS = frozenset({".", "?.", "::"})


class UndeclaredIdentifierDetector(DiagnosticDetector):
    """Reports identifiers that are not visible at their position.

    Identifiers already reported as misspelled keywords are skipped.

    Priority: 90
    """

    def detect(self, index: int, context: DetectionContext) -> List[Diagnostic]:
        token = context.tokens[index]
        if token.kind != TokenKind.IDENTIFIER:
            return []
        if context.symbols.is_visible(token.text, index):
            return []
        if context.text_at(index - 1) in MEMBER_ACCESS_OPERATORS:
            return []
        if context.is_flagged(index, DiagnosticCode.E2):
            return []

        context.mark(index, DiagnosticCode.E3)
        return [
            Diagnostic.create(
                DiagnosticCode.E3,
                f"'{token.text}' used before declaration",
                token.line,
                token=token.text,
            )
        ]

    def priority(self) -> int:
        return 90

    def name(self) -> str:
        return "UndeclaredIdentifierDetector"

    def code(self) -> DiagnosticCode:
        return DiagnosticCode.E3
