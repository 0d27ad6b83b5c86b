# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Detector for assignments whose value does not fit the declared type (E1).

Handles 'NAME = VALUE' for names with a known declared type, which covers
Java declarations with initializers (int x = 3.14;) and plain assignments
(x = "text"). Typed Kotlin initializers (var x: Int = 3.14) are checked by
the declaration pass instead.
"""

import logging
from typing import List

from kotlex.detectors.base import DetectionContext, DiagnosticDetector
from kotlex.detectors.undeclared_identifier_detector import MEMBER_ACCESS_OPERATORS
from kotlex.languages import KOTLIN_VARIABLE_KEYWORDS
from kotlex.models import Diagnostic, DiagnosticCode, TokenKind
from kotlex.type_checker import check_assignment

logger = logging.getLogger(__name__)


class AssignmentTypeDetector(DiagnosticDetector):
    """Type-checks simple assignments to declared names.

    Names that are not visible are left to UndeclaredIdentifierDetector.

    Priority: 80
    """

    def detect(self, index: int, context: DetectionContext) -> List[Diagnostic]:
        token = context.tokens[index]
        if token.kind != TokenKind.IDENTIFIER or context.text_at(index + 1) != "=":
            return []
        if context.token_at(index + 2) is None:
            return []
        if context.text_at(index - 1) in KOTLIN_VARIABLE_KEYWORDS:
            return []
        if context.text_at(index - 1) in MEMBER_ACCESS_OPERATORS:
            return []
        if not context.symbols.is_visible(token.text, index):
            return []

        declaration = context.symbols.get(token.text)
        assert declaration is not None

        diagnostic = check_assignment(
            declaration.type,
            token.text,
            context.tokens[index + 2 : index + 4],
            token.line,
            symbols=context.symbols,
            nullable=declaration.nullable,
        )
        if diagnostic is None:
            return []

        context.mark(index, DiagnosticCode.E1)
        return [diagnostic]

    def priority(self) -> int:
        return 80

    def name(self) -> str:
        return "AssignmentTypeDetector"

    def code(self) -> DiagnosticCode:
        return DiagnosticCode.E1
