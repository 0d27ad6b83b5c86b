# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Detector for misplaced relational operators (E4).

A relational operator (< > <= >= == !=) needs an operand on each side.
Newlines are not tokens, so an operator at the end of one line and a
value at the start of the next still count as adjacent.

Accepted operands:
- left:  identifier, number, string, char, true/false/null, ')' or ']'
- right: identifier, number, string, char, true/false/null, '(' or a
         unary '-' / '!'
"""

import logging
from typing import List, Optional

from kotlex.detectors.base import DetectionContext, DiagnosticDetector
from kotlex.languages import LITERAL_KEYWORDS, RELATIONAL_OPERATORS
from kotlex.models import Diagnostic, DiagnosticCode, Token, TokenKind

logger = logging.getLogger(__name__)

OPERAND_KINDS = frozenset(
    {TokenKind.IDENTIFIER, TokenKind.NUMBER, TokenKind.STRING, TokenKind.CHAR}
)
LEFT_CLOSERS = frozenset({")", "]"})
RIGHT_OPENERS = frozenset({"(", "-", "!"})


def _is_operand(token: Optional[Token]) -> bool:
    if token is None:
        return False
    if token.kind in OPERAND_KINDS:
        return True
    return token.kind == TokenKind.KEYWORD and token.text in LITERAL_KEYWORDS


class RelationalOperatorDetector(DiagnosticDetector):
    """Reports relational operators without valid operands.

    Priority: 70
    """

    def detect(self, index: int, context: DetectionContext) -> List[Diagnostic]:
        token = context.tokens[index]
        if token.kind != TokenKind.OPERATOR or token.text not in RELATIONAL_OPERATORS:
            return []

        if index == 0 or index == len(context.tokens) - 1:
            detail = f"Operator '{token.text}' at invalid position"
        else:
            left = context.tokens[index - 1]
            right = context.tokens[index + 1]
            left_ok = _is_operand(left) or left.text in LEFT_CLOSERS
            right_ok = _is_operand(right) or right.text in RIGHT_OPENERS
            if left_ok and right_ok:
                return []
            detail = f"Operator '{token.text}' has invalid operands"

        context.mark(index, DiagnosticCode.E4)
        return [Diagnostic.create(DiagnosticCode.E4, detail, token.line, token=token.text)]

    def priority(self) -> int:
        return 70

    def name(self) -> str:
        return "RelationalOperatorDetector"

    def code(self) -> DiagnosticCode:
        return DiagnosticCode.E4
