# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Detector for identifiers that look like misspelled keywords (E2).

An identifier is reported when it is not declared anywhere in the file, is
at least min_length characters long, is within max_distance edits of a
keyword, and does not directly follow a keyword (so 'fun main' or
'int wrong' are not reported for the declared name).

Examples:
    vaar badVar = 5     # 'vaar' resembles 'var'
    flaot wrong2 = 10   # 'flaot' resembles 'float'
"""

import logging
from typing import List, Optional, Sequence

from kotlex.detectors.base import DetectionContext, DiagnosticDetector
from kotlex.languages import KEYWORDS
from kotlex.models import Diagnostic, DiagnosticCode, TokenKind

logger = logging.getLogger(__name__)

DEFAULT_MAX_DISTANCE = 2
DEFAULT_MIN_LENGTH = 3


def levenshtein(a: str, b: str) -> int:
    """Edit distance between two strings (insert, delete, substitute)."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current
    return previous[-1]


def closest_keyword(
    word: str,
    keywords: Sequence[str] = KEYWORDS,
    max_distance: int = DEFAULT_MAX_DISTANCE,
) -> Optional[str]:
    """Return the closest keyword within max_distance of word, if any.

    Ties are resolved in keyword table order.
    """
    best: Optional[str] = None
    best_distance = max_distance + 1
    for keyword in keywords:
        if abs(len(keyword) - len(word)) > max_distance:
            continue
        distance = levenshtein(word, keyword)
        if distance < best_distance:
            best, best_distance = keyword, distance
    return best


class MisspelledKeywordDetector(DiagnosticDetector):
    """Reports identifiers that resemble a keyword.

    Priority: 100 (runs first so later detectors can see E2 marks)
    """

    def __init__(
        self,
        max_distance: int = DEFAULT_MAX_DISTANCE,
        min_length: int = DEFAULT_MIN_LENGTH,
    ):
        self.max_distance = max_distance
        self.min_length = min_length

    def detect(self, index: int, context: DetectionContext) -> List[Diagnostic]:
        token = context.tokens[index]
        if token.kind != TokenKind.IDENTIFIER:
            return []
        if len(token.text) < self.min_length or context.symbols.is_declared(token.text):
            return []

        previous = context.token_at(index - 1)
        if previous is not None and previous.kind == TokenKind.KEYWORD:
            return []

        keyword = closest_keyword(token.text, max_distance=self.max_distance)
        if keyword is None:
            return []

        logger.debug(f"'{token.text}' at line {token.line} is close to keyword '{keyword}'")
        context.mark(index, DiagnosticCode.E2)
        return [
            Diagnostic.create(
                DiagnosticCode.E2,
                f"'{token.text}' resembles a keyword",
                token.line,
                token=token.text,
            )
        ]

    def priority(self) -> int:
        return 100

    def name(self) -> str:
        return "MisspelledKeywordDetector"

    def code(self) -> DiagnosticCode:
        return DiagnosticCode.E2
