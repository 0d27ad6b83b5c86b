# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Hand-written lexer for Java and Kotlin-like source text.

The lexer turns source text into a flat token stream and collects comments
separately. It never fails: characters it does not recognize are skipped
and unterminated literals or comments run to the end of the input.

Token rules:
- Identifiers: [A-Za-z_][A-Za-z0-9_]*, classified as KEYWORD when listed
- package/import: rest of the line becomes a single NAMESPACE token
- Numbers: digits, optional fraction, optional alphabetic suffix (2.5f, 10L)
- Char literals: 'x' or '\\n'
- String literals: "..." with backslash escapes
- Operators: single characters and the multi-character forms in OPERATORS
- Separators: { } [ ] ; , and a lone ':'
"""

import logging
import string
from typing import List, Optional, Tuple

from kotlex.languages import NAMESPACE_KEYWORDS, is_keyword
from kotlex.models import Comment, Token, TokenKind

logger = logging.getLogger(__name__)

OPERATOR_CHARS = "+-*/%=<>!&|?.():"
SEPARATOR_CHARS = "{}[];,"
WHITESPACE_CHARS = " \t\v\f\r\n"

# Identifiers and numbers are ASCII only; other characters are skipped
LETTER_CHARS = frozenset(string.ascii_letters)
DIGIT_CHARS = frozenset(string.digits)
WORD_START_CHARS = LETTER_CHARS | {"_"}
WORD_CHARS = WORD_START_CHARS | DIGIT_CHARS

# Longest match wins; checked longest first
MULTI_CHAR_OPERATORS: Tuple[str, ...] = (
    "===",
    "!==",
    "?.",
    "?:",
    "..",
    "==",
    "!=",
    "<=",
    ">=",
    "&&",
    "||",
    "->",
    "::",
    "++",
    "--",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
)


class Lexer:
    """Single-pass scanner producing tokens and comments.

    Usage:
        tokens, comments = Lexer(source_text).tokenize()
    """

    def __init__(self, text: str):
        self.text = text
        self._pos = 0
        self._line = 1
        self._column = 1
        self._tokens: List[Token] = []
        self._comments: List[Comment] = []

    def tokenize(self) -> Tuple[List[Token], List[Comment]]:
        """Scan the whole text.

        Returns:
            Tuple of (tokens, comments) in source order.
        """
        while self._pos < len(self.text):
            ch = self.text[self._pos]

            if ch in WHITESPACE_CHARS:
                self._advance()
            elif ch == "/" and self._peek(1) == "/":
                self._scan_line_comment()
            elif ch == "/" and self._peek(1) == "*":
                self._scan_block_comment()
            elif ch in WORD_START_CHARS:
                self._scan_word()
            elif ch in DIGIT_CHARS:
                self._scan_number()
            elif ch == "'":
                self._scan_char_literal()
            elif ch == '"':
                self._scan_string_literal()
            elif ch in OPERATOR_CHARS:
                self._scan_operator()
            elif ch in SEPARATOR_CHARS:
                self._emit(ch, TokenKind.SEPARATOR, self._line, self._column)
                self._advance()
            else:
                logger.debug(f"Skipping unrecognized character {ch!r} at line {self._line}")
                self._advance()

        for index, token in enumerate(self._tokens):
            token.index = index

        return self._tokens, self._comments

    # Character helpers

    def _peek(self, offset: int = 0) -> str:
        position = self._pos + offset
        if position < len(self.text):
            return self.text[position]
        return ""

    def _advance(self, count: int = 1) -> str:
        consumed = self.text[self._pos : self._pos + count]
        for ch in consumed:
            if ch == "\n":
                self._line += 1
                self._column = 1
            else:
                self._column += 1
        self._pos += len(consumed)
        return consumed

    def _emit(self, text: str, kind: TokenKind, line: int, column: int) -> None:
        self._tokens.append(Token(text=text, kind=kind, line=line, column=column))

    # Scanners

    def _scan_line_comment(self) -> None:
        line = self._line
        end = self.text.find("\n", self._pos)
        if end == -1:
            end = len(self.text)
        text = self._advance(end - self._pos).rstrip("\r")
        self._comments.append(Comment(text=text, line=line))

    def _scan_block_comment(self) -> None:
        line = self._line
        end = self.text.find("*/", self._pos + 2)
        if end == -1:
            logger.debug(f"Unterminated block comment starting at line {line}")
            end = len(self.text)
        else:
            end += 2
        text = self._advance(end - self._pos)
        self._comments.append(Comment(text=text, line=line))

    def _scan_word(self) -> None:
        line, column = self._line, self._column
        start = self._pos
        while self._peek() in WORD_CHARS:
            self._advance()
        word = self.text[start : self._pos]

        if is_keyword(word):
            self._emit(word, TokenKind.KEYWORD, line, column)
            if word in NAMESPACE_KEYWORDS:
                self._scan_namespace()
        else:
            self._emit(word, TokenKind.IDENTIFIER, line, column)

    def _scan_namespace(self) -> None:
        """Capture the path following 'package' or 'import' as one token."""
        while self._peek() in (" ", "\t", "\v", "\f", "\r"):
            self._advance()

        line, column = self._line, self._column
        start = self._pos
        while self._pos < len(self.text):
            ch = self.text[self._pos]
            if ch in ("\n", ";") or (ch == "/" and self._peek(1) in ("/", "*")):
                break
            self._advance()

        namespace = self.text[start : self._pos].strip()
        if namespace:
            self._emit(namespace, TokenKind.NAMESPACE, line, column)

    def _scan_number(self) -> None:
        line, column = self._line, self._column
        start = self._pos
        while self._peek() in DIGIT_CHARS:
            self._advance()
        # A fraction needs a digit after the dot so that ranges (0..19) split
        if self._peek() == "." and self._peek(1) in DIGIT_CHARS:
            self._advance()
            while self._peek() in DIGIT_CHARS:
                self._advance()
        if self._peek() in LETTER_CHARS:
            while self._peek() in WORD_CHARS:
                self._advance()
        self._emit(self.text[start : self._pos], TokenKind.NUMBER, line, column)

    def _scan_char_literal(self) -> None:
        line, column = self._line, self._column
        start = self._pos
        self._advance()  # opening quote
        if self._peek() == "\\":
            self._advance(2)
        elif self._peek() not in ("", "\n"):
            self._advance()
        if self._peek() == "'":
            self._advance()
        else:
            logger.debug(f"Unterminated char literal at line {line}")
        self._emit(self.text[start : self._pos], TokenKind.CHAR, line, column)

    def _scan_string_literal(self) -> None:
        line, column = self._line, self._column
        start = self._pos
        self._advance()  # opening quote
        terminated = False
        while self._pos < len(self.text):
            ch = self._peek()
            if ch == "\\":
                self._advance(2)
                continue
            self._advance()
            if ch == '"':
                terminated = True
                break
        if not terminated:
            logger.debug(f"Unterminated string literal starting at line {line}")
        self._emit(self.text[start : self._pos], TokenKind.STRING, line, column)

    def _scan_operator(self) -> None:
        line, column = self._line, self._column
        operator = self._match_multi_char_operator()
        if operator is None:
            operator = self._peek()
        self._advance(len(operator))

        kind = TokenKind.SEPARATOR if operator == ":" else TokenKind.OPERATOR
        self._emit(operator, kind, line, column)

    def _match_multi_char_operator(self) -> Optional[str]:
        for operator in MULTI_CHAR_OPERATORS:
            if self.text.startswith(operator, self._pos):
                return operator
        return None


def tokenize(text: str) -> Tuple[List[Token], List[Comment]]:
    """Tokenize source text.

    Args:
        text: Source text to scan.

    Returns:
        Tuple of (tokens, comments).
    """
    return Lexer(text).tokenize()
