# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Core data models for the kotlex lexical analyzer.

This module defines the data structures shared by the lexer, the
declaration pass, the diagnostic detectors and the report layer:
- TokenKind: Attribute assigned to every token in the symbol table
- Token: A single lexeme with its attribute and position
- Comment: A line or block comment collected during tokenization
- Declaration: A name introduced by a declaration, with its declared type
- DiagnosticCode: The four diagnostic categories (E1-E4)
- Diagnostic: A reported problem at a given line
- AnalysisResult: Everything produced by analyzing one source file

All models serialize to JSON-compatible primitives via to_dict().
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# Type recorded for names whose declared type could not be determined
UNKNOWN_TYPE = "UNKNOWN"


class TokenKind(Enum):
    """Attribute of a token in the symbol table.

    The numeric code is the attribute number printed in the symbol
    table report (1 = keyword ... 8 = namespace).
    """

    KEYWORD = "KEYWORD"
    IDENTIFIER = "IDENTIFIER"
    NUMBER = "NUMBER"
    OPERATOR = "OPERATOR"
    SEPARATOR = "SEPARATOR"
    STRING = "STRING"
    CHAR = "CHAR"
    NAMESPACE = "NAMESPACE"

    @property
    def code(self) -> int:
        """Numeric attribute code (1-8)."""
        return _TOKEN_KIND_CODES[self]


_TOKEN_KIND_CODES: Dict[TokenKind, int] = {
    TokenKind.KEYWORD: 1,
    TokenKind.IDENTIFIER: 2,
    TokenKind.NUMBER: 3,
    TokenKind.OPERATOR: 4,
    TokenKind.SEPARATOR: 5,
    TokenKind.STRING: 6,
    TokenKind.CHAR: 7,
    TokenKind.NAMESPACE: 8,
}


@dataclass
class Token:
    """A lexeme produced by the lexer.

    Attributes:
        text: Exact source text of the token (literals keep their quotes)
        kind: Token attribute
        line: 1-based line of the first character
        column: 1-based column of the first character
        index: Position of the token in the token stream
    """

    text: str
    kind: TokenKind
    line: int
    column: int = 1
    index: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "token": self.text,
            "attribute": self.kind.value,
            "line": self.line,
            "column": self.column,
        }


@dataclass
class Comment:
    """A comment collected during tokenization (delimiters included)."""

    text: str
    line: int

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "line": self.line}


@dataclass
class Declaration:
    """A name introduced by a declaration.

    Attributes:
        name: Declared name
        type: Declared type with any nullable marker stripped, or UNKNOWN
        line: Line of the declared name
        index: Token index of the declared name
        nullable: Whether the declared type carried a trailing '?'
        hoisted: Whether the name is visible before its declaration
                 (functions, classes and objects)
    """

    name: str
    type: str
    line: int
    index: int
    nullable: bool = False
    hoisted: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "line": self.line,
            "nullable": self.nullable,
            "hoisted": self.hoisted,
        }


class DiagnosticCode(Enum):
    """Diagnostic categories reported by the analyzer."""

    E1 = "E1"  # type mismatch
    E2 = "E2"  # misspelled keyword
    E3 = "E3"  # identifier used before declaration
    E4 = "E4"  # misplaced relational operator

    @property
    def category(self) -> str:
        """Category name used in diagnostic messages."""
        return _DIAGNOSTIC_CATEGORIES[self]

    @property
    def prefix(self) -> str:
        """Message prefix, e.g. 'E1-TypeMismatch'."""
        return f"{self.value}-{self.category}"


_DIAGNOSTIC_CATEGORIES: Dict[DiagnosticCode, str] = {
    DiagnosticCode.E1: "TypeMismatch",
    DiagnosticCode.E2: "MisspelledKeyword",
    DiagnosticCode.E3: "IdentifierError",
    DiagnosticCode.E4: "RelationalError",
}


@dataclass
class Diagnostic:
    """A problem reported by the analyzer.

    Attributes:
        code: Diagnostic category
        message: Full message including the category prefix
        line: Line the problem was found on
        token: Text of the offending token
    """

    code: DiagnosticCode
    message: str
    line: int
    token: str = ""

    @classmethod
    def create(cls, code: DiagnosticCode, detail: str, line: int, token: str = "") -> "Diagnostic":
        """Build a diagnostic whose message is '<prefix>: <detail>'."""
        return cls(code=code, message=f"{code.prefix}: {detail}", line=line, token=token)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "line": self.line,
            "token": self.token,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Diagnostic":
        """Create a Diagnostic from its dictionary form.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If the code is not one of E1-E4.
        """
        return cls(
            code=DiagnosticCode(data["code"]),
            message=data["message"],
            line=data["line"],
            token=data.get("token", ""),
        )


@dataclass
class AnalysisResult:
    """Output of analyzing a single source text."""

    filepath: str
    language: str
    tokens: List[Token] = field(default_factory=list)
    comments: List[Comment] = field(default_factory=list)
    declarations: List[Declaration] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def sorted_tokens(self) -> List[Token]:
        """Tokens ordered by line, then by token text."""
        return sorted(self.tokens, key=lambda t: (t.line, t.text))

    def diagnostics_by_code(self, code: DiagnosticCode) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.code == code]

    def summary(self) -> Dict[str, int]:
        """Diagnostic counts per code plus a 'Total' entry."""
        counts: Dict[str, int] = {code.value: 0 for code in DiagnosticCode}
        for diagnostic in self.diagnostics:
            counts[diagnostic.code.value] += 1
        counts["Total"] = len(self.diagnostics)
        return counts

    def find_declaration(self, name: str) -> Optional[Declaration]:
        for declaration in self.declarations:
            if declaration.name == name:
                return declaration
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.filepath,
            "language": self.language,
            "tokens": [t.to_dict() for t in self.sorted_tokens()],
            "comments": [c.to_dict() for c in self.comments],
            "declarations": [d.to_dict() for d in self.declarations],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "summary": self.summary(),
        }
