# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Assignment type compatibility checks (E1).

Only the first token of the right-hand side is inspected; a leading unary
sign is folded into a following number. Identifiers are classified by
their declared type when the symbol table knows it.
"""

import logging
import re
from typing import TYPE_CHECKING, Optional, Sequence

from kotlex.languages import (
    BOOLEAN_TYPES,
    CHAR_TYPES,
    FLOATING_TYPES,
    INTEGER_TYPES,
    STRING_TYPES,
)
from kotlex.models import UNKNOWN_TYPE, Diagnostic, DiagnosticCode, Token, TokenKind

if TYPE_CHECKING:
    from kotlex.symbols import SymbolTable

logger = logging.getLogger(__name__)

_NUMBER_PATTERN = re.compile(r"^[+-]?(\d+(?:\.\d+)?)([A-Za-z_0-9]*)$")


class ValueClass:
    """Classification of an assigned value.

    Design: Using class constants (not Enum) for plain string comparisons.
    """

    INTEGER = "integer"
    LONG = "long"  # integer literal with an L suffix
    FLOATING = "floating"
    OTHER_NUMBER = "other_number"  # number with an unrecognized suffix
    CHAR = "char"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"
    UNKNOWN = "unknown"


def type_family(type_name: str) -> str:
    """Map a declared type name to a ValueClass family."""
    if type_name in INTEGER_TYPES:
        return ValueClass.INTEGER
    if type_name in FLOATING_TYPES:
        return ValueClass.FLOATING
    if type_name in CHAR_TYPES:
        return ValueClass.CHAR
    if type_name in STRING_TYPES:
        return ValueClass.STRING
    if type_name in BOOLEAN_TYPES:
        return ValueClass.BOOLEAN
    return ValueClass.UNKNOWN


def classify_number(text: str) -> str:
    match = _NUMBER_PATTERN.match(text)
    if match is None:
        return ValueClass.OTHER_NUMBER
    body, suffix = match.groups()
    if "." in body or suffix.lower() in ("f", "d"):
        return ValueClass.FLOATING
    if suffix == "":
        return ValueClass.INTEGER
    if suffix in ("L", "l"):
        return ValueClass.LONG
    return ValueClass.OTHER_NUMBER


def classify_value(token: Token, symbols: Optional["SymbolTable"] = None) -> str:
    """Classify a right-hand side token."""
    if token.kind == TokenKind.NUMBER:
        return classify_number(token.text)
    if token.kind == TokenKind.STRING:
        return ValueClass.STRING
    if token.kind == TokenKind.CHAR:
        return ValueClass.CHAR
    if token.kind == TokenKind.KEYWORD:
        if token.text in ("true", "false"):
            return ValueClass.BOOLEAN
        if token.text == "null":
            return ValueClass.NULL
        return ValueClass.UNKNOWN
    if token.kind == TokenKind.IDENTIFIER and symbols is not None:
        return type_family(symbols.type_of(token.text))
    return ValueClass.UNKNOWN


def fold_value_token(value_tokens: Sequence[Token]) -> Optional[Token]:
    """Return the token representing the assigned value.

    A unary '+' or '-' directly followed by a number is folded into a single
    NUMBER token (e.g. '-' '5' -> '-5').
    """
    if not value_tokens:
        return None
    first = value_tokens[0]
    if (
        first.text in ("-", "+")
        and len(value_tokens) > 1
        and value_tokens[1].kind == TokenKind.NUMBER
    ):
        number = value_tokens[1]
        return Token(
            text=first.text + number.text,
            kind=TokenKind.NUMBER,
            line=first.line,
            column=first.column,
            index=first.index,
        )
    return first


_REJECTED_BY_FAMILY = {
    ValueClass.INTEGER: {
        ValueClass.STRING,
        ValueClass.CHAR,
        ValueClass.FLOATING,
        ValueClass.BOOLEAN,
        ValueClass.OTHER_NUMBER,
    },
    ValueClass.FLOATING: {ValueClass.STRING, ValueClass.CHAR, ValueClass.BOOLEAN},
    ValueClass.BOOLEAN: {
        ValueClass.INTEGER,
        ValueClass.LONG,
        ValueClass.FLOATING,
        ValueClass.OTHER_NUMBER,
        ValueClass.CHAR,
        ValueClass.STRING,
    },
    ValueClass.CHAR: {
        ValueClass.INTEGER,
        ValueClass.LONG,
        ValueClass.FLOATING,
        ValueClass.OTHER_NUMBER,
        ValueClass.STRING,
        ValueClass.BOOLEAN,
    },
}


def is_compatible(declared_type: str, value_class: str, nullable: bool = False) -> bool:
    """Check whether a value of the given class may be assigned to a type.

    Args:
        declared_type: Declared type name with any '?' stripped.
        value_class: ValueClass of the assigned value.
        nullable: Whether the declared type is nullable.

    Returns:
        True if the assignment is accepted.
    """
    family = type_family(declared_type)
    if family in (ValueClass.UNKNOWN, ValueClass.STRING):
        return True

    if value_class == ValueClass.NULL:
        return nullable

    if family == ValueClass.INTEGER and value_class == ValueClass.LONG:
        return declared_type == "Long"

    return value_class not in _REJECTED_BY_FAMILY.get(family, set())


def check_assignment(
    declared_type: str,
    name: str,
    value_tokens: Sequence[Token],
    line: int,
    symbols: Optional["SymbolTable"] = None,
    nullable: bool = False,
) -> Optional[Diagnostic]:
    """Check that the value assigned to a name fits its declared type.

    Args:
        declared_type: Declared type of the name (may end with '?').
        name: Name being assigned.
        value_tokens: Tokens following the '=' (only the first value is used).
        line: Line to report the diagnostic on.
        symbols: Symbol table used to classify identifier values.
        nullable: Whether the declared type is nullable.

    Returns:
        An E1 Diagnostic on mismatch, otherwise None.
    """
    if not declared_type or declared_type == UNKNOWN_TYPE:
        return None

    if declared_type.endswith("?"):
        declared_type = declared_type[:-1]
        nullable = True

    value = fold_value_token(value_tokens)
    if value is None:
        return None

    value_class = classify_value(value, symbols)
    if is_compatible(declared_type, value_class, nullable=nullable):
        return None

    if type_family(declared_type) == ValueClass.CHAR:
        detail = f"{declared_type} '{name}' must take a char literal, got '{value.text}'"
    else:
        detail = f"{declared_type} '{name}' cannot take '{value.text}'"

    logger.debug(f"Type mismatch at line {line}: {detail}")
    return Diagnostic.create(DiagnosticCode.E1, detail, line, token=name)
