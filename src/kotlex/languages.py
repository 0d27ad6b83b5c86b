# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Language tables for Java and Kotlin sources.

The analyzer uses one combined keyword table for both languages; the
language only affects which fixture the interactive mode picks and how
results are labelled.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, Tuple

logger = logging.getLogger(__name__)


class Language(Enum):
    """Source languages understood by the analyzer."""

    JAVA = "java"
    KOTLIN = "kotlin"


SUPPORTED_EXTENSIONS: Dict[str, Language] = {
    ".java": Language.JAVA,
    ".kt": Language.KOTLIN,
    ".kts": Language.KOTLIN,
}

# Combined Java + Kotlin keywords and built-in type names
KEYWORDS: Tuple[str, ...] = (
    # Java
    "int", "float", "double", "char", "if", "else", "for", "while", "class",
    "public", "private", "return", "static", "void", "new",
    # Kotlin
    "fun", "var", "val", "when", "is", "in", "object", "null", "true", "false",
    "package", "import", "override", "data", "sealed", "lateinit",
    # Kotlin built-in types
    "Int", "Float", "Double", "Char", "String", "Boolean", "Long", "Short", "Byte",
)  # fmt: skip

_KEYWORD_SET: FrozenSet[str] = frozenset(KEYWORDS)

INTEGER_TYPES: FrozenSet[str] = frozenset({"int", "Int", "Long", "Short", "Byte"})
FLOATING_TYPES: FrozenSet[str] = frozenset({"float", "Float", "double", "Double"})
CHAR_TYPES: FrozenSet[str] = frozenset({"char", "Char"})
STRING_TYPES: FrozenSet[str] = frozenset({"String"})
BOOLEAN_TYPES: FrozenSet[str] = frozenset({"Boolean"})

TYPE_KEYWORDS: FrozenSet[str] = (
    INTEGER_TYPES | FLOATING_TYPES | CHAR_TYPES | STRING_TYPES | BOOLEAN_TYPES
)

# Keywords that introduce a name visible before its declaration
HOISTING_KEYWORDS: FrozenSet[str] = frozenset({"class", "fun", "object", "void"})

# A keyword from this set followed by an identifier declares that identifier
DECLARING_KEYWORDS: FrozenSet[str] = TYPE_KEYWORDS | HOISTING_KEYWORDS

KOTLIN_VARIABLE_KEYWORDS: FrozenSet[str] = frozenset({"var", "val"})

NAMESPACE_KEYWORDS: FrozenSet[str] = frozenset({"package", "import"})

RELATIONAL_OPERATORS: FrozenSet[str] = frozenset({"<", ">", "<=", ">=", "==", "!="})

LITERAL_KEYWORDS: FrozenSet[str] = frozenset({"true", "false", "null"})


def is_keyword(word: str) -> bool:
    """Check whether a word is a Java or Kotlin keyword."""
    return word in _KEYWORD_SET


def language_for_path(path: Path) -> Language:
    """Determine the source language from a file extension.

    Unknown extensions are treated as Kotlin.
    """
    language = SUPPORTED_EXTENSIONS.get(path.suffix.lower())
    if language is None:
        logger.warning(f"Unrecognized extension '{path.suffix}' for {path}, assuming Kotlin")
        return Language.KOTLIN
    return language


def is_supported_path(path: Path) -> bool:
    return path.suffix.lower() in SUPPORTED_EXTENSIONS
