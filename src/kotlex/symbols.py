# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Declaration tracking.

This module implements the declaration pass that runs over the token stream
before diagnostic detection:
- SymbolTable: Declared names with their types (first declaration wins)
- DeclarationCollector: Recognizes Java and Kotlin declaration forms

Recognized declaration forms:
- Java style:   <type-or-declaring-keyword> NAME      (int x, fun main, class Foo)
                <type> NAME (                         (method, hoisted)
- Kotlin:       var|val NAME : TYPE [?] [= VALUE]
- Kotlin:       var|val NAME = VALUE                  (type UNKNOWN)
- Parameters:   ( NAME : TYPE   or   , NAME : TYPE
- Loops:        ( NAME in

Typed Kotlin initializers are type-checked here, since the declared type and
the value are adjacent in the token stream.
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from kotlex.languages import (
    DECLARING_KEYWORDS,
    HOISTING_KEYWORDS,
    KOTLIN_VARIABLE_KEYWORDS,
)
from kotlex.models import UNKNOWN_TYPE, Declaration, Diagnostic, Token, TokenKind
from kotlex.type_checker import check_assignment

logger = logging.getLogger(__name__)


class SymbolTable:
    """Declared names keyed by name.

    The first declaration of a name wins; later declarations of the same
    name are ignored (there is no block scoping).
    """

    def __init__(self) -> None:
        self._declarations: Dict[str, Declaration] = {}

    def declare(self, declaration: Declaration) -> bool:
        """Record a declaration.

        Returns:
            True if the name was new, False if it was already declared.
        """
        if declaration.name in self._declarations:
            return False
        self._declarations[declaration.name] = declaration
        logger.debug(
            f"Declared '{declaration.name}' as {declaration.type} at line {declaration.line}"
        )
        return True

    def get(self, name: str) -> Optional[Declaration]:
        return self._declarations.get(name)

    def is_declared(self, name: str) -> bool:
        """Check whether a name is declared anywhere in the file."""
        return name in self._declarations

    def is_visible(self, name: str, index: int) -> bool:
        """Check whether a name is usable at a token position.

        Hoisted names are visible everywhere; others from their declaring
        token onwards.
        """
        declaration = self._declarations.get(name)
        if declaration is None:
            return False
        return declaration.hoisted or declaration.index <= index

    def type_of(self, name: str) -> str:
        declaration = self._declarations.get(name)
        return declaration.type if declaration else UNKNOWN_TYPE

    def declarations(self) -> List[Declaration]:
        """All declarations in declaration order."""
        return list(self._declarations.values())

    def __contains__(self, name: object) -> bool:
        return name in self._declarations

    def __iter__(self) -> Iterator[Declaration]:
        return iter(self._declarations.values())

    def __len__(self) -> int:
        return len(self._declarations)


class DeclarationCollector:
    """Builds a SymbolTable from a token stream.

    Usage:
        symbols, diagnostics = DeclarationCollector(tokens).collect()
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.symbols = SymbolTable()
        self._diagnostics: List[Diagnostic] = []

    def collect(self) -> Tuple[SymbolTable, List[Diagnostic]]:
        """Run the declaration pass.

        Returns:
            Tuple of (symbol table, E1 diagnostics from typed initializers).
        """
        for index, token in enumerate(self.tokens):
            if token.kind == TokenKind.KEYWORD:
                if token.text in KOTLIN_VARIABLE_KEYWORDS:
                    self._collect_kotlin_variable(index)
                elif token.text in DECLARING_KEYWORDS:
                    self._collect_java_style(index)
            elif token.kind == TokenKind.IDENTIFIER:
                self._collect_parameter_or_loop_variable(index)

        logger.debug(f"Collected {len(self.symbols)} declarations")
        return self.symbols, self._diagnostics

    def _at(self, index: int) -> Optional[Token]:
        if 0 <= index < len(self.tokens):
            return self.tokens[index]
        return None

    def _text_at(self, index: int) -> str:
        token = self._at(index)
        return token.text if token else ""

    def _declare(
        self,
        name_token: Token,
        type_name: str,
        nullable: bool = False,
        hoisted: bool = False,
    ) -> None:
        self.symbols.declare(
            Declaration(
                name=name_token.text,
                type=type_name,
                line=name_token.line,
                index=name_token.index,
                nullable=nullable,
                hoisted=hoisted,
            )
        )

    def _collect_java_style(self, index: int) -> None:
        keyword = self.tokens[index]
        name = self._at(index + 1)
        if name is None or name.kind != TokenKind.IDENTIFIER:
            return
        # ': Int' annotates the preceding Kotlin name; the next identifier is unrelated
        if self._text_at(index - 1) == ":":
            return
        # 'int helper(' declares a method, visible throughout the file
        hoisted = keyword.text in HOISTING_KEYWORDS or self._text_at(index + 2) == "("
        self._declare(name, keyword.text, hoisted=hoisted)

    def _collect_kotlin_variable(self, index: int) -> None:
        name = self._at(index + 1)
        if name is None or name.kind != TokenKind.IDENTIFIER:
            return

        if self._text_at(index + 2) == ":" and self._at(index + 3) is not None:
            type_token = self.tokens[index + 3]
            type_name, nullable, after_type = self._read_type(index + 3)
            self._declare(name, type_name, nullable=nullable)

            if self._text_at(after_type) == "=" and self._at(after_type + 1) is not None:
                diagnostic = check_assignment(
                    type_name,
                    name.text,
                    self.tokens[after_type + 1 : after_type + 3],
                    name.line,
                    symbols=self.symbols,
                    nullable=nullable,
                )
                if diagnostic is not None:
                    self._diagnostics.append(diagnostic)
            logger.debug(f"Kotlin declaration '{name.text}: {type_token.text}'")
        else:
            self._declare(name, UNKNOWN_TYPE)

    def _read_type(self, index: int) -> Tuple[str, bool, int]:
        """Read a type annotation starting at index.

        Returns:
            Tuple of (type name without '?', nullable, index after the type).
        """
        type_name = self.tokens[index].text
        nullable = False
        after = index + 1
        if type_name.endswith("?"):
            type_name = type_name[:-1]
            nullable = True
        elif self._text_at(after) == "?":
            nullable = True
            after += 1
        return type_name, nullable, after

    def _collect_parameter_or_loop_variable(self, index: int) -> None:
        previous = self._text_at(index - 1)
        if previous not in ("(", ","):
            return

        name = self.tokens[index]
        following = self._at(index + 1)
        if following is None:
            return

        if following.text == ":" and self._at(index + 2) is not None:
            type_name, nullable, _ = self._read_type(index + 2)
            self._declare(name, type_name, nullable=nullable)
        elif previous == "(" and following.kind == TokenKind.KEYWORD and following.text == "in":
            self._declare(name, UNKNOWN_TYPE)
