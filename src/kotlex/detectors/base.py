# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Base interface for diagnostic detector plugins.

Each detector inspects one token at a time (with access to the whole token
stream and the symbol table) and reports zero or more diagnostics. The
analyzer walks the token stream once and dispatches every token to every
registered detector in priority order.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from kotlex.models import Diagnostic, DiagnosticCode, Token
from kotlex.symbols import SymbolTable


@dataclass
class DetectionContext:
    """Shared state for one detection pass.

    Attributes:
        tokens: Complete token stream
        symbols: Symbol table built by the declaration pass
        flagged: Diagnostic codes already reported per token index
    """

    tokens: List[Token]
    symbols: SymbolTable
    flagged: Dict[int, Set[DiagnosticCode]] = field(default_factory=dict)

    def token_at(self, index: int) -> Optional[Token]:
        if 0 <= index < len(self.tokens):
            return self.tokens[index]
        return None

    def text_at(self, index: int) -> str:
        token = self.token_at(index)
        return token.text if token else ""

    def mark(self, index: int, code: DiagnosticCode) -> None:
        self.flagged.setdefault(index, set()).add(code)

    def is_flagged(self, index: int, code: DiagnosticCode) -> bool:
        return code in self.flagged.get(index, set())


class DiagnosticDetector(ABC):
    """Abstract base class for diagnostic detector plugins.

    Design:
    - Detectors keep no per-file state; everything lives in DetectionContext
    - Higher priority detectors run first for each token
    - Detectors MUST NOT raise; the analyzer logs and skips a failing detector
    """

    @abstractmethod
    def detect(self, index: int, context: DetectionContext) -> List[Diagnostic]:
        """Inspect the token at index.

        Args:
            index: Position of the token in context.tokens.
            context: Shared detection state.

        Returns:
            Diagnostics for this token. Empty list if none.
        """
        pass

    @abstractmethod
    def priority(self) -> int:
        """Return detector priority. Higher values execute first."""
        pass

    @abstractmethod
    def name(self) -> str:
        """Return detector name for logging and debugging."""
        pass

    @abstractmethod
    def code(self) -> DiagnosticCode:
        """Return the diagnostic code this detector reports."""
        pass
