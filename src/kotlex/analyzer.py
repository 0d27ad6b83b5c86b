# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Two-pass lexical analyzer for Java and Kotlin sources.

Pipeline:
1. File Reading: UTF-8 with latin-1 fallback, file size limit
2. Tokenization: Lexer produces tokens and comments
3. Declaration Pass: SymbolTable plus E1 checks on typed Kotlin initializers
4. Detector Dispatch: every token goes to every detector in priority order

Diagnostics from the declaration pass come first, followed by detector
diagnostics in token order.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from kotlex.config import Config
from kotlex.detectors import (
    AssignmentTypeDetector,
    DetectionContext,
    DetectorRegistry,
    MisspelledKeywordDetector,
    RelationalOperatorDetector,
    UndeclaredIdentifierDetector,
)
from kotlex.languages import Language, language_for_path
from kotlex.lexer import Lexer
from kotlex.models import AnalysisResult, Diagnostic, DiagnosticCode
from kotlex.symbols import DeclarationCollector

logger = logging.getLogger(__name__)


class AnalysisError(Exception):
    """Raised when a file cannot be analyzed (missing, unreadable, too large)."""

    pass


def default_registry(config: Optional[Config] = None) -> DetectorRegistry:
    """Build a registry holding the four standard detectors.

    Args:
        config: Supplies the misspelled-keyword thresholds. If None, the
            detector defaults are used.
    """
    registry = DetectorRegistry()
    if config is None:
        registry.register(MisspelledKeywordDetector())
    else:
        registry.register(
            MisspelledKeywordDetector(
                max_distance=config.max_keyword_distance,
                min_length=config.min_keyword_length,
            )
        )
    registry.register(UndeclaredIdentifierDetector())
    registry.register(AssignmentTypeDetector())
    registry.register(RelationalOperatorDetector())
    return registry


class LexicalAnalyzer:
    """Tokenizes a source file and reports E1-E4 diagnostics.

    Usage:
        analyzer = LexicalAnalyzer(Config())
        result = analyzer.analyze_file("Input.kt")
        print(result.summary())
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        registry: Optional[DetectorRegistry] = None,
    ):
        """Initialize the analyzer.

        Args:
            config: Analyzer configuration. If None, loads from default location.
            registry: Detector registry. If None, uses default_registry(config).
        """
        self.config = config if config is not None else Config()
        self.registry = registry if registry is not None else default_registry(self.config)
        self._disabled = {DiagnosticCode(code) for code in self.config.disabled_checks}

    def analyze_file(self, filepath: Union[str, Path]) -> AnalysisResult:
        """Analyze a source file.

        Args:
            filepath: Path to a .java or .kt file.

        Returns:
            AnalysisResult for the file.

        Raises:
            AnalysisError: If the file is missing, unreadable or too large.
        """
        path = Path(filepath)
        text = self._read_file(path)
        return self.analyze_source(text, filepath=str(path), language=language_for_path(path))

    def analyze_source(
        self,
        text: str,
        filepath: str = "<string>",
        language: Optional[Language] = None,
    ) -> AnalysisResult:
        """Analyze source text.

        Args:
            text: Source text.
            filepath: Name used in the result and in log messages.
            language: Source language. Defaults to Kotlin.

        Returns:
            AnalysisResult with tokens, comments, declarations and diagnostics.
        """
        language = language or Language.KOTLIN

        tokens, comments = Lexer(text).tokenize()
        symbols, declaration_diagnostics = DeclarationCollector(tokens).collect()

        context = DetectionContext(tokens=tokens, symbols=symbols)
        diagnostics = declaration_diagnostics + self._dispatch_detectors(filepath, context)
        diagnostics = [d for d in diagnostics if d.code not in self._disabled]

        result = AnalysisResult(
            filepath=filepath,
            language=language.value,
            tokens=tokens,
            comments=comments,
            declarations=symbols.declarations(),
            diagnostics=diagnostics,
        )

        logger.info(
            f"Analyzed {filepath}: {len(tokens)} tokens, {len(comments)} comments, "
            f"{len(diagnostics)} diagnostics",
            extra={
                "extra_fields": {
                    "file": filepath,
                    "language": language.value,
                    "tokens": len(tokens),
                    "comments": len(comments),
                    "diagnostics": result.summary(),
                }
            },
        )
        return result

    def _read_file(self, path: Path) -> str:
        """Read file with UTF-8/latin-1 fallback and size limit."""
        try:
            if not path.is_file():
                raise AnalysisError(f"Could not open {path}: file not found")

            file_size = path.stat().st_size
            if file_size > self.config.max_file_size_bytes:
                raise AnalysisError(
                    f"Skipping analysis of {path}: {file_size} bytes "
                    f"exceeds limit ({self.config.max_file_size_bytes})"
                )

            try:
                return path.read_text(encoding="utf-8")
            except UnicodeDecodeError:
                logger.warning(f"File {path} is not UTF-8, using latin-1 fallback encoding")
                return path.read_text(encoding="latin-1")

        except PermissionError as e:
            raise AnalysisError(f"Permission denied reading file: {path}") from e
        except OSError as e:
            raise AnalysisError(f"Could not read {path}: {e}") from e

    def _dispatch_detectors(self, filepath: str, context: DetectionContext) -> List[Diagnostic]:
        """Dispatch each token to the registered detectors.

        Error Recovery:
        - Detector exceptions: Log error, continue with other detectors
        """
        diagnostics: List[Diagnostic] = []
        detectors = self.registry.get_detectors()

        for index in range(len(context.tokens)):
            for detector in detectors:
                try:
                    diagnostics.extend(detector.detect(index, context))
                except Exception as e:
                    logger.error(
                        f"Error in detector '{detector.name()}' for {filepath} "
                        f"at token {index}: {e}"
                    )

        return diagnostics
