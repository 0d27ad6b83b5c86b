# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Lexical analyzer and diagnostic checker for Java and Kotlin sources."""

from .analyzer import AnalysisError, LexicalAnalyzer, default_registry
from .config import Config, ConfigurationError
from .languages import KEYWORDS, Language
from .lexer import Lexer, tokenize
from .models import (
    AnalysisResult,
    Comment,
    Declaration,
    Diagnostic,
    DiagnosticCode,
    Token,
    TokenKind,
)
from .report import ReportRenderer, format_json
from .symbols import DeclarationCollector, SymbolTable

__version__ = "0.1.0"

__all__ = [
    "LexicalAnalyzer",
    "AnalysisError",
    "default_registry",
    "Config",
    "ConfigurationError",
    "Language",
    "KEYWORDS",
    "Lexer",
    "tokenize",
    "AnalysisResult",
    "Comment",
    "Declaration",
    "Diagnostic",
    "DiagnosticCode",
    "Token",
    "TokenKind",
    "ReportRenderer",
    "format_json",
    "SymbolTable",
    "DeclarationCollector",
]
