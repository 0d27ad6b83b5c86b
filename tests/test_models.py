# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Tests for core data models and language tables."""

from pathlib import Path

import pytest

from kotlex.languages import KEYWORDS, Language, is_keyword, is_supported_path, language_for_path
from kotlex.models import (
    AnalysisResult,
    Declaration,
    Diagnostic,
    DiagnosticCode,
    Token,
    TokenKind,
)


class TestTokenKind:
    """Tests for token attribute codes."""

    def test_codes(self):
        assert [kind.code for kind in TokenKind] == [1, 2, 3, 4, 5, 6, 7, 8]
        assert TokenKind.NAMESPACE.value == "NAMESPACE"

    def test_token_to_dict(self):
        token = Token(text="val", kind=TokenKind.KEYWORD, line=3, column=5)

        assert token.to_dict() == {"token": "val", "attribute": "KEYWORD", "line": 3, "column": 5}


class TestDiagnostic:
    """Tests for Diagnostic creation and serialization."""

    def test_prefixes(self):
        assert DiagnosticCode.E1.prefix == "E1-TypeMismatch"
        assert DiagnosticCode.E2.prefix == "E2-MisspelledKeyword"
        assert DiagnosticCode.E3.prefix == "E3-IdentifierError"
        assert DiagnosticCode.E4.prefix == "E4-RelationalError"

    def test_create(self):
        diagnostic = Diagnostic.create(DiagnosticCode.E3, "'x' used before declaration", 9, "x")

        assert diagnostic.message == "E3-IdentifierError: 'x' used before declaration"
        assert diagnostic.line == 9
        assert diagnostic.token == "x"

    def test_dict_round_trip(self):
        diagnostic = Diagnostic.create(DiagnosticCode.E4, "Operator '<' at invalid position", 2, "<")

        assert Diagnostic.from_dict(diagnostic.to_dict()) == diagnostic

    def test_from_dict_rejects_unknown_code(self):
        with pytest.raises(ValueError):
            Diagnostic.from_dict({"code": "E9", "message": "?", "line": 1})

    def test_from_dict_requires_fields(self):
        with pytest.raises(KeyError):
            Diagnostic.from_dict({"code": "E1"})


class TestAnalysisResult:
    """Tests for AnalysisResult helpers."""

    def make_result(self):
        return AnalysisResult(
            filepath="Main.kt",
            language="kotlin",
            tokens=[
                Token(text="b", kind=TokenKind.IDENTIFIER, line=2),
                Token(text="a", kind=TokenKind.IDENTIFIER, line=2),
                Token(text="z", kind=TokenKind.IDENTIFIER, line=1),
            ],
            declarations=[Declaration(name="a", type="Int", line=2, index=1)],
            diagnostics=[
                Diagnostic.create(DiagnosticCode.E3, "'b' used before declaration", 2, "b"),
                Diagnostic.create(DiagnosticCode.E3, "'z' used before declaration", 1, "z"),
            ],
        )

    def test_sorted_tokens(self):
        tokens = self.make_result().sorted_tokens()

        assert [(t.line, t.text) for t in tokens] == [(1, "z"), (2, "a"), (2, "b")]

    def test_summary(self):
        assert self.make_result().summary() == {"E1": 0, "E2": 0, "E3": 2, "E4": 0, "Total": 2}

    def test_empty_summary(self):
        result = AnalysisResult(filepath="x", language="java")

        assert result.summary()["Total"] == 0
        assert result.diagnostics_by_code(DiagnosticCode.E1) == []

    def test_find_declaration(self):
        result = self.make_result()

        assert result.find_declaration("a").type == "Int"
        assert result.find_declaration("missing") is None

    def test_to_dict_keys(self):
        document = self.make_result().to_dict()

        assert set(document) == {
            "file",
            "language",
            "tokens",
            "comments",
            "declarations",
            "diagnostics",
            "summary",
        }
        assert document["declarations"][0]["name"] == "a"


class TestLanguages:
    """Tests for keyword and extension tables."""

    def test_keyword_table(self):
        assert len(KEYWORDS) == 40
        assert is_keyword("lateinit")
        assert is_keyword("Int")
        assert not is_keyword("integer")

    def test_language_for_path(self):
        assert language_for_path(Path("Main.java")) == Language.JAVA
        assert language_for_path(Path("App.KT")) == Language.KOTLIN
        assert language_for_path(Path("build.gradle.kts")) == Language.KOTLIN

    def test_unknown_extension_assumes_kotlin(self, caplog):
        assert language_for_path(Path("notes.txt")) == Language.KOTLIN
        assert "assuming Kotlin" in caplog.text

    def test_is_supported_path(self):
        assert is_supported_path(Path("A.kt"))
        assert not is_supported_path(Path("A.py"))
