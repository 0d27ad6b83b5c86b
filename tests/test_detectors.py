# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Tests for the detector plugin system and the four diagnostic detectors."""

from typing import List

import pytest

from kotlex.detectors import (
    AssignmentTypeDetector,
    DetectionContext,
    DetectorRegistry,
    DiagnosticDetector,
    MisspelledKeywordDetector,
    RelationalOperatorDetector,
    UndeclaredIdentifierDetector,
    closest_keyword,
    levenshtein,
)
from kotlex.lexer import tokenize
from kotlex.models import Diagnostic, DiagnosticCode
from kotlex.symbols import DeclarationCollector


def build_context(source: str) -> DetectionContext:
    tokens, _ = tokenize(source)
    symbols, _ = DeclarationCollector(tokens).collect()
    return DetectionContext(tokens=tokens, symbols=symbols)


def run(source: str, *detectors: DiagnosticDetector) -> List[Diagnostic]:
    """Dispatch every token to the given detectors in order."""
    context = build_context(source)
    diagnostics: List[Diagnostic] = []
    for index in range(len(context.tokens)):
        for detector in detectors:
            diagnostics.extend(detector.detect(index, context))
    return diagnostics


class MockDetector(DiagnosticDetector):
    """Mock detector for registry tests."""

    def __init__(self, name: str, priority: int):
        self._name = name
        self._priority = priority

    def detect(self, index, context):
        return []

    def priority(self) -> int:
        return self._priority

    def name(self) -> str:
        return self._name

    def code(self) -> DiagnosticCode:
        return DiagnosticCode.E1


class TestDetectorRegistry:
    """Tests for DetectorRegistry."""

    def test_register_detector(self):
        registry = DetectorRegistry()
        registry.register(MockDetector("test", 50))

        assert registry.count() == 1

    def test_register_invalid_detector(self):
        registry = DetectorRegistry()

        with pytest.raises(TypeError):
            registry.register("not a detector")

    def test_priority_ordering(self):
        registry = DetectorRegistry()
        registry.register(MockDetector("low", 10))
        registry.register(MockDetector("high", 100))
        registry.register(MockDetector("medium", 50))

        names = [d.name() for d in registry.get_detectors()]

        assert names == ["high", "medium", "low"]

    def test_equal_priority_ordered_by_name(self):
        registry = DetectorRegistry()
        registry.register(MockDetector("zeta", 50))
        registry.register(MockDetector("alpha", 50))

        assert [d.name() for d in registry.get_detectors()] == ["alpha", "zeta"]

    def test_clear(self):
        registry = DetectorRegistry()
        registry.register(MockDetector("a", 1))
        registry.clear()

        assert registry.count() == 0
        assert registry.get_detectors() == []

    def test_standard_priorities(self):
        registry = DetectorRegistry()
        registry.register(RelationalOperatorDetector())
        registry.register(AssignmentTypeDetector())
        registry.register(MisspelledKeywordDetector())
        registry.register(UndeclaredIdentifierDetector())

        codes = [d.code() for d in registry.get_detectors()]

        assert codes == [
            DiagnosticCode.E2,
            DiagnosticCode.E3,
            DiagnosticCode.E1,
            DiagnosticCode.E4,
        ]


class TestDetectionContext:
    """Tests for DetectionContext helpers."""

    def test_out_of_range_access(self):
        context = build_context("x")

        assert context.token_at(-1) is None
        assert context.token_at(1) is None
        assert context.text_at(5) == ""
        assert context.text_at(0) == "x"

    def test_marks(self):
        context = build_context("x")
        context.mark(0, DiagnosticCode.E2)

        assert context.is_flagged(0, DiagnosticCode.E2)
        assert not context.is_flagged(0, DiagnosticCode.E3)
        assert not context.is_flagged(1, DiagnosticCode.E2)


class TestEditDistance:
    """Tests for levenshtein and closest_keyword."""

    def test_levenshtein(self):
        assert levenshtein("kitten", "sitting") == 3
        assert levenshtein("", "abc") == 3
        assert levenshtein("var", "var") == 0
        assert levenshtein("retrun", "return") == 2

    def test_closest_keyword(self):
        assert closest_keyword("flaot") == "float"
        assert closest_keyword("vaar") == "var"
        assert closest_keyword("dobule") == "double"
        assert closest_keyword("xyzzy") is None

    def test_closest_keyword_respects_distance(self):
        assert closest_keyword("retrun", max_distance=1) is None
        assert closest_keyword("retrun", max_distance=2) == "return"


class TestMisspelledKeywordDetector:
    """Tests for E2."""

    def test_misspelled_keyword(self):
        diagnostics = run("vaar badVar = 5", MisspelledKeywordDetector())

        assert len(diagnostics) == 1
        assert diagnostics[0].code == DiagnosticCode.E2
        assert diagnostics[0].message == "E2-MisspelledKeyword: 'vaar' resembles a keyword"
        assert diagnostics[0].token == "vaar"

    def test_name_after_keyword_not_reported(self):
        assert run("fun mian() {}", MisspelledKeywordDetector()) == []

    def test_declared_name_not_reported(self):
        assert run("var inn = 1\nprintln(inn)", MisspelledKeywordDetector()) == []

    def test_short_identifiers_ignored(self):
        assert run("fr = 1", MisspelledKeywordDetector()) == []

    def test_thresholds(self):
        strict = MisspelledKeywordDetector(max_distance=1)
        long_only = MisspelledKeywordDetector(min_length=5)

        assert run("retrun x", strict) == []
        assert len(run("retrun x", MisspelledKeywordDetector())) == 1
        assert run("iff = 3", long_only) == []

    def test_marks_token(self):
        context = build_context("whiel (x)")
        MisspelledKeywordDetector().detect(0, context)

        assert context.is_flagged(0, DiagnosticCode.E2)


class TestUndeclaredIdentifierDetector:
    """Tests for E3."""

    def test_use_before_declaration(self):
        diagnostics = run("x = 10\nvar x: Int", UndeclaredIdentifierDetector())

        assert len(diagnostics) == 1
        assert diagnostics[0].message == "E3-IdentifierError: 'x' used before declaration"
        assert diagnostics[0].line == 1

    def test_use_after_declaration(self):
        assert run("var x: Int = 1\nx = x + 1", UndeclaredIdentifierDetector()) == []

    def test_member_access_skipped(self):
        source = "val s = \"a\"\nprintln(s.length)\nval n = s?.length\nval r = String::length"

        diagnostics = run(source, UndeclaredIdentifierDetector())

        assert [d.token for d in diagnostics] == ["println"]

    def test_hoisted_function(self):
        assert run("helper()\nfun helper() {}", UndeclaredIdentifierDetector()) == []

    def test_skips_misspelled_keywords(self):
        diagnostics = run(
            "vaar badVar = 5",
            MisspelledKeywordDetector(),
            UndeclaredIdentifierDetector(),
        )

        assert [(d.code, d.token) for d in diagnostics] == [
            (DiagnosticCode.E2, "vaar"),
            (DiagnosticCode.E3, "badVar"),
        ]


class TestAssignmentTypeDetector:
    """Tests for E1 on plain assignments."""

    def test_java_initializer(self):
        diagnostics = run("int a = 3.14;", AssignmentTypeDetector())

        assert [d.message for d in diagnostics] == ["E1-TypeMismatch: int 'a' cannot take '3.14'"]

    def test_reassignment(self):
        diagnostics = run("int x = 5;\nx = \"text\";", AssignmentTypeDetector())

        assert len(diagnostics) == 1
        assert diagnostics[0].line == 2
        assert diagnostics[0].message == "E1-TypeMismatch: int 'x' cannot take '\"text\"'"

    def test_char_initializer(self):
        assert run("char c = 'A';", AssignmentTypeDetector()) == []
        diagnostics = run('char c = "s";', AssignmentTypeDetector())

        assert diagnostics[0].message == (
            "E1-TypeMismatch: char 'c' must take a char literal, got '\"s\"'"
        )

    def test_identifier_value(self):
        diagnostics = run('String s = "a";\nint n = s;', AssignmentTypeDetector())

        assert [d.message for d in diagnostics] == ["E1-TypeMismatch: int 'n' cannot take 's'"]

    def test_negative_numbers(self):
        assert run("int n = -5;", AssignmentTypeDetector()) == []
        diagnostics = run("int n = -2.5;", AssignmentTypeDetector())

        assert diagnostics[0].message == "E1-TypeMismatch: int 'n' cannot take '-2.5'"

    def test_nullable(self):
        assert run("var n: Int? = 1\nn = null", AssignmentTypeDetector()) == []
        diagnostics = run("var m: Int = 1\nm = null", AssignmentTypeDetector())

        assert [d.line for d in diagnostics] == [2]

    def test_kotlin_typed_declaration_left_to_declaration_pass(self):
        assert run("var a: Int = 3.14", AssignmentTypeDetector()) == []

    def test_member_assignment_skipped(self):
        assert run("int x = 1;\nobj.x = \"s\";", AssignmentTypeDetector()) == []

    def test_undeclared_name_skipped(self):
        assert run('y = "text"\nint y = 1;', AssignmentTypeDetector()) == []

    def test_untyped_variable_never_checked(self):
        assert run('var z = 1\nz = "text"', AssignmentTypeDetector()) == []


class TestRelationalOperatorDetector:
    """Tests for E4."""

    def test_valid_comparisons(self):
        source = (
            "var a: Int = 1\nvar b: Int = 2\n"
            "if (a == b) {}\nif (a > -1) {}\nif ((a) < (b)) {}\nif (a != null) {}"
        )

        assert run(source, RelationalOperatorDetector()) == []

    def test_doubled_operator_across_lines(self):
        diagnostics = run(
            "var x: Int = 1\nvar y: Int = 2\nx <\n< y",
            RelationalOperatorDetector(),
        )

        assert [(d.line, d.message) for d in diagnostics] == [
            (3, "E4-RelationalError: Operator '<' has invalid operands"),
            (4, "E4-RelationalError: Operator '<' has invalid operands"),
        ]

    def test_operator_at_stream_edge(self):
        diagnostics = run("==", RelationalOperatorDetector())

        assert diagnostics[0].message == "E4-RelationalError: Operator '==' at invalid position"

    def test_operator_after_assignment(self):
        diagnostics = run("var x: Int = 1\nx = > 5", RelationalOperatorDetector())

        assert [d.token for d in diagnostics] == [">"]

    def test_other_operators_ignored(self):
        assert run("a + + b", RelationalOperatorDetector()) == []
