# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Tests for the lexer."""

from kotlex.lexer import Lexer, tokenize
from kotlex.models import TokenKind


def texts(tokens):
    return [t.text for t in tokens]


class TestBasicTokens:
    """Tests for identifiers, keywords and positions."""

    def test_kotlin_declaration(self):
        tokens, comments = tokenize("var x: Int = 10")

        assert texts(tokens) == ["var", "x", ":", "Int", "=", "10"]
        assert [t.kind for t in tokens] == [
            TokenKind.KEYWORD,
            TokenKind.IDENTIFIER,
            TokenKind.SEPARATOR,
            TokenKind.KEYWORD,
            TokenKind.OPERATOR,
            TokenKind.NUMBER,
        ]
        assert comments == []

    def test_columns_and_lines(self):
        tokens, _ = tokenize("var x: Int = 10\n  y")

        assert [t.column for t in tokens] == [1, 5, 6, 8, 12, 14, 3]
        assert tokens[-1].line == 2

    def test_indices_are_sequential(self):
        tokens, _ = tokenize("a + b\nc")

        assert [t.index for t in tokens] == [0, 1, 2, 3]

    def test_carriage_returns_ignored(self):
        tokens, _ = tokenize("a\r\nb")

        assert texts(tokens) == ["a", "b"]
        assert tokens[1].line == 2

    def test_unrecognized_characters_skipped(self):
        tokens, _ = tokenize("@Override x $ y")

        assert texts(tokens) == ["Override", "x", "y"]

    def test_non_ascii_letters_and_digits_skipped(self):
        tokens, _ = tokenize("caf\u00e9 = x\u0663 + 10\u00e9")

        assert texts(tokens) == ["caf", "=", "x", "+", "10"]
        assert tokens[0].kind == TokenKind.IDENTIFIER
        assert tokens[4].kind == TokenKind.NUMBER

    def test_underscore_identifier(self):
        tokens, _ = tokenize("_private_1")

        assert tokens[0].text == "_private_1"
        assert tokens[0].kind == TokenKind.IDENTIFIER


class TestComments:
    """Tests for comment collection."""

    def test_line_and_block_comments(self):
        tokens, comments = tokenize("// hello\nx /* block\n comment */ y")

        assert texts(tokens) == ["x", "y"]
        assert comments[0].text == "// hello"
        assert comments[0].line == 1
        assert comments[1].text == "/* block\n comment */"
        assert comments[1].line == 2
        assert tokens[1].line == 3

    def test_unterminated_block_comment_runs_to_end(self):
        tokens, comments = tokenize("x /* never closed\ny")

        assert texts(tokens) == ["x"]
        assert comments[0].text == "/* never closed\ny"

    def test_division_is_not_a_comment(self):
        tokens, comments = tokenize("a / b")

        assert texts(tokens) == ["a", "/", "b"]
        assert comments == []


class TestNamespaces:
    """Tests for package/import capture."""

    def test_package_and_import(self):
        tokens, _ = tokenize("package com.example.test\nimport kotlin.text.StringBuilder;\n")

        assert texts(tokens) == [
            "package",
            "com.example.test",
            "import",
            "kotlin.text.StringBuilder",
            ";",
        ]
        assert tokens[1].kind == TokenKind.NAMESPACE
        assert tokens[3].kind == TokenKind.NAMESPACE
        assert tokens[3].line == 2

    def test_trailing_comment_not_part_of_namespace(self):
        tokens, comments = tokenize("import foo.Bar // note")

        assert texts(tokens) == ["import", "foo.Bar"]
        assert comments[0].text == "// note"

    def test_import_without_path(self):
        tokens, _ = tokenize("import\nx")

        assert texts(tokens) == ["import", "x"]
        assert tokens[1].kind == TokenKind.IDENTIFIER


class TestLiterals:
    """Tests for numbers, chars and strings."""

    def test_numbers_with_suffixes(self):
        tokens, _ = tokenize("2.5f 3.14 10L 42")

        assert texts(tokens) == ["2.5f", "3.14", "10L", "42"]
        assert all(t.kind == TokenKind.NUMBER for t in tokens)

    def test_range_splits_numbers(self):
        tokens, _ = tokenize("0..19")

        assert texts(tokens) == ["0", "..", "19"]
        assert tokens[1].kind == TokenKind.OPERATOR

    def test_char_literals(self):
        tokens, _ = tokenize("'A' '\\n'")

        assert texts(tokens) == ["'A'", "'\\n'"]
        assert all(t.kind == TokenKind.CHAR for t in tokens)

    def test_unterminated_char_literal(self):
        tokens, _ = tokenize("'a x")

        assert texts(tokens) == ["'a", "x"]
        assert tokens[0].kind == TokenKind.CHAR
        assert tokens[1].kind == TokenKind.IDENTIFIER

    def test_string_with_escaped_quote(self):
        tokens, _ = tokenize('"hi \\"there\\"" x')

        assert tokens[0].text == '"hi \\"there\\""'
        assert tokens[0].kind == TokenKind.STRING
        assert tokens[1].text == "x"

    def test_unterminated_string(self):
        tokens, _ = tokenize('"abc')

        assert texts(tokens) == ['"abc']

    def test_multiline_string_keeps_start_line(self):
        tokens, _ = tokenize('"a\nb" c')

        assert tokens[0].line == 1
        assert tokens[1].line == 2


class TestOperators:
    """Tests for operators and separators."""

    def test_multi_character_operators(self):
        source = "a ?: b?.c == d != e <= f >= g && h || i === j -> k :: l !== m"
        tokens, _ = tokenize(source)

        operators = [t.text for t in tokens if t.kind == TokenKind.OPERATOR]
        assert operators == ["?:", "?.", "==", "!=", "<=", ">=", "&&", "||", "===", "->", "::", "!=="]

    def test_increment_and_compound_assignment(self):
        tokens, _ = tokenize("i++ j += 2")

        assert texts(tokens) == ["i", "++", "j", "+=", "2"]

    def test_lone_colon_is_separator(self):
        tokens, _ = tokenize("x : Int")

        assert tokens[1].kind == TokenKind.SEPARATOR

    def test_separators(self):
        tokens, _ = tokenize("{ } [ ] ; ,")

        assert texts(tokens) == ["{", "}", "[", "]", ";", ","]
        assert all(t.kind == TokenKind.SEPARATOR for t in tokens)


def test_lexer_class_and_function_agree():
    source = "fun main() { val s: String = \"x\" }"
    assert texts(Lexer(source).tokenize()[0]) == texts(tokenize(source)[0])
