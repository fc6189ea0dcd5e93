"""Tests for the lark-based formula lexer."""

from __future__ import annotations

import pytest

from cellcalc.formulas import FormulaParseError, Token, TokenType, tokenize


class TestTokenize:
    def test_mixed_formula(self) -> None:
        assert tokenize("=MAX(A1, 2.5) * 3") == [
            Token(TokenType.FUNCTION_NAME, "MAX"),
            Token(TokenType.PARENTHESIS, "("),
            Token(TokenType.CELL_REFERENCE, "A1"),
            Token(TokenType.SEPARATOR, ","),
            Token(TokenType.NUMBER, "2.5"),
            Token(TokenType.PARENTHESIS, ")"),
            Token(TokenType.OPERATOR, "*"),
            Token(TokenType.NUMBER, "3"),
        ]

    def test_leading_equals_is_optional(self) -> None:
        assert tokenize("=1+2") == tokenize("1+2")

    def test_whitespace_ignored(self) -> None:
        assert tokenize("  1 +\t2 ") == tokenize("1+2")

    def test_cell_reference_beats_name(self) -> None:
        toks = tokenize("B12")
        assert toks == [Token(TokenType.CELL_REFERENCE, "B12")]

    def test_lowercase_function_name(self) -> None:
        assert tokenize("sin(0)")[0] == Token(TokenType.FUNCTION_NAME, "sin")

    def test_all_operators(self) -> None:
        types = {t.type for t in tokenize("1+2-3*4/5")}
        assert types == {TokenType.NUMBER, TokenType.OPERATOR}

    def test_empty_text(self) -> None:
        assert tokenize("") == []
        assert tokenize("=") == []

    def test_unexpected_character(self) -> None:
        with pytest.raises(FormulaParseError) as exc_info:
            tokenize("1 $ 2")
        assert exc_info.value.position == 2

    def test_unexpected_character_position_counts_equals(self) -> None:
        with pytest.raises(FormulaParseError) as exc_info:
            tokenize("=1 $ 2")
        assert exc_info.value.position == 3


class TestToken:
    def test_tokens_are_immutable(self) -> None:
        tok = Token(TokenType.NUMBER, "1")
        with pytest.raises(Exception):
            tok.value = "2"  # type: ignore[misc]

    def test_equality_and_hash(self) -> None:
        a = Token(TokenType.PARENTHESIS, "(")
        b = Token(TokenType.PARENTHESIS, "(")
        assert a == b
        assert hash(a) == hash(b)
        assert a != Token(TokenType.OPERATOR, "(")

    def test_is_char(self) -> None:
        assert Token(TokenType.OPERATOR, "+").is_char("+")
        assert not Token(TokenType.NUMBER, "12").is_char("1")
