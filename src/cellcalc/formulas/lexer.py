"""Lark-based lexer producing the token stream consumed by the parser.

Only lark's lexer is used; the grammar's single rule accepts any token
sequence so that structure is left entirely to ``FormulaParser``.
"""

from __future__ import annotations

from lark import Lark
from lark.exceptions import UnexpectedInput

from cellcalc.formulas.errors import FormulaParseError
from cellcalc.formulas.tokens import Token, TokenType

# CELL_REF outranks NAME so that "A1" is a reference, not a name followed
# by a number.
GRAMMAR = r"""
start: (NUMBER | CELL_REF | NAME | LPAREN | RPAREN | OPERATOR | COMMA)*

CELL_REF.2: /[A-Z][0-9]+/
NAME.1: /[A-Za-z_][A-Za-z0-9_]*/
NUMBER: /[0-9]+(\.[0-9]+)?/ | /\.[0-9]+/
LPAREN: "("
RPAREN: ")"
OPERATOR: /[+\-*\/]/
COMMA: ","

%import common.WS
%ignore WS
"""

_lexer = Lark(GRAMMAR, parser="lalr", lexer="basic", start="start")

_TYPE_MAP: dict[str, TokenType] = {
    "NUMBER": TokenType.NUMBER,
    "CELL_REF": TokenType.CELL_REFERENCE,
    "NAME": TokenType.FUNCTION_NAME,
    "LPAREN": TokenType.PARENTHESIS,
    "RPAREN": TokenType.PARENTHESIS,
    "OPERATOR": TokenType.OPERATOR,
    "COMMA": TokenType.SEPARATOR,
}


def tokenize(text: str) -> list[Token]:
    """Split formula text into tokens.

    A leading ``=`` is optional and dropped. Whitespace is ignored.

    Args:
        text: The formula text, e.g. ``"=MAX(A1, 2) * 3"``.

    Returns:
        The token sequence in source order.

    Raises:
        FormulaParseError: If the text contains a character no token
            can start with.
    """
    text = text.strip()
    offset = 0
    if text.startswith("="):
        text = text[1:]
        offset = 1
    try:
        return [Token(_TYPE_MAP[tok.type], str(tok)) for tok in _lexer.lex(text)]
    except UnexpectedInput as exc:
        pos = getattr(exc, "column", None)
        if pos is not None:
            pos = pos - 1 + offset
        raise FormulaParseError(f"Unexpected character in formula: {exc}", position=pos) from exc
