"""Token model shared by the lexer and the formula parser."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class TokenType(str, Enum):
    NUMBER = "NUMBER"
    CELL_REFERENCE = "CELL_REFERENCE"
    FUNCTION_NAME = "FUNCTION_NAME"
    PARENTHESIS = "PARENTHESIS"
    OPERATOR = "OPERATOR"
    SEPARATOR = "SEPARATOR"


class Token(BaseModel):
    """A single lexical unit: its type plus its literal text.

    Tokens are immutable and compare (and hash) by ``(type, value)``, so
    ``Token(TokenType.PARENTHESIS, "(")`` can be located in a sequence by
    equality.
    """

    model_config = ConfigDict(frozen=True)

    type: TokenType
    value: str

    def __init__(self, type: TokenType, value: str, **data: Any) -> None:
        super().__init__(type=type, value=value, **data)

    def is_char(self, ch: str) -> bool:
        """True if this token's text is exactly the single character *ch*."""
        return len(self.value) == 1 and self.value == ch

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r})"

    __str__ = __repr__


OPEN_PAREN = Token(TokenType.PARENTHESIS, "(")
CLOSE_PAREN = Token(TokenType.PARENTHESIS, ")")
