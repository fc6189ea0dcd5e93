"""Recursive-descent parser turning a token sequence into an expression tree.

Precedence is handled by splitting rather than by a cursor: an expression
is split at top-level ``+``/``-`` into terms, each term at top-level
``*``/``/`` into factors, and each factor is a number, a cell reference,
a parenthesised expression or a function call. Operands are combined
left-associatively.

Cell references are resolved while parsing; the resulting tree holds their
values, not the references.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from cellcalc.formulas.ast import BinaryOp, Expression, FunctionCall, NumberLiteral
from cellcalc.formulas.cellref import GridAccessor, resolve_cell_reference
from cellcalc.formulas.errors import (
    ArityMismatchError,
    EmptyExpressionError,
    MalformedParenthesesError,
    UnexpectedTokenError,
    UnexpectedTokenSequenceError,
)
from cellcalc.formulas.functions import FunctionKind
from cellcalc.formulas.splitter import Segment, split_tokens
from cellcalc.formulas.tokens import CLOSE_PAREN, OPEN_PAREN, Token, TokenType

logger = logging.getLogger(__name__)

_ADDITIVE = "+-"
_MULTIPLICATIVE = "*/"
_ARGUMENT = ","


class FormulaParser:
    """Parser bound to the grid used for resolving cell references.

    Args:
        grid: Grid to read referenced cells from. May be ``None`` when the
            formulas contain no cell references.
    """

    def __init__(self, grid: GridAccessor | None = None) -> None:
        self.grid = grid

    def parse(self, tokens: Sequence[Token]) -> Expression:
        """Parse a complete formula token sequence.

        Raises:
            FormulaError: Any parse, function or reference error.
        """
        tree = self.parse_expression(tokens)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("parsed %d tokens -> %s", len(tokens), tree.to_formula())
        return tree

    def parse_expression(self, tokens: Sequence[Token]) -> Expression:
        """Parse a sum/difference of terms.

        An empty slot (``-5``, ``1+-2``) stands for zero, which gives
        unary plus and minus.
        """
        segments = split_tokens(tokens, _ADDITIVE)
        if not segments:
            raise EmptyExpressionError()
        return self._combine(segments, self._parse_additive_operand)

    def parse_term(self, tokens: Sequence[Token]) -> Expression:
        """Parse a product/quotient of factors."""
        segments = split_tokens(tokens, _MULTIPLICATIVE)
        if not segments:
            raise EmptyExpressionError()
        return self._combine(segments, self._parse_multiplicative_operand)

    def parse_factor(self, tokens: Sequence[Token]) -> Expression:
        """Parse a number, cell reference, parenthesised group or function call."""
        if not tokens:
            raise EmptyExpressionError()

        first = tokens[0]
        if len(tokens) == 1:
            if first.type == TokenType.NUMBER:
                return _number_literal(first)
            if first.type == TokenType.CELL_REFERENCE:
                return NumberLiteral(resolve_cell_reference(first.value, self.grid))
            raise UnexpectedTokenError(tokens)

        if first == OPEN_PAREN and tokens[-1] == CLOSE_PAREN:
            return self.parse_expression(tokens[1:-1])
        if first.type == TokenType.FUNCTION_NAME:
            return self.parse_function(tokens)
        raise UnexpectedTokenSequenceError(tokens)

    def parse_function(self, tokens: Sequence[Token]) -> FunctionCall:
        """Parse ``NAME ( arg , arg ... )`` into a function call node.

        The argument list runs from the first ``(`` to the last ``)``; the
        ``(`` must follow the name directly and the ``)`` must end the call.
        """
        name = tokens[0].value
        tokens = list(tokens)
        try:
            open_idx = tokens.index(OPEN_PAREN)
            close_idx = len(tokens) - 1 - tokens[::-1].index(CLOSE_PAREN)
        except ValueError:
            raise MalformedParenthesesError(
                f"Mismatched parentheses in function call: {name}"
            ) from None
        if close_idx < open_idx:
            raise MalformedParenthesesError(f"Mismatched parentheses in function call: {name}")
        if open_idx != 1 or close_idx != len(tokens) - 1:
            # SIN 9 (0) or SIN(0) 5
            raise UnexpectedTokenSequenceError(tokens)

        kind = FunctionKind.lookup(name)

        segments = split_tokens(tokens[open_idx + 1 : close_idx], _ARGUMENT)
        if not segments:
            raise ArityMismatchError(kind.label, kind.arity_text, 0)
        if segments[-1].separator is not None:
            # MAX(1,) leaves a dangling comma
            raise EmptyExpressionError(f"Missing argument in call to {name}")

        arguments = [self.parse_expression(seg.tokens) for seg in segments]
        kind.check_arity(len(arguments))
        return FunctionCall(kind, arguments)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _parse_additive_operand(self, tokens: tuple[Token, ...]) -> Expression:
        if not tokens:
            return NumberLiteral(0.0)
        return self.parse_term(tokens)

    def _parse_multiplicative_operand(self, tokens: tuple[Token, ...]) -> Expression:
        if not tokens:
            raise EmptyExpressionError("Missing operand for '*' or '/'")
        return self.parse_factor(tokens)

    def _combine(
        self,
        segments: list[Segment],
        parse_operand: Callable[[tuple[Token, ...]], Expression],
    ) -> Expression:
        """Fold operands left-associatively using each segment's separator."""
        if segments[-1].separator is not None:
            # Input ended on an operator, e.g. "1+" or "2*".
            raise EmptyExpressionError(
                f"Expression ends with operator {segments[-1].separator.value!r}"
            )

        result = parse_operand(segments[0].tokens)
        for prev, seg in zip(segments, segments[1:]):
            right = parse_operand(seg.tokens)
            result = BinaryOp(result, right, prev.separator.value)
        return result


def _number_literal(token: Token) -> NumberLiteral:
    try:
        return NumberLiteral(float(token.value))
    except ValueError:
        raise UnexpectedTokenError(
            [token], f"Invalid number: {token.value!r}"
        ) from None


def parse_tokens(tokens: Sequence[Token], grid: GridAccessor | None = None) -> Expression:
    """Parse *tokens* into an expression tree.

    Args:
        tokens: Token sequence from the lexer.
        grid: Grid for resolving cell references.

    Returns:
        The root of the expression tree.
    """
    return FormulaParser(grid).parse(tokens)
