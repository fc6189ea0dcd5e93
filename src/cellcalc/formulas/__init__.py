"""Spreadsheet formula parsing and evaluation.

Public API::

    from cellcalc.formulas import tokenize, parse_tokens

    tree = parse_tokens(tokenize("=2 + 3 * A1"), grid)
    tree.evaluate()
"""

from cellcalc.formulas.ast import BinaryOp, Expression, FunctionCall, NumberLiteral
from cellcalc.formulas.cellref import (
    GridAccessor,
    parse_cell_reference,
    resolve_cell_reference,
)
from cellcalc.formulas.errors import (
    ENGINE_ERRORS,
    ArityMismatchError,
    DivisionByZeroError,
    EmptyExpressionError,
    FormulaError,
    FormulaEvalError,
    FormulaFunctionError,
    FormulaParseError,
    FormulaRefError,
    InvalidCellReferenceError,
    MalformedParenthesesError,
    UnexpectedTokenError,
    UnexpectedTokenSequenceError,
    UnknownFunctionError,
    UnsupportedOperatorError,
)
from cellcalc.formulas.functions import FunctionKind
from cellcalc.formulas.lexer import tokenize
from cellcalc.formulas.parser import FormulaParser, parse_tokens
from cellcalc.formulas.splitter import Segment, split_tokens
from cellcalc.formulas.tokens import Token, TokenType

__all__ = [
    "ENGINE_ERRORS",
    "ArityMismatchError",
    "BinaryOp",
    "DivisionByZeroError",
    "EmptyExpressionError",
    "Expression",
    "FormulaError",
    "FormulaEvalError",
    "FormulaFunctionError",
    "FormulaParseError",
    "FormulaParser",
    "FormulaRefError",
    "FunctionCall",
    "FunctionKind",
    "GridAccessor",
    "InvalidCellReferenceError",
    "MalformedParenthesesError",
    "NumberLiteral",
    "Segment",
    "Token",
    "TokenType",
    "UnexpectedTokenError",
    "UnexpectedTokenSequenceError",
    "UnknownFunctionError",
    "UnsupportedOperatorError",
    "parse_cell_reference",
    "parse_tokens",
    "resolve_cell_reference",
    "split_tokens",
    "tokenize",
]
