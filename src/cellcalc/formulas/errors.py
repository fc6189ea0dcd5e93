"""Error types for formula parsing and evaluation."""

from __future__ import annotations

from typing import Any


class FormulaError(Exception):
    """Base class for all formula-related errors."""


# ---------------------------------------------------------------------------
# Parse errors
# ---------------------------------------------------------------------------


class FormulaParseError(FormulaError):
    """Syntax error in a formula expression.

    Attributes:
        position: Character position where the error was detected.
        message: Human-readable description.
    """

    def __init__(self, message: str, position: int | None = None) -> None:
        self.position = position
        self.message = message
        full = f"Formula parse error: {message}"
        if position is not None:
            full += f" (at position {position})"
        super().__init__(full)


class MalformedParenthesesError(FormulaParseError):
    """Unbalanced or mismatched parenthesis tokens."""

    def __init__(self, message: str = "Wrong parenthesis") -> None:
        super().__init__(message)


class EmptyExpressionError(FormulaParseError):
    """A region that must hold at least one operand holds none."""

    def __init__(self, message: str = "Empty expression") -> None:
        super().__init__(message)


class UnexpectedTokenError(FormulaParseError):
    """A factor position does not match any grammar alternative.

    Attributes:
        tokens: The offending token sequence.
    """

    def __init__(self, tokens: Any, message: str | None = None) -> None:
        self.tokens = list(tokens)
        if message is None:
            shown = self.tokens[0].value if self.tokens else ""
            message = f"Unexpected token: {shown!r}"
        super().__init__(message)


class UnexpectedTokenSequenceError(UnexpectedTokenError):
    """A multi-token factor that is neither grouped nor a function call."""

    def __init__(self, tokens: Any) -> None:
        seq = " ".join(t.value for t in tokens)
        super().__init__(tokens, f"Unexpected token sequence: {seq!r}")


# ---------------------------------------------------------------------------
# Function errors
# ---------------------------------------------------------------------------


class FormulaFunctionError(FormulaError):
    """Unknown function or wrong number of arguments.

    Attributes:
        func_name: The function that caused the error.
    """

    def __init__(self, func_name: str, message: str | None = None) -> None:
        self.func_name = func_name
        msg = message or f"Unknown function: {func_name!r}"
        super().__init__(msg)


class UnknownFunctionError(FormulaFunctionError):
    """Function name not in the fixed registry."""


class ArityMismatchError(FormulaFunctionError):
    """Function called with the wrong number of arguments.

    Attributes:
        expected: Human-readable arity, e.g. ``"exactly 2"``.
        got: Number of arguments supplied.
    """

    def __init__(self, func_name: str, expected: str, got: int) -> None:
        self.expected = expected
        self.got = got
        super().__init__(
            func_name,
            f"{func_name.upper()} requires {expected} argument(s), got {got}",
        )


# ---------------------------------------------------------------------------
# Reference errors
# ---------------------------------------------------------------------------


class FormulaRefError(FormulaError):
    """Reference that cannot be turned into a value."""


class InvalidCellReferenceError(FormulaRefError):
    """A cell reference that cannot be resolved against the grid.

    Attributes:
        ref: The reference text, e.g. ``"B7"``.
        reason: One of ``malformed``, ``no_grid``, ``out_of_range``,
            ``non_positive_row``, ``self_reference``, ``not_a_number``.
    """

    def __init__(self, ref: str, reason: str, message: str) -> None:
        self.ref = ref
        self.reason = reason
        super().__init__(f"Invalid cell reference: {ref}. {message}")


# ---------------------------------------------------------------------------
# Evaluation errors
# ---------------------------------------------------------------------------


class FormulaEvalError(FormulaError):
    """Failure while reducing an expression tree to a number."""


class DivisionByZeroError(FormulaEvalError, ZeroDivisionError):
    """Right operand of ``/`` evaluated to exactly zero."""

    def __init__(self) -> None:
        super().__init__("Division by zero in formula")


class UnsupportedOperatorError(FormulaEvalError):
    """Binary operator outside ``+ - * /`` reached evaluation.

    Attributes:
        operator: The offending operator text.
    """

    def __init__(self, operator: str) -> None:
        self.operator = operator
        super().__init__(f"Unsupported operator: {operator!r}")


ENGINE_ERRORS: tuple[type[FormulaError], ...] = (
    FormulaParseError,
    FormulaFunctionError,
    FormulaRefError,
    FormulaEvalError,
)
