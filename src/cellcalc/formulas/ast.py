"""Expression tree produced by the parser.

Every node owns its children outright and reduces itself to a float with
``evaluate()``. Trees are never mutated after construction, so evaluating
the same tree repeatedly always yields the same number.
"""

from __future__ import annotations

from typing import Iterable

from cellcalc.formulas.errors import DivisionByZeroError, UnsupportedOperatorError
from cellcalc.formulas.functions import FunctionKind


class Expression:
    """Base class for all expression tree nodes."""

    __slots__ = ()

    def evaluate(self) -> float:
        raise NotImplementedError

    def to_formula(self) -> str:
        """Render the node as formula text, fully parenthesised."""
        raise NotImplementedError


class NumberLiteral(Expression):
    """A numeric constant (also the frozen value of a resolved cell ref)."""

    __slots__ = ("value",)

    def __init__(self, value: float) -> None:
        self.value = float(value)

    def evaluate(self) -> float:
        return self.value

    def to_formula(self) -> str:
        return f"{self.value:.15g}"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NumberLiteral) and other.value == self.value

    def __hash__(self) -> int:
        return hash(("num", self.value))

    def __repr__(self) -> str:
        return f"NumberLiteral({self.value!r})"


class BinaryOp(Expression):
    """``left <operator> right`` for one of ``+ - * /``."""

    __slots__ = ("left", "right", "operator")

    def __init__(self, left: Expression, right: Expression, operator: str) -> None:
        self.left = left
        self.right = right
        self.operator = operator

    def evaluate(self) -> float:
        op = self.operator
        if op == "+":
            return self.left.evaluate() + self.right.evaluate()
        if op == "-":
            return self.left.evaluate() - self.right.evaluate()
        if op == "*":
            return self.left.evaluate() * self.right.evaluate()
        if op == "/":
            right = self.right.evaluate()
            if right == 0.0:
                raise DivisionByZeroError()
            return self.left.evaluate() / right
        raise UnsupportedOperatorError(op)

    def to_formula(self) -> str:
        return f"({self.left.to_formula()} {self.operator} {self.right.to_formula()})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, BinaryOp)
            and other.operator == self.operator
            and other.left == self.left
            and other.right == self.right
        )

    def __hash__(self) -> int:
        return hash(("bin", self.operator, self.left, self.right))

    def __repr__(self) -> str:
        return f"BinaryOp({self.left!r}, {self.right!r}, {self.operator!r})"


class FunctionCall(Expression):
    """A call to one of the registered functions."""

    __slots__ = ("function", "arguments")

    def __init__(self, function: FunctionKind, arguments: Iterable[Expression]) -> None:
        self.function = function
        self.arguments = tuple(arguments)

    def evaluate(self) -> float:
        values = [arg.evaluate() for arg in self.arguments]
        return self.function.apply(values)

    def to_formula(self) -> str:
        inner = ", ".join(arg.to_formula() for arg in self.arguments)
        return f"{self.function.label.upper()}({inner})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, FunctionCall)
            and other.function is self.function
            and other.arguments == self.arguments
        )

    def __hash__(self) -> int:
        return hash(("call", self.function, self.arguments))

    def __repr__(self) -> str:
        return f"FunctionCall({self.function.name}, {list(self.arguments)!r})"
