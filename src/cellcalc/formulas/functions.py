"""The fixed set of formula functions: SIN, COS, POW, MAX, MIN."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Callable

from cellcalc.formulas.errors import (
    ArityMismatchError,
    FormulaEvalError,
    UnknownFunctionError,
)


class FunctionKind(Enum):
    """Closed registry of supported functions with their arity bounds.

    ``max_args`` of ``None`` means the function is variadic.
    """

    SIN = ("sin", 1, 1)
    COS = ("cos", 1, 1)
    POW = ("pow", 2, 2)
    MAX = ("max", 1, None)
    MIN = ("min", 1, None)

    def __init__(self, label: str, min_args: int, max_args: int | None) -> None:
        self.label = label
        self.min_args = min_args
        self.max_args = max_args

    @classmethod
    def lookup(cls, name: str) -> FunctionKind:
        """Return the kind for *name*, case-insensitively.

        Raises:
            UnknownFunctionError: If *name* is not a supported function.
        """
        kind = _BY_LABEL.get(name.lower())
        if kind is None:
            raise UnknownFunctionError(name)
        return kind

    @property
    def arity_text(self) -> str:
        if self.max_args is None:
            return f"at least {self.min_args}"
        if self.min_args == self.max_args:
            return f"exactly {self.min_args}"
        return f"{self.min_args}-{self.max_args}"

    def check_arity(self, count: int) -> None:
        """Raise ``ArityMismatchError`` unless *count* arguments are allowed."""
        if count < self.min_args or (self.max_args is not None and count > self.max_args):
            raise ArityMismatchError(self.label, self.arity_text, count)

    def apply(self, args: list[float]) -> float:
        """Apply the function to already-evaluated arguments."""
        self.check_arity(len(args))
        return _FUNC_TABLE[self](args)


# ---------- Implementations ----------


def _fn_sin(args: list[float]) -> float:
    return _trig(math.sin, "SIN", args[0])


def _fn_cos(args: list[float]) -> float:
    return _trig(math.cos, "COS", args[0])


def _trig(fn: Callable[[float], float], name: str, x: float) -> float:
    try:
        return fn(x)
    except ValueError as exc:
        # math.sin(inf) and friends
        raise FormulaEvalError(f"{name}({x:g}): {exc}") from exc


def _fn_pow(args: list[float]) -> float:
    base, exponent = args
    try:
        return math.pow(base, exponent)
    except (ValueError, OverflowError) as exc:
        raise FormulaEvalError(f"POW({base:g}, {exponent:g}): {exc}") from exc


def _fn_max(args: list[float]) -> float:
    return max(args)


def _fn_min(args: list[float]) -> float:
    return min(args)


_FUNC_TABLE: dict[FunctionKind, Callable[[list[float]], Any]] = {
    FunctionKind.SIN: _fn_sin,
    FunctionKind.COS: _fn_cos,
    FunctionKind.POW: _fn_pow,
    FunctionKind.MAX: _fn_max,
    FunctionKind.MIN: _fn_min,
}

_BY_LABEL: dict[str, FunctionKind] = {kind.label: kind for kind in FunctionKind}
