"""Text-in, number-out entry points with structured event logging."""

from __future__ import annotations

import math
import time

from cellcalc.formulas.ast import Expression
from cellcalc.formulas.cellref import GridAccessor
from cellcalc.formulas.errors import FormulaError
from cellcalc.formulas.lexer import tokenize
from cellcalc.formulas.parser import parse_tokens
from cellcalc.logging.events import (
    EventType,
    emit_error,
    emit_info,
    emit_warning,
    error_code_for,
)


def compile_formula(text: str, grid: GridAccessor | None = None) -> Expression:
    """Tokenize and parse *text* into an expression tree.

    Cell references are resolved against *grid* now; the tree does not
    follow later edits to the referenced cells.

    Raises:
        FormulaError: If the formula cannot be tokenized or parsed.
    """
    try:
        tree = parse_tokens(tokenize(text), grid)
    except FormulaError as exc:
        _emit_failure(text, "parse", exc)
        raise
    emit_info(
        EventType.formula_parsed,
        f"Parsed formula {text!r}",
        {"formula": text, "tree": tree.to_formula()},
    )
    return tree


def compute(text: str, grid: GridAccessor | None = None) -> float:
    """Parse and evaluate *text* in one step.

    Args:
        text: Formula text, with or without a leading ``=``.
        grid: Grid for resolving cell references.

    Returns:
        The numeric result.

    Raises:
        FormulaError: Any parse, reference or evaluation error.
    """
    t0 = time.monotonic()
    tree = compile_formula(text, grid)
    try:
        result = tree.evaluate()
    except FormulaError as exc:
        _emit_failure(text, "evaluate", exc)
        raise
    duration_ms = round((time.monotonic() - t0) * 1000, 3)
    if not math.isfinite(result):
        # e.g. 1e308 * 10 overflows to inf without raising
        emit_warning(
            EventType.formula_evaluated,
            f"Formula {text!r} evaluated to a non-finite result",
            {"formula": text, "result": str(result), "duration_ms": duration_ms},
        )
        return result
    emit_info(
        EventType.formula_evaluated,
        f"Evaluated formula {text!r}",
        {"formula": text, "result": result, "duration_ms": duration_ms},
    )
    return result


def _emit_failure(text: str, stage: str, exc: FormulaError) -> None:
    emit_error(
        EventType.formula_failed,
        str(exc),
        {"formula": text, "stage": stage, "error_type": type(exc).__name__},
        error_code=error_code_for(exc),
    )
