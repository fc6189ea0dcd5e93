"""Resolution of A1-style cell references against a grid.

References are resolved eagerly: the parser turns each one into a number
literal holding the cell's value at parse time.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Protocol

from cellcalc.formulas.errors import InvalidCellReferenceError

logger = logging.getLogger(__name__)

# One column letter, then the one-based row number.
_REF_RE = re.compile(r"([A-Z])([0-9]+)")


class GridAccessor(Protocol):
    """Read-only view of the grid that formulas reference.

    Column 0 holds row labels and cannot be addressed by a letter;
    ``A`` is column 1.
    """

    def row_count(self) -> int:
        """Number of rows in the grid."""
        ...

    def value_at(self, row: int, col: int) -> Any:
        """Raw cell content (text, number or ``None``)."""
        ...

    def selected_cell(self) -> tuple[int, int] | None:
        """The ``(row, col)`` currently being edited, if any."""
        ...


def parse_cell_reference(ref: str) -> tuple[int, int]:
    """Parse ``"B3"`` into ``(row, col)``: ``(2, 2)``.

    Raises:
        InvalidCellReferenceError: If *ref* is not a letter followed by digits.
    """
    m = _REF_RE.fullmatch(ref)
    if not m:
        raise InvalidCellReferenceError(
            ref, "malformed", "Expected a column letter followed by a row number."
        )
    col = ord(m.group(1)) - ord("A") + 1
    row = int(m.group(2)) - 1
    return row, col


def resolve_cell_reference(ref: str, grid: GridAccessor | None) -> float:
    """Read the numeric value of the cell *ref* points to.

    Args:
        ref: Reference text such as ``"A1"``.
        grid: The grid to read from.

    Returns:
        The cell's value as a float.

    Raises:
        InvalidCellReferenceError: If there is no grid, the row is outside
            the grid, the reference points at the selected cell, or the
            cell does not hold a number.
    """
    if grid is None:
        raise InvalidCellReferenceError(ref, "no_grid", "No grid is available to resolve it.")

    row, col = parse_cell_reference(ref)

    n_rows = grid.row_count()
    if row >= n_rows:
        raise InvalidCellReferenceError(
            ref, "out_of_range", f"The table has only {n_rows} rows."
        )
    if row < 0:
        raise InvalidCellReferenceError(
            ref, "non_positive_row", "The row should be greater than zero."
        )
    if grid.selected_cell() == (row, col):
        raise InvalidCellReferenceError(ref, "self_reference", "Cell can't reference itself.")

    raw = grid.value_at(row, col)
    value = _cell_number(raw)
    if value is None:
        raise InvalidCellReferenceError(
            ref, "not_a_number", f"Cell does not contain a number (found {raw!r})."
        )

    logger.debug("resolved %s -> %r", ref, value)
    return value


def _cell_number(raw: Any) -> float | None:
    if raw is None:
        return None
    text = str(raw).strip()
    # float() accepts digit grouping ("1_000"); cell text does not
    if "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None
