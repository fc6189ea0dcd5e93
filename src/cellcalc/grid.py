"""Polars-backed grid that formulas resolve cell references against."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import polars as pl

from cellcalc.formulas.cellref import parse_cell_reference


class FrameGrid:
    """A grid view over a Polars DataFrame.

    Column 0 of the frame holds row labels; data starts in column 1, which
    formulas address as ``A``. Rows are zero-based internally and one-based
    in references (``A1`` is row 0, column 1).

    The grid also tracks the selected cell, i.e. the one whose formula is
    being entered, so that a formula cannot reference its own cell.
    """

    def __init__(self, frame: pl.DataFrame, selected: tuple[int, int] | None = None) -> None:
        """Initialize a grid.

        Args:
            frame: Cell contents, label column first.
            selected: Initially selected ``(row, col)``, if any.
        """
        self._frame = frame
        self._selected = selected

    @classmethod
    def from_csv(cls, path: Path | str, selected: tuple[int, int] | None = None) -> FrameGrid:
        """Load a grid from a CSV file with a header row.

        Every column is read as text; numeric conversion happens when a
        cell is referenced.
        """
        frame = pl.read_csv(Path(path), infer_schema_length=0)
        return cls(frame, selected=selected)

    @classmethod
    def from_rows(
        cls,
        rows: list[list[Any]],
        selected: tuple[int, int] | None = None,
    ) -> FrameGrid:
        """Build a grid from row lists whose first item is the row label."""
        width = max((len(r) for r in rows), default=1)
        names = ["label"] + [chr(ord("A") + i) for i in range(width - 1)]
        padded = [
            [None if v is None else str(v) for v in r] + [None] * (width - len(r))
            for r in rows
        ]
        frame = pl.DataFrame(padded, schema={n: pl.String for n in names}, orient="row")
        return cls(frame, selected=selected)

    @property
    def frame(self) -> pl.DataFrame:
        return self._frame

    # ------------------------------------------------------------------
    # GridAccessor
    # ------------------------------------------------------------------

    def row_count(self) -> int:
        return self._frame.height

    def value_at(self, row: int, col: int) -> Any:
        if not (0 <= row < self._frame.height and 0 <= col < self._frame.width):
            return None
        return self._frame.item(row, col)

    def selected_cell(self) -> tuple[int, int] | None:
        return self._selected

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select(self, row: int, col: int) -> None:
        self._selected = (row, col)

    def clear_selection(self) -> None:
        self._selected = None


def parse_selection(addr: str) -> tuple[int, int]:
    """Parse a CLI selection like ``"B2"`` into ``(row, col)``.

    Raises:
        InvalidCellReferenceError: If *addr* is not a valid reference.
    """
    return parse_cell_reference(addr.strip().upper())
