from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

"""Tabular row helpers shared by every table-shaped input.

Rules, registers and title-block exports all arrive as a sequence of rows,
each row a sequence of cells. Rows may be short (trailing blanks trimmed by the
reader) and cells may hold strings, numbers, dates or nothing at all.
"""

__all__ = [
    "Cell",
    "TabularRow",
    "Table",
    "cell_at",
    "is_blank",
    "cell_text",
    "row_is_blank",
]

Cell = Any
TabularRow = Sequence[Cell]
Table = Sequence[TabularRow]


def cell_at(row: TabularRow | None, index: int) -> Cell:
    """Return the cell at ``index`` or ``None`` for short/missing rows."""
    if row is None or index < 0 or index >= len(row):
        return None
    return row[index]


def is_blank(value: Cell) -> bool:
    """True for ``None``, NaN and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def cell_text(value: Cell) -> str:
    """Stringify a cell without any case or whitespace normalization.

    Integral floats (``2.0`` from a spreadsheet number column) render as ``"2"``.
    """
    if is_blank(value):
        return ""
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def row_is_blank(row: TabularRow | None) -> bool:
    if not row:
        return True
    return all(is_blank(v) for v in row)
