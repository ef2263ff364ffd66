from __future__ import annotations

import math
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pandas as pd

"""Spreadsheet reader producing plain tabular rows.

Workbooks are read header-less: the validators decide themselves which rows are
headers, delimiters or data. Cells come back as Python values (``str``,
``int``, ``float``, ``datetime``) or ``None`` for blanks; trailing blank cells
of each row and trailing blank rows are trimmed.
"""

__all__ = [
    "WorkbookError",
    "SheetNotFoundError",
    "DEFAULT_KEEP_NA_STRINGS",
    "read_excel_file",
    "read_csv_file",
    "frame_to_rows",
    "read_table",
    "read_naming_convention",
]

EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}
CSV_SUFFIXES = {".csv"}

# Strings pandas would otherwise turn into NaN but which are legitimate values
# in naming rules and registers (e.g. an "NA" discipline code).
DEFAULT_KEEP_NA_STRINGS = ["NA", "N/A", "NULL", "None", "null", "n/a"]


class WorkbookError(Exception):
    """Raised when an input workbook cannot be read."""


class SheetNotFoundError(WorkbookError):
    """Raised when a requested sheet is not present in the workbook."""


def _na_options(keep_na_strings: list[str] | None) -> tuple[list[str] | None, bool]:
    # pandas._libs.parsers.STR_NA_VALUES holds the default NA string set
    import pandas._libs.parsers as parsers

    if keep_na_strings:
        custom_na = parsers.STR_NA_VALUES - set(keep_na_strings)
        return list(custom_na), False
    return None, True


def read_excel_file(
    path: Path,
    target_sheets: Iterable[str] | None = None,
    keep_na_strings: list[str] | None = DEFAULT_KEEP_NA_STRINGS,
) -> dict[str, pd.DataFrame]:
    """Read an Excel workbook returning raw header-less DataFrames keyed by sheet name.

    Parameters
    ----------
    path: workbook path
    target_sheets: sheets to read (None = all)
    keep_na_strings: strings excluded from pandas' default NaN conversion
    """
    if not path.exists():
        raise WorkbookError(f"file not found: {path}")
    na_values, keep_default_na = _na_options(keep_na_strings)
    wanted = set(target_sheets) if target_sheets is not None else None

    dfs: dict[str, pd.DataFrame] = {}
    try:
        with pd.ExcelFile(path) as xls:
            for name in xls.sheet_names:
                if wanted is not None and str(name) not in wanted:
                    continue
                dfs[str(name)] = xls.parse(
                    name, header=None, keep_default_na=keep_default_na, na_values=na_values
                )
    except Exception as e:
        raise WorkbookError(f"failed to read workbook {path.name}: {e}") from e
    return dfs


def read_csv_file(path: Path, keep_na_strings: list[str] | None = DEFAULT_KEEP_NA_STRINGS) -> pd.DataFrame:
    """Read a CSV export header-less; every cell is kept as text."""
    if not path.exists():
        raise WorkbookError(f"file not found: {path}")
    na_values, keep_default_na = _na_options(keep_na_strings)
    try:
        return pd.read_csv(
            path,
            header=None,
            dtype=str,
            keep_default_na=keep_default_na,
            na_values=na_values,
            skip_blank_lines=False,
            encoding="utf-8-sig",
        )
    except Exception as e:
        raise WorkbookError(f"failed to read csv {path.name}: {e}") from e


def _clean_cell(value: Any) -> Any:
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        return int(value) if value.is_integer() else value
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    return value


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def frame_to_rows(df: pd.DataFrame) -> list[list[Any]]:
    """Convert a header-less DataFrame into a list of rows of clean cells."""
    rows: list[list[Any]] = []
    for raw in df.astype(object).values.tolist():
        row = [_clean_cell(v) for v in raw]
        while row and _is_empty(row[-1]):
            row.pop()
        rows.append(row)
    while rows and not rows[-1]:
        rows.pop()
    return rows


def read_table(path: Path, sheet: str | None = None) -> list[list[Any]]:
    """Read one sheet (first one when ``sheet`` is None) or a CSV file as rows."""
    suffix = path.suffix.lower()
    if suffix in CSV_SUFFIXES:
        return frame_to_rows(read_csv_file(path))
    if suffix not in EXCEL_SUFFIXES:
        raise WorkbookError(f"unsupported file format: {path.name}")

    target = [sheet] if sheet is not None else None
    dfs = read_excel_file(path, target_sheets=target)
    if sheet is not None:
        if sheet not in dfs:
            raise SheetNotFoundError(f"sheet '{sheet}' not found in {path.name}")
        return frame_to_rows(dfs[sheet])
    if not dfs:
        raise SheetNotFoundError(f"workbook {path.name} has no sheets")
    return frame_to_rows(next(iter(dfs.values())))


def read_naming_convention(
    path: Path, sheets_tab: str = "Sheets", models_tab: str = "Models"
) -> tuple[list[list[Any]], list[list[Any]]]:
    """Read the naming rule tabs.

    The sheets tab is mandatory. A missing models tab gives an empty table, so
    model files fail validation with a "no data for file type" message.
    """
    dfs = read_excel_file(path, target_sheets=[sheets_tab, models_tab])
    if sheets_tab not in dfs:
        raise SheetNotFoundError(
            f"naming convention file must contain a sheet named '{sheets_tab}' ({path.name})"
        )
    sheets = frame_to_rows(dfs[sheets_tab])
    models = frame_to_rows(dfs[models_tab]) if models_tab in dfs else []
    return sheets, models
