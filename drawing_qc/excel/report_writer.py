from __future__ import annotations

import re
from pathlib import Path

import pandas as pd
from openpyxl.styles import Font
from openpyxl.worksheet.worksheet import Worksheet

from ..services.aggregator import SHEET_NAMES, ReportTables

"""Report export: the five report tables as an xlsx workbook or CSV files."""

__all__ = [
    "write_report_xlsx",
    "write_report_csv",
]

MIN_COLUMN_WIDTH = 10
MAX_COLUMN_WIDTH = 60


def _format_sheet(ws: Worksheet, *, header_row: bool) -> None:
    if header_row:
        for cell in ws[1]:
            cell.font = Font(bold=True)
        if ws.max_row > 1:
            ws.auto_filter.ref = ws.dimensions
    else:
        ws["A1"].font = Font(bold=True, size=14)
    for col in ws.columns:
        max_len = max((len(str(cell.value)) if cell.value is not None else 0) for cell in col)
        ws.column_dimensions[col[0].column_letter].width = min(max(MIN_COLUMN_WIDTH, max_len + 2), MAX_COLUMN_WIDTH)


def write_report_xlsx(tables: ReportTables, path: Path) -> Path:
    """Write every report table to its own sheet and return ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet_name, rows in tables.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
            _format_sheet(writer.sheets[sheet_name], header_row=sheet_name != SHEET_NAMES["summary"])
    return path


def _slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def write_report_csv(tables: ReportTables, directory: Path) -> list[Path]:
    """Write one UTF-8 CSV per report table into ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for sheet_name, rows in tables.items():
        target = directory / f"{_slug(sheet_name)}.csv"
        pd.DataFrame(rows).to_csv(target, header=False, index=False, encoding="utf-8")
        written.append(target)
    return written
