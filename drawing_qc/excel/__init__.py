"""Spreadsheet I/O: reading rule/register tables and writing QC reports."""

from .reader import (
    SheetNotFoundError,
    WorkbookError,
    frame_to_rows,
    read_naming_convention,
    read_table,
)
from .report_writer import write_report_csv, write_report_xlsx

__all__ = [
    "SheetNotFoundError",
    "WorkbookError",
    "frame_to_rows",
    "read_naming_convention",
    "read_table",
    "write_report_csv",
    "write_report_xlsx",
]
