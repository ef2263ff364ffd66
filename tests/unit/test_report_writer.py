from __future__ import annotations
from datetime import datetime
from pathlib import Path

import pandas as pd
from openpyxl import load_workbook

from drawing_qc.excel.report_writer import write_report_csv, write_report_xlsx
from drawing_qc.models import (
    MissingFileResult,
    MissingFilesValidationSummary,
    NamingValidationSummary,
    TitleBlockValidationSummary,
)
from drawing_qc.services.aggregator import build_report_tables, combine_results


def _tables():
    missing = MissingFilesValidationSummary(
        2, 1, 1, 50.0,
        missing_files=[
            MissingFileResult("A-001.pdf", True, 2, "A-001.pdf"),
            MissingFileResult("A-002.pdf", False, 3),
        ],
    )
    result = combine_results(
        NamingValidationSummary(1, 1, 0, 100.0),
        missing,
        TitleBlockValidationSummary(0, 0, 0, 0.0),
        total_files=1,
    )
    return build_report_tables(result, generated_at=datetime(2025, 3, 13, 12, 0, 0))


def test_write_report_xlsx_sheets_and_formatting(temp_workdir: Path):
    path = write_report_xlsx(_tables(), temp_workdir / "reports" / "qc.xlsx")
    assert path.exists()

    wb = load_workbook(path)
    assert wb.sheetnames == ["Summary", "Missing Files", "Naming Errors", "Title-Block Errors", "All Findings"]
    assert wb["Summary"]["A1"].value == "Deliverables QC Report"
    assert wb["Summary"]["A1"].font.bold
    missing = wb["Missing Files"]
    assert [c.value for c in missing[1]] == ["Expected File", "Found", "Register Row", "Actual Path"]
    assert missing["A1"].font.bold
    assert missing.auto_filter.ref
    assert 10 <= missing.column_dimensions["A"].width <= 60


def test_write_report_xlsx_rows(temp_workdir: Path):
    path = write_report_xlsx(_tables(), temp_workdir / "qc.xlsx")
    df = pd.read_excel(path, sheet_name="All Findings", header=None, dtype=str)
    assert df.values.tolist() == [
        ["Check Type", "File Name", "Status", "Comment"],
        ["Missing File", "A-002.pdf", "Missing", "Expected in register row 3"],
    ]


def test_write_report_csv(temp_workdir: Path):
    written = write_report_csv(_tables(), temp_workdir / "csv")
    assert [p.name for p in written] == [
        "summary.csv",
        "missing-files.csv",
        "naming-errors.csv",
        "title-block-errors.csv",
        "all-findings.csv",
    ]
    text = (temp_workdir / "csv" / "missing-files.csv").read_text(encoding="utf-8")
    assert text.splitlines()[0] == "Expected File,Found,Register Row,Actual Path"
    assert "A-002.pdf,No,3,N/A" in text


def test_report_reads_back_with_same_rows(temp_workdir: Path):
    from drawing_qc.excel.reader import read_table

    tables = _tables()
    path = write_report_xlsx(tables, temp_workdir / "qc.xlsx")
    for name, rows in tables.items():
        assert len(read_table(path, name)) == len(rows), name
    assert read_table(path, "Missing Files")[2] == ["A-002.pdf", "No", "3", "N/A"]
