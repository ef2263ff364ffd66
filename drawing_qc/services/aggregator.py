from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..models.audit_result import AuditResult, Finding
from ..models.files import MissingFilesValidationSummary
from ..models.naming import NamingValidationSummary
from ..models.title_block import TitleBlockStatus, TitleBlockValidationSummary
from .normalizer import round_half_up

"""Result aggregation and report table construction.

``combine_results`` turns the three validator summaries into an
``AuditResult``; ``build_report_tables`` flattens that result into plain rows
of cells, one table per report sheet, ready for any tabular writer.
"""

__all__ = [
    "REPORT_TITLE",
    "SHEET_NAMES",
    "ReportTables",
    "overall_compliance",
    "combine_results",
    "iter_findings",
    "build_report_tables",
]

REPORT_TITLE = "Deliverables QC Report"

SHEET_NAMES = {
    "summary": "Summary",
    "missing_files": "Missing Files",
    "naming_errors": "Naming Errors",
    "title_block_errors": "Title-Block Errors",
    "all_findings": "All Findings",
}

MISSING_FILE = "Missing File"
NAMING_ERROR = "Naming Error"
TITLE_BLOCK_ERROR = "Title Block Error"

Row = list[Any]


def overall_compliance(naming_pct: float, presence_pct: float, title_block_pct: float) -> int:
    """Half-up rounded mean of three 0-100 "good" percentages."""
    return int(round_half_up((naming_pct + presence_pct + title_block_pct) / 3, 0))


def combine_results(
    naming: NamingValidationSummary,
    missing_files: MissingFilesValidationSummary,
    title_block: TitleBlockValidationSummary,
    total_files: int,
    start_time: datetime | None = None,
    end_time: datetime | None = None,
) -> AuditResult:
    return AuditResult(
        naming=naming,
        missing_files=missing_files,
        title_block=title_block,
        overall_compliance=overall_compliance(
            naming.compliance_percentage,
            missing_files.presence_compliance,
            title_block.compliance_percentage,
        ),
        total_files=total_files,
        start_time=start_time,
        end_time=end_time,
    )


def iter_findings(result: AuditResult) -> Iterator[Finding]:
    """Every failing item: missing files, then naming errors, then title blocks."""
    for item in result.missing_files.missing_files:
        if not item.found:
            yield Finding(MISSING_FILE, item.expected_file, "Missing", f"Expected in register row {item.register_row}")
    for error in result.naming.errors:
        yield Finding(NAMING_ERROR, error.file_name, "Invalid", error.details or "Naming convention violation")
    for tb in result.title_block.results:
        if tb.status is TitleBlockStatus.VALID:
            continue
        comment = f"{len(tb.mismatches)} field(s) mismatch" if tb.mismatches else tb.status.value
        yield Finding(TITLE_BLOCK_ERROR, tb.file_name, tb.status.value, comment)


def _pct(value: float) -> str:
    return f"{value:.2f}%"


def _summary_rows(result: AuditResult, generated_at: datetime) -> list[Row]:
    mf, nm, tb = result.missing_files, result.naming, result.title_block
    return [
        [REPORT_TITLE],
        ["Generated:", generated_at.strftime("%Y-%m-%d %H:%M:%S")],
        [""],
        ["Overall Summary"],
        ["Total Files Processed:", result.total_files],
        ["Overall Compliance:", _pct(result.overall_compliance)],
        [""],
        ["Missing Files Analysis"],
        ["Total Expected:", mf.total_expected],
        ["Total Found:", mf.total_found],
        ["Missing Count:", mf.missing_count],
        ["Missing Percentage:", _pct(mf.missing_percentage)],
        ["Extra Files:", len(mf.extra_files)],
        [""],
        ["Naming Convention Analysis"],
        ["Total Files Checked:", nm.total_files],
        ["Valid Files:", nm.valid_files],
        ["Invalid Files:", nm.invalid_files],
        ["Naming Compliance:", _pct(nm.compliance_percentage)],
        [""],
        ["Title Block Analysis"],
        ["Total Sheets Checked:", tb.total_sheets],
        ["Valid Sheets:", tb.valid_sheets],
        ["Invalid Sheets:", tb.invalid_sheets],
        ["Title Block Compliance:", _pct(tb.compliance_percentage)],
    ]


def _missing_files_rows(summary: MissingFilesValidationSummary) -> list[Row]:
    rows: list[Row] = [["Expected File", "Found", "Register Row", "Actual Path"]]
    for item in summary.missing_files:
        rows.append([
            item.expected_file,
            "Yes" if item.found else "No",
            str(item.register_row),
            item.actual_path or "N/A",
        ])
    if summary.extra_files:
        rows.append([""])
        rows.append(["Extra Files (not in register)"])
        rows.append(["File Name", "Path", "Extension", ""])
        for f in summary.extra_files:
            rows.append([f.name, f.path, f.extension, ""])
    return rows


def _naming_error_rows(summary: NamingValidationSummary) -> list[Row]:
    rows: list[Row] = [["File Name", "Folder Path", "Error Type", "Details", "Expected Pattern"]]
    for e in summary.errors:
        rows.append([
            e.file_name,
            e.folder_path,
            e.error_kind.value if e.error_kind is not None else "Unknown",
            e.details,
            e.expected_pattern,
        ])
    return rows


def _title_block_error_rows(summary: TitleBlockValidationSummary) -> list[Row]:
    rows: list[Row] = [["Sheet No", "Sheet Name", "File Name", "Rev Code", "Rev Date", "Status", "Mismatches"]]
    for r in summary.results:
        if r.status is TitleBlockStatus.VALID:
            continue
        rows.append([r.sheet_no, r.sheet_name, r.file_name, r.rev_code, r.rev_date, r.status.value, r.mismatch_details])
    return rows


def _all_findings_rows(result: AuditResult) -> list[Row]:
    rows: list[Row] = [["Check Type", "File Name", "Status", "Comment"]]
    rows.extend([f.check_type, f.file_name, f.status, f.comment] for f in iter_findings(result))
    return rows


@dataclass(frozen=True)
class ReportTables:
    """The five report sheets as rows of cells."""
    summary: list[Row]
    missing_files: list[Row]
    naming_errors: list[Row]
    title_block_errors: list[Row]
    all_findings: list[Row]

    def items(self) -> list[tuple[str, list[Row]]]:
        """(sheet name, rows) pairs in report order."""
        return [(SHEET_NAMES[key], getattr(self, key)) for key in SHEET_NAMES]


def build_report_tables(result: AuditResult, generated_at: datetime | None = None) -> ReportTables:
    return ReportTables(
        summary=_summary_rows(result, generated_at or datetime.now()),
        missing_files=_missing_files_rows(result.missing_files),
        naming_errors=_naming_error_rows(result.naming),
        title_block_errors=_title_block_error_rows(result.title_block),
        all_findings=_all_findings_rows(result),
    )
