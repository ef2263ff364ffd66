from __future__ import annotations

from collections.abc import Mapping

from ..models.tabular import Table, cell_at, row_is_blank
from ..models.title_block import (
    COMPARED_FIELDS,
    FieldMismatch,
    TitleBlockColumnMapping,
    TitleBlockRecord,
    TitleBlockStatus,
    TitleBlockValidationResult,
    TitleBlockValidationSummary,
)
from .normalizer import normalize_date, normalize_text, percentage

"""Title-block validator.

Every register record is paired with a title-block export record, first by
sheet number and then by file name, and the remaining metadata fields are
compared after normalization. Register records without a counterpart are
reported as MISSING.
"""

__all__ = [
    "TitleBlockValidator",
    "records_from_table",
    "MISSING_TITLE_BLOCK",
]

MISSING_TITLE_BLOCK = FieldMismatch(field="titleBlock", expected="Present", actual="Missing")


def records_from_table(
    table: Table,
    column_mapping: Mapping[str, int] | TitleBlockColumnMapping | None = None,
) -> list[TitleBlockRecord]:
    """Map data rows (header row 0 skipped) to normalized records.

    Fully blank rows and rows with neither a sheet number nor a file name are
    skipped; short rows read missing cells as empty.
    """
    mapping = TitleBlockColumnMapping.from_mapping(column_mapping)
    records: list[TitleBlockRecord] = []
    for i, row in enumerate(table):
        if i == 0 or row_is_blank(row):
            continue
        record = TitleBlockRecord(
            sheet_no=normalize_text(cell_at(row, mapping.sheet_no)),
            sheet_name=normalize_text(cell_at(row, mapping.sheet_name)),
            file_name=normalize_text(cell_at(row, mapping.file_name)),
            rev_code=normalize_text(cell_at(row, mapping.rev_code)),
            rev_date=normalize_date(cell_at(row, mapping.rev_date)),
            suitability_code=normalize_text(cell_at(row, mapping.suitability_code)),
            source_row=i + 1,
        )
        if not record.sheet_no and not record.file_name:
            continue
        records.append(record)
    return records


def _first_by(records: list[TitleBlockRecord], attr: str) -> dict[str, TitleBlockRecord]:
    index: dict[str, TitleBlockRecord] = {}
    for r in records:
        key = getattr(r, attr)
        if key:
            index.setdefault(key, r)
    return index


class TitleBlockValidator:
    def __init__(self) -> None:
        self._register: list[TitleBlockRecord] = []
        self._title_blocks: list[TitleBlockRecord] = []

    @property
    def register_records(self) -> list[TitleBlockRecord]:
        return list(self._register)

    @property
    def title_block_records(self) -> list[TitleBlockRecord]:
        return list(self._title_blocks)

    def load_register_data(
        self,
        table: Table,
        column_mapping: Mapping[str, int] | TitleBlockColumnMapping | None = None,
    ) -> None:
        self._register = records_from_table(table, column_mapping)

    def load_title_block_data(
        self,
        table: Table,
        column_mapping: Mapping[str, int] | TitleBlockColumnMapping | None = None,
    ) -> None:
        self._title_blocks = records_from_table(table, column_mapping)

    @staticmethod
    def _compare(register: TitleBlockRecord, title_block: TitleBlockRecord) -> TitleBlockValidationResult:
        mismatches: list[FieldMismatch] = []
        for attr, label in COMPARED_FIELDS:
            expected = getattr(register, attr) or ""
            actual = getattr(title_block, attr) or ""
            if expected != actual:
                mismatches.append(FieldMismatch(field=label, expected=expected, actual=actual))
        return TitleBlockValidationResult(
            sheet_no=register.sheet_no,
            sheet_name=register.sheet_name,
            file_name=register.file_name,
            rev_code=register.rev_code,
            rev_date=register.rev_date,
            status=TitleBlockStatus.VALID if not mismatches else TitleBlockStatus.MISMATCH,
            mismatches=mismatches,
        )

    def validate(self) -> TitleBlockValidationSummary:
        by_sheet_no = _first_by(self._title_blocks, "sheet_no")
        by_file_name = _first_by(self._title_blocks, "file_name")

        results: list[TitleBlockValidationResult] = []
        for reg in self._register:
            match = by_sheet_no.get(reg.sheet_no) if reg.sheet_no else None
            if match is None and reg.file_name:
                match = by_file_name.get(reg.file_name)
            if match is None:
                results.append(
                    TitleBlockValidationResult(
                        sheet_no=reg.sheet_no,
                        sheet_name=reg.sheet_name,
                        file_name=reg.file_name,
                        rev_code=reg.rev_code,
                        rev_date=reg.rev_date,
                        status=TitleBlockStatus.MISSING,
                        mismatches=[MISSING_TITLE_BLOCK],
                    )
                )
                continue
            results.append(self._compare(reg, match))

        valid = sum(1 for r in results if r.status is TitleBlockStatus.VALID)
        total = len(results)
        return TitleBlockValidationSummary(
            total_sheets=total,
            valid_sheets=valid,
            invalid_sheets=total - valid,
            compliance_percentage=percentage(valid, total),
            results=results,
        )
