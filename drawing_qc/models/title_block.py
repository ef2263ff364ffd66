from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import Enum

"""Title-block models.

Register rows and title-block export rows are both mapped to
``TitleBlockRecord`` through a ``TitleBlockColumnMapping``, which names the
column index of every field instead of relying on "column C is the file name"
conventions.
"""

__all__ = [
    "TitleBlockColumnMapping",
    "TitleBlockRecord",
    "TitleBlockStatus",
    "FieldMismatch",
    "TitleBlockValidationResult",
    "TitleBlockValidationSummary",
    "COMPARED_FIELDS",
]

# Accepted spellings for mapping keys coming from config files or callers.
_FIELD_ALIASES = {
    "sheetNo": "sheet_no",
    "sheetName": "sheet_name",
    "fileName": "file_name",
    "revCode": "rev_code",
    "revDate": "rev_date",
    "suitabilityCode": "suitability_code",
}


@dataclass(frozen=True)
class TitleBlockColumnMapping:
    """Field name -> 0-based column index."""
    sheet_no: int = 0
    sheet_name: int = 1
    file_name: int = 2
    rev_code: int = 3
    rev_date: int = 4
    suitability_code: int = 5

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, int] | TitleBlockColumnMapping | None) -> TitleBlockColumnMapping:
        """Build a mapping, filling unspecified fields with the defaults.

        Raises:
            ValueError: unknown field name or negative/non-integer index
        """
        if mapping is None:
            return cls()
        if isinstance(mapping, TitleBlockColumnMapping):
            return mapping
        known = {f.name for f in fields(cls)}
        values: dict[str, int] = {}
        for key, index in mapping.items():
            name = _FIELD_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"unknown title block field: {key}")
            if isinstance(index, bool) or not isinstance(index, int) or index < 0:
                raise ValueError(f"invalid column index for {key}: {index!r}")
            values[name] = index
        return cls(**values)


@dataclass(frozen=True)
class TitleBlockRecord:
    """Normalized title-block metadata for one sheet."""
    sheet_no: str
    sheet_name: str
    file_name: str
    rev_code: str
    rev_date: str
    suitability_code: str = ""
    source_row: int = 0  # 1-based spreadsheet row


# (attribute, report label) pairs compared between register and export
COMPARED_FIELDS: tuple[tuple[str, str], ...] = (
    ("sheet_name", "sheetName"),
    ("file_name", "fileName"),
    ("rev_code", "revCode"),
    ("rev_date", "revDate"),
    ("suitability_code", "suitabilityCode"),
)


class TitleBlockStatus(Enum):
    VALID = "VALID"
    MISMATCH = "MISMATCH"
    MISSING = "MISSING"


@dataclass(frozen=True)
class FieldMismatch:
    field: str
    expected: str
    actual: str

    def describe(self) -> str:
        return f"{self.field}: expected '{self.expected}', got '{self.actual}'"


@dataclass(frozen=True)
class TitleBlockValidationResult:
    sheet_no: str
    sheet_name: str
    file_name: str
    rev_code: str
    rev_date: str
    status: TitleBlockStatus
    mismatches: list[FieldMismatch] = field(default_factory=list)

    @property
    def mismatch_details(self) -> str:
        return "; ".join(m.describe() for m in self.mismatches)


@dataclass(frozen=True)
class TitleBlockValidationSummary:
    total_sheets: int
    valid_sheets: int
    invalid_sheets: int
    compliance_percentage: float
    results: list[TitleBlockValidationResult] = field(default_factory=list)
