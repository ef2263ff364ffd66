from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .tabular import Cell, Table, cell_at, cell_text, is_blank

"""Naming convention models.

A naming convention workbook has one rule table per file family ("Sheets" and
"Models"). Each table keeps its layout conventions in fixed positions:

- row 0, column D (index 3): delimiter used to split the file-name stem
- row 1: header labels (display only)
- rows >= 2, column ``part_index + 1``: one allowed value per name part

``NamingRuleTable`` turns those positional conventions into named fields.
"""

__all__ = [
    "DELIMITER_ROW",
    "DELIMITER_COLUMN",
    "HEADER_ROW",
    "FIRST_RULE_ROW",
    "MODEL_EXTENSIONS",
    "NamingRuleTable",
    "NamingErrorKind",
    "NamingValidationResult",
    "NamingValidationSummary",
]

DELIMITER_ROW = 0
DELIMITER_COLUMN = 3
HEADER_ROW = 1
FIRST_RULE_ROW = 2

# Extensions validated against the "Models" tab; everything else is a sheet.
MODEL_EXTENSIONS = frozenset({"rvt", "nwd", "nwf", "ifc", "nwc"})


@dataclass(frozen=True)
class NamingRuleTable:
    """One rule tab of the naming convention workbook."""
    rows: tuple[tuple[Cell, ...], ...]

    @classmethod
    def from_table(cls, table: Table | None) -> NamingRuleTable:
        return cls(rows=tuple(tuple(r) if r is not None else () for r in (table or ())))

    @property
    def is_empty(self) -> bool:
        return len(self.rows) == 0

    @property
    def delimiter(self) -> str | None:
        """Delimiter string, or ``None`` when missing or not a non-empty string."""
        if self.is_empty:
            return None
        value = cell_at(self.rows[DELIMITER_ROW], DELIMITER_COLUMN)
        if not isinstance(value, str) or value == "":
            return None
        return value

    @property
    def headers(self) -> list[str]:
        if len(self.rows) <= HEADER_ROW:
            return []
        return [cell_text(v) for v in self.rows[HEADER_ROW]]

    def allowed_values(self, part_index: int) -> list[str]:
        """Candidate tokens for the name part at ``part_index`` (0-based).

        Empty cells are skipped. Numeric cells are compared by their text form.
        """
        column = part_index + 1
        out: list[str] = []
        for row in self.rows[FIRST_RULE_ROW:]:
            value = cell_at(row, column)
            if is_blank(value):
                continue
            out.append(cell_text(value))
        return out


class NamingErrorKind(Enum):
    """Classification of a naming failure, derived from the detail text."""
    INVALID_PATTERN = "INVALID_PATTERN"
    INVALID_DELIMITER = "INVALID_DELIMITER"
    INVALID_PART = "INVALID_PART"
    UNKNOWN_EXTENSION = "UNKNOWN_EXTENSION"


@dataclass(frozen=True)
class NamingValidationResult:
    file_name: str
    folder_path: str
    is_valid: bool
    error_kind: NamingErrorKind | None
    details: str
    expected_pattern: str


@dataclass(frozen=True)
class NamingValidationSummary:
    total_files: int
    valid_files: int
    invalid_files: int
    compliance_percentage: float
    errors: list[NamingValidationResult] = field(default_factory=list)
    all_results: list[NamingValidationResult] = field(default_factory=list)
