from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .files import MissingFilesValidationSummary
from .naming import NamingValidationSummary
from .title_block import TitleBlockValidationSummary

"""Combined audit result.

Holds the three validator summaries plus the overall compliance score, and the
run timing used for the SUMMARY output line.
"""

__all__ = [
    "AuditResult",
    "Finding",
]


@dataclass(frozen=True)
class Finding:
    """One failing item, in the uniform shape of the "All Findings" table."""
    check_type: str  # Missing File / Naming Error / Title Block Error
    file_name: str
    status: str
    comment: str


@dataclass(frozen=True)
class AuditResult:
    """Aggregated outcome of one audit run."""
    naming: NamingValidationSummary
    missing_files: MissingFilesValidationSummary
    title_block: TitleBlockValidationSummary
    overall_compliance: int  # mean of the three "good" percentages, half-up rounded
    total_files: int  # actual files audited
    start_time: datetime | None = None
    end_time: datetime | None = None

    @property
    def elapsed_seconds(self) -> float:
        if self.start_time is None or self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()

    @property
    def finding_count(self) -> int:
        """Number of failing items across the three checks."""
        return (
            self.missing_files.missing_count
            + self.naming.invalid_files
            + self.title_block.invalid_sheets
        )

    @property
    def has_findings(self) -> bool:
        return self.finding_count > 0
