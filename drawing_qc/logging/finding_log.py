from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from drawing_qc.models.audit_result import AuditResult
from drawing_qc.models.finding_record import FindingRecord
from drawing_qc.services.aggregator import iter_findings

"""Findings log buffering.

- JSON Lines with a fixed key set
- one ``findings-YYYYMMDD-HHMMSS.log`` file (UTC) per run, created on first flush
- records are buffered and written in one go
"""

__all__ = [
    "FindingRecord",
    "FindingLogBuffer",
    "DEFAULT_LOGS_DIR",
]

DEFAULT_LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class FindingLogBuffer:
    """In-memory buffer of finding records. ``flush`` writes JSON Lines."""

    def __init__(self, logs_dir: Path = DEFAULT_LOGS_DIR) -> None:
        self._records: list[FindingRecord] = []
        self._logs_dir = logs_dir
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"findings-{stamp}.log"
        return self._file_path

    def append(self, record: FindingRecord) -> None:
        self._records.append(record)

    def extend_from_result(self, result: AuditResult) -> int:
        """Buffer one record per failing item of ``result``; returns the count."""
        count = 0
        for finding in iter_findings(result):
            self.append(FindingRecord.create(finding.check_type, finding.file_name, finding.status, finding.comment))
            count += 1
        return count

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path:
        if not self._records:
            return self.file_path
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
