from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""FindingRecord model for the findings log.

One record per failing item (missing file, naming error, title-block error),
serialized as a JSON line with a fixed key set.
"""

__all__ = [
    "FindingRecord",
]


@dataclass(frozen=True)
class FindingRecord:
    """Structured finding for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        check_type: "Missing File", "Naming Error" or "Title Block Error"
        file: File name the finding refers to
        status: Short outcome label (Missing, Invalid, MISMATCH, ...)
        comment: Human readable explanation
    """
    timestamp: str  # ISO8601 UTC
    check_type: str
    file: str
    status: str
    comment: str

    @staticmethod
    def create(check_type: str, file: str, status: str, comment: str) -> FindingRecord:
        """Create a new FindingRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return FindingRecord(
            timestamp=ts,
            check_type=check_type,
            file=file,
            status=status,
            comment=comment,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
