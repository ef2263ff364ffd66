from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ..models.files import (
    ActualFileEntry,
    ExpectedFileEntry,
    MissingFileResult,
    MissingFilesValidationSummary,
)
from ..models.tabular import Table, cell_at, cell_text
from .normalizer import normalize_for_comparison, percentage

"""Missing files validator.

Reconciles the files listed in the register against the files found in the
deliverables folder. Both sides are keyed with ``normalize_for_comparison`` so
extension, case and whitespace differences do not count as missing files.
"""

__all__ = [
    "MissingFilesValidator",
]


class MissingFilesValidator:
    def __init__(self) -> None:
        self._expected: list[ExpectedFileEntry] = []
        self._actual: list[ActualFileEntry] = []

    @property
    def expected_files(self) -> list[ExpectedFileEntry]:
        return list(self._expected)

    @property
    def actual_files(self) -> list[ActualFileEntry]:
        return list(self._actual)

    def load_expected_files(self, register_table: Table, column_index: int = 0) -> None:
        """Collect expected file names from ``column_index`` of every data row.

        Row 0 is the header. Blank cells are skipped; ``register_row`` is the
        entry position in the extracted list, header-adjusted (first entry is 2).
        """
        self._expected = []
        for i, row in enumerate(register_table):
            if i == 0:
                continue
            name = cell_text(cell_at(row, column_index)).strip()
            if not name:
                continue
            self._expected.append(ExpectedFileEntry(expected_file=name, register_row=len(self._expected) + 2))

    def load_actual_files(self, files: Iterable[ActualFileEntry | Mapping[str, Any]]) -> None:
        """Accept ``ActualFileEntry`` values or ``{"name", "path"}`` mappings."""
        self._actual = [
            f if isinstance(f, ActualFileEntry) else ActualFileEntry.create(str(f["name"]), f.get("path"))
            for f in files
        ]

    def _actual_index(self) -> dict[str, ActualFileEntry]:
        # first file in input order wins on key collisions
        index: dict[str, ActualFileEntry] = {}
        for f in self._actual:
            index.setdefault(normalize_for_comparison(f.name), f)
        return index

    def validate(self) -> MissingFilesValidationSummary:
        actual_by_key = self._actual_index()
        expected_keys: set[str] = set()

        results: list[MissingFileResult] = []
        found_count = 0
        for entry in self._expected:
            key = normalize_for_comparison(entry.expected_file)
            expected_keys.add(key)
            match = actual_by_key.get(key)
            if match is not None:
                found_count += 1
            results.append(
                MissingFileResult(
                    expected_file=entry.expected_file,
                    found=match is not None,
                    register_row=entry.register_row,
                    actual_path=match.path if match is not None else None,
                )
            )

        extra = [f for f in self._actual if normalize_for_comparison(f.name) not in expected_keys]

        expected_count = len(self._expected)
        missing_count = expected_count - found_count
        return MissingFilesValidationSummary(
            total_expected=expected_count,
            total_found=found_count,
            missing_count=missing_count,
            missing_percentage=percentage(missing_count, expected_count),
            missing_files=results,
            extra_files=extra,
        )
