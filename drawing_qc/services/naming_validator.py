from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ..models.files import ActualFileEntry, file_extension
from ..models.naming import (
    MODEL_EXTENSIONS,
    NamingErrorKind,
    NamingRuleTable,
    NamingValidationResult,
    NamingValidationSummary,
)
from ..models.tabular import Table
from .normalizer import percentage, strip_extension

"""File naming convention validator.

A file name is split on the delimiter of its rule table and every part is
checked against the allowed values listed for that position. Allowed values
are either literals, the wildcard ``Var`` or a prefix pattern ``<prefix>+N``.

Problems with the rule tables themselves (nothing loaded, no rows for a file
type, missing delimiter) never raise: they turn the affected file into an
invalid result with a descriptive message.
"""

__all__ = [
    "NamingValidator",
    "NamingTrace",
    "logger_trace",
    "token_matches",
    "classify_error_kind",
    "VALID_DETAILS",
    "NO_RULES_DETAILS",
    "INVALID_DELIMITER_DETAILS",
]

NamingTrace = Callable[[str], None]

VARIABLE_TOKEN = "Var"
PREFIX_MARKER = "+N"

VALID_DETAILS = "Delimiter correct. Number of parts correct."
NO_RULES_DETAILS = "No naming convention uploaded. Please upload a naming convention file."
INVALID_DELIMITER_DETAILS = "Invalid or missing delimiter in naming convention."


def logger_trace(logger: logging.Logger) -> NamingTrace:
    """Adapt a logger into a trace observer emitting DEBUG records."""
    def _trace(message: str) -> None:
        logger.debug(message)
    return _trace


def token_matches(allowed: str, part: str) -> bool:
    """Check one allowed-value token against one name part."""
    if PREFIX_MARKER in allowed:
        prefix = allowed.split("+")[0]
        return part.startswith(prefix)
    if allowed == VARIABLE_TOKEN:
        return True
    return allowed == part


def classify_error_kind(details: str, is_valid: bool) -> NamingErrorKind | None:
    """Derive the error kind from the detail message.

    Trigger substrings are checked in priority order: "delimiter",
    "file type", "Part".
    """
    if is_valid:
        return None
    if "delimiter" in details:
        return NamingErrorKind.INVALID_DELIMITER
    if "file type" in details:
        return NamingErrorKind.UNKNOWN_EXTENSION
    if "Part" in details:
        return NamingErrorKind.INVALID_PART
    return NamingErrorKind.INVALID_PATTERN


@dataclass(frozen=True)
class _Analysis:
    is_valid: bool
    details: str
    invalid_parts: tuple[str, ...] = ()


class NamingValidator:
    """Validate file names against "Sheets"/"Models" naming rule tables.

    Args:
        trace: optional observer receiving diagnostic messages; use
            ``logger_trace(logger)`` to route them to logging.
    """

    def __init__(self, trace: NamingTrace | None = None) -> None:
        self._sheets: NamingRuleTable | None = None
        self._models: NamingRuleTable | None = None
        self._trace = trace

    def _emit(self, message: str) -> None:
        if self._trace is not None:
            self._trace(message)

    @property
    def rules_loaded(self) -> bool:
        return self._sheets is not None and self._models is not None

    def load_rules(self, sheets_table: Table | None, models_table: Table | None) -> None:
        """Store both rule tables (raw tabular rows)."""
        self._sheets = NamingRuleTable.from_table(sheets_table)
        self._models = NamingRuleTable.from_table(models_table)
        self._emit(
            f"naming rules loaded: sheets rows={len(self._sheets.rows)} "
            f"delimiter={self._sheets.delimiter!r}; models rows={len(self._models.rows)} "
            f"delimiter={self._models.delimiter!r}"
        )

    def _table_for(self, extension: str) -> NamingRuleTable | None:
        return self._models if extension in MODEL_EXTENSIONS else self._sheets

    def _analyze(self, file_name: str) -> _Analysis:
        if not self.rules_loaded:
            return _Analysis(False, NO_RULES_DETAILS)

        extension = file_extension(file_name)
        table = self._table_for(extension)
        if table is None or table.is_empty:
            return _Analysis(False, f"No naming convention data available for file type: {extension}.")

        delimiter = table.delimiter
        if delimiter is None:
            return _Analysis(False, INVALID_DELIMITER_DETAILS)

        parts = strip_extension(file_name).split(delimiter)
        details = ""
        invalid: list[str] = []
        for i, part in enumerate(parts):
            allowed = table.allowed_values(i)
            if not any(token_matches(token, part) for token in allowed):
                details += f"Part {i + 1} ({part}) is not valid; "
                invalid.append(part)
            self._emit(f"{file_name}: part {i + 1} {part!r} candidates={len(allowed)}")

        cleaned = details.strip()
        if cleaned.endswith(";"):
            cleaned = cleaned[:-1]
        return _Analysis(not invalid, cleaned, tuple(invalid))

    def expected_pattern(self, file_name: str) -> str:
        """Header labels joined by the delimiter, for display next to errors."""
        if not self.rules_loaded:
            return "Unknown"
        table = self._table_for(file_extension(file_name))
        if table is None or table.is_empty:
            return "Pattern not available"
        delimiter = table.delimiter
        if delimiter is None:
            return "Pattern not available"
        return delimiter.join(table.headers[1:]) or "Pattern not available"

    def validate_file_name(self, file_name: str, folder_path: str = "") -> NamingValidationResult:
        analysis = self._analyze(file_name)
        details = analysis.details
        if analysis.is_valid and not details:
            details = VALID_DETAILS
        result = NamingValidationResult(
            file_name=file_name,
            folder_path=folder_path,
            is_valid=analysis.is_valid,
            error_kind=classify_error_kind(analysis.details, analysis.is_valid),
            details=details,
            expected_pattern=self.expected_pattern(file_name),
        )
        self._emit(f"{file_name}: valid={result.is_valid} details={result.details!r}")
        return result

    def validate_files(
        self,
        files: Iterable[ActualFileEntry | Mapping[str, Any]],
        on_result: Callable[[NamingValidationResult], None] | None = None,
    ) -> NamingValidationSummary:
        """Validate every file and summarize.

        Args:
            files: ``ActualFileEntry`` values or ``{"name", "path"}`` mappings
            on_result: called after each file (progress reporting)
        """
        all_results: list[NamingValidationResult] = []
        errors: list[NamingValidationResult] = []
        for f in files:
            entry = f if isinstance(f, ActualFileEntry) else ActualFileEntry.create(str(f["name"]), f.get("path"))
            result = self.validate_file_name(entry.name, entry.folder_path)
            all_results.append(result)
            if not result.is_valid:
                errors.append(result)
            if on_result is not None:
                on_result(result)

        total = len(all_results)
        invalid = len(errors)
        return NamingValidationSummary(
            total_files=total,
            valid_files=total - invalid,
            invalid_files=invalid,
            compliance_percentage=percentage(total - invalid, total),
            errors=errors,
            all_results=all_results,
        )
