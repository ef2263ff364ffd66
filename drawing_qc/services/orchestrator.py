from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import read_naming_convention, read_table
from ..models.audit_result import AuditResult
from ..models.config_models import AuditConfig
from ..models.files import ActualFileEntry
from ..models.naming import NamingValidationResult
from ..models.tabular import Table
from .aggregator import combine_results
from .missing_files_validator import MissingFilesValidator
from .naming_validator import NamingTrace, NamingValidator
from .progress import ProgressTracker
from .title_block_validator import TitleBlockValidator

logger = logging.getLogger(__name__)

"""Audit orchestration.

Scans the deliverables directory, reads the naming convention, register and
title-block export, runs the three validators and combines their summaries
into one ``AuditResult``.
"""

__all__ = [
    "AuditError",
    "AuditInputs",
    "scan_deliverables",
    "load_inputs",
    "run_audit",
]


class AuditError(Exception):
    """Raised when the audit cannot start (bad deliverables directory)."""
    pass


def _normalize_extensions(file_extensions: list[str] | None) -> set[str] | None:
    if not file_extensions:
        return None
    return {e.strip().lstrip(".").lower() for e in file_extensions if e.strip()}


def scan_deliverables(
    directory: Path,
    include_subfolders: bool = True,
    file_extensions: list[str] | None = None,
) -> list[ActualFileEntry]:
    """List deliverable files under ``directory``.

    Args:
        directory: Root of the deliverables tree
        include_subfolders: Recurse into subfolders when True
        file_extensions: Case-insensitive extension filter ("pdf" or ".pdf");
            None or empty keeps every file

    Returns:
        Entries sorted by relative path; ``path`` is relative to ``directory``
        and uses "/" separators.

    Raises:
        AuditError: If the directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise AuditError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise AuditError(f"Path is not a directory: {directory}")

    allowed = _normalize_extensions(file_extensions)
    pattern = "**/*" if include_subfolders else "*"
    try:
        paths = [p for p in directory.glob(pattern) if p.is_file()]
    except OSError as e:
        raise AuditError(f"Error reading directory {directory}: {e}") from e

    entries: list[ActualFileEntry] = []
    for p in sorted(paths, key=lambda p: p.relative_to(directory).as_posix()):
        entry = ActualFileEntry.create(p.name, p.relative_to(directory).as_posix())
        if allowed is not None and entry.extension not in allowed:
            continue
        entries.append(entry)
    return entries


class AuditInputs:
    """Tables read from the three input workbooks."""

    def __init__(
        self,
        sheets_rules: Table,
        models_rules: Table,
        register: Table,
        title_blocks: Table,
    ) -> None:
        self.sheets_rules = sheets_rules
        self.models_rules = models_rules
        self.register = register
        self.title_blocks = title_blocks


def load_inputs(config: AuditConfig) -> AuditInputs:
    """Read every input table named by the config.

    Raises:
        WorkbookError: If a workbook is missing, unreadable or lacks a tab
    """
    naming = config.naming_convention
    sheets_rules, models_rules = read_naming_convention(
        Path(naming.path), sheets_tab=naming.sheets_tab, models_tab=naming.models_tab
    )
    if not models_rules:
        logger.warning(
            "naming convention has no '%s' tab data; model files will fail naming checks",
            naming.models_tab,
        )
    register = read_table(Path(config.register.path), config.register.sheet)
    title_blocks = read_table(Path(config.title_block.path), config.title_block.sheet)
    logger.debug(
        "inputs loaded sheets_rules=%d models_rules=%d register_rows=%d title_block_rows=%d",
        len(sheets_rules),
        len(models_rules),
        len(register),
        len(title_blocks),
    )
    return AuditInputs(sheets_rules, models_rules, register, title_blocks)


def run_audit(config: AuditConfig, trace: NamingTrace | None = None) -> AuditResult:
    """Run the naming, presence and title-block checks for one config.

    Args:
        config: Loaded audit config
        trace: Optional sink for per-part naming diagnostics (``--debug``)

    Raises:
        AuditError: Deliverables directory problems
        WorkbookError: Input workbook problems
    """
    start_time = datetime.now(UTC)

    directory = Path(config.deliverables_directory)
    files = scan_deliverables(directory, config.include_subfolders, config.file_extensions)
    logger.info("Auditing %d files from: %s", len(files), directory)

    inputs = load_inputs(config)

    naming_validator = NamingValidator(trace=trace)
    naming_validator.load_rules(inputs.sheets_rules, inputs.models_rules)
    with ProgressTracker(len(files), description="Checking names") as progress:
        invalid = 0

        def _on_result(result: NamingValidationResult) -> None:
            nonlocal invalid
            if not result.is_valid:
                invalid += 1
                progress.set_postfix(invalid=invalid)
            progress.advance(result.file_name)

        naming = naming_validator.validate_files(files, on_result=_on_result)
    logger.info(
        "naming: %d/%d valid (%.2f%%)",
        naming.valid_files,
        naming.total_files,
        naming.compliance_percentage,
    )

    presence_validator = MissingFilesValidator()
    presence_validator.load_expected_files(inputs.register, config.register.file_name_column)
    presence_validator.load_actual_files(files)
    missing_files = presence_validator.validate()
    logger.info(
        "presence: %d expected, %d missing, %d extra",
        missing_files.total_expected,
        missing_files.missing_count,
        len(missing_files.extra_files),
    )

    title_block_validator = TitleBlockValidator()
    title_block_validator.load_register_data(inputs.register, config.register.column_mapping)
    title_block_validator.load_title_block_data(inputs.title_blocks, config.title_block.column_mapping)
    title_block = title_block_validator.validate()
    logger.info(
        "title block: %d/%d valid (%.2f%%)",
        title_block.valid_sheets,
        title_block.total_sheets,
        title_block.compliance_percentage,
    )

    end_time = datetime.now(UTC)
    return combine_results(
        naming,
        missing_files,
        title_block,
        total_files=len(files),
        start_time=start_time,
        end_time=end_time,
    )
