from __future__ import annotations

from dataclasses import dataclass, field

from .title_block import TitleBlockColumnMapping

"""Config dataclasses for the deliverables QC audit.

These are produced by ``drawing_qc.config.loader.load_config`` after the YAML
document has passed schema validation.
"""


@dataclass(frozen=True)
class NamingConventionSource:
    """Workbook holding the naming rule tabs."""
    path: str
    sheets_tab: str = "Sheets"
    models_tab: str = "Models"


@dataclass(frozen=True)
class RegisterSource:
    """Drawing register (expected files + register metadata)."""
    path: str
    sheet: str | None = None  # None = first sheet
    file_name_column: int = 0  # column scanned for expected file names
    column_mapping: TitleBlockColumnMapping = field(default_factory=TitleBlockColumnMapping)


@dataclass(frozen=True)
class TitleBlockSource:
    """Title-block export produced by an external extraction tool."""
    path: str
    sheet: str | None = None
    column_mapping: TitleBlockColumnMapping = field(default_factory=TitleBlockColumnMapping)


@dataclass(frozen=True)
class ReportConfig:
    path: str | None = None  # xlsx output
    csv_directory: str | None = None  # one CSV per report table


@dataclass(frozen=True)
class AuditConfig:
    """Root configuration object for an audit run."""
    deliverables_directory: str
    naming_convention: NamingConventionSource
    register: RegisterSource
    title_block: TitleBlockSource
    include_subfolders: bool = True
    file_extensions: list[str] | None = None  # None = every file
    report: ReportConfig = field(default_factory=ReportConfig)
