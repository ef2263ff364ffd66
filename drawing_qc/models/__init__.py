"""Domain models for the deliverables QC auditor.

Validator inputs and results, the combined audit result and the configuration
objects used by the CLI.
"""

from .audit_result import AuditResult, Finding
from .config_models import (
    AuditConfig,
    NamingConventionSource,
    RegisterSource,
    ReportConfig,
    TitleBlockSource,
)
from .files import (
    ActualFileEntry,
    ExpectedFileEntry,
    MissingFileResult,
    MissingFilesValidationSummary,
)
from .naming import (
    NamingErrorKind,
    NamingRuleTable,
    NamingValidationResult,
    NamingValidationSummary,
)
from .title_block import (
    FieldMismatch,
    TitleBlockColumnMapping,
    TitleBlockRecord,
    TitleBlockStatus,
    TitleBlockValidationResult,
    TitleBlockValidationSummary,
)

__all__ = [
    # Configuration models
    "AuditConfig",
    "NamingConventionSource",
    "RegisterSource",
    "ReportConfig",
    "TitleBlockSource",
    # Naming
    "NamingErrorKind",
    "NamingRuleTable",
    "NamingValidationResult",
    "NamingValidationSummary",
    # Files
    "ActualFileEntry",
    "ExpectedFileEntry",
    "MissingFileResult",
    "MissingFilesValidationSummary",
    # Title block
    "FieldMismatch",
    "TitleBlockColumnMapping",
    "TitleBlockRecord",
    "TitleBlockStatus",
    "TitleBlockValidationResult",
    "TitleBlockValidationSummary",
    # Aggregate
    "AuditResult",
    "Finding",
]
