from __future__ import annotations

from ..models.audit_result import AuditResult

"""SUMMARY line rendering.

Format:
SUMMARY files={n} overall={pct}% naming={pct}% presence={pct}%
title_block={pct}% missing={n} extra={n} naming_errors={n}
title_block_errors={n} elapsed_sec={s}
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation for very small values
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.2f}"


def render_summary_line(result: AuditResult) -> str:
    """Render the one-line SUMMARY for an audit result.

    Examples:
        >>> from drawing_qc.models import (
        ...     MissingFilesValidationSummary, NamingValidationSummary, TitleBlockValidationSummary)
        >>> result = AuditResult(
        ...     naming=NamingValidationSummary(2, 1, 1, 50.0),
        ...     missing_files=MissingFilesValidationSummary(3, 2, 1, 33.33),
        ...     title_block=TitleBlockValidationSummary(2, 2, 0, 100.0),
        ...     overall_compliance=72, total_files=2)
        >>> render_summary_line(result)  # doctest: +ELLIPSIS
        'SUMMARY files=2 overall=72% naming=50.00% presence=66.67% title_block=100.00% missing=1 ...'
    """
    mf = result.missing_files
    return (
        f"SUMMARY files={result.total_files} "
        f"overall={result.overall_compliance}% "
        f"naming={result.naming.compliance_percentage:.2f}% "
        f"presence={mf.presence_compliance:.2f}% "
        f"title_block={result.title_block.compliance_percentage:.2f}% "
        f"missing={mf.missing_count} "
        f"extra={len(mf.extra_files)} "
        f"naming_errors={result.naming.invalid_files} "
        f"title_block_errors={result.title_block.invalid_sheets} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
