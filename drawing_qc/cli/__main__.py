from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from drawing_qc.config.loader import ConfigError, load_config, resolve_config_path
from drawing_qc.excel.reader import WorkbookError
from drawing_qc.excel.report_writer import write_report_csv, write_report_xlsx
from drawing_qc.logging.finding_log import FindingLogBuffer
from drawing_qc.logging.init import log_summary, set_debug, setup_logging
from drawing_qc.models.audit_result import AuditResult
from drawing_qc.models.config_models import AuditConfig
from drawing_qc.models.naming import NamingRuleTable
from drawing_qc.models.tabular import Table, cell_text
from drawing_qc.services.aggregator import build_report_tables
from drawing_qc.services.naming_validator import logger_trace
from drawing_qc.services.orchestrator import AuditError, load_inputs, run_audit
from drawing_qc.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, resolve and load the audit config
- Run the naming, presence and title-block checks
- Log the SUMMARY line, write the findings log and reports when requested

Exit codes: 0 no findings, 2 findings present, 1 fatal error.
"""

EXIT_SUCCESS_ALL = 0
EXIT_FINDINGS = 2
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv (no-op when the file is absent)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Drawing deliverables QC auditor")
    p.add_argument("--config", help="Audit config YAML (default: $DRAWING_QC_CONFIG or config/audit.yml)")
    p.add_argument("--report", help="Write the xlsx report to this path (overrides report.path)")
    p.add_argument("--findings-log", metavar="DIR", help="Write a JSON Lines findings log into DIR")
    p.add_argument("--debug", action="store_true", help="Enable debug logging and naming-rule tracing")
    p.add_argument("--inspect-data", action="store_true", help="Print input table structure then exit")
    return p.parse_args(argv)


def _header(table: Table) -> list[str]:
    return [cell_text(c) for c in table[0]] if table else []


def _inspect_rules(label: str, table: Table) -> None:
    rules = NamingRuleTable.from_table(table)
    if rules.is_empty:
        print(f"  {label}: (empty)")
        return
    first_rule = [cell_text(c) for c in rules.rows[2]] if len(rules.rows) > 2 else []
    print(f"  {label}: delimiter={rules.delimiter!r} headers={rules.headers}")
    print(f"    first_rule_row={first_rule}")


def _inspect_data(cfg: AuditConfig) -> int:
    inputs = load_inputs(cfg)
    print(f"NAMING: {cfg.naming_convention.path}")
    _inspect_rules(cfg.naming_convention.sheets_tab, inputs.sheets_rules)
    _inspect_rules(cfg.naming_convention.models_tab, inputs.models_rules)
    print(f"REGISTER: {cfg.register.path} rows={len(inputs.register)}")
    print(f"  headers={_header(inputs.register)}")
    print(f"TITLE BLOCK: {cfg.title_block.path} rows={len(inputs.title_blocks)}")
    print(f"  headers={_header(inputs.title_blocks)}")
    return EXIT_SUCCESS_ALL


def _export_reports(cfg: AuditConfig, result: AuditResult, report_arg: str | None) -> list[Path]:
    report_path = report_arg or cfg.report.path
    if not report_path and not cfg.report.csv_directory:
        return []
    tables = build_report_tables(result)
    written: list[Path] = []
    if report_path:
        written.append(write_report_xlsx(tables, Path(report_path)))
    if cfg.report.csv_directory:
        written.extend(write_report_csv(tables, Path(cfg.report.csv_directory)))
    return written


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] from tests must not pick up pytest's own argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    config_path = resolve_config_path(args.config)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        try:
            return _inspect_data(cfg)
        except WorkbookError as e:
            logger.error(f"inspect: {e}")
            return EXIT_FATAL

    trace = logger_trace(logger) if args.debug else None
    try:
        result = run_audit(cfg, trace=trace)
    except AuditError as e:
        logger.error(f"audit: {e}")
        return EXIT_FATAL
    except WorkbookError as e:
        logger.error(f"workbook: {e}")
        return EXIT_FATAL

    if args.findings_log:
        buffer = FindingLogBuffer(Path(args.findings_log))
        try:
            if buffer.extend_from_result(result):
                logger.info(f"findings log: {buffer.flush()}")
        except OSError as e:
            logger.error(f"findings log: {e}")
            return EXIT_FATAL

    try:
        for path in _export_reports(cfg, result, args.report):
            logger.info(f"report written: {path}")
    except OSError as e:
        logger.error(f"report: {e}")
        return EXIT_FATAL

    logger.info(f"overall compliance: {result.overall_compliance}%")
    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.has_findings:
        return EXIT_FINDINGS
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
