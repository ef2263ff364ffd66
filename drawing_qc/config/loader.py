from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from drawing_qc.models.config_models import (
    AuditConfig,
    NamingConventionSource,
    RegisterSource,
    ReportConfig,
    TitleBlockSource,
)
from drawing_qc.models.title_block import TitleBlockColumnMapping

"""Audit config loader.

Responsibilities:
- Load the YAML audit config (default ``config/audit.yml``)
- Validate it against the bundled JSON schema
- Apply defaults and build ``AuditConfig``

Relative paths in the config are resolved against the working directory.
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "SCHEMA_PATH",
    "resolve_config_path",
    "load_config",
]

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/audit.yml")
CONFIG_ENV_VAR = "DRAWING_QC_CONFIG"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or not valid JSON, or the config data
            fails validation (missing required keys, wrong types, unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def resolve_config_path(cli_value: str | None = None) -> Path:
    """CLI argument, then ``$DRAWING_QC_CONFIG``, then ``config/audit.yml``."""
    if cli_value:
        return Path(cli_value)
    env_value = os.getenv(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value)
    return DEFAULT_CONFIG_PATH


def _mapping(raw: dict[str, Any]) -> TitleBlockColumnMapping:
    try:
        return TitleBlockColumnMapping.from_mapping(raw.get("column_mapping"))
    except ValueError as e:
        raise ConfigError(f"config validation failed: {e}") from e


def load_config(path: Path) -> AuditConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    naming_raw = data["naming_convention"]
    register_raw = data["register"]
    title_raw = data["title_block"]
    report_raw = data.get("report", {})
    return AuditConfig(
        deliverables_directory=data["deliverables_directory"],
        include_subfolders=data.get("include_subfolders", True),
        file_extensions=data.get("file_extensions"),
        naming_convention=NamingConventionSource(
            path=naming_raw["path"],
            sheets_tab=naming_raw.get("sheets_tab", "Sheets"),
            models_tab=naming_raw.get("models_tab", "Models"),
        ),
        register=RegisterSource(
            path=register_raw["path"],
            sheet=register_raw.get("sheet"),
            file_name_column=register_raw.get("file_name_column", 0),
            column_mapping=_mapping(register_raw),
        ),
        title_block=TitleBlockSource(
            path=title_raw["path"],
            sheet=title_raw.get("sheet"),
            column_mapping=_mapping(title_raw),
        ),
        report=ReportConfig(
            path=report_raw.get("path"),
            csv_directory=report_raw.get("csv_directory"),
        ),
    )
