# Shared pytest fixtures
from __future__ import annotations
import os
import tempfile
from pathlib import Path
from typing import Any, Callable
import pandas as pd
import pytest

from drawing_qc.logging.init import reset_logging


NAMING_SHEETS_TAB = [
    ["Delimiter", None, None, "-"],
    ["Field", "Project", "Originator", "Number"],
    [None, "ABC", "DEF", "Var"],
    [None, "PRJ", "XYZ", None],
]

NAMING_MODELS_TAB = [
    ["Delimiter", None, None, "_"],
    ["Field", "Project", "Type"],
    [None, "ABC", "M+N"],
]

REGISTER_ROWS = [
    ["Sheet No", "Sheet Name", "File Name", "Rev", "Rev Date", "Suitability"],
    ["A-001", "General Arrangement", "ABC-DEF-001.pdf", "P01", "13/03/2025", "S2"],
    ["A-002", "Sections", "ABC-XXX-002.pdf", "P02", "14.03.2025", "S2"],
    ["A-003", "Details", "ABC-DEF-003.pdf", "P01", "15/03/2025", "S2"],
]

TITLE_BLOCK_ROWS = [
    ["Sheet No", "Sheet Name", "File Name", "Rev", "Rev Date", "Suitability"],
    ["A-001", "General Arrangement", "ABC-DEF-001.pdf", "P01", "13.03.2025", "S2"],
    ["A-002", "Sections", "ABC-XXX-002.pdf", "P03", "14/03/2025", "S2"],
]

DELIVERABLE_FILES = ["ABC-DEF-001.pdf", "ABC-XXX-002.pdf", "models/ABC_M3.rvt"]


def _write_workbook(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet_name, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return path


@pytest.fixture(autouse=True)
def _clean_logging_and_env(monkeypatch):
    monkeypatch.delenv("DRAWING_QC_CONFIG", raising=False)
    reset_logging()
    yield
    reset_logging()
    # python-dotenv writes straight into os.environ
    os.environ.pop("DRAWING_QC_CONFIG", None)


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "inputs").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def write_workbook() -> Callable[[Path, dict[str, list[list[object]]]], Path]:
    return _write_workbook


@pytest.fixture()
def sample_config_yaml() -> str:
    return """deliverables_directory: ./data
include_subfolders: true
naming_convention:
  path: ./inputs/naming.xlsx
register:
  path: ./inputs/register.xlsx
  file_name_column: 2
title_block:
  path: ./inputs/title_blocks.xlsx
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "audit.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def audit_workspace(temp_workdir: Path, write_config: Path) -> dict[str, Any]:
    """Inputs and deliverables for a run with one finding of every kind.

    - naming: ABC-XXX-002.pdf has an invalid part 2
    - presence: ABC-DEF-003.pdf is missing, models/ABC_M3.rvt is extra
    - title block: A-002 revision mismatch, A-003 missing
    """
    inputs = temp_workdir / "inputs"
    _write_workbook(inputs / "naming.xlsx", {"Sheets": NAMING_SHEETS_TAB, "Models": NAMING_MODELS_TAB})
    _write_workbook(inputs / "register.xlsx", {"Register": REGISTER_ROWS})
    _write_workbook(inputs / "title_blocks.xlsx", {"Export": TITLE_BLOCK_ROWS})
    data = temp_workdir / "data"
    for rel in DELIVERABLE_FILES:
        f = data / rel
        f.parent.mkdir(parents=True, exist_ok=True)
        f.write_bytes(b"")
    return {
        "root": temp_workdir,
        "config": write_config,
        "data": data,
        "inputs": inputs,
    }
