from __future__ import annotations

import pytest

from drawing_qc.models import ActualFileEntry, NamingErrorKind
from drawing_qc.services.naming_validator import (
    INVALID_DELIMITER_DETAILS,
    NO_RULES_DETAILS,
    VALID_DETAILS,
    NamingValidator,
    classify_error_kind,
    token_matches,
)

SHEETS = [
    ["Delimiter", None, None, "-"],
    ["Field", "Project", "Originator", "Number"],
    [None, "ABC", "DEF", "Var"],
    [None, "PRJ", "XYZ", None],
]

MODELS = [
    ["Delimiter", None, None, "_"],
    ["Field", "Project", "Type"],
    [None, "ABC", "PRE+N"],
]


@pytest.fixture()
def validator() -> NamingValidator:
    v = NamingValidator()
    v.load_rules(SHEETS, MODELS)
    return v


def test_valid_sheet_name(validator: NamingValidator):
    r = validator.validate_file_name("ABC-DEF-GHI.pdf")
    assert r.is_valid is True
    assert r.error_kind is None
    assert r.details == VALID_DETAILS
    assert r.expected_pattern == "Project-Originator-Number"


def test_invalid_part_reports_position_and_value(validator: NamingValidator):
    r = validator.validate_file_name("ABC-XXX-GHI.pdf")
    assert r.is_valid is False
    assert r.details == "Part 2 (XXX) is not valid"
    assert r.error_kind is NamingErrorKind.INVALID_PART


def test_several_invalid_parts_are_joined(validator: NamingValidator):
    r = validator.validate_file_name("QQQ-XXX-001.dwg")
    assert r.details == "Part 1 (QQQ) is not valid; Part 2 (XXX) is not valid"


def test_part_without_candidates_is_invalid(validator: NamingValidator):
    # fourth position has no allowed values in the table
    r = validator.validate_file_name("ABC-DEF-001-EXTRA.pdf")
    assert r.is_valid is False
    assert "Part 4 (EXTRA)" in r.details


def test_model_extension_uses_models_table(validator: NamingValidator):
    r = validator.validate_file_name("ABC_PRE123.rvt")
    assert r.is_valid is True
    assert r.expected_pattern == "Project_Type"


def test_prefix_rule_rejects_other_prefix(validator: NamingValidator):
    r = validator.validate_file_name("ABC_XYZ123.ifc")
    assert r.is_valid is False
    assert r.details == "Part 2 (XYZ123) is not valid"


def test_model_extension_is_case_insensitive(validator: NamingValidator):
    r = validator.validate_file_name("ABC_PRE1.RVT")
    assert r.is_valid is True


def test_no_rules_loaded():
    r = NamingValidator().validate_file_name("ABC-DEF-GHI.pdf")
    assert r.is_valid is False
    assert r.details == NO_RULES_DETAILS
    assert r.expected_pattern == "Unknown"
    assert r.error_kind is NamingErrorKind.INVALID_PATTERN


def test_empty_models_table_reports_file_type():
    v = NamingValidator()
    v.load_rules(SHEETS, [])
    r = v.validate_file_name("ABC_PRE1.nwd")
    assert r.is_valid is False
    assert r.details == "No naming convention data available for file type: nwd."
    assert r.error_kind is NamingErrorKind.UNKNOWN_EXTENSION
    assert r.expected_pattern == "Pattern not available"


def test_missing_delimiter():
    sheets = [["Delimiter"], ["Field", "Project"], [None, "ABC"]]
    v = NamingValidator()
    v.load_rules(sheets, MODELS)
    r = v.validate_file_name("ABC.pdf")
    assert r.is_valid is False
    assert r.details == INVALID_DELIMITER_DETAILS
    assert r.error_kind is NamingErrorKind.INVALID_DELIMITER


def test_numeric_delimiter_cell_is_not_a_delimiter():
    sheets = [["Delimiter", None, None, 5], ["Field", "Project"], [None, "ABC"]]
    v = NamingValidator()
    v.load_rules(sheets, MODELS)
    assert v.validate_file_name("ABC.pdf").details == INVALID_DELIMITER_DETAILS


def test_numeric_rule_cells_compare_as_text():
    sheets = [["Delimiter", None, None, "-"], ["Field", "Project", "Number"], [None, "ABC", 101]]
    v = NamingValidator()
    v.load_rules(sheets, MODELS)
    assert v.validate_file_name("ABC-101.pdf").is_valid is True


def test_token_matches():
    assert token_matches("Var", "anything")
    assert token_matches("PRE+N", "PRE")
    assert token_matches("PRE+N", "PRE42")
    assert not token_matches("PRE+N", "XPRE42")
    assert token_matches("ABC", "ABC")
    assert not token_matches("ABC", "abc")


def test_classify_error_kind_priority():
    assert classify_error_kind("anything", True) is None
    assert classify_error_kind("bad delimiter; Part 1", False) is NamingErrorKind.INVALID_DELIMITER
    assert classify_error_kind("for file type: x. Part 1", False) is NamingErrorKind.UNKNOWN_EXTENSION
    assert classify_error_kind("Part 1 (X) is not valid", False) is NamingErrorKind.INVALID_PART
    assert classify_error_kind("something else", False) is NamingErrorKind.INVALID_PATTERN


def test_validate_files_summary(validator: NamingValidator):
    files = [
        ActualFileEntry.create("ABC-DEF-001.pdf", "sheets/ABC-DEF-001.pdf"),
        {"name": "ABC-XXX-002.pdf", "path": "ABC-XXX-002.pdf"},
        ActualFileEntry.create("ABC_PRE1.rvt"),
    ]
    seen = []
    summary = validator.validate_files(files, on_result=lambda r: seen.append(r.file_name))
    assert summary.total_files == 3
    assert summary.valid_files == 2
    assert summary.invalid_files == 1
    assert summary.compliance_percentage == 66.67
    assert [e.file_name for e in summary.errors] == ["ABC-XXX-002.pdf"]
    assert summary.all_results[0].folder_path == "sheets"
    assert summary.all_results[1].folder_path == ""
    assert seen == ["ABC-DEF-001.pdf", "ABC-XXX-002.pdf", "ABC_PRE1.rvt"]


def test_validate_files_empty(validator: NamingValidator):
    summary = validator.validate_files([])
    assert summary.total_files == 0
    assert summary.compliance_percentage == 0.0


def test_trace_receives_part_diagnostics():
    messages: list[str] = []
    v = NamingValidator(trace=messages.append)
    v.load_rules(SHEETS, MODELS)
    v.validate_file_name("ABC-DEF-001.pdf")
    assert any("part 1 'ABC'" in m for m in messages)
    assert messages[-1].startswith("ABC-DEF-001.pdf: valid=True")


def test_metacharacter_delimiter_is_literal():
    sheets = [["Delimiter", None, None, "."], ["Field", "Project", "Number"], [None, "ABC", "Var"]]
    v = NamingValidator()
    v.load_rules(sheets, MODELS)
    assert v.validate_file_name("ABC.001.pdf").is_valid is True
    assert v.validate_file_name("ABCX001.pdf").details == "Part 1 (ABCX001) is not valid"


def test_file_without_extension_uses_sheets_table(validator: NamingValidator):
    r = validator.validate_file_name("ABC-DEF-001")
    assert r.is_valid is True
    assert r.expected_pattern == "Project-Originator-Number"
