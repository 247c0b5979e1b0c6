# tests/checks/test_report_controller.py
import io
import json

import pandas as pd
import pytest

from sitecheck.controllers.report_controller import ReportController, EXPORT_COLUMNS
from sitecheck.model import Finding, FAILURE, WARNING
from sitecheck.rules.models import CheckReport, CheckSection


def make_report(failures=0, warnings=0, checker="notes") -> CheckReport:
    findings = [
        Finding(checker=checker, category="Rule A", code="BAD", severity=FAILURE, message=f"bad {i}", document="a.html")
        for i in range(failures)
    ] + [
        Finding(checker=checker, category="Rule A", code="MEH", severity=WARNING, message=f"meh {i}")
        for i in range(warnings)
    ]
    section = CheckSection(number=1, title="Rule A", passed=["a.html is fine"], info=["just so you know"], findings=findings)
    return CheckReport(checker=checker, title="Notes Validation", sections=[section], document_count=2)


@pytest.fixture
def out():
    return io.StringIO()


def test_clean_report_prints_all_passed(out):
    code = ReportController(out).print_report(make_report())
    text = out.getvalue()

    assert code == 0
    assert "1. Rule A..." in text
    assert "✓ a.html is fine" in text
    assert "ℹ just so you know" in text
    assert "ALL CHECKS PASSED" in text
    assert "Validated 2 document(s)." in text


def test_failures_and_warnings_are_listed_separately(out):
    code = ReportController(out).print_report(make_report(failures=1, warnings=2))
    text = out.getvalue()

    assert code == 1
    assert "NOTES VALIDATION RESULTS" in text
    assert "❌ FAILURES:\n  FAIL: bad 0" in text
    assert "⚠ WARNINGS:\n  WARNING: meh 0\n  WARNING: meh 1" in text
    assert "Total: 1 failure(s), 2 warning(s)" in text
    assert "ALL CHECKS PASSED" not in text


def test_warnings_alone_exit_zero(out):
    assert ReportController(out).print_report(make_report(warnings=3)) == 0


def test_combined_exit_code():
    assert ReportController.combined_exit_code([]) == 0
    assert ReportController.combined_exit_code([make_report(warnings=1), make_report()]) == 0
    assert ReportController.combined_exit_code([make_report(), make_report(failures=1)]) == 1


def test_export_csv(tmp_path):
    path = tmp_path / "out" / "findings.csv"
    reports = [make_report(failures=1), make_report(warnings=1, checker="a11y")]

    assert ReportController().export(reports, path) is True

    df = pd.read_csv(path).fillna("")
    assert list(df.columns) == EXPORT_COLUMNS
    assert df["Checker"].tolist() == ["notes", "a11y"]
    assert df["Severity"].tolist() == [FAILURE, WARNING]
    assert df["Document"].tolist() == ["a.html", ""]


def test_export_json(tmp_path):
    path = tmp_path / "findings.json"
    assert ReportController().export([make_report(failures=2)], path) is True

    rows = json.loads(path.read_text(encoding="utf-8"))
    assert [r["Message"] for r in rows] == ["bad 0", "bad 1"]


def test_export_unknown_format(tmp_path):
    path = tmp_path / "findings.txt"
    assert ReportController().export([make_report(failures=1)], path) is False
    assert not path.exists()


def test_export_xlsx(tmp_path):
    path = tmp_path / "findings.xlsx"
    reports = [make_report(failures=1, warnings=1)]

    assert ReportController().export(reports, path) is True

    df = pd.read_excel(path, sheet_name="findings").fillna("")
    assert list(df.columns) == EXPORT_COLUMNS
    assert df["Code"].tolist() == ["BAD", "MEH"]
    assert df["Message"].tolist() == ["bad 0", "meh 0"]
