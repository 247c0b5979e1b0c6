# src/sitecheck/controllers/report_controller.py
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

import pandas as pd

from sitecheck.rules.models import CheckReport

logger = logging.getLogger(__name__)

BANNER_WIDTH = 60

EXPORT_COLUMNS = ["Checker", "Category", "Code", "Severity", "Document", "Message"]


class ReportController:
    """
    Shared reporting for both checkers: console output, flat exports and the exit code.
    """

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out

    def _print(self, text: str = "") -> None:
        print(text, file=self.out or sys.stdout)

    # --- Console Output ---

    def print_report(self, report: CheckReport) -> int:
        """
        Prints a report: banner, numbered sections, result lists and totals.

        Returns:
            int: The exit code for this report (0 = no failures).
        """
        bar = "=" * BANNER_WIDTH

        self._print(report.title)
        self._print(bar)

        for section in report.sections:
            self._print(f"\n{section.number}. {section.title}...")
            for line in section.passed:
                self._print(f"   ✓ {line}")
            for line in section.info:
                self._print(f"   ℹ {line}")
            for finding in section.findings:
                marker = "❌" if finding.is_failure else "⚠"
                self._print(f"   {marker} {finding.message}")

        self._print(f"\n{bar}")
        self._print(f"{report.title.upper()} RESULTS")
        self._print(bar)

        failures, warnings = report.failures, report.warnings

        if not failures and not warnings:
            self._print("\n✓ ALL CHECKS PASSED!")
            self._print(f"\nValidated {report.document_count} document(s).")
            return report.exit_code

        if failures:
            self._print("\n❌ FAILURES:")
            for f in failures:
                self._print(f"  FAIL: {f.message}")

        if warnings:
            self._print("\n⚠ WARNINGS:")
            for w in warnings:
                self._print(f"  WARNING: {w.message}")

        self._print(f"\n{bar}")
        self._print(f"Total: {len(failures)} failure(s), {len(warnings)} warning(s)")
        self._print(bar)

        return report.exit_code

    # --- Exports ---

    @staticmethod
    def to_rows(reports: List[CheckReport]) -> List[Dict[str, Any]]:
        """Flattens the findings of one or more reports into table rows, in report order."""
        return [
            {
                "Checker": f.checker,
                "Category": f.category,
                "Code": f.code,
                "Severity": f.severity,
                "Document": f.document or "",
                "Message": f.message
            }
            for report in reports
            for f in report.findings
        ]

    def export(self, reports: List[CheckReport], path: Path) -> bool:
        """
        Writes all findings to a file. The format follows the suffix: .csv, .json or .xlsx.

        Returns:
            bool: True when the file was written.
        """
        path = Path(path)
        df = pd.DataFrame(self.to_rows(reports), columns=EXPORT_COLUMNS)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            suffix = path.suffix.lower()
            if suffix == ".csv":
                df.to_csv(path, index=False)
            elif suffix == ".json":
                df.to_json(path, orient="records", indent=2, force_ascii=False)
            elif suffix == ".xlsx":
                df.to_excel(path, index=False, sheet_name="findings")
            else:
                logger.error("Unsupported export format '%s' (use .csv, .json or .xlsx)", path.suffix)
                return False
        except (OSError, ValueError, ImportError) as e:
            logger.error("Failed to export findings to %s: %s", path, e)
            return False

        logger.info("Exported %d finding(s) to %s", len(df), path)
        return True

    @staticmethod
    def combined_exit_code(reports: List[CheckReport]) -> int:
        """Non-zero as soon as any report holds a hard failure."""
        return max((r.exit_code for r in reports), default=0)
