# src/sitecheck/controllers/check_controller.py
import logging
from pathlib import Path
from typing import Optional

from sitecheck.a11y.extractor import A11yExtractor, A11yOptions
from sitecheck.a11y.rules import A11Y_RULE_SET
from sitecheck.model import INDEX_DOCUMENT
from sitecheck.notes.extractor import NotesExtractor
from sitecheck.notes.rules import NOTES_RULE_SET
from sitecheck.rules.engine import CheckEngine
from sitecheck.rules.models import CheckReport

logger = logging.getLogger(__name__)


class CheckController:
    """
    Orchestrates a checker run: extract once, evaluate every rule, hand back the report.
    Nothing is printed here; presentation belongs to the ReportController.
    """

    def __init__(self):
        self.notes_engine = CheckEngine(NOTES_RULE_SET)
        self.a11y_engine = CheckEngine(A11Y_RULE_SET)

    def run_notes(
            self,
            notes_dir: Path,
            index_name: str = INDEX_DOCUMENT,
            show_progress: bool = False
    ) -> CheckReport:
        """
        Runs the notes consistency check on a directory.

        Args:
            notes_dir (Path): Directory holding the note pages and their index.
            index_name (str): File name of the index page inside notes_dir.
            show_progress (bool): Show a progress bar while reading notes.

        Returns:
            CheckReport: The categorized findings for this run.
        """
        logger.info("Running notes check on %s", notes_dir)
        extractor = NotesExtractor(Path(notes_dir), index_name=index_name, show_progress=show_progress)
        facts = extractor.extract()

        doc_count = len(facts.note_meta) + (1 if facts.index_found else 0)
        report = self.notes_engine.run(facts, title="Notes Validation", document_count=doc_count)
        logger.info(
            "Notes check finished: %d failure(s), %d warning(s)", len(report.failures), len(report.warnings)
        )
        return report

    def run_a11y(self, document_path: Path, options: Optional[A11yOptions] = None) -> CheckReport:
        """Runs the accessibility checklist on a single document."""
        document_path = Path(document_path)
        logger.info("Running accessibility check on %s", document_path)

        facts = A11yExtractor(options).extract_file(document_path, identifier=document_path.name)
        report = self.a11y_engine.run(
            facts, title="Accessibility Test", document_count=1 if facts.document_found else 0
        )
        logger.info(
            "Accessibility check finished: %d failure(s), %d warning(s)",
            len(report.failures), len(report.warnings)
        )
        return report
