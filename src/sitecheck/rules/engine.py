# src/sitecheck/rules/engine.py
import logging
from typing import Any

from .core import RuleSet
from .models import CheckReport, CheckSection
from ..model import Finding, FAILURE, FINDING_SEVERITIES, PASS, INFO

logger = logging.getLogger(__name__)


class CheckEngine:
    """
    Runs a RuleSet against the facts produced by an extractor.

    Every rule runs, regardless of what earlier rules reported. Each rule fills
    its own numbered section of the resulting CheckReport.
    """

    def __init__(self, rule_set: RuleSet):
        self.rule_set = rule_set

    def run(self, facts: Any, title: str, document_count: int = 0) -> CheckReport:
        """
        Evaluates all rules in order.

        Args:
            facts: The extracted facts object the rules operate on.
            title: Human-readable checker title for the report banner.
            document_count: Number of documents the facts were extracted from.

        Returns:
            CheckReport: Sections in rule order with their findings and display lines.
        """
        report = CheckReport(checker=self.rule_set.name, title=title, document_count=document_count)

        for number, defn in enumerate(self.rule_set, start=1):
            section = CheckSection(number=number, title=defn.title)

            try:
                results = defn.rule(facts) or []
            except Exception as e:
                logger.error("Rule '%s' crashed: %s", defn.rule.__name__, e, exc_info=True)
                results = [("RULE_ERROR", f"Rule '{defn.title}' could not be evaluated: {e}", None, FAILURE)]

            for (code, msg, subject, sev) in results:
                if sev in FINDING_SEVERITIES:
                    section.findings.append(Finding(
                        checker=self.rule_set.name,
                        category=defn.title,
                        code=code,
                        severity=sev,
                        message=msg,
                        document=subject
                    ))
                elif sev == PASS:
                    section.passed.append(msg)
                elif sev == INFO:
                    section.info.append(msg)
                else:
                    logger.warning("Unknown severity '%s' from rule '%s'; treating as info.", sev, defn.rule.__name__)
                    section.info.append(msg)

            logger.debug(
                "Rule %d (%s): %d finding(s)", number, defn.title, len(section.findings)
            )
            report.sections.append(section)

        return report
