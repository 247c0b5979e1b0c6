# src/sitecheck/rules/models.py
from typing import List
from pydantic import BaseModel, Field

from ..model import Finding, FAILURE, WARNING


class CheckSection(BaseModel):
    """
    The outcome of one rule: a numbered report subsection.
    Lines keep the order in which the rule produced them.
    """
    number: int
    title: str
    passed: List[str] = Field(default_factory=list)
    info: List[str] = Field(default_factory=list)
    findings: List[Finding] = Field(default_factory=list)

    @property
    def failures(self) -> List[Finding]:
        return [f for f in self.findings if f.severity == FAILURE]

    @property
    def warnings(self) -> List[Finding]:
        return [f for f in self.findings if f.severity == WARNING]


class CheckReport(BaseModel):
    """
    Aggregated result of a single checker run.

    Findings are not kept in a shared accumulator; they live in the sections and
    are flattened here in section order, which is the rule execution order.
    """
    checker: str
    title: str
    sections: List[CheckSection] = Field(default_factory=list)
    document_count: int = 0

    @property
    def findings(self) -> List[Finding]:
        return [f for section in self.sections for f in section.findings]

    @property
    def failures(self) -> List[Finding]:
        return [f for f in self.findings if f.severity == FAILURE]

    @property
    def warnings(self) -> List[Finding]:
        return [f for f in self.findings if f.severity == WARNING]

    @property
    def passed(self) -> bool:
        return not self.failures

    @property
    def exit_code(self) -> int:
        """0 when no hard failures were found. Warnings never change the exit code."""
        return 0 if self.passed else 1

    def section(self, title: str) -> CheckSection:
        """Looks up a section by title (mainly for tests and exports)."""
        for s in self.sections:
            if s.title == title:
                return s
        raise KeyError(title)
