# src/sitecheck/rules/core.py
from typing import Any, Callable, List, Optional, Set, Tuple


def check_codes(codes: List[str]):
    """
    Decorator to declare which issue codes a specific rule function returns.
    The codes are collected by RuleDefinition and exposed through RuleSet.codes.
    """
    def decorator(func):
        func.defined_codes = codes
        return func
    return decorator


# Type alias for rule output: (Code, Message, Subject, Severity)
# Subject is the document identifier the line is about, or None for run-level lines.
CheckResult = Tuple[str, str, Optional[str], str]

RuleFunc = Callable[[Any], List[CheckResult]]


class RuleDefinition:
    """
    Binds a report section title to the rule that fills it.
    """

    def __init__(self, title: str, rule: RuleFunc, possible_codes: Optional[List[str]] = None):
        self.title = title
        self.rule = rule

        # --- Auto-Discovery of Issue Codes ---
        final_codes: Set[str] = set(possible_codes or [])
        if hasattr(rule, 'defined_codes'):
            final_codes.update(rule.defined_codes)

        self.codes = sorted(final_codes)

    def __repr__(self) -> str:
        return f"RuleDefinition({self.title!r}, {self.rule.__name__})"


class RuleSet:
    """
    An ordered, fixed list of rule definitions for one checker.
    Evaluation order is list order and is also the display order of the report.
    """

    def __init__(self, name: str, definitions: List[RuleDefinition]):
        self.name = name
        self.definitions = list(definitions)

    def __iter__(self):
        return iter(self.definitions)

    def __len__(self) -> int:
        return len(self.definitions)

    @property
    def codes(self) -> List[str]:
        """All issue codes any rule in this set can emit."""
        all_codes: Set[str] = set()
        for defn in self.definitions:
            all_codes.update(defn.codes)
        return sorted(all_codes)
