# src/sitecheck/a11y/rules.py
from typing import List

from .extractor import A11yFacts
from ..model import FAILURE, WARNING, PASS, INFO
from ..rules.core import CheckResult, RuleDefinition, RuleSet, check_codes


def _describe(kind: str, position: int, target) -> str:
    """'Image 3 (logo.png)', or just 'Image 3' when the element has no target."""
    return f"{kind} {position} ({target})" if target else f"{kind} {position}"


# --- RULES ---

@check_codes(codes=["MISSING_DOCUMENT", "UNREADABLE_DOCUMENT"])
def check_document(facts: A11yFacts) -> List[CheckResult]:
    """Rule: The document under test must exist and be readable."""
    if facts.load_errors:
        return list(facts.load_errors)
    return [("DOCUMENT_OK", f"Read {facts.document}", facts.document, PASS)]


@check_codes(codes=["MISSING_LANG"])
def check_lang(facts: A11yFacts) -> List[CheckResult]:
    if not facts.has_lang:
        return [("MISSING_LANG", "Missing lang attribute on <html> element (WCAG 3.1.1)", facts.document, FAILURE)]
    return [("LANG_OK", "HTML has lang attribute", facts.document, PASS)]


@check_codes(codes=["MISSING_TITLE"])
def check_title(facts: A11yFacts) -> List[CheckResult]:
    if not facts.has_title:
        return [("MISSING_TITLE", "Missing <title> element (WCAG 2.4.2)", facts.document, FAILURE)]
    return [("TITLE_OK", "Page has a title", facts.document, PASS)]


@check_codes(codes=["MISSING_VIEWPORT"])
def check_viewport(facts: A11yFacts) -> List[CheckResult]:
    if not facts.has_viewport:
        return [(
            "MISSING_VIEWPORT",
            "Missing viewport meta tag for responsive design (WCAG 1.4.10)",
            facts.document,
            FAILURE
        )]
    return [("VIEWPORT_OK", "Viewport meta tag present", facts.document, PASS)]


@check_codes(codes=["MISSING_ALT"])
def check_image_alt(facts: A11yFacts) -> List[CheckResult]:
    """
    Rule: Every image carries an alt attribute.
    An empty alt is accepted (decorative image), only a missing attribute fails.
    """
    res = [
        ("MISSING_ALT", f"{_describe('Image', img.position, img.src)} missing alt attribute (WCAG 1.1.1)",
         facts.document, FAILURE)
        for img in facts.images if not img.has_alt
    ]

    if not facts.images:
        res.append(("NO_IMAGES", "No images found (no alt text issues)", facts.document, PASS))
    elif not res:
        res.append(("ALT_OK", f"Checked {len(facts.images)} image(s) for alt text", facts.document, PASS))
    return res


@check_codes(codes=["INSUFFICIENT_LINK_TEXT"])
def check_link_text(facts: A11yFacts) -> List[CheckResult]:
    """Rule: Every link has rendered text of at least the minimum length."""
    min_len = facts.options.min_link_text_length
    res = [
        (
            "INSUFFICIENT_LINK_TEXT",
            f"{_describe('Link', link.position, link.href)} has no or insufficient text content (WCAG 2.4.4)",
            facts.document,
            FAILURE
        )
        for link in facts.links if len(link.text) < min_len
    ]

    if facts.links and not res:
        res.append(("LINK_TEXT_OK", f"Checked {len(facts.links)} link(s) for meaningful text", facts.document, PASS))
    return res


@check_codes(codes=["FIRST_HEADING_NOT_H1", "HEADING_SKIP"])
def check_heading_hierarchy(facts: A11yFacts) -> List[CheckResult]:
    """
    Rule: The outline starts at h1 and never descends more than one level at a time.
    Going back up (h4 -> h2) is fine.
    """
    levels = facts.headings
    if not levels:
        return [("NO_HEADINGS", "No headings found", facts.document, INFO)]

    res = []
    if levels[0] != 1:
        res.append(("FIRST_HEADING_NOT_H1", "First heading is not h1 (WCAG 1.3.1)", facts.document, WARNING))

    for prev, cur in zip(levels, levels[1:]):
        if cur > prev + 1:
            res.append((
                "HEADING_SKIP",
                f"Heading hierarchy skip from h{prev} to h{cur} (WCAG 1.3.1)",
                facts.document,
                WARNING
            ))

    if not res:
        summary = ", ".join(str(level) for level in levels)
        res.append(("HEADINGS_OK", f"Checked heading hierarchy ({len(levels)} headings: {summary})", facts.document, PASS))
    return res


@check_codes(codes=["LOW_INFORMATION_LINK_TEXT"])
def check_link_purpose(facts: A11yFacts) -> List[CheckResult]:
    """Rule: Link text should describe its target, not just say 'click here'."""
    phrases = {p.lower() for p in facts.options.low_information_phrases}
    return [
        (
            "LOW_INFORMATION_LINK_TEXT",
            f'Link "{link.text}" may not be descriptive enough (WCAG 2.4.4)',
            facts.document,
            WARNING
        )
        for link in facts.links if link.text.lower() in phrases
    ]


@check_codes(codes=["INPUTS_WITHOUT_LABELS"])
def check_form_labels(facts: A11yFacts) -> List[CheckResult]:
    if facts.input_count == 0:
        return [("NO_INPUTS", "No form inputs found", facts.document, PASS)]
    if facts.label_count == 0:
        return [(
            "INPUTS_WITHOUT_LABELS",
            f"Found {facts.input_count} input(s) but no labels (WCAG 3.3.2)",
            facts.document,
            WARNING
        )]
    return [(
        "LABELS_OK",
        f"Found {facts.input_count} input(s) and {facts.label_count} label(s)",
        facts.document,
        PASS
    )]


@check_codes(codes=["MISSING_MAIN_LANDMARK", "MISSING_HEADER_LANDMARK"])
def check_landmarks(facts: A11yFacts) -> List[CheckResult]:
    res = []
    if facts.has_main:
        res.append(("MAIN_OK", "Page has a main landmark", facts.document, PASS))
    else:
        res.append((
            "MISSING_MAIN_LANDMARK",
            'No <main> landmark or role="main" found (WCAG 1.3.1)',
            facts.document,
            WARNING
        ))

    if facts.has_header:
        res.append(("HEADER_OK", "Page has a header landmark", facts.document, PASS))
    else:
        res.append((
            "MISSING_HEADER_LANDMARK",
            'No <header> landmark or role="banner" found (WCAG 1.3.1)',
            facts.document,
            WARNING
        ))
    return res


@check_codes(codes=["MISSING_SKIP_LINK"])
def check_skip_link(facts: A11yFacts) -> List[CheckResult]:
    if not facts.has_skip_link:
        return [(
            "MISSING_SKIP_LINK",
            "No skip link found for keyboard navigation (WCAG 2.4.1)",
            facts.document,
            WARNING
        )]
    return [("SKIP_LINK_OK", "Skip link present", facts.document, PASS)]


def manual_review_reminder(facts: A11yFacts) -> List[CheckResult]:
    """Color contrast is never computed here; remind the reader to check it by hand."""
    return [
        ("MANUAL_CONTRAST", "Color contrast must be verified manually or with browser-based tools", None, INFO),
        ("MANUAL_CONTRAST", "  - Normal text: minimum 4.5:1", None, INFO),
        ("MANUAL_CONTRAST", "  - Large text (18pt+): minimum 3:1", None, INFO),
        ("MANUAL_KEYBOARD", "Keyboard navigation and screen reader compatibility need manual testing", None, INFO),
    ]


# --- RULE SET ---

A11Y_RULE_SET = RuleSet(
    name="a11y",
    definitions=[
        RuleDefinition("Reading document", check_document),
        RuleDefinition("Language attribute", check_lang),
        RuleDefinition("Page title", check_title),
        RuleDefinition("Viewport meta tag", check_viewport),
        RuleDefinition("Image alt attributes", check_image_alt),
        RuleDefinition("Link text content", check_link_text),
        RuleDefinition("Heading hierarchy", check_heading_hierarchy),
        RuleDefinition("Descriptive link text", check_link_purpose),
        RuleDefinition("Form labels", check_form_labels),
        RuleDefinition("Landmarks", check_landmarks),
        RuleDefinition("Skip link", check_skip_link),
        RuleDefinition("Manual review", manual_review_reminder),
    ]
)
