# tests/checks/test_a11y_checker.py
import pytest

from sitecheck.a11y.extractor import A11yExtractor, A11yOptions
from sitecheck.a11y.rules import A11Y_RULE_SET
from sitecheck.controllers.check_controller import CheckController
from sitecheck.model import Document
from sitecheck.rules.engine import CheckEngine

from helpers import COMPLIANT_PAGE, page_with_body


def lint(html: str, options: A11yOptions = None):
    """Runs the accessibility checklist on an in-memory page."""
    facts = A11yExtractor(options).extract(Document(identifier="index.html", content=html))
    return CheckEngine(A11Y_RULE_SET).run(facts, title="Accessibility Test", document_count=1)


def codes(findings):
    return [f.code for f in findings]


def headings_page(levels):
    return page_with_body("\n".join(f"<h{n}>Heading {n}</h{n}>" for n in levels))


# --- Extraction ---

def test_extractor_collects_features_in_document_order():
    html = page_with_body(
        '<header role="banner"><h1>Title</h1></header>'
        '<div role="main"><h3>Deep</h3><h2>Back up</h2>'
        '<img src="a.png" alt=""><img src="b.png">'
        '<a href="x.html">  Read\n   <b>More</b> </a>'
        '<form><input type="text"><input type="email"></form></div>'
    )
    facts = A11yExtractor().extract(Document(identifier="page.html", content=html))

    assert facts.has_lang and facts.has_title and facts.has_viewport
    assert facts.headings == [1, 3, 2]
    assert [(img.position, img.has_alt) for img in facts.images] == [(1, True), (2, False)]
    assert [link.text for link in facts.links] == ["Read More"]
    assert facts.input_count == 2
    assert facts.label_count == 0
    assert facts.has_main and facts.has_header
    assert facts.has_skip_link is False


def test_skip_link_phrase_is_case_insensitive():
    facts = A11yExtractor().extract(Document(identifier="p.html", content='<a href="#c">SKIP TO CONTENT</a>'))
    assert facts.has_skip_link


# --- Scenarios ---

def test_compliant_page_has_no_findings():
    report = lint(COMPLIANT_PAGE)

    assert report.failures == []
    assert report.warnings == []
    assert report.exit_code == 0


def test_lang_attribute_toggles_exactly_one_failure():
    without_lang = lint(COMPLIANT_PAGE.replace('<html lang="en">', "<html>"))
    with_lang = lint(COMPLIANT_PAGE)

    assert codes(without_lang.failures) == ["MISSING_LANG"]
    assert codes(without_lang.warnings) == codes(with_lang.warnings)
    assert codes(with_lang.failures) == []


def test_missing_title_and_viewport_fail():
    report = lint("<html lang='en'><head><title>  </title></head><body></body></html>")

    assert codes(report.failures) == ["MISSING_TITLE", "MISSING_VIEWPORT"]


def test_third_image_without_alt():
    report = lint(page_with_body('<img src="1.png" alt="one"><img src="2.png" alt="two"><img src="3.png">'))

    alt_failures = report.section("Image alt attributes").failures
    assert len(alt_failures) == 1
    assert alt_failures[0].message == "Image 3 (3.png) missing alt attribute (WCAG 1.1.1)"


def test_empty_alt_counts_as_present():
    report = lint(page_with_body('<img src="divider.png" alt="">'))
    assert report.section("Image alt attributes").failures == []


@pytest.mark.parametrize("levels, skips, first_not_h1", [
    ([1, 2, 4], 1, 0),
    ([1, 2, 3], 0, 0),
    ([2, 3], 0, 1),
    ([1, 3, 2, 4, 3], 2, 0),
])
def test_heading_hierarchy(levels, skips, first_not_h1):
    warnings = lint(headings_page(levels)).section("Heading hierarchy").warnings

    assert codes(warnings).count("HEADING_SKIP") == skips
    assert codes(warnings).count("FIRST_HEADING_NOT_H1") == first_not_h1


def test_heading_skip_names_both_levels():
    warnings = lint(headings_page([1, 2, 4])).section("Heading hierarchy").warnings
    assert warnings[0].message == "Heading hierarchy skip from h2 to h4 (WCAG 1.3.1)"


def test_read_more_link_is_a_warning_not_a_failure():
    report = lint(page_with_body('<a href="x.html">Read More</a>'))

    assert report.section("Link text content").failures == []
    low_info = report.section("Descriptive link text").warnings
    assert len(low_info) == 1
    assert low_info[0].message == 'Link "Read More" may not be descriptive enough (WCAG 2.4.4)'


def test_empty_link_is_a_failure_not_a_warning():
    report = lint(page_with_body('<a href="x.html"></a>'))

    assert codes(report.section("Link text content").failures) == ["INSUFFICIENT_LINK_TEXT"]
    assert report.section("Descriptive link text").warnings == []


def test_single_character_link_and_image_only_link_fail():
    report = lint(page_with_body('<a href="a.html">A</a><a href="b.html"><img src="b.png" alt="B"></a>'))

    messages = [f.message for f in report.section("Link text content").failures]
    assert messages == [
        "Link 1 (a.html) has no or insufficient text content (WCAG 2.4.4)",
        "Link 2 (b.html) has no or insufficient text content (WCAG 2.4.4)",
    ]


def test_low_information_phrases_are_configurable():
    options = A11yOptions(low_information_phrases=["details"])
    report = lint(page_with_body('<a href="x.html">Details</a><a href="y.html">here</a>'), options)

    assert [w.message for w in report.section("Descriptive link text").warnings] == [
        'Link "Details" may not be descriptive enough (WCAG 2.4.4)'
    ]


def test_inputs_without_labels_warn_with_count():
    report = lint(page_with_body('<input type="text"><input type="search">'))

    assert [w.message for w in report.section("Form labels").warnings] == [
        "Found 2 input(s) but no labels (WCAG 3.3.2)"
    ]


def test_labelled_inputs_pass():
    report = lint(page_with_body('<label for="q">Search</label><input id="q" type="search">'))
    assert report.section("Form labels").warnings == []


def test_missing_landmarks_and_skip_link_warn():
    report = lint(page_with_body("<h1>Only a heading</h1>"))

    assert codes(report.warnings) == ["MISSING_MAIN_LANDMARK", "MISSING_HEADER_LANDMARK", "MISSING_SKIP_LINK"]
    assert report.exit_code == 0


def test_all_rules_run_without_short_circuit():
    report = lint("")

    assert len(report.sections) == len(A11Y_RULE_SET)
    assert codes(report.failures) == ["MISSING_LANG", "MISSING_TITLE", "MISSING_VIEWPORT"]
    assert report.section("Manual review").info


def test_missing_document_is_reported(tmp_path):
    report = CheckController().run_a11y(tmp_path / "index.html")

    assert report.failures[0].code == "MISSING_DOCUMENT"
    assert report.failures[0].message == "index.html does not exist"
    assert report.document_count == 0
    assert report.exit_code == 1


def test_run_a11y_from_file(tmp_path):
    page = tmp_path / "index.html"
    page.write_text(COMPLIANT_PAGE, encoding="utf-8")

    report = CheckController().run_a11y(page)

    assert report.findings == []
    assert report.document_count == 1


def test_failure_messages_name_the_element_target():
    report = lint(page_with_body('<img src="logo.png"><img><a name="top"></a>'))

    assert [f.message for f in report.section("Image alt attributes").failures] == [
        "Image 1 (logo.png) missing alt attribute (WCAG 1.1.1)",
        "Image 2 missing alt attribute (WCAG 1.1.1)",
    ]
    assert [f.message for f in report.section("Link text content").failures] == [
        "Link 1 has no or insufficient text content (WCAG 2.4.4)",
    ]
