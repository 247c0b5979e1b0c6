# src/sitecheck/notes/rules.py
from typing import List

from .extractor import NotesFacts, DocumentMeta
from ..model import FAILURE, WARNING, PASS, INFO
from ..rules.core import CheckResult, RuleDefinition, RuleSet, check_codes


def _unique(items: List[str]) -> List[str]:
    """Drops repeated entries, keeping first-seen order."""
    return list(dict.fromkeys(items))


def _meta_results(meta: DocumentMeta) -> List[CheckResult]:
    """Shared metadata checks for note pages and the index page."""
    res = []
    name = meta.identifier

    if not meta.has_description:
        res.append(("MISSING_META_DESC", f"{name} - Missing meta description", name, FAILURE))
    if not meta.has_keywords:
        res.append(("MISSING_KEYWORDS", f"{name} - Missing meta keywords (recommended for SEO)", name, WARNING))
    if not meta.has_canonical:
        res.append(("MISSING_CANONICAL", f"{name} - Missing canonical link", name, FAILURE))
    if not meta.has_title:
        res.append(("MISSING_TITLE", f"{name} - Missing title", name, FAILURE))
    if not meta.has_lang:
        res.append(("MISSING_LANG", f"{name} - Missing lang attribute on html", name, FAILURE))

    if not any(sev == FAILURE for (_, _, _, sev) in res):
        res.append(("META_OK", f"{name} has required meta tags", name, PASS))
    return res


# --- RULES ---

@check_codes(codes=["MISSING_NOTES_DIR", "UNREADABLE_NOTES_DIR", "MISSING_DOCUMENT", "UNREADABLE_DOCUMENT"])
def check_inputs(facts: NotesFacts) -> List[CheckResult]:
    """
    Rule: The notes directory and its index must exist and every document must be readable.
    Having no notes at all is not an error.
    """
    res = list(facts.load_errors)

    if facts.directory_exists:
        if facts.note_files:
            res.append(("NOTES_FOUND", f"Found {len(facts.note_files)} note(s) besides {facts.index_name}", None, PASS))
        else:
            res.append(("NO_NOTES", f"No note files found (besides {facts.index_name})", None, INFO))
    return res


@check_codes(codes=["NOTE_NOT_LINKED"])
def check_notes_listed(facts: NotesFacts) -> List[CheckResult]:
    """Rule: Every note must be linked from the index."""
    res = []
    linked = set(facts.linked_from_index)

    for note in facts.note_files:
        if note in linked:
            res.append(("NOTE_LINKED", f"{note} is linked in index", note, PASS))
        else:
            res.append(("NOTE_NOT_LINKED", f"{note} is not linked from {facts.index_name}", note, FAILURE))
    return res


@check_codes(codes=["DANGLING_INDEX_LINK"])
def check_index_links(facts: NotesFacts) -> List[CheckResult]:
    """Rule: Every local link in the index must point to an existing note."""
    res = []
    existing = set(facts.note_files)
    targets = _unique(facts.linked_from_index)

    for link in targets:
        if link not in facts.index_targets and link not in existing:
            res.append((
                "DANGLING_INDEX_LINK",
                f"{facts.index_name} links to {link} which does not exist",
                facts.index_name,
                FAILURE
            ))

    if targets and not res:
        res.append(("INDEX_LINKS_OK", f"All {len(targets)} index link(s) point to existing notes", None, PASS))
    return res


@check_codes(codes=["MISSING_META_DESC", "MISSING_KEYWORDS", "MISSING_CANONICAL", "MISSING_TITLE", "MISSING_LANG"])
def check_note_meta(facts: NotesFacts) -> List[CheckResult]:
    """Rule: Every readable note carries description, canonical, title and lang."""
    res = []
    for note in facts.note_files:
        meta = facts.note_meta.get(note)
        if meta is None:
            continue  # unreadable, already reported
        res.extend(_meta_results(meta))
    return res


@check_codes(codes=["BROKEN_INTERNAL_LINK"])
def check_internal_links(facts: NotesFacts) -> List[CheckResult]:
    """
    Rule: Local links between notes should resolve.
    Only a warning, a draft may point to a page that is not written yet.
    """
    res = []
    existing = set(facts.note_files)

    for note in facts.note_files:
        targets = facts.note_links.get(note)
        if targets is None:
            continue

        broken = [t for t in _unique(targets) if t not in facts.index_targets and t not in existing]
        if not broken:
            res.append(("LINKS_OK", f"{note} has no broken internal links", note, PASS))
        for link in broken:
            res.append(("BROKEN_INTERNAL_LINK", f"{note} links to {link} which does not exist", note, WARNING))
    return res


@check_codes(codes=["MISSING_META_DESC", "MISSING_KEYWORDS", "MISSING_CANONICAL", "MISSING_TITLE", "MISSING_LANG"])
def check_index_meta(facts: NotesFacts) -> List[CheckResult]:
    """Rule: The index page itself must carry the same metadata as a note."""
    if facts.index_meta is None:
        return []
    return _meta_results(facts.index_meta)


# --- RULE SET ---

NOTES_RULE_SET = RuleSet(
    name="notes",
    definitions=[
        RuleDefinition("Reading notes directory", check_inputs),
        RuleDefinition("Checking if all notes are listed in index", check_notes_listed),
        RuleDefinition("Checking for broken links in index", check_index_links),
        RuleDefinition("Checking meta tags on note pages", check_note_meta),
        RuleDefinition("Checking internal links between notes", check_internal_links),
        RuleDefinition("Checking index meta tags", check_index_meta),
    ]
)
