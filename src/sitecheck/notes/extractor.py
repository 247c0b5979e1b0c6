# src/sitecheck/notes/extractor.py
import logging
import re
import sys
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

from bs4 import BeautifulSoup
from pydantic import BaseModel, Field
from tqdm import tqdm

from ..model import Document, LinkReference, FAILURE, INDEX_DOCUMENT
from ..rules.core import CheckResult
from ..utils.document_reader import read_document

logger = logging.getLogger(__name__)

# Lexical scan, not a parse: quoted href values ending in .html, wherever they appear
# (comments and commented-out markup included).
HREF_HTML_RE = re.compile(r'href\s*=\s*(["\'])([^"\']+\.html)\1')

_DESCRIPTION_RE = re.compile(r'^description$', re.IGNORECASE)
_KEYWORDS_RE = re.compile(r'^keywords$', re.IGNORECASE)


class DocumentMeta(BaseModel):
    """Metadata presence flags for one note (or the index) page."""
    identifier: str
    has_description: bool = False
    has_keywords: bool = False
    has_canonical: bool = False
    has_title: bool = False
    has_lang: bool = False


class NotesFacts(BaseModel):
    """
    Everything the notes rules need, extracted once per run.
    """
    notes_dir: str
    index_name: str = INDEX_DOCUMENT
    directory_exists: bool = False
    note_files: List[str] = Field(default_factory=list)
    index_found: bool = False
    linked_from_index: List[str] = Field(default_factory=list)
    index_meta: Optional[DocumentMeta] = None
    # Only notes that could be read appear in the two maps below
    note_meta: Dict[str, DocumentMeta] = Field(default_factory=dict)
    note_links: Dict[str, List[str]] = Field(default_factory=dict)
    load_errors: List[CheckResult] = Field(default_factory=list)

    @property
    def index_targets(self) -> Set[str]:
        """Link targets that always resolve: the configured index and a literal index.html."""
        return {self.index_name, INDEX_DOCUMENT}


class NotesExtractor:
    """
    Pulls the facts for the notes consistency check out of a notes directory.
    """

    def __init__(self, notes_dir: Path, index_name: str = INDEX_DOCUMENT, show_progress: bool = False):
        self.notes_dir = Path(notes_dir)
        self.index_name = index_name
        self.show_progress = show_progress

    # --- Primitive extraction ---

    def list_notes(self) -> Tuple[List[str], List[CheckResult]]:
        """
        Lists all .html files in the notes directory except the index.

        Returns:
            The sorted note identifiers, plus a failure line if the directory is absent
            or cannot be listed.
        """
        name = self.notes_dir.name
        # Both the configured index and a literal index.html are never notes
        excluded = {self.index_name, INDEX_DOCUMENT}

        try:
            if not self.notes_dir.is_dir():
                logger.warning("Notes directory not found: %s", self.notes_dir)
                return [], [("MISSING_NOTES_DIR", f"{name}/ directory does not exist", None, FAILURE)]

            note_files = sorted(
                p.name for p in self.notes_dir.iterdir()
                if p.is_file() and p.name.endswith('.html') and p.name not in excluded
            )
        except OSError as e:
            logger.error("Could not list %s: %s", self.notes_dir, e)
            return [], [(
                "UNREADABLE_NOTES_DIR",
                f"{name}/ could not be read ({e.__class__.__name__}: {e})",
                None,
                FAILURE
            )]

        logger.debug("Found %d note file(s) in %s", len(note_files), self.notes_dir)
        return note_files, []

    @staticmethod
    def extract_links(document: Document) -> List[LinkReference]:
        """Returns every quoted href ending in .html, in the order they appear in the text."""
        return [
            LinkReference(source=document.identifier, href=m.group(2))
            for m in HREF_HTML_RE.finditer(document.content)
        ]

    @classmethod
    def local_targets(cls, document: Document) -> List[str]:
        """Link targets that point into the same directory. External and parent-relative links are dropped."""
        return [link.target for link in cls.extract_links(document) if link.is_local]

    @staticmethod
    def extract_meta(document: Document) -> DocumentMeta:
        """
        Extracts metadata presence flags from the <head> of a page.
        Description, keywords and canonical only count when they carry a value.
        """
        soup = BeautifulSoup(document.content, 'html.parser')

        description = soup.find('meta', attrs={'name': _DESCRIPTION_RE})
        keywords = soup.find('meta', attrs={'name': _KEYWORDS_RE})
        canonical = soup.find('link', rel='canonical')
        title_tag = soup.find('title')
        html_tag = soup.find('html')

        return DocumentMeta(
            identifier=document.identifier,
            has_description=bool(description and description.get('content', '').strip()),
            has_keywords=bool(keywords and keywords.get('content', '').strip()),
            has_canonical=bool(canonical and canonical.get('href', '').strip()),
            has_title=bool(title_tag and title_tag.get_text(strip=True)),
            has_lang=bool(html_tag and html_tag.has_attr('lang'))
        )

    # --- Full extraction ---

    def extract(self) -> NotesFacts:
        """
        Reads the notes directory and index, and extracts links and metadata.
        Missing or unreadable inputs end up in load_errors; extraction always completes.
        """
        facts = NotesFacts(notes_dir=str(self.notes_dir), index_name=self.index_name)

        facts.note_files, errors = self.list_notes()
        facts.load_errors.extend(errors)
        facts.directory_exists = not errors

        index_id = f"{self.notes_dir.name}/{self.index_name}"
        index_doc, error = read_document(self.notes_dir / self.index_name, index_id)
        if error:
            facts.load_errors.append(error)
        else:
            facts.index_found = True
            facts.linked_from_index = self.local_targets(index_doc)
            # Metadata messages refer to the index by its bare name
            facts.index_meta = self.extract_meta(index_doc).model_copy(update={"identifier": self.index_name})

        iterator = tqdm(
            facts.note_files,
            desc="Reading notes",
            unit="file",
            file=sys.stderr,
            disable=not self.show_progress
        )
        for name in iterator:
            doc, error = read_document(self.notes_dir / name)
            if error:
                facts.load_errors.append(error)
                continue
            facts.note_meta[name] = self.extract_meta(doc)
            facts.note_links[name] = self.local_targets(doc)

        logger.info(
            "Extracted %d note(s), %d index link(s), %d load error(s)",
            len(facts.note_files), len(facts.linked_from_index), len(facts.load_errors)
        )
        return facts
