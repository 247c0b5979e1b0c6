# src/sitecheck/a11y/extractor.py
import logging
import re
from pathlib import Path
from typing import List, Optional

from bs4 import BeautifulSoup
from pydantic import BaseModel, Field

from ..model import Document
from ..rules.core import CheckResult
from ..utils.document_reader import read_document

logger = logging.getLogger(__name__)

SKIP_LINK_RE = re.compile(r'skip to (main )?content', re.IGNORECASE)
HEADING_TAG_RE = re.compile(r'^h[1-6]$')

_VIEWPORT_RE = re.compile(r'^viewport$', re.IGNORECASE)
_ROLE_MAIN_RE = re.compile(r'^main$', re.IGNORECASE)
_ROLE_BANNER_RE = re.compile(r'^banner$', re.IGNORECASE)


class ImageFacts(BaseModel):
    """An <img> element. Only the presence of alt matters, alt="" counts as present."""
    position: int  # 1-indexed, document order
    src: str = ""
    has_alt: bool = False


class AnchorFacts(BaseModel):
    """An <a> element with its rendered text (markup stripped, whitespace collapsed)."""
    position: int
    href: Optional[str] = None
    text: str = ""


DEFAULT_LOW_INFORMATION_PHRASES = ["click here", "here", "read more", "more"]


class A11yOptions(BaseModel):
    """Tunable thresholds for the link text rules."""
    min_link_text_length: int = 2
    low_information_phrases: List[str] = Field(default_factory=lambda: list(DEFAULT_LOW_INFORMATION_PHRASES))


class A11yFacts(BaseModel):
    """
    Structural features of one HTML document, as needed by the accessibility rules.
    """
    document: str
    document_found: bool = False
    load_errors: List[CheckResult] = Field(default_factory=list)
    options: A11yOptions = Field(default_factory=A11yOptions)

    has_lang: bool = False
    has_title: bool = False
    has_viewport: bool = False

    images: List[ImageFacts] = Field(default_factory=list)
    headings: List[int] = Field(default_factory=list)
    input_count: int = 0
    label_count: int = 0
    links: List[AnchorFacts] = Field(default_factory=list)

    # --- Landmarks & Navigation ---
    has_main: bool = False
    has_header: bool = False
    has_skip_link: bool = False


class A11yExtractor:
    """
    Extracts accessibility-relevant features from a single HTML document.
    """

    def __init__(self, options: Optional[A11yOptions] = None):
        self.options = options or A11yOptions()

    def extract(self, document: Document) -> A11yFacts:
        """
        Parses the document and collects the features in document order.

        Args:
            document (Document): The page to inspect.

        Returns:
            A11yFacts: Presence flags, ordered images/headings/links and counts.
        """
        # Basic cleanup of potentially dirty HTML (e.g., BOM)
        html = document.content.replace('\ufeff', '')
        soup = BeautifulSoup(html, 'html.parser')

        html_tag = soup.find('html')
        title_tag = soup.find('title')

        images = [
            ImageFacts(position=i, src=img.get('src', ''), has_alt=img.has_attr('alt'))
            for i, img in enumerate(soup.find_all('img'), start=1)
        ]

        links = [
            AnchorFacts(position=i, href=a.get('href'), text=" ".join(a.get_text(" ", strip=True).split()))
            for i, a in enumerate(soup.find_all('a'), start=1)
        ]

        headings = [int(tag.name[1]) for tag in soup.find_all(HEADING_TAG_RE)]

        facts = A11yFacts(
            document=document.identifier,
            document_found=True,
            options=self.options,
            has_lang=bool(html_tag and html_tag.has_attr('lang')),
            has_title=bool(title_tag and title_tag.get_text(strip=True)),
            has_viewport=bool(soup.find('meta', attrs={'name': _VIEWPORT_RE})),
            images=images,
            headings=headings,
            input_count=len(soup.find_all('input')),
            label_count=len(soup.find_all('label')),
            links=links,
            has_main=bool(soup.find('main') or soup.find(attrs={'role': _ROLE_MAIN_RE})),
            has_header=bool(soup.find('header') or soup.find(attrs={'role': _ROLE_BANNER_RE})),
            has_skip_link=bool(SKIP_LINK_RE.search(html))
        )

        logger.debug(
            "%s: %d image(s), %d heading(s), %d link(s), %d input(s)",
            document.identifier, len(images), len(headings), len(links), facts.input_count
        )
        return facts

    def extract_file(self, path: Path, identifier: Optional[str] = None) -> A11yFacts:
        """
        Reads and extracts a document from disk.
        A missing or unreadable file yields empty facts carrying the load error.
        """
        document, error = read_document(Path(path), identifier)
        if error:
            return A11yFacts(document=identifier or Path(path).name, load_errors=[error], options=self.options)
        return self.extract(document)
