# src/sitecheck/model.py
import re
from typing import Optional
from pydantic import BaseModel

# Severities. Only FAILURE and WARNING become findings; PASS and INFO are display lines.
FAILURE = "FAILURE"
WARNING = "WARNING"
PASS = "PASS"
INFO = "INFO"

FINDING_SEVERITIES = (FAILURE, WARNING)

# Link target classes
EXTERNAL = "external"
PARENT_RELATIVE = "parent-relative"
LOCAL = "local"

INDEX_DOCUMENT = "index.html"

_SCHEME_RE = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.\-]*:')


def classify_href(href: str) -> str:
    """
    Classifies a link target.
    Anything starting with a URL scheme or '/' is external, '..' is parent-relative,
    everything else is a local (same-directory) reference.
    """
    if _SCHEME_RE.match(href) or href.startswith('/'):
        return EXTERNAL
    if href.startswith('..'):
        return PARENT_RELATIVE
    return LOCAL


class Document(BaseModel):
    """
    An HTML document as read from disk.
    Never mutated after the read.
    """
    identifier: str
    content: str = ""

    class Config:
        frozen = True


class LinkReference(BaseModel):
    """A hyperlink target found in the markup of a document."""
    source: str
    href: str

    class Config:
        frozen = True

    @property
    def kind(self) -> str:
        return classify_href(self.href)

    @property
    def is_local(self) -> bool:
        return self.kind == LOCAL

    @property
    def target(self) -> str:
        """The href with a leading './' removed, used to compare against file names."""
        href = self.href
        while href.startswith('./'):
            href = href[2:]
        return href


class Finding(BaseModel):
    """
    A single failure or warning produced by a checker.
    Insertion order in a report follows checker and rule execution order.
    """
    checker: str      # e.g. 'notes', 'a11y'
    category: str     # title of the section that produced it
    code: str         # e.g. 'NOTE_NOT_LINKED', 'MISSING_ALT'
    severity: str     # FAILURE or WARNING
    message: str
    document: Optional[str] = None

    class Config:
        frozen = True

    @property
    def is_failure(self) -> bool:
        return self.severity == FAILURE
