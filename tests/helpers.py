# tests/helpers.py
from pathlib import Path
from typing import Iterable


def note_page(
        title: str = "A note",
        links: Iterable[str] = (),
        lang: bool = True,
        description: bool = True,
        keywords: bool = True,
        canonical: bool = True
) -> str:
    """Builds a note (or index) page; every metadata element can be switched off."""
    head = [f"<title>{title}</title>"]
    if description:
        head.append('<meta name="description" content="Notes about things">')
    if keywords:
        head.append('<meta name="keywords" content="notes, things">')
    if canonical:
        head.append('<link rel="canonical" href="https://example.com/notes/page.html">')

    body = "\n".join(f'<li><a href="{href}">{href} page</a></li>' for href in links)
    html_open = '<html lang="en">' if lang else "<html>"

    return (
        "<!DOCTYPE html>\n"
        f"{html_open}\n<head>\n" + "\n".join(head) + "\n</head>\n"
        f"<body>\n<ul>\n{body}\n</ul>\n</body>\n</html>\n"
    )


def write_notes(notes_dir: Path, index_links: Iterable[str], notes: dict) -> Path:
    """
    Creates a notes directory with an index page linking to index_links and the given
    notes ({file name: html}).
    """
    notes_dir.mkdir(parents=True, exist_ok=True)
    (notes_dir / "index.html").write_text(note_page(title="Notes", links=index_links), encoding="utf-8")
    for name, html in notes.items():
        (notes_dir / name).write_text(html, encoding="utf-8")
    return notes_dir


COMPLIANT_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Jane Doe - Portfolio</title>
</head>
<body>
  <a href="#main" class="skip-link">Skip to main content</a>
  <header>
    <h1>Jane Doe</h1>
  </header>
  <main id="main">
    <h2>Projects</h2>
    <img src="project.png" alt="Screenshot of the project">
  </main>
</body>
</html>
"""


def page_with_body(body: str, lang: bool = True) -> str:
    """A page with all document-level requirements met and the given body markup."""
    html_open = '<html lang="en">' if lang else "<html>"
    return (
        "<!DOCTYPE html>\n"
        f"{html_open}\n"
        '<head><meta name="viewport" content="width=device-width"><title>Test page</title></head>\n'
        f"<body>\n{body}\n</body>\n</html>\n"
    )
