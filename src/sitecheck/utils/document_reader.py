# src/sitecheck/utils/document_reader.py
import logging
from pathlib import Path
from typing import Optional, Tuple

from ..model import Document, FAILURE
from ..rules.core import CheckResult

logger = logging.getLogger(__name__)


def read_document(path: Path, identifier: Optional[str] = None) -> Tuple[Optional[Document], Optional[CheckResult]]:
    """
    Reads an HTML file fully into a Document.

    Problems are returned as a failure line instead of raised, so a checker can
    report them and carry on with empty input.

    Args:
        path (Path): The file to read.
        identifier (str): Name used in messages. Defaults to the file name.

    Returns:
        (Document, None) on success, (None, CheckResult) when the file is missing or unreadable.
    """
    identifier = identifier or path.name

    try:
        if not path.is_file():
            logger.warning("Document not found: %s", path)
            return None, ("MISSING_DOCUMENT", f"{identifier} does not exist", identifier, FAILURE)

        # utf-8-sig drops a leading BOM if the editor wrote one
        with open(path, "r", encoding="utf-8-sig") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read %s: %s", path, e)
        return None, ("UNREADABLE_DOCUMENT", f"{identifier} could not be read ({e.__class__.__name__}: {e})",
                      identifier, FAILURE)

    logger.debug("Read %s (%d chars)", path, len(content))
    return Document(identifier=identifier, content=content), None
