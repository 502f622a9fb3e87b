"""PDF text extraction via pypdf.

RULES:
- Pages are extracted in order and joined by a blank line
- Pages without a text layer (scans) contribute nothing; a warning is
  logged when most pages are empty
- Any pypdf failure becomes DocumentParseError
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from rsvp_reader.parsers.errors import DocumentParseError

logger = logging.getLogger(__name__)


def parse_pdf(path: Union[str, Path]) -> str:
    try:
        reader = PdfReader(str(path))
        page_texts: List[str] = []
        empty_pages = 0
        for page in reader.pages:
            text = (page.extract_text() or "").strip()
            if not text:
                empty_pages += 1
            page_texts.append(text)
    except (PyPdfError, OSError, ValueError) as exc:
        raise DocumentParseError("Could not read PDF '{}': {}".format(Path(path).name, exc)) from exc

    if page_texts and empty_pages >= max(1, int(len(page_texts) * 0.7)):
        logger.warning(
            "PDF %s has %d of %d pages without a text layer (scanned?)",
            Path(path).name, empty_pages, len(page_texts),
        )

    return "\n\n".join(page_texts)
