"""EPUB text extraction via ebooklib and BeautifulSoup.

WHY: An EPUB is a zip of XHTML chapters plus a package document whose
spine defines reading order. Reading the archive in file-name order
would shuffle chapters, so the spine is followed.

HOW: ebooklib parses the container and package document. Each spine
item that is an XHTML document is parsed with BeautifulSoup; script,
style and nav elements are dropped and the visible text is collected.

RULES:
- Chapters are read in spine order and joined by a blank line
- Chapters whose text is blank are skipped
- Spine entries that are missing or not documents are skipped
- Any ebooklib / zip failure becomes DocumentParseError
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import List, Union

import ebooklib
from bs4 import BeautifulSoup
from ebooklib import epub

from rsvp_reader.parsers.errors import DocumentParseError

logger = logging.getLogger(__name__)


def html_to_text(content: Union[str, bytes]) -> str:
    """Visible text of an (X)HTML document."""
    soup = BeautifulSoup(content, "html.parser")
    for tag in soup(["script", "style", "nav"]):
        tag.decompose()
    body = soup.body or soup
    return body.get_text(separator=" ")


def parse_epub(path: Union[str, Path]) -> str:
    try:
        book = epub.read_epub(str(path))
    except (epub.EpubException, zipfile.BadZipFile, KeyError, OSError) as exc:
        raise DocumentParseError(
            "Could not read EPUB '{}': {}".format(Path(path).name, exc)
        ) from exc

    chapters: List[str] = []
    for idref, _linear in book.spine:
        item = book.get_item_with_id(idref)
        if item is None or item.get_type() != ebooklib.ITEM_DOCUMENT:
            logger.debug("Skipping spine entry %s (not a document)", idref)
            continue
        text = html_to_text(item.get_content())
        if text.strip():
            chapters.append(text)

    return "\n\n".join(chapters)
