"""DOCX text extraction via docx2txt."""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Union
from xml.etree.ElementTree import ParseError

import docx2txt

from rsvp_reader.parsers.errors import DocumentParseError


def parse_docx(path: Union[str, Path]) -> str:
    """Extract the raw text of a Word document (images are ignored).

    A zip that is not a Word document (missing or malformed
    word/document.xml) is reported as DocumentParseError, like a file
    that is not a zip at all.
    """
    try:
        return docx2txt.process(str(path)) or ""
    except (zipfile.BadZipFile, KeyError, ParseError, OSError) as exc:
        raise DocumentParseError(
            "Could not read DOCX '{}': {}".format(Path(path).name, exc)
        ) from exc
