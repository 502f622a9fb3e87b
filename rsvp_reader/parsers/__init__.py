"""Document parser registry — turns files into raw text for the tokenizer.

WHY: The reader accepts PDF, DOCX, EPUB, Markdown and plain text. The
CLI and the HTTP API both need one entry point that validates the file,
picks the right extractor, and guarantees that whatever reaches the
timing controller is a non-empty token sequence.

HOW: PARSERS maps a lowercase extension (no dot) to an extractor
function ``path -> str``. Files without an extension are read as plain
text. load_tokens() chains validation, extraction and tokenization.

RULES:
- Keys are lowercase extensions without the dot
- Unknown extensions are rejected by validate_file(), not guessed at
- Files larger than MAX_FILE_SIZE_BYTES are rejected before extraction
- load_tokens() raises EmptyDocumentError when nothing is left to read
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Union

from rsvp_reader.config import MAX_FILE_SIZE_BYTES, SUPPORTED_EXTENSIONS
from rsvp_reader.core.tokenizer import tokenize
from rsvp_reader.parsers.docx import parse_docx
from rsvp_reader.parsers.epub import parse_epub
from rsvp_reader.parsers.errors import (
    DocumentError,
    DocumentParseError,
    EmptyDocumentError,
    FileTooLargeError,
    UnsupportedFileError,
)
from rsvp_reader.parsers.pdf import parse_pdf
from rsvp_reader.parsers.text import parse_markdown, parse_txt, strip_markdown

logger = logging.getLogger(__name__)

PARSERS: Dict[str, Callable[[Union[str, Path]], str]] = {
    "pdf": parse_pdf,
    "docx": parse_docx,
    "epub": parse_epub,
    "md": parse_markdown,
    "markdown": parse_markdown,
    "txt": parse_txt,
    "text": parse_txt,
}


def get_extension(filename: Union[str, Path]) -> str:
    """Lowercase extension without the dot; "txt" when there is none."""
    suffix = Path(filename).suffix.lower()
    return suffix[1:] if suffix else "txt"


def is_supported(filename: Union[str, Path]) -> bool:
    return "." + get_extension(filename) in SUPPORTED_EXTENSIONS


def validate_file(
    path: Union[str, Path],
    max_size_bytes: int = MAX_FILE_SIZE_BYTES,
) -> Path:
    """Check that a file exists, has a supported type, and is small enough.

    Returns:
        The path as a Path object.

    Raises:
        UnsupportedFileError: extension not in SUPPORTED_EXTENSIONS.
        FileTooLargeError: file larger than ``max_size_bytes``.
        DocumentParseError: the path is not a readable file.
    """
    path = Path(path)
    if not is_supported(path):
        raise UnsupportedFileError(
            "Unsupported file type '.{}'. Supported formats: {}".format(
                get_extension(path), ", ".join(sorted(SUPPORTED_EXTENSIONS))
            )
        )
    if not path.is_file():
        raise DocumentParseError("File not found: {}".format(path))

    size = path.stat().st_size
    if size > max_size_bytes:
        raise FileTooLargeError(
            "File too large ({:.1f} MB). Maximum size is {:.0f} MB.".format(
                size / (1024 * 1024), max_size_bytes / (1024 * 1024)
            )
        )
    return path


def parse_file(path: Union[str, Path]) -> str:
    """Extract the raw text of a document, routed by extension."""
    parser = PARSERS.get(get_extension(path), parse_txt)
    return parser(path)


def load_tokens(
    path: Union[str, Path],
    max_size_bytes: int = MAX_FILE_SIZE_BYTES,
) -> List[str]:
    """Validate, extract and tokenize a document.

    Raises:
        DocumentError: any validation or extraction failure, including
                       EmptyDocumentError when no tokens were produced.
    """
    path = validate_file(path, max_size_bytes=max_size_bytes)
    text = parse_file(path)
    tokens = tokenize(text)
    if not tokens:
        raise EmptyDocumentError("No text content found in {}".format(path.name))
    logger.info("Loaded %d tokens from %s", len(tokens), path.name)
    return tokens


__all__ = [
    "PARSERS",
    "DocumentError",
    "DocumentParseError",
    "EmptyDocumentError",
    "FileTooLargeError",
    "UnsupportedFileError",
    "get_extension",
    "is_supported",
    "load_tokens",
    "parse_file",
    "strip_markdown",
    "validate_file",
]
