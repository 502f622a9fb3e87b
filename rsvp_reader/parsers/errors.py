"""Document ingestion errors.

WHY: The core accepts any text and never fails, so every user-visible
failure (wrong file type, oversized upload, corrupt document, nothing to
read) must be detected here, before a token sequence is loaded. A small
hierarchy lets the CLI and the HTTP API map each failure to the right
exit code or status.

RULES:
- All errors subclass DocumentError, which subclasses ValueError
- Messages are complete sentences suitable for showing to the user
"""

from __future__ import annotations


class DocumentError(ValueError):
    """Base class for every ingestion failure."""


class UnsupportedFileError(DocumentError):
    """The file extension is not one the parsers can read."""


class FileTooLargeError(DocumentError):
    """The file exceeds the configured size limit."""


class DocumentParseError(DocumentError):
    """The extractor could not read the document (corrupt or encrypted)."""


class EmptyDocumentError(DocumentError):
    """The document was read but contains no displayable tokens."""
