"""In-memory document store with TTL cleanup.

WHY: Web clients upload a document once and then page through its
tokens as they read. Re-extracting a PDF for every page request would be
wasteful, so the tokenized document is kept in memory for a while. An
in-memory store is sufficient: reading position is not persisted, and a
document can always be uploaded again.

HOW: Two components work together:
  StoredDocument — dataclass holding the token sequence and metadata
  DocumentStore  — thread-safe dict-based store with create/get/list/
                   delete and TTL cleanup of idle documents

RULES:
- All store mutations are protected by threading.Lock
- Document IDs are UUID4 hex strings generated at creation time
- Tokens are stored as a tuple and never mutated after creation
- get_document() refreshes last_accessed_at; TTL is measured from it
- create_document() raises ValueError when the store is full
- Default TTL is 1 hour (RSVP_DOCUMENT_TTL_SECONDS)
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from rsvp_reader.config import DOCUMENT_TTL_SECONDS, MAX_DOCUMENTS

logger = logging.getLogger(__name__)


@dataclass
class StoredDocument:
    """A tokenized document held for paging.

    RULES:
    - id: UUID4 hex string, unique and immutable after creation
    - filename: original upload name (display only)
    - tokens: the tokenizer output, in reading order
    - created_at / last_accessed_at: epoch seconds
    """

    id: str
    filename: str
    tokens: tuple
    created_at: float
    last_accessed_at: float

    @property
    def word_count(self) -> int:
        return len(self.tokens)


class DocumentStore:
    """Thread-safe in-memory store for tokenized documents.

    WHY: Concurrent requests (uploads, token pages, deletes) and the
    periodic cleanup task access the store simultaneously.

    HOW: Documents live in a plain dict keyed by ID; every public method
    acquires self._lock.

    RULES:
    - get_document() returns None for unknown IDs (no exceptions)
    - delete_document() returns False for unknown IDs
    - cleanup_expired() removes documents idle for longer than the TTL
    """

    def __init__(
        self,
        ttl_seconds: int = DOCUMENT_TTL_SECONDS,
        max_documents: int = MAX_DOCUMENTS,
    ) -> None:
        self._documents: Dict[str, StoredDocument] = {}
        self._lock = threading.Lock()
        self._ttl_seconds = ttl_seconds
        self.max_documents = max_documents

    def create_document(self, filename: str, tokens: Sequence[str]) -> StoredDocument:
        with self._lock:
            if len(self._documents) >= self.max_documents:
                raise ValueError(
                    "Maximum number of stored documents ({}) reached".format(
                        self.max_documents
                    )
                )

            now = time.time()
            document = StoredDocument(
                id=uuid.uuid4().hex,
                filename=filename,
                tokens=tuple(tokens),
                created_at=now,
                last_accessed_at=now,
            )
            self._documents[document.id] = document

        logger.info(
            "Stored document %s (%s, %d tokens)",
            document.id, filename, document.word_count,
        )
        return document

    def get_document(self, document_id: str) -> Optional[StoredDocument]:
        with self._lock:
            document = self._documents.get(document_id)
            if document is not None:
                document.last_accessed_at = time.time()
            return document

    def list_documents(self) -> List[StoredDocument]:
        """All documents, oldest first."""
        with self._lock:
            return sorted(self._documents.values(), key=lambda d: d.created_at)

    def delete_document(self, document_id: str) -> bool:
        with self._lock:
            document = self._documents.pop(document_id, None)

        if document is None:
            return False
        logger.info("Deleted document %s", document_id)
        return True

    def cleanup_expired(self) -> int:
        """Remove documents not accessed within the TTL; returns the count."""
        now = time.time()
        expired: List[StoredDocument] = []

        with self._lock:
            for document_id, document in list(self._documents.items()):
                if now - document.last_accessed_at > self._ttl_seconds:
                    expired.append(self._documents.pop(document_id))

        for document in expired:
            logger.info(
                "Expired document %s (idle %.0fs)",
                document.id, now - document.last_accessed_at,
            )
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._documents.clear()
