"""FastAPI application serving tokenized documents to web readers.

WHY: Browser and mobile front ends do the rendering and the timing on
the client, but should not reimplement text extraction, tokenization or
fixation placement. The API does that work once per document and hands
out pages of ready-to-display frames.

HOW: POST /documents accepts a multipart upload, extracts and tokenizes
it in a worker thread, and stores the tokens in a DocumentStore. Token
pages are rendered on request into frames (fixation split + delay at the
requested speed). A lifespan task expires idle documents.

RULES:
- Ingestion errors map to: unsupported type 400, too large 413,
  unreadable or empty document 422, store full 429
- Uploaded files are written to a temporary directory that is removed
  before the response is sent
- wpm query/form values are clamped, not rejected
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import asyncio
import logging
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Annotated, List, Optional

from fastapi import FastAPI, File, Form, HTTPException, Query, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from rsvp_reader import __version__
from rsvp_reader.config import (
    API_HOST,
    API_PORT,
    DEFAULT_WPM,
    MAX_FILE_SIZE_BYTES,
    SUPPORTED_EXTENSIONS,
    clamp_wpm,
)
from rsvp_reader.core.delay import delay_multiplier
from rsvp_reader.core.orp import split_at_anchor
from rsvp_reader.core.timing import token_delay
from rsvp_reader.core.tokenizer import estimate_minutes, tokenize
from rsvp_reader.parsers import (
    DocumentError,
    FileTooLargeError,
    UnsupportedFileError,
    is_supported,
    load_tokens,
)
from rsvp_reader.server.documents import DocumentStore, StoredDocument
from rsvp_reader.server.models import (
    DocumentCreatedResponse,
    DocumentResponse,
    ErrorResponse,
    FixationResponse,
    Frame,
    FramePageResponse,
    HealthResponse,
    TokenizeRequest,
    TokenizeResponse,
)

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 1000

# ---------------------------------------------------------------------------
# App and store setup
# ---------------------------------------------------------------------------

document_store = DocumentStore()


async def _periodic_cleanup() -> None:
    """Expire idle documents every 5 minutes."""
    while True:
        await asyncio.sleep(300)
        document_store.cleanup_expired()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start periodic cleanup on startup, cancel on shutdown."""
    task = asyncio.create_task(_periodic_cleanup())
    yield
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass


app = FastAPI(
    lifespan=lifespan,
    title="RSVP Reader API",
    description=(
        "Extract and tokenize documents for Rapid Serial Visual Presentation. "
        "Upload a document, then fetch pages of display frames: each token "
        "with its fixation anchor and display time."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _document_or_404(document_id: str) -> StoredDocument:
    document = document_store.get_document(document_id)
    if document is None:
        raise HTTPException(status_code=404, detail="Document not found: {}".format(document_id))
    return document


_DEFAULT_UPLOAD_NAME = "upload.txt"


def _sanitize_filename(raw: Optional[str]) -> str:
    """Reduce a client-supplied filename to a safe base name.

    RULES:
    - Directory components are dropped (no path traversal)
    - Names that are empty or only "." / ".." become "upload.txt"
    """
    name = Path(raw or "").name
    if name in ("", ".", ".."):
        return _DEFAULT_UPLOAD_NAME
    return name


def _validate_file_extension(filename: str) -> None:
    """Raise HTTPException if the file extension is not supported."""
    if not is_supported(filename):
        raise HTTPException(
            status_code=400,
            detail="Unsupported file type '{}'. Supported formats: {}".format(
                Path(filename).suffix.lower(), ", ".join(sorted(SUPPORTED_EXTENSIONS))
            ),
        )


def _extract_upload(filename: str, content: bytes) -> List[str]:
    """Write an upload to a temp dir and run it through the parsers.

    Runs in a worker thread; PDF and EPUB extraction are blocking.
    """
    with tempfile.TemporaryDirectory(prefix="rsvp_upload_") as tmp:
        path = Path(tmp) / filename
        path.write_bytes(content)
        return load_tokens(path)


# ---------------------------------------------------------------------------
# Endpoints: Documents
# ---------------------------------------------------------------------------


@app.post(
    "/documents",
    response_model=DocumentCreatedResponse,
    status_code=201,
    tags=["documents"],
    summary="Upload a document",
    description=(
        "Upload a PDF, DOCX, EPUB, Markdown or text file. The text is "
        "extracted and tokenized immediately; use the returned ID to page "
        "through display frames."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Unsupported file type"},
        413: {"model": ErrorResponse, "description": "File too large"},
        422: {"model": ErrorResponse, "description": "Unreadable or empty document"},
        429: {"model": ErrorResponse, "description": "Too many stored documents"},
    },
)
async def create_document(
    file: Annotated[
        UploadFile,
        File(description="Document to read."),
    ],
    wpm: Annotated[
        int,
        Form(description="Reading speed for the time estimate (clamped)."),
    ] = DEFAULT_WPM,
) -> DocumentCreatedResponse:
    # Sanitize filename to prevent path traversal
    filename = _sanitize_filename(file.filename)
    _validate_file_extension(filename)

    content = await file.read()
    if len(content) > MAX_FILE_SIZE_BYTES:
        raise HTTPException(
            status_code=413,
            detail="File too large. Maximum size is {} MB.".format(
                MAX_FILE_SIZE_BYTES // (1024 * 1024)
            ),
        )

    try:
        tokens = await run_in_threadpool(_extract_upload, filename, content)
    except UnsupportedFileError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except FileTooLargeError as exc:
        raise HTTPException(status_code=413, detail=str(exc))
    except DocumentError as exc:
        logger.warning("Rejected upload %s: %s", filename, exc)
        raise HTTPException(status_code=422, detail=str(exc))

    try:
        document = document_store.create_document(filename, tokens)
    except ValueError as exc:
        raise HTTPException(status_code=429, detail=str(exc))

    wpm = clamp_wpm(wpm)
    return DocumentCreatedResponse(
        id=document.id,
        filename=document.filename,
        word_count=document.word_count,
        estimated_minutes=estimate_minutes(document.word_count, wpm),
        wpm=wpm,
    )


@app.get(
    "/documents/{document_id}",
    response_model=DocumentResponse,
    tags=["documents"],
    summary="Get document metadata",
    responses={
        404: {"model": ErrorResponse, "description": "Document not found"},
    },
)
async def get_document(document_id: str) -> DocumentResponse:
    document = _document_or_404(document_id)
    return DocumentResponse(
        id=document.id,
        filename=document.filename,
        word_count=document.word_count,
        created_at=document.created_at,
    )


@app.get(
    "/documents/{document_id}/tokens",
    response_model=FramePageResponse,
    tags=["documents"],
    summary="Get a page of display frames",
    description=(
        "Returns up to `limit` frames starting at token `start`. Each frame "
        "holds the token split around its fixation anchor and the time to "
        "show it at the requested reading speed."
    ),
    responses={
        404: {"model": ErrorResponse, "description": "Document not found"},
    },
)
async def get_document_tokens(
    document_id: str,
    start: Annotated[int, Query(ge=0, description="Index of the first token.")] = 0,
    limit: Annotated[
        int,
        Query(ge=1, le=MAX_PAGE_SIZE, description="Maximum number of frames."),
    ] = 100,
    wpm: Annotated[int, Query(description="Reading speed (clamped).")] = DEFAULT_WPM,
) -> FramePageResponse:
    document = _document_or_404(document_id)
    wpm = clamp_wpm(wpm)

    frames = []
    for index in range(start, min(start + limit, document.word_count)):
        token = document.tokens[index]
        split = split_at_anchor(token)
        frames.append(Frame(
            index=index,
            token=token,
            before=split.before,
            anchor=split.anchor,
            after=split.after,
            delay_ms=token_delay(token, wpm),
        ))

    return FramePageResponse(
        document_id=document.id,
        start=start,
        total=document.word_count,
        wpm=wpm,
        frames=frames,
    )


@app.delete(
    "/documents/{document_id}",
    status_code=204,
    tags=["documents"],
    summary="Delete a stored document",
    responses={
        404: {"model": ErrorResponse, "description": "Document not found"},
    },
)
async def delete_document(document_id: str) -> Response:
    if not document_store.delete_document(document_id):
        raise HTTPException(status_code=404, detail="Document not found: {}".format(document_id))
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Endpoints: Text
# ---------------------------------------------------------------------------


@app.post(
    "/tokenize",
    response_model=TokenizeResponse,
    tags=["text"],
    summary="Tokenize raw text",
    description="Tokenize pasted text without storing it.",
)
async def tokenize_text(request: TokenizeRequest) -> TokenizeResponse:
    tokens = tokenize(request.text)
    wpm = clamp_wpm(request.wpm)
    return TokenizeResponse(
        tokens=tokens,
        word_count=len(tokens),
        estimated_minutes=estimate_minutes(len(tokens), wpm),
        wpm=wpm,
    )


@app.get(
    "/fixation",
    response_model=FixationResponse,
    tags=["text"],
    summary="Split a token at its fixation anchor",
)
async def get_fixation(
    token: Annotated[str, Query(description="A single token.")],
) -> FixationResponse:
    split = split_at_anchor(token)
    return FixationResponse(
        token=token,
        before=split.before,
        anchor=split.anchor,
        after=split.after,
        delay_multiplier=delay_multiplier(token),
    )


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Entry point for the rsvp-reader-api console script."""
    import uvicorn
    uvicorn.run(app, host=host or API_HOST, port=port or API_PORT)
