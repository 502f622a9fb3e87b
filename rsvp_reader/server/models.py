"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation.

HOW: Each endpoint has its own response model; the one JSON request
body (POST /tokenize) has a request model. All fields carry a
description for the /docs UI.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- wpm fields accept any integer; endpoints clamp them to [MIN_WPM, MAX_WPM]
- Frame fields mirror FixationSplit (before + anchor + after == token)
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from rsvp_reader.config import DEFAULT_WPM, MAX_WPM, MIN_WPM


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class TokenizeRequest(BaseModel):
    """Raw text to tokenize without storing it."""

    text: str = Field(description="Raw Unicode text, e.g. pasted from a clipboard.")
    wpm: int = Field(
        default=DEFAULT_WPM,
        description="Reading speed used for the time estimate (clamped to {}-{}).".format(
            MIN_WPM, MAX_WPM
        ),
    )


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class TokenizeResponse(BaseModel):
    """Tokenizer output with reading statistics."""

    tokens: List[str] = Field(description="Tokens in reading order.")
    word_count: int = Field(description="Number of tokens, punctuation included.")
    estimated_minutes: int = Field(description="Whole minutes to read at the given wpm.")
    wpm: int = Field(description="Reading speed used for the estimate.")


class DocumentCreatedResponse(BaseModel):
    """Returned when an uploaded document was extracted and stored.

    RULES:
    - id is used for all subsequent token page requests
    """

    id: str = Field(description="Unique document identifier.")
    filename: str = Field(description="Original uploaded filename.")
    word_count: int = Field(description="Number of tokens in the document.")
    estimated_minutes: int = Field(description="Whole minutes to read at wpm.")
    wpm: int = Field(description="Reading speed used for the estimate.")

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "id": "550e8400e29b41d4a716446655440000",
                "filename": "novel.epub",
                "word_count": 98213,
                "estimated_minutes": 281,
                "wpm": 350,
            }
        ]
    }}


class DocumentResponse(BaseModel):
    """Metadata for a stored document."""

    id: str = Field(description="Unique document identifier.")
    filename: str = Field(description="Original uploaded filename.")
    word_count: int = Field(description="Number of tokens in the document.")
    created_at: float = Field(description="Upload timestamp (Unix epoch seconds).")


class FixationResponse(BaseModel):
    """A token split around its anchor, with its pause multiplier."""

    token: str = Field(description="The token as given.")
    before: str = Field(description="Text left of the anchor, leading punctuation included.")
    anchor: str = Field(description="Anchor character(s) to highlight; empty for punctuation.")
    after: str = Field(description="Text right of the anchor, trailing punctuation included.")
    delay_multiplier: float = Field(description="Multiplier applied to the base per-word delay.")


class Frame(BaseModel):
    """One display step: a token, its fixation split, and its display time."""

    index: int = Field(description="Position of the token in the document.")
    token: str = Field(description="The token.")
    before: str = Field(description="Text left of the anchor.")
    anchor: str = Field(description="Anchor character(s) to highlight.")
    after: str = Field(description="Text right of the anchor.")
    delay_ms: int = Field(description="How long to show this token before the next one.")


class FramePageResponse(BaseModel):
    """A contiguous page of display frames."""

    document_id: str = Field(description="The document these frames belong to.")
    start: int = Field(description="Index of the first frame in this page.")
    total: int = Field(description="Total number of tokens in the document.")
    wpm: int = Field(description="Reading speed used for delay_ms.")
    frames: List[Frame] = Field(description="Frames in reading order.")


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message
    """

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
