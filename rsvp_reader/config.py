"""Configuration constants, playback limits, and .env loading.

WHY: Centralizes the values a deployment might want to change (default
reading speed, upload limits, API bind address) so they are easy to find
and override without touching logic. The playback limits themselves are
fixed so every surface (CLI, API, embedding code) clamps the same way.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level values read from the environment with typed defaults.
clamp_wpm() is the single place reading speeds are bounded.

RULES:
- MIN_WPM / MAX_WPM are constants, never read from the environment
- DEFAULT_WPM from the environment is clamped into [MIN_WPM, MAX_WPM]
- SUPPORTED_EXTENSIONS are lowercase, with the leading dot
- All other defaults can be overridden via RSVP_* environment variables
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Playback limits
# ---------------------------------------------------------------------------

MIN_WPM = 100
MAX_WPM = 1000


def clamp_wpm(wpm: float) -> int:
    """Clamp a reading speed into the supported range.

    RULES:
    - Values below MIN_WPM become MIN_WPM, above MAX_WPM become MAX_WPM
    - Fractional values are truncated to whole words per minute
    """
    return int(max(MIN_WPM, min(MAX_WPM, wpm)))


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(
            "Environment variable {} must be an integer, got '{}'.".format(name, raw)
        )


DEFAULT_WPM = clamp_wpm(_env_int("RSVP_DEFAULT_WPM", 350))
"""Reading speed used when the caller does not choose one."""

DEFAULT_SEEK_STEP = _env_int("RSVP_SEEK_STEP", 10)
"""Tokens skipped by back()/forward() when no count is given."""

# ---------------------------------------------------------------------------
# Document ingestion
# ---------------------------------------------------------------------------

SUPPORTED_EXTENSIONS: set[str] = {
    ".pdf", ".docx", ".epub",
    ".txt", ".text",
    ".md", ".markdown",
}
"""Document file extensions the parsers can extract text from."""

MAX_FILE_SIZE_MB = _env_int("RSVP_MAX_FILE_SIZE_MB", 50)
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024

# ---------------------------------------------------------------------------
# HTTP API
# ---------------------------------------------------------------------------

API_HOST = os.getenv("RSVP_API_HOST", "0.0.0.0")
API_PORT = _env_int("RSVP_API_PORT", 8000)
DOCUMENT_TTL_SECONDS = _env_int("RSVP_DOCUMENT_TTL_SECONDS", 3600)
MAX_DOCUMENTS = _env_int("RSVP_MAX_DOCUMENTS", 100)
