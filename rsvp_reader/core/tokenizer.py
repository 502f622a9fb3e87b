"""Raw text segmentation into RSVP display tokens.

WHY: RSVP shows one token per frame. Punctuation glued to a word
("world!") would shift the visual centre and hide the pause it implies,
so punctuation runs are split off into their own tokens. The delay
policy then lengthens the frame for those tokens instead.

HOW: Normalize line endings and whitespace, split on whitespace runs,
then split every chunk on maximal runs of punctuation characters with a
capturing regex so the punctuation itself is kept, in order.

RULES:
- Punctuation set: . ! ? , ; : ' " ( ) [ ] { } — – - …
- A maximal punctuation run is ONE token: "(hello)," → ["(", "hello", "),"]
- 3+ consecutive line breaks collapse to 2; spaces/tabs collapse to 1
- Tokens are never empty and never contain whitespace
- Empty, whitespace-only, or non-str input → []
- Pure and total: same input, same output, never raises
"""

from __future__ import annotations

import math
import re
from typing import List

from rsvp_reader.config import DEFAULT_WPM

# Characters that are split off words into standalone tokens.
PUNCTUATION = ".!?,;:'\"()[]{}—–-…"

_PUNCT_CLASS = "[" + "".join(re.escape(ch) for ch in PUNCTUATION) + "]"

# Capturing group so re.split() keeps the punctuation runs.
_PUNCT_SPLIT_RE = re.compile("(" + _PUNCT_CLASS + "+)")

# Whole-token match used by the delay policy.
PUNCTUATION_TOKEN_RE = re.compile(_PUNCT_CLASS + "+")

_EXCESS_BREAKS_RE = re.compile(r"\n{3,}")
_HORIZONTAL_SPACE_RE = re.compile(r"[ \t]+")


def normalize_text(text: str) -> str:
    """Normalize line endings and collapse redundant whitespace.

    RULES:
    - "\\r\\n" and lone "\\r" become "\\n"
    - Runs of 3+ "\\n" become exactly "\\n\\n" (paragraph breaks survive)
    - Runs of spaces and tabs become a single space
    - Leading/trailing whitespace is stripped
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    normalized = _EXCESS_BREAKS_RE.sub("\n\n", normalized)
    normalized = _HORIZONTAL_SPACE_RE.sub(" ", normalized)
    return normalized.strip()


def split_punctuation(chunk: str) -> List[str]:
    """Split a whitespace-free chunk into word and punctuation runs.

    "hello," becomes ["hello", ","] and "(test)" becomes ["(", "test", ")"].
    """
    return [part for part in _PUNCT_SPLIT_RE.split(chunk) if part]


def tokenize(text: str) -> List[str]:
    """Tokenize raw text into words and standalone punctuation runs.

    Args:
        text: Extracted document text. Anything that is not a non-empty
              string is treated as empty.

    Returns:
        Tokens in reading order, e.g. ``tokenize("Hello, world!")`` is
        ``["Hello", ",", "world", "!"]``.
    """
    if not isinstance(text, str) or not text:
        return []

    tokens: List[str] = []
    for chunk in normalize_text(text).split():
        tokens.extend(split_punctuation(chunk))
    return tokens


def word_count(text: str) -> int:
    """Number of display tokens in the text (punctuation runs included)."""
    return len(tokenize(text))


def estimate_minutes(count: int, wpm: int = DEFAULT_WPM) -> int:
    """Whole minutes, rounded up, to read ``count`` tokens at ``wpm``.

    A non-positive wpm is treated as 1 so the estimate never divides by zero.
    """
    return math.ceil(count / max(1, wpm))


def estimate_reading_time(text: str, wpm: int = DEFAULT_WPM) -> int:
    """Estimated reading time in whole minutes, rounded up (empty text → 0)."""
    return estimate_minutes(word_count(text), wpm)
