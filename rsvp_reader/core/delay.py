"""Per-token pause multipliers.

WHY: Punctuation carries prosody. A reader needs a beat at the end of a
sentence and a shorter one at a clause break; brackets, quotes and dashes
only need a flicker. Because the tokenizer emits punctuation as its own
tokens, the pause is simply the display time of that token.

RULES:
- Only tokens made entirely of tokenizer punctuation get a multiplier != 1
- Contains . ! ? → SENTENCE_PAUSE (2.0)
- Otherwise contains , ; : → CLAUSE_PAUSE (1.2)
- Otherwise (quotes, brackets, dashes, ellipsis) → MINOR_PAUSE (0.8)
- Word tokens and the empty string → WORD_PAUSE (1.0)
"""

from __future__ import annotations

from rsvp_reader.core.tokenizer import PUNCTUATION_TOKEN_RE

SENTENCE_PAUSE = 2.0
CLAUSE_PAUSE = 1.2
MINOR_PAUSE = 0.8
WORD_PAUSE = 1.0

_SENTENCE_MARKS = frozenset(".!?")
_CLAUSE_MARKS = frozenset(",;:")


def is_punctuation(token: str) -> bool:
    """True when the token consists only of tokenizer punctuation characters."""
    return isinstance(token, str) and PUNCTUATION_TOKEN_RE.fullmatch(token) is not None


def delay_multiplier(token: str) -> float:
    """Multiplier applied to the base per-word delay for this token."""
    if not is_punctuation(token):
        return WORD_PAUSE

    marks = set(token)
    if marks & _SENTENCE_MARKS:
        return SENTENCE_PAUSE
    if marks & _CLAUSE_MARKS:
        return CLAUSE_PAUSE
    return MINOR_PAUSE
