"""Optimal Recognition Point (ORP) calculation for a single token.

WHY: The eye recognises a word fastest when it fixates slightly inside
the word rather than on its first letter. Highlighting that point and
keeping it on a fixed screen column removes the need for the eye to move
between frames.

HOW: Surrounding punctuation is peeled off first so it never shifts the
anchor. The remaining letter/digit core is split at its centre: the
middle letter for odd lengths, the two letters straddling the centre for
even lengths. The punctuation is then re-attached to the outer parts.

RULES:
- Core = token minus its maximal leading and trailing runs of characters
  that are neither letters nor digits (any script; str.isalnum)
- Odd core length n: anchor = core[n // 2], one character
- Even core length n: anchor = core[n // 2 - 1 : n // 2 + 1], two characters
- Empty core (all punctuation): FixationSplit(token, "", "")
- before + anchor + after == token, always
- Pure and total over every string
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class FixationSplit:
    """A token split into the text before, at, and after its anchor.

    Derived on demand for each displayed frame and never stored; the
    concatenation of the three parts reproduces the token exactly.
    """

    before: str
    anchor: str
    after: str

    @property
    def token(self) -> str:
        return self.before + self.anchor + self.after

    def as_tuple(self) -> Tuple[str, str, str]:
        return (self.before, self.anchor, self.after)


def _is_core_char(ch: str) -> bool:
    return ch.isalnum()


def extract_core(token: str) -> Tuple[str, str, str]:
    """Split a token into (leading punctuation, core, trailing punctuation).

    RULES:
    - A token with no letters or digits returns (token, "", "")
    - Inner punctuation ("don't", "e-mail") stays in the core
    """
    start = 0
    while start < len(token) and not _is_core_char(token[start]):
        start += 1

    if start == len(token):
        return token, "", ""

    end = len(token)
    while end > start and not _is_core_char(token[end - 1]):
        end -= 1

    return token[:start], token[start:end], token[end:]


def orp_index(token: str) -> int:
    """Length-bucket fixation index within the token's core.

    The classic RSVP lookup table: short words fixate near the start,
    long words a few letters in. split_at_anchor() centres the anchor
    instead; this index is kept for callers that align by the table.

    RULES:
    - core length <= 1 → 0
    - 2..5 → 1, 6..9 → 2, 10..13 → 3, 14+ → 4
    """
    length = len(extract_core(token)[1])
    if length <= 1:
        return 0
    if length <= 5:
        return 1
    if length <= 9:
        return 2
    if length <= 13:
        return 3
    return 4


def split_at_anchor(token: str) -> FixationSplit:
    """Split a token around its anchor character(s).

    Examples:
        ``split_at_anchor("cat")`` → ``("c", "a", "t")``
        ``split_at_anchor("(wow)")`` → ``("(w", "o", "w)")``
        ``split_at_anchor("word")`` → ``("w", "or", "d")``

    Args:
        token: A token from the tokenizer (any string is accepted).

    Returns:
        FixationSplit whose parts concatenate back to ``token``.
    """
    if not isinstance(token, str) or not token:
        return FixationSplit("", "", "")

    leading, core, trailing = extract_core(token)
    length = len(core)
    if length == 0:
        return FixationSplit(token, "", "")

    if length % 2 == 0:
        start = length // 2 - 1
        width = 2
    else:
        start = length // 2
        width = 1

    return FixationSplit(
        before=leading + core[:start],
        anchor=core[start:start + width],
        after=core[start + width:] + trailing,
    )
