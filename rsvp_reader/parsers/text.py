"""Plain text and Markdown extraction.

WHY: Plain text needs no extraction at all, but Markdown syntax would
otherwise be flashed at the reader as tokens of its own ("##", "**",
link URLs). Stripping the markup leaves the prose.

HOW: strip_markdown() applies an ordered list of regex substitutions,
each removing one kind of markup while keeping the visible text.

RULES:
- Files are decoded as UTF-8; undecodable bytes are replaced, not fatal
- Fenced code blocks and inline code are dropped entirely
- Images are dropped; links keep their text and lose their target
- Header, blockquote, list markers and horizontal rules are removed
- Emphasis markers are removed, the emphasised text is kept
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Pattern, Tuple, Union

_MARKDOWN_RULES: List[Tuple[Pattern[str], str]] = [
    (re.compile(r"```[\s\S]*?```"), ""),                       # fenced code
    (re.compile(r"`[^`]+`"), ""),                              # inline code
    (re.compile(r"^#{1,6}\s+", re.MULTILINE), ""),             # headers
    (re.compile(r"\*\*([^*]+)\*\*"), r"\1"),                   # bold
    (re.compile(r"\*([^*]+)\*"), r"\1"),                       # italic
    (re.compile(r"__([^_]+)__"), r"\1"),
    (re.compile(r"_([^_]+)_"), r"\1"),
    # Images before links, otherwise the link rule eats "[alt](src)".
    (re.compile(r"!\[([^\]]*)\]\([^)]+\)"), ""),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"^>\s+", re.MULTILINE), ""),                  # blockquotes
    (re.compile(r"^[-*_]{3,}$", re.MULTILINE), ""),            # horizontal rules
    (re.compile(r"^[ \t]*[-*+]\s+", re.MULTILINE), ""),        # bullet lists
    (re.compile(r"^[ \t]*\d+\.\s+", re.MULTILINE), ""),        # numbered lists
]


def strip_markdown(markdown: str) -> str:
    """Remove Markdown formatting, returning readable plain text."""
    text = markdown
    for pattern, replacement in _MARKDOWN_RULES:
        text = pattern.sub(replacement, text)
    return text.strip()


def parse_txt(path: Union[str, Path]) -> str:
    return Path(path).read_text(encoding="utf-8", errors="replace")


def parse_markdown(path: Union[str, Path]) -> str:
    return strip_markdown(parse_txt(path))
