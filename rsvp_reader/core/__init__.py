"""Core text-to-timed-display pipeline.

WHY: The core package holds the only parts of the reader with real
algorithmic content: segmentation, fixation-point placement, pause
policy, and playback scheduling. Everything else (parsers, CLI, HTTP
API) is I/O glue around these modules.

HOW: tokenizer.py turns raw text into tokens, orp.py splits a token
around its anchor, delay.py maps a token to a pause multiplier,
timing.py sequences tokens through an injected scheduler from
schedulers.py.

RULES:
- tokenizer, orp and delay are pure functions, safe from any thread
- timing is the only stateful module; it performs no I/O itself
"""

from rsvp_reader.core.delay import delay_multiplier
from rsvp_reader.core.orp import FixationSplit, orp_index, split_at_anchor
from rsvp_reader.core.schedulers import AsyncioScheduler, Scheduler, ThreadingScheduler
from rsvp_reader.core.timing import PlaybackState, TimingController, wpm_to_delay
from rsvp_reader.core.tokenizer import (
    estimate_minutes,
    estimate_reading_time,
    tokenize,
    word_count,
)

__all__ = [
    "AsyncioScheduler",
    "FixationSplit",
    "PlaybackState",
    "Scheduler",
    "ThreadingScheduler",
    "TimingController",
    "delay_multiplier",
    "estimate_minutes",
    "estimate_reading_time",
    "orp_index",
    "split_at_anchor",
    "tokenize",
    "word_count",
    "wpm_to_delay",
]
