"""Playback timing controller — a single-step RSVP scheduler.

WHY: RSVP playback is a loop of "show token, wait, show next token"
where the wait depends on the reading speed and on the token itself
(sentence ends hold longer). The reader must be able to pause, resume,
seek and change speed at any moment without a stale timer firing after
the state has moved on.

HOW: TimingController owns the token sequence, the current position,
the running flag and the reading speed. Each step emits the current
token to the display callback, reports progress, advances, and asks the
injected Scheduler to run the next step after the token's delay. Every
scheduled step carries the generation number that was current when it
was scheduled; any state change other than a step bumps the generation
and cancels the pending handle, so at most one live step exists and a
step that escaped cancellation recognises itself as stale.

RULES:
- States: idle (no tokens), paused, playing, completed (position == end)
- load() cancels the pending step, rewinds, pauses, reports (0, total)
- play() is a no-op with no tokens or while already playing; wraps to 0
  at the end; the first step runs immediately
- Seeking while playing pauses playback (no step is rescheduled)
- Seek targets clamp to [0, total - 1]; seeking an empty sequence is a no-op
- Reading speed clamps to [MIN_WPM, MAX_WPM]; a new speed only affects
  delays computed after the change
- delay = round_half_up(round_half_up(60000 / wpm) * multiplier) ms
- Completion fires exactly once per run, right after the last token
- No public method raises for out-of-range input
"""

from __future__ import annotations

import enum
import logging
import math
import threading
from typing import Any, Callable, Iterable, Optional, Tuple

from rsvp_reader.config import DEFAULT_SEEK_STEP, DEFAULT_WPM, clamp_wpm
from rsvp_reader.core.delay import delay_multiplier as default_delay_multiplier
from rsvp_reader.core.schedulers import Scheduler, ThreadingScheduler

logger = logging.getLogger(__name__)

WordCallback = Callable[[str, int], None]
ProgressCallback = Callable[[int, int], None]
CompleteCallback = Callable[[], None]


class PlaybackState(str, enum.Enum):
    """Observable state of a TimingController.

    Inherits from str so values serialize cleanly to JSON.
    """

    IDLE = "idle"
    PAUSED = "paused"
    PLAYING = "playing"
    COMPLETED = "completed"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's round() uses banker's rounding (round(312.5) == 312); reading
    delays round .5 up so 192 WPM gives 313 ms.
    """
    return int(math.floor(value + 0.5))


def wpm_to_delay(wpm: float) -> int:
    """Base per-word delay in milliseconds for a reading speed."""
    return round_half_up(60000 / wpm)


def token_delay(
    token: str,
    wpm: float,
    multiplier: Callable[[str], float] = default_delay_multiplier,
) -> int:
    """Display time in milliseconds for one token at a reading speed."""
    return round_half_up(wpm_to_delay(wpm) * multiplier(token))


def _ignore_word(token: str, index: int) -> None:
    pass


def _ignore_progress(current: int, total: int) -> None:
    pass


def _ignore_complete() -> None:
    pass


class TimingController:
    """Drive sequential token display with per-token delays.

    Args:
        scheduler: Deferred-execution backend. Defaults to a
                   ThreadingScheduler.
        wpm: Initial reading speed (clamped).
        on_word: Called with ``(token, index)`` for every displayed token.
        on_progress: Called with ``(current_index, total)``.
        on_complete: Called with no arguments when the last token was shown.
        delay_multiplier: Token → multiplier policy.
    """

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        *,
        wpm: float = DEFAULT_WPM,
        on_word: Optional[WordCallback] = None,
        on_progress: Optional[ProgressCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
        delay_multiplier: Callable[[str], float] = default_delay_multiplier,
    ) -> None:
        self._scheduler: Scheduler = scheduler if scheduler is not None else ThreadingScheduler()
        self._wpm = clamp_wpm(wpm)
        self._on_word = on_word or _ignore_word
        self._on_progress = on_progress or _ignore_progress
        self._on_complete = on_complete or _ignore_complete
        self._delay_multiplier = delay_multiplier

        self._tokens: Tuple[str, ...] = ()
        self._position = 0
        self._running = False
        self._pending: Any = None
        self._generation = 0
        # Reentrant: callbacks run under the lock and may call back in.
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def wpm(self) -> int:
        return self._wpm

    @property
    def is_playing(self) -> bool:
        return self._running

    @property
    def current_index(self) -> int:
        return self._position

    @property
    def word_count(self) -> int:
        return len(self._tokens)

    @property
    def tokens(self) -> Tuple[str, ...]:
        return self._tokens

    @property
    def current_token(self) -> Optional[str]:
        """Token at the current position, or None at the end / when idle."""
        with self._lock:
            if self._position < len(self._tokens):
                return self._tokens[self._position]
            return None

    @property
    def progress(self) -> float:
        """Playback position as a percentage (0 when nothing is loaded)."""
        with self._lock:
            if not self._tokens:
                return 0.0
            return self._position / len(self._tokens) * 100

    @property
    def has_pending_step(self) -> bool:
        return self._pending is not None

    @property
    def state(self) -> PlaybackState:
        with self._lock:
            if not self._tokens:
                return PlaybackState.IDLE
            if self._running:
                return PlaybackState.PLAYING
            if self._position >= len(self._tokens):
                return PlaybackState.COMPLETED
            return PlaybackState.PAUSED

    def delay_for(self, token: str) -> int:
        """Display time in milliseconds for a token at the current speed."""
        return token_delay(token, self._wpm, self._delay_multiplier)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def load(self, tokens: Optional[Iterable[str]]) -> None:
        """Replace the token sequence and rewind to the start, paused."""
        with self._lock:
            self._cancel_pending()
            self._tokens = tuple(tokens) if tokens is not None else ()
            self._position = 0
            self._running = False
            logger.debug("Loaded %d tokens", len(self._tokens))
            self._on_progress(0, len(self._tokens))

    def play(self) -> None:
        with self._lock:
            if not self._tokens or self._running:
                return
            if self._position >= len(self._tokens):
                self._position = 0
            self._running = True
            self._cancel_pending()
            logger.debug("Playing from %d at %d WPM", self._position, self._wpm)
            self._step(self._generation)

    def pause(self) -> None:
        with self._lock:
            if self._running:
                logger.debug("Paused at %d", self._position)
            self._running = False
            self._cancel_pending()

    def toggle(self) -> bool:
        """Pause if playing, otherwise play. Returns the new running state."""
        with self._lock:
            if self._running:
                self.pause()
            else:
                self.play()
            return self._running

    def seek(self, index: int) -> None:
        """Jump to a token and display it immediately.

        Seeking while playing pauses playback; the caller resumes with
        play() if it wants to continue from the new position.
        """
        with self._lock:
            if not self._tokens:
                return
            if self._running:
                logger.debug("Seek during playback; pausing")
            self._running = False
            self._cancel_pending()

            last = len(self._tokens) - 1
            # max/min order also maps NaN to 0
            self._position = int(max(0, min(index, last)))
            self._on_word(self._tokens[self._position], self._position)
            self._on_progress(self._position, len(self._tokens))

    def seek_percent(self, percent: float) -> None:
        """Seek to ``floor(percent / 100 * total)``; NaN is ignored."""
        with self._lock:
            if not self._tokens or math.isnan(percent):
                return
            target = percent / 100 * len(self._tokens)
            if math.isinf(target):
                target = len(self._tokens) if target > 0 else 0
            self.seek(math.floor(target))

    def back(self, count: int = DEFAULT_SEEK_STEP) -> None:
        with self._lock:
            self.seek(self._position - count)

    def forward(self, count: int = DEFAULT_SEEK_STEP) -> None:
        with self._lock:
            self.seek(self._position + count)

    def set_wpm(self, wpm: float) -> None:
        """Change the reading speed, clamped to the supported range."""
        if isinstance(wpm, float) and math.isnan(wpm):
            return
        with self._lock:
            self._wpm = clamp_wpm(wpm)

    # ------------------------------------------------------------------
    # Scheduling internals
    # ------------------------------------------------------------------

    def _cancel_pending(self) -> None:
        self._generation += 1
        if self._pending is not None:
            self._scheduler.cancel(self._pending)
            self._pending = None

    def _schedule_next(self, delay_ms: int) -> None:
        generation = self._generation
        self._pending = self._scheduler.call_later(
            delay_ms / 1000.0,
            lambda: self._step(generation),
        )

    def _step(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._pending = None

            total = len(self._tokens)
            if not self._running or self._position >= total:
                if self._position >= total:
                    self._finish()
                return

            index = self._position
            token = self._tokens[index]
            self._on_word(token, index)
            self._on_progress(index, total)

            # A callback paused, sought or reloaded; that call owns the state now.
            if generation != self._generation or not self._running:
                return

            self._position = index + 1
            if self._position < total:
                self._schedule_next(self.delay_for(token))
            else:
                self._finish()

    def _finish(self) -> None:
        self._running = False
        logger.debug("Playback complete after %d tokens", len(self._tokens))
        self._on_complete()
