"""Shared test fixtures for the rsvp_reader test suite.

WHY: The timing controller is driven by a scheduler, and tests must not
sleep through real reading delays. Several modules also need the same
sample text and a way to record the callbacks a controller emits.

HOW: ManualScheduler implements the Scheduler protocol on a virtual
clock; tests advance the clock (or drain the queue) explicitly and
inspect the delays that were requested. EventRecorder collects word,
progress and completion callbacks in order.

RULES:
- ManualScheduler never fires a callback on its own
- Handles fire in due order; cancelled handles never fire
- Every controller fixture gets a fresh scheduler and recorder
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

import pytest

from rsvp_reader.core.timing import TimingController


SAMPLE_TEXT = (
    "The quick brown fox jumps over the lazy dog. "
    "Then, after a short rest, it runs away!"
)


# ---------------------------------------------------------------------------
# Virtual-clock scheduler
# ---------------------------------------------------------------------------


class ManualHandle:
    """A scheduled callback on the virtual clock."""

    def __init__(self, due: float, delay: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False


class ManualScheduler:
    """Scheduler whose clock only moves when a test moves it."""

    def __init__(self) -> None:
        self.now = 0.0
        self.handles: List[ManualHandle] = []

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self.now + delay_s, delay_s, callback)
        self.handles.append(handle)
        return handle

    def cancel(self, handle: ManualHandle) -> None:
        handle.cancelled = True

    @property
    def pending(self) -> List[ManualHandle]:
        return [h for h in self.handles if not h.cancelled and not h.fired]

    @property
    def requested_delays_ms(self) -> List[int]:
        """Every delay ever requested, in milliseconds, in request order."""
        return [int(round(h.delay * 1000)) for h in self.handles]

    def _fire_next(self, deadline: Optional[float] = None) -> bool:
        pending = self.pending
        if not pending:
            return False
        handle = min(pending, key=lambda h: h.due)
        if deadline is not None and handle.due > deadline + 1e-9:
            return False
        self.now = max(self.now, handle.due)
        handle.fired = True
        handle.callback()
        return True

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing every handle that falls due."""
        deadline = self.now + seconds
        while self._fire_next(deadline):
            pass
        self.now = deadline

    def run_until_idle(self, max_steps: int = 10000) -> int:
        """Fire handles until none are pending; returns how many fired."""
        fired = 0
        while fired < max_steps and self._fire_next():
            fired += 1
        return fired


# ---------------------------------------------------------------------------
# Callback recorder
# ---------------------------------------------------------------------------


class EventRecorder:
    """Collects controller callbacks as tuples, in emission order."""

    def __init__(self) -> None:
        self.events: List[Tuple] = []

    def on_word(self, token: str, index: int) -> None:
        self.events.append(("word", token, index))

    def on_progress(self, current: int, total: int) -> None:
        self.events.append(("progress", current, total))

    def on_complete(self) -> None:
        self.events.append(("complete",))

    @property
    def words(self) -> List[Tuple[str, int]]:
        return [(e[1], e[2]) for e in self.events if e[0] == "word"]

    @property
    def progress(self) -> List[Tuple[int, int]]:
        return [(e[1], e[2]) for e in self.events if e[0] == "progress"]

    @property
    def completions(self) -> int:
        return sum(1 for e in self.events if e[0] == "complete")

    def clear(self) -> None:
        self.events.clear()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_text():
    return SAMPLE_TEXT


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def recorder():
    return EventRecorder()


@pytest.fixture
def controller(scheduler, recorder):
    """A TimingController at 100 WPM (600 ms per plain word)."""
    return TimingController(
        scheduler,
        wpm=100,
        on_word=recorder.on_word,
        on_progress=recorder.on_progress,
        on_complete=recorder.on_complete,
    )
