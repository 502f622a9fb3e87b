"""Deferred-execution backends for the timing controller.

WHY: The timing controller needs exactly one primitive, "run this after
N seconds, unless I cancel it first". Hosts differ in what they offer:
the CLI player runs an asyncio event loop, while synchronous embedders
only have threads. Injecting the primitive keeps the controller free of
any event-loop assumptions and lets tests drive it with a fake clock.

HOW: Scheduler is a structural Protocol with call_later() and cancel().
AsyncioScheduler wraps loop.call_later(); ThreadingScheduler wraps one
daemon threading.Timer per call.

RULES:
- call_later() returns an opaque handle accepted by cancel()
- cancel() on an already-fired or already-cancelled handle is a no-op
- Delays are in seconds (the controller converts from milliseconds)
"""

from __future__ import annotations

import asyncio
import threading
from typing import Any, Callable, Optional, Protocol


class Scheduler(Protocol):
    """Anything that can run a callback later and cancel it."""

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> Any:
        ...

    def cancel(self, handle: Any) -> None:
        ...


class AsyncioScheduler:
    """Schedule steps on an asyncio event loop.

    When no loop is given, the loop running at call_later() time is used,
    so the scheduler can be built before ``asyncio.run()`` starts.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(max(0.0, delay_s), callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


class ThreadingScheduler:
    """Schedule steps on daemon ``threading.Timer`` threads.

    Callbacks run on the timer thread, so the controller they drive must
    guard its own state (TimingController does, with an RLock).
    """

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(max(0.0, delay_s), callback)
        timer.daemon = True
        timer.start()
        return timer

    def cancel(self, handle: threading.Timer) -> None:
        handle.cancel()
