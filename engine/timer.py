"""
timer.py - Cooperative Tick Scheduler
======================================
A tiny single-threaded replacement for interval timers.

    sched  = TickScheduler()
    handle = sched.call_every(0.5, advance)
    ...
    sched.poll()      # from the event loop, or at the start of a request
    handle.cancel()

Nothing runs in the background.  `poll()` looks at the clock and fires
every callback whose deadline has passed.  If several periods elapsed
since the last poll the callback fires once per missed period, in due
order across all handles, so a paused browser tab catches up instead
of skipping steps.

Design decisions:
  - The clock is injectable (default time.monotonic) so tests can drive
    time by hand.
  - A callback may cancel its own handle (or others) while being fired;
    cancelled handles never fire again, even within the same poll.
"""

import logging
import time
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class TimerHandle:
    """A registered periodic callback.  Cancel it to release the timer."""

    def __init__(self, scheduler: "TickScheduler", interval: float,
                 callback: Callable[[], None], due: float):
        self._scheduler = scheduler
        self.interval   = interval
        self.callback   = callback
        self.due        = due
        self.active     = True

    def cancel(self) -> None:
        if self.active:
            self.active = False
            self._scheduler._discard(self)

    def __repr__(self) -> str:
        state = "active" if self.active else "cancelled"
        return f"<TimerHandle every {self.interval:.3f}s {state}>"


class TickScheduler:

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._handles: List[TimerHandle] = []

    # ------------------------------------------------------------------
    def call_every(self, interval_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        """Fire `callback` every `interval_seconds`, first one period from now."""
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        handle = TimerHandle(self, interval_seconds, callback, self.clock() + interval_seconds)
        self._handles.append(handle)
        logger.debug("timer registered: every %.3fs", interval_seconds)
        return handle

    def poll(self) -> int:
        """Fire every due callback.  Returns the number of callbacks fired."""
        now = self.clock()
        fired = 0
        while True:
            handle = self._next_due(now)
            if handle is None:
                break
            handle.due += handle.interval
            handle.callback()
            fired += 1
        return fired

    @property
    def active_count(self) -> int:
        return len(self._handles)

    # ------------------------------------------------------------------
    def _next_due(self, now: float) -> Optional[TimerHandle]:
        due = [h for h in self._handles if h.active and h.due <= now]
        if not due:
            return None
        return min(due, key=lambda h: h.due)

    def _discard(self, handle: TimerHandle) -> None:
        if handle in self._handles:
            self._handles.remove(handle)
            logger.debug("timer cancelled")
