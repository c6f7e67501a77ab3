"""Cancellable delayed callbacks.

The engine only needs ``call_later(delay, callback) -> handle`` and
``handle.cancel()``. The desktop app backs this with Qt single-shot timers;
:class:`ManualScheduler` runs callbacks when its virtual clock is advanced,
which keeps headless hosts and tests deterministic.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Callable, List, Protocol, Tuple


class TimerHandle(Protocol):
    def cancel(self) -> None: ...

    @property
    def active(self) -> bool: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class ManualHandle:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self._callback = callback
        self._cancelled = False
        self._fired = False

    @property
    def active(self) -> bool:
        return not (self._cancelled or self._fired)

    def cancel(self) -> None:
        self._cancelled = True

    def fire(self) -> None:
        if not self.active:
            return
        self._fired = True
        self._callback()


class ManualScheduler:
    """Scheduler driven by :meth:`advance` instead of wall-clock time."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)
        self._queue: List[Tuple[float, int, ManualHandle]] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self._now + max(0.0, delay), callback)
        heapq.heappush(self._queue, (handle.due, next(self._counter), handle))
        return handle

    @property
    def pending(self) -> int:
        """Number of callbacks that are still waiting to fire."""
        return sum(1 for _, _, h in self._queue if h.active)

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due callbacks in order."""
        if seconds < 0:
            raise ValueError("Cannot advance clock backwards")
        target = self._now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            self._now = max(self._now, due)
            handle.fire()
        self._now = target
