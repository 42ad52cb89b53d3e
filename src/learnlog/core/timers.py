"""Cancellable single-shot timers.

Everything runs on one thread. A :class:`Scheduler` hands out handles with a
``cancel()`` method; callbacks only ever run from the host's own loop:

- :class:`TimerQueue` is driven explicitly by calling :meth:`TimerQueue.run_due`
  (the interactive shell does this between commands, tests do it after moving
  a fake clock forward).
- :class:`AsyncioScheduler` delegates to ``loop.call_later`` for async hosts.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import time
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from loguru import logger

Clock = Callable[[], float]
"""Returns the current time in seconds."""


@runtime_checkable
class TimerHandle(Protocol):
    def cancel(self) -> None: ...


@runtime_checkable
class Scheduler(Protocol):
    """Anything that can run a callback once after *delay* seconds."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


class ScheduledCall:
    """Handle for a callback queued on a :class:`TimerQueue`."""

    __slots__ = ("args", "callback", "cancelled", "due", "fired")

    def __init__(self, due: float, callback: Callable[..., Any], args: tuple):
        self.due = due
        self.callback = callback
        self.args = args
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "fired" if self.fired else "pending"
        return f"ScheduledCall(due={self.due:.3f}, {state})"


class TimerQueue:
    """Cooperative timer queue ordered by due time.

    Calls scheduled for the same instant fire in the order they were queued.
    """

    def __init__(self, clock: Clock = time.monotonic):
        self.clock = clock
        self._heap: list[tuple[float, int, ScheduledCall]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> ScheduledCall:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        call = ScheduledCall(self.clock() + delay, callback, args)
        heapq.heappush(self._heap, (call.due, next(self._seq), call))
        return call

    def run_due(self) -> int:
        """Fire every active call whose due time has passed. Returns the count fired."""
        now = self.clock()
        fired = 0
        while self._heap and self._heap[0][0] <= now:
            _, _, call = heapq.heappop(self._heap)
            if call.cancelled:
                continue
            call.fired = True
            fired += 1
            try:
                call.callback(*call.args)
            except Exception as exc:
                logger.error(f"Timer callback {call.callback!r} failed: {exc}")
        return fired

    @property
    def pending(self) -> int:
        """Number of queued calls that have not been cancelled."""
        return sum(1 for _, _, call in self._heap if not call.cancelled)

    def next_due(self) -> float | None:
        """Due time of the earliest active call, if any."""
        for due, _, call in sorted(self._heap):
            if not call.cancelled:
                return due
        return None


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop.

    Args:
        loop: Loop to schedule on. Defaults to the loop running at call time.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback, *args)
