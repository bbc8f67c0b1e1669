"""Single-threaded callback scheduling.

Everything that mutates the page runs as a scheduled callback on one thread:
the language-switch fade, typing-effect steps and animation frames. Two
implementations share the same small surface (`call_later` returning a
cancellable handle, plus `now`):

- AsyncioScheduler runs callbacks on an asyncio event loop.
- ManualScheduler keeps a virtual clock that only moves when `advance` is
  called, so transitions and frame loops can be stepped deterministically.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Callable, List, Optional, Tuple


class Handle:
    def __init__(self, cancel_fn: Optional[Callable[[], None]] = None):
        self._cancel_fn = cancel_fn
        self.cancelled = False

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        if self._cancel_fn is not None:
            self._cancel_fn()


class Scheduler:
    def now(self) -> float:
        raise NotImplementedError

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Handle:
        raise NotImplementedError


class AsyncioScheduler(Scheduler):
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.loop = loop or asyncio.get_running_loop()

    def now(self) -> float:
        return self.loop.time() * 1000.0

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Handle:
        timer = self.loop.call_later(max(delay_ms, 0) / 1000.0, callback)
        return Handle(timer.cancel)


class ManualScheduler(Scheduler):
    """Virtual clock in milliseconds. Callbacks due at the same time run in scheduling order."""

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)
        self._seq = itertools.count()
        self._queue: List[Tuple[float, int, Handle, Callable[[], None]]] = []

    def now(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Handle:
        handle = Handle()
        heapq.heappush(self._queue, (self._now + max(delay_ms, 0), next(self._seq), handle, callback))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h, _ in self._queue if not h.cancelled)

    def advance(self, delta_ms: float) -> int:
        """Move the clock forward, running every callback that falls due. Returns how many ran."""
        target = self._now + delta_ms
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle, callback = heapq.heappop(self._queue)
            self._now = max(self._now, due)
            if handle.cancelled:
                continue
            callback()
            ran += 1
        self._now = target
        return ran

    def run_until_idle(self, limit: int = 10000) -> int:
        """Run queued callbacks in time order until nothing is pending (bounded for self-rescheduling loops)."""
        ran = 0
        while self._queue and ran < limit:
            due, _, handle, callback = heapq.heappop(self._queue)
            self._now = max(self._now, due)
            if handle.cancelled:
                continue
            callback()
            ran += 1
        return ran
