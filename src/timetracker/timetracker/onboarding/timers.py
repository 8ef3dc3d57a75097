"""Cancellable one-shot timers for a single-threaded event loop.

Nothing here runs in the background: the owner calls `run_due()` whenever it
gets control (an incoming request, a UI tick) and due callbacks fire inline.
Every timer belongs to a scope so a state can drop all of its pending timers
when it is left.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from typing import Callable, Hashable, List, Optional

from ..common.datetime_utils import monotonic_ms

logger = logging.getLogger(__name__)


class TimerHandle:
    def __init__(self, due_ms: int, seq: int, callback: Callable[[], None], scope: Optional[Hashable]):
        self.due_ms = due_ms
        self.seq = seq
        self.scope = scope
        self._callback = callback
        self._cancelled = False
        self._fired = False

    @property
    def active(self) -> bool:
        return not (self._cancelled or self._fired)

    def cancel(self) -> bool:
        """Cancel the timer. Returns False if it already fired or was cancelled."""
        if not self.active:
            return False
        self._cancelled = True
        return True

    def _fire(self) -> None:
        self._fired = True
        self._callback()

    def __lt__(self, other: "TimerHandle") -> bool:
        return (self.due_ms, self.seq) < (other.due_ms, other.seq)

    def __repr__(self) -> str:
        state = "active" if self.active else ("fired" if self._fired else "cancelled")
        return f"TimerHandle(due_ms={self.due_ms}, scope={self.scope!r}, {state})"


class TimerScheduler:
    def __init__(self, clock: Callable[[], int] = monotonic_ms):
        self._clock = clock
        self._heap: List[TimerHandle] = []
        self._seq = itertools.count()

    def now(self) -> int:
        return int(self._clock())

    def schedule(self, delay_ms: int, callback: Callable[[], None], *, scope: Optional[Hashable] = None) -> TimerHandle:
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        handle = TimerHandle(self.now() + int(delay_ms), next(self._seq), callback, scope)
        heapq.heappush(self._heap, handle)
        return handle

    def cancel_scope(self, scope: Hashable) -> int:
        cancelled = 0
        for handle in self._heap:
            if handle.scope == scope and handle.cancel():
                cancelled += 1
        if cancelled:
            logger.debug("Cancelled %d timer(s) in scope %r", cancelled, scope)
        return cancelled

    def pending(self, scope: Optional[Hashable] = None) -> List[TimerHandle]:
        return sorted(h for h in self._heap if h.active and (scope is None or h.scope == scope))

    def next_due_ms(self) -> Optional[int]:
        active = self.pending()
        return active[0].due_ms if active else None

    def run_due(self) -> int:
        """Fire every timer whose deadline has passed, in deadline order.

        Callbacks may schedule or cancel timers; ones that become due are
        picked up in the same call.
        """
        fired = 0
        while self._heap:
            head = self._heap[0]
            if not head.active:
                heapq.heappop(self._heap)
                continue
            if head.due_ms > self.now():
                break
            heapq.heappop(self._heap)
            head._fire()
            fired += 1
        return fired
