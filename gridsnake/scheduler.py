"""
scheduler.py — One-shot timers owned by the host.

The core never reads a timer itself. It asks for a callback after a delay;
the host pumps `run_due(now)` from whatever clock it runs on.
"""

import heapq
import itertools
from typing import Callable


class ManualScheduler:
    """Min-heap of (due, seq, callback). Cancelled handles are skipped lazily."""

    def __init__(self, now: float = 0.0):
        self.now = now
        self._queue: list[tuple[float, int, Callable[[], None]]] = []
        self._seq = itertools.count()
        self._cancelled: set[int] = set()

    def call_later(self, delay: float, callback: Callable[[], None]) -> int:
        handle = next(self._seq)
        heapq.heappush(self._queue, (self.now + delay, handle, callback))
        return handle

    def cancel(self, handle: int) -> None:
        self._cancelled.add(handle)

    def pending(self) -> int:
        return sum(1 for _, h, _ in self._queue if h not in self._cancelled)

    def run_due(self, now: float) -> int:
        """Fire every callback due at or before `now`. Returns how many ran."""
        self.now = now
        fired = 0
        while self._queue and self._queue[0][0] <= now:
            _, handle, callback = heapq.heappop(self._queue)
            if handle in self._cancelled:
                self._cancelled.discard(handle)
                continue
            callback()
            fired += 1
        return fired
