"""Deferred and periodic callbacks driven by an injectable clock.

The engine never sleeps or spawns threads.  Hosts call ``run_due()`` from
their own event loop (a Qt timer, the Pygame frame loop, the CLI's input
poll) and every callback runs on that same thread, so game commands and
timer callbacks are naturally serialised.

Tests use ``SimulatedScheduler`` and step time explicitly::

    sched = SimulatedScheduler()
    sched.call_later(1.0, on_fire)
    sched.advance(1.0)          # on_fire runs here
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class TimerHandle:
    """Cancellation token returned by ``call_later`` / ``call_every``."""

    __slots__ = ("callback", "deadline", "interval", "_cancelled")

    def __init__(
        self, callback: Callback, deadline: float, interval: float | None
    ) -> None:
        self.callback = callback
        self.deadline = deadline
        self.interval = interval
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def periodic(self) -> bool:
        return self.interval is not None

    def cancel(self) -> None:
        """Stop the timer.  Calling this more than once is harmless."""
        self._cancelled = True


class Scheduler:
    """Single-threaded timer queue over a monotonic clock."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._heap: list[tuple[float, int, TimerHandle]] = []
        self._seq = itertools.count()

    # -- registration ---------------------------------------------------------

    def now(self) -> float:
        return self._clock()

    def call_later(self, delay: float, callback: Callback) -> TimerHandle:
        """Run *callback* once, *delay* seconds from now."""
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        handle = TimerHandle(callback, self.now() + delay, None)
        self._push(handle)
        return handle

    def call_every(self, interval: float, callback: Callback) -> TimerHandle:
        """Run *callback* every *interval* seconds, first run one interval out."""
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        handle = TimerHandle(callback, self.now() + interval, interval)
        self._push(handle)
        return handle

    # -- execution ------------------------------------------------------------

    def run_due(self) -> int:
        """Run every callback whose deadline has passed.  Returns the count.

        Periodic timers that fell behind are caught up tick by tick, in
        deadline order with any one-shot timers due in between.
        """
        now = self.now()
        ran = 0
        while self._heap and self._heap[0][0] <= now:
            _, _, handle = heapq.heappop(self._heap)
            if handle.cancelled:
                continue
            if handle.interval is not None:
                handle.deadline += handle.interval
                self._push(handle)
            else:
                # Spent one-shots report as cancelled so owners can drop them.
                handle.cancel()
            handle.callback()
            ran += 1
        return ran

    @property
    def pending(self) -> int:
        """Number of live (not cancelled) timers."""
        return sum(1 for _, _, h in self._heap if not h.cancelled)

    def next_deadline(self) -> float | None:
        self._discard_cancelled()
        return self._heap[0][0] if self._heap else None

    # -- helpers --------------------------------------------------------------

    def _push(self, handle: TimerHandle) -> None:
        heapq.heappush(self._heap, (handle.deadline, next(self._seq), handle))

    def _discard_cancelled(self) -> None:
        while self._heap and self._heap[0][2].cancelled:
            heapq.heappop(self._heap)


class ManualClock:
    """A clock that only moves when told to."""

    def __init__(self, start: float = 0.0) -> None:
        self.time = start

    def __call__(self) -> float:
        return self.time

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("cannot move the clock backwards")
        self.time += seconds


class SimulatedScheduler(Scheduler):
    """Scheduler on a ``ManualClock``, for tests and replays."""

    def __init__(self, start: float = 0.0) -> None:
        self.clock = ManualClock(start)
        super().__init__(self.clock)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing callbacks at their own deadlines.

        The clock is stepped to each intermediate deadline so that a callback
        observes ``now()`` equal to its scheduled time.
        """
        target = self.clock.time + seconds
        ran = 0
        while True:
            deadline = self.next_deadline()
            if deadline is None or deadline > target:
                break
            self.clock.time = max(self.clock.time, deadline)
            ran += self.run_due()
        self.clock.time = target
        logger.debug("simulated clock at %.3f (%d callbacks)", target, ran)
        return ran
