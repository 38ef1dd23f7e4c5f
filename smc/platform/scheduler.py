"""Delayed callbacks on the caller's event loop.

Multi-step sequences are built by scheduling a promise trigger for later:

    scheduler.schedule_after(0.2, promise.resolve())

``AsyncioScheduler`` is the production implementation. ``ManualScheduler``
keeps a virtual clock that only moves when told to, for tests and headless
replays. Scheduled callbacks cannot be cancelled and run exactly once.
"""

from __future__ import annotations

import asyncio
import heapq
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

__all__ = [
    "AsyncioScheduler",
    "ManualScheduler",
    "SchedulerProtocol",
    "delay",
]

# Return values are ignored, so promise triggers can be scheduled directly
type Delayed = Callable[[], object]


class SchedulerProtocol(Protocol):
    """Runs a callback once, after a delay, on the same execution context."""

    def schedule_after(self, duration: float, callback: Delayed) -> None:
        """Schedule ``callback`` to run after at least ``duration`` seconds.

        Args:
            duration: Non-negative delay in seconds
            callback: Zero-argument callable

        Raises:
            ValueError: If duration is negative or not finite.
        """
        ...


def _check_duration(duration: float) -> float:
    if not math.isfinite(duration) or duration < 0:
        raise ValueError(f"delay must be a non-negative finite number, got {duration!r}")
    return float(duration)


class AsyncioScheduler:
    """Scheduler backed by ``loop.call_later``.

    Without an explicit loop, the loop running at scheduling time is used,
    so ``schedule_after`` must then be called from inside that loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def schedule_after(self, duration: float, callback: Delayed) -> None:
        seconds = _check_duration(duration)
        loop = self._loop or asyncio.get_running_loop()
        loop.call_later(seconds, callback)


@dataclass(order=True, slots=True)
class _Entry:
    due: float
    seq: int
    callback: Delayed = field(compare=False)


def _empty_queue() -> list[_Entry]:
    return []


@dataclass
class ManualScheduler:
    """Scheduler driven by an explicit virtual clock.

    Callbacks run in due-time order; callbacks due at the same time run in
    the order they were scheduled.
    """

    now: float = 0.0
    _queue: list[_Entry] = field(default_factory=_empty_queue, repr=False)
    _seq: int = field(default=0, repr=False)

    def schedule_after(self, duration: float, callback: Delayed) -> None:
        seconds = _check_duration(duration)
        heapq.heappush(self._queue, _Entry(self.now + seconds, self._seq, callback))
        self._seq += 1

    @property
    def pending(self) -> int:
        """Number of callbacks not run yet."""
        return len(self._queue)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running every callback that falls due.

        Callbacks scheduled while advancing run too if they fall due inside
        the window.

        Args:
            seconds: Non-negative amount of virtual time

        Returns:
            Number of callbacks run.
        """
        target = self.now + _check_duration(seconds)
        ran = 0
        while self._queue and self._queue[0].due <= target:
            entry = heapq.heappop(self._queue)
            self.now = entry.due
            entry.callback()
            ran += 1
        self.now = target
        return ran

    def run_all(self) -> int:
        """Run callbacks until the queue is empty; return how many ran."""
        ran = 0
        while self._queue:
            entry = heapq.heappop(self._queue)
            self.now = max(self.now, entry.due)
            entry.callback()
            ran += 1
        return ran


def delay(scheduler: SchedulerProtocol, duration: float, callback: Delayed) -> None:
    """Run ``callback`` after ``duration`` seconds on ``scheduler``."""
    scheduler.schedule_after(duration, callback)
