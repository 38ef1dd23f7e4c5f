"""Flip animation for counter labels.

A flip turns the label over in two halves. The new value is written at the
midpoint, when the label is edge-on, and the returned promise is resolved
when the second half ends:

    animator.flip(5, FlipDirection.UP).then(play_sound).done(enable_buttons)

Both halves go through the scheduler, so nothing happens until its clock
moves, even for a zero duration.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from smc.core.config import DEFAULT_FLIP_DURATION
from smc.core.promise import Promise, defer_promise
from smc.output.console import ConsoleProtocol
from smc.platform.scheduler import SchedulerProtocol

__all__ = [
    "FlipAnimator",
    "FlipDirection",
    "FlipRecord",
    "LabelProtocol",
]


class FlipDirection(Enum):
    """Which way the label turns."""

    UP = "up"
    DOWN = "down"

    def __str__(self) -> str:
        return self.value


class LabelProtocol(Protocol):
    """Anything showing a line of text."""

    text: str


@dataclass(frozen=True, slots=True)
class FlipRecord:
    value: int
    direction: FlipDirection


class FlipAnimator:
    """Animates value changes on a single label."""

    def __init__(
        self,
        scheduler: SchedulerProtocol,
        label: LabelProtocol,
        *,
        duration: float = DEFAULT_FLIP_DURATION,
        console: ConsoleProtocol | None = None,
    ) -> None:
        if duration < 0:
            raise ValueError(f"flip duration must be non-negative, got {duration}")
        self._scheduler = scheduler
        self._label = label
        self._duration = duration
        self._console = console
        self.history: list[FlipRecord] = []

    @property
    def duration(self) -> float:
        return self._duration

    def flip(self, value: int, direction: FlipDirection) -> Promise:
        """Start flipping the label to ``value``.

        Returns:
            A pending promise, resolved when the flip ends. Continuations
            may be added until then.
        """
        promise = defer_promise()
        half = self._duration / 2

        def midpoint() -> None:
            self._label.text = str(value)
            self._scheduler.schedule_after(half, promise.resolve())

        self._scheduler.schedule_after(half, midpoint)
        self.history.append(FlipRecord(value, direction))
        if self._console is not None:
            self._console.step(len(self.history), f"flip {direction} to {value}")
        return promise

    def flip_sequence(self, steps: Iterable[tuple[int, FlipDirection]]) -> Promise:
        """Run flips one after another.

        Each flip starts from the ``done`` handler of the previous one.

        Returns:
            A promise resolved after the last flip ends (on the next
            scheduler tick when ``steps`` is empty).
        """
        remaining = list(steps)
        finished = defer_promise()

        def next_step() -> None:
            if not remaining:
                finished.resolve()()
                return
            value, direction = remaining.pop(0)
            self.flip(value, direction).done(next_step)

        self._scheduler.schedule_after(0, next_step)
        return finished
