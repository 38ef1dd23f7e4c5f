"""Tests for smc.platform.scheduler module."""

from __future__ import annotations

import asyncio
import math

import pytest

from smc.core.promise import Settlement, defer_promise
from smc.platform.scheduler import AsyncioScheduler, ManualScheduler, delay


class TestManualScheduler:
    """Virtual-clock scheduler."""

    def test_nothing_runs_before_due(self) -> None:
        calls: list[str] = []
        scheduler = ManualScheduler()
        scheduler.schedule_after(1.0, lambda: calls.append("a"))

        assert scheduler.advance(0.5) == 0
        assert calls == []
        assert scheduler.pending == 1

    def test_runs_when_due(self) -> None:
        calls: list[str] = []
        scheduler = ManualScheduler()
        scheduler.schedule_after(1.0, lambda: calls.append("a"))

        assert scheduler.advance(1.0) == 1
        assert calls == ["a"]
        assert scheduler.pending == 0
        assert scheduler.now == 1.0

    def test_due_time_order(self) -> None:
        calls: list[str] = []
        scheduler = ManualScheduler()
        scheduler.schedule_after(0.3, lambda: calls.append("late"))
        scheduler.schedule_after(0.1, lambda: calls.append("early"))
        scheduler.advance(1)
        assert calls == ["early", "late"]

    def test_ties_run_in_scheduling_order(self) -> None:
        calls: list[str] = []
        scheduler = ManualScheduler()
        for name in ("a", "b", "c"):
            scheduler.schedule_after(0.2, lambda name=name: calls.append(name))
        scheduler.advance(0.2)
        assert calls == ["a", "b", "c"]

    def test_callback_sees_due_time(self) -> None:
        seen: list[float] = []
        scheduler = ManualScheduler()
        scheduler.schedule_after(0.25, lambda: seen.append(scheduler.now))
        scheduler.advance(2)
        assert seen == [0.25]
        assert scheduler.now == 2

    def test_nested_scheduling_inside_window(self) -> None:
        calls: list[str] = []
        scheduler = ManualScheduler()

        def first() -> None:
            calls.append("first")
            scheduler.schedule_after(0.5, lambda: calls.append("second"))

        scheduler.schedule_after(0.5, first)
        assert scheduler.advance(1.0) == 2
        assert calls == ["first", "second"]

    def test_nested_scheduling_outside_window_waits(self) -> None:
        calls: list[str] = []
        scheduler = ManualScheduler()
        scheduler.schedule_after(0.5, lambda: scheduler.schedule_after(1, lambda: calls.append("x")))
        scheduler.advance(1.0)
        assert calls == []
        assert scheduler.pending == 1

    def test_run_all_drains_queue(self) -> None:
        calls: list[int] = []
        scheduler = ManualScheduler()
        scheduler.schedule_after(5, lambda: calls.append(5))
        scheduler.schedule_after(1, lambda: scheduler.schedule_after(10, lambda: calls.append(11)))
        assert scheduler.run_all() == 3
        assert calls == [5, 11]
        assert scheduler.now == 11

    def test_zero_delay_still_deferred(self) -> None:
        calls: list[str] = []
        scheduler = ManualScheduler()
        scheduler.schedule_after(0, lambda: calls.append("a"))
        assert calls == []
        scheduler.advance(0)
        assert calls == ["a"]

    @pytest.mark.parametrize("duration", [-0.1, math.inf, math.nan])
    def test_invalid_duration(self, duration: float) -> None:
        scheduler = ManualScheduler()
        with pytest.raises(ValueError, match="non-negative"):
            scheduler.schedule_after(duration, lambda: None)

    def test_negative_advance_rejected(self) -> None:
        with pytest.raises(ValueError):
            ManualScheduler().advance(-1)

    def test_schedules_promise_trigger(self) -> None:
        calls: list[str] = []
        scheduler = ManualScheduler()
        promise = defer_promise().then(lambda: calls.append("step"))
        promise.done(lambda: calls.append("done"))

        scheduler.schedule_after(0.2, promise.resolve())
        promise.then(lambda: calls.append("added later"))
        scheduler.advance(0.2)

        assert calls == ["step", "added later", "done"]


class TestDelay:
    def test_delay_delegates(self) -> None:
        calls: list[str] = []
        scheduler = ManualScheduler()
        delay(scheduler, 0.1, lambda: calls.append("a"))
        scheduler.advance(0.1)
        assert calls == ["a"]


class TestAsyncioScheduler:
    """Event-loop backed scheduler."""

    def test_runs_on_running_loop(self) -> None:
        async def scenario() -> list[str]:
            calls: list[str] = []
            finished = asyncio.Event()
            scheduler = AsyncioScheduler()

            def second() -> None:
                calls.append("second")
                finished.set()

            scheduler.schedule_after(0.02, second)
            scheduler.schedule_after(0.0, lambda: calls.append("first"))
            await asyncio.wait_for(finished.wait(), timeout=2)
            return calls

        assert asyncio.run(scenario()) == ["first", "second"]

    def test_resolves_promise_on_loop(self) -> None:
        async def scenario() -> Settlement:
            loop = asyncio.get_running_loop()
            outcome: asyncio.Future[Settlement] = loop.create_future()
            promise = defer_promise().then_with(lambda p: p.reject())
            promise.fail(lambda: outcome.set_result(Settlement.FAILED)).done(
                lambda: outcome.set_result(Settlement.COMPLETED)
            )
            AsyncioScheduler(loop).schedule_after(0.01, promise.resolve())
            return await asyncio.wait_for(outcome, timeout=2)

        assert asyncio.run(scenario()) is Settlement.FAILED

    def test_requires_running_loop_without_explicit_loop(self) -> None:
        with pytest.raises(RuntimeError):
            AsyncioScheduler().schedule_after(0, lambda: None)

    def test_invalid_duration(self) -> None:
        with pytest.raises(ValueError):
            AsyncioScheduler().schedule_after(-1, lambda: None)
