"""Timer queue — one-shot, periodic, cancellation and catch-up."""

from __future__ import annotations

import pytest

from backend.engine.scheduler import ManualClock, Scheduler, SimulatedScheduler


def test_call_later_fires_once_at_deadline() -> None:
    sched = SimulatedScheduler()
    fired: list[float] = []
    sched.call_later(1.0, lambda: fired.append(sched.now()))

    sched.advance(0.5)
    assert fired == []
    sched.advance(0.5)
    assert fired == [1.0]
    sched.advance(5.0)
    assert fired == [1.0]
    assert sched.pending == 0


def test_call_every_fires_each_interval() -> None:
    sched = SimulatedScheduler()
    fired: list[float] = []
    sched.call_every(1.0, lambda: fired.append(sched.now()))

    sched.advance(3.5)
    assert fired == [1.0, 2.0, 3.0]


def test_cancel_stops_timer_and_is_idempotent() -> None:
    sched = SimulatedScheduler()
    fired: list[int] = []
    handle = sched.call_every(1.0, lambda: fired.append(1))

    sched.advance(2.0)
    handle.cancel()
    handle.cancel()
    sched.advance(10.0)
    assert fired == [1, 1]
    assert handle.cancelled
    assert sched.pending == 0


def test_callback_can_cancel_its_own_periodic_timer() -> None:
    sched = SimulatedScheduler()
    fired: list[int] = []

    def tick() -> None:
        fired.append(1)
        if len(fired) == 3:
            handle.cancel()

    handle = sched.call_every(1.0, tick)
    sched.advance(10.0)
    assert len(fired) == 3


def test_timers_interleave_in_deadline_order() -> None:
    sched = SimulatedScheduler()
    order: list[str] = []
    sched.call_every(1.0, lambda: order.append("tick"))
    sched.call_later(1.5, lambda: order.append("once"))

    sched.advance(2.0)
    assert order == ["tick", "once", "tick"]


def test_run_due_catches_up_after_late_poll() -> None:
    clock = ManualClock()
    sched = Scheduler(clock)
    fired: list[int] = []
    sched.call_every(1.0, lambda: fired.append(1))

    clock.advance(4.2)
    assert sched.run_due() == 4
    assert sched.run_due() == 0


def test_invalid_delays_rejected() -> None:
    sched = SimulatedScheduler()
    with pytest.raises(ValueError):
        sched.call_later(-1.0, lambda: None)
    with pytest.raises(ValueError):
        sched.call_every(0.0, lambda: None)
    with pytest.raises(ValueError):
        sched.clock.advance(-1.0)
