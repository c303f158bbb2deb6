"""Tests for the frame-driven scheduler."""

import pytest

from sightreader.scheduler import ManualScheduler, Scheduler


def test_satisfies_scheduler_protocol():
    assert isinstance(ManualScheduler(), Scheduler)


def test_one_shot_fires_once_when_due():
    sched = ManualScheduler()
    calls = []
    sched.schedule_once(0.5, lambda: calls.append(sched.now))
    sched.advance(0.4)
    assert calls == []
    sched.advance(0.2)
    assert calls == [0.5]
    sched.advance(10)
    assert len(calls) == 1
    assert sched.pending == 0


def test_repeating_fires_every_interval():
    sched = ManualScheduler()
    calls = []
    sched.schedule_repeating(1.0, lambda: calls.append(sched.now))
    assert sched.advance(3.5) == 3
    assert calls == [1.0, 2.0, 3.0]
    assert sched.pending == 1


def test_callbacks_run_in_deadline_order():
    sched = ManualScheduler()
    order = []
    sched.schedule_once(0.3, lambda: order.append("b"))
    sched.schedule_once(0.1, lambda: order.append("a"))
    sched.schedule_once(0.3, lambda: order.append("c"))
    sched.advance(1.0)
    assert order == ["a", "b", "c"]


def test_cancel_is_safe_for_unknown_and_fired_tokens():
    sched = ManualScheduler()
    calls = []
    token = sched.schedule_once(0.1, lambda: calls.append(1))
    sched.advance(0.2)
    sched.cancel(token)
    sched.cancel(None)
    sched.cancel(999)
    assert calls == [1]

    token = sched.schedule_repeating(0.1, lambda: calls.append(2))
    sched.cancel(token)
    sched.advance(1.0)
    assert calls == [1]


def test_callback_can_schedule_follow_up_within_same_advance():
    sched = ManualScheduler()
    calls = []

    def first():
        calls.append("first")
        sched.schedule_once(0.2, lambda: calls.append("second"))

    sched.schedule_once(0.1, first)
    sched.advance(0.5)
    assert calls == ["first", "second"]


def test_repeating_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        ManualScheduler().schedule_repeating(0, lambda: None)
