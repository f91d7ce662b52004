"""Tests for deferred tasks."""

import threading

from vaultmod.core.scheduler import ManualScheduler, TaskGroup, TimerScheduler


def test_manual_scheduler_runs_when_due():
    """Test that tasks run only once the clock reaches them."""
    scheduler = ManualScheduler()
    ran = []
    scheduler.call_later(100, lambda: ran.append("a"))

    assert scheduler.advance(99) == 0
    assert ran == []
    assert scheduler.advance(1) == 1
    assert ran == ["a"]
    assert scheduler.pending() == 0


def test_manual_scheduler_order():
    """Test that tasks run in due-time order, ties in scheduling order."""
    scheduler = ManualScheduler()
    ran = []
    scheduler.call_later(30, lambda: ran.append("late"))
    scheduler.call_later(10, lambda: ran.append("early"))
    scheduler.call_later(10, lambda: ran.append("early-2"))

    scheduler.advance(100)
    assert ran == ["early", "early-2", "late"]
    assert scheduler.now_ms == 100


def test_manual_scheduler_cancel():
    """Test that cancelled tasks never run."""
    scheduler = ManualScheduler()
    ran = []
    task = scheduler.call_later(10, lambda: ran.append(1))
    task.cancel()

    assert scheduler.pending() == 0
    scheduler.advance(50)
    assert ran == []
    assert not task.done


def test_manual_scheduler_nested_scheduling():
    """Test that a task can schedule more work within the same advance."""
    scheduler = ManualScheduler()
    ran = []

    def first():
        ran.append("first")
        scheduler.call_later(5, lambda: ran.append("second"))

    scheduler.call_later(5, first)
    scheduler.advance(10)
    assert ran == ["first", "second"]


def test_manual_scheduler_task_error_is_contained():
    """Test that a failing task doesn't stop the others."""
    scheduler = ManualScheduler()
    ran = []

    def boom():
        raise RuntimeError("boom")

    scheduler.call_later(1, boom)
    scheduler.call_later(2, lambda: ran.append("ok"))
    scheduler.advance(5)
    assert ran == ["ok"]


def test_manual_scheduler_cancel_all():
    """Test that cancel_all drops everything pending."""
    scheduler = ManualScheduler()
    ran = []
    scheduler.call_later(1, lambda: ran.append(1))
    scheduler.call_later(2, lambda: ran.append(2))
    scheduler.cancel_all()
    scheduler.advance(10)
    assert ran == []


def test_timer_scheduler_runs():
    """Test the wall-clock scheduler."""
    scheduler = TimerScheduler()
    fired = threading.Event()
    task = scheduler.call_later(1, fired.set)

    assert fired.wait(timeout=5)
    assert task.done


def test_timer_scheduler_cancel_all():
    """Test that cancel_all stops pending timers."""
    scheduler = TimerScheduler()
    fired = threading.Event()
    task = scheduler.call_later(10_000, fired.set)
    scheduler.cancel_all()

    assert task.cancelled
    assert not fired.is_set()


def test_task_group_cancels_only_its_own_tasks():
    """Test that a group leaves tasks scheduled directly on the scheduler alone."""
    scheduler = ManualScheduler()
    group = TaskGroup(scheduler)
    ran = []
    group.call_later(10, lambda: ran.append("mine"))
    scheduler.call_later(10, lambda: ran.append("other"))
    assert group.pending() == 1
    assert scheduler.pending() == 2

    group.cancel_all()
    assert group.pending() == 0
    assert scheduler.pending() == 1
    scheduler.advance(10)
    assert ran == ["other"]


def test_task_group_forgets_finished_tasks():
    """Test that tasks that already ran are not tracked."""
    scheduler = ManualScheduler()
    group = TaskGroup(scheduler)
    ran = []
    first = group.call_later(5, lambda: ran.append(1))
    scheduler.advance(5)
    assert first.done
    assert group.pending() == 0

    group.call_later(5, lambda: ran.append(2))
    assert group.pending() == 1
    scheduler.advance(5)
    assert ran == [1, 2]
