"""Deferred tasks for work that must run shortly after a UI event."""

import heapq
import itertools
import logging
import threading
from typing import Callable

from .ports import DeferredTask, Scheduler

logger = logging.getLogger(__name__)


class _Task:
    def __init__(self, fn: Callable[[], None]):
        self.fn = fn
        self.done = False
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def run(self) -> None:
        if self.cancelled or self.done:
            return
        self.done = True
        try:
            self.fn()
        except Exception:
            logger.exception("Deferred task failed")


class TimerScheduler:
    """Wall-clock scheduler backed by ``threading.Timer``."""

    def __init__(self) -> None:
        self._timers: dict[_Task, threading.Timer] = {}
        self._lock = threading.Lock()

    def call_later(self, delay_ms: int, fn: Callable[[], None]) -> _Task:
        task = _Task(fn)

        def fire() -> None:
            with self._lock:
                self._timers.pop(task, None)
            task.run()

        timer = threading.Timer(delay_ms / 1000, fire)
        timer.daemon = True
        with self._lock:
            self._timers[task] = timer
        timer.start()
        return task

    def cancel_all(self) -> None:
        with self._lock:
            pending = list(self._timers.items())
            self._timers.clear()
        for task, timer in pending:
            task.cancel()
            timer.cancel()


class ManualScheduler:
    """Scheduler driven by a virtual clock.

    Nothing runs until ``advance`` moves the clock past a task's due time,
    which lets tests step through deferred work deterministically.
    """

    def __init__(self) -> None:
        self.now_ms = 0
        self._queue: list[tuple[int, int, _Task]] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: int, fn: Callable[[], None]) -> _Task:
        task = _Task(fn)
        heapq.heappush(self._queue, (self.now_ms + delay_ms, next(self._seq), task))
        return task

    def advance(self, ms: int) -> int:
        """Move the clock forward and run every task that fell due. Returns tasks run."""
        target = self.now_ms + ms
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, task = heapq.heappop(self._queue)
            self.now_ms = due
            if not task.cancelled:
                task.run()
                ran += 1
        self.now_ms = target
        return ran

    def pending(self) -> int:
        return sum(1 for _, _, t in self._queue if not t.cancelled)

    def cancel_all(self) -> None:
        for _, _, task in self._queue:
            task.cancel()
        self._queue.clear()


class TaskGroup:
    """Schedules through another scheduler and remembers its own tasks.

    ``cancel_all`` cancels only the tasks scheduled through this group, so
    tasks other code queued on the shared scheduler survive.
    """

    def __init__(self, scheduler: Scheduler) -> None:
        self.scheduler = scheduler
        self._tasks: list[DeferredTask] = []

    def call_later(self, delay_ms: int, fn: Callable[[], None]) -> DeferredTask:
        self._tasks = [t for t in self._tasks if not (t.done or t.cancelled)]
        task = self.scheduler.call_later(delay_ms, fn)
        self._tasks.append(task)
        return task

    def pending(self) -> int:
        return sum(1 for t in self._tasks if not (t.done or t.cancelled))

    def cancel_all(self) -> None:
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
