"""Cancellable scheduled tasks used for combat and dungeon pacing.

Timed pacing exists only for presentation cadence. Services never sleep; they
hand a callback to a scheduler and keep the returned task so the sequence can
be cancelled when the session ends mid-turn.
"""
from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


@dataclass(slots=True)
class ScheduledTask:
    """Handle for a callback waiting on a scheduler."""

    due_at: int
    callback: Callback
    label: str = ""
    cancelled: bool = False
    done: bool = False

    def cancel(self) -> None:
        if not self.done:
            self.cancelled = True

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.done)


class Scheduler(Protocol):
    """Anything that can run a callback after a delay."""

    def schedule(self, delay_ms: int, callback: Callback, label: str = "") -> ScheduledTask: ...

    def cancel_all(self) -> None: ...


@dataclass(order=True)
class _QueueEntry:
    due_at: int
    sequence: int
    task: ScheduledTask = field(compare=False)


class ManualScheduler:
    """Logical clock that only moves when advanced explicitly."""

    def __init__(self) -> None:
        self._now = 0
        self._queue: List[_QueueEntry] = []
        self._counter = itertools.count()

    @property
    def now(self) -> int:
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for entry in self._queue if entry.task.pending)

    def schedule(self, delay_ms: int, callback: Callback, label: str = "") -> ScheduledTask:
        if delay_ms < 0:
            raise ValueError("delay_ms must be zero or higher.")
        task = ScheduledTask(due_at=self._now + delay_ms, callback=callback, label=label)
        heapq.heappush(self._queue, _QueueEntry(task.due_at, next(self._counter), task))
        logger.debug("Scheduled %s at t=%d", label or "task", task.due_at)
        return task

    def advance(self, delta_ms: int) -> int:
        """Move the clock forward and run every task that falls due; return how many ran."""
        if delta_ms < 0:
            raise ValueError("Cannot move the clock backwards.")
        target = self._now + delta_ms
        ran = 0
        while self._queue and self._queue[0].due_at <= target:
            entry = heapq.heappop(self._queue)
            self._now = entry.due_at
            if self._run(entry.task):
                ran += 1
        self._now = target
        return ran

    def run_all(self) -> int:
        """Drain the queue, including tasks scheduled while draining."""
        ran = 0
        while self._queue:
            entry = heapq.heappop(self._queue)
            self._now = max(self._now, entry.due_at)
            if self._run(entry.task):
                ran += 1
        return ran

    def cancel_all(self) -> None:
        for entry in self._queue:
            entry.task.cancel()
        self._queue.clear()

    @staticmethod
    def _run(task: ScheduledTask) -> bool:
        if not task.pending:
            return False
        task.done = True
        logger.debug("Running %s at t=%d", task.label or "task", task.due_at)
        task.callback()
        return True


class ImmediateScheduler:
    """Runs callbacks as soon as they are scheduled; for headless play."""

    def schedule(self, delay_ms: int, callback: Callback, label: str = "") -> ScheduledTask:
        task = ScheduledTask(due_at=0, callback=callback, label=label)
        task.done = True
        callback()
        return task

    def cancel_all(self) -> None:
        return None
