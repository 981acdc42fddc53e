from typing import List

import pytest

from textblade.core.scheduler import ImmediateScheduler, ManualScheduler


def test_manual_scheduler_runs_tasks_only_when_due() -> None:
    scheduler = ManualScheduler()
    calls: List[str] = []
    scheduler.schedule(900, lambda: calls.append("attack"))
    scheduler.schedule(300, lambda: calls.append("sound"))

    assert scheduler.advance(299) == 0
    assert scheduler.advance(1) == 1
    assert calls == ["sound"]
    scheduler.advance(600)

    assert calls == ["sound", "attack"]
    assert scheduler.now == 900
    assert scheduler.pending == 0


def test_manual_scheduler_keeps_fifo_order_for_equal_due_times() -> None:
    scheduler = ManualScheduler()
    calls: List[int] = []
    for index in range(3):
        scheduler.schedule(100, lambda i=index: calls.append(i))

    scheduler.advance(100)

    assert calls == [0, 1, 2]


def test_manual_scheduler_runs_chained_tasks_inside_window() -> None:
    scheduler = ManualScheduler()
    calls: List[str] = []

    def first() -> None:
        calls.append("first")
        scheduler.schedule(50, lambda: calls.append("second"))

    scheduler.schedule(100, first)
    scheduler.advance(120)
    assert calls == ["first"]
    scheduler.advance(30)

    assert calls == ["first", "second"]


def test_cancelled_task_never_runs() -> None:
    scheduler = ManualScheduler()
    calls: List[str] = []
    task = scheduler.schedule(10, lambda: calls.append("ran"))

    task.cancel()
    scheduler.advance(100)

    assert calls == []
    assert task.cancelled
    assert not task.done


def test_cancel_all_and_run_all() -> None:
    scheduler = ManualScheduler()
    calls: List[str] = []
    scheduler.schedule(10, lambda: calls.append("a"))
    scheduler.cancel_all()
    scheduler.schedule(5000, lambda: calls.append("b"))

    assert scheduler.run_all() == 1
    assert calls == ["b"]
    assert scheduler.now == 5000


def test_manual_scheduler_rejects_negative_delays() -> None:
    scheduler = ManualScheduler()
    with pytest.raises(ValueError):
        scheduler.schedule(-1, lambda: None)
    with pytest.raises(ValueError):
        scheduler.advance(-5)


def test_immediate_scheduler_runs_synchronously() -> None:
    calls: List[str] = []
    task = ImmediateScheduler().schedule(1000, lambda: calls.append("now"))

    assert calls == ["now"]
    assert task.done
    assert not task.pending
