# tests/test_view_model.py

from __future__ import annotations

import random

from velvet_todo.tasks.task_models import Priority
from velvet_todo.tasks.view_model import filter_tasks, sort_tasks, visible_tasks

from .conftest import NOW, TODAY, make_task


def test_focus_mode_keeps_high_or_today_incomplete() -> None:
    high_undated = make_task("high", priority=Priority.HIGH)
    low_today = make_task("today", priority=Priority.LOW, date=TODAY)
    done_high = make_task("done", priority=Priority.HIGH, done=True)
    medium_tomorrow = make_task("later", date="2026-10-20")

    tasks = [high_undated, low_today, done_high, medium_tomorrow]
    focused = filter_tasks(tasks, focus_mode=True, today=TODAY)
    assert [t.id for t in focused] == ["high", "today"]


def test_non_focus_mode_is_identity() -> None:
    tasks = [make_task("a", done=True), make_task("b")]
    assert filter_tasks(tasks, focus_mode=False, today=TODAY) == tasks


def test_sort_order() -> None:
    tasks = [
        make_task("done-high", priority=Priority.HIGH, done=True),
        make_task("low", priority=Priority.LOW, date="2026-01-01"),
        make_task("med-undated-old", created_at=1),
        make_task("med-undated-new", created_at=2),
        make_task("med-late", date="2026-12-01"),
        make_task("med-early", date="2026-02-01"),
        make_task("high", priority=Priority.HIGH),
    ]
    assert [t.id for t in sort_tasks(tasks)] == [
        "high",
        "med-early",
        "med-late",
        "med-undated-new",
        "med-undated-old",
        "low",
        "done-high",
    ]


def test_sort_is_stable_for_equal_dates() -> None:
    tasks = [
        make_task("first", date="2026-05-05", created_at=1),
        make_task("second", date="2026-05-05", created_at=99),
        make_task("third", date="2026-05-05", created_at=50),
    ]
    assert [t.id for t in sort_tasks(tasks)] == ["first", "second", "third"]


def test_sort_invariants_on_random_lists() -> None:
    rng = random.Random(7)
    dates = [None, "2026-01-03", "2026-01-01", "2026-02-10"]
    tasks = [
        make_task(
            str(i),
            priority=rng.choice(list(Priority)),
            date=rng.choice(dates),
            done=rng.random() < 0.3,
            created_at=rng.randint(0, 1000),
        )
        for i in range(60)
    ]

    out = sort_tasks(tasks)
    assert sorted(t.id for t in out) == sorted(t.id for t in tasks)

    for a, b in zip(out, out[1:]):
        assert a.is_completed <= b.is_completed
        if a.is_completed == b.is_completed:
            assert a.priority.rank <= b.priority.rank
            if a.priority == b.priority:
                # dated before undated
                assert not (a.date is None and b.date is not None)
                if a.date and b.date:
                    assert a.date <= b.date
                if a.date is None and b.date is None:
                    assert a.created_at >= b.created_at


def test_visible_tasks_uses_local_date_of_now() -> None:
    tasks = [make_task("today", priority=Priority.LOW, date=TODAY), make_task("other")]
    assert [t.id for t in visible_tasks(tasks, focus_mode=True, now=NOW)] == ["today"]
    assert len(visible_tasks(tasks, focus_mode=False, now=NOW)) == 2
