# src/velvet_todo/tasks/view_model.py

"""
Display projection of the task list.

- focus filter: incomplete tasks that are HIGH priority or dated today
- sort: incomplete first, then HIGH > MEDIUM > LOW, then dated (by date string)
  before undated (newest first)
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from ..core.dates import local_date_string
from .task_models import Priority, Task


def is_focus_task(task: Task, today: str) -> bool:
    if task.is_completed:
        return False
    return task.priority == Priority.HIGH or task.date == today


def filter_tasks(tasks: Iterable[Task], *, focus_mode: bool, today: str | None = None) -> list[Task]:
    if not focus_mode:
        return list(tasks)
    today = today or local_date_string()
    return [t for t in tasks if is_focus_task(t, today)]


def _sort_key(task: Task) -> tuple[bool, int, int, str, int]:
    # Equal dates tie on the whole key, so the stable sort keeps store order.
    if task.date:
        return (task.is_completed, task.priority.rank, 0, task.date, 0)
    return (task.is_completed, task.priority.rank, 1, "", -task.created_at)


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    return sorted(tasks, key=_sort_key)


def visible_tasks(
    tasks: Iterable[Task],
    *,
    focus_mode: bool,
    now: datetime | None = None,
) -> list[Task]:
    """Filtered + sorted view, as shown to the user."""
    return sort_tasks(filter_tasks(tasks, focus_mode=focus_mode, today=local_date_string(now)))
