# src/velvet_todo/tasks/task_api.py

from __future__ import annotations

import logging
from datetime import datetime

from ..core.state import AppState
from .calendar_sync import DEFAULT_SYNC_LIMIT, SyncResult, sync_to_calendar
from .intake import IntakeBusyError, candidates_to_tasks, request_candidates
from .task_models import Task
from .view_model import visible_tasks

logger = logging.getLogger(__name__)

INTAKE_FAILURE_NOTICE = "Something went wrong while consulting the oracle. Please try again."
INTAKE_BUSY_NOTICE = "Still working on your previous note. Please wait."


def add_tasks_from_text(state: AppState, text: str, *, now: datetime | None = None) -> list[Task]:
    """
    Parse free-form text with the LLM and prepend the resulting tasks.

    Raises IntakeError on failure (nothing is stored, the input is dropped) and
    IntakeBusyError while another submission is in flight.
    Whitespace-only input is ignored without calling the LLM.
    """
    if not text or not text.strip():
        return []

    if state.is_processing:
        raise IntakeBusyError(INTAKE_BUSY_NOTICE)

    state.is_processing = True
    try:
        candidates = request_candidates(state.llm, text, now=now)
        tasks = candidates_to_tasks(candidates, now=now)
        state.task_store.add_tasks(tasks)
        return tasks
    finally:
        state.is_processing = False


def current_view(state: AppState, *, now: datetime | None = None) -> list[Task]:
    return visible_tasks(state.task_store.list_tasks(), focus_mode=state.focus_mode, now=now)


def resolve_task_ref(state: AppState, ref: str, *, now: datetime | None = None) -> Task | None:
    """
    Resolve a user reference to a task.

    Accepts a 1-based position in the current view, a full id, or an id prefix
    (only if unambiguous).
    """
    ref = (ref or "").strip()
    if not ref:
        return None

    if ref.isdigit():
        view = current_view(state, now=now)
        idx = int(ref) - 1
        if 0 <= idx < len(view):
            return view[idx]
        return None

    exact = state.task_store.get_task(ref)
    if exact is not None:
        return exact

    matches = [t for t in state.task_store.list_tasks() if t.id.startswith(ref)]
    if len(matches) == 1:
        return matches[0]
    return None


def sync_calendar(state: AppState, *, now: datetime | None = None) -> SyncResult:
    limit = int(getattr(state.settings, "sync_limit", DEFAULT_SYNC_LIMIT) or DEFAULT_SYNC_LIMIT)
    return sync_to_calendar(current_view(state, now=now), state.link_opener, limit=limit, now=now)
