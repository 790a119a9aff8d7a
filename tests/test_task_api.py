# tests/test_task_api.py

from __future__ import annotations

import json

import pytest

from velvet_todo.tasks.intake import IntakeBusyError, IntakeError
from velvet_todo.tasks.task_api import add_tasks_from_text, current_view, resolve_task_ref, sync_calendar
from velvet_todo.tasks.task_models import Priority

from .conftest import NOW, TODAY, make_task


def test_add_tasks_from_text_prepends_and_clears_flag(state, llm) -> None:
    state.task_store.add_tasks([make_task("existing")])
    llm.next_text = json.dumps({"tasks": [{"title": "New one", "priority": "HIGH"}]})

    added = add_tasks_from_text(state, "new one asap", now=NOW)

    assert [t.title for t in added] == ["New one"]
    assert state.task_store.list_tasks()[0].title == "New one"
    assert state.is_processing is False


def test_failed_intake_discards_input(state, llm) -> None:
    llm.error = RuntimeError("boom")

    with pytest.raises(IntakeError):
        add_tasks_from_text(state, "something", now=NOW)

    assert state.task_store.count_tasks() == 0
    assert state.is_processing is False


def test_busy_flag_rejects_new_submissions(state, llm) -> None:
    state.is_processing = True
    with pytest.raises(IntakeBusyError):
        add_tasks_from_text(state, "another note", now=NOW)
    assert llm.calls == []


def test_blank_input_skips_llm(state, llm) -> None:
    assert add_tasks_from_text(state, "   ", now=NOW) == []
    assert llm.calls == []


def test_resolve_task_ref_by_position_and_id(state) -> None:
    state.task_store.add_tasks(
        [
            make_task("aaaa-1", priority=Priority.LOW),
            make_task("bbbb-2", priority=Priority.HIGH),
        ]
    )

    assert resolve_task_ref(state, "1", now=NOW).id == "bbbb-2"
    assert resolve_task_ref(state, "2", now=NOW).id == "aaaa-1"
    assert resolve_task_ref(state, "3", now=NOW) is None
    assert resolve_task_ref(state, "aaaa-1").id == "aaaa-1"
    assert resolve_task_ref(state, "bbbb").id == "bbbb-2"
    assert resolve_task_ref(state, "zzz") is None


def test_focus_mode_changes_view_and_sync_selection(state, opener) -> None:
    state.task_store.add_tasks(
        [
            make_task("today-low", priority=Priority.LOW, date=TODAY),
            make_task("med-dated", date="2026-10-25"),
        ]
    )

    state.focus_mode = True
    assert [t.id for t in current_view(state, now=NOW)] == ["today-low"]

    result = sync_calendar(state, now=NOW)
    assert [t.id for t in result.synced] == ["today-low"]
    assert len(opener.opened) == 1
