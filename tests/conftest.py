# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from velvet_todo.core.state import AppState
from velvet_todo.storage.kv_store import KeyValueStore
from velvet_todo.tasks.task_models import Priority, Task
from velvet_todo.tasks.task_store import TaskStore

from .fakes import FakeLLMClient, RecordingLinkOpener

NOW = datetime(2026, 10, 19, 14, 30)
TODAY = "2026-10-19"


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="VelvetTodo",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "storage.sqlite3",
        storage_key="velvet-tasks",
        sync_limit=3,
        open_links=False,
    )


@pytest.fixture()
def llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture()
def opener() -> RecordingLinkOpener:
    return RecordingLinkOpener()


@pytest.fixture()
def state(settings: SimpleNamespace, llm: FakeLLMClient, opener: RecordingLinkOpener) -> AppState:
    """
    AppState wired with deterministic fakes.

    NOTE: the key/value store is real SQLite (in tmp_path) because persistence
    is part of what we want to test.
    """
    return AppState(
        settings=settings,
        llm=llm,
        task_store=TaskStore(KeyValueStore(settings.tasks_db_path), key=settings.storage_key),
        link_opener=opener,
    )


def make_task(
    task_id: str,
    *,
    priority: Priority = Priority.MEDIUM,
    date: str | None = None,
    time: str | None = None,
    done: bool = False,
    created_at: int = 0,
    title: str | None = None,
    description: str | None = None,
) -> Task:
    return Task(
        id=task_id,
        title=title or f"task {task_id}",
        priority=priority,
        created_at=created_at,
        description=description,
        date=date,
        time=time,
        is_completed=done,
    )
