# tests/test_task_store.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from velvet_todo.storage.kv_store import KeyValueStore
from velvet_todo.tasks.task_models import Priority
from velvet_todo.tasks.task_store import TaskStore

from .conftest import make_task
from .fakes import FailingWriteStore, MemoryKeyValueStore


def test_kv_store_roundtrip(tmp_path: Path) -> None:
    kv = KeyValueStore(tmp_path / "kv.sqlite3")
    assert kv.get_item("k") is None

    kv.set_item("k", "v1")
    kv.set_item("k", "v2")
    assert kv.get_item("k") == "v2"

    kv.remove_item("k")
    assert kv.get_item("k") is None


def test_load_normalizes_sentinels() -> None:
    kv = MemoryKeyValueStore()
    kv.set_item(
        "velvet-tasks",
        json.dumps(
            [
                {
                    "id": "1",
                    "title": "Legacy",
                    "description": "",
                    "date": "null",
                    "time": "undefined",
                    "priority": "HIGH",
                    "isCompleted": False,
                    "createdAt": 10,
                }
            ]
        ),
    )

    store = TaskStore(kv)
    [task] = store.list_tasks()
    assert task.description is None
    assert task.date is None
    assert task.time is None
    assert task.priority is Priority.HIGH


@pytest.mark.parametrize("payload", ["{not json", '{"tasks": []}', "42"])
def test_load_failure_degrades_to_empty(payload: str, caplog) -> None:
    kv = MemoryKeyValueStore(items={"velvet-tasks": payload})
    store = TaskStore(kv)
    assert store.list_tasks() == []
    assert any(r.levelname == "ERROR" for r in caplog.records)


def test_load_storage_error_degrades_to_empty() -> None:
    store = TaskStore(MemoryKeyValueStore(fail_reads=True))
    assert store.count_tasks() == 0


def test_load_skips_non_object_entries() -> None:
    kv = MemoryKeyValueStore(
        items={"velvet-tasks": json.dumps(["junk", {"id": "ok", "title": "Keep", "priority": "LOW"}])}
    )
    store = TaskStore(kv)
    assert [t.id for t in store.list_tasks()] == ["ok"]


def test_add_prepends_batch_and_persists(tmp_path: Path) -> None:
    db = tmp_path / "storage.sqlite3"
    store = TaskStore(KeyValueStore(db))

    store.add_tasks([make_task("old")])
    store.add_tasks([make_task("new1"), make_task("new2")])
    assert [t.id for t in store.list_tasks()] == ["new1", "new2", "old"]

    reloaded = TaskStore(KeyValueStore(db))
    assert [t.id for t in reloaded.list_tasks()] == ["new1", "new2", "old"]


def test_add_rejects_duplicate_ids() -> None:
    store = TaskStore(MemoryKeyValueStore())
    store.add_tasks([make_task("a")])
    with pytest.raises(ValueError):
        store.add_tasks([make_task("a")])
    assert store.count_tasks() == 1


def test_toggle_and_delete_persist() -> None:
    kv = MemoryKeyValueStore()
    store = TaskStore(kv)
    store.add_tasks([make_task("a"), make_task("b")])

    toggled = store.toggle_task("a")
    assert toggled is not None and toggled.is_completed
    assert json.loads(kv.items["velvet-tasks"])[0]["isCompleted"] is True

    assert store.toggle_task("a").is_completed is False
    assert store.toggle_task("missing") is None

    assert store.delete_task("b") is True
    assert store.delete_task("b") is False
    assert [t["id"] for t in json.loads(kv.items["velvet-tasks"])] == ["a"]


def test_load_skips_missing_empty_and_duplicate_ids(caplog) -> None:
    stored = [
        {"title": "No id", "priority": "LOW"},
        {"id": "", "title": "Empty id", "priority": "LOW"},
        {"id": "a", "title": "First", "priority": "HIGH"},
        {"id": "a", "title": "Second", "priority": "LOW"},
        {"id": "b", "title": "Other", "priority": "MEDIUM"},
    ]
    store = TaskStore(MemoryKeyValueStore(items={"velvet-tasks": json.dumps(stored)}))

    assert [(t.id, t.title) for t in store.list_tasks()] == [("a", "First"), ("b", "Other")]
    assert sum(r.levelname == "WARNING" for r in caplog.records) == 3


def test_failed_write_leaves_memory_unchanged() -> None:
    kv = FailingWriteStore(items={"velvet-tasks": json.dumps([make_task("a").to_dict()])})
    store = TaskStore(kv)

    with pytest.raises(OSError):
        store.add_tasks([make_task("b")])
    assert [t.id for t in store.list_tasks()] == ["a"]

    with pytest.raises(OSError):
        store.toggle_task("a")
    assert store.get_task("a").is_completed is False

    with pytest.raises(OSError):
        store.delete_task("a")
    assert [t.id for t in store.list_tasks()] == ["a"]
