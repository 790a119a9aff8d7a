# src/velvet_todo/tasks/task_store.py

from __future__ import annotations

import json
import logging
from collections.abc import Iterable

from ..core.ports import KeyValueRepo
from .task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "velvet-tasks"


class TaskStore:
    """
    In-memory ordered task list mirrored to a single key/value entry.

    - load() runs once at construction; a broken entry degrades to an empty list.
    - every mutation rewrites the whole JSON array (save()).
    - newest batches are prepended, so list order is "most recently added first".
    """

    def __init__(self, storage: KeyValueRepo, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key
        self._tasks: list[Task] = self.load()
        logger.info("TaskStore ready key=%s total=%s", self._key, len(self._tasks))

    def load(self) -> list[Task]:
        """
        Read the persisted collection.

        Sentinel values ("null", "undefined", "") in optional fields are
        normalized away by Task.from_dict. Any parse/storage failure is logged
        and yields an empty list.
        """
        try:
            raw = self._storage.get_item(self._key)
        except Exception:
            logger.exception("Failed to read tasks from storage key=%s", self._key)
            return []

        if not raw:
            return []

        try:
            data = json.loads(raw)
        except ValueError:
            logger.exception("Failed to parse stored tasks key=%s", self._key)
            return []

        if not isinstance(data, list):
            logger.error("Stored tasks are not a JSON array (got %s); ignoring.", type(data).__name__)
            return []

        tasks: list[Task] = []
        seen: set[str] = set()
        for i, item in enumerate(data):
            if not isinstance(item, dict):
                logger.warning("Skipping stored task #%d: not an object.", i)
                continue
            task = Task.from_dict(item)
            if not task.id:
                logger.warning("Skipping stored task #%d: missing id.", i)
                continue
            if task.id in seen:
                logger.warning("Skipping stored task #%d: duplicate id %s.", i, task.id)
                continue
            seen.add(task.id)
            tasks.append(task)
        return tasks

    def save(self) -> None:
        self._write(self._tasks)

    def _write(self, tasks: list[Task]) -> None:
        payload = json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)
        self._storage.set_item(self._key, payload)
        logger.debug("Saved %d tasks key=%s", len(tasks), self._key)

    # ---- read API ----

    def list_tasks(self) -> list[Task]:
        """Snapshot of the list in store order."""
        return list(self._tasks)

    def get_task(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def count_tasks(self) -> int:
        return len(self._tasks)

    # ---- mutations ----

    def add_tasks(self, new_tasks: Iterable[Task]) -> list[Task]:
        """Prepend a batch (batch order preserved) and persist."""
        batch = list(new_tasks)
        if not batch:
            return []

        existing = {t.id for t in self._tasks}
        for t in batch:
            if t.id in existing:
                raise ValueError(f"duplicate task id: {t.id}")
            existing.add(t.id)

        updated = [*batch, *self._tasks]
        self._write(updated)
        self._tasks = updated
        logger.info("Added %d task(s); total=%d", len(batch), len(self._tasks))
        return batch

    def toggle_task(self, task_id: str) -> Task | None:
        """Flip is_completed. Returns the updated task, or None if the id is unknown."""
        task = self.get_task(task_id)
        if task is None:
            return None
        task.is_completed = not task.is_completed
        try:
            self.save()
        except Exception:
            task.is_completed = not task.is_completed
            raise
        logger.debug("Task %s completed=%s", task_id, task.is_completed)
        return task

    def delete_task(self, task_id: str) -> bool:
        remaining = [t for t in self._tasks if t.id != task_id]
        if len(remaining) == len(self._tasks):
            return False
        self._write(remaining)
        self._tasks = remaining
        logger.debug("Task %s deleted", task_id)
        return True
