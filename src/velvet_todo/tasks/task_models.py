# src/velvet_todo/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

_SENTINELS = frozenset({"null", "undefined"})


def clean_value(val: Any) -> str | None:
    """
    Normalize an optional text field coming from storage or from the LLM.

    None, empty/whitespace-only strings and the literal "null"/"undefined"
    all mean "absent". Anything else is kept as-is (not stripped).
    """
    if val is None:
        return None
    if not isinstance(val, str):
        val = str(val)
    if not val or val in _SENTINELS:
        return None
    if val.strip() == "":
        return None
    return val


class Priority(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        """Sort rank: HIGH first."""
        return _PRIORITY_RANK[self]

    @classmethod
    def from_raw(cls, raw: Any) -> Priority:
        """Case-insensitive mapping; anything unrecognized becomes MEDIUM."""
        if not isinstance(raw, str):
            return cls.MEDIUM
        upper = raw.strip().upper()
        if upper == "HIGH":
            return cls.HIGH
        if upper == "LOW":
            return cls.LOW
        return cls.MEDIUM


_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


@dataclass(slots=True)
class Task:
    id: str
    title: str
    priority: Priority
    created_at: int  # epoch milliseconds

    description: str | None = None
    date: str | None = None  # YYYY-MM-DD
    time: str | None = None  # HH:MM, 24h
    is_completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialized (storage) form. Absent optional fields are omitted."""
        out: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "priority": self.priority.value,
            "isCompleted": self.is_completed,
            "createdAt": self.created_at,
        }
        if self.description is not None:
            out["description"] = self.description
        if self.date is not None:
            out["date"] = self.date
        if self.time is not None:
            out["time"] = self.time
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """
        Build a Task from a stored record.

        Legacy records may carry "null"/"undefined"/"" in optional fields;
        those are normalized to None.
        """
        raw_created = data.get("createdAt", 0)
        try:
            created_at = int(raw_created)
        except (TypeError, ValueError):
            created_at = 0

        return cls(
            id=str(data.get("id") or ""),
            title=str(data.get("title") or ""),
            priority=Priority.from_raw(data.get("priority")),
            created_at=created_at,
            description=clean_value(data.get("description")),
            date=clean_value(data.get("date")),
            time=clean_value(data.get("time")),
            is_completed=bool(data.get("isCompleted", False)),
        )


@dataclass(slots=True)
class AITaskCandidate:
    """Untrusted record returned by the LLM, before normalization into a Task."""

    title: str
    description: str | None = None
    priority: str = ""
    date: str | None = None
    time: str | None = None

    @classmethod
    def from_raw(cls, raw: Any) -> AITaskCandidate | None:
        if not isinstance(raw, dict):
            return None
        title = clean_value(raw.get("title"))
        if title is None:
            return None
        return cls(
            title=title.strip(),
            description=raw.get("description") if isinstance(raw.get("description"), str) else None,
            priority=raw.get("priority") if isinstance(raw.get("priority"), str) else "",
            date=raw.get("date") if isinstance(raw.get("date"), str) else None,
            time=raw.get("time") if isinstance(raw.get("time"), str) else None,
        )
