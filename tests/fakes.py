# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from velvet_todo.core.ports import ChatMessage


class FakeLLMClient:
    """
    Deterministic LLM client for unit tests.

    - Captures calls for assertions
    - Returns a predefined text, or raises `error` if set
    """

    def __init__(self, next_text: str = '{"tasks": []}', error: Exception | None = None) -> None:
        self.next_text = next_text
        self.error = error
        self.calls: list[tuple[list[ChatMessage], str, dict[str, Any] | None]] = []

    def complete(
        self,
        messages: list[ChatMessage],
        system_prompt: str,
        *,
        response_format: dict[str, Any] | None = None,
    ) -> str:
        self.calls.append((messages, system_prompt, response_format))
        if self.error is not None:
            raise self.error
        return self.next_text


@dataclass(slots=True)
class RecordingLinkOpener:
    """LinkOpener that only records URLs."""

    opened: list[str] = field(default_factory=list)

    def open(self, url: str) -> None:
        self.opened.append(url)


@dataclass(slots=True)
class MemoryKeyValueStore:
    """In-memory KeyValueRepo; `fail_reads` simulates a broken backend."""

    items: dict[str, str] = field(default_factory=dict)
    fail_reads: bool = False

    def get_item(self, key: str) -> str | None:
        if self.fail_reads:
            raise OSError("storage unavailable")
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class FailingWriteStore(MemoryKeyValueStore):
    """KeyValueRepo whose writes always fail; reads still work."""

    def set_item(self, key: str, value: str) -> None:
        raise OSError("disk full")
