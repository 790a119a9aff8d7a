# src/velvet_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage/LLM providers/link openers swappable and makes testing easier.
"""

from typing import Any, Protocol

ChatMessage = dict[str, str]
# OpenAI-style chat messages: {"role": "...", "content": "..."}.


class LLMClient(Protocol):
    """Single-shot chat completion client (OpenAI/OpenRouter-compatible)."""

    def complete(
        self,
        messages: list[ChatMessage],
        system_prompt: str,
        *,
        response_format: dict[str, Any] | None = None,
    ) -> str: ...


class KeyValueRepo(Protocol):
    """localStorage-like string store."""

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class LinkOpener(Protocol):
    """Outbound side effect for calendar sync: open (or show) one URL."""

    def open(self, url: str) -> None: ...
