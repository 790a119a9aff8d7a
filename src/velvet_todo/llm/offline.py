# src/velvet_todo/llm/offline.py

from __future__ import annotations

import json
from typing import Any

from ..core.ports import ChatMessage


class OfflineLLMClient:
    """
    Offline deterministic LLM client used for demos when no external API is configured.

    Behavior:
    - Task parser prompts -> one MEDIUM task per non-empty input line, no date/time
    - Anything else -> {"tasks": []}
    """

    def complete(
        self,
        messages: list[ChatMessage],
        system_prompt: str,
        *,
        response_format: dict[str, Any] | None = None,
    ) -> str:
        sp = (system_prompt or "").lower()
        if "task extraction" not in sp:
            return json.dumps({"tasks": []})

        user_text = ""
        for m in reversed(messages):
            if m["role"] == "user":
                user_text = m["content"]
                break

        tasks = [
            {
                "title": line.strip(),
                "description": "Added in offline demo mode (no LLM configured).",
                "priority": "MEDIUM",
                "date": None,
                "time": None,
            }
            for line in user_text.splitlines()
            if line.strip()
        ]
        return json.dumps({"tasks": tasks}, ensure_ascii=False)
