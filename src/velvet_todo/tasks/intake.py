# src/velvet_todo/tasks/intake.py

"""
AI intake: free-form text -> task candidates -> Task records.

One LLM call per submission. Any failure (transport, bad JSON, wrong shape)
is reported as IntakeError and nothing is stored.
"""

from __future__ import annotations

import json
import logging
import re
import uuid
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

from ..core.dates import local_now, now_ms
from ..core.ports import LLMClient
from .task_models import AITaskCandidate, Priority, Task, clean_value

logger = logging.getLogger(__name__)

TASK_EXTRACTION_SYSTEM_PROMPT = """
You are a task extraction module for a personal to-do list.

You do NOT chat with the user.

Read the user's free-form text and split it into individual, actionable tasks.

For each task return:
- title: short imperative phrase (max ~8 words)
- description: one sentence with useful details from the text, or null
- priority: one of "HIGH", "MEDIUM", "LOW"
  (deadlines, urgency words or consequences -> HIGH; "someday", "maybe" -> LOW; otherwise MEDIUM)
- date: "YYYY-MM-DD" if the text implies a day, else null
- time: "HH:MM" (24-hour) if the text implies a clock time, else null

Resolve relative dates ("today", "tomorrow", "next Friday") against:
  Current local date: {today} ({weekday})
  Current local time: {clock}

Do not invent dates or times that the text does not imply.

Output format:
Return STRICT JSON only. No extra text. No Markdown.
{{ "tasks": [ {{ "title": "...", "description": null, "priority": "MEDIUM", "date": null, "time": null }} ] }}

If the text contains no tasks, return:
{{ "tasks": [] }}
""".strip()

TASK_RESPONSE_FORMAT: dict[str, Any] = {
    "type": "json_schema",
    "json_schema": {
        "name": "task_list",
        "strict": True,
        "schema": {
            "type": "object",
            "properties": {
                "tasks": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "title": {"type": "string"},
                            "description": {"type": ["string", "null"]},
                            "priority": {"type": "string", "enum": ["HIGH", "MEDIUM", "LOW"]},
                            "date": {"type": ["string", "null"]},
                            "time": {"type": ["string", "null"]},
                        },
                        "required": ["title", "description", "priority", "date", "time"],
                        "additionalProperties": False,
                    },
                }
            },
            "required": ["tasks"],
            "additionalProperties": False,
        },
    },
}

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


class IntakeError(RuntimeError):
    """The AI service could not turn the input into task candidates."""


class IntakeBusyError(IntakeError):
    """A previous submission is still being processed."""


def build_system_prompt(now: datetime | None = None) -> str:
    now = now or local_now()
    return TASK_EXTRACTION_SYSTEM_PROMPT.format(
        today=now.strftime("%Y-%m-%d"),
        weekday=now.strftime("%A"),
        clock=now.strftime("%H:%M"),
    )


def _load_json_payload(raw: str) -> Any:
    """
    Parse model output as JSON.

    Tolerates markdown fences and prose around a single JSON object/array.
    """
    text = (raw or "").strip()
    m = _FENCE_RE.match(text)
    if m:
        text = m.group(1).strip()

    try:
        return json.loads(text)
    except ValueError:
        pass

    starts = [i for i in (text.find("{"), text.find("[")) if i != -1]
    if not starts:
        raise IntakeError("LLM response contains no JSON.")
    first = min(starts)
    closer = "}" if text[first] == "{" else "]"
    last = text.rfind(closer)
    if last <= first:
        raise IntakeError("LLM response contains no complete JSON value.")

    try:
        return json.loads(text[first : last + 1])
    except ValueError as e:
        raise IntakeError("LLM response is not valid JSON.") from e


def parse_candidates(raw: str) -> list[AITaskCandidate]:
    """
    Turn the raw completion text into candidates.

    Accepts {"tasks": [...]} or a bare [...] array. Items without a usable
    title are dropped with a warning.
    """
    payload = _load_json_payload(raw)

    if isinstance(payload, dict):
        items = payload.get("tasks")
    else:
        items = payload

    if not isinstance(items, list):
        raise IntakeError("LLM response has no task array.")

    out: list[AITaskCandidate] = []
    for i, item in enumerate(items):
        cand = AITaskCandidate.from_raw(item)
        if cand is None:
            logger.warning("Dropping task candidate #%d without a usable title: %r", i, item)
            continue
        out.append(cand)
    return out


def request_candidates(llm: LLMClient, text: str, *, now: datetime | None = None) -> list[AITaskCandidate]:
    """Invoke the LLM once. Raises IntakeError on any failure."""
    try:
        raw = llm.complete(
            [{"role": "user", "content": text}],
            build_system_prompt(now),
            response_format=TASK_RESPONSE_FORMAT,
        )
    except Exception as e:
        raise IntakeError(str(e) or "LLM request failed.") from e

    candidates = parse_candidates(raw)
    logger.info("Intake: %d candidate(s) from %d chars of input", len(candidates), len(text))
    return candidates


def candidate_to_task(
    candidate: AITaskCandidate,
    *,
    created_at: int,
    id_factory: Callable[[], str] | None = None,
) -> Task:
    make_id = id_factory or (lambda: str(uuid.uuid4()))
    return Task(
        id=make_id(),
        title=candidate.title,
        description=clean_value(candidate.description),
        priority=Priority.from_raw(candidate.priority),
        date=clean_value(candidate.date),
        time=clean_value(candidate.time),
        is_completed=False,
        created_at=created_at,
    )


def candidates_to_tasks(
    candidates: Iterable[AITaskCandidate],
    *,
    now: datetime | None = None,
    id_factory: Callable[[], str] | None = None,
) -> list[Task]:
    created_at = now_ms(now)
    return [candidate_to_task(c, created_at=created_at, id_factory=id_factory) for c in candidates]
