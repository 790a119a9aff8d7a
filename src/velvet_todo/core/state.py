# src/velvet_todo/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_store import TaskStore
from .ports import LinkOpener, LLMClient


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    llm: LLMClient
    task_store: TaskStore
    link_opener: LinkOpener

    focus_mode: bool = False
    # Gate for the single in-flight AI request.
    is_processing: bool = False
