# src/velvet_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (LLM/storage/link opener).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import LinkOpener, LLMClient
from ..core.state import AppState
from ..llm.client import OpenRouterLLMClient, friendly_llm_error_message
from ..llm.offline import OfflineLLMClient
from ..storage.kv_store import KeyValueStore
from ..tasks.calendar_sync import BrowserLinkOpener, PrintLinkOpener
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    llm_client: LLMClient
    try:
        llm_client = OpenRouterLLMClient(settings)
    except RuntimeError as e:
        # Fallback for demos / local runs without external services.
        logger.warning("%s Using offline demo client.", friendly_llm_error_message(e))
        llm_client = OfflineLLMClient()

    link_opener: LinkOpener
    if getattr(settings, "open_links", True):
        link_opener = BrowserLinkOpener()
    else:
        link_opener = PrintLinkOpener()

    storage = KeyValueStore(settings.tasks_db_path)

    return AppState(
        settings=settings,
        llm=llm_client,
        task_store=TaskStore(storage, key=settings.storage_key),
        link_opener=link_opener,
    )
