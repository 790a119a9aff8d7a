# src/velvet_todo/tasks/calendar_sync.py

"""
"Sync" of tasks into Google Calendar via event-creation (TEMPLATE) links.

Nothing is written to the calendar directly: we open one prefilled link per task
and the user confirms in the browser.
"""

from __future__ import annotations

import logging
import re
import webbrowser
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from urllib.parse import quote

from ..core.dates import local_date_string
from ..core.ports import LinkOpener
from .task_models import Task

logger = logging.getLogger(__name__)

CALENDAR_TEMPLATE_URL = "https://calendar.google.com/calendar/render"
DEFAULT_SYNC_LIMIT = 3
NO_TASKS_NOTICE = "No pending tasks with dates/times found to sync."

# encodeURIComponent leaves these unescaped.
_URI_COMPONENT_SAFE = "-_.!~*'()"
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


class BrowserLinkOpener:
    """Open links in the user's default browser (new tab)."""

    def open(self, url: str) -> None:
        webbrowser.open_new_tab(url)


@dataclass(slots=True)
class PrintLinkOpener:
    """Headless fallback: collect/print links instead of opening them."""

    emit: Callable[[str], None] = print
    opened: list[str] = field(default_factory=list)

    def open(self, url: str) -> None:
        self.opened.append(url)
        self.emit(url)


@dataclass(slots=True, frozen=True)
class SyncResult:
    synced: list[Task]
    urls: list[str]
    notice: str | None = None


def encode_uri_component(text: str) -> str:
    return quote(text, safe=_URI_COMPONENT_SAFE)


def select_syncable(sorted_tasks: Iterable[Task], limit: int = DEFAULT_SYNC_LIMIT) -> list[Task]:
    """First `limit` incomplete tasks that carry a date or a time (input order kept)."""
    out: list[Task] = []
    for t in sorted_tasks:
        if len(out) >= limit:
            break
        if not t.is_completed and (t.date or t.time):
            out.append(t)
    return out


def event_dates(task: Task, today: str) -> str:
    """
    Value of the `dates` query parameter.

    - no time: all-day on task.date (or today)
    - time: one-hour window; the end hour wraps at 24 but the end date is
      the start date (an event at 23:30 ends "00:30" on the same day)
    """
    start_date = (task.date or today).replace("-", "")
    all_day = f"{start_date}/{start_date}"

    if not task.time:
        return all_day

    m = _TIME_RE.match(task.time.strip())
    if not m:
        logger.warning("Task %s has unparseable time %r; syncing as all-day.", task.id, task.time)
        return all_day

    hh, mm = int(m.group(1)), int(m.group(2))
    if hh > 23 or mm > 59:
        logger.warning("Task %s has out-of-range time %r; syncing as all-day.", task.id, task.time)
        return all_day

    end_hh = (hh + 1) % 24
    start = f"{start_date}T{hh:02d}{mm:02d}00"
    end = f"{start_date}T{end_hh:02d}{mm:02d}00"
    return f"{start}/{end}"


def build_calendar_url(task: Task, today: str) -> str:
    title = encode_uri_component(task.title)
    details = encode_uri_component(task.description or "")
    dates = event_dates(task, today)
    return f"{CALENDAR_TEMPLATE_URL}?action=TEMPLATE&text={title}&details={details}&dates={dates}"


def sync_to_calendar(
    sorted_tasks: Iterable[Task],
    opener: LinkOpener,
    *,
    limit: int = DEFAULT_SYNC_LIMIT,
    now: datetime | None = None,
) -> SyncResult:
    """
    Open one calendar link per eligible task.

    `sorted_tasks` must already be the view order; selection takes the top `limit`.
    """
    syncable = select_syncable(sorted_tasks, limit)
    if not syncable:
        logger.info("Calendar sync: nothing to sync.")
        return SyncResult(synced=[], urls=[], notice=NO_TASKS_NOTICE)

    today = local_date_string(now)
    urls: list[str] = []
    for task in syncable:
        url = build_calendar_url(task, today)
        opener.open(url)
        urls.append(url)
        logger.debug("Calendar sync: opened link for task %s", task.id)

    logger.info("Calendar sync: %d link(s) opened.", len(urls))
    return SyncResult(synced=syncable, urls=urls)
