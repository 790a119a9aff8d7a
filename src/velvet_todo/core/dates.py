# src/velvet_todo/core/dates.py

from __future__ import annotations

from datetime import datetime


def local_now() -> datetime:
    return datetime.now().astimezone()


def local_date_string(now: datetime | None = None) -> str:
    """Local calendar day as YYYY-MM-DD."""
    return (now or local_now()).strftime("%Y-%m-%d")


def now_ms(now: datetime | None = None) -> int:
    return int((now or local_now()).timestamp() * 1000)
