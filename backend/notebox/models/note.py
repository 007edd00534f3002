"""
Notebox Backend - Note Domain Type
====================================

What:  The `Note` record as the rest of the application sees it.
How:   A plain dataclass. Column layout lives in repositories/tables.py and
       the two are joined only by the explicit mapping functions there.

Invariants:
    - id never changes after creation
    - created_at == updated_at when the note is created
    - every update moves updated_at strictly forward
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

# Smallest step a timestamp can advance by in PostgreSQL and in Python
TIMESTAMP_RESOLUTION = timedelta(microseconds=1)


@dataclass
class Note:
    id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite returns them without tzinfo)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def next_updated_at(previous: datetime) -> datetime:
    """
    Timestamp for an update of a note last touched at `previous`.

    Two writes inside the same clock tick would otherwise share a timestamp,
    so the result is bumped to at least one microsecond past `previous`.
    """
    now = utcnow()
    floor = ensure_utc(previous) + TIMESTAMP_RESOLUTION
    return now if now >= floor else floor
