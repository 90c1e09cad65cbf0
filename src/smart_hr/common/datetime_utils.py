from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from ..core.constants import DB_TIMESTAMP_FORMAT

DateLike = Union[date, datetime]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def range_start(value: Optional[DateLike]) -> Optional[datetime]:
    """Lower bound (inclusive). A bare date means midnight of that day."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def range_end_exclusive(value: Optional[DateLike]) -> Optional[datetime]:
    """Upper bound (exclusive): midnight after the calendar day of ``value``.

    None (unbounded) when that day is ``date.max``.
    """
    if value is None:
        return None
    day = value.date() if isinstance(value, datetime) else value
    if day >= date.max:
        return None
    return datetime.combine(day + timedelta(days=1), time.min)


def to_db_timestamp(value: datetime) -> str:
    # Fixed width so that TEXT comparison in SQLite is chronological.
    return value.strftime(DB_TIMESTAMP_FORMAT)


def from_db_timestamp(value) -> Optional[datetime]:
    """Normalize stored timestamps.

    Rows written by this package use ``DB_TIMESTAMP_FORMAT``; hand-edited rows
    may lack the fractional part or use a ``T`` separator.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, bytes):
        value = value.decode("utf-8")
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip())
    raise TypeError(f"Unsupported timestamp value type: {type(value)!r}")
