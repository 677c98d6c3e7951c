from __future__ import annotations

import calendar
from datetime import date, datetime, time
from typing import Iterator, Union

from ..core.constants import NULL_TIMESTAMP, TIMESTAMP_FORMAT

DateLike = Union[date, datetime]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time truncated to whole seconds.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().replace(microsecond=0)


def as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def start_of_day(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def end_of_day(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.max)


def format_timestamp(value: datetime | None) -> str:
    if value is None:
        return NULL_TIMESTAMP
    return value.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime | None:
    value = value.strip()
    if value == NULL_TIMESTAMP:
        return None
    return datetime.strptime(value, TIMESTAMP_FORMAT)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def first_of_month(value: DateLike) -> date:
    value = as_date(value)
    return value.replace(day=1)


def last_of_month(value: DateLike) -> date:
    value = as_date(value)
    return value.replace(day=days_in_month(value.year, value.month))


def iter_month_starts(start: date, end: date) -> Iterator[date]:
    """Yield the first day of every calendar month touched by [start, end]."""
    cursor = first_of_month(start)
    last = first_of_month(end)
    while cursor <= last:
        yield cursor
        if cursor.month == 12:
            cursor = cursor.replace(year=cursor.year + 1, month=1)
        else:
            cursor = cursor.replace(month=cursor.month + 1)
