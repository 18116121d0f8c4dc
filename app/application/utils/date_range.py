from __future__ import annotations

import calendar
from collections.abc import Iterator
from datetime import date, timedelta


def in_window(day: date, start: date | None, end: date | None) -> bool:
    """Inclusive on both ends; a missing bound is open."""
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True


def iter_dates(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    days_in_month = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, days_in_month)
