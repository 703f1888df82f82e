from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Iterator

from ..core.constants import MINUTES_PER_DAY


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month."""
    if not 1 <= int(month) <= 12:
        raise ValueError(f"Invalid month: {month!r}")
    _, last_day = calendar.monthrange(int(year), int(month))
    return date(int(year), int(month), 1), date(int(year), int(month), last_day)


def iter_dates(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def format_minutes(minutes: int | None) -> str:
    """Render minutes since midnight as HH:MM ("-" when missing)."""
    if minutes is None:
        return "-"
    minutes = int(minutes) % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
