from __future__ import annotations

from datetime import date
from typing import Iterable

from .model import LeaveOrHolidayEntry


def effective_leave_days(
    employee_id: str,
    entries: Iterable[LeaveOrHolidayEntry],
    *,
    start_date: date,
    end_date: date,
) -> dict[date, LeaveOrHolidayEntry]:
    """Paid, count-as-working entries that apply to one employee, one per date.

    An employee's own entry replaces a global holiday on the same date.
    """
    by_date: dict[date, LeaveOrHolidayEntry] = {}
    for entry in entries:
        if not start_date <= entry.date <= end_date:
            continue
        if entry.employee_id is not None and entry.employee_id != employee_id:
            continue
        if not entry.counts_as_worked:
            continue
        current = by_date.get(entry.date)
        if current is None or (current.is_global and not entry.is_global):
            by_date[entry.date] = entry
    return dict(sorted(by_date.items()))
