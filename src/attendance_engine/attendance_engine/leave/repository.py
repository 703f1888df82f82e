from __future__ import annotations

from datetime import date
from typing import Iterable, Protocol, Sequence

from .model import LeaveOrHolidayEntry


class LeaveRepository(Protocol):
    def list_entries(self, *, start_date: date, end_date: date) -> Sequence[LeaveOrHolidayEntry]:
        """Both global and employee-specific entries in the range."""

        raise NotImplementedError


class InMemoryLeaveRepository(LeaveRepository):
    def __init__(self, entries: Iterable[LeaveOrHolidayEntry] = ()):
        self._entries = list(entries)

    def list_entries(self, *, start_date: date, end_date: date) -> Sequence[LeaveOrHolidayEntry]:
        items = [e for e in self._entries if start_date <= e.date <= end_date]
        items.sort(key=lambda e: (e.date, e.employee_id or ""))
        return items
