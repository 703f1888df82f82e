from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class LeaveOrHolidayEntry:
    """Nghỉ phép có lương hoặc ngày lễ; ``employee_id=None`` áp dụng cho toàn công ty."""

    date: date
    hours: float
    paid: bool
    type: str
    employee_id: Optional[str] = None
    count_as_working: bool = True
    name: Optional[str] = None

    @property
    def is_global(self) -> bool:
        return self.employee_id is None

    @property
    def counts_as_worked(self) -> bool:
        return self.paid and self.count_as_working and self.hours > 0
