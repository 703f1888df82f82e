from datetime import date

import pytest

from src.attendance_engine.attendance_engine.core.exceptions import ValidationError
from src.attendance_engine.attendance_engine.common.validators import require_hours, require_positive_amount
from src.attendance_engine.attendance_engine.leave.holiday_calendar import effective_leave_days
from src.attendance_engine.attendance_engine.leave.model import LeaveOrHolidayEntry
from src.attendance_engine.attendance_engine.leave.repository import InMemoryLeaveRepository

START, END = date(2024, 5, 1), date(2024, 5, 31)


def test_employee_entry_overrides_global_same_day():
    entries = [
        LeaveOrHolidayEntry(date(2024, 5, 1), 8.0, True, "Public Holiday", name="Labour Day"),
        LeaveOrHolidayEntry(date(2024, 5, 1), 4.0, True, "Paid Leave", employee_id="E1"),
    ]
    days = effective_leave_days("E1", entries, start_date=START, end_date=END)

    assert days[date(2024, 5, 1)].type == "Paid Leave"
    assert effective_leave_days("E2", entries, start_date=START, end_date=END)[date(2024, 5, 1)].is_global


def test_unpaid_zero_hour_and_not_counted_entries_ignored():
    entries = [
        LeaveOrHolidayEntry(date(2024, 5, 2), 8.0, False, "Unpaid Leave", employee_id="E1"),
        LeaveOrHolidayEntry(date(2024, 5, 3), 0.0, True, "Paid Leave", employee_id="E1"),
        LeaveOrHolidayEntry(date(2024, 5, 6), 8.0, True, "Company Event", count_as_working=False),
        LeaveOrHolidayEntry(date(2024, 6, 1), 8.0, True, "Public Holiday"),
    ]
    assert effective_leave_days("E1", entries, start_date=START, end_date=END) == {}


def test_in_memory_repository_filters_range():
    repo = InMemoryLeaveRepository(
        [
            LeaveOrHolidayEntry(date(2024, 4, 30), 8.0, True, "Public Holiday"),
            LeaveOrHolidayEntry(date(2024, 5, 1), 8.0, True, "Public Holiday"),
        ]
    )
    assert [e.date for e in repo.list_entries(start_date=START, end_date=END)] == [date(2024, 5, 1)]


def test_validators():
    assert require_hours("7.5", "hours") == 7.5
    assert require_positive_amount(None, "hourly_rate") is None
    with pytest.raises(ValidationError):
        require_hours(25, "hours")
    with pytest.raises(ValidationError):
        require_positive_amount(0, "hourly_rate")
