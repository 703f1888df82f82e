from __future__ import annotations

from datetime import date
from typing import Sequence

from ..common.validators import require_hours
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import LeaveOrHolidayEntry
from .repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_entries(self, *, start_date: date, end_date: date) -> Sequence[LeaveOrHolidayEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, leave_date, hours, paid, count_as_working, leave_type, name
                FROM leave_entries
                WHERE leave_date BETWEEN %s AND %s
                ORDER BY leave_date ASC, employee_id ASC
                """,
                (start_date, end_date),
            )
            rows = fetchall(cur)

        return [
            LeaveOrHolidayEntry(
                date=r["leave_date"],
                hours=require_hours(r.get("hours"), "hours"),
                paid=bool(r.get("paid")),
                type=str(r.get("leave_type") or "Paid Leave"),
                employee_id=str(r["employee_id"]) if r.get("employee_id") else None,
                count_as_working=bool(r.get("count_as_working")),
                name=r.get("name"),
            )
            for r in rows
        ]
