from __future__ import annotations

from typing import Optional

from ..common.validators import require_non_empty, require_positive_amount
from ..core.enums import SalaryType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import PayProfile
from .repository import PayProfileRepository


class MySQLPayProfileRepository(PayProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee(self, employee_id: str) -> Optional[PayProfile]:
        employee_id = require_non_empty(employee_id, "employee_id")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, salary_type, monthly_salary, daily_rate, hourly_rate
                FROM pay_profiles
                WHERE employee_id=%s
                """,
                (employee_id,),
            )
            r = fetchone(cur)
        if not r:
            return None
        return PayProfile(
            employee_id=str(r["employee_id"]),
            salary_type=SalaryType(r["salary_type"]),
            monthly_salary=require_positive_amount(r.get("monthly_salary"), "monthly_salary"),
            daily_rate=require_positive_amount(r.get("daily_rate"), "daily_rate"),
            hourly_rate=require_positive_amount(r.get("hourly_rate"), "hourly_rate"),
        )
