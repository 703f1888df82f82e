from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .attendance.calculator.standard_calculator import StandardHoursCalculator
from .attendance.mysql_attendance_repository import MySQLDayRecordRepository, MySQLPunchEventRepository
from .attendance.reconciler import PunchReconciler
from .attendance.service import AttendanceService
from .core.policy import PolicyConfig
from .database.connection import DBConfig, DatabaseConnection
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_pay_profile_repository import MySQLPayProfileRepository
from .payroll.service import PayrollService
from .summary.aggregator import MonthlyAggregator


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    policy: PolicyConfig

    events_repo: MySQLPunchEventRepository
    records_repo: MySQLDayRecordRepository
    leave_repo: MySQLLeaveRepository
    profiles_repo: MySQLPayProfileRepository

    attendance_service: AttendanceService
    payroll_service: PayrollService


def build_container(settings: Any) -> Container:
    policy = PolicyConfig.from_settings(settings)
    conn = DatabaseConnection(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))

    events_repo = MySQLPunchEventRepository(conn)
    records_repo = MySQLDayRecordRepository(conn)
    leave_repo = MySQLLeaveRepository(conn)
    profiles_repo = MySQLPayProfileRepository(conn)

    attendance_service = AttendanceService(
        events_repo,
        records_repo,
        policy=policy,
        reconciler=PunchReconciler(policy, hours_calculator=StandardHoursCalculator(policy)),
    )
    payroll_service = PayrollService(
        records_repo,
        leave_repo,
        profiles_repo,
        policy=policy,
        aggregator=MonthlyAggregator(policy),
        calculator=StandardPayrollCalculator(policy),
    )

    return Container(
        conn=conn,
        policy=policy,
        events_repo=events_repo,
        records_repo=records_repo,
        leave_repo=leave_repo,
        profiles_repo=profiles_repo,
        attendance_service=attendance_service,
        payroll_service=payroll_service,
    )
