"""Ví dụ: chạy engine hoàn toàn trong bộ nhớ (không cần MySQL).

Minh hoạ luồng: punch thô -> bản ghi ngày -> tổng hợp tháng -> bảng lương.
"""

from datetime import date, time

from src.attendance_engine.attendance_engine.attendance.memory_repository import (
    InMemoryDayRecordRepository,
    InMemoryPunchEventRepository,
)
from src.attendance_engine.attendance_engine.attendance.model import PunchEvent
from src.attendance_engine.attendance_engine.attendance.service import AttendanceService
from src.attendance_engine.attendance_engine.core.enums import Direction, SalaryType, Source, WorkLocation
from src.attendance_engine.attendance_engine.core.policy import PolicyConfig
from src.attendance_engine.attendance_engine.leave.model import LeaveOrHolidayEntry
from src.attendance_engine.attendance_engine.leave.repository import InMemoryLeaveRepository
from src.attendance_engine.attendance_engine.payroll.model import PayProfile
from src.attendance_engine.attendance_engine.payroll.repository import InMemoryPayProfileRepository
from src.attendance_engine.attendance_engine.payroll.service import PayrollService
from src.attendance_engine.attendance_engine.timeparse.model import ExcelSerial, NativeTimestamp, StringTime


def main():
    policy = PolicyConfig()
    events = InMemoryPunchEventRepository(
        [
            PunchEvent("E001", date(2024, 5, 2), Direction.IN, Source.BIOMETRIC, NativeTimestamp(time(8, 55))),
            PunchEvent("E001", date(2024, 5, 2), Direction.IN, Source.SELF_REPORT, StringTime("9:00 AM"),
                       work_location=WorkLocation.OFFICE),
            PunchEvent("E001", date(2024, 5, 2), Direction.OUT, Source.SELF_REPORT, StringTime("18:10")),
            PunchEvent("E001", "2024-05-03", Direction.IN, Source.BIOMETRIC, ExcelSerial(0.375)),
            PunchEvent("E001", "2024-05-03", Direction.OUT, Source.BIOMETRIC, StringTime("17:30")),
        ]
    )
    records = InMemoryDayRecordRepository()

    attendance = AttendanceService(events, records, policy=policy)
    derived = attendance.derive_range(start_date=date(2024, 5, 1), end_date=date(2024, 5, 31))
    for r in derived.records:
        print(r.work_date, r.in_time, r.out_time, r.provenance.value, r.remark.value, r.hours.total_hours)

    leaves = InMemoryLeaveRepository([LeaveOrHolidayEntry(date(2024, 5, 1), 8.0, True, "Public Holiday")])
    profiles = InMemoryPayProfileRepository([PayProfile("E001", SalaryType.MONTHLY, monthly_salary=24800)])

    payroll = PayrollService(records, leaves, profiles, policy=policy)
    run = payroll.run_period(year=2024, month=5, employee_ids=["E001"])
    print(run.totals.to_dict())


if __name__ == "__main__":
    main()
