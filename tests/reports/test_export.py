import io
from datetime import date

from openpyxl import load_workbook

from src.attendance_engine.attendance_engine.attendance.memory_repository import InMemoryDayRecordRepository
from src.attendance_engine.attendance_engine.attendance.model import CanonicalDayRecord, HoursResult
from src.attendance_engine.attendance_engine.core.enums import HoursNote, Provenance, Remark, SalaryType
from src.attendance_engine.attendance_engine.leave.repository import InMemoryLeaveRepository
from src.attendance_engine.attendance_engine.payroll.model import PayProfile
from src.attendance_engine.attendance_engine.payroll.repository import InMemoryPayProfileRepository
from src.attendance_engine.attendance_engine.payroll.service import PayrollService
from src.attendance_engine.attendance_engine.reports.export import (
    DAILY_LOG_FIELDS,
    PAYROLL_FIELDS,
    build_daily_log_rows,
    build_payroll_rows,
    write_csv,
    write_xlsx,
)


def _run():
    records = [
        CanonicalDayRecord(
            employee_id="E1",
            work_date=date(2024, 5, 2),
            in_minutes=540,
            out_minutes=1080,
            provenance=Provenance.BOTH,
            remark=Remark.MISMATCH,
            hours=HoursResult(9.0, 8.0, 1.0, HoursNote.OK),
            discrepancy_minutes=35,
        ),
        CanonicalDayRecord(
            employee_id="E1",
            work_date=date(2024, 5, 3),
            in_minutes=None,
            out_minutes=None,
            provenance=Provenance.NONE,
            remark=Remark.INCOMPLETE_DATA,
        ),
    ]
    service = PayrollService(
        InMemoryDayRecordRepository(records),
        InMemoryLeaveRepository(),
        InMemoryPayProfileRepository([PayProfile("E1", SalaryType.HOURLY, hourly_rate=100)]),
    )
    return service.run_period(year=2024, month=5, employee_ids=["E1"])


def test_daily_log_rows():
    rows = build_daily_log_rows(_run())

    assert len(rows) == 2
    worked, absent = rows
    assert worked["in_time"] == "09:00"
    assert worked["out_time"] == "18:00"
    assert worked["status"] == "needs_review"
    assert worked["earnings"] == 950.0
    assert absent["in_time"] == "-"
    assert absent["earnings"] == 0.0


def test_csv_has_bom_and_header():
    data = write_csv(build_payroll_rows(_run()), PAYROLL_FIELDS)

    assert data.startswith(b"\xef\xbb\xbf")
    text = data.decode("utf-8-sig")
    header, row = text.splitlines()[:2]
    assert header.split(",") == PAYROLL_FIELDS
    assert row.startswith("E1,2024-05,HOURLY,")


def test_xlsx_sheets():
    wb = load_workbook(io.BytesIO(write_xlsx(_run())))

    assert wb.sheetnames == ["Attendance Logs", "Payroll", "Totals"]
    logs = wb["Attendance Logs"]
    assert [c.value for c in logs[1]] == DAILY_LOG_FIELDS
    assert logs.max_row == 3
    assert wb["Totals"]["E2"].value == 950
