from datetime import date

import pytest

from src.attendance_engine.attendance_engine.attendance.model import CanonicalDayRecord, HoursResult
from src.attendance_engine.attendance_engine.core.enums import (
    HoursNote,
    PayrollStatus,
    Provenance,
    Remark,
    SalaryType,
    WorkLocation,
)
from src.attendance_engine.attendance_engine.core.exceptions import MissingRateConfiguration
from src.attendance_engine.attendance_engine.core.policy import PolicyConfig
from src.attendance_engine.attendance_engine.leave.model import LeaveOrHolidayEntry
from src.attendance_engine.attendance_engine.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.attendance_engine.attendance_engine.payroll.model import PayProfile
from src.attendance_engine.attendance_engine.summary.aggregator import MonthlyAggregator


def _rec(day, total, regular, overtime, *, remark=Remark.MATCHED, discrepancy=None):
    return CanonicalDayRecord(
        employee_id="E1",
        work_date=date(2024, 5, day),
        in_minutes=540,
        out_minutes=1020,
        provenance=Provenance.BOTH,
        remark=remark,
        hours=HoursResult(total, regular, overtime, HoursNote.OK),
        discrepancy_minutes=discrepancy,
        work_location=WorkLocation.OFFICE,
    )


def _summary(records, leaves=()):
    return MonthlyAggregator().aggregate_month("E1", 2024, 5, records, leaves)


def _full_month():
    # 20 days x 8h regular, 5 of them with 2h overtime -> 160 regular, 10 overtime
    return [_rec(d, 10.0, 8.0, 2.0) if d <= 5 else _rec(d, 8.0, 8.0, 0.0) for d in range(1, 21)]


def test_monthly_salary_rate_and_total():
    calc = StandardPayrollCalculator(PolicyConfig())
    summary = _summary(_full_month())

    p = calc.compute_payroll(summary, PayProfile("E1", SalaryType.MONTHLY, monthly_salary=24800))

    assert p.hourly_rate == pytest.approx(100.0)
    assert p.overtime_rate == pytest.approx(150.0)
    assert p.daily_rate == pytest.approx(800.0)
    assert p.regular_hours == pytest.approx(160.0)
    assert p.overtime_hours == pytest.approx(10.0)
    assert p.regular_earnings == pytest.approx(16000.0)
    assert p.overtime_earnings == pytest.approx(1500.0)
    assert p.total_earnings == pytest.approx(17500.0)
    assert p.status == PayrollStatus.PROCESSED
    assert sum(d.earnings for d in p.daily_earnings) == pytest.approx(p.total_earnings)


@pytest.mark.parametrize(
    "profile,hourly",
    [
        (PayProfile("E1", SalaryType.HOURLY, hourly_rate=120), 120.0),
        (PayProfile("E1", SalaryType.DAILY, daily_rate=1000), 125.0),
        (PayProfile("E1", SalaryType.HOURLY, hourly_rate=90, monthly_salary=99999), 90.0),
    ],
)
def test_rate_resolution_order(profile, hourly):
    p = StandardPayrollCalculator().compute_payroll(_summary([_rec(2, 8.0, 8.0, 0.0)]), profile)
    assert p.hourly_rate == pytest.approx(hourly)
    assert p.total_earnings == pytest.approx(hourly * 8)


def test_rate_is_not_rounded_before_multiplying():
    # 25000 / 31 / 8 = 100.806451...
    p = StandardPayrollCalculator().compute_payroll(
        _summary(_full_month()), PayProfile("E1", SalaryType.MONTHLY, monthly_salary=25000)
    )
    assert p.hourly_rate == pytest.approx(100.81)
    assert p.regular_earnings == pytest.approx(16129.03)


def test_missing_rate_configuration():
    with pytest.raises(MissingRateConfiguration) as exc:
        StandardPayrollCalculator().compute_payroll(_summary([]), PayProfile("E1", SalaryType.MONTHLY))
    assert exc.value.employee_id == "E1"


def test_discrepancy_marks_needs_review():
    summary = _summary([_rec(2, 8.0, 8.0, 0.0, remark=Remark.MISMATCH, discrepancy=30)])
    p = StandardPayrollCalculator().compute_payroll(summary, PayProfile("E1", SalaryType.HOURLY, hourly_rate=100))
    assert p.status == PayrollStatus.NEEDS_REVIEW
    assert p.discrepancy_count == 1


def test_paid_leave_is_in_regular_hours_not_double_counted():
    leaves = [LeaveOrHolidayEntry(date(2024, 5, 1), 8.0, True, "Public Holiday")]
    summary = _summary([_rec(2, 8.0, 8.0, 0.0)], leaves)

    p = StandardPayrollCalculator().compute_payroll(summary, PayProfile("E1", SalaryType.HOURLY, hourly_rate=100))

    assert p.regular_hours == pytest.approx(16.0)
    assert p.leave_earnings == pytest.approx(800.0)
    assert p.total_earnings == pytest.approx(1600.0)
    assert [d.kind for d in p.daily_earnings] == ["leave", "worked"]


def test_profile_for_other_employee_rejected():
    with pytest.raises(ValueError):
        StandardPayrollCalculator().compute_payroll(
            _summary([]), PayProfile("E2", SalaryType.HOURLY, hourly_rate=100)
        )
