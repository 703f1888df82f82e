import json
from datetime import date

import pytest

from src.attendance_engine.attendance_engine.attendance.model import CanonicalDayRecord, HoursResult
from src.attendance_engine.attendance_engine.core.enums import (
    HoursNote,
    Provenance,
    QualityStatus,
    Remark,
    Severity,
    WorkLocation,
)
from src.attendance_engine.attendance_engine.core.policy import PolicyConfig
from src.attendance_engine.attendance_engine.leave.model import LeaveOrHolidayEntry
from src.attendance_engine.attendance_engine.summary.aggregator import MonthlyAggregator


def _rec(day, total=8.0, regular=8.0, overtime=0.0, *, provenance=Provenance.BOTH, remark=Remark.MATCHED,
         loc=WorkLocation.OFFICE, discrepancy=None, note=HoursNote.OK, emp="E1"):
    return CanonicalDayRecord(
        employee_id=emp,
        work_date=date(2024, 5, day),
        in_minutes=540 if provenance != Provenance.NONE else None,
        out_minutes=1020 if provenance != Provenance.NONE else None,
        provenance=provenance,
        remark=remark,
        hours=HoursResult(total, regular, overtime, note),
        in_diff_minutes=discrepancy,
        discrepancy_minutes=discrepancy,
        work_location=loc if provenance != Provenance.NONE else None,
    )


def _absent(day, emp="E1"):
    return _rec(day, 0.0, 0.0, 0.0, provenance=Provenance.NONE, remark=Remark.INCOMPLETE_DATA,
                note=HoursNote.MISSING_TIME_DATA, emp=emp)


def test_month_with_leave_and_wfh():
    records = [
        _rec(2),
        _rec(3, 10.0, 8.0, 2.0, loc=WorkLocation.WFH),
        _absent(6),
        _absent(7),
        _rec(2, emp="OTHER"),
    ]
    leaves = [
        LeaveOrHolidayEntry(date(2024, 5, 1), 8.0, True, "Public Holiday"),
        LeaveOrHolidayEntry(date(2024, 5, 6), 8.0, True, "Paid Leave", employee_id="E1"),
        LeaveOrHolidayEntry(date(2024, 5, 7), 8.0, True, "Paid Leave", employee_id="E2"),
        LeaveOrHolidayEntry(date(2024, 5, 8), 8.0, False, "Unpaid Leave", employee_id="E1"),
    ]

    s = MonthlyAggregator(PolicyConfig()).aggregate_month("E1", 2024, 5, records, leaves)

    assert s.period.label == "2024-05"
    assert s.days_present == 4  # 2 worked + holiday + own leave on an absent day
    assert s.days_absent == 1
    assert (s.wfh_days, s.office_days) == (1, 1)
    assert s.total_hours_worked == pytest.approx(18.0)
    assert s.leave_hours == pytest.approx(16.0)
    assert s.total_hours == pytest.approx(34.0)
    assert s.regular_hours == pytest.approx(32.0)
    assert s.overtime_hours == pytest.approx(2.0)
    assert s.average_hours_per_day == pytest.approx(8.5)  # 34 hours over 4 present days
    assert [d.date for d in s.leave_days] == [date(2024, 5, 1), date(2024, 5, 6)]
    assert s.leave_days[0].is_global


def test_daily_breakdown_rolls_up_to_total_worked():
    records = [_rec(d, 8.25, 8.0, 0.25) for d in range(1, 11)]
    s = MonthlyAggregator().aggregate_month("E1", 2024, 5, records)

    assert sum(r.hours.total_hours for r in s.daily_breakdown) == pytest.approx(s.total_hours_worked)
    assert sum(r.hours.overtime_hours for r in s.daily_breakdown) == pytest.approx(s.overtime_hours)


def test_same_inputs_give_identical_summary():
    records = [_rec(2), _rec(3, remark=Remark.MISMATCH, discrepancy=45)]
    agg = MonthlyAggregator()
    a = agg.aggregate_month("E1", 2024, 5, records)
    b = agg.aggregate_month("E1", 2024, 5, list(reversed(records)))

    assert json.dumps(a.to_dict(), sort_keys=True) == json.dumps(b.to_dict(), sort_keys=True)


def test_duplicate_date_last_record_wins():
    s = MonthlyAggregator().aggregate_month("E1", 2024, 5, [_rec(2, 6.0, 6.0), _rec(2, 9.0, 8.0, 1.0)])
    assert s.days_present == 1
    assert s.total_hours_worked == pytest.approx(9.0)


def test_clean_month_is_good():
    s = MonthlyAggregator().aggregate_month("E1", 2024, 5, [_rec(2), _rec(3)])
    report = s.quality_report

    assert report.overall_status == QualityStatus.GOOD
    assert report.attendance_rate == 100
    assert report.data_completeness == 100
    assert not s.needs_review
    assert report.info[0].details["both"] == 2


def test_high_discrepancy_needs_attention():
    s = MonthlyAggregator().aggregate_month(
        "E1", 2024, 5, [_rec(2, remark=Remark.MISMATCH, discrepancy=130), _rec(3)]
    )
    assert s.needs_review
    assert s.discrepancies[0].severity == Severity.HIGH
    assert s.quality_report.overall_status == QualityStatus.NEEDS_ATTENTION
    assert s.quality_report.issues[0].type == "time_discrepancies"


def test_medium_discrepancy_recommends_review():
    s = MonthlyAggregator().aggregate_month("E1", 2024, 5, [_rec(2, remark=Remark.MISMATCH, discrepancy=60)])
    assert s.discrepancies[0].severity == Severity.MEDIUM
    assert s.quality_report.overall_status == QualityStatus.REVIEW_RECOMMENDED


def test_low_discrepancy_still_flags_review():
    s = MonthlyAggregator().aggregate_month("E1", 2024, 5, [_rec(2, remark=Remark.MISMATCH, discrepancy=25)])
    assert s.discrepancies[0].severity == Severity.LOW
    assert s.needs_review
    assert s.quality_report.overall_status == QualityStatus.GOOD


def test_days_without_times_are_incomplete_data_issues():
    out_only = _rec(2, 0.0, 0.0, 0.0, provenance=Provenance.BIOMETRIC, remark=Remark.INCOMPLETE_DATA,
                    note=HoursNote.MISSING_TIME_DATA)
    s = MonthlyAggregator().aggregate_month("E1", 2024, 5, [out_only, _rec(3), _rec(6), _rec(7), _absent(8)])
    report = s.quality_report

    assert [i.type for i in report.issues] == ["incomplete_data"]
    assert report.issues[0].count == 2
    assert report.issues[0].details["days"] == ["2024-05-02", "2024-05-08"]
    assert report.data_completeness == 60


def test_no_punch_day_needs_attention():
    s = MonthlyAggregator().aggregate_month("E1", 2024, 5, [_rec(2), _absent(3)])
    report = s.quality_report

    assert report.overall_status == QualityStatus.NEEDS_ATTENTION
    assert [i.type for i in report.issues] == ["incomplete_data"]
    assert report.data_completeness == 50


def test_low_attendance_and_excessive_overtime_warnings():
    s = MonthlyAggregator().aggregate_month(
        "E1", 2024, 5, [_rec(2, 13.0, 8.0, 5.0), _absent(3), _absent(6)]
    )
    types = {w.type for w in s.quality_report.warnings}
    assert types == {"low_attendance", "excessive_overtime"}
    assert s.quality_report.attendance_rate == 33


def test_empty_month():
    s = MonthlyAggregator().aggregate_month("E1", 2024, 2, [])
    assert s.days_present == 0
    assert s.average_hours_per_day == 0.0
    assert s.quality_report.attendance_rate == 0
    assert s.quality_report.overall_status == QualityStatus.GOOD


def test_invalid_month_rejected():
    with pytest.raises(ValueError):
        MonthlyAggregator().aggregate_month("E1", 2024, 13, [])
