from __future__ import annotations

import csv
import io
from typing import Iterable, Mapping, Sequence

import pandas as pd

from ..payroll.service import PayrollRun

DAILY_LOG_FIELDS = [
    "work_date",
    "employee_id",
    "in_time",
    "out_time",
    "worked_hours",
    "regular_hours",
    "overtime_hours",
    "provenance",
    "remark",
    "discrepancy_minutes",
    "note",
    "work_location",
    "status",
    "earnings",
]

PAYROLL_FIELDS = [
    "employee_id",
    "period",
    "salary_type",
    "days_present",
    "total_hours",
    "regular_hours",
    "overtime_hours",
    "leave_hours",
    "hourly_rate",
    "overtime_rate",
    "regular_earnings",
    "overtime_earnings",
    "leave_earnings",
    "total_earnings",
    "discrepancy_count",
    "quality_status",
    "status",
]

TOTALS_FIELDS = [
    "total_employees",
    "total_present_days",
    "total_hours",
    "total_overtime_hours",
    "total_payable",
    "employees_needing_review",
]


def build_daily_log_rows(run: PayrollRun) -> list[dict]:
    """One row per employee-day, including the payroll status gate for that employee."""
    rows: list[dict] = []
    for item in run.employees:
        earned = {d.date: d.earnings for d in item.payroll.daily_earnings if d.kind == "worked"}
        for r in item.summary.daily_breakdown:
            rows.append(
                {
                    "work_date": r.work_date.strftime("%Y-%m-%d"),
                    "employee_id": r.employee_id,
                    "in_time": r.in_time,
                    "out_time": r.out_time,
                    "worked_hours": r.hours.total_hours,
                    "regular_hours": r.hours.regular_hours,
                    "overtime_hours": r.hours.overtime_hours,
                    "provenance": r.provenance.value,
                    "remark": r.remark.value,
                    "discrepancy_minutes": r.discrepancy_minutes if r.discrepancy_minutes is not None else "",
                    "note": r.hours.note.value,
                    "work_location": r.work_location.value if r.work_location else "",
                    "status": item.payroll.status.value,
                    "earnings": earned.get(r.work_date, 0.0),
                }
            )
    return rows


def build_payroll_rows(run: PayrollRun) -> list[dict]:
    rows: list[dict] = []
    for item in run.employees:
        s, p = item.summary, item.payroll
        rows.append(
            {
                "employee_id": p.employee_id,
                "period": p.period,
                "salary_type": p.salary_type.value,
                "days_present": s.days_present,
                "total_hours": s.total_hours,
                "regular_hours": s.regular_hours,
                "overtime_hours": s.overtime_hours,
                "leave_hours": s.leave_hours,
                "hourly_rate": p.hourly_rate,
                "overtime_rate": p.overtime_rate,
                "regular_earnings": p.regular_earnings,
                "overtime_earnings": p.overtime_earnings,
                "leave_earnings": p.leave_earnings,
                "total_earnings": p.total_earnings,
                "discrepancy_count": p.discrepancy_count,
                "quality_status": s.quality_report.overall_status.value,
                "status": p.status.value,
            }
        )
    return rows


def build_totals_rows(run: PayrollRun) -> list[dict]:
    totals = run.totals.to_dict()
    return [{k: totals[k] for k in TOTALS_FIELDS}]


def write_csv(rows: Iterable[Mapping], fieldnames: Sequence[str]) -> bytes:
    """CSV bytes with a BOM so spreadsheet apps pick up UTF-8."""
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=list(fieldnames))
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return out.getvalue().encode("utf-8-sig")


def write_xlsx(run: PayrollRun) -> bytes:
    """Workbook with daily logs, per-employee payroll and grand totals sheets."""
    sheets = {
        "Attendance Logs": (build_daily_log_rows(run), DAILY_LOG_FIELDS),
        "Payroll": (build_payroll_rows(run), PAYROLL_FIELDS),
        "Totals": (build_totals_rows(run), TOTALS_FIELDS),
    }
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        for sheet_name, (rows, columns) in sheets.items():
            df = pd.DataFrame(rows, columns=columns)
            df.to_excel(writer, index=False, sheet_name=sheet_name)
    return output.getvalue()
