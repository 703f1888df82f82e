from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from ..attendance.model import CanonicalDayRecord
from ..core.enums import QualityStatus, Severity


@dataclass(frozen=True)
class Period:
    year: int
    month: int
    start_date: date
    end_date: date

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def month_name(self) -> str:
        return self.start_date.strftime("%B")


@dataclass(frozen=True)
class Discrepancy:
    date: date
    discrepancy_minutes: int
    in_diff_minutes: Optional[int]
    out_diff_minutes: Optional[int]
    severity: Severity

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "discrepancy_minutes": self.discrepancy_minutes,
            "in_diff_minutes": self.in_diff_minutes,
            "out_diff_minutes": self.out_diff_minutes,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class LeaveDay:
    date: date
    hours: float
    type: str
    is_global: bool

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date.isoformat(), "hours": self.hours, "type": self.type, "is_global": self.is_global}


@dataclass(frozen=True)
class QualityItem:
    type: str
    severity: Optional[Severity] = None
    count: Optional[int] = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type}
        if self.severity is not None:
            out["severity"] = self.severity.value
        if self.count is not None:
            out["count"] = self.count
        out.update(self.details)
        return out


@dataclass(frozen=True)
class QualityReport:
    overall_status: QualityStatus
    issues: tuple[QualityItem, ...]
    warnings: tuple[QualityItem, ...]
    info: tuple[QualityItem, ...]
    attendance_rate: int
    data_completeness: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall_status": self.overall_status.value,
            "issues": [i.to_dict() for i in self.issues],
            "warnings": [w.to_dict() for w in self.warnings],
            "info": [i.to_dict() for i in self.info],
            "summary": {
                "total_issues": len(self.issues),
                "total_warnings": len(self.warnings),
                "attendance_rate": self.attendance_rate,
                "data_completeness": self.data_completeness,
            },
        }


@dataclass(frozen=True)
class MonthlySummary:
    """Tổng hợp tháng; luôn tính lại được từ bản ghi ngày + lịch nghỉ."""

    employee_id: str
    period: Period
    days_present: int
    days_absent: int
    wfh_days: int
    office_days: int
    total_hours_worked: float
    leave_hours: float
    total_hours: float
    regular_hours: float
    overtime_hours: float
    average_hours_per_day: float
    discrepancies: tuple[Discrepancy, ...]
    daily_breakdown: tuple[CanonicalDayRecord, ...]
    leave_days: tuple[LeaveDay, ...]
    quality_report: QualityReport

    @property
    def needs_review(self) -> bool:
        return bool(self.discrepancies)

    def to_dict(self) -> dict[str, Any]:
        return {
            "employee_id": self.employee_id,
            "period": {
                "year": self.period.year,
                "month": self.period.month,
                "month_name": self.period.month_name,
            },
            "summary": {
                "days_present": self.days_present,
                "days_absent": self.days_absent,
                "wfh_days": self.wfh_days,
                "office_days": self.office_days,
                "total_hours_worked": self.total_hours_worked,
                "leave_hours": self.leave_hours,
                "total_hours": self.total_hours,
                "regular_hours": self.regular_hours,
                "overtime_hours": self.overtime_hours,
                "average_hours_per_day": self.average_hours_per_day,
            },
            "daily_breakdown": [r.to_dict() for r in self.daily_breakdown],
            "leave_days": [d.to_dict() for d in self.leave_days],
            "discrepancies": [d.to_dict() for d in self.discrepancies],
            "quality_report": self.quality_report.to_dict(),
        }
