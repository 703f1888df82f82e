from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Optional

from ..core.enums import PayrollStatus, SalaryType


@dataclass(frozen=True)
class PayProfile:
    employee_id: str
    salary_type: SalaryType
    monthly_salary: Optional[float] = None
    daily_rate: Optional[float] = None
    hourly_rate: Optional[float] = None


@dataclass(frozen=True)
class DailyEarnings:
    date: date
    kind: str  # "worked" | "leave"
    regular_hours: float
    overtime_hours: float
    regular_earnings: float
    overtime_earnings: float
    earnings: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "kind": self.kind,
            "regular_hours": self.regular_hours,
            "overtime_hours": self.overtime_hours,
            "regular_earnings": self.regular_earnings,
            "overtime_earnings": self.overtime_earnings,
            "earnings": self.earnings,
        }


@dataclass(frozen=True)
class PayrollBreakdown:
    """Bảng lương một nhân viên một kỳ; NEEDS_REVIEW không được tự động duyệt."""

    employee_id: str
    period: str
    salary_type: SalaryType
    hourly_rate: float
    overtime_rate: float
    daily_rate: float
    regular_hours: float
    overtime_hours: float
    regular_earnings: float
    overtime_earnings: float
    leave_earnings: float
    total_earnings: float
    status: PayrollStatus
    days_present: int
    discrepancy_count: int
    daily_earnings: tuple[DailyEarnings, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "employee_id": self.employee_id,
            "period": self.period,
            "salary_type": self.salary_type.value,
            "hourly_rate": self.hourly_rate,
            "overtime_rate": self.overtime_rate,
            "daily_rate": self.daily_rate,
            "regular_hours": self.regular_hours,
            "overtime_hours": self.overtime_hours,
            "regular_earnings": self.regular_earnings,
            "overtime_earnings": self.overtime_earnings,
            "leave_earnings": self.leave_earnings,
            "total_earnings": self.total_earnings,
            "status": self.status.value,
            "days_present": self.days_present,
            "discrepancy_count": self.discrepancy_count,
            "daily_earnings": [d.to_dict() for d in self.daily_earnings],
        }


@dataclass(frozen=True)
class PayrollTotals:
    """Grand totals across employees for batch reporting/export."""

    total_employees: int
    total_present_days: int
    total_hours: float
    total_overtime_hours: float
    total_payable: float
    total_wfh_days: int
    total_office_days: int
    employees_needing_review: int
    average_salary: float
    average_hours: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
