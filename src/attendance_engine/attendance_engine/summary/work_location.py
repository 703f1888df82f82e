from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from ..common.numbers import quantize2, to_decimal
from ..core.enums import WorkLocation
from .model import MonthlySummary


@dataclass(frozen=True)
class LocationStats:
    total_days: int
    total_hours: float
    average_hours: float
    total_overtime_hours: float


@dataclass(frozen=True)
class WorkLocationAnalysis:
    employee_id: str
    period_label: str
    wfh: LocationStats
    office: LocationStats
    wfh_percentage: int
    office_percentage: int
    average_hours_difference: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "employee_id": self.employee_id,
            "period": self.period_label,
            "wfh": asdict(self.wfh),
            "office": asdict(self.office),
            "comparison": {
                "wfh_percentage": self.wfh_percentage,
                "office_percentage": self.office_percentage,
                "average_hours_difference": self.average_hours_difference,
            },
        }


def _stats(records) -> LocationStats:
    hours = sum((to_decimal(r.hours.total_hours) for r in records), Decimal(0))
    overtime = sum((to_decimal(r.hours.overtime_hours) for r in records), Decimal(0))
    average = hours / len(records) if records else Decimal(0)
    return LocationStats(
        total_days=len(records),
        total_hours=float(quantize2(hours)),
        average_hours=float(quantize2(average)),
        total_overtime_hours=float(quantize2(overtime)),
    )


def analyze_work_location(summary: MonthlySummary) -> WorkLocationAnalysis:
    """WFH vs office comparison over the present days of one month."""
    present = [r for r in summary.daily_breakdown if r.is_present]
    wfh = _stats([r for r in present if r.work_location == WorkLocation.WFH])
    office = _stats([r for r in present if r.work_location != WorkLocation.WFH])

    days = wfh.total_days + office.total_days
    if days:
        wfh_pct = int((Decimal(wfh.total_days) * 100 / days).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        office_pct = 100 - wfh_pct
    else:
        wfh_pct = office_pct = 0

    return WorkLocationAnalysis(
        employee_id=summary.employee_id,
        period_label=summary.period.label,
        wfh=wfh,
        office=office,
        wfh_percentage=wfh_pct,
        office_percentage=office_pct,
        average_hours_difference=float(quantize2(to_decimal(wfh.average_hours) - to_decimal(office.average_hours))),
    )
