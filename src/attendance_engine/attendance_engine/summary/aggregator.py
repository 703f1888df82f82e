from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable

from ..attendance.model import CanonicalDayRecord
from ..common.datetime_utils import month_bounds
from ..common.numbers import quantize2, to_decimal
from ..core.enums import Remark, WorkLocation
from ..core.policy import PolicyConfig
from ..leave.holiday_calendar import effective_leave_days
from ..leave.model import LeaveOrHolidayEntry
from .model import Discrepancy, LeaveDay, MonthlySummary, Period
from .quality import build_quality_report, classify_discrepancy

logger = logging.getLogger(__name__)


class MonthlyAggregator:
    """Roll canonical day records and the paid-leave calendar up into one month.

    Pure: the same inputs always give an equal ``MonthlySummary``.
    """

    def __init__(self, policy: PolicyConfig | None = None):
        self._policy = policy or PolicyConfig()

    def aggregate_month(
        self,
        employee_id: str,
        year: int,
        month: int,
        day_records: Iterable[CanonicalDayRecord],
        leave_entries: Iterable[LeaveOrHolidayEntry] = (),
    ) -> MonthlySummary:
        start, end = month_bounds(year, month)
        period = Period(year=int(year), month=int(month), start_date=start, end_date=end)

        # One record per date; a later duplicate replaces an earlier one (upsert semantics).
        by_date: dict[date, CanonicalDayRecord] = {}
        for r in day_records:
            if r.employee_id == employee_id and start <= r.work_date <= end:
                by_date[r.work_date] = r
        breakdown = tuple(by_date[d] for d in sorted(by_date))

        leave_by_date = effective_leave_days(employee_id, leave_entries, start_date=start, end_date=end)

        days_present = days_absent = wfh_days = office_days = 0
        worked = regular = overtime = Decimal(0)
        discrepancies: list[Discrepancy] = []

        for r in breakdown:
            if r.is_present:
                days_present += 1
                worked += to_decimal(r.hours.total_hours)
                regular += to_decimal(r.hours.regular_hours)
                overtime += to_decimal(r.hours.overtime_hours)
                if r.work_location == WorkLocation.WFH:
                    wfh_days += 1
                else:
                    office_days += 1
            elif r.work_date not in leave_by_date:
                days_absent += 1

            if r.remark == Remark.MISMATCH and r.discrepancy_minutes is not None:
                discrepancies.append(
                    Discrepancy(
                        date=r.work_date,
                        discrepancy_minutes=r.discrepancy_minutes,
                        in_diff_minutes=r.in_diff_minutes,
                        out_diff_minutes=r.out_diff_minutes,
                        severity=classify_discrepancy(r.discrepancy_minutes, self._policy),
                    )
                )

        leave_hours = Decimal(0)
        leave_days: list[LeaveDay] = []
        for d, entry in leave_by_date.items():
            hours = to_decimal(entry.hours)
            leave_hours += hours
            leave_days.append(LeaveDay(date=d, hours=float(quantize2(hours)), type=entry.type, is_global=entry.is_global))
            existing = by_date.get(d)
            if existing is None or not existing.is_present:
                days_present += 1

        total_worked = quantize2(worked)
        total_hours = quantize2(worked + leave_hours)
        # days_present includes leave days.
        average = quantize2(total_hours / days_present) if days_present else Decimal(0)

        quality = build_quality_report(
            breakdown,
            discrepancies,
            days_present=days_present,
            days_absent=days_absent,
            policy=self._policy,
        )

        summary = MonthlySummary(
            employee_id=employee_id,
            period=period,
            days_present=days_present,
            days_absent=days_absent,
            wfh_days=wfh_days,
            office_days=office_days,
            total_hours_worked=float(total_worked),
            leave_hours=float(quantize2(leave_hours)),
            total_hours=float(total_hours),
            regular_hours=float(quantize2(regular + leave_hours)),
            overtime_hours=float(quantize2(overtime)),
            average_hours_per_day=float(average),
            discrepancies=tuple(discrepancies),
            daily_breakdown=breakdown,
            leave_days=tuple(leave_days),
            quality_report=quality,
        )
        logger.debug(
            "Aggregated %s %s: present=%d absent=%d hours=%.2f",
            employee_id, period.label, days_present, days_absent, summary.total_hours,
        )
        return summary
