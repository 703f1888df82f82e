from __future__ import annotations

from decimal import Decimal

from ...common.numbers import quantize2, to_decimal
from ...core.enums import PayrollStatus
from ...core.exceptions import MissingRateConfiguration
from ...core.policy import PolicyConfig
from ...summary.model import MonthlySummary
from ..model import DailyEarnings, PayProfile, PayrollBreakdown
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: hourly rate from the profile, else daily / 8, else monthly / 31 / 8.

    Regular hours already include paid leave; ``leave_earnings`` reports that
    share separately and is not added to the total a second time.
    """

    def __init__(self, policy: PolicyConfig | None = None):
        self._policy = policy or PolicyConfig()

    def resolve_hourly_rate(self, profile: PayProfile) -> tuple[Decimal, Decimal]:
        """Return ``(hourly_rate, daily_rate)``, unrounded."""
        hours_per_day = Decimal(self._policy.regular_hours_cap)

        if profile.hourly_rate:
            hourly = to_decimal(profile.hourly_rate)
            daily = to_decimal(profile.daily_rate) if profile.daily_rate else hourly * hours_per_day
            return hourly, daily
        if profile.daily_rate:
            daily = to_decimal(profile.daily_rate)
            return daily / hours_per_day, daily
        if profile.monthly_salary:
            daily = to_decimal(profile.monthly_salary) / Decimal(self._policy.days_in_month_divisor)
            return daily / hours_per_day, daily
        raise MissingRateConfiguration(profile.employee_id)

    def compute_payroll(self, summary: MonthlySummary, profile: PayProfile) -> PayrollBreakdown:
        if profile.employee_id != summary.employee_id:
            raise ValueError(
                f"Pay profile {profile.employee_id!r} does not belong to summary {summary.employee_id!r}"
            )

        hourly, daily = self.resolve_hourly_rate(profile)
        overtime_rate = hourly * to_decimal(self._policy.overtime_multiplier)

        regular_earnings = quantize2(to_decimal(summary.regular_hours) * hourly)
        overtime_earnings = quantize2(to_decimal(summary.overtime_hours) * overtime_rate)
        leave_earnings = quantize2(to_decimal(summary.leave_hours) * hourly)
        total = regular_earnings + overtime_earnings

        daily_rows: list[DailyEarnings] = []
        for r in summary.daily_breakdown:
            if not r.is_present or r.hours.total_hours == 0:
                continue
            reg = quantize2(to_decimal(r.hours.regular_hours) * hourly)
            ot = quantize2(to_decimal(r.hours.overtime_hours) * overtime_rate)
            daily_rows.append(
                DailyEarnings(
                    date=r.work_date,
                    kind="worked",
                    regular_hours=r.hours.regular_hours,
                    overtime_hours=r.hours.overtime_hours,
                    regular_earnings=float(reg),
                    overtime_earnings=float(ot),
                    earnings=float(reg + ot),
                )
            )
        for leave in summary.leave_days:
            amount = quantize2(to_decimal(leave.hours) * hourly)
            daily_rows.append(
                DailyEarnings(
                    date=leave.date,
                    kind="leave",
                    regular_hours=leave.hours,
                    overtime_hours=0.0,
                    regular_earnings=float(amount),
                    overtime_earnings=0.0,
                    earnings=float(amount),
                )
            )
        daily_rows.sort(key=lambda d: (d.date, d.kind))

        return PayrollBreakdown(
            employee_id=summary.employee_id,
            period=summary.period.label,
            salary_type=profile.salary_type,
            hourly_rate=float(quantize2(hourly)),
            overtime_rate=float(quantize2(overtime_rate)),
            daily_rate=float(quantize2(daily)),
            regular_hours=summary.regular_hours,
            overtime_hours=summary.overtime_hours,
            regular_earnings=float(regular_earnings),
            overtime_earnings=float(overtime_earnings),
            leave_earnings=float(leave_earnings),
            total_earnings=float(total),
            status=PayrollStatus.NEEDS_REVIEW if summary.discrepancies else PayrollStatus.PROCESSED,
            days_present=summary.days_present,
            discrepancy_count=len(summary.discrepancies),
            daily_earnings=tuple(daily_rows),
        )
