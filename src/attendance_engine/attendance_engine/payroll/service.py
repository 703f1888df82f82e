from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..attendance.model import RunError
from ..attendance.repository import DayRecordRepository
from ..common.datetime_utils import month_bounds
from ..common.numbers import quantize2, to_decimal
from ..core.enums import PayrollStatus
from ..core.exceptions import DomainError, MissingRateConfiguration
from ..core.policy import PolicyConfig
from ..leave.repository import LeaveRepository
from ..summary.aggregator import MonthlyAggregator
from ..summary.model import MonthlySummary
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollBreakdown, PayrollTotals
from .repository import PayProfileRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmployeePayroll:
    summary: MonthlySummary
    payroll: PayrollBreakdown


@dataclass(frozen=True)
class PayrollRun:
    period: str
    employees: list[EmployeePayroll]
    totals: PayrollTotals
    errors: list[RunError]


def build_totals(results: Sequence[EmployeePayroll]) -> PayrollTotals:
    hours = sum((to_decimal(r.summary.total_hours) for r in results), Decimal(0))
    overtime = sum((to_decimal(r.summary.overtime_hours) for r in results), Decimal(0))
    payable = sum((to_decimal(r.payroll.total_earnings) for r in results), Decimal(0))
    count = len(results)
    return PayrollTotals(
        total_employees=count,
        total_present_days=sum(r.summary.days_present for r in results),
        total_hours=float(quantize2(hours)),
        total_overtime_hours=float(quantize2(overtime)),
        total_payable=float(quantize2(payable)),
        total_wfh_days=sum(r.summary.wfh_days for r in results),
        total_office_days=sum(r.summary.office_days for r in results),
        employees_needing_review=sum(1 for r in results if r.payroll.status == PayrollStatus.NEEDS_REVIEW),
        average_salary=float(quantize2(payable / count)) if count else 0.0,
        average_hours=float(quantize2(hours / count)) if count else 0.0,
    )


class PayrollService:
    def __init__(
        self,
        records: DayRecordRepository,
        leaves: LeaveRepository,
        profiles: PayProfileRepository,
        *,
        policy: PolicyConfig | None = None,
        aggregator: Optional[MonthlyAggregator] = None,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._records = records
        self._leaves = leaves
        self._profiles = profiles
        self._policy = policy or PolicyConfig()
        self._aggregator = aggregator or MonthlyAggregator(self._policy)
        self._calculator = calculator or StandardPayrollCalculator(self._policy)

    def summarize(self, employee_id: str, year: int, month: int) -> MonthlySummary:
        start, end = month_bounds(year, month)
        records = self._records.list_for_employee(employee_id, start_date=start, end_date=end)
        entries = self._leaves.list_entries(start_date=start, end_date=end)
        return self._aggregator.aggregate_month(employee_id, year, month, records, entries)

    def compute(self, employee_id: str, year: int, month: int) -> EmployeePayroll:
        profile = self._profiles.get_for_employee(employee_id)
        if profile is None:
            raise MissingRateConfiguration(employee_id, f"Chưa cấu hình lương cho nhân viên {employee_id}")
        summary = self.summarize(employee_id, year, month)
        return EmployeePayroll(summary=summary, payroll=self._calculator.compute_payroll(summary, profile))

    def run_period(self, *, year: int, month: int, employee_ids: Iterable[str]) -> PayrollRun:
        """Payroll for every listed employee; one failure never stops the others."""
        ids = sorted(set(employee_ids))
        results: list[EmployeePayroll] = []
        errors: list[RunError] = []

        with ThreadPoolExecutor(max_workers=self._policy.worker_count) as executor:
            future_to_employee = {executor.submit(self.compute, eid, year, month): eid for eid in ids}
            for future in as_completed(future_to_employee):
                employee_id = future_to_employee[future]
                try:
                    results.append(future.result())
                except MissingRateConfiguration as e:
                    logger.warning("Payroll skipped for %s: %s", employee_id, e)
                    errors.append(RunError(key=employee_id, reason=f"MissingRateConfiguration: {e}"))
                except (DomainError, ValueError) as e:
                    logger.warning("Payroll failed for %s: %s", employee_id, e)
                    errors.append(RunError(key=employee_id, reason=str(e)))
                except Exception as e:
                    logger.warning("Payroll execution failed for %s: %s", employee_id, e)
                    errors.append(RunError(key=employee_id, reason=f"Execution error: {e}"))

        results.sort(key=lambda r: r.summary.employee_id)
        errors.sort(key=lambda e: e.key)
        period = f"{int(year):04d}-{int(month):02d}"
        logger.info("Payroll %s: %d processed, %d errors", period, len(results), len(errors))
        return PayrollRun(period=period, employees=results, totals=build_totals(results), errors=errors)
