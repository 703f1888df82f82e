from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from . import constants as c


@dataclass(frozen=True)
class PolicyConfig:
    """Immutable attendance/payroll policy.

    Built once from the settings module and passed explicitly into every
    reconciler, calculator and aggregator.
    """

    tolerance_minutes: int = c.DEFAULT_TOLERANCE_MINUTES
    apply_allowance: bool = True
    start_allowance_minutes: int = c.DEFAULT_START_ALLOWANCE_MINUTES
    end_allowance_minutes: int = c.DEFAULT_END_ALLOWANCE_MINUTES
    regular_hours_cap: int = c.DEFAULT_REGULAR_HOURS_CAP
    max_daily_hours: int = c.DEFAULT_MAX_DAILY_HOURS
    overtime_multiplier: float = c.DEFAULT_OVERTIME_MULTIPLIER
    days_in_month_divisor: int = c.DEFAULT_DAYS_IN_MONTH_DIVISOR

    medium_discrepancy_minutes: int = c.DEFAULT_MEDIUM_DISCREPANCY_MINUTES
    high_discrepancy_minutes: int = c.DEFAULT_HIGH_DISCREPANCY_MINUTES
    excessive_overtime_hours: float = c.DEFAULT_EXCESSIVE_OVERTIME_HOURS
    low_attendance_rate: float = c.DEFAULT_LOW_ATTENDANCE_RATE

    worker_count: int = c.DEFAULT_WORKER_COUNT
    weekend_days: tuple[int, ...] = field(default=c.DEFAULT_WEEKEND_DAYS)

    def __post_init__(self) -> None:
        if self.tolerance_minutes < 0:
            raise ValueError("tolerance_minutes must be >= 0")
        if self.regular_hours_cap <= 0:
            raise ValueError("regular_hours_cap must be > 0")
        if self.days_in_month_divisor <= 0:
            raise ValueError("days_in_month_divisor must be > 0")
        if self.worker_count < 1:
            raise ValueError("worker_count must be >= 1")
        if self.medium_discrepancy_minutes > self.high_discrepancy_minutes:
            raise ValueError("medium_discrepancy_minutes must not exceed high_discrepancy_minutes")

    @classmethod
    def from_settings(cls, settings: Any) -> "PolicyConfig":
        """Read ``POLICY_*`` attributes from a settings module, falling back to defaults."""

        def get(name: str, default):
            return getattr(settings, f"POLICY_{name}", default)

        return cls(
            tolerance_minutes=int(get("TOLERANCE_MINUTES", c.DEFAULT_TOLERANCE_MINUTES)),
            apply_allowance=bool(get("APPLY_ALLOWANCE", True)),
            start_allowance_minutes=int(get("START_ALLOWANCE_MINUTES", c.DEFAULT_START_ALLOWANCE_MINUTES)),
            end_allowance_minutes=int(get("END_ALLOWANCE_MINUTES", c.DEFAULT_END_ALLOWANCE_MINUTES)),
            regular_hours_cap=int(get("REGULAR_HOURS_CAP", c.DEFAULT_REGULAR_HOURS_CAP)),
            max_daily_hours=int(get("MAX_DAILY_HOURS", c.DEFAULT_MAX_DAILY_HOURS)),
            overtime_multiplier=float(get("OVERTIME_MULTIPLIER", c.DEFAULT_OVERTIME_MULTIPLIER)),
            days_in_month_divisor=int(get("DAYS_IN_MONTH_DIVISOR", c.DEFAULT_DAYS_IN_MONTH_DIVISOR)),
            medium_discrepancy_minutes=int(get("MEDIUM_DISCREPANCY_MINUTES", c.DEFAULT_MEDIUM_DISCREPANCY_MINUTES)),
            high_discrepancy_minutes=int(get("HIGH_DISCREPANCY_MINUTES", c.DEFAULT_HIGH_DISCREPANCY_MINUTES)),
            excessive_overtime_hours=float(get("EXCESSIVE_OVERTIME_HOURS", c.DEFAULT_EXCESSIVE_OVERTIME_HOURS)),
            low_attendance_rate=float(get("LOW_ATTENDANCE_RATE", c.DEFAULT_LOW_ATTENDANCE_RATE)),
            worker_count=int(get("WORKER_COUNT", c.DEFAULT_WORKER_COUNT)),
            weekend_days=tuple(int(d) for d in get("WEEKEND_DAYS", c.DEFAULT_WEEKEND_DAYS)),
        )
