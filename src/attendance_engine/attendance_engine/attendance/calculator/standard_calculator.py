from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ...common.numbers import quantize2
from ...core.constants import MINUTES_PER_DAY
from ...core.enums import HoursNote
from ...core.policy import PolicyConfig
from ..model import HoursResult
from .base import HoursCalculator


class StandardHoursCalculator(HoursCalculator):
    """Standard rule: allowance on both ends, wrap past midnight, cap regular hours.

    Never raises; malformed input yields zeroed hours with a diagnostic note.
    """

    def __init__(self, policy: PolicyConfig | None = None):
        self._policy = policy or PolicyConfig()

    def compute_hours(
        self,
        in_minutes: Optional[int],
        out_minutes: Optional[int],
        apply_allowance: bool,
    ) -> HoursResult:
        if in_minutes is None or out_minutes is None:
            return HoursResult.zero(HoursNote.MISSING_TIME_DATA)

        start = int(in_minutes)
        end = int(out_minutes)
        if apply_allowance:
            start = max(0, start - self._policy.start_allowance_minutes)
            end = end + self._policy.end_allowance_minutes

        if end < start:
            end += MINUTES_PER_DAY

        worked = end - start
        if worked > self._policy.max_daily_hours * 60:
            return HoursResult.zero(HoursNote.OVER_24H)
        if worked < 0:
            return HoursResult.zero(HoursNote.INVALID_RANGE)

        total = quantize2(Decimal(worked) / Decimal(60))
        regular = min(total, Decimal(self._policy.regular_hours_cap))
        overtime = total - regular
        return HoursResult(
            total_hours=float(total),
            regular_hours=float(regular),
            overtime_hours=float(overtime),
            note=HoursNote.OK,
        )
