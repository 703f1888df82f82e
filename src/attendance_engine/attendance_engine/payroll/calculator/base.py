from __future__ import annotations

from abc import ABC, abstractmethod

from ...summary.model import MonthlySummary
from ..model import PayProfile, PayrollBreakdown


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute_payroll(self, summary: MonthlySummary, profile: PayProfile) -> PayrollBreakdown:
        raise NotImplementedError
