from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..model import HoursResult


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def compute_hours(
        self,
        in_minutes: Optional[int],
        out_minutes: Optional[int],
        apply_allowance: bool,
    ) -> HoursResult:
        raise NotImplementedError
