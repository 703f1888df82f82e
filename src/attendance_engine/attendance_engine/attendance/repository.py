from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from .model import CanonicalDayRecord, DayKey, PunchEvent


class PunchEventRepository(Protocol):
    def list_events(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_ids: Optional[Iterable[str]] = None,
    ) -> Sequence[PunchEvent]:
        raise NotImplementedError


class DayRecordRepository(Protocol):
    def put_canonical_day_record(self, key: DayKey, record: CanonicalDayRecord) -> None:
        """Upsert by key: last write wins, replaying the same record is a no-op."""

        raise NotImplementedError

    def get(self, key: DayKey) -> Optional[CanonicalDayRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str, *, start_date: date, end_date: date) -> Sequence[CanonicalDayRecord]:
        raise NotImplementedError

    def list_range(self, *, start_date: date, end_date: date) -> Sequence[CanonicalDayRecord]:
        raise NotImplementedError
