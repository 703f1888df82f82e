from __future__ import annotations

import threading
from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.exceptions import ValidationError
from .model import CanonicalDayRecord, DayKey, PunchEvent
from .repository import DayRecordRepository, PunchEventRepository


class InMemoryDayRecordRepository(DayRecordRepository):
    """Dict-backed store keyed by (employee_id, work_date); safe for the batch worker pool."""

    def __init__(self, records: Iterable[CanonicalDayRecord] = ()):
        self._lock = threading.Lock()
        self._by_key: dict[DayKey, CanonicalDayRecord] = {}
        for r in records:
            self._by_key[r.key] = r

    def put_canonical_day_record(self, key: DayKey, record: CanonicalDayRecord) -> None:
        if key != record.key:
            raise ValidationError(f"Khoá {key} không khớp với bản ghi {record.key}")
        with self._lock:
            self._by_key[key] = record

    def get(self, key: DayKey) -> Optional[CanonicalDayRecord]:
        with self._lock:
            return self._by_key.get(key)

    def list_for_employee(self, employee_id: str, *, start_date: date, end_date: date) -> Sequence[CanonicalDayRecord]:
        with self._lock:
            items = [
                r
                for k, r in self._by_key.items()
                if k.employee_id == employee_id and start_date <= k.work_date <= end_date
            ]
        items.sort(key=lambda r: r.work_date)
        return items

    def list_range(self, *, start_date: date, end_date: date) -> Sequence[CanonicalDayRecord]:
        with self._lock:
            items = [r for k, r in self._by_key.items() if start_date <= k.work_date <= end_date]
        items.sort(key=lambda r: (r.employee_id, r.work_date))
        return items

    def __len__(self) -> int:
        return len(self._by_key)


class InMemoryPunchEventRepository(PunchEventRepository):
    """Holds already-collected events; dates are resolved lazily so bad rows still flow through."""

    def __init__(self, events: Iterable[PunchEvent] = ()):
        self._events = list(events)

    def add(self, event: PunchEvent) -> None:
        self._events.append(event)

    def list_events(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_ids: Optional[Iterable[str]] = None,
    ) -> Sequence[PunchEvent]:
        wanted = set(employee_ids) if employee_ids is not None else None
        # Date filtering happens in the service, where unparseable dates are reported.
        return [e for e in self._events if wanted is None or e.employee_id in wanted]
