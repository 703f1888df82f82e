from __future__ import annotations

import logging
from collections import Counter, defaultdict
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import iter_dates
from ..core.constants import MINUTES_PER_DAY
from ..core.enums import Direction, Provenance, Remark, Source, WorkLocation
from ..core.exceptions import DomainError, ValidationError
from ..core.policy import PolicyConfig
from ..timeparse.parser import parse_time_to_minutes, parse_work_date
from .model import CanonicalDayRecord, PunchEvent, PunchPair, ReconciliationSummary, RunError
from .reconciler import PunchReconciler
from .repository import DayRecordRepository, PunchEventRepository

logger = logging.getLogger(__name__)


@dataclass
class _DayPunches:
    minutes: dict[tuple[Source, Direction], list[int]] = field(default_factory=lambda: defaultdict(list))
    work_location: Optional[WorkLocation] = None

    def pair(self, source: Source) -> PunchPair:
        ins = self.minutes.get((source, Direction.IN)) or []
        outs = self.minutes.get((source, Direction.OUT)) or []
        # First punch in, last punch out.
        return PunchPair(in_minutes=min(ins) if ins else None, out_minutes=max(outs) if outs else None)


@dataclass(frozen=True)
class DerivationResult:
    records: list[CanonicalDayRecord]
    errors: list[RunError]


class AttendanceService:
    def __init__(
        self,
        events: PunchEventRepository,
        records: DayRecordRepository,
        *,
        policy: PolicyConfig | None = None,
        reconciler: PunchReconciler | None = None,
        known_employee_ids: Optional[Iterable[str]] = None,
    ):
        self._events = events
        self._records = records
        self._policy = policy or PolicyConfig()
        self._reconciler = reconciler or PunchReconciler(self._policy)
        self._known = set(known_employee_ids) if known_employee_ids is not None else None

    def derive_range(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_ids: Optional[Iterable[str]] = None,
        fill_absent: bool = False,
    ) -> DerivationResult:
        """Reconcile every employee-day in ``[start_date, end_date]`` and upsert the results.

        With ``fill_absent`` each listed employee also gets an absent record for
        every non-weekend day that has no punches at all.
        """
        if end_date < start_date:
            raise ValidationError("Ngày kết thúc phải sau ngày bắt đầu")

        wanted = sorted(set(employee_ids)) if employee_ids is not None else None
        if fill_absent and wanted is None:
            raise ValidationError("fill_absent cần danh sách nhân viên")

        raw = self._events.list_events(start_date=start_date, end_date=end_date, employee_ids=wanted)
        grouped, errors = self._group(raw, start_date=start_date, end_date=end_date)

        if fill_absent:
            for employee_id in wanted:
                days = grouped.setdefault(employee_id, {})
                for d in iter_dates(start_date, end_date):
                    if d.weekday() not in self._policy.weekend_days:
                        days.setdefault(d, _DayPunches())

        records: list[CanonicalDayRecord] = []
        with ThreadPoolExecutor(max_workers=self._policy.worker_count) as executor:
            future_to_employee = {
                executor.submit(self._derive_employee, employee_id, days): employee_id
                for employee_id, days in grouped.items()
            }
            for future in as_completed(future_to_employee):
                employee_id = future_to_employee[future]
                try:
                    done, failed = future.result()
                except Exception as e:
                    logger.warning("Attendance derivation failed for %s: %s", employee_id, e)
                    errors.append(RunError(key=employee_id, reason=f"Execution error: {e}"))
                    continue
                records.extend(done)
                errors.extend(failed)

        records.sort(key=lambda r: (r.employee_id, r.work_date))
        errors.sort(key=lambda e: (e.key, e.reason))
        logger.info(
            "Derived %d day records for %s..%s (%d errors)", len(records), start_date, end_date, len(errors)
        )
        return DerivationResult(records=records, errors=errors)

    def reconcile_day(self, employee_id: str, work_date: date, events: Sequence[PunchEvent]) -> CanonicalDayRecord:
        """Reconcile one employee-day from already-filtered events (no persistence)."""
        day = _DayPunches()
        for e in events:
            minutes = parse_time_to_minutes(e.timestamp)
            if minutes is None:
                continue
            self._add(day, e, minutes)
        return self._reconcile(employee_id, work_date, day)

    def apply_manual_override(
        self,
        employee_id: str,
        work_date: date,
        *,
        in_minutes: Optional[int],
        out_minutes: Optional[int],
        work_location: Optional[WorkLocation] = None,
    ) -> CanonicalDayRecord:
        """Admin-only override used after approval workflows."""
        for label, value in (("in_minutes", in_minutes), ("out_minutes", out_minutes)):
            if value is not None and not 0 <= value < MINUTES_PER_DAY:
                raise ValidationError(f"{label}={value} nằm ngoài khoảng 0..{MINUTES_PER_DAY - 1} phút")
        record = self._reconciler.manual(
            employee_id, work_date, in_minutes, out_minutes, work_location=work_location
        )
        self._records.put_canonical_day_record(record.key, record)
        logger.info("Manual override stored for %s on %s", employee_id, work_date)
        return record

    def reconciliation_summary(self, *, start_date: date, end_date: date) -> ReconciliationSummary:
        rows = self._records.list_range(start_date=start_date, end_date=end_date)
        compared = [r for r in rows if r.in_diff_minutes is not None or r.out_diff_minutes is not None]
        mismatches = sum(1 for r in rows if r.remark == Remark.MISMATCH)
        within = sum(1 for r in compared if r.remark != Remark.MISMATCH)

        provenance = Counter(r.provenance.value for r in rows)
        remarks = Counter(r.remark.value for r in rows)
        return ReconciliationSummary(
            start_date=start_date,
            end_date=end_date,
            total_records=len(rows),
            within_tolerance=within,
            mismatches_detected=mismatches,
            provenance_distribution={p.value: provenance.get(p.value, 0) for p in Provenance},
            remarks_distribution={r.value: remarks.get(r.value, 0) for r in Remark},
        )

    def _group(
        self,
        events: Sequence[PunchEvent],
        *,
        start_date: date,
        end_date: date,
    ) -> tuple[dict[str, dict[date, _DayPunches]], list[RunError]]:
        grouped: dict[str, dict[date, _DayPunches]] = {}
        errors: list[RunError] = []

        for e in events:
            employee_id = str(e.employee_id or "").strip()
            if not employee_id:
                errors.append(RunError(key=f"?@{e.work_date}", reason="Missing employee ID"))
                continue
            if self._known is not None and employee_id not in self._known:
                errors.append(RunError(key=employee_id, reason="Employee not found"))
                continue

            work_date = parse_work_date(e.work_date)
            if work_date is None:
                errors.append(RunError(key=f"{employee_id}@{e.work_date}", reason="Invalid date format"))
                continue
            if not start_date <= work_date <= end_date:
                continue

            minutes = parse_time_to_minutes(e.timestamp)
            if minutes is None:
                errors.append(
                    RunError(
                        key=f"{employee_id}@{work_date.isoformat()}",
                        reason=f"Unparseable {e.source.value} {e.direction.value} time",
                    )
                )
                continue

            day = grouped.setdefault(employee_id, {}).setdefault(work_date, _DayPunches())
            self._add(day, e, minutes)

        for err in errors:
            logger.warning("Skipped punch row %s: %s", err.key, err.reason)
        return grouped, errors

    @staticmethod
    def _add(day: _DayPunches, event: PunchEvent, minutes: int) -> None:
        day.minutes[(event.source, event.direction)].append(minutes)
        if event.source == Source.SELF_REPORT and event.work_location is not None:
            day.work_location = event.work_location

    def _reconcile(self, employee_id: str, work_date: date, day: _DayPunches) -> CanonicalDayRecord:
        return self._reconciler.reconcile(
            employee_id,
            work_date,
            day.pair(Source.BIOMETRIC),
            day.pair(Source.SELF_REPORT),
            work_location=day.work_location,
        )

    def _derive_employee(
        self, employee_id: str, days: dict[date, _DayPunches]
    ) -> tuple[list[CanonicalDayRecord], list[RunError]]:
        done: list[CanonicalDayRecord] = []
        failed: list[RunError] = []
        for work_date in sorted(days):
            try:
                record = self._reconcile(employee_id, work_date, days[work_date])
                self._records.put_canonical_day_record(record.key, record)
            except (DomainError, ValueError) as e:
                logger.warning("Skipped %s on %s: %s", employee_id, work_date, e)
                failed.append(RunError(key=f"{employee_id}@{work_date.isoformat()}", reason=str(e)))
                continue
            except Exception as e:
                logger.warning("Derivation failed for %s on %s: %s", employee_id, work_date, e)
                failed.append(RunError(key=f"{employee_id}@{work_date.isoformat()}", reason=f"Execution error: {e}"))
                continue
            done.append(record)
        return done, failed
