from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import Direction, HoursNote, Provenance, Remark, Source, WorkLocation
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, mysql_time_of_day, optional_int
from ..timeparse.model import NativeTimestamp, StringTime
from .model import CanonicalDayRecord, DayKey, HoursResult, PunchEvent
from .repository import DayRecordRepository, PunchEventRepository

_DAY_COLUMNS = """
    employee_id, work_date, in_minutes, out_minutes, provenance, in_source, out_source,
    remark, in_diff_minutes, out_diff_minutes, discrepancy_minutes, work_location,
    total_hours, regular_hours, overtime_hours, hours_note
"""


def _row_to_record(r: dict) -> CanonicalDayRecord:
    return CanonicalDayRecord(
        employee_id=str(r["employee_id"]),
        work_date=r["work_date"],
        in_minutes=optional_int(r.get("in_minutes")),
        out_minutes=optional_int(r.get("out_minutes")),
        provenance=Provenance(r["provenance"]),
        remark=Remark(r["remark"]),
        hours=HoursResult(
            total_hours=float(r.get("total_hours") or 0),
            regular_hours=float(r.get("regular_hours") or 0),
            overtime_hours=float(r.get("overtime_hours") or 0),
            note=HoursNote(r["hours_note"]),
        ),
        in_source=Provenance(r["in_source"]),
        out_source=Provenance(r["out_source"]),
        in_diff_minutes=optional_int(r.get("in_diff_minutes")),
        out_diff_minutes=optional_int(r.get("out_diff_minutes")),
        discrepancy_minutes=optional_int(r.get("discrepancy_minutes")),
        work_location=WorkLocation(r["work_location"]) if r.get("work_location") else None,
    )


class MySQLDayRecordRepository(DayRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def put_canonical_day_record(self, key: DayKey, record: CanonicalDayRecord) -> None:
        if key != record.key:
            raise ValidationError(f"Khoá {key} không khớp với bản ghi {record.key}")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO canonical_day_records({_DAY_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    in_minutes=VALUES(in_minutes), out_minutes=VALUES(out_minutes),
                    provenance=VALUES(provenance), in_source=VALUES(in_source), out_source=VALUES(out_source),
                    remark=VALUES(remark), in_diff_minutes=VALUES(in_diff_minutes),
                    out_diff_minutes=VALUES(out_diff_minutes), discrepancy_minutes=VALUES(discrepancy_minutes),
                    work_location=VALUES(work_location), total_hours=VALUES(total_hours),
                    regular_hours=VALUES(regular_hours), overtime_hours=VALUES(overtime_hours),
                    hours_note=VALUES(hours_note)
                """,
                (
                    record.employee_id,
                    record.work_date,
                    record.in_minutes,
                    record.out_minutes,
                    record.provenance.value,
                    record.in_source.value,
                    record.out_source.value,
                    record.remark.value,
                    record.in_diff_minutes,
                    record.out_diff_minutes,
                    record.discrepancy_minutes,
                    record.work_location.value if record.work_location else None,
                    record.hours.total_hours,
                    record.hours.regular_hours,
                    record.hours.overtime_hours,
                    record.hours.note.value,
                ),
            )

    def get(self, key: DayKey) -> Optional[CanonicalDayRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_DAY_COLUMNS} FROM canonical_day_records WHERE employee_id=%s AND work_date=%s",
                (key.employee_id, key.work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_for_employee(self, employee_id: str, *, start_date: date, end_date: date) -> Sequence[CanonicalDayRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_DAY_COLUMNS}
                FROM canonical_day_records
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (employee_id, start_date, end_date),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_range(self, *, start_date: date, end_date: date) -> Sequence[CanonicalDayRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_DAY_COLUMNS}
                FROM canonical_day_records
                WHERE work_date BETWEEN %s AND %s
                ORDER BY employee_id ASC, work_date ASC
                """,
                (start_date, end_date),
            )
            return [_row_to_record(r) for r in fetchall(cur)]


class MySQLPunchEventRepository(PunchEventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_events(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_ids: Optional[Iterable[str]] = None,
    ) -> Sequence[PunchEvent]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if employee_ids is not None:
            ids = list(employee_ids)
            if not ids:
                return []
            clauses.append(f"employee_id IN ({', '.join(['%s'] * len(ids))})")
            params.extend(ids)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT employee_id, work_date, direction, source, punch_time, punch_text, work_location
                FROM punch_events
                WHERE {where}
                ORDER BY employee_id ASC, work_date ASC, event_id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

        events: list[PunchEvent] = []
        for r in rows:
            punch_time = mysql_time_of_day(r.get("punch_time"))
            timestamp = NativeTimestamp(punch_time) if punch_time else StringTime(r.get("punch_text") or "")
            events.append(
                PunchEvent(
                    employee_id=str(r["employee_id"]),
                    work_date=r["work_date"],
                    direction=Direction(r["direction"]),
                    source=Source(r["source"]),
                    timestamp=timestamp,
                    work_location=WorkLocation(r["work_location"]) if r.get("work_location") else None,
                )
            )
        return events
