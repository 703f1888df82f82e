from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from src.attendance_engine.attendance_engine.attendance.model import CanonicalDayRecord, DayKey, HoursResult
from src.attendance_engine.attendance_engine.attendance.mysql_attendance_repository import (
    MySQLDayRecordRepository,
    MySQLPunchEventRepository,
)
from src.attendance_engine.attendance_engine.core.enums import (
    Direction,
    HoursNote,
    Provenance,
    Remark,
    Source,
    WorkLocation,
)
from src.attendance_engine.attendance_engine.timeparse.model import NativeTimestamp, StringTime
from src.attendance_engine.attendance_engine.timeparse.parser import parse_time_to_minutes


class FakeCursor:
    def __init__(self, rows):
        self.rows = rows
        self.executed: list[tuple[str, tuple]] = []

    def execute(self, sql, params=()):
        self.executed.append((sql, params))

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def fetchall(self):
        return list(self.rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.closed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        pass

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, rows=()):
        self.cursor = FakeCursor(list(rows))
        self.conn = FakeConnection(self.cursor)

    def connect(self, *, with_database: bool = True):
        return self.conn


def test_upsert_uses_on_duplicate_key():
    factory = FakeFactory()
    repo = MySQLDayRecordRepository(factory)
    rec = CanonicalDayRecord(
        employee_id="E1",
        work_date=date(2024, 5, 2),
        in_minutes=540,
        out_minutes=1020,
        provenance=Provenance.BOTH,
        remark=Remark.MATCHED,
        hours=HoursResult(9.0, 8.0, 1.0, HoursNote.OK),
        in_source=Provenance.BOTH,
        out_source=Provenance.SELF_REPORT,
        work_location=WorkLocation.WFH,
    )

    repo.put_canonical_day_record(rec.key, rec)

    [(sql, params)] = factory.cursor.executed
    assert "ON DUPLICATE KEY UPDATE" in sql
    assert params[:2] == ("E1", date(2024, 5, 2))
    assert "WFH" in params
    assert factory.conn.committed and factory.conn.closed


def test_get_maps_row():
    row = {
        "employee_id": "E1",
        "work_date": date(2024, 5, 2),
        "in_minutes": 540,
        "out_minutes": None,
        "provenance": "BIOMETRIC",
        "in_source": "BIOMETRIC",
        "out_source": "NONE",
        "remark": "NO_PUNCH_OUT",
        "in_diff_minutes": None,
        "out_diff_minutes": None,
        "discrepancy_minutes": None,
        "work_location": None,
        "total_hours": Decimal("0.00"),
        "regular_hours": Decimal("0.00"),
        "overtime_hours": Decimal("0.00"),
        "hours_note": "missing_time_data",
    }
    rec = MySQLDayRecordRepository(FakeFactory([row])).get(DayKey("E1", date(2024, 5, 2)))

    assert rec.remark == Remark.NO_PUNCH_OUT
    assert rec.hours.note == HoursNote.MISSING_TIME_DATA
    assert rec.out_source == Provenance.NONE
    assert rec.in_time == "09:00"


def test_punch_rows_map_to_time_inputs():
    rows = [
        {
            "employee_id": "E1",
            "work_date": date(2024, 5, 2),
            "direction": "IN",
            "source": "BIOMETRIC",
            "punch_time": timedelta(hours=8, minutes=55),
            "punch_text": None,
            "work_location": None,
        },
        {
            "employee_id": "E1",
            "work_date": date(2024, 5, 2),
            "direction": "OUT",
            "source": "SELF_REPORT",
            "punch_time": None,
            "punch_text": "6:05 PM",
            "work_location": "OFFICE",
        },
    ]
    factory = FakeFactory(rows)
    events = MySQLPunchEventRepository(factory).list_events(
        start_date=date(2024, 5, 1), end_date=date(2024, 5, 31), employee_ids=["E1"]
    )

    assert isinstance(events[0].timestamp, NativeTimestamp)
    assert isinstance(events[1].timestamp, StringTime)
    assert events[1].direction == Direction.OUT
    assert events[1].source == Source.SELF_REPORT
    assert events[1].work_location == WorkLocation.OFFICE
    assert [parse_time_to_minutes(e.timestamp) for e in events] == [535, 1085]
    [(_, params)] = factory.cursor.executed
    assert params == (date(2024, 5, 1), date(2024, 5, 31), "E1")


def test_empty_employee_filter_skips_query():
    factory = FakeFactory()
    assert MySQLPunchEventRepository(factory).list_events(
        start_date=date(2024, 5, 1), end_date=date(2024, 5, 31), employee_ids=[]
    ) == []
    assert factory.cursor.executed == []
