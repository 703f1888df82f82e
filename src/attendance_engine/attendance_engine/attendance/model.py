from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional, Union

from ..common.datetime_utils import format_minutes
from ..core.enums import Direction, HoursNote, Provenance, Remark, Source, WorkLocation
from ..timeparse.model import TimeInput


@dataclass(frozen=True)
class PunchEvent:
    """Một lần chấm công thô (máy sinh trắc hoặc tự báo bắt đầu/kết thúc ngày).

    ``work_date`` is kept as received (date, ISO text or Excel serial) and is
    resolved during batch derivation so a bad row can be reported, not raised.
    """

    employee_id: str
    work_date: Union[date, str, int, float]
    direction: Direction
    source: Source
    timestamp: TimeInput
    work_location: Optional[WorkLocation] = None


@dataclass(frozen=True)
class PunchPair:
    """At most one IN and one OUT (minutes since midnight) from a single source."""

    in_minutes: Optional[int] = None
    out_minutes: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.in_minutes is None and self.out_minutes is None

    @property
    def is_complete(self) -> bool:
        return self.in_minutes is not None and self.out_minutes is not None


@dataclass(frozen=True)
class HoursResult:
    total_hours: float = 0.0
    regular_hours: float = 0.0
    overtime_hours: float = 0.0
    note: HoursNote = HoursNote.MISSING_TIME_DATA

    @classmethod
    def zero(cls, note: HoursNote) -> "HoursResult":
        return cls(total_hours=0.0, regular_hours=0.0, overtime_hours=0.0, note=note)


@dataclass(frozen=True)
class DayKey:
    employee_id: str
    work_date: date


@dataclass(frozen=True)
class CanonicalDayRecord:
    """Bản ghi chấm công chuẩn hoá: duy nhất cho mỗi (employee_id, work_date)."""

    employee_id: str
    work_date: date
    in_minutes: Optional[int]
    out_minutes: Optional[int]
    provenance: Provenance
    remark: Remark
    hours: HoursResult = field(default_factory=lambda: HoursResult.zero(HoursNote.MISSING_TIME_DATA))
    in_source: Provenance = Provenance.NONE
    out_source: Provenance = Provenance.NONE
    in_diff_minutes: Optional[int] = None
    out_diff_minutes: Optional[int] = None
    discrepancy_minutes: Optional[int] = None
    work_location: Optional[WorkLocation] = None

    @property
    def key(self) -> DayKey:
        return DayKey(self.employee_id, self.work_date)

    @property
    def is_present(self) -> bool:
        return self.provenance != Provenance.NONE

    @property
    def in_time(self) -> str:
        return format_minutes(self.in_minutes)

    @property
    def out_time(self) -> str:
        return format_minutes(self.out_minutes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "employee_id": self.employee_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "in_time": self.in_time,
            "out_time": self.out_time,
            "total_hours": self.hours.total_hours,
            "regular_hours": self.hours.regular_hours,
            "overtime_hours": self.hours.overtime_hours,
            "note": self.hours.note.value,
            "provenance": self.provenance.value,
            "in_source": self.in_source.value,
            "out_source": self.out_source.value,
            "remark": self.remark.value,
            "in_diff_minutes": self.in_diff_minutes,
            "out_diff_minutes": self.out_diff_minutes,
            "discrepancy_minutes": self.discrepancy_minutes,
            "work_location": self.work_location.value if self.work_location else None,
        }


@dataclass(frozen=True)
class RunError:
    """A skipped input row or failed unit of work; never aborts a batch."""

    key: str
    reason: str


@dataclass(frozen=True)
class ReconciliationSummary:
    start_date: date
    end_date: date
    total_records: int
    within_tolerance: int
    mismatches_detected: int
    provenance_distribution: dict[str, int]
    remarks_distribution: dict[str, int]
