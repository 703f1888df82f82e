from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Union


@dataclass(frozen=True)
class StringTime:
    """Clock text as typed or exported: "09:30", "09:30:15", "9:30 PM", ISO date-time."""

    text: str


@dataclass(frozen=True)
class ExcelSerial:
    """Spreadsheet serial: whole days since 1899-12-30, fraction = time of day."""

    serial: float


@dataclass(frozen=True)
class NativeTimestamp:
    value: Union[datetime, time]


TimeInput = Union[StringTime, ExcelSerial, NativeTimestamp]
