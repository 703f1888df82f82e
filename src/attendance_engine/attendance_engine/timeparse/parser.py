"""Normalize heterogeneous clock values into minutes since midnight.

Callers wrap raw values in one of the ``TimeInput`` variants before calling
``parse_time_to_minutes``; nothing here guesses the type of a bare value.
Every function returns ``None`` for unusable input instead of raising.
"""
from __future__ import annotations

import logging
import math
import re
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from ..core.constants import EXCEL_EPOCH_DAY, EXCEL_EPOCH_MONTH, EXCEL_EPOCH_YEAR, MINUTES_PER_DAY
from .model import ExcelSerial, NativeTimestamp, StringTime, TimeInput

logger = logging.getLogger(__name__)

EXCEL_EPOCH = datetime(EXCEL_EPOCH_YEAR, EXCEL_EPOCH_MONTH, EXCEL_EPOCH_DAY)

_CLOCK_RE = re.compile(
    r"^\s*(?P<h>\d{1,2}):(?P<m>\d{2})(?::(?P<s>\d{2}))?\s*(?P<ampm>[AaPp][Mm])?\s*$"
)

RawDate = Union[date, datetime, str, int, float]


def excel_serial_to_datetime(serial: float) -> Optional[datetime]:
    """``epoch + serial * 86_400_000 ms``, rounded to the millisecond."""
    if isinstance(serial, bool):
        return None
    try:
        value = float(serial)
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or math.isinf(value) or value < 0:
        return None
    try:
        return EXCEL_EPOCH + timedelta(milliseconds=round(value * 86_400_000))
    except OverflowError:
        return None


def _clock_to_minutes(hour: int, minute: int) -> Optional[int]:
    if not (0 <= hour < 24 and 0 <= minute < 60):
        return None
    return hour * 60 + minute


def _parse_text(text: str) -> Optional[int]:
    text = (text or "").strip()
    if not text:
        return None

    m = _CLOCK_RE.match(text)
    if m:
        hour = int(m.group("h"))
        minute = int(m.group("m"))
        second = int(m.group("s") or 0)
        if second >= 60:
            return None
        ampm = (m.group("ampm") or "").upper()
        if ampm:
            if not 1 <= hour <= 12:
                return None
            if ampm == "PM" and hour != 12:
                hour += 12
            elif ampm == "AM" and hour == 12:
                hour = 0
        return _clock_to_minutes(hour, minute)

    # Full date-time strings, e.g. "2026-01-05T09:12:00" or "2026-01-05 09:12".
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return _clock_to_minutes(parsed.hour, parsed.minute)


def parse_time_to_minutes(value: Optional[TimeInput]) -> Optional[int]:
    """Minutes since midnight in ``[0, 1440)``, or ``None`` when unparseable."""
    if value is None:
        return None

    if isinstance(value, StringTime):
        minutes = _parse_text(value.text)
    elif isinstance(value, ExcelSerial):
        dt = excel_serial_to_datetime(value.serial)
        minutes = _clock_to_minutes(dt.hour, dt.minute) if dt else None
    elif isinstance(value, NativeTimestamp):
        if isinstance(value.value, (datetime, time)):
            minutes = _clock_to_minutes(value.value.hour, value.value.minute)
        else:
            minutes = None
    else:
        minutes = None

    if minutes is None:
        logger.debug("Unparseable time input: %r", value)
        return None
    return minutes % MINUTES_PER_DAY


def parse_work_date(value: Optional[RawDate]) -> Optional[date]:
    """Resolve a raw work date (date, ISO text, or Excel serial day number)."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)):
        dt = excel_serial_to_datetime(value)
        return dt.date() if dt else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
        for fmt in ("%d/%m/%Y", "%d-%m-%Y"):
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
    return None
