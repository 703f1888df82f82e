from __future__ import annotations

from enum import Enum


class Direction(str, Enum):
    """Chiều của một lần chấm công."""

    IN = "IN"
    OUT = "OUT"


class Source(str, Enum):
    """Nguồn ghi nhận thời gian thô."""

    BIOMETRIC = "BIOMETRIC"
    SELF_REPORT = "SELF_REPORT"


class Provenance(str, Enum):
    """Nguồn đã đóng góp vào bản ghi chuẩn hoá của một ngày."""

    BIOMETRIC = "BIOMETRIC"
    SELF_REPORT = "SELF_REPORT"
    BOTH = "BOTH"
    MANUAL = "MANUAL"
    NONE = "NONE"


class Remark(str, Enum):
    MATCHED = "MATCHED"
    BIOMETRIC_MISSING = "BIOMETRIC_MISSING"
    SELF_REPORT_MISSING = "SELF_REPORT_MISSING"
    MISMATCH = "MISMATCH"
    NO_PUNCH_OUT = "NO_PUNCH_OUT"
    INCOMPLETE_DATA = "INCOMPLETE_DATA"


class HoursNote(str, Enum):
    OK = "ok"
    MISSING_TIME_DATA = "missing_time_data"
    INVALID_RANGE = "invalid_time_range"
    OVER_24H = "worked_over_24h"


class WorkLocation(str, Enum):
    OFFICE = "OFFICE"
    WFH = "WFH"


class SalaryType(str, Enum):
    MONTHLY = "MONTHLY"
    DAILY = "DAILY"
    HOURLY = "HOURLY"


class PayrollStatus(str, Enum):
    """Trạng thái bảng lương; NEEDS_REVIEW chặn việc tự động duyệt."""

    PROCESSED = "processed"
    NEEDS_REVIEW = "needs_review"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class QualityStatus(str, Enum):
    GOOD = "good"
    REVIEW_RECOMMENDED = "review_recommended"
    NEEDS_ATTENTION = "needs_attention"
