from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from ..attendance.model import CanonicalDayRecord
from ..core.enums import HoursNote, Provenance, QualityStatus, Remark, Severity
from ..core.policy import PolicyConfig
from .model import Discrepancy, QualityItem, QualityReport


def classify_discrepancy(minutes: int, policy: PolicyConfig) -> Severity:
    if minutes > policy.high_discrepancy_minutes:
        return Severity.HIGH
    if minutes >= policy.medium_discrepancy_minutes:
        return Severity.MEDIUM
    return Severity.LOW


def _percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return int((Decimal(part) * 100 / Decimal(whole)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _discrepancy_item(items: Sequence[Discrepancy], severity: Severity) -> QualityItem:
    return QualityItem(
        type="time_discrepancies",
        severity=severity,
        count=len(items),
        details={"details": [d.to_dict() for d in items]},
    )


def build_quality_report(
    daily_breakdown: Sequence[CanonicalDayRecord],
    discrepancies: Sequence[Discrepancy],
    *,
    days_present: int,
    days_absent: int,
    policy: PolicyConfig,
) -> QualityReport:
    issues: list[QualityItem] = []
    warnings: list[QualityItem] = []
    info: list[QualityItem] = []

    # Includes no-punch days (provenance NONE).
    incomplete = [
        r for r in daily_breakdown
        if r.hours.note == HoursNote.MISSING_TIME_DATA and r.remark == Remark.INCOMPLETE_DATA
    ]
    if incomplete:
        issues.append(
            QualityItem(
                type="incomplete_data",
                severity=Severity.HIGH,
                count=len(incomplete),
                details={"days": [r.work_date.isoformat() for r in incomplete]},
            )
        )

    invalid = [r for r in daily_breakdown if r.hours.note in (HoursNote.OVER_24H, HoursNote.INVALID_RANGE)]
    if invalid:
        issues.append(
            QualityItem(
                type="invalid_time_range",
                severity=Severity.HIGH,
                count=len(invalid),
                details={"days": [{"date": r.work_date.isoformat(), "note": r.hours.note.value} for r in invalid]},
            )
        )

    high = [d for d in discrepancies if d.severity == Severity.HIGH]
    if high:
        issues.append(_discrepancy_item(high, Severity.HIGH))

    medium = [d for d in discrepancies if d.severity == Severity.MEDIUM]
    if medium:
        warnings.append(_discrepancy_item(medium, Severity.MEDIUM))

    excessive = [r for r in daily_breakdown if r.hours.overtime_hours > policy.excessive_overtime_hours]
    if excessive:
        warnings.append(
            QualityItem(
                type="excessive_overtime",
                severity=Severity.MEDIUM,
                count=len(excessive),
                details={"days": [{"date": r.work_date.isoformat(), "hours": r.hours.overtime_hours} for r in excessive]},
            )
        )

    tracked_days = days_present + days_absent
    attendance_rate = _percent(days_present, tracked_days)
    if tracked_days > 0 and Decimal(days_present) * 100 / Decimal(tracked_days) < Decimal(str(policy.low_attendance_rate)):
        warnings.append(QualityItem(type="low_attendance", severity=Severity.MEDIUM, details={"rate": attendance_rate}))

    by_source = {p: 0 for p in (Provenance.BIOMETRIC, Provenance.SELF_REPORT, Provenance.BOTH, Provenance.MANUAL)}
    for r in daily_breakdown:
        if r.provenance in by_source:
            by_source[r.provenance] += 1
    info.append(
        QualityItem(
            type="data_sources",
            details={
                "biometric_only": by_source[Provenance.BIOMETRIC],
                "self_report_only": by_source[Provenance.SELF_REPORT],
                "both": by_source[Provenance.BOTH],
                "manual": by_source[Provenance.MANUAL],
                "total": len(daily_breakdown),
            },
        )
    )

    if issues:
        status = QualityStatus.NEEDS_ATTENTION
    elif warnings:
        status = QualityStatus.REVIEW_RECOMMENDED
    else:
        status = QualityStatus.GOOD

    return QualityReport(
        overall_status=status,
        issues=tuple(issues),
        warnings=tuple(warnings),
        info=tuple(info),
        attendance_rate=attendance_rate,
        data_completeness=_percent(len(daily_breakdown) - len(incomplete), len(daily_breakdown)),
    )
