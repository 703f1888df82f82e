from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import MINUTES_PER_DAY
from ..core.enums import HoursNote, Provenance, Remark, Source, WorkLocation
from ..core.policy import PolicyConfig
from .calculator.base import HoursCalculator
from .calculator.standard_calculator import StandardHoursCalculator
from .model import CanonicalDayRecord, HoursResult, PunchPair


_SOURCE_TO_PROVENANCE = {
    Source.BIOMETRIC: Provenance.BIOMETRIC,
    Source.SELF_REPORT: Provenance.SELF_REPORT,
}


@dataclass(frozen=True)
class BoundaryResolution:
    value: Optional[int]
    sources: frozenset[Source]
    diff_minutes: Optional[int] = None
    mismatched: bool = False

    @property
    def resolved(self) -> bool:
        return self.value is not None

    @property
    def provenance(self) -> Provenance:
        if len(self.sources) > 1:
            return Provenance.BOTH
        if len(self.sources) == 1:
            return _SOURCE_TO_PROVENANCE[next(iter(self.sources))]
        return Provenance.NONE


def clock_difference(a: int, b: int) -> int:
    """Distance between two clock readings, measured the short way round midnight."""
    diff = abs(int(a) - int(b)) % MINUTES_PER_DAY
    return min(diff, MINUTES_PER_DAY - diff)


class PunchReconciler:
    """Merge a biometric pair and a self-report pair into one canonical day.

    IN prefers the biometric clock (arrival badge is trusted); OUT prefers the
    self-reported end of day (people forget to badge out). The preference holds
    even on a mismatch; the mismatch is flagged, never resolved away.
    """

    def __init__(self, policy: PolicyConfig | None = None, *, hours_calculator: HoursCalculator | None = None):
        self._policy = policy or PolicyConfig()
        self._hours = hours_calculator or StandardHoursCalculator(self._policy)

    def resolve_boundary(
        self,
        biometric: Optional[int],
        self_report: Optional[int],
        *,
        preferred: Source,
    ) -> BoundaryResolution:
        if biometric is not None and self_report is not None:
            diff = clock_difference(biometric, self_report)
            value = biometric if preferred == Source.BIOMETRIC else self_report
            return BoundaryResolution(
                value=value,
                sources=frozenset({Source.BIOMETRIC, Source.SELF_REPORT}),
                diff_minutes=diff,
                mismatched=diff > self._policy.tolerance_minutes,
            )
        if biometric is not None:
            return BoundaryResolution(value=biometric, sources=frozenset({Source.BIOMETRIC}))
        if self_report is not None:
            return BoundaryResolution(value=self_report, sources=frozenset({Source.SELF_REPORT}))
        return BoundaryResolution(value=None, sources=frozenset())

    def reconcile(
        self,
        employee_id: str,
        work_date: date,
        biometric: PunchPair,
        self_report: PunchPair,
        *,
        work_location: Optional[WorkLocation] = None,
    ) -> CanonicalDayRecord:
        in_b = self.resolve_boundary(biometric.in_minutes, self_report.in_minutes, preferred=Source.BIOMETRIC)
        out_b = self.resolve_boundary(biometric.out_minutes, self_report.out_minutes, preferred=Source.SELF_REPORT)

        provenance = self._overall_provenance(in_b, out_b)
        remark = self._remark(in_b, out_b, biometric, self_report)

        mismatch_diffs = [b.diff_minutes for b in (in_b, out_b) if b.mismatched and b.diff_minutes is not None]
        discrepancy = max(mismatch_diffs) if mismatch_diffs else None

        return CanonicalDayRecord(
            employee_id=employee_id,
            work_date=work_date,
            in_minutes=in_b.value,
            out_minutes=out_b.value,
            provenance=provenance,
            remark=remark,
            hours=self._hours_for(provenance, in_b.value, out_b.value),
            in_source=in_b.provenance,
            out_source=out_b.provenance,
            in_diff_minutes=in_b.diff_minutes,
            out_diff_minutes=out_b.diff_minutes,
            discrepancy_minutes=discrepancy,
            work_location=work_location if provenance != Provenance.NONE else None,
        )

    def manual(
        self,
        employee_id: str,
        work_date: date,
        in_minutes: Optional[int],
        out_minutes: Optional[int],
        *,
        work_location: Optional[WorkLocation] = None,
    ) -> CanonicalDayRecord:
        """Admin override after an approved adjustment; bypasses source comparison."""
        if in_minutes is None and out_minutes is None:
            remark = Remark.INCOMPLETE_DATA
            provenance = Provenance.NONE
        else:
            provenance = Provenance.MANUAL
            if in_minutes is None:
                remark = Remark.INCOMPLETE_DATA
            elif out_minutes is None:
                remark = Remark.NO_PUNCH_OUT
            else:
                remark = Remark.MATCHED

        return CanonicalDayRecord(
            employee_id=employee_id,
            work_date=work_date,
            in_minutes=in_minutes,
            out_minutes=out_minutes,
            provenance=provenance,
            remark=remark,
            hours=self._hours_for(provenance, in_minutes, out_minutes),
            in_source=Provenance.MANUAL if in_minutes is not None else Provenance.NONE,
            out_source=Provenance.MANUAL if out_minutes is not None else Provenance.NONE,
            work_location=work_location if provenance != Provenance.NONE else None,
        )

    def _hours_for(self, provenance: Provenance, in_minutes: Optional[int], out_minutes: Optional[int]) -> HoursResult:
        if provenance == Provenance.NONE:
            return HoursResult.zero(HoursNote.MISSING_TIME_DATA)
        return self._hours.compute_hours(in_minutes, out_minutes, self._policy.apply_allowance)

    @staticmethod
    def _overall_provenance(in_b: BoundaryResolution, out_b: BoundaryResolution) -> Provenance:
        if len(in_b.sources) > 1 or len(out_b.sources) > 1:
            return Provenance.BOTH
        contributing = in_b.sources | out_b.sources
        if not contributing:
            return Provenance.NONE
        if len(contributing) > 1:
            # IN from one source, OUT from the other.
            return Provenance.BOTH
        return _SOURCE_TO_PROVENANCE[next(iter(contributing))]

    @staticmethod
    def _remark(
        in_b: BoundaryResolution,
        out_b: BoundaryResolution,
        biometric: PunchPair,
        self_report: PunchPair,
    ) -> Remark:
        if in_b.mismatched or out_b.mismatched:
            return Remark.MISMATCH
        if not in_b.resolved:
            return Remark.INCOMPLETE_DATA
        if not out_b.resolved:
            return Remark.NO_PUNCH_OUT
        if biometric.is_empty and self_report.is_complete:
            return Remark.BIOMETRIC_MISSING
        if self_report.is_empty and biometric.is_complete:
            return Remark.SELF_REPORT_MISSING
        return Remark.MATCHED
