import pytest

from src.attendance_engine.attendance_engine.attendance.calculator.standard_calculator import StandardHoursCalculator
from src.attendance_engine.attendance_engine.core.enums import HoursNote
from src.attendance_engine.attendance_engine.core.policy import PolicyConfig


def test_allowance_extends_both_ends_and_splits_overtime():
    calc = StandardHoursCalculator(PolicyConfig())
    res = calc.compute_hours(9 * 60, 17 * 60, True)

    assert res.note == HoursNote.OK
    assert res.total_hours == pytest.approx(9.0)
    assert res.regular_hours == pytest.approx(8.0)
    assert res.overtime_hours == pytest.approx(1.0)


def test_without_allowance():
    res = StandardHoursCalculator().compute_hours(9 * 60, 17 * 60 + 20, False)
    assert res.total_hours == pytest.approx(8.33)
    assert res.regular_hours == pytest.approx(8.0)
    assert res.overtime_hours == pytest.approx(0.33)


def test_overnight_shift_wraps_midnight():
    res = StandardHoursCalculator().compute_hours(22 * 60, 6 * 60, False)
    assert res.note == HoursNote.OK
    assert res.total_hours == pytest.approx(8.0)


def test_start_allowance_does_not_go_before_midnight():
    res = StandardHoursCalculator().compute_hours(10, 8 * 60, True)
    # start clamps to 00:00, end moves to 08:30
    assert res.total_hours == pytest.approx(8.5)


def test_missing_boundary():
    res = StandardHoursCalculator().compute_hours(9 * 60, None, True)
    assert res.note == HoursNote.MISSING_TIME_DATA
    assert res.total_hours == 0.0


def test_over_max_daily_hours():
    res = StandardHoursCalculator().compute_hours(0, 1439, True)
    assert res.note == HoursNote.OVER_24H
    assert res.total_hours == 0.0
    assert res.regular_hours == 0.0


def test_regular_hours_cap_from_policy():
    res = StandardHoursCalculator(PolicyConfig(regular_hours_cap=6)).compute_hours(8 * 60, 16 * 60, False)
    assert res.regular_hours == pytest.approx(6.0)
    assert res.overtime_hours == pytest.approx(2.0)


def test_allowance_example_from_policy_defaults():
    # 09:10 -> 08:40, 18:00 -> 18:30
    res = StandardHoursCalculator().compute_hours(9 * 60 + 10, 18 * 60, True)
    assert res.total_hours == pytest.approx(9.83)
    assert res.regular_hours == pytest.approx(8.0)
    assert res.overtime_hours == pytest.approx(1.83)


@pytest.mark.parametrize("apply_allowance", [True, False])
@pytest.mark.parametrize(
    "in_minutes,out_minutes",
    [(None, None), (None, 600), (600, None), (0, 0), (0, 1439), (1439, 0), (1020, 540), (480, 1200), (30, 1410)],
)
def test_hours_invariants_hold_and_never_raise(in_minutes, out_minutes, apply_allowance):
    res = StandardHoursCalculator().compute_hours(in_minutes, out_minutes, apply_allowance)

    assert res.total_hours == pytest.approx(res.regular_hours + res.overtime_hours)
    assert res.overtime_hours == pytest.approx(max(0.0, res.total_hours - 8))
    if res.note != HoursNote.OK:
        assert res.total_hours == 0.0
