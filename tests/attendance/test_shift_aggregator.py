from decimal import Decimal

from src.workforce_payroll.workforce_payroll.attendance.aggregator import ShiftAggregator
from src.workforce_payroll.workforce_payroll.attendance.model import (
    AttendanceRecord,
    AttendanceStatus,
    EmployeeAttendance,
)


def _attendance(days: dict, additional="0") -> EmployeeAttendance:
    return EmployeeAttendance(daily=days, additional_shifts=Decimal(additional))


def test_payroll_shift_count_weights_half_marks():
    daily = {d: AttendanceStatus(day=True) for d in range(1, 11)}
    daily.update({d: AttendanceStatus(day_half=True) for d in range(11, 15)})

    count = ShiftAggregator().payroll_shift_count(_attendance(daily, "2"))

    assert count.shift_count == Decimal("12")
    assert count.additional_shifts == Decimal("2")
    assert count.total_shift_units == Decimal("14")


def test_double_shift_counts_two_units():
    daily = {1: AttendanceStatus(day=True, night=True), 2: AttendanceStatus(day_half=True, night_half=True)}

    count = ShiftAggregator().payroll_shift_count(_attendance(daily))

    assert count.shift_count == Decimal("3")


def test_missing_attendance_is_zero():
    count = ShiftAggregator().payroll_shift_count(None)

    assert count.total_shift_units == 0


def test_listing_totals_count_each_flag_independently():
    record = AttendanceRecord.for_period(
        year=2024,
        month=3,
        section_id="s1",
        attendance_data={
            "e1": _attendance(
                {1: AttendanceStatus(day=True, night=True), 2: AttendanceStatus(day_half=True, night=True)},
                "1.5",
            ),
            "e2": _attendance({1: AttendanceStatus(night_half=True)}, "0.5"),
            "gone": _attendance({}, "0"),
        },
    )

    totals = ShiftAggregator().listing_totals(record)

    assert totals.total_day == 1
    assert totals.total_night == 2
    assert totals.total_day_half == 1
    assert totals.total_night_half == 1
    assert totals.total_halves == 2
    assert totals.total_additional == Decimal("2.0")
