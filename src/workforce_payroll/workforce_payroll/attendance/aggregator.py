"""Turn daily attendance marks into shift counts.

Two modes live here side by side:

* ``listing_totals`` counts every mark of a section snapshot independently,
  for the monthly summary table. It is diagnostic only and never used for pay.
* ``payroll_shift_count`` weighs one employee's marks as shift-units
  (full mark = 1, half mark = 0.5) and adds the free-form additional shifts.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.constants import FULL_SHIFT_UNITS, HALF_SHIFT_UNITS
from .model import AttendanceRecord, EmployeeAttendance


@dataclass(frozen=True)
class ListingTotals:
    total_day: int = 0
    total_night: int = 0
    total_day_half: int = 0
    total_night_half: int = 0
    total_additional: Decimal = Decimal("0")

    @property
    def total_halves(self) -> int:
        return self.total_day_half + self.total_night_half


@dataclass(frozen=True)
class ShiftCount:
    day: int
    night: int
    day_half: int
    night_half: int
    shift_count: Decimal
    additional_shifts: Decimal

    @property
    def total_shift_units(self) -> Decimal:
        return self.shift_count + self.additional_shifts


class ShiftAggregator:
    def listing_totals(self, record: AttendanceRecord) -> ListingTotals:
        day = night = day_half = night_half = 0
        additional = Decimal("0")

        for emp in record.attendance_data.values():
            for status in emp.daily.values():
                day += status.day
                night += status.night
                day_half += status.day_half
                night_half += status.night_half
            if emp.additional_shifts:
                additional += emp.additional_shifts

        return ListingTotals(
            total_day=day,
            total_night=night,
            total_day_half=day_half,
            total_night_half=night_half,
            total_additional=additional,
        )

    def payroll_shift_count(self, attendance: Optional[EmployeeAttendance]) -> ShiftCount:
        day = night = day_half = night_half = 0
        additional = Decimal("0")

        if attendance is not None:
            for status in attendance.daily.values():
                day += status.day
                night += status.night
                day_half += status.day_half
                night_half += status.night_half
            additional = attendance.additional_shifts or Decimal("0")

        shift_count = (day + night) * FULL_SHIFT_UNITS + (day_half + night_half) * HALF_SHIFT_UNITS
        return ShiftCount(
            day=day,
            night=night,
            day_half=day_half,
            night_half=night_half,
            shift_count=shift_count,
            additional_shifts=additional,
        )
