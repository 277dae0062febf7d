from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal

from ..core.enums import AttendanceMark

_EXCLUSIVE = {
    AttendanceMark.DAY: AttendanceMark.DAY_HALF,
    AttendanceMark.DAY_HALF: AttendanceMark.DAY,
    AttendanceMark.NIGHT: AttendanceMark.NIGHT_HALF,
    AttendanceMark.NIGHT_HALF: AttendanceMark.NIGHT,
}


@dataclass(frozen=True)
class AttendanceStatus:
    """Marks of one employee for one day.

    A full and a half mark on the same axis never coexist; day and night
    marks combine freely (day + night is a double shift).
    """

    day: bool = False
    night: bool = False
    day_half: bool = False
    night_half: bool = False

    def __post_init__(self):
        if self.day and self.day_half:
            raise ValueError("day and day_half are mutually exclusive")
        if self.night and self.night_half:
            raise ValueError("night and night_half are mutually exclusive")

    def toggle(self, mark: AttendanceMark | str) -> "AttendanceStatus":
        """Flip one mark; switching a mark on clears its counterpart."""
        mark = AttendanceMark(mark)
        value = not getattr(self, mark.value)
        changes = {mark.value: value}
        if value:
            changes[_EXCLUSIVE[mark].value] = False
        return replace(self, **changes)


@dataclass(frozen=True)
class EmployeeAttendance:
    daily: dict[int, AttendanceStatus] = field(default_factory=dict)
    additional_shifts: Decimal = Decimal("0")


def attendance_record_id(year: int, month: int, section_id: str) -> str:
    """Natural key of a snapshot: ``{year}-{month:02}-{section_id}``.

    Safe because ``section_id`` is the section's UUID, never its codeId.
    """
    return f"{int(year)}-{int(month):02d}-{section_id}"


@dataclass(frozen=True)
class AttendanceRecord:
    """Attendance snapshot of a whole section for one month."""

    id: str
    year: int
    month: int
    section_id: str
    attendance_data: dict[str, EmployeeAttendance] = field(default_factory=dict)

    @classmethod
    def for_period(
        cls,
        *,
        year: int,
        month: int,
        section_id: str,
        attendance_data: dict[str, EmployeeAttendance] | None = None,
    ) -> "AttendanceRecord":
        return cls(
            id=attendance_record_id(year, month, section_id),
            year=int(year),
            month=int(month),
            section_id=section_id,
            attendance_data=dict(attendance_data or {}),
        )

    @property
    def period(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class AttendanceRecordSummary:
    """Read-model of the monthly listing table."""

    id: str
    year: int
    month: int
    section_id: str
    section_name: str
    total_day: int
    total_night: int
    total_halves: int
    total_additional: Decimal
