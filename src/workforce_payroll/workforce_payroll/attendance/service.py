from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..common.datetime_utils import days_in_period, format_period
from ..common.validators import require_selection, to_decimal
from ..core.exceptions import ValidationError
from ..organization.repository import OrganizationRepository
from .aggregator import ShiftAggregator
from .model import AttendanceRecord, AttendanceRecordSummary, EmployeeAttendance, attendance_record_id
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases around monthly attendance snapshots of a section."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        organization: OrganizationRepository,
        *,
        aggregator: Optional[ShiftAggregator] = None,
    ):
        self._attendance = attendance
        self._organization = organization
        self._aggregator = aggregator or ShiftAggregator()

    def _validate_period(self, year, month) -> tuple[int, int]:
        require_selection(year, "year")
        require_selection(month, "month")
        try:
            year, month = int(year), int(month)
        except (TypeError, ValueError):
            raise ValidationError("Year and month must be numbers") from None
        if not 1 <= month <= 12:
            raise ValidationError("Month must be between 1 and 12")
        return year, month

    def _validate_data(self, data: Mapping[str, EmployeeAttendance], period: str) -> dict[str, EmployeeAttendance]:
        last_day = days_in_period(period)
        cleaned: dict[str, EmployeeAttendance] = {}
        for employee_id, emp in data.items():
            for day in emp.daily:
                if not 1 <= int(day) <= last_day:
                    raise ValidationError(f"Day {day} is outside {period}")
            cleaned[employee_id] = EmployeeAttendance(
                daily={int(d): s for d, s in emp.daily.items()},
                additional_shifts=to_decimal(emp.additional_shifts or 0, "additionalShifts"),
            )
        return cleaned

    def save(
        self,
        *,
        year,
        month,
        section_id: str,
        attendance_data: Mapping[str, EmployeeAttendance],
    ) -> AttendanceRecord:
        """Create or fully replace the snapshot of (year, month, section).

        Last writer wins: there is no merge with what is already stored.
        """
        section_id = require_selection(section_id, "section")
        year, month = self._validate_period(year, month)
        if not self._organization.get_section(section_id):
            raise ValidationError("Section does not exist")

        data = self._validate_data(attendance_data, format_period(year, month))
        record = AttendanceRecord.for_period(year=year, month=month, section_id=section_id, attendance_data=data)
        saved = self._attendance.save_attendance_record(record)
        logger.info("Saved attendance %s (%s employees)", record.id, len(data))
        return saved

    def get(self, record_id: str) -> Optional[AttendanceRecord]:
        return self._attendance.get_attendance_record(record_id)

    def get_for_period(self, *, year, month, section_id: str) -> Optional[AttendanceRecord]:
        year, month = self._validate_period(year, month)
        return self._attendance.get_attendance_record(attendance_record_id(year, month, section_id))

    def delete(self, record_id: str) -> None:
        if not self._attendance.delete_attendance_record(require_selection(record_id, "record")):
            raise ValidationError("Attendance record does not exist")
        logger.info("Deleted attendance %s", record_id)

    def list_summaries(
        self,
        *,
        section_id: Optional[str] = None,
        year: Optional[int] = None,
    ) -> list[AttendanceRecordSummary]:
        section_names = {s.id: s.name for s in self._organization.get_sections()}
        summaries = []
        for record in self._attendance.get_attendance_records():
            if section_id and record.section_id != section_id:
                continue
            if year and record.year != int(year):
                continue
            totals = self._aggregator.listing_totals(record)
            summaries.append(
                AttendanceRecordSummary(
                    id=record.id,
                    year=record.year,
                    month=record.month,
                    section_id=record.section_id,
                    section_name=section_names.get(record.section_id, "-"),
                    total_day=totals.total_day,
                    total_night=totals.total_night,
                    total_halves=totals.total_halves,
                    total_additional=totals.total_additional,
                )
            )
        summaries.sort(key=lambda s: (s.year, s.month), reverse=True)
        return summaries
