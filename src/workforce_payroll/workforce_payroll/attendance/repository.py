from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_attendance_records(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_attendance_record(self, record_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def save_attendance_record(self, record: AttendanceRecord) -> AttendanceRecord:
        """Upsert by id; the stored snapshot is replaced as a whole."""

        raise NotImplementedError

    def delete_attendance_record(self, record_id: str) -> bool:
        raise NotImplementedError
