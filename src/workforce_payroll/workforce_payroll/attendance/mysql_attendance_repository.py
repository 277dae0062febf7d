from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import AttendanceRecord, AttendanceStatus, EmployeeAttendance
from .repository import AttendanceRepository


def assemble_attendance_data(day_rows: Iterable[dict], meta_rows: Iterable[dict]) -> dict[str, EmployeeAttendance]:
    """Rebuild the per-employee map from ``attendance_data`` and metadata rows."""
    daily: dict[str, dict[int, AttendanceStatus]] = {}
    for r in day_rows:
        daily.setdefault(r["employee_id"], {})[int(r["day"])] = AttendanceStatus(
            day=bool(r["day_status"]),
            night=bool(r["night_status"]),
            day_half=bool(r["day_half_status"]),
            night_half=bool(r["night_half_status"]),
        )

    additional = {m["employee_id"]: as_decimal(m["additional_shifts"]) for m in meta_rows}

    data: dict[str, EmployeeAttendance] = {}
    for employee_id in list(daily) + [e for e in additional if e not in daily]:
        data[employee_id] = EmployeeAttendance(
            daily=daily.get(employee_id, {}),
            additional_shifts=additional.get(employee_id, as_decimal(None)),
        )
    return data


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load_data(self, cur, record_ids: Sequence[str]) -> dict[str, dict[str, EmployeeAttendance]]:
        if not record_ids:
            return {}
        placeholders = ", ".join(["%s"] * len(record_ids))

        cur.execute(
            f"""
            SELECT record_id, employee_id, day, day_status, night_status, day_half_status, night_half_status
            FROM attendance_data
            WHERE record_id IN ({placeholders})
            """,
            tuple(record_ids),
        )
        day_rows = fetchall(cur)
        cur.execute(
            f"""
            SELECT record_id, employee_id, additional_shifts
            FROM employee_attendance_metadata
            WHERE record_id IN ({placeholders})
            """,
            tuple(record_ids),
        )
        meta_rows = fetchall(cur)

        return {
            rid: assemble_attendance_data(
                (r for r in day_rows if r["record_id"] == rid),
                (m for m in meta_rows if m["record_id"] == rid),
            )
            for rid in record_ids
        }

    def get_attendance_records(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, year, month, section_id
                FROM attendance_records
                ORDER BY year DESC, month DESC
                """
            )
            rows = fetchall(cur)
            data = self._load_data(cur, [r["id"] for r in rows])
            return [
                AttendanceRecord(
                    id=r["id"],
                    year=int(r["year"]),
                    month=int(r["month"]),
                    section_id=r["section_id"],
                    attendance_data=data.get(r["id"], {}),
                )
                for r in rows
            ]

    def get_attendance_record(self, record_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, year, month, section_id FROM attendance_records WHERE id=%s",
                (record_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            data = self._load_data(cur, [r["id"]])
            return AttendanceRecord(
                id=r["id"],
                year=int(r["year"]),
                month=int(r["month"]),
                section_id=r["section_id"],
                attendance_data=data.get(r["id"], {}),
            )

    def save_attendance_record(self, record: AttendanceRecord) -> AttendanceRecord:
        # Whole-snapshot overwrite: child rows are deleted and re-inserted.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records (id, year, month, section_id)
                VALUES (%s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE year=VALUES(year), month=VALUES(month), section_id=VALUES(section_id)
                """,
                (record.id, record.year, record.month, record.section_id),
            )
            cur.execute("DELETE FROM attendance_data WHERE record_id=%s", (record.id,))
            cur.execute("DELETE FROM employee_attendance_metadata WHERE record_id=%s", (record.id,))

            day_rows = []
            meta_rows = []
            for employee_id, emp in record.attendance_data.items():
                for day, status in emp.daily.items():
                    day_rows.append(
                        (
                            record.id,
                            employee_id,
                            int(day),
                            int(status.day),
                            int(status.night),
                            int(status.day_half),
                            int(status.night_half),
                        )
                    )
                meta_rows.append((record.id, employee_id, emp.additional_shifts))

            if day_rows:
                cur.executemany(
                    """
                    INSERT INTO attendance_data
                        (record_id, employee_id, day, day_status, night_status, day_half_status, night_half_status)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    """,
                    day_rows,
                )
            if meta_rows:
                cur.executemany(
                    """
                    INSERT INTO employee_attendance_metadata (record_id, employee_id, additional_shifts)
                    VALUES (%s, %s, %s)
                    """,
                    meta_rows,
                )
        return record

    def delete_attendance_record(self, record_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE id=%s", (record_id,))
            return cur.rowcount > 0
