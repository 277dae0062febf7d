from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import to_decimal
from ..core.exceptions import ValidationError
from ..container import Container
from .model import AttendanceRecord, AttendanceRecordSummary, AttendanceStatus, EmployeeAttendance

_MARKS = ("day", "night", "day_half", "night_half")


def status_from_json(payload: dict) -> AttendanceStatus:
    if not isinstance(payload, dict):
        raise ValidationError("Each day status must be an object")
    marks = {}
    for m in _MARKS:
        value = payload.get(m, False)
        if not isinstance(value, bool):
            raise ValidationError(f"{m} must be true or false")
        marks[m] = value
    try:
        return AttendanceStatus(**marks)
    except ValueError as exc:
        raise ValidationError(str(exc)) from None


def attendance_data_from_json(payload: dict) -> dict[str, EmployeeAttendance]:
    if not isinstance(payload, dict):
        raise ValidationError("attendance_data must be an object")

    data: dict[str, EmployeeAttendance] = {}
    for employee_id, emp in payload.items():
        if not isinstance(emp, dict):
            raise ValidationError(f"Attendance of employee {employee_id} must be an object")
        days = emp.get("daily") or {}
        if not isinstance(days, dict):
            raise ValidationError(f"daily of employee {employee_id} must be an object")
        daily = {}
        for day, status in days.items():
            try:
                day_number = int(day)
            except (TypeError, ValueError):
                raise ValidationError(f"Invalid day {day!r}") from None
            daily[day_number] = status_from_json(status if status is not None else {})
        data[employee_id] = EmployeeAttendance(
            daily=daily,
            additional_shifts=to_decimal(emp.get("additional_shifts") or 0, "additional_shifts"),
        )
    return data


def record_to_json(record: AttendanceRecord) -> dict:
    return {
        "id": record.id,
        "year": record.year,
        "month": record.month,
        "section_id": record.section_id,
        "attendance_data": {
            employee_id: {
                "daily": {
                    str(day): {m: getattr(status, m) for m in _MARKS}
                    for day, status in sorted(emp.daily.items())
                },
                "additional_shifts": str(emp.additional_shifts),
            }
            for employee_id, emp in record.attendance_data.items()
        },
    }


def summary_to_json(s: AttendanceRecordSummary) -> dict:
    return {
        "id": s.id,
        "year": s.year,
        "month": s.month,
        "section_id": s.section_id,
        "section_name": s.section_name,
        "total_day": s.total_day,
        "total_night": s.total_night,
        "total_halves": s.total_halves,
        "total_additional": str(s.total_additional),
    }


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance-records", methods=["GET"], endpoint="attendance_list")
    def attendance_list():
        summaries = service.list_summaries(
            section_id=request.args.get("section_id") or None,
            year=request.args.get("year", type=int),
        )
        return jsonify([summary_to_json(s) for s in summaries])

    @app.route("/api/attendance-records/<record_id>", methods=["GET"], endpoint="attendance_get")
    def attendance_get(record_id: str):
        record = service.get(record_id)
        if record is None:
            return jsonify({"error": "attendance_not_found", "message": "Attendance record does not exist"}), 404
        return jsonify(record_to_json(record))

    @app.route("/api/attendance-records", methods=["PUT"], endpoint="attendance_save")
    def attendance_save():
        payload = request.get_json(silent=True) or {}
        record = service.save(
            year=payload.get("year"),
            month=payload.get("month"),
            section_id=payload.get("section_id"),
            attendance_data=attendance_data_from_json(payload.get("attendance_data") or {}),
        )
        return jsonify(record_to_json(record))

    @app.route("/api/attendance-records/<record_id>", methods=["DELETE"], endpoint="attendance_delete")
    def attendance_delete(record_id: str):
        service.delete(record_id)
        return "", 204
