from decimal import Decimal

from src.workforce_payroll.workforce_payroll.attendance.model import AttendanceStatus, EmployeeAttendance
from src.workforce_payroll.workforce_payroll.attendance.mysql_attendance_repository import assemble_attendance_data


def test_assemble_rebuilds_daily_map_and_additional_shifts():
    day_rows = [
        {"employee_id": "e1", "day": 1, "day_status": 1, "night_status": 1, "day_half_status": 0, "night_half_status": 0},
        {"employee_id": "e1", "day": 2, "day_status": 0, "night_status": 0, "day_half_status": 1, "night_half_status": 0},
        {"employee_id": "e2", "day": 3, "day_status": 0, "night_status": 0, "day_half_status": 0, "night_half_status": 1},
    ]
    meta_rows = [
        {"employee_id": "e1", "additional_shifts": Decimal("1.50")},
        {"employee_id": "e3", "additional_shifts": 2.5},
    ]

    data = assemble_attendance_data(day_rows, meta_rows)

    assert data == {
        "e1": EmployeeAttendance(
            daily={1: AttendanceStatus(day=True, night=True), 2: AttendanceStatus(day_half=True)},
            additional_shifts=Decimal("1.50"),
        ),
        "e2": EmployeeAttendance(daily={3: AttendanceStatus(night_half=True)}, additional_shifts=Decimal("0")),
        "e3": EmployeeAttendance(daily={}, additional_shifts=Decimal("2.5")),
    }
