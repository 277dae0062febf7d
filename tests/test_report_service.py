from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

import pytest

from src.workforce_payroll.workforce_payroll.attendance.model import (
    AttendanceRecord,
    AttendanceStatus,
    EmployeeAttendance,
)
from src.workforce_payroll.workforce_payroll.core.enums import PrepaymentType
from src.workforce_payroll.workforce_payroll.core.exceptions import (
    AttendanceNotFoundError,
    DataIntegrityError,
    NoEmployeesError,
    SalaryNotSetError,
    SelectionRequiredError,
)
from src.workforce_payroll.workforce_payroll.organization.model import SalaryRecord
from src.workforce_payroll.workforce_payroll.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.workforce_payroll.workforce_payroll.payroll.service import PayrollReportService
from src.workforce_payroll.workforce_payroll.prepayments.model import Prepayment


class SpyCalculator(StandardPayrollCalculator):
    def __init__(self):
        super().__init__()
        self.calls = 0

    def calculate(self, **kwargs):
        self.calls += 1
        return super().calculate(**kwargs)


@pytest.fixture
def march_attendance(attendance_repo, section):
    daily_e1 = {d: AttendanceStatus(day=True) for d in range(1, 11)}
    daily_e1.update({d: AttendanceStatus(day_half=True) for d in range(11, 15)})
    daily_e2 = {d: AttendanceStatus(day=True) for d in range(1, 6)}
    daily_e2[6] = AttendanceStatus(night=True)

    record = AttendanceRecord.for_period(
        year=2024,
        month=3,
        section_id=section.id,
        attendance_data={
            "e1": EmployeeAttendance(daily=daily_e1, additional_shifts=Decimal("2")),
            "e2": EmployeeAttendance(daily=daily_e2),
            "former-employee": EmployeeAttendance(daily={1: AttendanceStatus(day=True)}),
        },
    )
    return attendance_repo.save_attendance_record(record)


def _service(organization, attendance_repo, ledger, calculator=None):
    return PayrollReportService(attendance_repo, organization, ledger, calculator=calculator)


def test_report_rows_for_every_employee(organization, attendance_repo, ledger, section, march_attendance):
    ledger.create(
        Prepayment(id=None, type=PrepaymentType.SALARY_ADVANCE, month="2024-03", employee_id="e1", amount=1000)
    )
    ledger.create(
        Prepayment(id=None, type=PrepaymentType.SALARY_ADVANCE, month="2024-02", employee_id="e1", amount=700)
    )

    report = _service(organization, attendance_repo, ledger).generate_payment_report(
        section_id=section.id, period="2024-03"
    )

    assert report.section_name == "Kelanitissa"
    assert report.period_label == "March 2024"
    assert [r.employee_number for r in report.rows] == ["1001", "1002", "1003"]

    e1, e2, e3 = report.rows
    assert e1.short_name == "K P Silva"
    assert (e1.shift_count, e1.additional_shift_count, e1.salary_per_shift) == (12, 2, 500)
    assert (e1.gross, e1.epf12, e1.epf8, e1.etf3) == (7000, 840, 560, 210)
    assert (e1.advance, e1.other, e1.net_pay) == (1000, 0, 4390)

    assert e2.salary_per_shift == 400
    assert (e2.gross, e2.net_pay) == (2400, Decimal("1848"))

    assert e3.shift_count == 0 and e3.gross == 0 and e3.net_pay == 0
    assert report.totals["gross"] == Decimal("9400")


def test_missing_salary_aborts_whole_report(organization, attendance_repo, ledger, section, march_attendance):
    labour = organization.groups["g-lab"]
    organization.groups["g-lab"] = replace(labour, salary_history=(SalaryRecord("2024-02", Decimal("400")),))
    calculator = SpyCalculator()

    with pytest.raises(SalaryNotSetError) as exc_info:
        _service(organization, attendance_repo, ledger, calculator).generate_payment_report(
            section_id=section.id, period="2024-03"
        )

    assert exc_info.value.group_name == "Labour"
    assert exc_info.value.period == "2024-03"
    assert "March 2024" in str(exc_info.value)
    assert calculator.calls == 0


def test_payroll_never_uses_inherited_rate(organization, attendance_repo, ledger, section):
    attendance_repo.save_attendance_record(AttendanceRecord.for_period(year=2024, month=2, section_id=section.id))

    # Security has a January rate that would be displayed for February
    with pytest.raises(SalaryNotSetError) as exc_info:
        _service(organization, attendance_repo, ledger).generate_payment_report(section_id=section.id, period="2024-02")
    assert exc_info.value.group_name == "Security"


def test_zero_salary_counts_as_not_set(organization, attendance_repo, ledger, section, march_attendance):
    sec = organization.groups["g-sec"]
    organization.groups["g-sec"] = replace(sec, salary_history=(SalaryRecord("2024-03", Decimal("0")),))

    with pytest.raises(SalaryNotSetError):
        _service(organization, attendance_repo, ledger).generate_payment_report(section_id=section.id, period="2024-03")


def test_unknown_group_is_data_integrity_error(organization, attendance_repo, ledger, section, march_attendance):
    organization.employees[2] = replace(organization.employees[2], group_id="deleted-group")

    with pytest.raises(DataIntegrityError) as exc_info:
        _service(organization, attendance_repo, ledger).generate_payment_report(section_id=section.id, period="2024-03")
    assert exc_info.value.employee_id == "e3"


def test_attendance_must_be_marked_first(organization, attendance_repo, ledger, section):
    with pytest.raises(AttendanceNotFoundError) as exc_info:
        _service(organization, attendance_repo, ledger).generate_payment_report(section_id=section.id, period="2024-03")
    assert "mark the attendance of Kelanitissa for March 2024" in str(exc_info.value)


def test_section_without_employees(organization, attendance_repo, ledger, section, march_attendance):
    organization.employees.clear()

    with pytest.raises(NoEmployeesError):
        _service(organization, attendance_repo, ledger).generate_payment_report(section_id=section.id, period="2024-03")


@pytest.mark.parametrize("section_id,period", [("", "2024-03"), ("s1", ""), ("s1", "March")])
def test_selection_is_required(organization, attendance_repo, ledger, section_id, period):
    with pytest.raises(SelectionRequiredError):
        _service(organization, attendance_repo, ledger).generate_payment_report(section_id=section_id, period=period)
