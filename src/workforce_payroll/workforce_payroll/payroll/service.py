from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.aggregator import ShiftAggregator
from ..attendance.model import attendance_record_id
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import period_label
from ..common.string_utils import format_short_name
from ..common.validators import parse_period, require_selection
from ..core.exceptions import (
    AttendanceNotFoundError,
    DataIntegrityError,
    NoEmployeesError,
    SalaryNotSetError,
    SelectionRequiredError,
    ValidationError,
)
from ..organization.model import Employee, Group
from ..organization.repository import OrganizationRepository
from ..organization.salary_history import resolve_exact
from ..prepayments.ledger import PrepaymentLedger
from ..prepayments.model import PeriodDeductions
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator

logger = logging.getLogger(__name__)

MONEY_FIELDS = ("gross", "epf12", "epf8", "etf3", "other", "advance", "net_pay")


@dataclass(frozen=True)
class PaymentRow:
    employee_id: str
    employee_number: str
    full_name: str
    short_name: str
    shift_count: Decimal
    additional_shift_count: Decimal
    salary_per_shift: Decimal
    gross: Decimal
    epf12: Decimal
    epf8: Decimal
    etf3: Decimal
    other: Decimal
    advance: Decimal
    net_pay: Decimal


@dataclass(frozen=True)
class PaymentReport:
    """Rows plus the header metadata the spreadsheet encoder needs."""

    section_id: str
    section_name: str
    period: str
    period_label: str
    rows: list[PaymentRow] = field(default_factory=list)

    @property
    def totals(self) -> dict[str, Decimal]:
        return {f: sum((getattr(r, f) for r in self.rows), Decimal("0")) for f in MONEY_FIELDS}


class PayrollReportService:
    """Builds the monthly payment details of one section.

    Generation is all-or-nothing: every employee is checked (group exists,
    salary set for the exact period) before the first row is computed.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        organization: OrganizationRepository,
        ledger: PrepaymentLedger,
        *,
        calculator: Optional[PayrollCalculator] = None,
        aggregator: Optional[ShiftAggregator] = None,
    ):
        self._attendance = attendance
        self._organization = organization
        self._ledger = ledger
        self._calculator = calculator or StandardPayrollCalculator()
        self._aggregator = aggregator or ShiftAggregator()

    def _validate(
        self,
        employees: Sequence[Employee],
        groups: dict[str, Group],
        period: str,
        label: str,
    ) -> dict[str, Decimal]:
        rates: dict[str, Decimal] = {}
        for emp in employees:
            group = groups.get(emp.group_id)
            if group is None:
                raise DataIntegrityError(employee_id=emp.id, employee_name=emp.full_name, group_id=emp.group_id)
            if group.id in rates:
                continue
            amount = resolve_exact(group.salary_history, period)
            if not amount:
                raise SalaryNotSetError(group_name=group.name, period=period, period_label=label)
            rates[group.id] = amount
        return rates

    def generate_payment_report(self, *, section_id: str, period: str) -> PaymentReport:
        section_id = require_selection(section_id, "section")
        period = require_selection(period, "payment period")
        try:
            year, month = parse_period(period)
        except ValidationError as exc:
            raise SelectionRequiredError(str(exc)) from exc
        label = period_label(period)

        section = self._organization.get_section(section_id)
        section_name = section.name if section else "Unknown Section"

        record = self._attendance.get_attendance_record(attendance_record_id(year, month, section_id))
        if record is None:
            raise AttendanceNotFoundError(section_name=section_name, period_label=label)

        employees = list(self._organization.get_employees_by_section(section_id))
        if not employees:
            raise NoEmployeesError("No employees found for the selected section.")

        groups = {g.id: g for g in self._organization.get_groups()}
        rates = self._validate(employees, groups, period, label)

        deductions = self._ledger.deductions_for_period(period)
        rows: list[PaymentRow] = []
        for emp in employees:
            shifts = self._aggregator.payroll_shift_count(record.attendance_data.get(emp.id))
            salary_per_shift = rates[emp.group_id]
            pay = self._calculator.calculate(
                shift_units=shifts.total_shift_units,
                salary_per_shift=salary_per_shift,
                deductions=deductions.get(emp.id, PeriodDeductions()),
            )
            rows.append(
                PaymentRow(
                    employee_id=emp.id,
                    employee_number=emp.employee_number,
                    full_name=emp.full_name,
                    short_name=format_short_name(emp.full_name),
                    shift_count=shifts.shift_count,
                    additional_shift_count=shifts.additional_shifts,
                    salary_per_shift=salary_per_shift,
                    gross=pay.gross,
                    epf12=pay.epf12,
                    epf8=pay.epf8,
                    etf3=pay.etf3,
                    other=pay.other,
                    advance=pay.advance,
                    net_pay=pay.net_pay,
                )
            )

        logger.info("Payment report %s / %s: %s rows", section_name, period, len(rows))
        return PaymentReport(
            section_id=section_id,
            section_name=section_name,
            period=period,
            period_label=label,
            rows=rows,
        )
