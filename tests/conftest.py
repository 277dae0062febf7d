from __future__ import annotations

import threading
from datetime import datetime
from decimal import Decimal
from typing import Optional

import pytest

from src.workforce_payroll.workforce_payroll.attendance.model import AttendanceRecord
from src.workforce_payroll.workforce_payroll.container import Repositories, build_container
from src.workforce_payroll.workforce_payroll.core.exceptions import PersistenceError
from src.workforce_payroll.workforce_payroll.organization.model import Employee, Group, SalaryRecord, Section
from src.workforce_payroll.workforce_payroll.prepayments.ledger import PrepaymentLedger
from src.workforce_payroll.workforce_payroll.prepayments.model import Prepayment

SECTION_ID = "3b1f0c52-8d7e-4a61-9f0e-1a2b3c4d5e01"


class InMemoryOrganization:
    def __init__(self, sections=(), groups=(), employees=()):
        self.sections = {s.id: s for s in sections}
        self.groups = {g.id: g for g in groups}
        self.employees = list(employees)
        self.saved_groups: list[Group] = []

    def get_sections(self):
        return list(self.sections.values())

    def get_section(self, section_id: str) -> Optional[Section]:
        return self.sections.get(section_id)

    def get_groups(self):
        return list(self.groups.values())

    def get_group(self, group_id: str) -> Optional[Group]:
        return self.groups.get(group_id)

    def save_group(self, group: Group) -> Group:
        self.groups[group.id] = group
        self.saved_groups.append(group)
        return group

    def get_employees(self):
        return list(self.employees)

    def get_employees_by_section(self, section_id: str):
        return [e for e in self.employees if e.section_id == section_id]


class InMemoryAttendance:
    def __init__(self):
        self.records: dict[str, AttendanceRecord] = {}

    def get_attendance_records(self):
        return list(self.records.values())

    def get_attendance_record(self, record_id: str) -> Optional[AttendanceRecord]:
        return self.records.get(record_id)

    def save_attendance_record(self, record: AttendanceRecord) -> AttendanceRecord:
        self.records[record.id] = record
        return record

    def delete_attendance_record(self, record_id: str) -> bool:
        return self.records.pop(record_id, None) is not None


class InMemoryPrepayments:
    """Thread-safe fake; ``fail_for`` employee ids simulate backend errors."""

    def __init__(self, items=(), *, fail_for=()):
        self.items: dict[str, Prepayment] = {p.id: p for p in items}
        self.fail_for = set(fail_for)
        self._lock = threading.Lock()

    def get_prepayments(self):
        with self._lock:
            return list(self.items.values())

    def save_prepayment(self, prepayment: Prepayment) -> Prepayment:
        if prepayment.employee_id in self.fail_for:
            raise PersistenceError("backend unavailable")
        with self._lock:
            self.items[prepayment.id] = prepayment
        return prepayment

    def delete_prepayment(self, prepayment_id: str) -> bool:
        with self._lock:
            return self.items.pop(prepayment_id, None) is not None


def make_group(group_id: str, name: str, *history: tuple[str, str]) -> Group:
    return Group(
        id=group_id,
        name=name,
        code_id=name.lower(),
        section_id=SECTION_ID,
        salary_history=tuple(SalaryRecord(month=m, amount=Decimal(a)) for m, a in history),
    )


def make_employee(employee_id: str, number: str, name: str, group_id: str) -> Employee:
    return Employee(
        id=employee_id,
        full_name=name,
        nic=f"{number}V",
        employee_number=number,
        section_id=SECTION_ID,
        group_id=group_id,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 28, 9, 30, 0)


@pytest.fixture
def section() -> Section:
    return Section(id=SECTION_ID, name="Kelanitissa", code_id="kelanitissa")


@pytest.fixture
def organization(section) -> InMemoryOrganization:
    security = make_group("g-sec", "Security", ("2024-01", "100"), ("2024-03", "500"))
    labour = make_group("g-lab", "Labour", ("2024-03", "400"))
    return InMemoryOrganization(
        sections=[section],
        groups=[security, labour],
        employees=[
            make_employee("e1", "1001", "Kamal Perera Silva", "g-sec"),
            make_employee("e2", "1002", "Nimal Fernando", "g-lab"),
            make_employee("e3", "1003", "Sunil Jayasuriya", "g-lab"),
        ],
    )


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def prepayments_repo() -> InMemoryPrepayments:
    return InMemoryPrepayments()


@pytest.fixture
def ledger(prepayments_repo, fixed_now) -> PrepaymentLedger:
    return PrepaymentLedger(prepayments_repo, max_workers=4, clock=lambda: fixed_now)


@pytest.fixture
def container(organization, attendance_repo, prepayments_repo):
    repos = Repositories(organization=organization, attendance=attendance_repo, prepayments=prepayments_repo)
    return build_container(repositories=repos, batch_max_workers=4)


@pytest.fixture
def client(container, monkeypatch):
    from src.workforce_payroll.workforce_payroll.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


@pytest.fixture
def make_prepayments_repo():
    """Factory for repositories that fail for some employees."""
    return InMemoryPrepayments
