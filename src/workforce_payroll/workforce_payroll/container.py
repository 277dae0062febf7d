from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_BATCH_MAX_WORKERS, DEFAULT_ROUNDING_PLACES
from .core.enums import DatabaseType
from .core.exceptions import ValidationError
from .database.connection import DatabaseConnection, DBConfig
from .organization.mysql_organization_repository import MySQLOrganizationRepository
from .organization.repository import OrganizationRepository
from .organization.service import GroupSalaryService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.service import PayrollReportService
from .prepayments.ledger import PrepaymentLedger
from .prepayments.mysql_prepayment_repository import MySQLPrepaymentRepository
from .prepayments.repository import PrepaymentRepository


@dataclass(frozen=True)
class Repositories:
    organization: OrganizationRepository
    attendance: AttendanceRepository
    prepayments: PrepaymentRepository


@dataclass(frozen=True)
class Container:
    repositories: Repositories

    attendance_service: AttendanceService
    group_salary_service: GroupSalaryService
    prepayment_ledger: PrepaymentLedger
    payroll_report_service: PayrollReportService


def build_mysql_repositories(db_config: dict) -> Repositories:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return Repositories(
        organization=MySQLOrganizationRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        prepayments=MySQLPrepaymentRepository(conn),
    )


def build_repositories(*, db_type: str, db_config: Optional[dict] = None) -> Repositories:
    """Pick the one persistence backend used for the whole process."""
    try:
        kind = DatabaseType(str(db_type).lower())
    except ValueError:
        raise ValidationError(f"Unsupported DB_TYPE: {db_type!r}") from None

    if kind == DatabaseType.MYSQL:
        return build_mysql_repositories(db_config or {})
    raise ValidationError(f"Unsupported DB_TYPE: {db_type!r}")


def build_container(
    *,
    repositories: Repositories,
    rounding_places: Optional[int] = DEFAULT_ROUNDING_PLACES,
    batch_max_workers: int = DEFAULT_BATCH_MAX_WORKERS,
) -> Container:
    ledger = PrepaymentLedger(repositories.prepayments, max_workers=batch_max_workers)
    attendance_service = AttendanceService(repositories.attendance, repositories.organization)
    group_salary_service = GroupSalaryService(repositories.organization)
    payroll_report_service = PayrollReportService(
        repositories.attendance,
        repositories.organization,
        ledger,
        calculator=StandardPayrollCalculator(places=rounding_places),
    )

    return Container(
        repositories=repositories,
        attendance_service=attendance_service,
        group_salary_service=group_salary_service,
        prepayment_ledger=ledger,
        payroll_report_service=payroll_report_service,
    )
