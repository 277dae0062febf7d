from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class SelectionRequiredError(ValidationError):
    """Raised when a required section or period was not supplied."""


class AttendanceNotFoundError(DomainError):
    """Raised when no attendance snapshot exists for a section and period."""

    def __init__(self, *, section_name: str, period_label: str):
        self.section_name = section_name
        self.period_label = period_label
        super().__init__(f"Please mark the attendance of {section_name} for {period_label} first.")


class NoEmployeesError(DomainError):
    """Raised when a payroll is requested for a section without employees."""


class SalaryNotSetError(DomainError):
    """Raised when a group has no salary entry for the exact payroll period."""

    def __init__(self, *, group_name: str, period: str, period_label: str | None = None):
        self.group_name = group_name
        self.period = period
        super().__init__(
            f"Salary for group '{group_name}' for {period_label or period} is not set. "
            "Please update the group's salary history."
        )


class DataIntegrityError(DomainError):
    """Raised when an employee references a group that does not exist."""

    def __init__(self, *, employee_id: str, employee_name: str, group_id: str):
        self.employee_id = employee_id
        self.group_id = group_id
        super().__init__(
            f"Data integrity issue: Group not found for employee {employee_name} (ID: {employee_id})."
        )


class PersistenceError(DomainError):
    """Raised when the underlying repository call fails (network/backend)."""


class PartialBatchFailureError(DomainError):
    """Raised when a multi-employee batch create only partially succeeded.

    Some records now exist; ``result`` lists which ones.
    """

    def __init__(self, result):
        self.result = result
        super().__init__(
            f"{len(result.succeeded)} of {len(result.items)} records were saved; "
            f"{len(result.failed)} failed"
        )
