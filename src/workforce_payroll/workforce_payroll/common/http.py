from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..core.exceptions import (
    AttendanceNotFoundError,
    DataIntegrityError,
    DomainError,
    NoEmployeesError,
    PartialBatchFailureError,
    PersistenceError,
    SalaryNotSetError,
    SelectionRequiredError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first.
ERROR_KINDS: list[tuple[type[DomainError], str, int]] = [
    (SelectionRequiredError, "selection_required", 400),
    (ValidationError, "validation", 422),
    (AttendanceNotFoundError, "attendance_not_found", 404),
    (NoEmployeesError, "no_employees", 404),
    (SalaryNotSetError, "salary_not_set", 409),
    (DataIntegrityError, "data_integrity", 409),
    (PartialBatchFailureError, "partial_batch_failure", 207),
    (PersistenceError, "persistence", 502),
]


def classify(exc: DomainError) -> tuple[str, int]:
    for exc_type, kind, status in ERROR_KINDS:
        if isinstance(exc, exc_type):
            return kind, status
    return "domain", 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        kind, status = classify(exc)
        if status >= 500:
            logger.error("%s: %s", kind, exc)
        else:
            logger.info("%s: %s", kind, exc)
        return jsonify({"error": kind, "message": str(exc)}), status
