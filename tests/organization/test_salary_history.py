from decimal import Decimal

import pytest

from src.workforce_payroll.workforce_payroll.core.exceptions import ValidationError
from src.workforce_payroll.workforce_payroll.organization.model import SalaryRecord
from src.workforce_payroll.workforce_payroll.organization.salary_history import (
    remove_salary,
    resolve_display,
    resolve_exact,
    set_salary,
)

HISTORY = [
    SalaryRecord(month="2024-01", amount=Decimal("100")),
    SalaryRecord(month="2024-03", amount=Decimal("150")),
]


def test_display_falls_back_to_last_known_rate():
    assert resolve_display(HISTORY, "2024-02") == Decimal("100")


def test_display_before_first_entry_is_not_set():
    assert resolve_display(HISTORY, "2023-12") is None


def test_display_prefers_exact_and_latest():
    assert resolve_display(HISTORY, "2024-03") == Decimal("150")
    assert resolve_display(HISTORY, "2025-07") == Decimal("150")


def test_exact_has_no_fallback():
    assert resolve_exact(HISTORY, "2024-02") is None
    assert resolve_exact(HISTORY, "2024-03") == Decimal("150")


def test_empty_history():
    assert resolve_display([], "2024-01") is None
    assert resolve_exact((), "2024-01") is None


def test_set_salary_replaces_month_and_sorts_newest_first():
    history = set_salary(HISTORY, "2024-01", "120")
    history = set_salary(history, "2024-02", 130)

    assert [r.month for r in history] == ["2024-03", "2024-02", "2024-01"]
    assert resolve_exact(history, "2024-01") == Decimal("120")
    assert len([r for r in history if r.month == "2024-01"]) == 1


@pytest.mark.parametrize("month,amount", [("2024-13", 100), ("24-01", 100), ("2024-01", 0), ("2024-01", "abc")])
def test_set_salary_rejects_invalid_input(month, amount):
    with pytest.raises(ValidationError):
        set_salary(HISTORY, month, amount)


def test_remove_salary():
    assert [r.month for r in remove_salary(HISTORY, "2024-01")] == ["2024-03"]
