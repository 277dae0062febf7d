from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from ...prepayments.model import PeriodDeductions


@dataclass(frozen=True)
class PayBreakdown:
    gross: Decimal
    epf12: Decimal
    epf8: Decimal
    etf3: Decimal
    other: Decimal
    advance: Decimal
    net_pay: Decimal


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        *,
        shift_units: Decimal,
        salary_per_shift: Decimal,
        deductions: PeriodDeductions,
    ) -> PayBreakdown:
        raise NotImplementedError
