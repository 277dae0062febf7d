from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ...core.constants import DEFAULT_ROUNDING_PLACES, EPF_EMPLOYEE_RATE, EPF_EMPLOYER_RATE, ETF_RATE
from ...prepayments.model import PeriodDeductions
from .base import PayBreakdown, PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Statutory rule: EPF 12% + EPF 8% + ETF 3% of gross, then ledger deductions.

    ``places`` is the currency precision. Gross and every deduction are rounded
    half-up to it and net pay is derived from the rounded figures, so a row
    always adds up. ``places=None`` keeps exact Decimal results.
    """

    def __init__(self, *, places: Optional[int] = DEFAULT_ROUNDING_PLACES):
        self._quantum = None if places is None else Decimal(1).scaleb(-int(places))

    def _round(self, value: Decimal) -> Decimal:
        if self._quantum is None:
            return value
        return value.quantize(self._quantum, rounding=ROUND_HALF_UP)

    def calculate(
        self,
        *,
        shift_units: Decimal,
        salary_per_shift: Decimal,
        deductions: PeriodDeductions,
    ) -> PayBreakdown:
        gross = self._round(Decimal(shift_units) * Decimal(salary_per_shift))
        epf12 = self._round(gross * EPF_EMPLOYER_RATE)
        epf8 = self._round(gross * EPF_EMPLOYEE_RATE)
        etf3 = self._round(gross * ETF_RATE)
        other = self._round(deductions.other)
        advance = self._round(deductions.advance)

        net_pay = gross - (epf12 + epf8 + etf3 + other + advance)
        return PayBreakdown(
            gross=gross,
            epf12=epf12,
            epf8=epf8,
            etf3=etf3,
            other=other,
            advance=advance,
            net_pay=net_pay,
        )
