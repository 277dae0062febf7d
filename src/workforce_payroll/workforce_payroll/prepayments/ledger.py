from __future__ import annotations

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from decimal import Decimal
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty, require_period, require_positive_amount, require_selection
from ..core.constants import DEFAULT_BATCH_MAX_WORKERS
from ..core.enums import PrepaymentType
from ..core.exceptions import ValidationError
from .model import BatchItemResult, BatchResult, PeriodDeductions, Prepayment
from .repository import PrepaymentRepository

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


class PrepaymentLedger:
    """Salary advances and other deductions keyed by employee and month.

    Entries are matched to a payroll period by exact ``YYYY-MM`` equality;
    an advance given for February never reduces March's pay.
    """

    def __init__(
        self,
        prepayments: PrepaymentRepository,
        *,
        max_workers: int = DEFAULT_BATCH_MAX_WORKERS,
        clock: Callable = now_local,
        id_factory: Callable[[], str] = _new_id,
    ):
        self._prepayments = prepayments
        self._max_workers = max(1, int(max_workers))
        self._clock = clock
        self._id_factory = id_factory

    def _validated(self, entry: Prepayment) -> Prepayment:
        try:
            ptype = PrepaymentType(entry.type)
        except ValueError:
            raise ValidationError(f"Unknown prepayment type {entry.type!r}") from None
        reason = (entry.reason or "").strip() or None
        if ptype == PrepaymentType.OTHER:
            reason = require_non_empty(entry.reason or "", "reason")
        return replace(
            entry,
            id=entry.id or self._id_factory(),
            type=ptype,
            month=require_period(entry.month),
            employee_id=require_selection(entry.employee_id, "employee"),
            amount=require_positive_amount(entry.amount),
            reason=reason,
            created_at=entry.created_at or self._clock(),
        )

    def create(self, entry: Prepayment) -> Prepayment:
        saved = self._prepayments.save_prepayment(self._validated(entry))
        logger.info("Recorded %s of %s for employee %s (%s)", saved.type.value, saved.amount, saved.employee_id, saved.month)
        return saved

    def create_other(self, *, employee_id: str, month: str, amount, reason: str) -> Prepayment:
        return self.create(
            Prepayment(
                id=None,
                type=PrepaymentType.OTHER,
                month=month,
                employee_id=employee_id,
                amount=amount,
                reason=reason,
            )
        )

    def create_salary_advances(self, *, employee_ids: Sequence[str], month: str, amount) -> BatchResult:
        """Record the same advance for every selected employee.

        One independent create per employee, issued concurrently. Nothing is
        rolled back when some of them fail; inspect the returned result or
        call ``raise_for_failures()``.
        """
        if employee_ids is None:
            employee_ids = []
        if not isinstance(employee_ids, (list, tuple, set, frozenset)):
            raise ValidationError("employee_ids must be a list of employee ids")
        if not all(isinstance(e, str) for e in employee_ids):
            raise ValidationError("employee_ids must be a list of employee ids")
        ids = list(dict.fromkeys(e for e in employee_ids if e.strip()))
        if not ids:
            raise ValidationError("Please select at least one employee.")
        month = require_period(month)
        amount = require_positive_amount(amount)

        entries = [
            self._validated(
                Prepayment(
                    id=None,
                    type=PrepaymentType.SALARY_ADVANCE,
                    month=month,
                    employee_id=employee_id,
                    amount=amount,
                )
            )
            for employee_id in ids
        ]

        def _save(entry: Prepayment) -> BatchItemResult:
            try:
                return BatchItemResult(employee_id=entry.employee_id, prepayment=self._prepayments.save_prepayment(entry))
            except Exception as exc:
                logger.exception("Salary advance for employee %s failed", entry.employee_id)
                return BatchItemResult(employee_id=entry.employee_id, error=str(exc) or type(exc).__name__)

        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(entries))) as pool:
            items = list(pool.map(_save, entries))

        result = BatchResult(items=items)
        if result.failed:
            logger.warning(
                "Salary advance batch for %s: %s saved, %s failed",
                month,
                len(result.succeeded),
                len(result.failed),
            )
        else:
            logger.info("Salary advance batch for %s: %s saved", month, len(items))
        return result

    def delete(self, prepayment_id: str) -> None:
        if not self._prepayments.delete_prepayment(require_selection(prepayment_id, "prepayment")):
            raise ValidationError("Prepayment does not exist")
        logger.info("Deleted prepayment %s", prepayment_id)

    def list(self, *, type: Optional[PrepaymentType] = None, month: Optional[str] = None) -> list[Prepayment]:
        items = [
            p
            for p in self._prepayments.get_prepayments()
            if (type is None or p.type == PrepaymentType(type)) and (not month or p.month == month)
        ]
        items.sort(key=lambda p: (p.created_at is not None, p.created_at), reverse=True)
        return items

    def deductions_for_period(self, period: str) -> dict[str, PeriodDeductions]:
        """``for_period`` for every employee at once, from a single fetch."""
        advance: dict[str, Decimal] = {}
        other: dict[str, Decimal] = {}
        for p in self._prepayments.get_prepayments():
            if p.month != period:
                continue
            bucket = advance if p.type == PrepaymentType.SALARY_ADVANCE else other
            bucket[p.employee_id] = bucket.get(p.employee_id, Decimal("0")) + p.amount

        return {
            employee_id: PeriodDeductions(
                advance=advance.get(employee_id, Decimal("0")),
                other=other.get(employee_id, Decimal("0")),
            )
            for employee_id in set(advance) | set(other)
        }

    def for_period(self, employee_id: str, period: str) -> PeriodDeductions:
        return self.deductions_for_period(period).get(employee_id, PeriodDeductions())
