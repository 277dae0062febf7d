from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PrepaymentType
from ..core.exceptions import PartialBatchFailureError, PersistenceError


@dataclass(frozen=True)
class Prepayment:
    """Deduction recorded against one employee's payroll for one month."""

    id: Optional[str]
    type: PrepaymentType
    month: str  # YYYY-MM
    employee_id: str
    amount: Decimal
    reason: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class PeriodDeductions:
    advance: Decimal = Decimal("0")
    other: Decimal = Decimal("0")


@dataclass(frozen=True)
class BatchItemResult:
    employee_id: str
    prepayment: Optional[Prepayment] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class BatchResult:
    """Per-employee outcome of a fan-out create; there is no rollback."""

    items: list[BatchItemResult] = field(default_factory=list)

    @property
    def succeeded(self) -> list[BatchItemResult]:
        return [i for i in self.items if i.ok]

    @property
    def failed(self) -> list[BatchItemResult]:
        return [i for i in self.items if not i.ok]

    def raise_for_failures(self) -> None:
        if not self.failed:
            return
        if self.succeeded:
            raise PartialBatchFailureError(self)
        raise PersistenceError(f"Failed to save {len(self.failed)} prepayments: {self.failed[0].error}")
