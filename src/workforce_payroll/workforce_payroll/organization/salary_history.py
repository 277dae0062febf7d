"""Salary history lookups.

A group's salary history is a list of ``SalaryRecord`` keyed by ``YYYY-MM``
month strings, which compare correctly as plain strings. Two lookup policies
exist and are kept as separate functions on purpose:

* ``resolve_display`` falls back to the most recent earlier rate and is meant
  for tables and dashboards ("last known salary").
* ``resolve_exact`` only accepts the rate set for that very month and is the
  only one payroll may use.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Optional

from ..common.validators import require_period, require_positive_amount
from .model import Group, SalaryRecord

logger = logging.getLogger(__name__)


def resolve_display(history: Iterable[SalaryRecord], target_month: str) -> Optional[Decimal]:
    history = list(history or ())
    for record in history:
        if record.month == target_month:
            return record.amount

    for record in sorted(history, key=lambda r: r.month, reverse=True):
        if record.month <= target_month:
            return record.amount
    return None


def resolve_exact(history: Iterable[SalaryRecord], target_month: str) -> Optional[Decimal]:
    for record in history or ():
        if record.month == target_month:
            return record.amount
    return None


def set_salary(history: Iterable[SalaryRecord], month: str, amount) -> list[SalaryRecord]:
    """Insert or replace the rate for ``month``; result is sorted newest first."""
    month = require_period(month)
    amount = require_positive_amount(amount)

    updated = [r for r in history or () if r.month != month]
    updated.append(SalaryRecord(month=month, amount=amount))
    updated.sort(key=lambda r: r.month, reverse=True)
    return updated


def remove_salary(history: Iterable[SalaryRecord], month: str) -> list[SalaryRecord]:
    return [r for r in history or () if r.month != month]


def with_salary(group: Group, month: str, amount) -> Group:
    history = set_salary(group.salary_history, month, amount)
    logger.info("Salary for group %s set to %s for %s", group.code_id, amount, month)
    return replace(group, salary_history=tuple(history))


def without_salary(group: Group, month: str) -> Group:
    return replace(group, salary_history=tuple(remove_salary(group.salary_history, month)))
