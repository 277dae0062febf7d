from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Section:
    """Organizational section; owns groups and employees."""

    id: str
    name: str
    code_id: str


@dataclass(frozen=True)
class SalaryRecord:
    """Per-shift pay rate of a group for one calendar month."""

    month: str  # YYYY-MM
    amount: Decimal


@dataclass(frozen=True)
class Group:
    id: str
    name: str
    code_id: str
    section_id: str
    salary_history: tuple[SalaryRecord, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Employee:
    id: str
    full_name: str
    nic: str
    employee_number: str
    section_id: str
    group_id: str
    joined_date: Optional[date] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
