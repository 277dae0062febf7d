from __future__ import annotations

from enum import Enum


class PrepaymentType(str, Enum):
    """Kind of out-of-band deduction stored in the prepayment ledger."""

    SALARY_ADVANCE = "salary_advance"
    OTHER = "other"


class DatabaseType(str, Enum):
    """Persistence backends a container can be built for."""

    MYSQL = "mysql"


class AttendanceMark(str, Enum):
    """The four toggles of a single day cell."""

    DAY = "day"
    NIGHT = "night"
    DAY_HALF = "day_half"
    NIGHT_HALF = "night_half"
