from __future__ import annotations

import calendar
from datetime import datetime

from .validators import parse_period


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock it easier.
    """
    return datetime.now()


def format_period(year: int, month: int) -> str:
    return f"{int(year):04d}-{int(month):02d}"


def period_label(period: str) -> str:
    """``2024-03`` -> ``March 2024``."""
    year, month = parse_period(period)
    return f"{calendar.month_name[month]} {year}"


def days_in_period(period: str) -> int:
    year, month = parse_period(period)
    return calendar.monthrange(year, month)[1]
