from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from ..core.exceptions import SelectionRequiredError, ValidationError

_CODE_ID_RE = re.compile(r"^[a-z0-9_]+$")
_PERIOD_RE = re.compile(r"^(\d{4})-(\d{2})$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_code_id(value: str, field_name: str = "codeId") -> str:
    value = require_non_empty(value, field_name)
    if not _CODE_ID_RE.match(value):
        raise ValidationError(f"{field_name} may only contain lowercase letters, digits and underscores")
    return value


def require_selection(value: Any, field_name: str) -> Any:
    """Like require_non_empty, but for values a caller must pick (section, period)."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise SelectionRequiredError(f"Please select a {field_name}.")
    return value.strip() if isinstance(value, str) else value


def parse_period(value: str) -> tuple[int, int]:
    """Parse a ``YYYY-MM`` period into (year, month)."""
    m = _PERIOD_RE.match((value or "").strip())
    if not m:
        raise ValidationError(f"Invalid period {value!r}, expected YYYY-MM")
    year, month = int(m.group(1)), int(m.group(2))
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month in period {value!r}")
    return year, month


def require_period(value: str) -> str:
    parse_period(value)
    return value.strip()


def to_decimal(value: Any, field_name: str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} is not a valid number")
    try:
        # str() first so floats keep their printed value, not their binary one
        result = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} is not a valid number") from None
    if not result.is_finite():
        raise ValidationError(f"{field_name} is not a valid number")
    return result


def require_positive_amount(value: Any, field_name: str = "amount") -> Decimal:
    amount = to_decimal(value, field_name)
    if amount <= 0:
        raise ValidationError(f"Please enter a valid {field_name}.")
    return amount
