"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

# Statutory deductions, fixed for every group and section.
EPF_EMPLOYER_RATE = Decimal("0.12")
EPF_EMPLOYEE_RATE = Decimal("0.08")
ETF_RATE = Decimal("0.03")

FULL_SHIFT_UNITS = Decimal("1")
HALF_SHIFT_UNITS = Decimal("0.5")

DEFAULT_ROUNDING_PLACES = 2
DEFAULT_BATCH_MAX_WORKERS = 8
