"""Example: generate a payment report through the service layer (no Flask).

Usage: python -m examples.example_usage <section_id> <YYYY-MM>
"""

import importlib
import sys

from config import get_settings_module

from src.workforce_payroll.workforce_payroll.container import build_container, build_repositories
from src.workforce_payroll.workforce_payroll.core.exceptions import DomainError


def main():
    section_id, period = sys.argv[1], sys.argv[2]
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        repositories=build_repositories(db_type=settings.DB_TYPE, db_config=settings.DB_CONFIG),
        rounding_places=settings.ROUNDING_PLACES,
    )

    try:
        report = container.payroll_report_service.generate_payment_report(section_id=section_id, period=period)
    except DomainError as exc:
        raise SystemExit(str(exc))

    print(f"{report.section_name} - {report.period_label}")
    for row in report.rows:
        print(f"{row.employee_number:>8} {row.short_name:<25} {row.gross:>12} {row.net_pay:>12}")
    print(f"{'TOTAL':>34} {report.totals['gross']:>12} {report.totals['net_pay']:>12}")


if __name__ == "__main__":
    main()
