from __future__ import annotations

import csv
import io

from flask import Flask, jsonify

from ..container import Container
from .service import MONEY_FIELDS, PaymentReport, PaymentRow

CSV_HEADERS = [
    "EPF NO.",
    "NAME",
    "Shift Count",
    "Additional Shifts",
    "Salary Per Shift",
    "Total Salary",
    "Total For ETF/EPF",
    "EPF 12%",
    "EPF 8%",
    "ETF 3%",
    "Other",
    "Salary Advance",
    "After Deduction of EPF/ETF",
    "Signature",
]

FOOTER_NOTES = [
    "※ No deductions from employees total salary shall be made other than EPF/ETF amount and stamp duty deductions.",
    "※ All employees must sign this document in front of the representatives from contractor and CEB.",
    "※ Total EPF and ETF banked for the month shall match the deposited amounts.",
]

# Contractor under the first seven columns, CEB under the rest
SIGNATURE_LINE = ["Contractor Representative: ........................"] + [""] * 6 + ["CEB Representative: ........................"]


def row_to_json(row: PaymentRow) -> dict:
    return {
        "employee_id": row.employee_id,
        "employee_number": row.employee_number,
        "full_name": row.full_name,
        "short_name": row.short_name,
        "shift_count": str(row.shift_count),
        "additional_shift_count": str(row.additional_shift_count),
        "salary_per_shift": str(row.salary_per_shift),
        **{f: str(getattr(row, f)) for f in MONEY_FIELDS},
    }


def report_to_json(report: PaymentReport) -> dict:
    return {
        "section_id": report.section_id,
        "section_name": report.section_name,
        "period": report.period,
        "period_label": report.period_label,
        "rows": [row_to_json(r) for r in report.rows],
        "totals": {k: str(v) for k, v in report.totals.items()},
    }


def register(app: Flask, container: Container) -> None:
    service = container.payroll_report_service

    def _write_report_csv(*, report: PaymentReport, filename: str):
        """Payment details as CSV, one row per employee."""

        out = io.StringIO()
        writer = csv.writer(out)
        company = app.config.get("COMPANY_NAME")
        if company:
            writer.writerow([company])
        writer.writerow([f"PAYMENT DETAILS FOR EMPLOYEES ({report.period_label.upper()}) ({report.section_name})"])
        writer.writerow([])
        writer.writerow(CSV_HEADERS)
        for r in report.rows:
            writer.writerow(
                [
                    r.employee_number,
                    r.short_name,
                    r.shift_count,
                    r.additional_shift_count,
                    r.salary_per_shift,
                    r.gross,
                    "",
                    r.epf12,
                    r.epf8,
                    r.etf3,
                    r.other,
                    r.advance,
                    r.net_pay,
                    "",
                ]
            )
        for note in FOOTER_NOTES:
            writer.writerow([note])
        writer.writerow([])
        writer.writerow(SIGNATURE_LINE)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/payroll/<section_id>/<period>", methods=["GET"], endpoint="payroll_report")
    def payroll_report(section_id: str, period: str):
        report = service.generate_payment_report(section_id=section_id, period=period)
        return jsonify(report_to_json(report))

    @app.route("/api/payroll/<section_id>/<period>/export.csv", methods=["GET"], endpoint="payroll_report_csv")
    def payroll_report_csv(section_id: str, period: str):
        report = service.generate_payment_report(section_id=section_id, period=period)
        safe_section = "".join(ch if ch.isalnum() else "_" for ch in report.section_name)
        return _write_report_csv(report=report, filename=f"Payment_Details_{safe_section}_{report.period}.csv")
