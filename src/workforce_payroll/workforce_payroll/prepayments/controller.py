from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.enums import PrepaymentType
from ..core.exceptions import ValidationError
from .model import BatchResult, Prepayment


def prepayment_to_json(p: Prepayment) -> dict:
    return {
        "id": p.id,
        "type": p.type.value,
        "month": p.month,
        "employee_id": p.employee_id,
        "amount": str(p.amount),
        "reason": p.reason,
        "created_at": p.created_at.isoformat() if p.created_at else None,
    }


def batch_to_json(result: BatchResult) -> dict:
    return {
        "saved": [prepayment_to_json(i.prepayment) for i in result.succeeded],
        "failed": [{"employee_id": i.employee_id, "error": i.error} for i in result.failed],
    }


def register(app: Flask, container: Container) -> None:
    ledger = container.prepayment_ledger

    @app.route("/api/prepayments", methods=["GET"], endpoint="prepayments_list")
    def prepayments_list():
        ptype = request.args.get("type") or None
        if ptype and ptype not in {t.value for t in PrepaymentType}:
            raise ValidationError(f"Unknown prepayment type {ptype!r}")
        items = ledger.list(type=ptype, month=request.args.get("month") or None)
        return jsonify([prepayment_to_json(p) for p in items])

    @app.route("/api/prepayments/salary-advances", methods=["POST"], endpoint="prepayments_advance_batch")
    def prepayments_advance_batch():
        payload = request.get_json(silent=True) or {}
        result = ledger.create_salary_advances(
            employee_ids=payload.get("employee_ids") or [],
            month=payload.get("month", ""),
            amount=payload.get("amount"),
        )
        body = batch_to_json(result)
        if not result.failed:
            return jsonify(body), 201
        if result.succeeded:
            # Some advances now exist; the caller has to know which.
            body["error"] = "partial_batch_failure"
            return jsonify(body), 207
        body["error"] = "persistence"
        return jsonify(body), 502

    @app.route("/api/prepayments/other", methods=["POST"], endpoint="prepayments_other")
    def prepayments_other():
        payload = request.get_json(silent=True) or {}
        saved = ledger.create_other(
            employee_id=payload.get("employee_id", ""),
            month=payload.get("month", ""),
            amount=payload.get("amount"),
            reason=payload.get("reason", ""),
        )
        return jsonify(prepayment_to_json(saved)), 201

    @app.route("/api/prepayments/<prepayment_id>", methods=["DELETE"], endpoint="prepayments_delete")
    def prepayments_delete(prepayment_id: str):
        ledger.delete(prepayment_id)
        return "", 204
