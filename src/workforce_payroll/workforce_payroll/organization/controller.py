from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from .model import Group


def group_to_json(group: Group) -> dict:
    return {
        "id": group.id,
        "name": group.name,
        "code_id": group.code_id,
        "section_id": group.section_id,
        "salary_history": [{"month": r.month, "amount": str(r.amount)} for r in group.salary_history],
    }


def register(app: Flask, container: Container) -> None:
    service = container.group_salary_service

    @app.route("/api/groups/<group_id>/salary", methods=["GET"], endpoint="group_salary_get")
    def group_salary_get(group_id: str):
        month = request.args.get("month", "")
        amount = service.current_salary(group_id, month)
        return jsonify({"group_id": group_id, "month": month, "amount": None if amount is None else str(amount)})

    @app.route("/api/groups/<group_id>/salary", methods=["PUT"], endpoint="group_salary_set")
    def group_salary_set(group_id: str):
        payload = request.get_json(silent=True) or {}
        group = service.set_salary(group_id, payload.get("month", ""), payload.get("amount"))
        return jsonify(group_to_json(group))

    @app.route("/api/groups/<group_id>/salary/<month>", methods=["DELETE"], endpoint="group_salary_delete")
    def group_salary_delete(group_id: str, month: str):
        group = service.remove_salary(group_id, month)
        return jsonify(group_to_json(group))
