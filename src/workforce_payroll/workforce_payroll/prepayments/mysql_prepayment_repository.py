from __future__ import annotations

from typing import Sequence

from ..core.enums import PrepaymentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall
from .model import Prepayment
from .repository import PrepaymentRepository


class MySQLPrepaymentRepository(PrepaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_prepayments(self) -> Sequence[Prepayment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, type, month, employee_id, amount, reason, created_at
                FROM prepayments
                ORDER BY created_at DESC
                """
            )
            return [
                Prepayment(
                    id=r["id"],
                    type=PrepaymentType(r["type"]),
                    month=r["month"],
                    employee_id=r["employee_id"],
                    amount=as_decimal(r["amount"]),
                    reason=r.get("reason"),
                    created_at=r.get("created_at"),
                )
                for r in fetchall(cur)
            ]

    def save_prepayment(self, prepayment: Prepayment) -> Prepayment:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO prepayments (id, type, month, employee_id, amount, reason, created_at)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    type=VALUES(type), month=VALUES(month), employee_id=VALUES(employee_id),
                    amount=VALUES(amount), reason=VALUES(reason)
                """,
                (
                    prepayment.id,
                    prepayment.type.value,
                    prepayment.month,
                    prepayment.employee_id,
                    prepayment.amount,
                    prepayment.reason,
                    prepayment.created_at,
                ),
            )
        return prepayment

    def delete_prepayment(self, prepayment_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM prepayments WHERE id=%s", (prepayment_id,))
            return cur.rowcount > 0
