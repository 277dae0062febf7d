from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import Employee, Group, SalaryRecord, Section
from .repository import OrganizationRepository

_EMPLOYEE_COLUMNS = """
    id, full_name, nic, employee_number, section_id, group_id, joined_date, phone_number, address
"""


def _to_employee(r: dict) -> Employee:
    return Employee(
        id=r["id"],
        full_name=r["full_name"],
        nic=r["nic"],
        employee_number=r["employee_number"],
        section_id=r["section_id"],
        group_id=r["group_id"],
        joined_date=r.get("joined_date"),
        phone_number=r.get("phone_number"),
        address=r.get("address"),
    )


class MySQLOrganizationRepository(OrganizationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_sections(self) -> Sequence[Section]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, code_id FROM sections ORDER BY name")
            return [Section(id=r["id"], name=r["name"], code_id=r["code_id"]) for r in fetchall(cur)]

    def get_section(self, section_id: str) -> Optional[Section]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, code_id FROM sections WHERE id=%s", (section_id,))
            r = fetchone(cur)
            if not r:
                return None
            return Section(id=r["id"], name=r["name"], code_id=r["code_id"])

    def _load_groups(self, cur, where: str = "", params: tuple = ()) -> list[Group]:
        cur.execute(f"SELECT id, name, code_id, section_id FROM `groups` {where} ORDER BY name", params)
        group_rows = fetchall(cur)
        if not group_rows:
            return []

        ids = [r["id"] for r in group_rows]
        placeholders = ", ".join(["%s"] * len(ids))
        cur.execute(
            f"""
            SELECT group_id, month, amount
            FROM group_salaries
            WHERE group_id IN ({placeholders})
            ORDER BY month DESC
            """,
            tuple(ids),
        )
        history: dict[str, list[SalaryRecord]] = {}
        for s in fetchall(cur):
            history.setdefault(s["group_id"], []).append(
                SalaryRecord(month=s["month"], amount=as_decimal(s["amount"]))
            )

        return [
            Group(
                id=r["id"],
                name=r["name"],
                code_id=r["code_id"],
                section_id=r["section_id"],
                salary_history=tuple(history.get(r["id"], [])),
            )
            for r in group_rows
        ]

    def get_groups(self) -> Sequence[Group]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._load_groups(cur)

    def get_group(self, group_id: str) -> Optional[Group]:
        with db_cursor(self._conn_factory) as (_, cur):
            groups = self._load_groups(cur, "WHERE id=%s", (group_id,))
            return groups[0] if groups else None

    def save_group(self, group: Group) -> Group:
        # group row and salary history are replaced in one transaction
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO `groups` (id, name, code_id, section_id)
                VALUES (%s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE name=VALUES(name), code_id=VALUES(code_id), section_id=VALUES(section_id)
                """,
                (group.id, group.name, group.code_id, group.section_id),
            )
            cur.execute("DELETE FROM group_salaries WHERE group_id=%s", (group.id,))
            for record in group.salary_history:
                cur.execute(
                    "INSERT INTO group_salaries (group_id, month, amount) VALUES (%s, %s, %s)",
                    (group.id, record.month, record.amount),
                )
        return group

    def get_employees(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_EMPLOYEE_COLUMNS} FROM employees ORDER BY employee_number")
            return [_to_employee(r) for r in fetchall(cur)]

    def get_employees_by_section(self, section_id: str) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE section_id=%s ORDER BY employee_number",
                (section_id,),
            )
            return [_to_employee(r) for r in fetchall(cur)]
