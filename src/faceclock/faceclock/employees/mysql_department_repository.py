from __future__ import annotations

from typing import Iterable

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_placeholders
from .department_repository import DepartmentRepository


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_names(self, dept_ids: Iterable[int]) -> dict[int, str]:
        ids = sorted({int(d) for d in dept_ids})
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT dept_id, dept_name FROM departments WHERE dept_id IN ({in_placeholders(ids)})",
                tuple(ids),
            )
            return {int(r["dept_id"]): r["dept_name"] for r in fetchall(cur)}
