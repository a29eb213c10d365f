from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import DepartmentRate
from .repository import DepartmentRateRepository

_COLUMNS = "rate_id, employee_id, department_id, hourly_rate, is_default, is_active, effective_from, effective_to"

_EFFECTIVE = "is_active=1 AND effective_from<=%s AND (effective_to IS NULL OR effective_to>=%s)"


class MySQLDepartmentRateRepository(DepartmentRateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _from_row(r: dict) -> DepartmentRate:
        return DepartmentRate(
            rate_id=int(r["rate_id"]),
            employee_id=int(r["employee_id"]),
            department_id=int(r["department_id"]),
            hourly_rate=as_float(r["hourly_rate"]) or 0.0,
            is_default=bool(r["is_default"]),
            is_active=bool(r["is_active"]),
            effective_from=r["effective_from"],
            effective_to=r.get("effective_to"),
        )

    def get(self, employee_id: int, department_id: int) -> Optional[DepartmentRate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM department_rates WHERE employee_id=%s AND department_id=%s",
                (int(employee_id), int(department_id)),
            )
            r = fetchone(cur)
            return self._from_row(r) if r else None

    def find_effective(self, employee_id: int, department_id: int, *, at: datetime) -> Optional[DepartmentRate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM department_rates
                WHERE employee_id=%s AND department_id=%s AND {_EFFECTIVE}
                """,
                (int(employee_id), int(department_id), at, at),
            )
            r = fetchone(cur)
            return self._from_row(r) if r else None

    def find_effective_default(self, employee_id: int, *, at: datetime) -> Optional[DepartmentRate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM department_rates
                WHERE employee_id=%s AND is_default=1 AND {_EFFECTIVE}
                ORDER BY effective_from DESC
                LIMIT 1
                """,
                (int(employee_id), at, at),
            )
            r = fetchone(cur)
            return self._from_row(r) if r else None

    def list_active(self, employee_id: int) -> Sequence[DepartmentRate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM department_rates
                WHERE employee_id=%s AND is_active=1
                ORDER BY is_default DESC, rate_id DESC
                """,
                (int(employee_id),),
            )
            return [self._from_row(r) for r in fetchall(cur)]

    def save(self, rate: DepartmentRate, *, clear_other_defaults: bool) -> DepartmentRate:
        with db_cursor(self._conn_factory) as (_, cur):
            if clear_other_defaults:
                cur.execute(
                    """
                    UPDATE department_rates
                    SET is_default=0
                    WHERE employee_id=%s AND department_id<>%s AND is_default=1
                    """,
                    (rate.employee_id, rate.department_id),
                )
            cur.execute(
                """
                INSERT INTO department_rates(
                    employee_id, department_id, hourly_rate, is_default, is_active, effective_from, effective_to
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    hourly_rate=VALUES(hourly_rate),
                    is_default=VALUES(is_default),
                    is_active=VALUES(is_active),
                    effective_from=VALUES(effective_from),
                    effective_to=VALUES(effective_to)
                """,
                (
                    rate.employee_id,
                    rate.department_id,
                    rate.hourly_rate,
                    int(rate.is_default),
                    int(rate.is_active),
                    rate.effective_from,
                    rate.effective_to,
                ),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM department_rates WHERE employee_id=%s AND department_id=%s",
                (rate.employee_id, rate.department_id),
            )
            return self._from_row(fetchone(cur))

    def deactivate(self, employee_id: int, department_id: int, *, at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE department_rates
                SET is_active=0, effective_to=%s
                WHERE employee_id=%s AND department_id=%s
                """,
                (at, int(employee_id), int(department_id)),
            )
            return cur.rowcount > 0
