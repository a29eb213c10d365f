from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import DayStatus, EventKind
from ..core.exceptions import StaleRecordError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, in_placeholders, is_duplicate_key
from .model import AttendanceDay, Location, SessionEvent
from .repository import AttendanceRepository

_DAY_COLUMNS = "day_id, employee_id, work_date, status, total_hours, overtime, version"


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _event_from_row(r: dict) -> SessionEvent:
        return SessionEvent(
            time=r["event_time"],
            image_url=r["image_url"],
            location=Location(
                address=r["address"],
                coordinates=(float(r["longitude"]), float(r["latitude"])),
            ),
            department_id=int(r["department_id"]) if r.get("department_id") is not None else None,
            hourly_rate=as_float(r.get("hourly_rate")),
        )

    def _load_days(self, cur, rows: Sequence[dict]) -> list[AttendanceDay]:
        if not rows:
            return []

        day_ids = [int(r["day_id"]) for r in rows]
        cur.execute(
            f"""
            SELECT day_id, kind, seq, event_time, image_url, address, longitude, latitude,
                   department_id, hourly_rate
            FROM attendance_events
            WHERE day_id IN ({in_placeholders(day_ids)})
            ORDER BY day_id, kind, seq
            """,
            tuple(day_ids),
        )
        events: dict[tuple[int, str], list[SessionEvent]] = {}
        for er in fetchall(cur):
            events.setdefault((int(er["day_id"]), er["kind"]), []).append(self._event_from_row(er))

        return [
            AttendanceDay(
                day_id=int(r["day_id"]),
                employee_id=int(r["employee_id"]),
                work_date=str(r["work_date"]),
                status=DayStatus(r["status"]),
                total_hours=r["total_hours"],
                overtime=r["overtime"],
                version=int(r["version"]),
                check_ins=tuple(events.get((int(r["day_id"]), EventKind.CHECK_IN.value), ())),
                check_outs=tuple(events.get((int(r["day_id"]), EventKind.CHECK_OUT.value), ())),
            )
            for r in rows
        ]

    def get_day(self, employee_id: int, work_date: str) -> Optional[AttendanceDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_DAY_COLUMNS}
                FROM attendance_days
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return self._load_days(cur, [r])[0]

    def list_days_between(
        self,
        employee_id: int,
        *,
        start_date: str,
        end_date: str,
        status: Optional[DayStatus] = None,
    ) -> Sequence[AttendanceDay]:
        clauses = ["employee_id=%s", "work_date BETWEEN %s AND %s"]
        params: list[object] = [int(employee_id), start_date, end_date]
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_DAY_COLUMNS}
                FROM attendance_days
                WHERE {" AND ".join(clauses)}
                ORDER BY work_date ASC
                """,
                tuple(params),
            )
            return self._load_days(cur, fetchall(cur))

    def list_recent_days(
        self,
        employee_id: int,
        *,
        status: Optional[DayStatus] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Sequence[AttendanceDay]:
        clauses = ["employee_id=%s"]
        params: list[object] = [int(employee_id)]
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        params.extend([int(limit), int(offset)])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_DAY_COLUMNS}
                FROM attendance_days
                WHERE {" AND ".join(clauses)}
                ORDER BY work_date DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params),
            )
            return self._load_days(cur, fetchall(cur))

    def count_days(self, employee_id: int, *, status: Optional[DayStatus] = None) -> int:
        clauses = ["employee_id=%s"]
        params: list[object] = [int(employee_id)]
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT COUNT(*) AS total FROM attendance_days WHERE {' AND '.join(clauses)}",
                tuple(params),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def append_event(
        self,
        *,
        day: AttendanceDay,
        kind: EventKind,
        event: SessionEvent,
        total_hours: str,
        overtime: str,
    ) -> AttendanceDay:
        with db_cursor(self._conn_factory) as (_, cur):
            if not day.is_persisted:
                try:
                    cur.execute(
                        """
                        INSERT INTO attendance_days(employee_id, work_date, status, total_hours, overtime, version)
                        VALUES(%s,%s,%s,%s,%s,1)
                        """,
                        (day.employee_id, day.work_date, day.status.value, total_hours, overtime),
                    )
                except mysql.connector.IntegrityError as err:
                    if is_duplicate_key(err):
                        raise StaleRecordError(f"Attendance {day.employee_id}/{day.work_date} already exists") from err
                    raise
                day_id = int(cur.lastrowid)
                version = 1
            else:
                cur.execute(
                    """
                    UPDATE attendance_days
                    SET total_hours=%s, overtime=%s, version=version+1
                    WHERE day_id=%s AND version=%s
                    """,
                    (total_hours, overtime, day.day_id, day.version),
                )
                if cur.rowcount == 0:
                    raise StaleRecordError(f"Attendance {day.employee_id}/{day.work_date} changed concurrently")
                day_id = int(day.day_id)
                version = day.version + 1

            seq = len(day.check_ins) if kind is EventKind.CHECK_IN else len(day.check_outs)
            lng, lat = event.location.coordinates
            cur.execute(
                """
                INSERT INTO attendance_events(
                    day_id, kind, seq, event_time, image_url, address, longitude, latitude,
                    department_id, hourly_rate
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    day_id,
                    kind.value,
                    seq,
                    event.time,
                    event.image_url,
                    event.location.address,
                    lng,
                    lat,
                    event.department_id,
                    event.hourly_rate,
                ),
            )

        if kind is EventKind.CHECK_IN:
            return replace(
                day,
                day_id=day_id,
                version=version,
                check_ins=day.check_ins + (event,),
                total_hours=total_hours,
                overtime=overtime,
            )
        return replace(
            day,
            day_id=day_id,
            version=version,
            check_outs=day.check_outs + (event,),
            total_hours=total_hours,
            overtime=overtime,
        )

    def set_status(self, employee_id: int, work_date: str, status: DayStatus) -> AttendanceDay:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_days(employee_id, work_date, status, version)
                VALUES(%s,%s,%s,1)
                ON DUPLICATE KEY UPDATE status=VALUES(status), version=version+1
                """,
                (int(employee_id), work_date, status.value),
            )
        day = self.get_day(employee_id, work_date)
        if day is None:
            raise RuntimeError(f"Attendance {employee_id}/{work_date} vanished after status update")
        return day
