from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import DayStatus, EventKind
from .model import AttendanceDay, SessionEvent


class AttendanceRepository(Protocol):
    """Storage for AttendanceDay documents, one per (employee_id, work_date)."""

    def get_day(self, employee_id: int, work_date: str) -> Optional[AttendanceDay]:
        raise NotImplementedError

    def list_days_between(
        self,
        employee_id: int,
        *,
        start_date: str,
        end_date: str,
        status: Optional[DayStatus] = None,
    ) -> Sequence[AttendanceDay]:
        raise NotImplementedError

    def list_recent_days(
        self,
        employee_id: int,
        *,
        status: Optional[DayStatus] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Sequence[AttendanceDay]:
        """Newest work_date first."""

        raise NotImplementedError

    def count_days(self, employee_id: int, *, status: Optional[DayStatus] = None) -> int:
        raise NotImplementedError

    def append_event(
        self,
        *,
        day: AttendanceDay,
        kind: EventKind,
        event: SessionEvent,
        total_hours: str,
        overtime: str,
    ) -> AttendanceDay:
        """Atomically append one event and the recomputed durations.

        ``day`` is the snapshot the caller validated against. The write only
        succeeds if the stored day still has ``day.version`` (or, for a day that
        was never persisted, if no row exists yet); otherwise ``StaleRecordError``
        is raised and nothing is written.
        """

        raise NotImplementedError

    def set_status(self, employee_id: int, work_date: str, status: DayStatus) -> AttendanceDay:
        raise NotImplementedError
