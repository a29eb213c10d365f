from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local, parse_iso_date, work_date_key
from ..core.constants import ATTENDANCE_IMAGE_FOLDER, DEFAULT_STANDARD_HOURS, MAX_APPEND_ATTEMPTS
from ..core.enums import DayStatus, EventKind
from ..core.exceptions import (
    FaceMismatch,
    NoOpenSession,
    SessionOrderViolation,
    StaleRecordError,
    VerificationUnavailable,
)
from ..employees.repository import EmployeeRepository
from ..integrations.face_verification import FaceVerifier
from ..integrations.media_store import MediaStore
from ..integrations.notifier import Notifier
from ..payroll.rate_service import DepartmentRateService
from .durations import duration, overtime
from .model import AttendanceDay, Location, SessionEvent
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class SessionLedger:
    """Owns the per-employee-per-day check-in/check-out record.

    Check-ins and check-outs strictly alternate within a day. Every accepted
    event is verified against the employee's enrolled face first, then written
    with a conditional append so two concurrent requests can never both open
    (or both close) a session.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        verifier: FaceVerifier,
        media: MediaStore,
        *,
        rates: Optional[DepartmentRateService] = None,
        notifier: Optional[Notifier] = None,
        standard_hours: float = DEFAULT_STANDARD_HOURS,
    ):
        self._attendance = attendance
        self._employees = employees
        self._verifier = verifier
        self._media = media
        self._rates = rates
        self._notifier = notifier
        self._standard_hours = standard_hours

    def _verify_identity(self, employee_id: int, proof_image: bytes) -> str:
        """Upload the proof image and match it against the reference face; returns the proof URL."""
        employee = self._employees.get_by_id(employee_id)
        if not employee or not employee.is_active or not employee.reference_image_url:
            raise VerificationUnavailable("Employee not found or no reference image enrolled")

        image_url = self._media.upload(proof_image, ATTENDANCE_IMAGE_FOLDER)
        if not self._verifier.verify(image_url, employee.reference_image_url):
            logger.warning("face mismatch for employee %s", employee_id)
            raise FaceMismatch("Face verification failed")
        return image_url

    def _totals(self, first_in: Optional[datetime], last_out: Optional[datetime]) -> tuple[str, str]:
        return duration(first_in, last_out), overtime(first_in, last_out, self._standard_hours)

    def _notify(self, employee_id: int, title: str, day: AttendanceDay) -> None:
        if not self._notifier:
            return
        try:
            self._notifier.notify(
                [employee_id],
                title,
                f"{day.work_date}: total {day.total_hours}",
                {"workDate": day.work_date, "totalHours": day.total_hours},
            )
        except Exception:
            logger.exception("notification for employee %s failed", employee_id)

    def check_in(
        self,
        employee_id: int,
        proof_image: bytes,
        location: Location,
        *,
        department_id: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceDay:
        now = now or now_local()
        work_date = work_date_key(now)
        employee_id = int(employee_id)

        image_url = self._verify_identity(employee_id, proof_image)

        hourly_rate = None
        if department_id is not None and self._rates:
            resolved = self._rates.resolve_rate(employee_id, int(department_id), at=now)
            department_id, hourly_rate = resolved.department_id, resolved.hourly_rate

        event = SessionEvent(
            time=now,
            image_url=image_url,
            location=location,
            department_id=department_id,
            hourly_rate=hourly_rate,
        )

        for attempt in range(1, MAX_APPEND_ATTEMPTS + 1):
            day = self._attendance.get_day(employee_id, work_date) or AttendanceDay(
                employee_id=employee_id,
                work_date=work_date,
                status=DayStatus.PRESENT,
            )
            if day.has_open_session:
                logger.warning("employee %s checked in twice on %s", employee_id, work_date)
                raise SessionOrderViolation("You must check-out before checking-in again")

            first_in = day.check_ins[0].time if day.check_ins else event.time
            last_out = day.check_outs[-1].time if day.check_outs else None
            total_hours, overtime_text = self._totals(first_in, last_out)

            try:
                saved = self._attendance.append_event(
                    day=day,
                    kind=EventKind.CHECK_IN,
                    event=event,
                    total_hours=total_hours,
                    overtime=overtime_text,
                )
            except StaleRecordError:
                logger.info("check-in for employee %s raced (attempt %d), re-reading", employee_id, attempt)
                continue

            logger.info("employee %s checked in on %s (session %d)", employee_id, work_date, len(saved.check_ins))
            self._notify(employee_id, "Checked in", saved)
            return saved

        raise StaleRecordError(f"Attendance {employee_id}/{work_date} kept changing, giving up")

    def check_out(
        self,
        employee_id: int,
        proof_image: bytes,
        location: Location,
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceDay:
        now = now or now_local()
        work_date = work_date_key(now)
        employee_id = int(employee_id)

        image_url = self._verify_identity(employee_id, proof_image)
        event = SessionEvent(time=now, image_url=image_url, location=location)

        for attempt in range(1, MAX_APPEND_ATTEMPTS + 1):
            day = self._attendance.get_day(employee_id, work_date)
            if not day or not day.check_ins:
                raise NoOpenSession("You must check-in before checking-out")
            if len(day.check_outs) >= len(day.check_ins):
                logger.warning("employee %s checked out twice on %s", employee_id, work_date)
                raise SessionOrderViolation("You have already checked-out, please check-in before checking-out again")

            total_hours, overtime_text = self._totals(day.check_ins[0].time, event.time)

            try:
                saved = self._attendance.append_event(
                    day=day,
                    kind=EventKind.CHECK_OUT,
                    event=event,
                    total_hours=total_hours,
                    overtime=overtime_text,
                )
            except StaleRecordError:
                logger.info("check-out for employee %s raced (attempt %d), re-reading", employee_id, attempt)
                continue

            logger.info("employee %s checked out on %s (total %s)", employee_id, work_date, saved.total_hours)
            self._notify(employee_id, "Checked out", saved)
            return saved

        raise StaleRecordError(f"Attendance {employee_id}/{work_date} kept changing, giving up")

    def set_day_status(self, employee_id: int, work_date: date | str, status: DayStatus) -> AttendanceDay:
        """Store the PRESENT/ON_LEAVE/ABSENT flag decided by the leave subsystem."""
        key = work_date_key(parse_iso_date(work_date) if isinstance(work_date, str) else work_date)
        return self._attendance.set_status(int(employee_id), key, DayStatus(status))
