from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from .attendance.ledger import SessionLedger
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.pairing import DEFAULT_PAIRING, PairingStrategy
from .attendance.repository import AttendanceRepository
from .core.constants import (
    DEFAULT_FALLBACK_HOURLY_RATE,
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_LATE_AFTER,
    DEFAULT_STANDARD_HOURS,
)
from .database.connection import DatabaseConnection
from .employees.department_repository import DepartmentRepository
from .employees.mysql_department_repository import MySQLDepartmentRepository
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EnrollmentService
from .integrations.face_verification import FaceVerifier, HttpFaceVerifier
from .integrations.media_store import LocalMediaStore, MediaStore
from .integrations.notifier import LoggingNotifier, Notifier
from .payroll.calculator.session_calculator import SessionSalaryCalculator
from .payroll.mysql_rate_repository import MySQLDepartmentRateRepository
from .payroll.rate_service import DepartmentRateService
from .payroll.repository import DepartmentRateRepository
from .payroll.service import DaySalaryService
from .reports.aggregator import AttendanceAggregator
from .reports.history import HistoryFormatter


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: AttendanceRepository
    employees_repo: EmployeeRepository
    departments_repo: DepartmentRepository
    rates_repo: DepartmentRateRepository

    media_store: MediaStore
    face_verifier: FaceVerifier
    notifier: Notifier

    session_ledger: SessionLedger
    aggregator: AttendanceAggregator
    history_formatter: HistoryFormatter
    rate_service: DepartmentRateService
    day_salary_service: DaySalaryService
    enrollment_service: EnrollmentService

    history_page_size: int = DEFAULT_HISTORY_LIMIT


def assemble_container(
    *,
    attendance_repo: AttendanceRepository,
    employees_repo: EmployeeRepository,
    departments_repo: DepartmentRepository,
    rates_repo: DepartmentRateRepository,
    media_store: MediaStore,
    face_verifier: FaceVerifier,
    notifier: Optional[Notifier] = None,
    conn: Optional[DatabaseConnection] = None,
    standard_hours: float = DEFAULT_STANDARD_HOURS,
    late_after: time = DEFAULT_LATE_AFTER,
    fallback_hourly_rate: float = DEFAULT_FALLBACK_HOURLY_RATE,
    history_page_size: int = DEFAULT_HISTORY_LIMIT,
    pairing: PairingStrategy = DEFAULT_PAIRING,
) -> Container:
    """Wire services on top of already-built repositories and collaborators."""
    notifier = notifier or LoggingNotifier()

    rate_service = DepartmentRateService(
        rates_repo,
        employees_repo,
        fallback_hourly_rate=fallback_hourly_rate,
    )
    session_ledger = SessionLedger(
        attendance_repo,
        employees_repo,
        face_verifier,
        media_store,
        rates=rate_service,
        notifier=notifier,
        standard_hours=standard_hours,
    )
    aggregator = AttendanceAggregator(
        attendance_repo,
        standard_hours=standard_hours,
        late_after=late_after,
        pairing=pairing,
    )

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        departments_repo=departments_repo,
        rates_repo=rates_repo,
        media_store=media_store,
        face_verifier=face_verifier,
        notifier=notifier,
        session_ledger=session_ledger,
        aggregator=aggregator,
        history_formatter=HistoryFormatter(attendance_repo, pairing=pairing),
        rate_service=rate_service,
        day_salary_service=DaySalaryService(
            attendance_repo,
            rate_service,
            departments_repo,
            calculator=SessionSalaryCalculator(pairing=pairing),
        ),
        enrollment_service=EnrollmentService(employees_repo, media_store),
        history_page_size=history_page_size,
    )


def build_container(
    *,
    db_config: dict,
    media_root: str,
    media_base_url: str,
    face_verify_url: str,
    face_verify_timeout: float = 10.0,
    standard_hours: float = DEFAULT_STANDARD_HOURS,
    late_after: time = DEFAULT_LATE_AFTER,
    fallback_hourly_rate: float = DEFAULT_FALLBACK_HOURLY_RATE,
    history_page_size: int = DEFAULT_HISTORY_LIMIT,
    pairing: PairingStrategy = DEFAULT_PAIRING,
) -> Container:
    conn = DatabaseConnection.from_settings(db_config)

    return assemble_container(
        attendance_repo=MySQLAttendanceRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        departments_repo=MySQLDepartmentRepository(conn),
        rates_repo=MySQLDepartmentRateRepository(conn),
        media_store=LocalMediaStore(media_root, base_url=media_base_url),
        face_verifier=HttpFaceVerifier(face_verify_url, timeout=face_verify_timeout),
        conn=conn,
        standard_hours=standard_hours,
        late_after=late_after,
        fallback_hourly_rate=fallback_hourly_rate,
        history_page_size=history_page_size,
        pairing=pairing,
    )
