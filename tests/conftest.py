from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable, Optional

import pytest

from src.faceclock.faceclock.attendance.ledger import SessionLedger
from src.faceclock.faceclock.attendance.model import AttendanceDay, Location, SessionEvent
from src.faceclock.faceclock.core.enums import DayStatus, EventKind
from src.faceclock.faceclock.core.exceptions import StaleRecordError, UploadError
from src.faceclock.faceclock.employees.model import Employee
from src.faceclock.faceclock.payroll.model import DepartmentRate
from src.faceclock.faceclock.payroll.rate_service import DepartmentRateService

OFFICE = Location(address="12 Nguyen Hue, District 1", coordinates=(106.7009, 10.7769))


class InMemoryAttendance:
    """Attendance store with the same version check as the MySQL repository.

    ``before_append`` (if set) runs once right before the next write, which lets
    a test slip a competing write in between the ledger's read and its append.
    """

    def __init__(self):
        self.days: dict[tuple[int, str], AttendanceDay] = {}
        self.before_append: Optional[Callable[[], None]] = None
        self.append_calls = 0
        self._next_id = 0

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def put(self, day: AttendanceDay) -> AttendanceDay:
        if day.day_id is None:
            day = replace(day, day_id=self._new_id(), version=max(day.version, 1))
        self.days[(day.employee_id, day.work_date)] = day
        return day

    def get_day(self, employee_id: int, work_date: str) -> Optional[AttendanceDay]:
        return self.days.get((int(employee_id), work_date))

    def list_days_between(self, employee_id, *, start_date, end_date, status=None):
        items = [
            d
            for d in self.days.values()
            if d.employee_id == int(employee_id)
            and start_date <= d.work_date <= end_date
            and (status is None or d.status is status)
        ]
        return sorted(items, key=lambda d: d.work_date)

    def list_recent_days(self, employee_id, *, status=None, offset=0, limit=10):
        items = [
            d for d in self.days.values() if d.employee_id == int(employee_id) and (status is None or d.status is status)
        ]
        items.sort(key=lambda d: d.work_date, reverse=True)
        return items[offset : offset + limit]

    def count_days(self, employee_id, *, status=None):
        return len(self.list_recent_days(employee_id, status=status, offset=0, limit=10**6))

    def append_event(self, *, day, kind, event, total_hours, overtime):
        self.append_calls += 1
        if self.before_append:
            hook, self.before_append = self.before_append, None
            hook()

        key = (day.employee_id, day.work_date)
        current = self.days.get(key)
        if not day.is_persisted:
            if current is not None:
                raise StaleRecordError("already exists")
            day = replace(day, day_id=self._new_id(), version=0)
        elif current is None or current.version != day.version:
            raise StaleRecordError("changed concurrently")

        if kind is EventKind.CHECK_IN:
            saved = replace(day, check_ins=day.check_ins + (event,))
        else:
            saved = replace(day, check_outs=day.check_outs + (event,))
        saved = replace(saved, total_hours=total_hours, overtime=overtime, version=day.version + 1)
        self.days[key] = saved
        return saved

    def set_status(self, employee_id, work_date, status):
        key = (int(employee_id), work_date)
        current = self.days.get(key)
        if current is None:
            return self.put(AttendanceDay(employee_id=int(employee_id), work_date=work_date, status=status))
        saved = replace(current, status=status, version=current.version + 1)
        self.days[key] = saved
        return saved


class InMemoryEmployees:
    def __init__(self, employees: Iterable[Employee] = ()):
        self.by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id):
        return self.by_id.get(int(employee_id))

    def set_reference_image(self, employee_id, image_url):
        employee = self.by_id.get(int(employee_id))
        if not employee:
            return False
        self.by_id[employee.employee_id] = replace(employee, reference_image_url=image_url)
        return True


class InMemoryDepartments:
    def __init__(self, names: dict[int, str]):
        self.names = dict(names)

    def get_names(self, dept_ids):
        return {int(i): self.names[int(i)] for i in dept_ids if int(i) in self.names}


class InMemoryRates:
    def __init__(self):
        self.rates: dict[tuple[int, int], DepartmentRate] = {}
        self._next_id = 0

    def get(self, employee_id, department_id):
        return self.rates.get((int(employee_id), int(department_id)))

    def find_effective(self, employee_id, department_id, *, at):
        rate = self.get(employee_id, department_id)
        return rate if rate and rate.is_effective(at) else None

    def find_effective_default(self, employee_id, *, at):
        candidates = [
            r for r in self.rates.values() if r.employee_id == int(employee_id) and r.is_default and r.is_effective(at)
        ]
        return max(candidates, key=lambda r: r.effective_from) if candidates else None

    def list_active(self, employee_id):
        items = [r for r in self.rates.values() if r.employee_id == int(employee_id) and r.is_active]
        return sorted(items, key=lambda r: (not r.is_default, -(r.rate_id or 0)))

    def save(self, rate, *, clear_other_defaults):
        if clear_other_defaults:
            for key, r in list(self.rates.items()):
                if r.employee_id == rate.employee_id and r.department_id != rate.department_id and r.is_default:
                    self.rates[key] = replace(r, is_default=False)
        existing = self.get(rate.employee_id, rate.department_id)
        if existing:
            rate = replace(rate, rate_id=existing.rate_id)
        else:
            self._next_id += 1
            rate = replace(rate, rate_id=self._next_id)
        self.rates[(rate.employee_id, rate.department_id)] = rate
        return rate

    def deactivate(self, employee_id, department_id, *, at):
        rate = self.get(employee_id, department_id)
        if not rate:
            return False
        self.rates[(rate.employee_id, rate.department_id)] = replace(rate, is_active=False, effective_to=at)
        return True


class FakeVerifier:
    def __init__(self, match: bool = True, error: Optional[Exception] = None):
        self.match = match
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def verify(self, captured_image_url, reference_image_url):
        self.calls.append((captured_image_url, reference_image_url))
        if self.error:
            raise self.error
        return self.match


class FakeMediaStore:
    def __init__(self):
        self.uploads: list[tuple[str, bytes]] = []
        self.deleted: list[str] = []
        self.fail_delete = False

    def upload(self, data, folder):
        if not data:
            raise UploadError("No image data provided")
        self.uploads.append((folder, data))
        return f"http://media.test/{folder}/{len(self.uploads)}.jpg"

    def delete(self, url):
        if self.fail_delete:
            raise UploadError("storage offline")
        self.deleted.append(url)


class RecordingNotifier:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: list[tuple[list[int], str, str, dict]] = []

    def notify(self, recipients, title, body, payload):
        if self.fail:
            raise RuntimeError("push gateway down")
        self.sent.append((list(recipients), title, body, payload))


@pytest.fixture
def attendance():
    return InMemoryAttendance()


@pytest.fixture
def employees():
    return InMemoryEmployees(
        [
            Employee(1, "Tran Thi Binh", "http://media.test/employee_faces/ref-1.jpg", organization_id=100),
            Employee(2, "Le Van Cuong", None, organization_id=100),
            Employee(3, "Pham Minh Duc", "http://media.test/employee_faces/ref-3.jpg", organization_id=None),
        ]
    )


@pytest.fixture
def departments():
    return InMemoryDepartments({10: "Engineering", 20: "Support"})


@pytest.fixture
def rates():
    return InMemoryRates()


@pytest.fixture
def verifier():
    return FakeVerifier()


@pytest.fixture
def media():
    return FakeMediaStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def failing_notifier():
    return RecordingNotifier(fail=True)


@pytest.fixture
def rate_service(rates, employees):
    return DepartmentRateService(rates, employees, fallback_hourly_rate=50000)


@pytest.fixture
def ledger(attendance, employees, verifier, media, rate_service, notifier):
    return SessionLedger(attendance, employees, verifier, media, rates=rate_service, notifier=notifier)


@pytest.fixture
def make_event():
    def _make(when: datetime, *, department_id=None, hourly_rate=None, address=OFFICE.address) -> SessionEvent:
        return SessionEvent(
            time=when,
            image_url=f"http://media.test/attendance_images/{when:%H%M}.jpg",
            location=Location(address=address, coordinates=OFFICE.coordinates),
            department_id=department_id,
            hourly_rate=hourly_rate,
        )

    return _make


@pytest.fixture
def make_day(attendance, make_event):
    """Store a day from ``[(in, out_or_None), ...]`` datetime pairs."""

    def _make(
        employee_id: int,
        work_date: str,
        sessions=(),
        *,
        status: DayStatus = DayStatus.PRESENT,
        total_hours: str = "--",
        overtime: str = "--",
    ) -> AttendanceDay:
        ins = tuple(make_event(ci) for ci, _ in sessions)
        outs = tuple(make_event(co) for _, co in sessions if co is not None)
        return attendance.put(
            AttendanceDay(
                employee_id=employee_id,
                work_date=work_date,
                check_ins=ins,
                check_outs=outs,
                status=status,
                total_hours=total_hours,
                overtime=overtime,
            )
        )

    return _make
