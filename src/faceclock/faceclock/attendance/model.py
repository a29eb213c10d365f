from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.validators import require_coordinates, require_non_empty
from ..core.constants import EMPTY_DURATION
from ..core.enums import DayStatus
from ..core.exceptions import SessionOrderViolation, ValidationError


@dataclass(frozen=True)
class Location:
    address: str
    coordinates: tuple[float, float]

    @classmethod
    def from_payload(cls, payload: Any) -> "Location":
        """Build from the client payload ``{"address": ..., "coordinates": [lng, lat]}``."""
        if not isinstance(payload, dict):
            raise ValidationError("Location must include coordinates (array) and address (string)")
        return cls(
            address=require_non_empty(payload.get("address"), "Location address"),
            coordinates=require_coordinates(payload.get("coordinates")),
        )

    def to_dict(self) -> dict:
        return {"address": self.address, "coordinates": list(self.coordinates)}


@dataclass(frozen=True)
class SessionEvent:
    """Một lần chấm công (vào hoặc ra). Không thay đổi sau khi ghi nhận."""

    time: datetime
    image_url: str
    location: Location
    department_id: Optional[int] = None
    hourly_rate: Optional[float] = None

    def to_dict(self) -> dict:
        out = {
            "time": self.time.isoformat(),
            "imageUrl": self.image_url,
            "location": self.location.to_dict(),
        }
        if self.department_id is not None:
            out["departmentId"] = self.department_id
        if self.hourly_rate is not None:
            out["hourlyRate"] = self.hourly_rate
        return out


@dataclass(frozen=True)
class AttendanceDay:
    """Thực thể miền (domain): ngày công của một nhân viên.

    ``check_ins``/``check_outs`` are kept in acceptance order. The legacy
    single-slot ``check_in``/``check_out`` fields are derived from them and only
    materialized by ``to_dict()``.
    """

    employee_id: int
    work_date: str
    check_ins: tuple[SessionEvent, ...] = ()
    check_outs: tuple[SessionEvent, ...] = ()
    status: DayStatus = DayStatus.PRESENT
    total_hours: str = EMPTY_DURATION
    overtime: str = EMPTY_DURATION
    day_id: Optional[int] = None
    version: int = 0

    def __post_init__(self) -> None:
        ins, outs = len(self.check_ins), len(self.check_outs)
        if not outs <= ins <= outs + 1:
            raise SessionOrderViolation(
                f"Attendance {self.employee_id}/{self.work_date} has {ins} check-ins and {outs} check-outs"
            )

    @property
    def check_in(self) -> Optional[SessionEvent]:
        return self.check_ins[0] if self.check_ins else None

    @property
    def check_out(self) -> Optional[SessionEvent]:
        return self.check_outs[-1] if self.check_outs else None

    @property
    def has_open_session(self) -> bool:
        return len(self.check_ins) > len(self.check_outs)

    @property
    def is_persisted(self) -> bool:
        return self.day_id is not None

    def to_dict(self) -> dict:
        return {
            "id": self.day_id,
            "employeeId": self.employee_id,
            "workDate": self.work_date,
            "status": self.status.value,
            "checkIns": [e.to_dict() for e in self.check_ins],
            "checkOuts": [e.to_dict() for e in self.check_outs],
            "checkIn": self.check_in.to_dict() if self.check_in else None,
            "checkOut": self.check_out.to_dict() if self.check_out else None,
            "totalHours": self.total_hours,
            "overtime": self.overtime,
        }
