from __future__ import annotations

from enum import Enum


class DayStatus(str, Enum):
    """Trạng thái ngày công lưu trong CSDL (do hệ thống nghỉ phép cập nhật)."""

    PRESENT = "PRESENT"
    ON_LEAVE = "ON_LEAVE"
    ABSENT = "ABSENT"


class EventKind(str, Enum):
    CHECK_IN = "IN"
    CHECK_OUT = "OUT"


class SessionStatus(str, Enum):
    COMPLETED = "Completed"
    IN_PROGRESS = "In Progress"


class CalendarStatus(str, Enum):
    """Nhãn hiển thị cho từng ngày trên lịch tháng (suy ra, không lưu)."""

    ON_TIME = "On Time"
    LATE = "Late"
    ON_LEAVE = "On Leave"
    ABSENT = "Absent"
    WEEKEND = "Weekend"
    NO_RECORD = "No Record"


class RateSource(str, Enum):
    DEPARTMENT = "department"
    DEFAULT = "default"
    ORGANIZATION = "organization"
