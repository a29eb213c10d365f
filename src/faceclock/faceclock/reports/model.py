from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class TodayStatus:
    check_in_time: Optional[str]
    check_out_time: str
    total_hours: str
    overtime: str
    has_open_session: bool = False


@dataclass(frozen=True)
class PeriodSummary:
    """Read-model tổng hợp tuần/tháng."""

    start_date: str
    end_date: str
    work_days: str
    total_hours: str
    overtime: str
    late_arrivals: int
    days_off: int
    absences: int
    performance: float


@dataclass(frozen=True)
class EventView:
    time: str
    full_time: datetime
    location: str
    image_url: str


@dataclass(frozen=True)
class SessionView:
    session_number: int
    check_in: EventView
    check_out: Optional[EventView]
    duration: str
    status: str


@dataclass(frozen=True)
class DailyDetail:
    work_date: str
    status: str
    sessions: list[SessionView]
    total_sessions: int
    overall_total_hours: str
    overall_overtime: str


@dataclass(frozen=True)
class CalendarDay:
    date: str
    status: str
    check_in: str
    check_out: str
    total_hours: str
    overtime: str
    sessions_count: int = 0
    has_multiple_sessions: bool = False
    sessions: list[SessionView] = field(default_factory=list)


@dataclass(frozen=True)
class CalendarSummary:
    work_days: int = 0
    late_arrivals: int = 0
    absences: int = 0
    days_off: int = 0


@dataclass(frozen=True)
class MonthlyCalendar:
    year: int
    month: int
    daily_details: list[CalendarDay]
    summary: CalendarSummary


@dataclass(frozen=True)
class HistoryRow:
    id: str
    date: str
    check_in: str
    check_out: str
    total_hours: str


@dataclass(frozen=True)
class HistoryPage:
    history: list[HistoryRow]
    current_page: int
    total_pages: int
    total_records: int
