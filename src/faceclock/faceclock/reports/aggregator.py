from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from ..attendance.durations import duration, format_minutes, overtime, parse_duration_minutes
from ..attendance.model import AttendanceDay
from ..attendance.pairing import DEFAULT_PAIRING, PairingStrategy
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import (
    format_clock,
    format_clock_padded,
    is_weekend,
    month_range,
    now_local,
    parse_iso_date,
    week_range,
    work_date_key,
)
from ..core.constants import (
    DAYS_IN_WEEK,
    DEFAULT_LATE_AFTER,
    DEFAULT_STANDARD_HOURS,
    EMPTY_CHECK_OUT,
    EMPTY_CLOCK,
    EMPTY_DURATION,
)
from ..core.enums import CalendarStatus, DayStatus
from ..core.exceptions import RecordNotFound
from .model import (
    CalendarDay,
    CalendarSummary,
    DailyDetail,
    MonthlyCalendar,
    PeriodSummary,
    TodayStatus,
)
from .sessions import expand_sessions, first_check_in, is_late, last_check_out


class AttendanceAggregator:
    """Read-side views over attendance days.

    Everything is re-derived from the stored sessions on each call; nothing here
    writes to the repository.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        standard_hours: float = DEFAULT_STANDARD_HOURS,
        late_after: time = DEFAULT_LATE_AFTER,
        pairing: Optional[PairingStrategy] = None,
    ):
        self._attendance = attendance
        self._standard_hours = standard_hours
        self._late_after = late_after
        self._pairing = pairing or DEFAULT_PAIRING

    def today_status(self, employee_id: int, *, now: Optional[datetime] = None) -> TodayStatus:
        now = now or now_local()
        day = self._attendance.get_day(int(employee_id), work_date_key(now))
        if not day:
            return TodayStatus(
                check_in_time=None,
                check_out_time=EMPTY_CHECK_OUT,
                total_hours=EMPTY_DURATION,
                overtime=EMPTY_DURATION,
            )

        first_in = first_check_in(day)
        last_out = last_check_out(day)

        if first_in and day.has_open_session:
            total_hours = duration(first_in.time, now)
            overtime_text = overtime(first_in.time, now, self._standard_hours)
        else:
            total_hours = day.total_hours or EMPTY_DURATION
            overtime_text = day.overtime or EMPTY_DURATION

        return TodayStatus(
            check_in_time=format_clock(first_in.time) if first_in else None,
            check_out_time=format_clock(last_out.time) if last_out else EMPTY_CHECK_OUT,
            total_hours=total_hours,
            overtime=overtime_text,
            has_open_session=day.has_open_session,
        )

    def _summarize(self, days: Sequence[AttendanceDay], start: date, end: date, total_days: int) -> PeriodSummary:
        total_minutes = 0
        overtime_minutes = 0
        work_days = 0
        late_arrivals = 0
        days_off = 0
        absences = 0

        for day in days:
            if day.status is DayStatus.ON_LEAVE:
                days_off += 1
            elif day.status is DayStatus.ABSENT:
                absences += 1
            elif day.status is DayStatus.PRESENT:
                work_days += 1
                total_minutes += parse_duration_minutes(day.total_hours)
                overtime_minutes += parse_duration_minutes(day.overtime)
                if is_late(day, self._late_after):
                    late_arrivals += 1

        performance = work_days / total_days if total_days > 0 else 0
        return PeriodSummary(
            start_date=work_date_key(start),
            end_date=work_date_key(end),
            work_days=f"{work_days} / {total_days}",
            total_hours=format_minutes(total_minutes),
            overtime=format_minutes(overtime_minutes),
            late_arrivals=late_arrivals,
            days_off=days_off,
            absences=absences,
            performance=round(performance, 2),
        )

    def _days_between(self, employee_id: int, start: date, end: date) -> Sequence[AttendanceDay]:
        return self._attendance.list_days_between(
            int(employee_id),
            start_date=work_date_key(start),
            end_date=work_date_key(end),
        )

    def week_summary(self, employee_id: int, *, today: Optional[date] = None) -> PeriodSummary:
        """Monday..Sunday of the current week; weekends count toward the 7-day denominator."""
        start, end = week_range(today or now_local().date())
        return self._summarize(self._days_between(employee_id, start, end), start, end, DAYS_IN_WEEK)

    def month_summary(self, employee_id: int, *, today: Optional[date] = None) -> PeriodSummary:
        today = today or now_local().date()
        start, end = month_range(today.year, today.month)
        return self._summarize(self._days_between(employee_id, start, end), start, end, end.day)

    def daily_detail(self, employee_id: int, work_date: date | str) -> DailyDetail:
        key = work_date_key(parse_iso_date(work_date) if isinstance(work_date, str) else work_date)
        day = self._attendance.get_day(int(employee_id), key)
        if not day:
            raise RecordNotFound(f"No attendance record for {key}")

        sessions = expand_sessions(day, self._pairing)
        completed_minutes = sum(
            parse_duration_minutes(s.duration) for s in sessions if s.check_out is not None
        )
        return DailyDetail(
            work_date=key,
            status=day.status.value,
            sessions=sessions,
            total_sessions=len(sessions),
            overall_total_hours=format_minutes(completed_minutes),
            overall_overtime=day.overtime or EMPTY_DURATION,
        )

    def _calendar_day(self, current: date, day: Optional[AttendanceDay]) -> CalendarDay:
        if not day:
            status = CalendarStatus.WEEKEND if is_weekend(current) else CalendarStatus.NO_RECORD
            return CalendarDay(
                date=work_date_key(current),
                status=status.value,
                check_in=EMPTY_CLOCK,
                check_out=EMPTY_CLOCK,
                total_hours=EMPTY_DURATION,
                overtime=EMPTY_DURATION,
            )

        if day.status is DayStatus.ON_LEAVE:
            status = CalendarStatus.ON_LEAVE
        elif day.status is DayStatus.ABSENT:
            status = CalendarStatus.ABSENT
        elif is_late(day, self._late_after):
            status = CalendarStatus.LATE
        else:
            status = CalendarStatus.ON_TIME

        first_in = first_check_in(day)
        last_out = last_check_out(day)
        return CalendarDay(
            date=work_date_key(current),
            status=status.value,
            check_in=format_clock_padded(first_in.time if first_in else None),
            check_out=format_clock_padded(last_out.time if last_out else None),
            total_hours=day.total_hours or EMPTY_DURATION,
            overtime=day.overtime or EMPTY_DURATION,
            sessions_count=len(day.check_ins),
            has_multiple_sessions=len(day.check_ins) > 1,
            sessions=expand_sessions(day, self._pairing),
        )

    def monthly_calendar(self, employee_id: int, year: int, month: int) -> MonthlyCalendar:
        """Every day of the month classified; days without a record are never counted absent."""
        start, end = month_range(int(year), int(month))
        by_date = {d.work_date: d for d in self._days_between(employee_id, start, end)}

        details: list[CalendarDay] = []
        work_days = late_arrivals = absences = days_off = 0

        for offset in range((end - start).days + 1):
            current = start + timedelta(days=offset)
            info = self._calendar_day(current, by_date.get(work_date_key(current)))
            details.append(info)
            status = info.status

            if status in (CalendarStatus.ON_TIME.value, CalendarStatus.LATE.value):
                work_days += 1
            if status == CalendarStatus.LATE.value:
                late_arrivals += 1
            elif status == CalendarStatus.ABSENT.value:
                absences += 1
            elif status == CalendarStatus.ON_LEAVE.value:
                days_off += 1

        return MonthlyCalendar(
            year=int(year),
            month=int(month),
            daily_details=details,
            summary=CalendarSummary(
                work_days=work_days,
                late_arrivals=late_arrivals,
                absences=absences,
                days_off=days_off,
            ),
        )
