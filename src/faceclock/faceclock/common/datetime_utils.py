from __future__ import annotations

import calendar
from datetime import MAXYEAR, MINYEAR, date, datetime, time, timedelta
from typing import Optional

from ..core.constants import EMPTY_CLOCK
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_clock(value: str) -> time:
    """Parse HH:MM string into time."""
    try:
        return datetime.strptime(value, "%H:%M").time()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid time (HH:MM): {value!r}")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def work_date_key(moment: datetime | date) -> str:
    """Day key used to store attendance (server local calendar date)."""
    if isinstance(moment, datetime):
        moment = moment.date()
    return moment.strftime("%Y-%m-%d")


def week_range(today: date) -> tuple[date, date]:
    """Monday..Sunday of the week containing ``today``."""
    start = today - timedelta(days=today.weekday())
    return start, start + timedelta(days=6)


def month_range(year: int, month: int) -> tuple[date, date]:
    if not MINYEAR <= int(year) <= MAXYEAR:
        raise ValidationError(f"Invalid year: {year!r}")
    if not 1 <= int(month) <= 12:
        raise ValidationError(f"Invalid month: {month!r}")
    last_day = calendar.monthrange(int(year), int(month))[1]
    return date(int(year), int(month), 1), date(int(year), int(month), last_day)


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def format_clock(moment: Optional[datetime]) -> Optional[str]:
    """12-hour clock without leading zero, e.g. ``9:05 AM``."""
    if moment is None:
        return None
    hour = moment.hour % 12 or 12
    period = "PM" if moment.hour >= 12 else "AM"
    return f"{hour}:{moment.minute:02d} {period}"


def format_clock_padded(moment: Optional[datetime]) -> str:
    """12-hour clock with two-digit hour, e.g. ``09:05 AM``; ``--:--`` when empty."""
    if moment is None:
        return EMPTY_CLOCK
    return moment.strftime("%I:%M %p")


def format_month_day(day: date) -> str:
    """``June 24`` style label."""
    return f"{day.strftime('%B')} {day.day}"
