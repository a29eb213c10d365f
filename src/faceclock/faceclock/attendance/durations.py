"""Duration helpers shared by the ledger, reports and payroll.

Durations travel as ``"{h}h {m}m"`` text; ``"--"`` means "not computable".
All conversions floor to whole minutes.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from ..core.constants import DEFAULT_STANDARD_HOURS, EMPTY_DURATION, ZERO_DURATION

_HOURS_RE = re.compile(r"(\d+)\s*h")
_MINUTES_RE = re.compile(r"(\d+)\s*m")


def minutes_between(start: datetime, end: datetime) -> int:
    seconds = (end - start).total_seconds()
    return max(int(seconds // 60), 0)


def duration(start: Optional[datetime], end: Optional[datetime]) -> str:
    if start is None or end is None:
        return EMPTY_DURATION
    return format_minutes(minutes_between(start, end))


def overtime(
    start: Optional[datetime],
    end: Optional[datetime],
    standard_hours: float = DEFAULT_STANDARD_HOURS,
) -> str:
    """Time worked beyond ``standard_hours``, never negative."""
    if start is None or end is None:
        return EMPTY_DURATION
    extra_seconds = (end - start).total_seconds() - float(standard_hours) * 3600
    return format_minutes(max(int(extra_seconds // 60), 0))


def parse_duration_minutes(text: Optional[str]) -> int:
    if not text or text == EMPTY_DURATION:
        return 0
    total = 0
    hours = _HOURS_RE.search(text)
    minutes = _MINUTES_RE.search(text)
    if hours:
        total += int(hours.group(1)) * 60
    if minutes:
        total += int(minutes.group(1))
    return total


def format_minutes(total_minutes: int) -> str:
    if total_minutes <= 0:
        return ZERO_DURATION
    total_minutes = int(total_minutes)
    return f"{total_minutes // 60}h {total_minutes % 60}m"
