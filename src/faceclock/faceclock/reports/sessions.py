from __future__ import annotations

from datetime import time
from typing import Optional

from ..attendance.durations import duration
from ..attendance.model import AttendanceDay, SessionEvent
from ..attendance.pairing import DEFAULT_PAIRING, PairingStrategy, sort_events
from ..common.datetime_utils import format_clock_padded
from ..core.constants import DEFAULT_LATE_AFTER, IN_PROGRESS_DURATION, UNKNOWN_LOCATION
from ..core.enums import SessionStatus
from .model import EventView, SessionView


def first_check_in(day: AttendanceDay) -> Optional[SessionEvent]:
    ins = sort_events(day.check_ins)
    return ins[0] if ins else None


def last_check_out(day: AttendanceDay) -> Optional[SessionEvent]:
    outs = sort_events(day.check_outs)
    return outs[-1] if outs else None


def is_late(day: AttendanceDay, late_after: time = DEFAULT_LATE_AFTER) -> bool:
    """First check-in strictly after ``late_after`` (minute precision)."""
    first = first_check_in(day)
    if first is None:
        return False
    return (first.time.hour, first.time.minute) > (late_after.hour, late_after.minute)


def event_view(event: SessionEvent) -> EventView:
    return EventView(
        time=format_clock_padded(event.time),
        full_time=event.time,
        location=event.location.address or UNKNOWN_LOCATION,
        image_url=event.image_url or "",
    )


def expand_sessions(day: AttendanceDay, pairing: PairingStrategy = DEFAULT_PAIRING) -> list[SessionView]:
    views = []
    for i, s in enumerate(pairing.pair(day.check_ins, day.check_outs)):
        views.append(
            SessionView(
                session_number=i + 1,
                check_in=event_view(s.check_in),
                check_out=event_view(s.check_out) if s.check_out else None,
                duration=duration(s.check_in.time, s.check_out.time) if s.check_out else IN_PROGRESS_DURATION,
                status=(SessionStatus.IN_PROGRESS if s.is_open else SessionStatus.COMPLETED).value,
            )
        )
    return views
