from __future__ import annotations

import math
from typing import Optional

from ..attendance.durations import duration
from ..attendance.model import AttendanceDay
from ..attendance.pairing import DEFAULT_PAIRING, PairingStrategy
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_clock_padded, format_month_day, parse_iso_date
from ..common.validators import require_positive_int
from ..core.constants import DEFAULT_HISTORY_LIMIT, EMPTY_CLOCK, EMPTY_DURATION
from ..core.enums import DayStatus
from .model import HistoryPage, HistoryRow


class HistoryFormatter:
    """Paginated list of past working days, one row per session."""

    def __init__(self, attendance: AttendanceRepository, *, pairing: Optional[PairingStrategy] = None):
        self._attendance = attendance
        self._pairing = pairing or DEFAULT_PAIRING

    def _rows_for(self, day: AttendanceDay) -> list[HistoryRow]:
        label = format_month_day(parse_iso_date(day.work_date))

        if not day.check_ins:
            return [
                HistoryRow(
                    id=str(day.day_id),
                    date=label,
                    check_in=EMPTY_CLOCK,
                    check_out=EMPTY_CLOCK,
                    total_hours=day.total_hours or EMPTY_DURATION,
                )
            ]

        rows = []
        for i, s in enumerate(self._pairing.pair(day.check_ins, day.check_outs)):
            rows.append(
                HistoryRow(
                    id=f"{day.day_id}_{i}",
                    date=label if i == 0 else f"{label} ({i + 1})",
                    check_in=format_clock_padded(s.check_in.time),
                    check_out=format_clock_padded(s.check_out.time if s.check_out else None),
                    total_hours=duration(s.check_in.time, s.check_out.time) if s.check_out else EMPTY_DURATION,
                )
            )
        return rows

    def history(self, employee_id: int, *, page: int = 1, limit: int = DEFAULT_HISTORY_LIMIT) -> HistoryPage:
        page = require_positive_int(page, "page")
        limit = require_positive_int(limit, "limit")

        days = self._attendance.list_recent_days(
            int(employee_id),
            status=DayStatus.PRESENT,
            offset=(page - 1) * limit,
            limit=limit,
        )
        total_records = self._attendance.count_days(int(employee_id), status=DayStatus.PRESENT)

        rows: list[HistoryRow] = []
        for day in days:
            rows.extend(self._rows_for(day))

        return HistoryPage(
            history=rows,
            current_page=page,
            total_pages=math.ceil(total_records / limit),
            total_records=total_records,
        )
