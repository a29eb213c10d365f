from datetime import datetime

import pytest

from src.faceclock.faceclock.core.enums import DayStatus
from src.faceclock.faceclock.core.exceptions import ValidationError
from src.faceclock.faceclock.reports.history import HistoryFormatter


def dt(day, hour, minute=0):
    return datetime(2025, 6, day, hour, minute)


@pytest.fixture
def formatter(attendance):
    return HistoryFormatter(attendance)


def test_one_row_per_session_newest_day_first(formatter, make_day):
    first = make_day(1, "2025-06-23", [(dt(23, 9), dt(23, 17))], total_hours="8h 0m")
    second = make_day(
        1,
        "2025-06-24",
        [(dt(24, 9), dt(24, 12)), (dt(24, 13), dt(24, 17, 45))],
        total_hours="8h 45m",
    )

    page = formatter.history(1)

    assert page.total_records == 2
    assert page.total_pages == 1
    assert page.current_page == 1
    assert [(r.id, r.date, r.check_in, r.check_out, r.total_hours) for r in page.history] == [
        (f"{second.day_id}_0", "June 24", "09:00 AM", "12:00 PM", "3h 0m"),
        (f"{second.day_id}_1", "June 24 (2)", "01:00 PM", "05:45 PM", "4h 45m"),
        (f"{first.day_id}_0", "June 23", "09:00 AM", "05:00 PM", "8h 0m"),
    ]


def test_open_session_row(formatter, make_day):
    make_day(1, "2025-06-24", [(dt(24, 9), None)])
    row = formatter.history(1).history[0]
    assert row.check_out == "--:--"
    assert row.total_hours == "--"


def test_only_present_days_are_listed(formatter, make_day):
    make_day(1, "2025-06-23", [(dt(23, 9), dt(23, 17))], total_hours="8h 0m")
    make_day(1, "2025-06-24", status=DayStatus.ON_LEAVE)
    make_day(1, "2025-06-25", status=DayStatus.ABSENT)

    page = formatter.history(1)

    assert page.total_records == 1
    assert [r.date for r in page.history] == ["June 23"]


def test_present_day_without_sessions(formatter, make_day):
    day = make_day(1, "2025-06-24", total_hours="--")
    row = formatter.history(1).history[0]
    assert row.id == str(day.day_id)
    assert (row.check_in, row.check_out, row.total_hours) == ("--:--", "--:--", "--")


def test_pagination(formatter, make_day):
    for d in range(2, 27):
        make_day(1, f"2025-06-{d:02d}", [(dt(d, 9), dt(d, 17))], total_hours="8h 0m")

    page = formatter.history(1, page=3, limit=10)

    assert page.total_records == 25
    assert page.total_pages == 3
    assert [r.date for r in page.history] == ["June 6", "June 5", "June 4", "June 3", "June 2"]


def test_empty_history(formatter):
    page = formatter.history(1)
    assert page.history == []
    assert page.total_pages == 0


@pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), ("x", 10)])
def test_invalid_paging(formatter, page, limit):
    with pytest.raises(ValidationError):
        formatter.history(1, page=page, limit=limit)
