from datetime import datetime
from decimal import Decimal

from src.faceclock.faceclock.attendance.pairing import NextCheckoutPairing
from src.faceclock.faceclock.payroll.calculator.session_calculator import SessionSalaryCalculator, round_half_up


def t(hour, minute=0):
    return datetime(2025, 6, 24, hour, minute)


def test_sessions_bucketed_by_department(make_event):
    ins = [
        make_event(t(9), department_id=10, hourly_rate=100000),
        make_event(t(13), department_id=20, hourly_rate=80000),
        make_event(t(15, 30), department_id=10, hourly_rate=120000),
    ]
    outs = [make_event(t(12)), make_event(t(15, 30)), make_event(t(17))]

    salary = SessionSalaryCalculator().allocate_day_salary(ins, outs)

    assert [(s.department_id, s.hours, s.salary) for s in salary.work_sessions] == [
        (10, 3.0, 300000),
        (20, 2.5, 200000),
        (10, 1.5, 180000),
    ]
    lines = {line.department_id: line for line in salary.department_breakdown}
    assert lines[10].hours == 4.5
    assert lines[10].salary == 480000
    # First session in the department fixes the displayed rate.
    assert lines[10].hourly_rate == 100000
    assert lines[20].salary == 200000
    assert salary.total_salary == 680000


def test_open_session_earns_nothing(make_event):
    ins = [make_event(t(9), department_id=10, hourly_rate=100000), make_event(t(13), department_id=10, hourly_rate=100000)]
    outs = [make_event(t(12))]

    salary = SessionSalaryCalculator().allocate_day_salary(ins, outs)

    assert len(salary.work_sessions) == 1
    assert salary.total_salary == 300000


def test_no_sessions():
    salary = SessionSalaryCalculator().allocate_day_salary([], [])
    assert salary.total_salary == 0
    assert salary.department_breakdown == []
    assert salary.work_sessions == []


def test_fractional_hours_round_half_up(make_event):
    salary = SessionSalaryCalculator().allocate_day_salary(
        [make_event(t(9), department_id=10, hourly_rate=100000)],
        [make_event(t(9, 20))],
    )
    assert salary.work_sessions[0].hours == 0.33
    assert salary.work_sessions[0].salary == 33333
    assert salary.total_salary == 33333


def test_round_half_up():
    assert round_half_up(2.345, 2) == Decimal("2.35")
    assert round_half_up(0.5) == Decimal("1")
    assert round_half_up(12499.5) == Decimal("12500")


def test_pairing_strategy_is_pluggable(make_event):
    ins = [make_event(t(9), department_id=10, hourly_rate=100000)]
    outs = [make_event(t(8, 30)), make_event(t(11))]

    salary = SessionSalaryCalculator(pairing=NextCheckoutPairing()).allocate_day_salary(ins, outs)

    assert salary.work_sessions[0].check_out_time == t(11)
    assert salary.total_salary == 200000
