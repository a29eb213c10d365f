from __future__ import annotations

import json
from typing import Optional

from flask import Flask, request

from ..common.datetime_utils import now_local
from ..common.responses import current_employee_id, read_image, success
from ..core.exceptions import ValidationError
from ..container import Container
from .model import Location


def _read_location() -> Location:
    raw = request.form.get("location")
    if not raw:
        raise ValidationError("Location is required")
    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise ValidationError("Location must be valid JSON") from e
    return Location.from_payload(payload)


def _read_department_id() -> Optional[int]:
    raw = (request.form.get("departmentId") or "").strip()
    if not raw:
        return None
    if not raw.isdigit():
        raise ValidationError("departmentId must be an integer")
    return int(raw)


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValidationError(f"{name} must be an integer") from e


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    def check_in():
        day = container.session_ledger.check_in(
            current_employee_id(),
            read_image(),
            _read_location(),
            department_id=_read_department_id(),
        )
        return success(day, 201)

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    def check_out():
        day = container.session_ledger.check_out(current_employee_id(), read_image(), _read_location())
        return success(day)

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    def today():
        return success(container.aggregator.today_status(current_employee_id()))

    @app.route("/api/attendance/week-summary", methods=["GET"], endpoint="attendance_week_summary")
    def week_summary():
        return success(container.aggregator.week_summary(current_employee_id()))

    @app.route("/api/attendance/month-summary", methods=["GET"], endpoint="attendance_month_summary")
    def month_summary():
        return success(container.aggregator.month_summary(current_employee_id()))

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    def history():
        page = _int_arg("page", 1)
        limit = _int_arg("limit", container.history_page_size)
        return success(container.history_formatter.history(current_employee_id(), page=page, limit=limit))

    @app.route("/api/attendance/daily/<work_date>", methods=["GET"], endpoint="attendance_daily")
    def daily(work_date: str):
        return success(container.aggregator.daily_detail(current_employee_id(), work_date))

    @app.route("/api/attendance/monthly", methods=["GET"], endpoint="attendance_monthly")
    def monthly():
        today = now_local().date()
        year = _int_arg("year", today.year)
        month = _int_arg("month", today.month)
        return success(container.aggregator.monthly_calendar(current_employee_id(), year, month))
