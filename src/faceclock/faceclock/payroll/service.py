from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import parse_iso_date, work_date_key
from ..core.constants import UNKNOWN_DEPARTMENT
from ..core.exceptions import RecordNotFound
from ..employees.department_repository import DepartmentRepository
from .calculator.base import SalaryCalculator
from .calculator.session_calculator import SessionSalaryCalculator
from .model import DaySalary
from .rate_service import DepartmentRateService


class DaySalaryService:
    """Department-based salary for one attendance day."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        rates: DepartmentRateService,
        departments: DepartmentRepository,
        *,
        calculator: Optional[SalaryCalculator] = None,
    ):
        self._attendance = attendance
        self._rates = rates
        self._departments = departments
        self._calculator = calculator or SessionSalaryCalculator()

    def daily_breakdown(self, employee_id: int, work_date: date | str) -> DaySalary:
        key = work_date_key(parse_iso_date(work_date) if isinstance(work_date, str) else work_date)
        day = self._attendance.get_day(int(employee_id), key)
        if not day:
            raise RecordNotFound(f"No attendance record for {key}")

        # Check-ins recorded without a department are priced through the fallback chain.
        check_ins = []
        for ci in day.check_ins:
            if ci.department_id is None or ci.hourly_rate is None:
                resolved = self._rates.resolve_rate(int(employee_id), ci.department_id, at=ci.time)
                ci = replace(ci, department_id=resolved.department_id, hourly_rate=resolved.hourly_rate)
            check_ins.append(ci)

        salary = self._calculator.allocate_day_salary(check_ins, day.check_outs)

        names = self._departments.get_names(
            line.department_id for line in salary.department_breakdown if line.department_id is not None
        )

        def name_of(dept_id: Optional[int]) -> str:
            return names.get(dept_id, UNKNOWN_DEPARTMENT) if dept_id is not None else UNKNOWN_DEPARTMENT

        return DaySalary(
            total_salary=salary.total_salary,
            department_breakdown=[
                replace(line, department_name=name_of(line.department_id)) for line in salary.department_breakdown
            ],
            work_sessions=[replace(s, department_name=name_of(s.department_id)) for s in salary.work_sessions],
        )
