from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import RateSource


@dataclass(frozen=True)
class DepartmentRate:
    """Mức lương theo giờ của nhân viên tại một bộ phận."""

    employee_id: int
    department_id: int
    hourly_rate: float
    is_default: bool
    is_active: bool
    effective_from: datetime
    effective_to: Optional[datetime] = None
    rate_id: Optional[int] = None

    def is_effective(self, at: datetime) -> bool:
        if not self.is_active or self.effective_from > at:
            return False
        return self.effective_to is None or self.effective_to >= at


@dataclass(frozen=True)
class ResolvedRate:
    department_id: int
    hourly_rate: float
    source: RateSource


@dataclass(frozen=True)
class SessionPay:
    check_in_time: datetime
    check_out_time: datetime
    department_id: Optional[int]
    hours: float
    hourly_rate: float
    salary: int
    department_name: Optional[str] = None


@dataclass(frozen=True)
class DepartmentSalaryLine:
    department_id: Optional[int]
    hours: float
    hourly_rate: float
    salary: int
    department_name: Optional[str] = None


@dataclass(frozen=True)
class DaySalary:
    total_salary: int
    department_breakdown: list[DepartmentSalaryLine]
    work_sessions: list[SessionPay]
