from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_negative_number
from ..core.constants import DEFAULT_FALLBACK_HOURLY_RATE
from ..core.enums import RateSource
from ..core.exceptions import RateNotFound
from ..employees.repository import EmployeeRepository
from .model import DepartmentRate, ResolvedRate
from .repository import DepartmentRateRepository

logger = logging.getLogger(__name__)


class DepartmentRateService:
    """Hourly rates per (employee, department) and the fallback chain used to price work."""

    def __init__(
        self,
        rates: DepartmentRateRepository,
        employees: EmployeeRepository,
        *,
        fallback_hourly_rate: float = DEFAULT_FALLBACK_HOURLY_RATE,
    ):
        self._rates = rates
        self._employees = employees
        self._fallback_hourly_rate = float(fallback_hourly_rate)

    def resolve_rate(
        self,
        employee_id: int,
        department_id: Optional[int] = None,
        *,
        at: Optional[datetime] = None,
    ) -> ResolvedRate:
        """Department rate, else the employee's default rate, else the organization fallback."""
        at = at or now_local()

        if department_id is not None:
            rate = self._rates.find_effective(int(employee_id), int(department_id), at=at)
            if rate:
                return ResolvedRate(rate.department_id, rate.hourly_rate, RateSource.DEPARTMENT)

        rate = self._rates.find_effective_default(int(employee_id), at=at)
        if rate:
            return ResolvedRate(rate.department_id, rate.hourly_rate, RateSource.DEFAULT)

        employee = self._employees.get_by_id(int(employee_id))
        if not employee or employee.organization_id is None:
            raise RateNotFound(f"No department rate found for employee {employee_id}")
        return ResolvedRate(employee.organization_id, self._fallback_hourly_rate, RateSource.ORGANIZATION)

    def set_rate(
        self,
        employee_id: int,
        department_id: int,
        hourly_rate: float,
        is_default: bool = False,
        *,
        now: Optional[datetime] = None,
    ) -> DepartmentRate:
        hourly_rate = require_non_negative_number(hourly_rate, "Hourly rate")
        now = now or now_local()

        saved = self._rates.save(
            DepartmentRate(
                employee_id=int(employee_id),
                department_id=int(department_id),
                hourly_rate=hourly_rate,
                is_default=bool(is_default),
                is_active=True,
                effective_from=now,
                effective_to=None,
            ),
            clear_other_defaults=bool(is_default),
        )
        logger.info(
            "rate for employee %s dept %s set to %s (default=%s)",
            employee_id, department_id, hourly_rate, bool(is_default),
        )
        return saved

    def deactivate_rate(self, employee_id: int, department_id: int, *, now: Optional[datetime] = None) -> None:
        if not self._rates.deactivate(int(employee_id), int(department_id), at=now or now_local()):
            raise RateNotFound(f"No rate for employee {employee_id} in department {department_id}")
        logger.info("rate for employee %s dept %s deactivated", employee_id, department_id)

    def list_rates(self, employee_id: int) -> Sequence[DepartmentRate]:
        return self._rates.list_active(int(employee_id))
