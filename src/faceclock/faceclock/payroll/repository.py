from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import DepartmentRate


class DepartmentRateRepository(Protocol):
    def get(self, employee_id: int, department_id: int) -> Optional[DepartmentRate]:
        raise NotImplementedError

    def find_effective(self, employee_id: int, department_id: int, *, at: datetime) -> Optional[DepartmentRate]:
        raise NotImplementedError

    def find_effective_default(self, employee_id: int, *, at: datetime) -> Optional[DepartmentRate]:
        raise NotImplementedError

    def list_active(self, employee_id: int) -> Sequence[DepartmentRate]:
        """Active rates, default first then newest."""

        raise NotImplementedError

    def save(self, rate: DepartmentRate, *, clear_other_defaults: bool) -> DepartmentRate:
        """Upsert by (employee_id, department_id).

        With ``clear_other_defaults`` the employee's other rates lose ``is_default``
        in the same unit of work.
        """

        raise NotImplementedError

    def deactivate(self, employee_id: int, department_id: int, *, at: datetime) -> bool:
        raise NotImplementedError
