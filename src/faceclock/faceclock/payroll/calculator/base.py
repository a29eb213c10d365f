from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...attendance.model import SessionEvent
from ..model import DaySalary


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def allocate_day_salary(self, check_ins: Sequence[SessionEvent], check_outs: Sequence[SessionEvent]) -> DaySalary:
        raise NotImplementedError
