from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from ...attendance.model import SessionEvent
from ...attendance.pairing import DEFAULT_PAIRING, PairingStrategy
from ..model import DaySalary, DepartmentSalaryLine, SessionPay
from .base import SalaryCalculator


def round_half_up(value: float, places: int = 0) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


class SessionSalaryCalculator(SalaryCalculator):
    """Standard rule: each closed session pays (out - in) hours x the check-in's hourly rate.

    Sessions are bucketed by the check-in's department. Open sessions earn nothing.
    """

    def __init__(self, pairing: Optional[PairingStrategy] = None):
        self._pairing = pairing or DEFAULT_PAIRING

    def allocate_day_salary(self, check_ins: Sequence[SessionEvent], check_outs: Sequence[SessionEvent]) -> DaySalary:
        buckets: dict[Optional[int], dict] = {}
        sessions: list[SessionPay] = []

        for s in self._pairing.pair(check_ins, check_outs):
            if s.check_out is None:
                continue
            hours = max((s.check_out.time - s.check_in.time).total_seconds(), 0.0) / 3600
            rate = float(s.check_in.hourly_rate or 0.0)
            salary = hours * rate
            dept_id = s.check_in.department_id

            sessions.append(
                SessionPay(
                    check_in_time=s.check_in.time,
                    check_out_time=s.check_out.time,
                    department_id=dept_id,
                    hours=float(round_half_up(hours, 2)),
                    hourly_rate=rate,
                    salary=int(round_half_up(salary)),
                )
            )

            bucket = buckets.get(dept_id)
            if bucket is None:
                # The first session seen for a department fixes its displayed rate.
                buckets[dept_id] = {"hours": hours, "hourly_rate": rate, "salary": salary}
            else:
                bucket["hours"] += hours
                bucket["salary"] += salary

        breakdown = [
            DepartmentSalaryLine(
                department_id=dept_id,
                hours=float(round_half_up(b["hours"], 2)),
                hourly_rate=b["hourly_rate"],
                salary=int(round_half_up(b["salary"])),
            )
            for dept_id, b in buckets.items()
        ]
        return DaySalary(
            total_salary=sum(line.salary for line in breakdown),
            department_breakdown=breakdown,
            work_sessions=sessions,
        )
