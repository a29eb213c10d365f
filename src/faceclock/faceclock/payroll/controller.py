from __future__ import annotations

from flask import Flask, request

from ..common.responses import success
from ..core.exceptions import ValidationError
from ..container import Container


def _rate_payload(rate) -> dict:
    return {
        "employeeId": rate.employee_id,
        "departmentId": rate.department_id,
        "hourlyRate": rate.hourly_rate,
        "isDefault": rate.is_default,
        "isActive": rate.is_active,
        "effectiveFrom": rate.effective_from.isoformat(),
        "effectiveTo": rate.effective_to.isoformat() if rate.effective_to else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route(
        "/api/department-salaries/<int:employee_id>",
        methods=["GET"],
        endpoint="department_salaries_list",
    )
    def list_rates(employee_id: int):
        rates = container.rate_service.list_rates(employee_id)
        return success([_rate_payload(r) for r in rates])

    @app.route(
        "/api/department-salaries/<int:employee_id>/<int:department_id>",
        methods=["GET"],
        endpoint="department_salaries_resolve",
    )
    def resolve_rate(employee_id: int, department_id: int):
        resolved = container.rate_service.resolve_rate(employee_id, department_id)
        return success(
            {
                "departmentId": resolved.department_id,
                "hourlyRate": resolved.hourly_rate,
                "source": resolved.source.value,
            }
        )

    @app.route(
        "/api/department-salaries/<int:employee_id>/<int:department_id>",
        methods=["PUT"],
        endpoint="department_salaries_set",
    )
    def set_rate(employee_id: int, department_id: int):
        data = request.get_json(silent=True) or {}
        if "hourlyRate" not in data:
            raise ValidationError("hourlyRate is required")
        rate = container.rate_service.set_rate(
            employee_id,
            department_id,
            data["hourlyRate"],
            bool(data.get("isDefault", False)),
        )
        return success(_rate_payload(rate))

    @app.route(
        "/api/department-salaries/<int:employee_id>/<int:department_id>",
        methods=["DELETE"],
        endpoint="department_salaries_deactivate",
    )
    def deactivate_rate(employee_id: int, department_id: int):
        container.rate_service.deactivate_rate(employee_id, department_id)
        return success({"employeeId": employee_id, "departmentId": department_id, "isActive": False})

    @app.route(
        "/api/department-salaries/<int:employee_id>/daily/<work_date>",
        methods=["GET"],
        endpoint="department_salaries_daily",
    )
    def daily_salary(employee_id: int, work_date: str):
        return success(container.day_salary_service.daily_breakdown(employee_id, work_date))
