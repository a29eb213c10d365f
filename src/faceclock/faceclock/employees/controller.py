from __future__ import annotations

from flask import Flask

from ..common.responses import current_employee_id, read_image, success
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/face", methods=["POST"], endpoint="employees_upload_face")
    def upload_face():
        image_url = container.enrollment_service.upload_reference_face(current_employee_id(), read_image())
        return success({"imageUrl": image_url}, 201)
