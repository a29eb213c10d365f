from __future__ import annotations

import logging

from ..core.constants import EMPLOYEE_FACE_FOLDER
from ..core.exceptions import IdentityError, UploadError
from ..integrations.media_store import MediaStore
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Use case: enroll/replace the reference face used for check-in verification."""

    def __init__(self, employees: EmployeeRepository, media: MediaStore):
        self._employees = employees
        self._media = media

    def upload_reference_face(self, employee_id: int, image: bytes) -> str:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or not employee.is_active:
            raise IdentityError("Employee not found")

        image_url = self._media.upload(image, EMPLOYEE_FACE_FOLDER)
        self._employees.set_reference_image(employee.employee_id, image_url)

        # The old image goes only once the new URL is stored. Cleanup failure must not block enrollment.
        old_url = employee.reference_image_url
        if old_url:
            try:
                self._media.delete(old_url)
            except UploadError as e:
                logger.warning("could not delete old reference image %s: %s", old_url, e)

        logger.info("employee %s enrolled new reference face", employee.employee_id)
        return image_url
