import pytest

from src.faceclock.faceclock.core.exceptions import IdentityError, UploadError
from src.faceclock.faceclock.employees.service import EnrollmentService


@pytest.fixture
def enrollment(employees, media):
    return EnrollmentService(employees, media)


def test_enroll_replaces_reference_and_deletes_old(enrollment, employees, media):
    url = enrollment.upload_reference_face(1, b"new-face")

    assert url.startswith("http://media.test/employee_faces/")
    assert employees.get_by_id(1).reference_image_url == url
    assert media.deleted == ["http://media.test/employee_faces/ref-1.jpg"]


def test_first_enrollment_deletes_nothing(enrollment, employees, media):
    url = enrollment.upload_reference_face(2, b"face")
    assert employees.get_by_id(2).reference_image_url == url
    assert media.deleted == []


def test_cleanup_failure_does_not_block_enrollment(enrollment, employees, media):
    media.fail_delete = True
    url = enrollment.upload_reference_face(1, b"new-face")
    assert employees.get_by_id(1).reference_image_url == url


def test_unknown_employee(enrollment, media):
    with pytest.raises(IdentityError):
        enrollment.upload_reference_face(99, b"face")
    assert media.uploads == []


def test_empty_upload_keeps_old_reference(enrollment, employees):
    with pytest.raises(UploadError):
        enrollment.upload_reference_face(1, b"")
    assert employees.get_by_id(1).reference_image_url == "http://media.test/employee_faces/ref-1.jpg"


def test_failed_save_keeps_old_reference_image(enrollment, employees, media, monkeypatch):
    def db_down(employee_id, image_url):
        raise RuntimeError("db down")

    monkeypatch.setattr(employees, "set_reference_image", db_down)

    with pytest.raises(RuntimeError):
        enrollment.upload_reference_face(1, b"new-face")

    assert media.deleted == []
    assert employees.get_by_id(1).reference_image_url == "http://media.test/employee_faces/ref-1.jpg"
