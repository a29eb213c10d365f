import io

import pytest
from PIL import Image

from src.faceclock.faceclock.core.exceptions import UploadError
from src.faceclock.faceclock.integrations.media_store import LocalMediaStore


def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color=(200, 10, 10)).save(buf, format="PNG")
    return buf.getvalue()


def jpeg_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (4, 4)).save(buf, format="JPEG")
    return buf.getvalue()


@pytest.fixture
def store(tmp_path):
    return LocalMediaStore(tmp_path, base_url="http://cdn.test/media/")


def test_upload_writes_file_and_returns_url(store, tmp_path):
    data = png_bytes()
    url = store.upload(data, "attendance_images")

    assert url.startswith("http://cdn.test/media/attendance_images/")
    assert url.endswith(".png")
    path = store.path_for(url)
    assert path.parent == tmp_path / "attendance_images"
    assert path.read_bytes() == data


def test_jpeg_extension(store):
    assert store.upload(jpeg_bytes(), "employee_faces").endswith(".jpg")


def test_uploads_get_distinct_names(store):
    assert store.upload(png_bytes(), "x") != store.upload(png_bytes(), "x")


@pytest.mark.parametrize("data", [b"", b"definitely not an image"])
def test_rejects_non_images(store, data):
    with pytest.raises(UploadError):
        store.upload(data, "attendance_images")


def test_folder_is_sanitized(store, tmp_path):
    url = store.upload(png_bytes(), "../../etc")
    assert store.path_for(url).parent.parent == tmp_path


def test_delete(store):
    url = store.upload(png_bytes(), "employee_faces")
    path = store.path_for(url)

    store.delete(url)
    assert not path.exists()
    # Already gone: nothing to do.
    store.delete(url)


def test_delete_foreign_url(store):
    with pytest.raises(UploadError):
        store.delete("http://elsewhere.test/media/employee_faces/a.png")


def test_delete_rejects_traversal(store):
    with pytest.raises(UploadError):
        store.delete("http://cdn.test/media/../secrets.png")
