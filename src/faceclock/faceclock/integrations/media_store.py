from __future__ import annotations

import io
import logging
import uuid
from pathlib import Path
from typing import Protocol

from PIL import Image, UnidentifiedImageError
from werkzeug.utils import secure_filename

from ..core.exceptions import UploadError

logger = logging.getLogger(__name__)

_EXTENSIONS = {"JPEG": "jpg", "PNG": "png", "WEBP": "webp", "GIF": "gif", "BMP": "bmp"}


class MediaStore(Protocol):
    def upload(self, data: bytes, folder: str) -> str:
        raise NotImplementedError

    def delete(self, url: str) -> None:
        raise NotImplementedError


class LocalMediaStore(MediaStore):
    """Stores images on disk under ``root/<folder>/<uuid>.<ext>``; URLs are ``base_url/<folder>/<name>``."""

    def __init__(self, root: str | Path, *, base_url: str):
        self._root = Path(root)
        self._base_url = base_url.rstrip("/")

    @staticmethod
    def _detect_extension(data: bytes) -> str:
        if not data:
            raise UploadError("No image data provided")
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.verify()
                fmt = img.format
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise UploadError(f"Invalid image: {e}") from e

        ext = _EXTENSIONS.get(fmt or "")
        if not ext:
            raise UploadError(f"Unsupported image format: {fmt}")
        return ext

    def upload(self, data: bytes, folder: str) -> str:
        ext = self._detect_extension(data)
        folder = secure_filename(folder) or "misc"
        name = f"{uuid.uuid4().hex}.{ext}"

        target_dir = self._root / folder
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            (target_dir / name).write_bytes(data)
        except OSError as e:
            raise UploadError(f"Could not store image: {e}") from e

        logger.debug("stored image %s/%s (%d bytes)", folder, name, len(data))
        return f"{self._base_url}/{folder}/{name}"

    def path_for(self, url: str) -> Path:
        prefix = f"{self._base_url}/"
        if not url.startswith(prefix):
            raise UploadError(f"URL is not managed by this store: {url}")
        parts = url[len(prefix):].split("/")
        if len(parts) != 2 or not all(secure_filename(p) == p for p in parts):
            raise UploadError(f"Malformed media URL: {url}")
        return self._root / parts[0] / parts[1]

    def delete(self, url: str) -> None:
        path = self.path_for(url)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            raise UploadError(f"Could not delete image: {e}") from e
