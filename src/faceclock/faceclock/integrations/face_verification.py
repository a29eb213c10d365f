from __future__ import annotations

import logging
from typing import Protocol

import requests

from ..core.exceptions import VerificationServiceError

logger = logging.getLogger(__name__)


class FaceVerifier(Protocol):
    def verify(self, captured_image_url: str, reference_image_url: str) -> bool:
        raise NotImplementedError


class HttpFaceVerifier(FaceVerifier):
    """Client for the face-matching service.

    POST ``{"capturedImageUrl": ..., "referenceImageUrl": ...}``, expects ``{"match": bool}``.
    """

    def __init__(self, url: str, *, timeout: float = 10.0, session: requests.Session | None = None):
        self._url = url
        self._timeout = float(timeout)
        self._session = session or requests.Session()

    def verify(self, captured_image_url: str, reference_image_url: str) -> bool:
        if not self._url:
            raise VerificationServiceError("Face verification service is not configured")

        try:
            response = self._session.post(
                self._url,
                json={"capturedImageUrl": captured_image_url, "referenceImageUrl": reference_image_url},
                timeout=self._timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("face verification request failed: %s", e)
            raise VerificationServiceError(f"Face verification service error: {e}") from e

        match = payload.get("match") if isinstance(payload, dict) else None
        if not isinstance(match, bool):
            raise VerificationServiceError("Face verification service returned no match flag")
        return match
