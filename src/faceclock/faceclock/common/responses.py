from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime
from enum import Enum
from typing import Any

from flask import Flask, abort, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.constants import EMPLOYEE_HEADER
from ..core.exceptions import (
    DomainError,
    IdentityError,
    NoOpenSession,
    RateNotFound,
    RecordNotFound,
    SessionOrderViolation,
    StaleRecordError,
    UploadError,
    ValidationError,
    VerificationFailure,
    VerificationServiceError,
)

logger = logging.getLogger(__name__)

# Most specific first.
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (VerificationServiceError, 502),
    (VerificationFailure, 403),
    (IdentityError, 403),
    (NoOpenSession, 409),
    (SessionOrderViolation, 409),
    (StaleRecordError, 503),
    (RecordNotFound, 404),
    (RateNotFound, 404),
    (UploadError, 422),
    (ValidationError, 400),
]


def to_payload(value: Any) -> Any:
    """Dataclasses/enums/datetimes -> JSON-ready structures."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        if hasattr(value, "to_dict"):
            return value.to_dict()
        return {f.name: to_payload(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_payload(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_payload(v) for v in value]
    return value


def success(data: Any, status: int = 200):
    return jsonify({"success": True, "data": to_payload(data)}), status


def error(message: str, status: int, **extra: Any):
    body = {"success": False, "message": message}
    body.update(extra)
    return jsonify(body), status


def status_for(exc: DomainError) -> int:
    for exc_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, exc_type):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = status_for(e)
        if isinstance(e, VerificationFailure):
            return error(str(e), status, retryable=e.retryable)
        return error(str(e), status)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return error(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.path)
        return error("An internal server error occurred", 500)


def current_employee_id() -> int:
    """Employee id forwarded by the auth gateway in ``X-Employee-Id``."""
    raw = request.headers.get(EMPLOYEE_HEADER, "").strip()
    if not raw.isdigit():
        abort(401, description="Unauthorized")
    return int(raw)


def read_image(field: str = "image") -> bytes:
    file = request.files.get(field)
    if file is None or not file.filename:
        raise ValidationError("Image is required")
    return file.read()
