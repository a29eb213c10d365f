from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_positive_int(value: Any, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if number < 1:
        raise ValidationError(f"{field_name} must be at least 1")
    return number


def require_non_negative_number(value: Any, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number


def require_coordinates(value: Any) -> tuple[float, float]:
    """Validate a ``[longitude, latitude]`` pair."""
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValidationError("Location coordinates must be [longitude, latitude]")
    try:
        lng, lat = float(value[0]), float(value[1])
    except (TypeError, ValueError):
        raise ValidationError("Location coordinates must be numbers")
    if not -180.0 <= lng <= 180.0 or not -90.0 <= lat <= 90.0:
        raise ValidationError("Location coordinates out of range")
    return lng, lat
