from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} không hợp lệ")
    return str(value).strip()


def require_hours(value: float, field_name: str, *, max_hours: float = 24) -> float:
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} không hợp lệ") from None
    if hours < 0 or hours > max_hours:
        raise ValidationError(f"{field_name} phải nằm trong khoảng 0-{max_hours}")
    return hours


def require_positive_amount(value, field_name: str) -> float | None:
    if value is None:
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} không hợp lệ") from None
    if amount <= 0:
        raise ValidationError(f"{field_name} phải lớn hơn 0")
    return amount
