from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_choice(value: str, field_name: str, choices) -> str:
    v = value.strip().lower() if isinstance(value, str) else ""
    allowed = {str(c).lower() for c in choices}
    if v not in allowed:
        raise ValidationError(f"{field_name} is not valid")
    return v
