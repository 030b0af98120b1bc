"""
Cheap input checks run by controllers before any store call.
"""

from __future__ import annotations

from .errors import ValidationError

# Upper bound of a SERIAL (int4) key.
MAX_SERIAL_ID = 2_147_483_647


def parse_id(raw: str, *, label: str) -> int:
    value = (raw or "").strip()
    if not (value.isascii() and value.isdigit()):
        raise ValidationError(
            "id",
            f"{label} ID must be a number",
            error=f"Invalid {label.lower()} ID",
        )
    return int(value)


def require_text(value: str | None, *, field: str, label: str, max_length: int) -> str:
    """
    Trim `value` and check it is present and at most `max_length` characters.
    """
    text = (value or "").strip()
    if not text:
        raise ValidationError(field, f"{label} is required", error="Missing required field")
    if len(text) > max_length:
        raise ValidationError(field, f"{label} must be at most {max_length} characters")
    return text


def optional_text(value: str | None, *, field: str, label: str, max_length: int) -> str | None:
    text = (value or "").strip()
    if not text:
        return None
    if len(text) > max_length:
        raise ValidationError(field, f"{label} must be at most {max_length} characters")
    return text


def is_storable_id(value: int) -> bool:
    return 0 < value <= MAX_SERIAL_ID
