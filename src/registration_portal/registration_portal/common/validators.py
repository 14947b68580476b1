from __future__ import annotations

import re
from typing import Any, Optional

_NON_DIGITS = re.compile(r"\D")


class FieldErrors:
    """Collects messages per field so validation can report every violation at once."""

    def __init__(self) -> None:
        self._errors: dict[str, list[str]] = {}

    def add(self, field: str, message: str) -> None:
        self._errors.setdefault(field, []).append(message)

    def has(self, field: str) -> bool:
        return field in self._errors

    def __bool__(self) -> bool:
        return bool(self._errors)

    def as_dict(self) -> dict[str, list[str]]:
        return {k: list(v) for k, v in self._errors.items()}


def extract_digits(value: Any) -> str:
    return _NON_DIGITS.sub("", str(value or ""))


def clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def require_text(
    errors: FieldErrors,
    field: str,
    value: Any,
    *,
    required_message: str,
    max_length: int,
    too_long_message: str,
) -> Optional[str]:
    text = clean_text(value)
    if not text:
        errors.add(field, required_message)
        return None
    if len(text) > max_length:
        errors.add(field, too_long_message)
        return None
    return text


def optional_text(errors: FieldErrors, field: str, value: Any, *, max_length: int, too_long_message: str) -> Optional[str]:
    text = clean_text(value)
    if not text:
        return None
    if len(text) > max_length:
        errors.add(field, too_long_message)
        return None
    return text


def parse_int(value: Any) -> Optional[int]:
    """Accept ints and digit strings (HTML forms); reject bools and fractional numbers."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        v = value.strip()
        if re.fullmatch(r"[+-]?\d+", v):
            return int(v)
    return None


def require_int_in_range(
    errors: FieldErrors,
    field: str,
    value: Any,
    *,
    label: str,
    minimum: int,
    maximum: int,
) -> Optional[int]:
    number = parse_int(value)
    if number is None:
        errors.add(field, f"{label} must be a whole number")
        return None
    if number < minimum:
        if minimum == 0:
            errors.add(field, f"{label} cannot be negative")
        else:
            errors.add(field, f"{label} must be at least {minimum}")
        return None
    if number > maximum:
        errors.add(field, f"{label} cannot exceed {maximum}")
        return None
    return number
