from __future__ import annotations

import re
from typing import Any

from ..core.exceptions import ValidationError

_NON_DIGITS = re.compile(r"\D")


def require_non_empty(value: str | None, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def normalize_phone(value: str | None) -> str:
    """Strip everything but digits so '+91 98765-43210' matches '919876543210'."""
    return _NON_DIGITS.sub("", value or "")


def require_phone(value: str | None, field_name: str = "phone") -> str:
    phone = require_non_empty(value, field_name)
    if not normalize_phone(phone):
        raise ValidationError(f"{field_name} must contain digits")
    return phone


def parse_rate(value: Any, field_name: str = "dailyRate") -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0.0
    try:
        rate = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if rate < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return rate
