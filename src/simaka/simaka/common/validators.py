from __future__ import annotations

import re
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

_CLOCK_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def require_non_empty(value: Any, field_name: str, *, max_len: Optional[int] = None) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    value = value.strip()
    if max_len is not None:
        require_max_length(value, field_name, max_len)
    return value


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_positive_int(value: Any, field_name: str) -> int:
    """Accept 7 or "7"; reject booleans, zero, negatives and non-numeric text."""

    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name}. Must be a positive number.")
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}. Must be a positive number.")
    if number <= 0:
        raise ValidationError(f"Invalid {field_name}. Must be a positive number.")
    return number


def require_choice(value: Any, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {field_name}. Must be one of: {allowed}")


def require_clock(value: Any, field_name: str) -> str:
    value = require_non_empty(value, field_name)
    if not _CLOCK_RE.match(value):
        raise ValidationError(f"{field_name} must be HH:MM")
    return value


def initials(name: str) -> str:
    return "".join(part[0] for part in name.split() if part).upper()
