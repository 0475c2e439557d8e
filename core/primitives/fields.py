"""
Gestor Core Primitives - Field Coercion
=========================================
Shared coercion used by record ``__post_init__`` hooks. Records
accept raw form / JSON values and normalize them in place.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Type, TypeVar

E = TypeVar("E", bound=Enum)


def require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field} is required.")
    return value.strip()


def optional_text(value: Any, field: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be text.")
    value = value.strip()
    return value or None


def coerce_enum(enum_type: Type[E], value: Any, field: str) -> E:
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise ValueError(
            f"{field} must be one of: {allowed}. Got {value!r}."
        ) from None


def coerce_non_negative_int(value: Any, field: str) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a whole number.")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{field} must be a whole number.")
        value = int(value)
    try:
        result = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field} must be a whole number, got {value!r}.") from None
    if result < 0:
        raise ValueError(f"{field} cannot be negative.")
    return result


def coerce_timestamp(value: Any, field: str) -> datetime:
    """Accept aware datetimes or ISO-8601 strings (``Z`` suffix allowed)."""
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"{field} must be an ISO-8601 timestamp.") from None
    if not isinstance(value, datetime):
        raise ValueError(f"{field} must be a timestamp.")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def coerce_optional_timestamp(value: Any, field: str) -> Optional[datetime]:
    if value is None or value == "":
        return None
    return coerce_timestamp(value, field)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None
