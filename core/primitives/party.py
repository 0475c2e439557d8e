"""
Gestor Core Primitives - Customer Record
==========================================
A shop customer with contact details, a segment and purchase
statistics.

RULES:
- total_orders / total_spent / last_order_date are derived. Only the
  customer statistics maintainer writes them, as a side effect of
  order creation and deletion.
- preferences behave as a set: trimmed, blanks dropped, first
  occurrence wins, entry order kept for display.

This file contains NO persistence logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from core.primitives.fields import (
    coerce_enum,
    coerce_non_negative_int,
    coerce_optional_timestamp,
    coerce_timestamp,
    format_timestamp,
    optional_text,
    require_text,
)
from core.primitives.money import ZERO, to_decimal


class CustomerType(Enum):
    """Customer segment, chosen by the shop owner."""
    NEW = "new"
    FREQUENT = "frequent"
    PREMIUM = "premium"
    INACTIVE = "inactive"


CUSTOMER_STATISTICS_FIELDS = frozenset({
    "total_orders",
    "total_spent",
    "last_order_date",
})


def normalize_preferences(values: Optional[Iterable[Any]]) -> Tuple[str, ...]:
    if values is None:
        return ()
    if not isinstance(values, Iterable) or isinstance(values, (str, bytes, Mapping)):
        raise ValueError("preferences must be a list of text values.")
    seen = []
    for value in values:
        if not isinstance(value, str):
            raise ValueError("preferences must be a list of text values.")
        value = value.strip()
        if value and value not in seen:
            seen.append(value)
    return tuple(seen)


@dataclass(frozen=True)
class Customer:
    id: str
    name: str
    created_at: datetime
    type: CustomerType = CustomerType.NEW
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    preferences: Tuple[str, ...] = ()
    notes: Optional[str] = None
    total_orders: int = 0
    total_spent: Decimal = ZERO
    last_order_date: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "id", require_text(self.id, "id"))
        object.__setattr__(self, "name", require_text(self.name, "name"))
        object.__setattr__(self, "created_at", coerce_timestamp(self.created_at, "created_at"))
        object.__setattr__(self, "type", coerce_enum(CustomerType, self.type, "type"))
        for field in ("email", "phone", "address", "notes"):
            object.__setattr__(self, field, optional_text(getattr(self, field), field))
        object.__setattr__(self, "preferences", normalize_preferences(self.preferences))
        object.__setattr__(
            self, "total_orders",
            coerce_non_negative_int(self.total_orders, "total_orders"),
        )
        total_spent = self.total_spent if self.total_spent is not None else ZERO
        object.__setattr__(self, "total_spent", to_decimal(total_spent, "total_spent"))
        object.__setattr__(
            self, "last_order_date",
            coerce_optional_timestamp(self.last_order_date, "last_order_date"),
        )

    @property
    def average_ticket(self) -> Decimal:
        if self.total_orders <= 0:
            return ZERO
        return self.total_spent / self.total_orders

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "type": self.type.value,
            "preferences": list(self.preferences),
            "notes": self.notes,
            "created_at": format_timestamp(self.created_at),
            "total_orders": self.total_orders,
            "total_spent": str(self.total_spent),
            "last_order_date": format_timestamp(self.last_order_date),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Customer:
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            created_at=data.get("created_at"),
            type=data.get("type", CustomerType.NEW),
            email=data.get("email"),
            phone=data.get("phone"),
            address=data.get("address"),
            preferences=data.get("preferences", ()),
            notes=data.get("notes"),
            total_orders=data.get("total_orders", 0),
            total_spent=data.get("total_spent", ZERO),
            last_order_date=data.get("last_order_date"),
        )
