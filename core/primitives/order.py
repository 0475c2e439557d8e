"""
Gestor Core Primitives - Order Record
=======================================
Customer orders for personalized products.

An order holds a weak reference to its customer (``customer_id``):
the customer may be absent (guest order) or deleted later, and the
order survives either way.

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
    coerce_timestamp,
    format_timestamp,
    optional_text,
    require_text,
)
from core.primitives.money import ZERO, to_decimal, to_non_negative_decimal


# ══════════════════════════════════════════════════════════════
# ORDER STATUS
# ══════════════════════════════════════════════════════════════

class OrderStatus(Enum):
    PENDING = "pending"
    IN_PRODUCTION = "in_production"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# current status → statuses it may move to
ORDER_STATUS_TRANSITIONS = {
    OrderStatus.PENDING: frozenset({OrderStatus.IN_PRODUCTION, OrderStatus.CANCELLED}),
    OrderStatus.IN_PRODUCTION: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def is_allowed_transition(current: OrderStatus, target: OrderStatus) -> bool:
    """Re-writing the current status is always allowed."""
    return current == target or target in ORDER_STATUS_TRANSITIONS[current]


# ══════════════════════════════════════════════════════════════
# ORDER ITEM
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class OrderItem:
    product_name: str
    quantity: int
    price: Decimal

    def __post_init__(self):
        object.__setattr__(self, "product_name", require_text(self.product_name, "product_name"))
        quantity = coerce_non_negative_int(self.quantity, "quantity")
        if quantity < 1:
            raise ValueError("quantity must be at least 1.")
        object.__setattr__(self, "quantity", quantity)
        object.__setattr__(self, "price", to_non_negative_decimal(self.price, "price"))

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_name": self.product_name,
            "quantity": self.quantity,
            "price": str(self.price),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> OrderItem:
        return cls(
            product_name=data.get("product_name"),
            quantity=data.get("quantity"),
            price=data.get("price"),
        )


def coerce_items(values: Iterable[Any]) -> Tuple[OrderItem, ...]:
    if not isinstance(values, Iterable) or isinstance(values, (str, bytes, Mapping)):
        raise ValueError("items must be a list of order items.")
    items = []
    for value in values:
        if isinstance(value, OrderItem):
            items.append(value)
        elif isinstance(value, Mapping):
            items.append(OrderItem.from_dict(value))
        else:
            raise ValueError("items must be a list of order items.")
    if not items:
        raise ValueError("An order needs at least one item.")
    return tuple(items)


def items_total(items: Iterable[OrderItem]) -> Decimal:
    return sum((item.line_total for item in items), ZERO)


# ══════════════════════════════════════════════════════════════
# ORDER
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Order:
    """
    Fields:
        customer_id: Weak reference; lookup only, may dangle.
        total:       Stored total. Statistics use this value, not a
                     recomputation from items.
    """

    id: str
    items: Tuple[OrderItem, ...]
    total: Decimal
    created_at: datetime
    customer_id: Optional[str] = None
    status: OrderStatus = OrderStatus.PENDING
    notes: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "id", require_text(self.id, "id"))
        object.__setattr__(self, "items", coerce_items(self.items))
        object.__setattr__(self, "total", to_decimal(self.total, "total"))
        object.__setattr__(self, "created_at", coerce_timestamp(self.created_at, "created_at"))
        object.__setattr__(self, "customer_id", optional_text(self.customer_id, "customer_id"))
        object.__setattr__(self, "status", coerce_enum(OrderStatus, self.status, "status"))
        object.__setattr__(self, "notes", optional_text(self.notes, "notes"))

    @property
    def items_total(self) -> Decimal:
        return items_total(self.items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "customer_id": self.customer_id,
            "items": [item.to_dict() for item in self.items],
            "total": str(self.total),
            "status": self.status.value,
            "notes": self.notes,
            "created_at": format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Order:
        return cls(
            id=data.get("id"),
            items=data.get("items"),
            total=data.get("total"),
            created_at=data.get("created_at"),
            customer_id=data.get("customer_id"),
            status=data.get("status", OrderStatus.PENDING),
            notes=data.get("notes"),
        )
