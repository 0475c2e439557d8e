"""
Gestor Order Engine - Request Commands
========================================
Typed create request for orders.

A new order always starts as PENDING; a status in the payload is
ignored. ``total`` may be omitted, in which case it is the sum of
price × quantity over the items.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Tuple

from core.primitives.fields import optional_text
from core.primitives.money import to_decimal
from core.primitives.order import OrderItem, OrderStatus, coerce_items, items_total


@dataclass(frozen=True)
class OrderCreateRequest:
    items: Tuple[OrderItem, ...]
    customer_id: Optional[str] = None
    total: Optional[Decimal] = None
    notes: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "items", coerce_items(self.items))
        object.__setattr__(self, "customer_id", optional_text(self.customer_id, "customer_id"))
        if self.total is not None and self.total != "":
            total = to_decimal(self.total, "total")
            if total < 0:
                raise ValueError("total cannot be negative.")
            object.__setattr__(self, "total", total)
        else:
            object.__setattr__(self, "total", None)
        object.__setattr__(self, "notes", optional_text(self.notes, "notes"))

    @property
    def items_total(self) -> Decimal:
        return items_total(self.items)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> OrderCreateRequest:
        return cls(
            items=payload.get("items"),
            customer_id=payload.get("customer_id"),
            total=payload.get("total"),
            notes=payload.get("notes"),
        )

    def to_fields(self) -> Dict[str, Any]:
        return {
            "items": self.items,
            "customer_id": self.customer_id,
            "total": self.total if self.total is not None else self.items_total,
            "status": OrderStatus.PENDING,
            "notes": self.notes,
        }
