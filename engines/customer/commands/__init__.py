"""
Gestor Customer Engine - Request Commands
===========================================
Typed create request for customers.

Statistics are not part of the request: every customer starts with
zero orders, zero spent and no last-order date, whatever the form
sent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from core.primitives.fields import coerce_enum, optional_text, require_text
from core.primitives.money import ZERO
from core.primitives.party import CustomerType, normalize_preferences


@dataclass(frozen=True)
class CustomerCreateRequest:
    name: str
    type: CustomerType = CustomerType.NEW
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    preferences: Tuple[str, ...] = ()
    notes: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "name", require_text(self.name, "name"))
        object.__setattr__(self, "type", coerce_enum(CustomerType, self.type, "type"))
        for field in ("email", "phone", "address", "notes"):
            object.__setattr__(self, field, optional_text(getattr(self, field), field))
        object.__setattr__(self, "preferences", normalize_preferences(self.preferences))

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> CustomerCreateRequest:
        return cls(
            name=payload.get("name"),
            type=payload.get("type") or CustomerType.NEW,
            email=payload.get("email"),
            phone=payload.get("phone"),
            address=payload.get("address"),
            preferences=payload.get("preferences") or (),
            notes=payload.get("notes"),
        )

    def to_fields(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "preferences": self.preferences,
            "notes": self.notes,
            "total_orders": 0,
            "total_spent": ZERO,
            "last_order_date": None,
        }
