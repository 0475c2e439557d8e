"""
Gestor Catalog Engine - Request Commands
==========================================
Typed create requests for products and suppliers.

Requests are built from form payloads (``from_payload``) and
validate at construction; a request that exists is safe to hand to
the store.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping

from core.primitives.catalog import ProductType
from core.primitives.fields import coerce_enum, coerce_non_negative_int, optional_text, require_text
from core.primitives.money import to_non_negative_decimal


@dataclass(frozen=True)
class ProductCreateRequest:
    """Name, cost and margin are required; everything else has a default."""
    name: str
    cost: Decimal
    margin: Decimal
    type: ProductType = ProductType.MUG
    supplier: str = ""
    stock: int = 0

    def __post_init__(self):
        object.__setattr__(self, "name", require_text(self.name, "name"))
        object.__setattr__(self, "cost", to_non_negative_decimal(self.cost, "cost"))
        object.__setattr__(self, "margin", to_non_negative_decimal(self.margin, "margin"))
        object.__setattr__(self, "type", coerce_enum(ProductType, self.type, "type"))
        object.__setattr__(self, "supplier", optional_text(self.supplier, "supplier") or "")
        object.__setattr__(self, "stock", coerce_non_negative_int(self.stock, "stock"))

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> ProductCreateRequest:
        return cls(
            name=payload.get("name"),
            cost=payload.get("cost"),
            margin=payload.get("margin"),
            type=payload.get("type") or ProductType.MUG,
            supplier=payload.get("supplier", ""),
            stock=payload.get("stock", 0),
        )

    def to_fields(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "cost": self.cost,
            "margin": self.margin,
            "type": self.type,
            "supplier": self.supplier,
            "stock": self.stock,
        }


@dataclass(frozen=True)
class SupplierCreateRequest:
    name: str
    contact: str = ""
    delivery_time: str = ""
    unit_cost: Decimal = Decimal("0")

    def __post_init__(self):
        object.__setattr__(self, "name", require_text(self.name, "name"))
        object.__setattr__(self, "contact", optional_text(self.contact, "contact") or "")
        object.__setattr__(
            self, "delivery_time",
            optional_text(self.delivery_time, "delivery_time") or "",
        )
        unit_cost = self.unit_cost if self.unit_cost not in (None, "") else 0
        object.__setattr__(self, "unit_cost", to_non_negative_decimal(unit_cost, "unit_cost"))

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> SupplierCreateRequest:
        return cls(
            name=payload.get("name"),
            contact=payload.get("contact", ""),
            delivery_time=payload.get("delivery_time", ""),
            unit_cost=payload.get("unit_cost", 0),
        )

    def to_fields(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "contact": self.contact,
            "delivery_time": self.delivery_time,
            "unit_cost": self.unit_cost,
        }
