"""
Gestor Core Primitives - Catalog Records
==========================================
Products the shop sells and the suppliers it buys from.

Records are immutable snapshots. An update produces a new record
through ``dataclasses.replace``, which re-runs ``__post_init__`` so
every snapshot in the store is valid.

This file contains NO persistence logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict

from core.primitives.fields import (
    coerce_enum,
    coerce_non_negative_int,
    coerce_timestamp,
    format_timestamp,
    optional_text,
    require_text,
)
from core.primitives.money import to_non_negative_decimal


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class ProductType(Enum):
    """Blank products the shop personalizes."""
    MUG = "mug"
    TOTE_BAG = "tote-bag"
    TOWEL = "towel"
    SHIRT = "shirt"
    TILE = "tile"
    OTHER = "other"


# ══════════════════════════════════════════════════════════════
# PRODUCT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Product:
    """
    A sellable product.

    Fields:
        cost:     Purchase cost per unit (>= 0).
        margin:   Markup percent applied over landed cost (>= 0).
        supplier: Supplier name, free text (not a reference).
        stock:    Units on hand.
    """

    id: str
    name: str
    cost: Decimal
    margin: Decimal
    created_at: datetime
    type: ProductType = ProductType.MUG
    supplier: str = ""
    stock: int = 0

    def __post_init__(self):
        object.__setattr__(self, "id", require_text(self.id, "id"))
        object.__setattr__(self, "name", require_text(self.name, "name"))
        object.__setattr__(self, "cost", to_non_negative_decimal(self.cost, "cost"))
        object.__setattr__(self, "margin", to_non_negative_decimal(self.margin, "margin"))
        object.__setattr__(self, "created_at", coerce_timestamp(self.created_at, "created_at"))
        object.__setattr__(self, "type", coerce_enum(ProductType, self.type, "type"))
        object.__setattr__(self, "supplier", optional_text(self.supplier, "supplier") or "")
        object.__setattr__(self, "stock", coerce_non_negative_int(self.stock, "stock"))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "supplier": self.supplier,
            "cost": str(self.cost),
            "margin": str(self.margin),
            "stock": self.stock,
            "created_at": format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Product:
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            cost=data.get("cost"),
            margin=data.get("margin"),
            created_at=data.get("created_at"),
            type=data.get("type", ProductType.MUG),
            supplier=data.get("supplier", ""),
            stock=data.get("stock", 0),
        )


# ══════════════════════════════════════════════════════════════
# SUPPLIER
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Supplier:
    id: str
    name: str
    created_at: datetime
    contact: str = ""
    delivery_time: str = ""
    unit_cost: Decimal = Decimal("0")

    def __post_init__(self):
        object.__setattr__(self, "id", require_text(self.id, "id"))
        object.__setattr__(self, "name", require_text(self.name, "name"))
        object.__setattr__(self, "created_at", coerce_timestamp(self.created_at, "created_at"))
        object.__setattr__(self, "contact", optional_text(self.contact, "contact") or "")
        object.__setattr__(
            self, "delivery_time",
            optional_text(self.delivery_time, "delivery_time") or "",
        )
        unit_cost = self.unit_cost if self.unit_cost not in (None, "") else 0
        object.__setattr__(self, "unit_cost", to_non_negative_decimal(unit_cost, "unit_cost"))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "contact": self.contact,
            "delivery_time": self.delivery_time,
            "unit_cost": str(self.unit_cost),
            "created_at": format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Supplier:
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            created_at=data.get("created_at"),
            contact=data.get("contact", ""),
            delivery_time=data.get("delivery_time", ""),
            unit_cost=data.get("unit_cost", 0),
        )
