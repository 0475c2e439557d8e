"""
Gestor Pricing Engine - Request Commands
==========================================
Typed requests for pricing simulation and pricing configuration.
Structural problems raise ValueError at construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from core.config.rules import MARKETPLACE_CHANNELS, validate_fee
from core.primitives.money import to_non_negative_decimal


@dataclass(frozen=True)
class PricingSimulationRequest:
    """Simulate prices for a cost/margin pair; shipping None means store default."""
    cost: Decimal
    margin: Decimal
    shipping_cost: Optional[Decimal] = None

    def __post_init__(self):
        object.__setattr__(self, "cost", to_non_negative_decimal(self.cost, "cost"))
        object.__setattr__(self, "margin", to_non_negative_decimal(self.margin, "margin"))
        if self.shipping_cost is not None and self.shipping_cost != "":
            object.__setattr__(
                self, "shipping_cost",
                to_non_negative_decimal(self.shipping_cost, "shipping cost"),
            )
        else:
            object.__setattr__(self, "shipping_cost", None)


@dataclass(frozen=True)
class MarketplaceFeesUpdateRequest:
    """Partial fee update: only the channels given change."""
    fees: Mapping[str, Any]

    def __post_init__(self):
        if not isinstance(self.fees, Mapping) or not self.fees:
            raise ValueError("At least one marketplace fee is required.")
        normalized = {}
        for channel, value in self.fees.items():
            if channel not in MARKETPLACE_CHANNELS:
                raise ValueError(f"Unknown marketplace channel: {channel}.")
            normalized[channel] = validate_fee(channel, value)
        object.__setattr__(self, "fees", normalized)


@dataclass(frozen=True)
class DefaultShippingCostRequest:
    value: Decimal

    def __post_init__(self):
        object.__setattr__(
            self, "value", to_non_negative_decimal(self.value, "default shipping cost"),
        )
