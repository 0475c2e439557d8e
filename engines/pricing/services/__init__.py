"""
Gestor Pricing Engine - Service Layer
=======================================
Store-aware wrapper around the pure calculator: reads the current
fee table and default shipping, and edits them.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from core.commands.outcomes import CommandOutcome
from core.commands.rejection import ReasonCode, RejectionReason, validation_rejection
from core.store.store import EntityStore
from engines.pricing.calculator import calculate_pricing
from engines.pricing.commands import (
    DefaultShippingCostRequest,
    MarketplaceFeesUpdateRequest,
    PricingSimulationRequest,
)

logger = logging.getLogger("gestor.pricing")


class PricingService:
    def __init__(self, *, store: EntityStore):
        self._store = store

    def _now(self):
        return self._store.clock.now_utc()

    def _reject(self, reason: RejectionReason) -> CommandOutcome:
        logger.info(f"Pricing request REJECTED [{reason.code}]: {reason.message}")
        return CommandOutcome.rejected(reason, occurred_at=self._now())

    # ── simulation ────────────────────────────────────────────

    def simulate(self, cost: Any, margin: Any, shipping_cost: Any = None) -> CommandOutcome:
        """
        Price a cost/margin pair on every channel.

        ``shipping_cost=None`` uses the store's default shipping cost.
        The accepted outcome's record is a PricingResult.
        """
        try:
            request = PricingSimulationRequest(
                cost=cost, margin=margin, shipping_cost=shipping_cost,
            )
        except ValueError as exc:
            return self._reject(validation_rejection(exc, "pricing_simulation"))

        shipping = request.shipping_cost
        if shipping is None:
            shipping = self._store.default_shipping_cost
        result = calculate_pricing(
            request.cost, request.margin, shipping, self._store.marketplace_fees,
        )
        return CommandOutcome.accepted(result, occurred_at=self._now())

    def product_pricing(self, product_id: str) -> CommandOutcome:
        """Price a stored product without shipping, as the product cards do."""
        product = self._store.products.get(product_id)
        if product is None:
            return self._reject(RejectionReason(
                code=ReasonCode.RECORD_NOT_FOUND,
                message=f"Product '{product_id}' not found.",
                policy_name="product_pricing",
            ))
        result = calculate_pricing(
            product.cost, product.margin, 0, self._store.marketplace_fees,
        )
        return CommandOutcome.accepted(result, occurred_at=self._now())

    # ── configuration ─────────────────────────────────────────

    def set_marketplace_fees(
        self, fees: Optional[Mapping[str, Any]] = None, **channel_fees: Any,
    ) -> CommandOutcome:
        merged = dict(fees or {})
        merged.update(channel_fees)
        try:
            request = MarketplaceFeesUpdateRequest(fees=merged)
        except ValueError as exc:
            return self._reject(RejectionReason(
                code=ReasonCode.INVALID_FEE,
                message=str(exc),
                policy_name="set_marketplace_fees",
            ))

        table = self._store.marketplace_fees.with_fees(**request.fees)
        self._store.set_marketplace_fees(table)
        logger.info(f"Marketplace fees updated: {table.to_dict()}")
        return CommandOutcome.accepted(table, occurred_at=self._now())

    def set_default_shipping_cost(self, value: Any) -> CommandOutcome:
        try:
            request = DefaultShippingCostRequest(value=value)
        except ValueError as exc:
            return self._reject(validation_rejection(exc, "set_default_shipping_cost"))

        self._store.set_default_shipping_cost(request.value)
        logger.info(f"Default shipping cost set to {request.value}")
        return CommandOutcome.accepted(request.value, occurred_at=self._now())
