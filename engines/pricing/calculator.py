"""
Gestor Pricing Engine - Calculator
====================================
Pure pricing formula: cost → direct price → marketplace prices.

Marketplace fees are a percent of the marketplace's own sale price,
so the listing price is found by inverting the fee:

    landed_cost     = cost + shipping
    direct_price    = landed_cost × (1 + margin/100)
    market_price_c  = direct_price / (1 − fee_c/100)
    profit_direct   = direct_price − landed_cost
    profit_c        = market_price_c − market_price_c × fee_c/100 − landed_cost

After the marketplace keeps its commission the seller nets
direct_price on every channel, so every channel's profit equals the
direct profit.

No side effects, no clock, no store access.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping

from core.config.rules import MarketplaceFeeTable, validate_fee
from core.primitives.money import HUNDRED, format_money, quantize_money, to_non_negative_decimal

DIRECT_CHANNEL = "direct"


@dataclass(frozen=True)
class PricingResult:
    """
    Full-precision prices and profits.

    ``profits`` has a "direct" entry plus one per marketplace channel.
    Use ``rounded()`` or ``to_dict()`` for display values.
    """

    landed_cost: Decimal
    direct_price: Decimal
    market_prices: Mapping[str, Decimal]
    profits: Mapping[str, Decimal]

    def rounded(self) -> PricingResult:
        return PricingResult(
            landed_cost=quantize_money(self.landed_cost),
            direct_price=quantize_money(self.direct_price),
            market_prices={c: quantize_money(p) for c, p in self.market_prices.items()},
            profits={c: quantize_money(p) for c, p in self.profits.items()},
        )

    def best_channel(self) -> str:
        """Channel with the highest profit at cent precision; direct wins ties."""
        rounded = self.rounded().profits
        best = DIRECT_CHANNEL
        for channel, profit in rounded.items():
            if profit > rounded[best]:
                best = channel
        return best

    def to_dict(self) -> Dict[str, Any]:
        return {
            "landed_cost": format_money(self.landed_cost),
            "direct_price": format_money(self.direct_price),
            "market_prices": {c: format_money(p) for c, p in self.market_prices.items()},
            "profits": {c: format_money(p) for c, p in self.profits.items()},
        }


def calculate_pricing(
    cost: Any,
    margin_percent: Any,
    shipping_cost: Any,
    fee_table: MarketplaceFeeTable,
) -> PricingResult:
    """
    Price one product on every channel.

    Raises:
        ValueError: negative or non-numeric cost, margin or shipping,
                    or a fee outside [0, 100).
    """
    cost = to_non_negative_decimal(cost, "cost")
    margin = to_non_negative_decimal(margin_percent, "margin")
    shipping = to_non_negative_decimal(shipping_cost, "shipping cost")

    landed_cost = cost + shipping
    direct_price = landed_cost * (1 + margin / HUNDRED)

    market_prices: Dict[str, Decimal] = {}
    profits: Dict[str, Decimal] = {DIRECT_CHANNEL: direct_price - landed_cost}
    for channel, fee in fee_table.items():
        rate = validate_fee(channel, fee) / HUNDRED
        market_price = direct_price / (1 - rate)
        market_prices[channel] = market_price
        profits[channel] = market_price - market_price * rate - landed_cost

    return PricingResult(
        landed_cost=landed_cost,
        direct_price=direct_price,
        market_prices=market_prices,
        profits=profits,
    )
