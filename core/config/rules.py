"""
Gestor Core Config - Marketplace Fees & Shop Defaults
=======================================================
Marketplace commissions and shop-wide defaults.

Fees are data, not code: the built-in table is only the starting
point and the shop owner edits it through the pricing service.
Built-in defaults may be overridden in Django settings
(``GESTOR_*`` names) without touching engine code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from core.primitives.money import HUNDRED, to_decimal


# ══════════════════════════════════════════════════════════════
# BUILT-IN DEFAULTS
# ══════════════════════════════════════════════════════════════

MARKETPLACE_CHANNELS: Tuple[str, ...] = ("shopee", "mercadolivre", "amazon")

DEFAULT_MARKETPLACE_FEES: Mapping[str, Decimal] = MappingProxyType({
    "shopee": Decimal("12"),
    "mercadolivre": Decimal("16"),
    "amazon": Decimal("15"),
})

DEFAULT_SHIPPING_COST = Decimal("0")
LOW_STOCK_THRESHOLD = 5
TOP_PROFIT_LIMIT = 5


def get_shop_setting(name: str, default: Any) -> Any:
    """
    Read ``GESTOR_<name>`` from Django settings.

    Falls back to ``default`` when Django settings are not configured,
    so the engines stay usable as a plain library.
    """
    from django.conf import ENVIRONMENT_VARIABLE, settings

    if not settings.configured and not os.environ.get(ENVIRONMENT_VARIABLE):
        return default
    return getattr(settings, f"GESTOR_{name}", default)


# ══════════════════════════════════════════════════════════════
# MARKETPLACE FEE TABLE
# ══════════════════════════════════════════════════════════════

def validate_fee(channel: str, value: Any) -> Decimal:
    """
    A fee is a percent of the marketplace sale price, in [0, 100).

    100 or more would make the inverse price formula divide by zero
    or flip sign, so it is refused here rather than in the formula.
    """
    fee = to_decimal(value, f"{channel} fee")
    if fee < 0 or fee >= HUNDRED:
        raise ValueError(
            f"{channel} fee must be between 0 and 100 (exclusive), got {fee}."
        )
    return fee


@dataclass(frozen=True)
class MarketplaceFeeTable:
    """
    Commission percent per marketplace channel.

    Exactly the channels in MARKETPLACE_CHANNELS; nothing more,
    nothing missing.
    """

    fees: Mapping[str, Decimal]

    def __post_init__(self) -> None:
        if not isinstance(self.fees, Mapping):
            raise ValueError("fees must be a mapping of channel to percent.")
        unknown = sorted(set(self.fees) - set(MARKETPLACE_CHANNELS))
        if unknown:
            raise ValueError(f"Unknown marketplace channel(s): {', '.join(unknown)}.")
        missing = [c for c in MARKETPLACE_CHANNELS if c not in self.fees]
        if missing:
            raise ValueError(f"Missing fee for channel(s): {', '.join(missing)}.")
        normalized = {
            channel: validate_fee(channel, self.fees[channel])
            for channel in MARKETPLACE_CHANNELS
        }
        object.__setattr__(self, "fees", MappingProxyType(normalized))

    def fee_for(self, channel: str) -> Decimal:
        try:
            return self.fees[channel]
        except KeyError:
            raise ValueError(f"Unknown marketplace channel: {channel}.") from None

    def items(self):
        return self.fees.items()

    def with_fees(self, **changes: Any) -> MarketplaceFeeTable:
        merged: Dict[str, Any] = dict(self.fees)
        merged.update(changes)
        return MarketplaceFeeTable(fees=merged)

    def to_dict(self) -> Dict[str, str]:
        return {channel: str(fee) for channel, fee in self.fees.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MarketplaceFeeTable:
        return cls(fees=dict(data))

    @classmethod
    def default(cls) -> MarketplaceFeeTable:
        return cls(fees=get_shop_setting(
            "DEFAULT_MARKETPLACE_FEES", DEFAULT_MARKETPLACE_FEES,
        ))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MarketplaceFeeTable):
            return NotImplemented
        return dict(self.fees) == dict(other.fees)

    def __hash__(self) -> int:
        return hash(tuple(self.fees.items()))


def default_shipping_cost() -> Decimal:
    return to_decimal(
        get_shop_setting("DEFAULT_SHIPPING_COST", DEFAULT_SHIPPING_COST),
        "default shipping cost",
    )
