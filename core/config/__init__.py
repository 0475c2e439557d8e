"""
Gestor Core Config - Public API
=================================
Marketplace fee table and shop-wide defaults.
"""

from core.config.rules import (
    DEFAULT_MARKETPLACE_FEES,
    DEFAULT_SHIPPING_COST,
    LOW_STOCK_THRESHOLD,
    MARKETPLACE_CHANNELS,
    TOP_PROFIT_LIMIT,
    MarketplaceFeeTable,
    default_shipping_cost,
    get_shop_setting,
    validate_fee,
)

__all__ = [
    "MARKETPLACE_CHANNELS",
    "DEFAULT_MARKETPLACE_FEES",
    "DEFAULT_SHIPPING_COST",
    "LOW_STOCK_THRESHOLD",
    "TOP_PROFIT_LIMIT",
    "MarketplaceFeeTable",
    "default_shipping_cost",
    "get_shop_setting",
    "validate_fee",
]
