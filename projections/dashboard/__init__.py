"""
Gestor Projections - Dashboard Read Model
===========================================
Figures shown on the dashboard and customer screens, computed on
demand from the entity store.

Read-only: nothing here mutates the store.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional

from core.config.rules import LOW_STOCK_THRESHOLD, TOP_PROFIT_LIMIT, get_shop_setting
from core.primitives.catalog import Product
from core.primitives.money import ZERO, format_money
from core.primitives.order import Order
from core.primitives.party import CustomerType
from core.store.store import EntityStore
from engines.pricing.calculator import DIRECT_CHANNEL, calculate_pricing


@dataclass(frozen=True)
class ProductProfit:
    product: Product
    direct_price: Decimal
    profit: Decimal


@dataclass(frozen=True)
class CustomerHistory:
    customer_id: str
    orders: List[Order]
    total_orders: int
    total_spent: Decimal
    average_ticket: Decimal


class DashboardReadModel:
    projection_name = "dashboard_read_model"

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    # ── catalog figures ───────────────────────────────────────

    @property
    def product_count(self) -> int:
        return self._store.products.count

    @property
    def supplier_count(self) -> int:
        return self._store.suppliers.count

    @property
    def total_stock(self) -> int:
        return sum(product.stock for product in self._store.products.list())

    def most_profitable_products(self, limit: Optional[int] = None) -> List[ProductProfit]:
        """Direct-sale profit per unit at zero shipping, highest first."""
        if limit is None:
            limit = TOP_PROFIT_LIMIT
        fees = self._store.marketplace_fees
        ranked = []
        for product in self._store.products.list():
            pricing = calculate_pricing(product.cost, product.margin, 0, fees)
            ranked.append(ProductProfit(
                product=product,
                direct_price=pricing.direct_price,
                profit=pricing.profits[DIRECT_CHANNEL],
            ))
        ranked.sort(key=lambda entry: entry.profit, reverse=True)
        return ranked[:limit]

    def low_stock_products(self, threshold: Optional[int] = None) -> List[Product]:
        """Products with stock at or below the threshold, emptiest first."""
        if threshold is None:
            threshold = get_shop_setting("LOW_STOCK_THRESHOLD", LOW_STOCK_THRESHOLD)
        low = [p for p in self._store.products.list() if p.stock <= threshold]
        return sorted(low, key=lambda p: p.stock)

    # ── customer figures ──────────────────────────────────────

    def customer_segments(self) -> Dict[str, int]:
        counts = {customer_type.value: 0 for customer_type in CustomerType}
        for customer in self._store.customers.list():
            counts[customer.type.value] += 1
        counts["total"] = self._store.customers.count
        return counts

    def customer_history(self, customer_id: str) -> Optional[CustomerHistory]:
        """
        Orders and purchase figures for one customer.

        Figures come from the customer's maintained statistics, the
        same values the customer card shows.
        """
        customer = self._store.customers.get(customer_id)
        if customer is None:
            return None
        orders = [o for o in self._store.orders.list() if o.customer_id == customer_id]
        return CustomerHistory(
            customer_id=customer_id,
            orders=orders,
            total_orders=customer.total_orders,
            total_spent=customer.total_spent,
            average_ticket=customer.average_ticket,
        )

    # ── snapshot ──────────────────────────────────────────────

    def snapshot(self) -> Dict[str, Any]:
        return {
            "product_count": self.product_count,
            "supplier_count": self.supplier_count,
            "total_stock": self.total_stock,
            "most_profitable_products": [
                {
                    "id": entry.product.id,
                    "name": entry.product.name,
                    "type": entry.product.type.value,
                    "profit": format_money(entry.profit),
                }
                for entry in self.most_profitable_products()
            ],
            "low_stock_products": [
                {"id": p.id, "name": p.name, "stock": p.stock}
                for p in self.low_stock_products()
            ],
            "customer_segments": self.customer_segments(),
            "order_count": self._store.orders.count,
            "revenue": format_money(sum(
                (o.total for o in self._store.orders.list()), ZERO,
            )),
        }
