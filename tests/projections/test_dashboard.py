"""
Tests - Dashboard Read Model
==============================
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.primitives.ids import SequentialIdGenerator
from core.store import EntityStore
from core.time.clock import FixedClock
from engines.catalog.services import CatalogService
from engines.customer.services import CustomerService
from engines.order.services import OrderService
from projections.dashboard import DashboardReadModel

NOW = datetime(2026, 3, 2, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return EntityStore(clock=FixedClock(NOW), id_generator=SequentialIdGenerator("d-"))


@pytest.fixture
def dashboard(store):
    return DashboardReadModel(store)


def seed_products(store):
    catalog = CatalogService(store=store)
    for name, cost, margin, stock in [
        ("Caneca", "10", "50", 12),     # profit 5
        ("Ecobag", "8", "100", 2),      # profit 8
        ("Toalhinha", "6", "50", 5),    # profit 3
        ("Azulejo", "4", "200", 0),     # profit 8
        ("Camisa", "25", "40", 30),     # profit 10
        ("Chaveiro", "1", "100", 9),    # profit 1
    ]:
        catalog.add_product({"name": name, "cost": cost, "margin": margin, "stock": stock})


class TestCatalogFigures:
    def test_counts_and_stock(self, store, dashboard):
        seed_products(store)
        CatalogService(store=store).add_supplier({"name": "Sublima"})
        assert dashboard.product_count == 6
        assert dashboard.supplier_count == 1
        assert dashboard.total_stock == 58

    def test_most_profitable_top_five(self, store, dashboard):
        seed_products(store)
        ranked = dashboard.most_profitable_products()
        assert len(ranked) == 5
        assert ranked[0].product.name == "Camisa"
        assert ranked[0].profit == Decimal("10")
        assert [entry.product.name for entry in ranked[1:3]] == ["Ecobag", "Azulejo"]
        assert "Chaveiro" not in [entry.product.name for entry in ranked]

    def test_most_profitable_ignores_default_shipping(self, store, dashboard):
        seed_products(store)
        store.set_default_shipping_cost("20")
        assert dashboard.most_profitable_products(limit=1)[0].direct_price == Decimal("35")

    def test_low_stock_default_threshold(self, store, dashboard):
        seed_products(store)
        low = dashboard.low_stock_products()
        assert [p.name for p in low] == ["Azulejo", "Ecobag", "Toalhinha"]

    def test_low_stock_custom_threshold(self, store, dashboard):
        seed_products(store)
        assert [p.name for p in dashboard.low_stock_products(threshold=0)] == ["Azulejo"]

    def test_empty_store(self, dashboard):
        assert dashboard.most_profitable_products() == []
        assert dashboard.total_stock == 0


class TestCustomerFigures:
    def test_segments(self, store, dashboard):
        customers = CustomerService(store=store)
        for name, kind in [("A", "new"), ("B", "premium"), ("C", "premium"), ("D", "inactive")]:
            customers.add_customer({"name": name, "type": kind})
        assert dashboard.customer_segments() == {
            "new": 1, "frequent": 0, "premium": 2, "inactive": 1, "total": 4,
        }

    def test_history(self, store, dashboard):
        customer = CustomerService(store=store).add_customer({"name": "Joana"}).record
        orders = OrderService(store=store)
        for price in ("100", "50"):
            orders.create_order({
                "customer_id": customer.id,
                "items": [{"product_name": "Caneca", "quantity": 1, "price": price}],
            })
        history = dashboard.customer_history(customer.id)
        assert len(history.orders) == 2
        assert history.total_orders == 2
        assert history.total_spent == Decimal("150")
        assert history.average_ticket == Decimal("75")

    def test_history_unknown_customer(self, dashboard):
        assert dashboard.customer_history("ghost") is None


def test_snapshot_is_display_ready(store, dashboard):
    seed_products(store)
    OrderService(store=store).create_order({
        "items": [{"product_name": "Caneca", "quantity": 3, "price": "15"}],
    })
    snap = dashboard.snapshot()
    assert snap["product_count"] == 6
    assert snap["most_profitable_products"][0]["profit"] == "10.00"
    assert snap["low_stock_products"][0] == {"id": "d-4", "name": "Azulejo", "stock": 0}
    assert snap["order_count"] == 1
    assert snap["revenue"] == "45.00"
