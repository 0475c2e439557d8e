"""
Tests - Persistence Mirror
============================
Write-through on mutation, load with defaults, legacy dashboard data.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.config.rules import MarketplaceFeeTable
from core.persistence import DEFAULT_STORAGE_KEYS, InMemorySlotStorage, PersistenceMirror
from core.persistence.legacy import normalize_record, snake_case
from core.primitives.catalog import ProductType
from core.primitives.ids import SequentialIdGenerator
from core.primitives.order import OrderStatus
from core.primitives.party import CustomerType
from core.store import EntityStore
from core.time.clock import FixedClock

NOW = datetime(2026, 3, 2, 9, 30, 0, tzinfo=timezone.utc)
KEYS = dict(DEFAULT_STORAGE_KEYS)


def make_store():
    return EntityStore(clock=FixedClock(NOW), id_generator=SequentialIdGenerator("id-"))


def attached(storage=None):
    store = make_store()
    storage = storage if storage is not None else InMemorySlotStorage()
    mirror = PersistenceMirror(store, storage, keys=KEYS)
    mirror.attach()
    return store, storage, mirror


class FailingStorage(InMemorySlotStorage):
    def write(self, key, value):
        raise OSError("disk full")


# ══════════════════════════════════════════════════════════════
# WRITE PATH
# ══════════════════════════════════════════════════════════════

class TestWritePath:
    def test_mutation_writes_full_collection(self):
        store, storage, _ = attached()
        store.products.add({"name": "Caneca", "cost": "10", "margin": "50"})
        store.products.add({"name": "Ecobag", "cost": "6", "margin": "80"})
        data = json.loads(storage.read("gestorCriativo_products"))
        assert [p["name"] for p in data] == ["Caneca", "Ecobag"]
        assert data[0]["cost"] == "10"

    def test_configuration_slots_written(self):
        store, storage, _ = attached()
        store.set_marketplace_fees(MarketplaceFeeTable.default().with_fees(shopee=14))
        store.set_default_shipping_cost("7.9")
        assert json.loads(storage.read("gestorCriativo_fees"))["shopee"] == "14"
        assert json.loads(storage.read("gestorCriativo_shipping")) == "7.9"

    def test_transaction_writes_each_slot_once(self):
        store, storage, _ = attached()
        with store.transaction():
            store.customers.add({"name": "Ana"})
            store.customers.add({"name": "Bia"})
        assert storage.writes == 1

    def test_write_all_writes_every_slot(self):
        store, storage, mirror = attached()
        mirror.write_all()
        assert sorted(storage.keys()) == sorted(KEYS.values())
        assert json.loads(storage.read("gestorCriativo_orders")) == []

    def test_detach_stops_writes(self):
        store, storage, mirror = attached()
        mirror.detach()
        store.products.add({"name": "Caneca", "cost": "10", "margin": "50"})
        assert storage.read("gestorCriativo_products") is None

    def test_write_failure_is_logged_not_raised(self, caplog):
        store, _, _ = attached(FailingStorage())
        with caplog.at_level(logging.ERROR, logger="gestor.persistence"):
            product = store.products.add({"name": "Caneca", "cost": "10", "margin": "50"})
        assert store.products.get(product.id) is not None
        assert "Mirror write failed" in caplog.text


# ══════════════════════════════════════════════════════════════
# LOAD PATH
# ══════════════════════════════════════════════════════════════

class TestLoadPath:
    def test_empty_storage_gives_defaults(self):
        store = make_store()
        loaded = PersistenceMirror(store, InMemorySlotStorage(), keys=KEYS).load()
        assert loaded == {"products": 0, "suppliers": 0, "customers": 0, "orders": 0}
        assert store.marketplace_fees.to_dict() == {
            "shopee": "12", "mercadolivre": "16", "amazon": "15",
        }
        assert store.default_shipping_cost == Decimal("0")

    def test_round_trip_through_storage(self):
        store, storage, _ = attached()
        customer = store.customers.add({"name": "Ana", "preferences": ["floral"]})
        store.orders.add({
            "customer_id": customer.id, "total": "30",
            "items": [{"product_name": "Caneca", "quantity": 2, "price": "15"}],
        })
        store.set_default_shipping_cost("12")

        fresh = make_store()
        PersistenceMirror(fresh, storage, keys=KEYS).load()
        assert fresh.customers.list() == store.customers.list()
        assert fresh.orders.list() == store.orders.list()
        assert fresh.default_shipping_cost == Decimal("12")

    def test_unparsable_slots_fall_back(self, caplog):
        storage = InMemorySlotStorage({
            "gestorCriativo_products": "{not json",
            "gestorCriativo_fees": "[1, 2",
            "gestorCriativo_shipping": "\"abc\"",
        })
        store = make_store()
        with caplog.at_level(logging.WARNING, logger="gestor.persistence"):
            PersistenceMirror(store, storage, keys=KEYS).load()
        assert store.products.count == 0
        assert store.marketplace_fees == MarketplaceFeeTable.default()
        assert store.default_shipping_cost == Decimal("0")
        assert "not valid JSON" in caplog.text

    def test_invalid_fee_in_storage_falls_back(self):
        storage = InMemorySlotStorage({
            "gestorCriativo_fees": json.dumps({"shopee": 100, "mercadolivre": 16, "amazon": 15}),
        })
        store = make_store()
        PersistenceMirror(store, storage, keys=KEYS).load()
        assert store.marketplace_fees == MarketplaceFeeTable.default()

    def test_bad_record_skipped_rest_loaded(self):
        storage = InMemorySlotStorage({
            "gestorCriativo_products": json.dumps([
                {"id": "1", "name": "Caneca", "cost": 10, "margin": 50, "createdAt": "2025-01-01T00:00:00Z"},
                {"id": "2", "name": "Sem custo", "margin": 50, "createdAt": "2025-01-01T00:00:00Z"},
                {"id": "1", "name": "Duplicada", "cost": 1, "margin": 1, "createdAt": "2025-01-01T00:00:00Z"},
            ]),
        })
        store = make_store()
        loaded = PersistenceMirror(store, storage, keys=KEYS).load()
        assert loaded["products"] == 1
        assert store.products.get("1").name == "Caneca"

    @pytest.mark.parametrize("bad_items", [[5], 5, "Caneca", [None]])
    def test_order_with_malformed_items_skipped(self, bad_items):
        good = {
            "id": "1", "total": 20, "status": "pendente", "createdAt": "2025-01-01T00:00:00Z",
            "items": [{"productName": "Caneca", "quantity": 1, "price": 20}],
        }
        bad = {"id": "2", "total": 5, "createdAt": "2025-01-01T00:00:00Z", "items": bad_items}
        storage = InMemorySlotStorage({"gestorCriativo_orders": json.dumps([good, bad])})
        store = make_store()
        loaded = PersistenceMirror(store, storage, keys=KEYS).load()
        assert loaded["orders"] == 1
        assert store.orders.get("2") is None

    def test_customer_with_malformed_preferences_skipped(self):
        storage = InMemorySlotStorage({"gestorCriativo_customers": json.dumps([
            {"id": "1", "name": "Joana", "createdAt": "2025-01-01T00:00:00Z", "preferences": 5},
            {"id": "2", "name": "Bia", "createdAt": "2025-01-01T00:00:00Z", "preferences": ["pets"]},
        ])})
        store = make_store()
        PersistenceMirror(store, storage, keys=KEYS).load()
        assert [c.name for c in store.customers.list()] == ["Bia"]

    def test_loading_does_not_write_back_when_detached(self):
        storage = InMemorySlotStorage()
        PersistenceMirror(make_store(), storage, keys=KEYS).load()
        assert storage.writes == 0


# ══════════════════════════════════════════════════════════════
# LEGACY DASHBOARD DATA
# ══════════════════════════════════════════════════════════════

class TestLegacyData:
    def test_snake_case(self):
        assert snake_case("createdAt") == "created_at"
        assert snake_case("lastOrderDate") == "last_order_date"
        assert snake_case("name") == "name"

    def test_order_items_normalized(self):
        raw = {"id": "9", "status": "producao", "items": [{"productName": "Caneca", "quantity": 1, "price": 20}]}
        data = normalize_record("orders", raw)
        assert data["status"] == "in_production"
        assert data["items"][0]["product_name"] == "Caneca"

    def test_original_dashboard_slots_load(self):
        storage = InMemorySlotStorage({
            "gestorCriativo_products": json.dumps([{
                "id": "1700000000000", "name": "Caneca Mãe", "type": "caneca",
                "supplier": "Sublima", "cost": 12.5, "margin": 60, "stock": 3,
                "createdAt": "2025-05-01T12:00:00.000Z",
            }]),
            "gestorCriativo_customers": json.dumps([{
                "id": "1700000000001", "name": "Joana", "type": "frequente",
                "preferences": ["floral"], "createdAt": "2025-05-01T12:00:00.000Z",
                "totalOrders": 2, "totalSpent": 150.5, "lastOrderDate": None,
            }]),
            "gestorCriativo_orders": json.dumps([{
                "id": "1700000000002", "customerId": "1700000000001",
                "items": [{"productName": "Caneca Mãe", "quantity": 2, "price": 40}],
                "total": 80, "status": "pendente",
                "createdAt": "2025-05-02T12:00:00.000Z",
            }]),
            "gestorCriativo_fees": json.dumps({"shopee": 14, "mercadolivre": 16, "amazon": 15}),
            "gestorCriativo_shipping": json.dumps(9.9),
        })
        store = make_store()
        PersistenceMirror(store, storage, keys=KEYS).load()

        product = store.products.get("1700000000000")
        assert product.type == ProductType.MUG
        assert product.cost == Decimal("12.5")
        customer = store.customers.get("1700000000001")
        assert customer.type == CustomerType.FREQUENT
        assert customer.total_orders == 2
        assert customer.total_spent == Decimal("150.5")
        order = store.orders.get("1700000000002")
        assert order.status == OrderStatus.PENDING
        assert order.customer_id == customer.id
        assert store.marketplace_fees.fee_for("shopee") == Decimal("14")
        assert store.default_shipping_cost == Decimal("9.9")

    def test_non_object_entry_skipped(self):
        storage = InMemorySlotStorage({"gestorCriativo_suppliers": json.dumps(["oops"])})
        store = make_store()
        PersistenceMirror(store, storage, keys=KEYS).load()
        assert store.suppliers.count == 0
