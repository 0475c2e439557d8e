"""
Tests - Customer Engine
=========================
Customer profiles and the order statistics maintainer.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.commands.rejection import ReasonCode
from core.primitives.ids import SequentialIdGenerator
from core.primitives.order import Order
from core.primitives.party import CustomerType
from core.store import EntityStore
from core.time.clock import FixedClock
from engines.customer.services import CustomerService
from engines.customer.statistics import ORDER_ADDED, ORDER_REMOVED, apply_order_delta

NOW = datetime(2026, 3, 2, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def store(clock):
    return EntityStore(clock=clock, id_generator=SequentialIdGenerator("k-"))


@pytest.fixture
def customers(store):
    return CustomerService(store=store)


def make_order(customer_id, total="100", order_id="o-1"):
    return Order(
        id=order_id,
        items=[{"product_name": "Caneca", "quantity": 1, "price": total}],
        total=total,
        created_at=NOW,
        customer_id=customer_id,
    )


# ══════════════════════════════════════════════════════════════
# PROFILES
# ══════════════════════════════════════════════════════════════

class TestCustomerProfiles:
    def test_add_customer_starts_with_zero_statistics(self, customers):
        outcome = customers.add_customer({
            "name": "Joana", "email": "joana@example.com",
            "total_orders": 40, "total_spent": "9000",
            "preferences": ["floral", " floral ", "", "pets"],
        })
        customer = outcome.record
        assert outcome.is_accepted
        assert customer.total_orders == 0
        assert customer.total_spent == Decimal("0")
        assert customer.last_order_date is None
        assert customer.type == CustomerType.NEW
        assert customer.preferences == ("floral", "pets")

    def test_name_required(self, customers, store):
        outcome = customers.add_customer({"email": "x@example.com"})
        assert outcome.reason.code == ReasonCode.VALIDATION_FAILED
        assert store.customers.count == 0

    def test_unknown_type_rejected(self, customers):
        assert customers.add_customer({"name": "Ana", "type": "vip"}).is_rejected

    @pytest.mark.parametrize("preferences", [5, "floral", {"tema": "floral"}, [5], [["floral"]]])
    def test_malformed_preferences_rejected_on_create(self, customers, store, preferences):
        outcome = customers.add_customer({"name": "Ana", "preferences": preferences})
        assert outcome.reason.code == ReasonCode.VALIDATION_FAILED
        assert store.customers.count == 0

    @pytest.mark.parametrize("preferences", [5, "floral", [5]])
    def test_malformed_preferences_rejected_on_update(self, customers, preferences):
        customer = customers.add_customer({"name": "Ana", "preferences": ["pets"]}).record
        outcome = customers.update_customer(customer.id, {"preferences": preferences})
        assert outcome.reason.code == ReasonCode.VALIDATION_FAILED
        assert customers.get_customer(customer.id).preferences == ("pets",)

    @pytest.mark.parametrize("field,value", [
        ("total_orders", 3),
        ("total_spent", "10"),
        ("last_order_date", "2026-01-01T00:00:00Z"),
    ])
    def test_statistics_cannot_be_edited(self, customers, field, value):
        customer = customers.add_customer({"name": "Ana"}).record
        outcome = customers.update_customer(customer.id, {"name": "Ana Paula", field: value})
        assert outcome.reason.code == ReasonCode.DERIVED_FIELD_READONLY
        assert customers.get_customer(customer.id).name == "Ana"
        assert customers.list_customers() == [customers.get_customer(customer.id)]

    def test_update_profile_fields(self, customers):
        customer = customers.add_customer({"name": "Ana"}).record
        outcome = customers.update_customer(customer.id, {
            "type": "premium", "phone": "11 98888-7777",
        })
        assert outcome.record.type == CustomerType.PREMIUM
        assert outcome.record.phone == "11 98888-7777"

    def test_delete_customer_keeps_orders(self, customers, store):
        customer = customers.add_customer({"name": "Ana"}).record
        store.orders.add({
            "customer_id": customer.id, "total": "10",
            "items": [{"product_name": "Azulejo", "quantity": 1, "price": "10"}],
        })
        customers.delete_customer(customer.id)
        assert store.orders.list()[0].customer_id == customer.id

    def test_delete_unknown_is_noop(self, customers):
        outcome = customers.delete_customer("ghost")
        assert outcome.is_accepted and outcome.record is None


class TestCustomerSearch:
    @pytest.fixture(autouse=True)
    def seed(self, customers):
        customers.add_customer({"name": "Joana Lima", "email": "JOANA@mail.com", "type": "frequent"})
        customers.add_customer({"name": "Bruno", "phone": "11 91234-5678"})
        customers.add_customer({"name": "Carla", "email": "carla@mail.com", "type": "premium"})

    def test_name_case_insensitive(self, customers):
        assert [c.name for c in customers.search_customers("joana")] == ["Joana Lima"]

    def test_email_and_phone(self, customers):
        assert [c.name for c in customers.search_customers("carla@")] == ["Carla"]
        assert [c.name for c in customers.search_customers("91234")] == ["Bruno"]

    def test_type_filter_combines_with_term(self, customers):
        assert customers.search_customers("mail", "premium")[0].name == "Carla"
        assert len(customers.search_customers(None, "all")) == 3


# ══════════════════════════════════════════════════════════════
# STATISTICS MAINTAINER
# ══════════════════════════════════════════════════════════════

class TestApplyOrderDelta:
    def test_add_then_remove(self, store, customers, clock):
        customer = customers.add_customer({"name": "Ana"}).record
        order = make_order(customer.id, "100")

        added = apply_order_delta(store, order, ORDER_ADDED)
        assert added.total_orders == 1
        assert added.total_spent == Decimal("100")
        assert added.last_order_date == NOW

        clock.advance(3600)
        removed = apply_order_delta(store, order, ORDER_REMOVED)
        assert removed.total_orders == 0
        assert removed.total_spent == Decimal("0")
        assert removed.last_order_date == NOW

    def test_zero_total_still_counts(self, store, customers):
        customer = customers.add_customer({"name": "Ana"}).record
        updated = apply_order_delta(store, make_order(customer.id, "0"), ORDER_ADDED)
        assert updated.total_orders == 1

    def test_guest_order_is_noop(self, store):
        assert apply_order_delta(store, make_order(None), ORDER_ADDED) is None

    def test_unknown_customer_is_noop(self, store):
        assert apply_order_delta(store, make_order("ghost"), ORDER_ADDED) is None
        assert store.customers.count == 0

    def test_order_count_floored_at_zero(self, store, customers, caplog):
        customer = customers.add_customer({"name": "Ana"}).record
        with caplog.at_level(logging.WARNING, logger="gestor.customers"):
            updated = apply_order_delta(store, make_order(customer.id, "20"), ORDER_REMOVED)
        assert updated.total_orders == 0
        assert updated.total_spent == Decimal("-20")
        assert "below zero" in caplog.text

    @pytest.mark.parametrize("sign", [0, 2, -2])
    def test_bad_sign_raises(self, store, sign):
        with pytest.raises(ValueError):
            apply_order_delta(store, make_order(None), sign)

    def test_explicit_clock_wins(self, store, customers):
        customer = customers.add_customer({"name": "Ana"}).record
        later = datetime(2026, 6, 1, tzinfo=timezone.utc)
        updated = apply_order_delta(
            store, make_order(customer.id), ORDER_ADDED, clock=FixedClock(later),
        )
        assert updated.last_order_date == later
