"""
Gestor Entity Store - In-Memory Store
=======================================
Holds the four collections (products, suppliers, customers,
orders) and two configuration values (marketplace fee table,
default shipping cost).

The store is an explicit object handed to every service; there is
no module-level instance.

Change notification:
- Every mutation marks its slot dirty.
- Outside a transaction, listeners are notified immediately.
- Inside ``transaction()``, notification waits for the outermost
  block to finish; each dirty slot is reported once.
- If the block raises, every collection and value is restored to
  its state at entry and nobody is notified.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Callable, Dict, Iterator, List, Optional

from core.config.rules import MarketplaceFeeTable, default_shipping_cost
from core.primitives.catalog import Product, Supplier
from core.primitives.ids import IdGenerator, UuidIdGenerator
from core.primitives.money import to_non_negative_decimal
from core.primitives.order import Order
from core.primitives.party import Customer
from core.store.collection import EntityCollection
from core.time.clock import Clock, SystemClock

logger = logging.getLogger("gestor.store")


# ══════════════════════════════════════════════════════════════
# SLOT NAMES
# ══════════════════════════════════════════════════════════════

SLOT_PRODUCTS = "products"
SLOT_SUPPLIERS = "suppliers"
SLOT_CUSTOMERS = "customers"
SLOT_ORDERS = "orders"
SLOT_MARKETPLACE_FEES = "marketplace_fees"
SLOT_DEFAULT_SHIPPING_COST = "default_shipping_cost"

COLLECTION_SLOTS = (SLOT_PRODUCTS, SLOT_SUPPLIERS, SLOT_CUSTOMERS, SLOT_ORDERS)
ALL_SLOTS = COLLECTION_SLOTS + (SLOT_MARKETPLACE_FEES, SLOT_DEFAULT_SHIPPING_COST)

ChangeListener = Callable[[str], None]


class EntityStore:
    """In-memory state of the shop."""

    def __init__(
        self,
        *,
        clock: Optional[Clock] = None,
        id_generator: Optional[IdGenerator] = None,
    ) -> None:
        self.clock = clock or SystemClock()
        self._id_generator = id_generator or UuidIdGenerator()
        self._lock = threading.RLock()
        self._depth = 0
        self._dirty: List[str] = []
        self._listeners: List[ChangeListener] = []

        def collection(slot: str, record_type: type) -> EntityCollection:
            return EntityCollection(
                slot, record_type,
                id_generator=self._id_generator,
                clock=self.clock,
                on_change=self._mark_dirty,
            )

        self.products: EntityCollection[Product] = collection(SLOT_PRODUCTS, Product)
        self.suppliers: EntityCollection[Supplier] = collection(SLOT_SUPPLIERS, Supplier)
        self.customers: EntityCollection[Customer] = collection(SLOT_CUSTOMERS, Customer)
        self.orders: EntityCollection[Order] = collection(SLOT_ORDERS, Order)

        self._marketplace_fees = MarketplaceFeeTable.default()
        self._default_shipping_cost = default_shipping_cost()

    # ── configuration values ──────────────────────────────────

    @property
    def marketplace_fees(self) -> MarketplaceFeeTable:
        return self._marketplace_fees

    def set_marketplace_fees(self, fee_table: MarketplaceFeeTable) -> None:
        if not isinstance(fee_table, MarketplaceFeeTable):
            raise TypeError("fee_table must be a MarketplaceFeeTable.")
        with self._lock:
            self._marketplace_fees = fee_table
            self._mark_dirty(SLOT_MARKETPLACE_FEES)

    @property
    def default_shipping_cost(self) -> Decimal:
        return self._default_shipping_cost

    def set_default_shipping_cost(self, value: Any) -> None:
        amount = to_non_negative_decimal(value, "default shipping cost")
        with self._lock:
            self._default_shipping_cost = amount
            self._mark_dirty(SLOT_DEFAULT_SHIPPING_COST)

    def collection(self, slot: str) -> EntityCollection:
        if slot not in COLLECTION_SLOTS:
            raise KeyError(f"Unknown collection slot: {slot}")
        return getattr(self, slot)

    # ── listeners ─────────────────────────────────────────────

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _mark_dirty(self, slot: str) -> None:
        if slot not in self._dirty:
            self._dirty.append(slot)
        if self._depth == 0:
            self._flush()

    def _flush(self) -> None:
        dirty, self._dirty = self._dirty, []
        for slot in dirty:
            for listener in list(self._listeners):
                listener(slot)

    # ── transactions ──────────────────────────────────────────

    @contextmanager
    def transaction(self) -> Iterator[EntityStore]:
        """
        Run a block of mutations as one unit.

        Re-entrant: nested blocks join the outermost one.
        """
        with self._lock:
            if self._depth > 0:
                self._depth += 1
                try:
                    yield self
                finally:
                    self._depth -= 1
                return

            saved = self._snapshot()
            self._depth = 1
            try:
                yield self
            except BaseException:
                self._restore(saved)
                self._dirty = []
                logger.warning("Store transaction rolled back")
                raise
            finally:
                self._depth = 0
            self._flush()

    def _snapshot(self) -> Dict[str, Any]:
        saved: Dict[str, Any] = {
            slot: self.collection(slot).snapshot() for slot in COLLECTION_SLOTS
        }
        saved[SLOT_MARKETPLACE_FEES] = self._marketplace_fees
        saved[SLOT_DEFAULT_SHIPPING_COST] = self._default_shipping_cost
        return saved

    def _restore(self, saved: Dict[str, Any]) -> None:
        for slot in COLLECTION_SLOTS:
            self.collection(slot).restore(saved[slot])
        self._marketplace_fees = saved[SLOT_MARKETPLACE_FEES]
        self._default_shipping_cost = saved[SLOT_DEFAULT_SHIPPING_COST]

    # ── serialization ─────────────────────────────────────────

    def export_slot(self, slot: str) -> Any:
        """JSON-safe content of one slot."""
        if slot in COLLECTION_SLOTS:
            return self.collection(slot).to_payload()
        if slot == SLOT_MARKETPLACE_FEES:
            return self._marketplace_fees.to_dict()
        if slot == SLOT_DEFAULT_SHIPPING_COST:
            return str(self._default_shipping_cost)
        raise KeyError(f"Unknown slot: {slot}")

    def counts(self) -> Dict[str, int]:
        return {slot: self.collection(slot).count for slot in COLLECTION_SLOTS}
