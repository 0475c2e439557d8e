"""
Gestor Persistence - Slot Storage Backends
============================================
A slot storage is a durable string key → string value map, the
same contract as browser local storage.

Implementations:
    InMemorySlotStorage - tests and throwaway sessions
    DjangoSlotStorage   - StorageSlot table through the Django ORM
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Protocol

from core.config.rules import get_shop_setting
from core.store.store import (
    SLOT_CUSTOMERS,
    SLOT_DEFAULT_SHIPPING_COST,
    SLOT_MARKETPLACE_FEES,
    SLOT_ORDERS,
    SLOT_PRODUCTS,
    SLOT_SUPPLIERS,
)


# Key names used by the original dashboard, so existing data loads as-is.
DEFAULT_STORAGE_KEYS: Mapping[str, str] = {
    SLOT_PRODUCTS: "gestorCriativo_products",
    SLOT_SUPPLIERS: "gestorCriativo_suppliers",
    SLOT_CUSTOMERS: "gestorCriativo_customers",
    SLOT_ORDERS: "gestorCriativo_orders",
    SLOT_MARKETPLACE_FEES: "gestorCriativo_fees",
    SLOT_DEFAULT_SHIPPING_COST: "gestorCriativo_shipping",
}


def storage_keys() -> Dict[str, str]:
    keys = dict(DEFAULT_STORAGE_KEYS)
    keys.update(get_shop_setting("STORAGE_KEYS", {}))
    return keys


class SlotStorage(Protocol):
    def read(self, key: str) -> Optional[str]:
        """Return the stored text, or None when the key was never written."""
        ...  # pragma: no cover

    def write(self, key: str, value: str) -> None:
        ...  # pragma: no cover


class InMemorySlotStorage:
    """Dict-backed storage for tests and bootstrap."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})
        self.writes = 0

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("slot values must be str.")
        self._data[key] = value
        self.writes += 1

    def keys(self):
        return list(self._data.keys())


class DjangoSlotStorage:
    """StorageSlot rows via the ORM. Requires a configured Django."""

    def read(self, key: str) -> Optional[str]:
        from core.persistence.repository import load_slot

        return load_slot(key)

    def write(self, key: str, value: str) -> None:
        from core.persistence.repository import save_slot

        save_slot(key, value)
