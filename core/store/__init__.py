"""
Gestor Entity Store - Public API
==================================
"""

from core.store.collection import EntityCollection
from core.store.store import (
    ALL_SLOTS,
    COLLECTION_SLOTS,
    SLOT_CUSTOMERS,
    SLOT_DEFAULT_SHIPPING_COST,
    SLOT_MARKETPLACE_FEES,
    SLOT_ORDERS,
    SLOT_PRODUCTS,
    SLOT_SUPPLIERS,
    EntityStore,
)

__all__ = [
    "EntityCollection",
    "EntityStore",
    "ALL_SLOTS",
    "COLLECTION_SLOTS",
    "SLOT_PRODUCTS",
    "SLOT_SUPPLIERS",
    "SLOT_CUSTOMERS",
    "SLOT_ORDERS",
    "SLOT_MARKETPLACE_FEES",
    "SLOT_DEFAULT_SHIPPING_COST",
]
