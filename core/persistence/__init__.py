"""
Gestor Persistence - Public API
=================================
Durable mirror of the entity store.

Importing this package does not touch the ORM; DjangoSlotStorage
imports the model lazily so the engines run without Django setup.
"""

from core.persistence.legacy import normalize_record
from core.persistence.mirror import PersistenceMirror
from core.persistence.storage import (
    DEFAULT_STORAGE_KEYS,
    DjangoSlotStorage,
    InMemorySlotStorage,
    SlotStorage,
    storage_keys,
)

__all__ = [
    "PersistenceMirror",
    "SlotStorage",
    "InMemorySlotStorage",
    "DjangoSlotStorage",
    "DEFAULT_STORAGE_KEYS",
    "storage_keys",
    "normalize_record",
]
