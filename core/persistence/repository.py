"""
Gestor Persistence - Slot Repository
======================================
Low-level ORM helpers used by DjangoSlotStorage.
"""

from __future__ import annotations

from typing import Optional

from django.db import transaction

from core.persistence.models import StorageSlot


def save_slot(key: str, value: str) -> StorageSlot:
    """Insert or overwrite one slot atomically."""
    with transaction.atomic():
        slot, _ = StorageSlot.objects.update_or_create(
            key=key, defaults={"value": value},
        )
    return slot


def load_slot(key: str) -> Optional[str]:
    return StorageSlot.objects.filter(key=key).values_list("value", flat=True).first()
