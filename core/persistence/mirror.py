"""
Gestor Persistence - Store Mirror
===================================
Keeps durable slots in step with the in-memory store.

Write path: subscribed to the store; every dirty slot is rewritten
in full (last write wins). A failing write is logged and never
reaches the caller that mutated the store.

Load path: every slot is read back once at startup. An absent or
unparsable slot falls back to its default (empty collection,
default fee table, shipping 0). A single invalid record is skipped;
the rest of the slot still loads.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from core.config.rules import MarketplaceFeeTable, default_shipping_cost
from core.persistence.legacy import normalize_record
from core.primitives.money import to_non_negative_decimal
from core.persistence.storage import SlotStorage, storage_keys
from core.store.store import (
    ALL_SLOTS,
    COLLECTION_SLOTS,
    SLOT_DEFAULT_SHIPPING_COST,
    SLOT_MARKETPLACE_FEES,
    EntityStore,
)

logger = logging.getLogger("gestor.persistence")

_MISSING = object()


class PersistenceMirror:
    def __init__(
        self,
        store: EntityStore,
        storage: SlotStorage,
        *,
        keys: Optional[Dict[str, str]] = None,
    ) -> None:
        self._store = store
        self._storage = storage
        self._keys = keys or storage_keys()
        self._attached = False

    def key_for(self, slot: str) -> str:
        return self._keys[slot]

    # ── write path ────────────────────────────────────────────

    def attach(self) -> None:
        if not self._attached:
            self._store.subscribe(self.write_slot)
            self._attached = True

    def detach(self) -> None:
        if self._attached:
            self._store.unsubscribe(self.write_slot)
            self._attached = False

    def write_slot(self, slot: str) -> None:
        key = self.key_for(slot)
        try:
            value = json.dumps(self._store.export_slot(slot), ensure_ascii=False)
            self._storage.write(key, value)
        except Exception as exc:
            logger.error(
                f"Mirror write failed for slot '{slot}' (key {key}): {exc}",
                exc_info=True,
            )

    def write_all(self) -> None:
        for slot in ALL_SLOTS:
            self.write_slot(slot)

    # ── load path ─────────────────────────────────────────────

    def load(self) -> Dict[str, int]:
        """
        Populate the store from storage.

        Returns the number of records loaded per collection slot.
        Notifications raised while loading are not written back
        when the mirror is not yet attached.
        """
        loaded: Dict[str, int] = {}
        with self._store.transaction():
            for slot in COLLECTION_SLOTS:
                records = self._load_collection(slot)
                self._store.collection(slot).replace_all(records)
                loaded[slot] = len(records)
            self._store.set_marketplace_fees(self._load_fees())
            self._store.set_default_shipping_cost(self._load_shipping())
        logger.info(f"Store loaded from storage: {loaded}")
        return loaded

    def _read_json(self, slot: str) -> Any:
        key = self.key_for(slot)
        raw = self._storage.read(key)
        if raw is None:
            return _MISSING
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as exc:
            logger.warning(f"Slot '{key}' is not valid JSON, using default: {exc}")
            return _MISSING

    def _load_collection(self, slot: str) -> List[Any]:
        data = self._read_json(slot)
        if data is _MISSING:
            return []
        if not isinstance(data, list):
            logger.warning(f"Slot '{self.key_for(slot)}' is not a list, using empty collection")
            return []

        record_type = self._store.collection(slot).record_type
        records = []
        seen_ids = set()
        for index, raw in enumerate(data):
            try:
                record = record_type.from_dict(normalize_record(slot, raw))
            except (TypeError, ValueError) as exc:
                logger.warning(f"Skipping invalid {slot} entry #{index}: {exc}")
                continue
            if record.id in seen_ids:
                logger.warning(f"Skipping duplicate {slot} id '{record.id}'")
                continue
            seen_ids.add(record.id)
            records.append(record)
        return records

    def _load_fees(self) -> MarketplaceFeeTable:
        data = self._read_json(SLOT_MARKETPLACE_FEES)
        if data is _MISSING:
            return MarketplaceFeeTable.default()
        try:
            return MarketplaceFeeTable.from_dict(data)
        except (TypeError, ValueError) as exc:
            logger.warning(f"Stored marketplace fees rejected, using defaults: {exc}")
            return MarketplaceFeeTable.default()

    def _load_shipping(self):
        data = self._read_json(SLOT_DEFAULT_SHIPPING_COST)
        fallback = default_shipping_cost()
        if data is _MISSING:
            return fallback
        try:
            return to_non_negative_decimal(data, "default shipping cost")
        except ValueError as exc:
            logger.warning(f"Stored shipping cost rejected, using default: {exc}")
            return fallback
